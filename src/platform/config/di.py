"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi-sqlalchemy.html
"""

from dependency_injector import containers, providers

from src.platform.config.core_setting import settings
from src.platform.database.db_setting import Database
from src.service.tickit.driven_adapter.repo.event_command_repo_impl import EventCommandRepoImpl
from src.service.tickit.driven_adapter.repo.event_query_repo_impl import EventQueryRepoImpl
from src.service.tickit.driven_adapter.repo.order_command_repo_impl import OrderCommandRepoImpl
from src.service.tickit.driven_adapter.repo.order_query_repo_impl import OrderQueryRepoImpl
from src.service.tickit.driven_adapter.repo.user_command_repo_impl import UserCommandRepoImpl
from src.service.tickit.driven_adapter.repo.user_query_repo_impl import UserQueryRepoImpl
from src.service.tickit.driven_adapter.security.bcrypt_password_hasher import (
    BcryptPasswordHasher,
)
from src.service.tickit.driven_adapter.storage.local_image_storage import LocalImageStorage
from src.service.tickit.driving_adapter.http_controller.auth.jwt_auth import JwtAuth


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Object(settings)

    # Database (event-loop-aware engine behind a session factory)
    database = providers.Singleton(Database)

    # Repositories (stateless - use session_factory per call)
    user_command_repo = providers.Singleton(
        UserCommandRepoImpl, session_factory=database.provided.session
    )
    user_query_repo = providers.Singleton(
        UserQueryRepoImpl, session_factory=database.provided.session
    )
    event_command_repo = providers.Singleton(
        EventCommandRepoImpl, session_factory=database.provided.session
    )
    event_query_repo = providers.Singleton(
        EventQueryRepoImpl, session_factory=database.provided.session
    )
    order_command_repo = providers.Singleton(
        OrderCommandRepoImpl, session_factory=database.provided.session
    )
    order_query_repo = providers.Singleton(
        OrderQueryRepoImpl, session_factory=database.provided.session
    )

    # Security
    password_hasher = providers.Singleton(BcryptPasswordHasher)
    jwt_auth = providers.Singleton(JwtAuth)

    # Storage
    image_storage = providers.Singleton(
        LocalImageStorage,
        upload_dir=config_service.provided.UPLOAD_DIR,
        max_bytes=config_service.provided.MAX_UPLOAD_BYTES,
    )


container = Container()