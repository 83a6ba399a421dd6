"""
Database entry points used by models, repositories and the app lifespan.
"""

from src.platform.database.orm_db_setting import (
    Base,
    Database,
    create_db_and_tables,
    dispose_engine,
    get_engine,
)
from src.platform.database.transient_retry import transient_retry

__all__ = [
    'Base',
    'Database',
    'create_db_and_tables',
    'dispose_engine',
    'get_engine',
    'transient_retry',
]
