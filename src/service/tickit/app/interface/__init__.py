"""Application layer interfaces (Ports)"""

from src.service.tickit.app.interface.i_event_command_repo import IEventCommandRepo
from src.service.tickit.app.interface.i_event_query_repo import IEventQueryRepo
from src.service.tickit.app.interface.i_image_storage import IImageStorage
from src.service.tickit.app.interface.i_order_command_repo import IOrderCommandRepo
from src.service.tickit.app.interface.i_order_query_repo import IOrderQueryRepo
from src.service.tickit.app.interface.i_password_hasher import IPasswordHasher
from src.service.tickit.app.interface.i_user_command_repo import IUserCommandRepo
from src.service.tickit.app.interface.i_user_query_repo import IUserQueryRepo

__all__ = [
    'IEventCommandRepo',
    'IEventQueryRepo',
    'IImageStorage',
    'IOrderCommandRepo',
    'IOrderQueryRepo',
    'IPasswordHasher',
    'IUserCommandRepo',
    'IUserQueryRepo',
]
