"""
Database Models

Import all models here to ensure they are registered with SQLAlchemy
"""

from src.service.tickit.driven_adapter.model.event_model import EventModel
from src.service.tickit.driven_adapter.model.order_model import OrderModel, OrderTicketModel
from src.service.tickit.driven_adapter.model.seat_claim_model import SeatClaimModel
from src.service.tickit.driven_adapter.model.user_model import UserModel

__all__ = [
    'EventModel',
    'OrderModel',
    'OrderTicketModel',
    'SeatClaimModel',
    'UserModel',
]
