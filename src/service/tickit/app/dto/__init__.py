"""Application layer DTOs"""

from src.service.tickit.app.dto.event_statistics import EventStatistics, RecentOrder

__all__ = [
    'EventStatistics',
    'RecentOrder',
]
