from enum import StrEnum


class OrderStatus(StrEnum):
    SUCCESS = 'SUCCESS'
    PENDING = 'PENDING'
    CANCELLED = 'CANCELLED'
