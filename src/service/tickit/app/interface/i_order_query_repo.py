from abc import ABC, abstractmethod
from decimal import Decimal
from typing import List, Optional

from src.service.tickit.domain.entity.order_entity import Order, OrderTicket
from src.service.tickit.domain.enum.order_status import OrderStatus


class IOrderQueryRepo(ABC):
    @abstractmethod
    async def get_ticket_by_qr_code(self, qr_code: str) -> Optional[OrderTicket]:
        pass

    @abstractmethod
    async def sum_total_amount(self, *, event_id: str, status: OrderStatus) -> Decimal:
        pass

    @abstractmethod
    async def list_recent(self, *, event_id: str, status: OrderStatus, limit: int) -> List[Order]:
        pass
