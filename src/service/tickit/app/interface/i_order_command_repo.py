from abc import ABC, abstractmethod

from src.service.tickit.domain.entity.order_entity import Order


class IOrderCommandRepo(ABC):
    @abstractmethod
    async def create_with_seat_claims(self, order: Order, *, layout_version: int) -> Order:
        """Claim every seat, insert the order with its tickets and bump event.sold atomically.

        layout_version is the event layout the seats were priced against. Raises
        SeatUnavailableError if any seat is already claimed, the layout has changed since,
        or capacity would be exceeded, and NotFoundError if the event was deleted.
        Nothing is written in either case.
        """
        pass

    @abstractmethod
    async def mark_ticket_scanned(self, qr_code: str) -> bool:
        """Flip scanned false -> true. Returns False if no unscanned ticket has this code."""
        pass
