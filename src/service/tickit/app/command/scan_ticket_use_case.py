from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.db_setting import transient_retry
from src.platform.exception.exceptions import TicketAlreadyUsedError, TicketUnknownError
from src.platform.logging.loguru_io import Logger
from src.service.tickit.app.interface.i_order_command_repo import IOrderCommandRepo
from src.service.tickit.app.interface.i_order_query_repo import IOrderQueryRepo
from src.service.tickit.domain.entity.order_entity import OrderTicket


class ScanTicketUseCase:
    def __init__(
        self, *, order_command_repo: IOrderCommandRepo, order_query_repo: IOrderQueryRepo
    ) -> None:
        self.order_command_repo = order_command_repo
        self.order_query_repo = order_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        order_command_repo: IOrderCommandRepo = Depends(Provide[Container.order_command_repo]),
        order_query_repo: IOrderQueryRepo = Depends(Provide[Container.order_query_repo]),
    ) -> Self:
        return cls(order_command_repo=order_command_repo, order_query_repo=order_query_repo)

    @Logger.io
    async def scan_ticket(self, *, qr_code: str) -> OrderTicket:
        """Flip the ticket to scanned. Tickets of soft-deleted events still scan.

        The flip runs exactly once; only the lookup after it is retried.
        """
        flipped = await self.order_command_repo.mark_ticket_scanned(qr_code)

        ticket = await self._find_ticket(qr_code)
        if ticket is None:
            raise TicketUnknownError()
        if not flipped:
            raise TicketAlreadyUsedError()

        Logger.base.info(f'✅ [SCAN] Seat {ticket.seat_id} admitted')
        return ticket

    @transient_retry
    async def _find_ticket(self, qr_code: str) -> Optional[OrderTicket]:
        return await self.order_query_repo.get_ticket_by_qr_code(qr_code)
