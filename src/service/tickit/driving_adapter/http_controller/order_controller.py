from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from src.platform.exception.exceptions import TicketScanError
from src.platform.logging.loguru_io import Logger
from src.service.tickit.app.command.create_order_use_case import CreateOrderUseCase
from src.service.tickit.app.command.scan_ticket_use_case import ScanTicketUseCase
from src.service.tickit.driving_adapter.http_controller.auth.jwt_auth import Principal
from src.service.tickit.driving_adapter.http_controller.auth.role_auth import require_principal
from src.service.tickit.driving_adapter.http_controller.schema.order_schema import (
    CreateOrderRequest,
    OrderResponse,
    ScanResponse,
)


router = APIRouter()


@router.post('/create', response_model=OrderResponse)
@Logger.io
async def create_order(
    request: CreateOrderRequest,
    use_case: CreateOrderUseCase = Depends(CreateOrderUseCase.depends),
) -> OrderResponse:
    order = await use_case.create_order(
        event_id=request.event_id,
        customer_name=request.customer_name,
        customer_email=request.customer_email,
        customer_phone=request.customer_phone,
        seat_ids=request.seat_ids,
        total_amount=request.total_amount,
    )
    return OrderResponse.from_entity(order)


@router.post(
    '/scan/{qr_code}',
    response_model=ScanResponse,
    responses={status.HTTP_400_BAD_REQUEST: {'model': ScanResponse}},
)
@Logger.io
async def scan_ticket(
    qr_code: str,
    principal: Principal = Depends(require_principal),
    use_case: ScanTicketUseCase = Depends(ScanTicketUseCase.depends),
) -> ScanResponse | JSONResponse:
    try:
        ticket = await use_case.scan_ticket(qr_code=qr_code)
    except TicketScanError as e:
        Logger.base.warning(f'🚫 [SCAN] {principal.email} scanned {qr_code[:6]}…: {e.message}')
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=ScanResponse(success=False, message=e.message).model_dump(),
        )
    return ScanResponse(success=True, message=f'Ticket valid. Seat: {ticket.seat_id}')
