from typing import List

from fastapi import APIRouter, Depends, status

from src.platform.logging.loguru_io import Logger
from src.service.tickit.app.command.create_event_use_case import CreateEventUseCase
from src.service.tickit.app.command.delete_event_use_case import DeleteEventUseCase
from src.service.tickit.app.command.update_event_use_case import UpdateEventUseCase
from src.service.tickit.app.query.get_event_statistics_use_case import GetEventStatisticsUseCase
from src.service.tickit.app.query.get_public_event_use_case import GetPublicEventUseCase
from src.service.tickit.app.query.list_my_events_use_case import ListMyEventsUseCase
from src.service.tickit.driving_adapter.http_controller.auth.jwt_auth import Principal
from src.service.tickit.driving_adapter.http_controller.auth.role_auth import require_principal
from src.service.tickit.driving_adapter.http_controller.schema.event_schema import (
    CreateEventRequest,
    EventResponse,
    EventStatisticsResponse,
    MessageResponse,
    UpdateEventRequest,
)


router = APIRouter()


@router.post('', response_model=EventResponse, status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_event(
    request: CreateEventRequest,
    principal: Principal = Depends(require_principal),
    use_case: CreateEventUseCase = Depends(CreateEventUseCase.depends),
) -> EventResponse:
    event = await use_case.create_event(
        organizer_email=principal.email, **request.to_domain_kwargs()
    )
    return EventResponse.from_entity(event)


@router.get('/me', response_model=List[EventResponse])
@Logger.io
async def list_my_events(
    principal: Principal = Depends(require_principal),
    use_case: ListMyEventsUseCase = Depends(ListMyEventsUseCase.depends),
) -> List[EventResponse]:
    events = await use_case.list_my_events(principal.email)
    return [EventResponse.from_entity(event) for event in events]


@router.get('/s/{short_link}', response_model=EventResponse)
@Logger.io
async def get_public_event(
    short_link: str,
    use_case: GetPublicEventUseCase = Depends(GetPublicEventUseCase.depends),
) -> EventResponse:
    event = await use_case.get_by_short_link(short_link)
    return EventResponse.from_entity(event)


@router.put('/{event_id}', response_model=EventResponse)
@Logger.io
async def update_event(
    event_id: str,
    request: UpdateEventRequest,
    principal: Principal = Depends(require_principal),
    use_case: UpdateEventUseCase = Depends(UpdateEventUseCase.depends),
) -> EventResponse:
    event = await use_case.update_event(
        event_id=event_id, organizer_email=principal.email, patch=request.to_patch()
    )
    return EventResponse.from_entity(event)


@router.delete('/{event_id}', response_model=MessageResponse)
@Logger.io
async def delete_event(
    event_id: str,
    principal: Principal = Depends(require_principal),
    use_case: DeleteEventUseCase = Depends(DeleteEventUseCase.depends),
) -> MessageResponse:
    await use_case.delete_event(event_id=event_id, organizer_email=principal.email)
    return MessageResponse(message='Event deleted successfully')


@router.get('/{event_id}/statistics', response_model=EventStatisticsResponse)
@Logger.io
async def get_event_statistics(
    event_id: str,
    principal: Principal = Depends(require_principal),
    use_case: GetEventStatisticsUseCase = Depends(GetEventStatisticsUseCase.depends),
) -> EventStatisticsResponse:
    statistics = await use_case.get_statistics(event_id=event_id, organizer_email=principal.email)
    return EventStatisticsResponse.from_dto(statistics)
