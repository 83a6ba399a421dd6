"""
Wire Modules Configuration

Defines the modules that need dependency injection wiring.
Shared between production and test environments.
"""

from types import ModuleType

from src.service.tickit.app.command import (
    create_event_use_case,
    create_order_use_case,
    delete_event_use_case,
    login_user_use_case,
    register_user_use_case,
    scan_ticket_use_case,
    update_event_use_case,
    upload_image_use_case,
)
from src.service.tickit.app.query import (
    get_current_user_use_case,
    get_event_statistics_use_case,
    get_public_event_use_case,
    list_my_events_use_case,
)
from src.service.tickit.driving_adapter.http_controller import auth_controller


WIRE_MODULES: list[ModuleType] = [
    register_user_use_case,
    login_user_use_case,
    create_event_use_case,
    update_event_use_case,
    delete_event_use_case,
    create_order_use_case,
    scan_ticket_use_case,
    upload_image_use_case,
    get_current_user_use_case,
    list_my_events_use_case,
    get_public_event_use_case,
    get_event_statistics_use_case,
    auth_controller,
]
