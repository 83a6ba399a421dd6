from typing import Any, Dict, List, Optional

from fastapi.testclient import TestClient

from src.platform.constant.route_constant import (
    AUTH_LOGIN,
    AUTH_REGISTER,
    EVENT_BASE,
    ORDER_CREATE,
)
from test.util_constant import (
    BUYER_EMAIL,
    BUYER_NAME,
    BUYER_PHONE,
    DEFAULT_PASSWORD,
    DEFAULT_TIER_ID,
    DEFAULT_TIER_PRICE,
    DEFAULT_TIER_QUANTITY,
)


def assert_response_status(response, expected_status: int, message: str | None = None):
    response_text = getattr(response, 'text', getattr(response, 'content', 'N/A'))
    assert response.status_code == expected_status, (
        message or f'Expected {expected_status}, got {response.status_code}: {response_text}'
    )


def auth_header(token: str) -> Dict[str, str]:
    return {'Authorization': f'Bearer {token}'}


def register_user(
    client: TestClient,
    *,
    email: str,
    full_name: str,
    password: str = DEFAULT_PASSWORD,
    phone: Optional[str] = None,
) -> str:
    response = client.post(
        AUTH_REGISTER,
        json={'fullName': full_name, 'email': email, 'phone': phone, 'password': password},
    )
    assert_response_status(response, 201, f'Failed to register {email}')
    return response.json()['token']


def login_user(client: TestClient, *, email: str, password: str = DEFAULT_PASSWORD) -> str:
    response = client.post(AUTH_LOGIN, json={'email': email, 'password': password})
    assert_response_status(response, 200, f'Login failed for {email}')
    return response.json()['token']


def event_payload(**overrides: Any) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        'title': 'Jazz Night',
        'description': 'Live jazz by the sea',
        'category': 'music',
        'ageRestriction': '18+',
        'eventDate': '2026-06-01',
        'startTime': '19:00',
        'endTime': '23:00',
        'isPhysical': True,
        'venueName': 'Seaside Hall',
        'address': 'Baku Boulevard 1',
        'isPrivate': False,
        'isReservedSeating': False,
        'tiers': [
            {
                'tierId': DEFAULT_TIER_ID,
                'name': 'Std',
                'price': DEFAULT_TIER_PRICE,
                'quantity': DEFAULT_TIER_QUANTITY,
            }
        ],
    }
    payload.update(overrides)
    return payload


def create_event(client: TestClient, token: str, **overrides: Any) -> Dict[str, Any]:
    response = client.post(EVENT_BASE, json=event_payload(**overrides), headers=auth_header(token))
    assert_response_status(response, 201, 'Failed to create event')
    return response.json()


def order_payload(event_id: str, seat_ids: List[str], **overrides: Any) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        'eventId': event_id,
        'customerName': BUYER_NAME,
        'customerEmail': BUYER_EMAIL,
        'customerPhone': BUYER_PHONE,
        'seatIds': seat_ids,
        'totalAmount': DEFAULT_TIER_PRICE * len(seat_ids),
    }
    payload.update(overrides)
    return payload


def create_order(client: TestClient, event_id: str, seat_ids: List[str]) -> Dict[str, Any]:
    response = client.post(ORDER_CREATE, json=order_payload(event_id, seat_ids))
    assert_response_status(response, 200, 'Failed to create order')
    return response.json()
