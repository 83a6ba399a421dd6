from fastapi.testclient import TestClient
import pytest

from src.platform.constant.route_constant import (
    EVENT_BY_ID,
    EVENT_BY_SHORT_LINK,
    ORDER_CREATE,
    ORDER_SCAN,
)
from test.shared.utils import (
    assert_response_status,
    auth_header,
    create_event,
    create_order,
    order_payload,
    register_user,
)
from test.util_constant import (
    BUYER_EMAIL,
    DEFAULT_TIER_PRICE,
    ORGANIZER_EMAIL,
    ORGANIZER_NAME,
)


@pytest.fixture
def organizer_token(client: TestClient) -> str:
    return register_user(client, email=ORGANIZER_EMAIL, full_name=ORGANIZER_NAME)


@pytest.fixture
def event(client: TestClient, organizer_token: str) -> dict:
    return create_event(client, organizer_token)


@pytest.mark.integration
class TestCreateOrder:
    def test_purchase_issues_one_ticket_per_seat(self, client: TestClient, event: dict):
        order = create_order(client, event['id'], ['GA_std_1', 'GA_std_2'])

        assert order['eventId'] == event['id']
        assert order['customerEmail'] == BUYER_EMAIL
        assert order['status'] == 'SUCCESS'
        assert order['totalAmount'] == DEFAULT_TIER_PRICE * 2
        assert [ticket['seatId'] for ticket in order['tickets']] == ['GA_std_1', 'GA_std_2']
        qr_codes = {ticket['qrCode'] for ticket in order['tickets']}
        assert len(qr_codes) == 2
        assert not any(ticket['scanned'] for ticket in order['tickets'])

        public = client.get(EVENT_BY_SHORT_LINK.format(short_link=event['shortLink'])).json()
        assert public['sold'] == 2
        assert sorted(public['soldSeats']) == ['GA_std_1', 'GA_std_2']

    def test_server_price_wins_over_client_total(self, client: TestClient, event: dict):
        response = client.post(
            ORDER_CREATE, json=order_payload(event['id'], ['GA_std_1'], totalAmount=0.01)
        )

        assert_response_status(response, 200)
        assert response.json()['totalAmount'] == DEFAULT_TIER_PRICE

    def test_no_authentication_needed(self, client: TestClient, event: dict):
        response = client.post(
            ORDER_CREATE,
            json=order_payload(event['id'], ['GA_std_1']),
            headers=auth_header('garbage'),
        )

        assert_response_status(response, 200)

    def test_sold_seat_conflicts(self, client: TestClient, event: dict):
        create_order(client, event['id'], ['GA_std_1'])

        response = client.post(
            ORDER_CREATE, json=order_payload(event['id'], ['GA_std_1', 'GA_std_2'])
        )

        assert response.status_code == 409
        assert response.json()['seatIds'] == ['GA_std_1']
        public = client.get(EVENT_BY_SHORT_LINK.format(short_link=event['shortLink'])).json()
        assert public['sold'] == 1

    @pytest.mark.parametrize('alias', ['GA_std_01', 'GA_std_001', 'GA_std_١'])
    def test_sold_seat_cannot_be_bought_under_another_spelling(
        self, client: TestClient, event: dict, alias: str
    ):
        create_order(client, event['id'], ['GA_std_1'])

        response = client.post(ORDER_CREATE, json=order_payload(event['id'], [alias]))

        assert response.status_code == 400
        public = client.get(EVENT_BY_SHORT_LINK.format(short_link=event['shortLink'])).json()
        assert public['sold'] == 1
        assert public['soldSeats'] == ['GA_std_1']

    @pytest.mark.parametrize(
        'seat_ids',
        [
            ['GA_std_31'],
            ['GA_std_0'],
            ['GA_vip_1'],
            ['0_0'],
            ['nonsense'],
            ['GA_std_1', 'GA_std_1'],
        ],
    )
    def test_invalid_seats_are_rejected(self, client: TestClient, event: dict, seat_ids):
        response = client.post(ORDER_CREATE, json=order_payload(event['id'], seat_ids))

        assert response.status_code == 400

    def test_empty_seat_list_fails_validation(self, client: TestClient, event: dict):
        response = client.post(ORDER_CREATE, json=order_payload(event['id'], []))

        assert response.status_code == 400
        assert response.json()['message'] == 'Validation failed'

    def test_max_tickets_per_order(self, client: TestClient, organizer_token: str):
        limited = create_event(client, organizer_token, maxTicketsPerOrder=1)

        response = client.post(
            ORDER_CREATE, json=order_payload(limited['id'], ['GA_std_1', 'GA_std_2'])
        )

        assert response.status_code == 400

    def test_unknown_event(self, client: TestClient):
        response = client.post(ORDER_CREATE, json=order_payload('missing', ['GA_std_1']))

        assert response.status_code == 404

    def test_deleted_event_is_not_for_sale(
        self, client: TestClient, organizer_token: str, event: dict
    ):
        client.delete(
            EVENT_BY_ID.format(event_id=event['id']), headers=auth_header(organizer_token)
        )

        response = client.post(ORDER_CREATE, json=order_payload(event['id'], ['GA_std_1']))

        assert response.status_code == 404

    def test_reserved_seating_sells_layout_seats_only(
        self, client: TestClient, organizer_token: str
    ):
        reserved = create_event(
            client,
            organizer_token,
            isReservedSeating=True,
            tiers=[{'tierId': 'vip', 'name': 'VIP', 'price': 25, 'quantity': 2}],
            seats=[{'row': 0, 'col': 0, 'tierId': 'vip'}, {'row': 0, 'col': 1, 'tierId': 'vip'}],
        )

        sold = client.post(
            ORDER_CREATE, json=order_payload(reserved['id'], ['0_1'], totalAmount=25)
        )
        off_layout = client.post(ORDER_CREATE, json=order_payload(reserved['id'], ['5_5']))

        assert_response_status(sold, 200)
        assert sold.json()['totalAmount'] == 25
        assert off_layout.status_code == 400


@pytest.mark.integration
class TestScanTicket:
    def test_first_scan_admits_second_is_rejected(
        self, client: TestClient, organizer_token: str, event: dict
    ):
        order = create_order(client, event['id'], ['GA_std_1', 'GA_std_2'])
        ticket = order['tickets'][1]
        url = ORDER_SCAN.format(qr_code=ticket['qrCode'])

        first = client.post(url, headers=auth_header(organizer_token))
        second = client.post(url, headers=auth_header(organizer_token))

        assert_response_status(first, 200)
        assert first.json()['success'] is True
        assert 'GA_std_2' in first.json()['message']
        assert second.status_code == 400
        assert second.json()['success'] is False
        assert 'already used' in second.json()['message']

    def test_unknown_code(self, client: TestClient, organizer_token: str):
        response = client.post(
            ORDER_SCAN.format(qr_code='not-a-ticket'), headers=auth_header(organizer_token)
        )

        assert response.status_code == 400
        assert response.json() == {'success': False, 'message': 'Ticket not found'}

    def test_scan_requires_authentication(self, client: TestClient, event: dict):
        order = create_order(client, event['id'], ['GA_std_1'])

        response = client.post(ORDER_SCAN.format(qr_code=order['tickets'][0]['qrCode']))

        assert response.status_code == 401

    def test_tickets_stay_valid_after_event_is_deleted(
        self, client: TestClient, organizer_token: str, event: dict
    ):
        order = create_order(client, event['id'], ['GA_std_1'])
        client.delete(
            EVENT_BY_ID.format(event_id=event['id']), headers=auth_header(organizer_token)
        )

        response = client.post(
            ORDER_SCAN.format(qr_code=order['tickets'][0]['qrCode']),
            headers=auth_header(organizer_token),
        )

        assert_response_status(response, 200)
        assert response.json()['success'] is True
