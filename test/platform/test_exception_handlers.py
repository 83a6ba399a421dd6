from fastapi import FastAPI
from fastapi.testclient import TestClient
from pydantic import BaseModel
import pytest
from sqlalchemy.exc import OperationalError

from src.platform.exception.exception_handlers import register_exception_handlers
from src.platform.exception.exceptions import (
    ForbiddenError,
    NotFoundError,
    SeatUnavailableError,
)


class Payload(BaseModel):
    name: str


@pytest.fixture
def handler_client() -> TestClient:
    app = FastAPI()
    register_exception_handlers(app)

    @app.get('/not-found')
    async def not_found() -> None:
        raise NotFoundError('Event not found')

    @app.get('/forbidden')
    async def forbidden() -> None:
        raise ForbiddenError('Not the owner of this event')

    @app.get('/conflict')
    async def conflict() -> None:
        raise SeatUnavailableError(['GA_std_2', 'GA_std_1', 'GA_std_2'])

    @app.get('/db-down')
    async def db_down() -> None:
        raise OperationalError('SELECT 1', {}, Exception('connection refused'))

    @app.get('/boom')
    async def boom() -> None:
        raise RuntimeError('secret internals')

    @app.post('/validate')
    async def validate(payload: Payload) -> Payload:
        return payload

    return TestClient(app, raise_server_exceptions=False)


@pytest.mark.unit
class TestExceptionHandlers:
    @pytest.mark.parametrize(
        ('path', 'status_code', 'message'),
        [
            ('/not-found', 404, 'Event not found'),
            ('/forbidden', 403, 'Not the owner of this event'),
        ],
    )
    def test_custom_errors_map_to_their_status(
        self, handler_client: TestClient, path: str, status_code: int, message: str
    ):
        response = handler_client.get(path)

        assert response.status_code == status_code
        assert response.json() == {'message': message}

    def test_seat_conflict_lists_seats(self, handler_client: TestClient):
        response = handler_client.get('/conflict')

        assert response.status_code == 409
        assert response.json()['seatIds'] == ['GA_std_1', 'GA_std_2']

    def test_validation_error_is_400(self, handler_client: TestClient):
        response = handler_client.post('/validate', json={})

        assert response.status_code == 400
        body = response.json()
        assert body['message'] == 'Validation failed'
        assert body['errors'][0]['loc'] == ['body', 'name']

    def test_datastore_outage_is_503(self, handler_client: TestClient):
        response = handler_client.get('/db-down')

        assert response.status_code == 503

    def test_unexpected_error_hides_details(self, handler_client: TestClient):
        response = handler_client.get('/boom')

        assert response.status_code == 500
        assert response.json() == {'message': 'Internal server error'}
