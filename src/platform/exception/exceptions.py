from typing import Iterable


class CustomBaseError(Exception):
    """Base class for all custom exceptions - controls logging behavior in @Logger.io"""

    def __init__(self, message: str, status_code: int) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class DomainError(CustomBaseError):
    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message, status_code)


class ForbiddenError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 403)


class NotFoundError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 404)


class AuthenticationError(CustomBaseError):
    def __init__(self, message: str = 'Not authenticated') -> None:
        super().__init__(message, 401)


class InvalidCredentialsError(CustomBaseError):
    def __init__(self, message: str = 'Invalid email or password') -> None:
        super().__init__(message, 401)


class TokenInvalidError(AuthenticationError):
    def __init__(self, message: str = 'Invalid token') -> None:
        super().__init__(message)


class EmailConflictError(CustomBaseError):
    def __init__(self, message: str = 'Email is already in use') -> None:
        super().__init__(message, 400)


class SeatUnavailableError(CustomBaseError):
    def __init__(self, seat_ids: Iterable[str]) -> None:
        self.seat_ids = sorted(set(seat_ids))
        super().__init__(f'Seats already sold: {", ".join(self.seat_ids)}', 409)


class TicketScanError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 400)


class TicketUnknownError(TicketScanError):
    def __init__(self, message: str = 'Ticket not found') -> None:
        super().__init__(message)


class TicketAlreadyUsedError(TicketScanError):
    def __init__(self, message: str = 'Ticket already used') -> None:
        super().__init__(message)


class TransientError(CustomBaseError):
    def __init__(self, message: str = 'Service temporarily unavailable, please retry') -> None:
        super().__init__(message, 503)
