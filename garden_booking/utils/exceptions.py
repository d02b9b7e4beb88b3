"""커스텀 HTTP 예외 클래스 모듈.

Custom HTTP exception classes module.
Provides pre-configured HTTPException subclasses for common error patterns,
plus the booking domain errors raised by the store. Because every class is
an HTTPException, raising one in the store or a service is enough for the
API layer to answer with the right status code.

Usage:
    from garden_booking.utils.exceptions import NotFoundError, InvalidWeekError
    raise NotFoundError("Booking not found")
    raise InvalidWeekError(50)
"""

from uuid import UUID

from fastapi import HTTPException, status


class NotFoundError(HTTPException):
    """404 Not Found 예외 (요청한 리소스를 찾을 수 없을 때 사용).

    404 Not Found exception.
    Raised when a requested resource (user, booking, period) does not exist.

    Args:
        detail: 오류 메시지 (Error message, default: "Resource not found")
    """

    def __init__(self, detail: str = "Resource not found") -> None:
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class DuplicateError(HTTPException):
    """409 Conflict 예외 (중복 리소스 생성 시도 시 사용).

    409 Conflict exception.
    Raised when attempting to create a resource that violates a uniqueness constraint
    (e.g. duplicate username).

    Args:
        detail: 오류 메시지 (Error message, default: "Resource already exists")
    """

    def __init__(self, detail: str = "Resource already exists") -> None:
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class ForbiddenError(HTTPException):
    """403 Forbidden 예외 (권한 부족 시 사용).

    403 Forbidden exception.
    Raised when a member tries to act on another member's bookings or
    reach an admin-only endpoint.

    Args:
        detail: 오류 메시지 (Error message, default: "Insufficient permissions")
    """

    def __init__(self, detail: str = "Insufficient permissions") -> None:
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class UnauthorizedError(HTTPException):
    """401 Unauthorized 예외 (인증 실패 시 사용).

    401 Unauthorized exception.
    Raised when authentication is missing, invalid, or expired
    (e.g. missing JWT token, expired token, invalid credentials).

    Args:
        detail: 오류 메시지 (Error message, default: "Authentication required")
    """

    def __init__(self, detail: str = "Authentication required") -> None:
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


class BadRequestError(HTTPException):
    """400 Bad Request 예외 (잘못된 요청 데이터 시 사용).

    400 Bad Request exception.
    Raised when the request data is invalid beyond what Pydantic validation catches
    (e.g. business rule validation failures).

    Args:
        detail: 오류 메시지 (Error message, default: "Bad request")
    """

    def __init__(self, detail: str = "Bad request") -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


# === 예약 도메인 예외 (Booking domain errors) ===


class InvalidWeekError(BadRequestError):
    """주 번호가 예약 가능 범위(14-44)를 벗어났을 때 발생.

    Raised when a week number falls outside the bookable range.

    Attributes:
        week_number: 거부된 주 번호 (The rejected week number)
    """

    def __init__(self, week_number: int) -> None:
        self.week_number: int = week_number
        super().__init__(f"Invalid week number: {week_number}. Must be between 14-44")


class DuplicateBookingError(DuplicateError):
    """같은 사용자가 같은 주/연도를 이미 예약했을 때 발생.

    Raised when a user already holds a booking for the same week and year.

    Attributes:
        user_id: 사용자 ID (User UUID)
        week_number: 주 번호 (Week number)
        year: 연도 (Year)
    """

    def __init__(self, user_id: UUID, week_number: int, year: int) -> None:
        self.user_id: UUID = user_id
        self.week_number: int = week_number
        self.year: int = year
        super().__init__(f"User already has a booking for week {week_number} in {year}")
