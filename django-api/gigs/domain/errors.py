"""Domain error codes for the gigs module."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    INVALID_ID = "INVALID_ID"
    GIG_NOT_FOUND = "GIG_NOT_FOUND"
    VENUE_NOT_FOUND = "VENUE_NOT_FOUND"
    BAND_NOT_FOUND = "BAND_NOT_FOUND"
    GIG_NOT_OPEN_FOR_SALES = "GIG_NOT_OPEN_FOR_SALES"
    GIG_NOT_CONVERTIBLE = "GIG_NOT_CONVERTIBLE"
    PRICE_ADJUSTMENT_NOT_ALLOWED = "PRICE_ADJUSTMENT_NOT_ALLOWED"


@dataclass(frozen=True)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class InvalidIdError(DomainError):
    """Raised when a gig, band or venue ID is not a valid UUID."""

    def __init__(self, kind: str = "gig") -> None:
        super().__init__(
            code=ErrorCode.INVALID_ID,
            message=f"Invalid {kind} ID format",
        )


class GigNotFoundError(DomainError):
    """Raised when a gig is not found."""

    def __init__(self, gig_id: str) -> None:
        super().__init__(
            code=ErrorCode.GIG_NOT_FOUND,
            message="Gig not found",
        )
        object.__setattr__(self, "gig_id", gig_id)


class VenueNotFoundError(DomainError):
    """Raised when the venue a gig is booked into no longer exists."""

    def __init__(self, venue_id: str) -> None:
        super().__init__(
            code=ErrorCode.VENUE_NOT_FOUND,
            message="Venue not found",
        )
        object.__setattr__(self, "venue_id", venue_id)


class BandNotFoundError(DomainError):
    """Raised when a band is not found."""

    def __init__(self, band_id: str) -> None:
        super().__init__(
            code=ErrorCode.BAND_NOT_FOUND,
            message="Band not found",
        )
        object.__setattr__(self, "band_id", band_id)


class GigNotOpenForSalesError(DomainError):
    """Raised when tickets are simulated for a gig that is over or cancelled."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.GIG_NOT_OPEN_FOR_SALES,
            message="Gig is not open for ticket sales",
        )


class GigNotConvertibleError(DomainError):
    """Raised when fans are converted for a gig that was cancelled."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.GIG_NOT_CONVERTIBLE,
            message="Cancelled gigs cannot convert fans",
        )


class PriceAdjustmentNotAllowedError(DomainError):
    """Raised when a ticket price change breaks the adjustment rules."""

    def __init__(self, reason: str) -> None:
        super().__init__(
            code=ErrorCode.PRICE_ADJUSTMENT_NOT_ALLOWED,
            message=reason,
        )
