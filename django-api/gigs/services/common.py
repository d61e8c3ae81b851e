from typing import TypeVar

from gigs.domain.errors import InvalidIdError

IdT = TypeVar("IdT")


def parse_id(id_type: type[IdT], raw: str, kind: str) -> IdT:
    """Parse a string into a typed ID, raising InvalidIdError if malformed."""
    try:
        return id_type.from_string(raw)
    except (TypeError, ValueError, AttributeError):
        raise InvalidIdError(kind) from None
