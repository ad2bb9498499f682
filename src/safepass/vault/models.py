# SafePass - Vault Data Models
#
# Record: one stored credential (name, username, encrypted password).
# Identity: the (name, username) pair used for lookup and deletion.

from dataclasses import dataclass, field
from typing import Iterable, List, NamedTuple, Optional

from .exceptions import ValidationError


class Identity(NamedTuple):
    name: str
    username: str

    @property
    def label(self) -> str:
        return f"{self.name} {self.username}"


@dataclass(frozen=True)
class Record:
    """A row of the services table. ``password`` always holds a token."""

    name: str
    username: str
    password: str = field(repr=False)
    id: Optional[int] = None

    @property
    def identity(self) -> Identity:
        return Identity(self.name, self.username)

    @property
    def label(self) -> str:
        return self.identity.label


def validate_field(field_name: str, value: str) -> str:
    """Reject empty values and values containing whitespace.

    Names and usernames are shown side by side in selection lists, so
    whitespace inside either would make a label ambiguous. Values are
    rejected, never cleaned up.

    Raises:
        ValidationError: value is empty or contains whitespace
    """
    if not value:
        raise ValidationError(field_name, f"{field_name} cannot be empty")
    if any(c.isspace() for c in value):
        raise ValidationError(field_name, f"{field_name} cannot contain whitespace: {value!r}")
    return value


def sort_records(records: Iterable[Record]) -> List[Record]:
    """Order records by (name, username) for stable presentation."""
    return sorted(records, key=lambda r: (r.name, r.username))
