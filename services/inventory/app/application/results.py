"""Outcomes returned by the application layer.

Expected business outcomes (duplicate name, missing item, bad input) are
values, not exceptions, so the API layer can map each one to a response
with a plain isinstance check. Only infrastructure failures raise.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Union

from app.domain.models import InventoryItem


@dataclass(frozen=True)
class Created:
    item: InventoryItem


@dataclass(frozen=True)
class Updated:
    item: InventoryItem


@dataclass(frozen=True)
class Duplicate:
    message: str


@dataclass(frozen=True)
class NotFound:
    pass


@dataclass(frozen=True)
class Uploaded:
    url: str


@dataclass(frozen=True)
class ValidationFailed:
    fields: Dict[str, List[str]] = field(default_factory=dict)

    @classmethod
    def single(cls, field_name: str, message: str) -> "ValidationFailed":
        return cls({field_name: [message]})

    @classmethod
    def from_errors(cls, errors: Iterable[Dict[str, Any]]) -> "ValidationFailed":
        """Group pydantic error dicts by the last element of their location."""
        fields: Dict[str, List[str]] = {}
        for error in errors:
            loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
            key = loc[-1] if loc else "request"
            fields.setdefault(key, []).append(error.get("msg", "Invalid value"))
        return cls(fields)

    @property
    def message(self) -> str:
        return "; ".join(msg for messages in self.fields.values() for msg in messages)


CreateResult = Union[Created, Duplicate]
UpdateResult = Union[Updated, Duplicate, NotFound]
UploadResult = Union[Uploaded, ValidationFailed]
