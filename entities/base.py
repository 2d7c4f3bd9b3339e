"""Base record types and the byte codec shared by every bucket.

Records are pydantic models. Encoding is UTF-8 JSON with sorted keys; decoding
is strict: every declared field must be present with its declared type, no
extra fields are allowed, and nested records are rebuilt into their models.
"""

from __future__ import annotations

import json
from typing import Any, ClassVar, Dict, List, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, ValidationInfo, model_validator

from store.buckets import Bucket
from store.errors import DeserializationError
from utils.time_utils import timestamp

T = TypeVar("T", bound="Record")

# Validation context flag set by the decoder; constructors keep their defaults.
_COMPLETE = "complete"


class Record(BaseModel):
    """A JSON-encodable model, possibly nested inside another record."""

    model_config = ConfigDict(extra="forbid", strict=True)

    @model_validator(mode="before")
    @classmethod
    def _require_every_field(cls, data: Any, info: ValidationInfo) -> Any:
        if info.context and info.context.get(_COMPLETE) and isinstance(data, dict):
            missing = sorted(set(cls.model_fields) - set(data))
            if missing:
                raise ValueError(f"missing fields {missing}")
        return data

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json")


class Location(Record):
    name: str = ""
    latitude: str = ""
    longitude: str = ""
    nation_state_id: int = 0
    regional_state_id: int = 0


class BucketItem(Record):
    """A record stored in its own bucket under an integer identity.

    `id` is 0 until the identity layer assigns one on first save.
    """

    bucket: ClassVar[Bucket]
    # Field holding the record's human-readable name, None if it has none.
    name_field: ClassVar[Optional[str]] = "name"
    # Field holding the parent entity's name (city -> state, ...), None if none.
    parent_field: ClassVar[Optional[str]] = None

    id: int = Field(default=0, ge=0)

    def get_id(self) -> int:
        return self.id

    def set_id(self, record_id: int) -> None:
        """Only the identity layer should call this."""
        self.id = record_id

    def touch(self) -> Dict[str, Any]:
        """Hook run before every save.

        Returns the previous values of the fields it changed, for `restore`.
        """
        return {}

    def restore(self, previous: Dict[str, Any]) -> None:
        for name, value in previous.items():
            setattr(self, name, value)

    def display_name(self) -> Optional[str]:
        return getattr(self, self.name_field) if self.name_field else None

    def parent_name(self) -> Optional[str]:
        return getattr(self, self.parent_field) if self.parent_field else None

    def to_bytes(self) -> bytes:
        return json.dumps(
            self.to_dict(), sort_keys=True, separators=(",", ":"), ensure_ascii=False
        ).encode("utf-8")

    @classmethod
    def from_bytes(cls: Type[T], raw: bytes) -> T:
        try:
            text = bytes(raw).decode("utf-8")
        except UnicodeDecodeError as e:
            raise DeserializationError(f"{cls.__name__}: stored bytes are not UTF-8: {e}") from e

        try:
            return cls.model_validate_json(text, strict=True, context={_COMPLETE: True})
        except ValidationError as e:
            raise DeserializationError(f"{cls.__name__}: {e}") from e


class ActorRecord(BucketItem):
    """Fields common to every actor kind (company, city, ..., oversight)."""

    name: str = ""
    mrv: str = ""
    pledges: List[int] = Field(default_factory=list)


class TrackedActorRecord(ActorRecord):
    """Actor kind whose `last_updated` is refreshed on every save."""

    last_updated: str = ""

    def touch(self) -> Dict[str, Any]:
        previous = {"last_updated": self.last_updated}
        self.last_updated = timestamp()
        return previous
