"""Actor dispatch and the capability set shared by every actor kind.

Given the type of actor (company, city, state, region, country, oversight)
and its ID, `resolve_actor` returns an `Actor`: a wrapper that exposes the
same operations whatever the concrete kind is, so callers never branch on
kind again.
"""

from __future__ import annotations

import enum
from typing import Any, Dict, Iterable, List, Type

from entities import (
    ActorRecord,
    City,
    Company,
    Country,
    Oversight,
    Pledge,
    Region,
    State,
)
from logging_utils import get_logger
from services import identity
from store.bucket_store import BucketStore
from store.errors import StoreError, UnknownActorKind

logger = get_logger(__name__)


class ActorKind(str, enum.Enum):
    COMPANY = "company"
    CITY = "city"
    STATE = "state"
    REGION = "region"
    COUNTRY = "country"
    OVERSIGHT = "oversight"


ACTOR_TYPES: Dict[ActorKind, Type[ActorRecord]] = {
    ActorKind.COMPANY: Company,
    ActorKind.CITY: City,
    ActorKind.STATE: State,
    ActorKind.REGION: Region,
    ActorKind.COUNTRY: Country,
    ActorKind.OVERSIGHT: Oversight,
}

# Adding an ActorKind without a record type must fail at import, not at lookup.
_unmapped = set(ActorKind) - set(ACTOR_TYPES)
if _unmapped:
    raise RuntimeError(f"no record type for actor kinds: {sorted(k.value for k in _unmapped)}")


def actor_kind(kind: str | ActorKind) -> ActorKind:
    """Parse an actor type tag.

    Raises:
        UnknownActorKind: if `kind` is not one of the actor kinds.
    """

    try:
        return ActorKind(kind)
    except ValueError:
        raise UnknownActorKind(kind) from None


class Actor:
    """Common interface over a stored actor record.

    Every mutating call persists immediately; if the save fails the in-memory
    record is restored and the error is raised to the caller.
    """

    def __init__(self, store: BucketStore, record: ActorRecord) -> None:
        self._store = store
        self._record = record

    def __repr__(self) -> str:
        return f"Actor({self.kind.value}:{self._record.id} {self._record.name!r})"

    @property
    def kind(self) -> ActorKind:
        return ActorKind(self._record.bucket.value)

    @property
    def record(self) -> ActorRecord:
        return self._record

    def get_id(self) -> int:
        return self._record.get_id()

    def get_pledges(self) -> List[Pledge]:
        """Resolve the stored pledge ids into pledge records, in list order."""
        return [identity.retrieve_as(self._store, Pledge, pid) for pid in self._record.pledges]

    def add_pledges(self, pledge_ids: Iterable[int]) -> None:
        """Append `pledge_ids` to the actor's pledge list and save."""
        ids = list(pledge_ids)
        for pid in ids:
            if isinstance(pid, bool) or not isinstance(pid, int) or pid < 0:
                raise ValueError(f"invalid pledge id: {pid!r}")

        previous = list(self._record.pledges)
        self._record.pledges.extend(ids)
        try:
            identity.save(self._store, self._record)
        except StoreError:
            self._record.pledges = previous
            raise
        logger.info("%r: added pledges %s", self, ids)

    def update_mrv(self, mrv: str) -> None:
        """Replace the actor's reporting methodology and save."""
        previous = self._record.mrv
        self._record.mrv = mrv
        try:
            identity.save(self._store, self._record)
        except StoreError:
            self._record.mrv = previous
            raise
        logger.info("%r: mrv set to %r", self, mrv)


def resolve_actor(store: BucketStore, kind: str | ActorKind, actor_id: int) -> Actor:
    """Return the actor of type `kind` with identity `actor_id`.

    Raises:
        UnknownActorKind: if `kind` is not an actor kind.
        NotFound / DeserializationError: propagated from the lookup.
    """

    cls = ACTOR_TYPES[actor_kind(kind)]
    record = identity.retrieve_as(store, cls, actor_id)
    return Actor(store, record)


def new_actor(store: BucketStore, kind: str | ActorKind, **attrs: Any) -> Actor:
    """Create an actor of type `kind` from `attrs`, save it, and wrap it.

    Raises:
        UnknownActorKind: if `kind` is not an actor kind.
        ValueError: if `attrs` carries an identity.
        pydantic.ValidationError: if `attrs` names a field the kind does not
            have or gives a field the wrong type.
    """

    cls = ACTOR_TYPES[actor_kind(kind)]
    record = cls(**attrs)
    if record.id != 0:
        raise ValueError("new actors must not carry an identity")
    identity.save(store, record)
    return Actor(store, record)


def attach_new_pledge(store: BucketStore, actor: Actor, pledge: Pledge) -> Pledge:
    """Save `pledge` as owned by `actor` and link it on the actor."""

    pledge.actor_type = actor.kind.value
    pledge.actor_id = actor.get_id()
    identity.save(store, pledge)
    actor.add_pledges([pledge.id])
    return pledge
