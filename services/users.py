"""User accounts and their link to an actor."""

from __future__ import annotations

from entities import User
from logging_utils import get_logger
from services import identity
from services.actors import Actor, actor_kind, resolve_actor
from services.search import retrieve_by_name_and_parent
from store.bucket_store import BucketStore
from store.buckets import Bucket
from store.errors import NotFound

logger = get_logger(__name__)

PWHASH_LENGTH = 128  # hex-encoded SHA-512
INDIVIDUAL = "individual"


def new_user(
    store: BucketStore,
    username: str,
    pwhash: str,
    email: str,
    entity_type: str,
    entity_name: str = "",
    entity_parent: str = "",
) -> User:
    """Create and save a user linked to the actor named `entity_name`.

    The actor is looked up by name and, for kinds that have one, by the name
    of its parent (e.g. the state for a city). Users of type "individual"
    are not linked to any actor.

    Raises:
        ValueError: bad pwhash length, missing entity type, or taken username.
        UnknownActorKind: if `entity_type` is neither "individual" nor an actor kind.
        NotFound: if the named actor does not exist.
    """

    _check_pwhash(pwhash)
    if not entity_type:
        raise ValueError("entity type not specified")

    entity_id = 0
    if entity_type != INDIVIDUAL:
        kind = actor_kind(entity_type)
        actor = retrieve_by_name_and_parent(store, kind.value, entity_name, entity_parent or None)
        entity_id = actor.id

    user = User(
        username=username,
        email=email,
        pwhash=pwhash,
        entity_type=entity_type,
        entity_id=entity_id,
    )
    # Uniqueness check and save must not interleave with another writer.
    with store.bucket_lock(Bucket.USER.value):
        _check_username_free(store, username)
        identity.save(store, user)
    logger.info("created user %d (%s) linked to %s:%d", user.id, username, entity_type, entity_id)
    return user


def update_user(
    store: BucketStore,
    user_id: int,
    *,
    username: str | None = None,
    email: str | None = None,
    pwhash: str | None = None,
) -> User:
    """Change a user's username, email and/or password hash and save.

    Raises:
        ValueError: nothing to change, bad pwhash length, or taken username.
        NotFound: if no user has identity `user_id`.
    """

    if username is None and email is None and pwhash is None:
        raise ValueError("nothing to update")
    if pwhash is not None:
        _check_pwhash(pwhash)

    with store.bucket_lock(Bucket.USER.value):
        user = identity.retrieve_as(store, User, user_id)
        if username is not None and username != user.username:
            _check_username_free(store, username)
            user.username = username
        if email is not None:
            user.email = email
        if pwhash is not None:
            user.pwhash = pwhash
        identity.save(store, user)

    logger.info("updated user %d (%s)", user.id, user.username)
    return user


def _check_pwhash(pwhash: str) -> None:
    if len(pwhash) != PWHASH_LENGTH:
        raise ValueError(f"pwhash must be {PWHASH_LENGTH} characters long")


def _check_username_free(store: BucketStore, username: str) -> None:
    if _find_user(store, username) is not None:
        raise ValueError(f"username {username!r} is already taken")


def _find_user(store: BucketStore, username: str) -> User | None:
    for user in identity.retrieve_all(store, Bucket.USER):
        if user.username == username:
            return user
    return None


def retrieve_user_by_username(store: BucketStore, username: str) -> User:
    user = _find_user(store, username)
    if user is None:
        raise NotFound(Bucket.USER.value, username, f"user {username!r} not found")
    return user


def validate_user(store: BucketStore, username: str, pwhash: str) -> User:
    """Return the user matching both `username` and `pwhash`.

    Raises:
        NotFound: if no user matches (unknown name and wrong hash look the same).
    """

    for user in identity.retrieve_all(store, Bucket.USER):
        if user.username == username and user.pwhash == pwhash:
            return user
    raise NotFound(Bucket.USER.value, username, "user not found")


def get_user_actor(store: BucketStore, user: User) -> Actor:
    """Resolve the actor a user is associated with.

    Raises:
        UnknownActorKind: for individual users and unknown entity types.
        NotFound: if the linked actor no longer exists.
    """

    return resolve_actor(store, user.entity_type, user.entity_id)


def delete_user(store: BucketStore, user_id: int) -> None:
    identity.delete(store, Bucket.USER, user_id)
