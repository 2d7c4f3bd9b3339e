from __future__ import annotations

from pydantic import Field

from entities.base import BucketItem, Location, Record
from store.buckets import Bucket


class Pledge(BucketItem):
    """A commitment attributable to exactly one actor.

    The pledge bucket owns the record; the actor only keeps the pledge id.
    """

    bucket = Bucket.PLEDGE

    name: str = ""
    pledge_type: str = ""  # e.g. emissions, mitigation, adaptation
    base_year: int = 0
    target_year: int = 0
    goal: float = 0.0
    regulatory: bool = False

    # Owning actor.
    actor_type: str = ""
    actor_id: int = 0


class EthWallet(Record):
    """Wallet data kept on the user; key generation happens elsewhere."""

    encrypted_private_key: str = ""
    public_key: str = ""
    address: str = ""


class User(BucketItem):
    bucket = Bucket.USER
    name_field = "username"

    username: str = ""
    email: str = ""
    pwhash: str = ""

    # choices are: individual, company, city, state, region, country, oversight
    entity_type: str = ""
    entity_id: int = 0  # id of the actor the user is associated with
    verified: bool = False  # verified member of the entity they claim
    admin: bool = False  # admin for its entity

    ethereum_wallet: EthWallet = Field(default_factory=EthWallet)


class ConnectRequest(BucketItem):
    """A user's request to be connected to an actor."""

    bucket = Bucket.REQUEST

    name: str = ""
    user_id: int = 0
    entity_type: str = ""
    entity_id: int = 0
    approved: bool = False


class Asset(BucketItem):
    bucket = Bucket.ASSET

    name: str = ""
    company_id: int = 0
    asset_type: str = ""
    location: Location = Field(default_factory=Location)
