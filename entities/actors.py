"""Climate actor kinds.

Parent references are names, not enforced foreign keys:
city -> state -> region -> country, and company -> country.
"""

from __future__ import annotations

from typing import List

from pydantic import Field

from entities.base import ActorRecord, Location, TrackedActorRecord
from store.buckets import Bucket


class Company(TrackedActorRecord):
    bucket = Bucket.COMPANY
    parent_field = "country"

    country: str = ""
    industry: str = ""
    locations: List[Location] = Field(default_factory=list)


class City(TrackedActorRecord):
    bucket = Bucket.CITY
    parent_field = "state"

    state: str = ""
    location: Location = Field(default_factory=Location)


class State(TrackedActorRecord):
    bucket = Bucket.STATE
    parent_field = "region"

    region: str = ""
    location: Location = Field(default_factory=Location)


class Region(TrackedActorRecord):
    bucket = Bucket.REGION
    parent_field = "country"

    country: str = ""
    location: Location = Field(default_factory=Location)


class Country(TrackedActorRecord):
    bucket = Bucket.COUNTRY

    location: Location = Field(default_factory=Location)


class Oversight(ActorRecord):
    """An oversight body (verifier, standards organization, regulator)."""

    bucket = Bucket.OVERSIGHT

    scope: str = ""
