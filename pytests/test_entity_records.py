from __future__ import annotations

import json

import pytest

from entities import (
    Asset,
    City,
    Company,
    ConnectRequest,
    EthWallet,
    Location,
    Oversight,
    Pledge,
    User,
    record_type,
)
from store.buckets import Bucket
from store.errors import DeserializationError


def test_company_with_nested_locations_survives_encoding():
    company = Company(
        id=4,
        name="Acme Steel",
        country="Germany",
        industry="steel",
        locations=[
            Location(name="Duisburg works", latitude="51.43", longitude="6.76", nation_state_id=2),
            Location(name="Bremen works", latitude="53.08", longitude="8.80"),
        ],
        mrv="GHG-Protocol",
        pledges=[3, 1],
        last_updated="2024-05-01T10:00:00Z",
    )

    decoded = Company.from_bytes(company.to_bytes())

    assert decoded == company
    assert isinstance(decoded.locations[0], Location)


def test_user_wallet_is_rebuilt_as_record():
    user = User(
        id=2,
        username="alice",
        email="alice@example.org",
        pwhash="f" * 128,
        entity_type="city",
        entity_id=7,
        verified=True,
        ethereum_wallet=EthWallet(address="0xabc", public_key="04ff"),
    )

    decoded = User.from_bytes(user.to_bytes())

    assert decoded == user
    assert isinstance(decoded.ethereum_wallet, EthWallet)


def test_encoding_is_sorted_utf8_json():
    city = City(id=1, name="São Paulo", state="SP")
    raw = city.to_bytes()

    payload = json.loads(raw.decode("utf-8"))
    assert payload["name"] == "São Paulo"
    assert list(payload) == sorted(payload)


def test_pledge_and_request_keep_scalar_types():
    pledge = Pledge(id=1, name="Net zero", base_year=2005, target_year=2050, goal=0.5, regulatory=True)
    request = ConnectRequest(id=3, name="join", user_id=1, entity_type="company", entity_id=2)

    assert Pledge.from_bytes(pledge.to_bytes()) == pledge
    assert ConnectRequest.from_bytes(request.to_bytes()) == request


@pytest.mark.parametrize("raw", [b"", b"not json", b"\xff\xfe", b"[1, 2]", b'"city"'])
def test_corrupt_bytes_raise_deserialization_error(raw):
    with pytest.raises(DeserializationError):
        City.from_bytes(raw)


def test_missing_field_is_rejected():
    payload = Oversight(id=1, name="Verra").to_dict()
    del payload["scope"]
    with pytest.raises(DeserializationError, match="missing fields \\['scope'\\]"):
        Oversight.from_bytes(json.dumps(payload).encode())


def test_missing_nested_field_is_rejected():
    payload = City(name="Springfield").to_dict()
    del payload["location"]["latitude"]
    with pytest.raises(DeserializationError, match="latitude"):
        City.from_bytes(json.dumps(payload).encode())


def test_unknown_field_is_rejected():
    payload = Asset(id=1, name="Wind farm").to_dict()
    payload["owner"] = "someone"
    with pytest.raises(DeserializationError, match="owner"):
        Asset.from_bytes(json.dumps(payload).encode())


def test_record_of_other_kind_is_rejected():
    with pytest.raises(DeserializationError):
        City.from_bytes(Company(id=1, name="Acme").to_bytes())


@pytest.mark.parametrize("bad_id", [-1, "1", None, True])
def test_invalid_id_is_rejected(bad_id):
    payload = City(name="Springfield").to_dict()
    payload["id"] = bad_id
    with pytest.raises(DeserializationError):
        City.from_bytes(json.dumps(payload).encode())


def test_pledges_must_be_integer_ids():
    payload = City(name="Springfield").to_dict()
    payload["pledges"] = [1, "2"]
    with pytest.raises(DeserializationError, match="pledges"):
        City.from_bytes(json.dumps(payload).encode())


def test_nested_location_must_be_object():
    payload = City(name="Springfield").to_dict()
    payload["location"] = "downtown"
    with pytest.raises(DeserializationError, match="location"):
        City.from_bytes(json.dumps(payload).encode())


def test_record_type_covers_every_bucket():
    for bucket in Bucket:
        assert record_type(bucket.value).bucket is bucket
    with pytest.raises(ValueError):
        record_type("planet")


def test_parent_and_name_fields():
    assert City(name="Springfield", state="Illinois").parent_name() == "Illinois"
    assert Company(name="Acme", country="Germany").parent_name() == "Germany"
    assert Oversight(name="Verra").parent_name() is None
    assert User(username="bob").display_name() == "bob"


@pytest.mark.parametrize(
    "field, value",
    [
        ("name", 123),
        ("state", None),
        ("mrv", ["GHG-Protocol"]),
        ("last_updated", 20240101),
    ],
)
def test_wrong_scalar_type_is_rejected(field, value):
    payload = City(id=1, name="Springfield", state="Illinois").to_dict()
    payload[field] = value
    with pytest.raises(DeserializationError, match=field):
        City.from_bytes(json.dumps(payload).encode())


def test_wrong_nested_type_is_rejected():
    payload = City(id=1, name="Springfield").to_dict()
    payload["location"]["latitude"] = ["not", "a", "string"]
    with pytest.raises(DeserializationError, match="latitude"):
        City.from_bytes(json.dumps(payload).encode())


@pytest.mark.parametrize(
    "field, value",
    [("target_year", "soon"), ("goal", "half"), ("regulatory", 1), ("actor_id", 2.5)],
)
def test_pledge_field_types_are_enforced(field, value):
    payload = Pledge(id=1, name="Net zero").to_dict()
    payload[field] = value
    with pytest.raises(DeserializationError, match=field):
        Pledge.from_bytes(json.dumps(payload).encode())


def test_user_flags_must_be_booleans():
    payload = User(id=1, username="alice").to_dict()
    payload["admin"] = "yes"
    with pytest.raises(DeserializationError, match="admin"):
        User.from_bytes(json.dumps(payload).encode())


def test_integral_goal_decodes_as_float():
    payload = Pledge(id=1, name="Net zero").to_dict()
    payload["goal"] = 1
    assert Pledge.from_bytes(json.dumps(payload).encode()).goal == 1.0
