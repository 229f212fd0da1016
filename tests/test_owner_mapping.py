from __future__ import annotations

from typing import Any

import pytest

from parcelparty.owners.mapping import (
    OwnerDataError, build_owner_data, load_owner_data, normalize_date_key,
    ordered_owner_groups, party_from_dict, save_owner_data,
)
from parcelparty.parties.classify import Company, Person


def test_normalize_date_key() -> None:
    assert normalize_date_key("current") == "current"
    assert normalize_date_key("CURRENT") == "current"
    assert normalize_date_key("2019-05-01") == "2019-05-01"
    assert normalize_date_key("5/1/2019") == "2019-05-01"
    assert normalize_date_key("13/45/2019") is None
    assert normalize_date_key("sometime") is None


def test_build_owner_data_groups_and_orders() -> None:
    data = build_owner_data("12-34", {
        "01/15/2010": ["DOE JANE"],
        "current": ["SMITH JOHN & JANE", "ACME HOLDINGS LLC"],
        "2021-03-04": ["SMITH, JOHN"],
    })

    by_date = data["property_12-34"]["owners_by_date"]
    assert list(by_date) == ["current", "2021-03-04", "2010-01-15"]
    assert by_date["current"] == [
        {"type": "person", "first_name": "John", "last_name": "Smith", "middle_name": None},
        {"type": "person", "first_name": "Jane", "last_name": "Smith", "middle_name": None},
        {"type": "company", "name": "ACME HOLDINGS LLC"},
    ]
    assert by_date["2010-01-15"] == [
        {"type": "person", "first_name": "Jane", "last_name": "Doe", "middle_name": None},
    ]
    assert data["invalid_owners"] == []


def test_build_owner_data_records_invalid_mentions() -> None:
    data = build_owner_data("1", {"current": ["Madonna", "", "UNKNOWN", "X & Y", "SMITH JOHN"]})

    assert data["invalid_owners"] == [
        {"raw": "Madonna", "reason": "unclassified"},
        {"raw": "UNKNOWN", "reason": "sentinel"},
        {"raw": "X & Y", "reason": "ambiguous_ampersand"},
    ]
    assert len(data["property_1"]["owners_by_date"]["current"]) == 1


def test_build_owner_data_keeps_empty_current_and_unknown_dates() -> None:
    data = build_owner_data("1", {"someday": ["DOE JANE"], "2001-01-01": ["UNKNOWN"]})

    by_date = data["property_1"]["owners_by_date"]
    assert by_date["current"] == []
    assert "2001-01-01" not in by_date
    assert by_date["unknown_date_1"][0]["last_name"] == "Doe"


def test_build_owner_data_dedups_within_group() -> None:
    data = build_owner_data("1", {"current": ["SMITH JOHN", "JOHN SMITH", "SMITH, JOHN"]})
    assert len(data["property_1"]["owners_by_date"]["current"]) == 1


def test_party_from_dict() -> None:
    assert party_from_dict({"type": "person", "first_name": "JOHN", "last_name": "SMITH"}) == Person(
        first_name="John", last_name="Smith",
    )
    assert party_from_dict({"type": "company", "name": " ACME  LLC "}) == Company(name="ACME LLC")
    assert party_from_dict("DOE, JANE") == Person(first_name="Jane", last_name="Doe")
    assert party_from_dict({"type": "person", "first_name": "JOHN"}) is None
    assert party_from_dict({"type": "company", "name": ""}) is None
    assert party_from_dict({"type": "robot"}) is None
    assert party_from_dict(42) is None


def test_ordered_owner_groups_current_first() -> None:
    data = build_owner_data("9", {
        "2015-06-01": ["DOE JANE"],
        "current": ["SMITH JOHN"],
        "2020-01-01": ["ACME LLC"],
    })

    groups = ordered_owner_groups(data, "9")

    assert [k for k, _ in groups] == ["current", "2020-01-01", "2015-06-01"]
    assert groups[0][1] == [Person(first_name="John", last_name="Smith")]


def test_ordered_owner_groups_falls_back_to_latest_dated() -> None:
    data = {"property_9": {"owners_by_date": {
        "current": [],
        "2010-01-01": [{"type": "company", "name": "OLD LLC"}],
        "2020-01-01": [{"type": "company", "name": "NEW LLC"}],
    }}}

    groups = ordered_owner_groups(data, "9")

    assert groups[0] == ("current", [Company(name="NEW LLC")])


def test_ordered_owner_groups_reads_previous_owners() -> None:
    data = {"property_9": {
        "owners_by_date": {"current": [{"type": "company", "name": "NEW LLC"}]},
        "previous_owners_by_date": {"2001-02-03": [{"type": "company", "name": "OLD LLC"}]},
    }}

    groups = dict(ordered_owner_groups(data, "9"))

    assert groups["2001-02-03"] == [Company(name="OLD LLC")]


def test_ordered_owner_groups_skips_malformed_entries(caplog: Any) -> None:
    data = {"property_9": {"owners_by_date": {
        "current": [{"type": "person", "first_name": "", "last_name": "X"}, {"type": "company", "name": "A LLC"}],
        "2001-01-01": "not a list",
    }}}

    groups = dict(ordered_owner_groups(data, "9"))

    assert groups["current"] == [Company(name="A LLC")]
    assert "2001-01-01" not in groups
    assert "Skipping malformed owner" in caplog.text


def test_ordered_owner_groups_missing_property_raises() -> None:
    with pytest.raises(OwnerDataError):
        ordered_owner_groups({"invalid_owners": []}, "404")


def test_ordered_owner_groups_malformed_by_date_raises() -> None:
    with pytest.raises(OwnerDataError):
        ordered_owner_groups({"property_1": {"owners_by_date": []}}, "1")


def test_save_and_load_round_trip(tmp_path: Any) -> None:
    data = build_owner_data("1", {"current": ["SMITH JOHN"]})
    path = tmp_path / "owners" / "owner_data.json"

    save_owner_data(data, path)

    assert load_owner_data(path) == data
    assert not path.with_suffix(".tmp").exists()


def test_load_missing_file_raises(tmp_path: Any) -> None:
    with pytest.raises(OwnerDataError):
        load_owner_data(tmp_path / "nope.json")


def test_build_owner_data_records_non_text_mentions() -> None:
    data = build_owner_data("1", {
        "current": [123, None, {"name": "ACME LLC"}, "SMITH JOHN"],
        "2020-01-01": 5,
        "2019-01-01": "DOE JANE",
    })

    by_date = data["property_1"]["owners_by_date"]
    assert by_date["current"] == [
        {"type": "person", "first_name": "John", "last_name": "Smith", "middle_name": None},
    ]
    assert "2020-01-01" not in by_date
    assert by_date["2019-01-01"][0]["last_name"] == "Doe"
    assert data["invalid_owners"] == [
        {"raw": 123, "reason": "not_text"},
        {"raw": {"name": "ACME LLC"}, "reason": "not_text"},
        {"raw": 5, "reason": "not_text"},
    ]


def test_ordered_owner_groups_rejects_non_mapping() -> None:
    with pytest.raises(OwnerDataError):
        ordered_owner_groups([], "1")


def test_load_invalid_json_raises(tmp_path: Any) -> None:
    path = tmp_path / "owner_data.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(OwnerDataError, match="not valid JSON"):
        load_owner_data(path)


def test_load_non_object_raises(tmp_path: Any) -> None:
    path = tmp_path / "owner_data.json"
    path.write_text("[]", encoding="utf-8")

    with pytest.raises(OwnerDataError, match="JSON object"):
        load_owner_data(path)
