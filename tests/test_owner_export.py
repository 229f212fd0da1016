from __future__ import annotations

import json
from typing import Any

import pytest

from parcelparty.owners.export import (
    build_owner_files, company_record, person_record, relationship_record,
)
from parcelparty.owners.mapping import OwnerDataError, build_owner_data
from parcelparty.parties.classify import Company, Person


def _owner_data() -> dict:
    return build_owner_data("77", {
        "current": ["SMITH JOHN & JANE", "ACME HOLDINGS LLC"],
        "2021-03-04": ["SMITH, JOHN"],
        "2015-06-01": ["DOE JANE MARIE", "BETA PROPERTIES INC"],
    })


def test_person_record_shape() -> None:
    assert person_record(Person("John", "Smith", "Q")) == {
        "birth_date": None,
        "first_name": "John",
        "last_name": "Smith",
        "middle_name": "Q",
        "prefix_name": None,
        "suffix_name": None,
        "us_citizenship_status": None,
        "veteran_status": None,
    }


def test_person_record_drops_invalid_middle_name() -> None:
    assert person_record(Person("John", "Smith", "'q"))["middle_name"] is None


def test_company_and_relationship_records() -> None:
    assert company_record(Company("ACME LLC")) == {"name": "ACME LLC"}
    assert company_record(Company("ACME LLC"), "req-1") == {"name": "ACME LLC", "request_identifier": "req-1"}
    assert relationship_record("./sales_1.json", "./person_1.json") == {
        "from": {"/": "./sales_1.json"},
        "to": {"/": "./person_1.json"},
    }


def test_current_owners_numbered_first_and_separately() -> None:
    result = build_owner_files(_owner_data(), "77")

    assert result.files["person_1.json"]["first_name"] == "John"
    assert result.files["person_2.json"]["first_name"] == "Jane"
    assert result.files["person_2.json"]["last_name"] == "Smith"
    assert result.files["person_3.json"]["last_name"] == "Doe"
    assert result.files["person_3.json"]["middle_name"] == "Marie"
    assert result.files["company_1.json"] == {"name": "ACME HOLDINGS LLC"}
    assert result.files["company_2.json"] == {"name": "BETA PROPERTIES INC"}
    # "SMITH, JOHN" in 2021 is the same person as the current John Smith
    assert len(result.names("person_")) == 3
    assert result.names("relationship_") == []


def test_sales_linked_by_date_with_current_fallback() -> None:
    result = build_owner_files(
        _owner_data(), "77",
        sales_dates=["2022-09-09", "03/04/2021", "2015-06-01"],
    )

    rels = {n: r for n, r in result.files.items() if n.startswith("relationship_sales_")}
    pairs = sorted((r["from"]["/"], r["to"]["/"]) for r in rels.values())

    assert pairs == sorted([
        # sale 1 has no dated group: current owners
        ("./sales_1.json", "./person_1.json"),
        ("./sales_1.json", "./person_2.json"),
        ("./sales_1.json", "./company_1.json"),
        # sale 2: 2021 grantee
        ("./sales_2.json", "./person_1.json"),
        # sale 3: 2015 grantees
        ("./sales_3.json", "./person_3.json"),
        ("./sales_3.json", "./company_2.json"),
    ])
    assert len(result.names("relationship_sales_person_")) == 4
    assert len(result.names("relationship_sales_company_")) == 2


def test_link_current_to_first_sale_without_dates() -> None:
    result = build_owner_files(_owner_data(), "77", link_current_to_first_sale=True)

    targets = sorted(r["to"]["/"] for n, r in result.files.items() if n.startswith("relationship_sales_"))
    assert targets == ["./company_1.json", "./person_1.json", "./person_2.json"]


def test_mailing_address_links_current_owners() -> None:
    result = build_owner_files(
        _owner_data(), "77",
        mailing_address=" PO BOX 12, TAMPA FL 33601 ",
        request_identifier="req-77",
    )

    assert result.files["mailing_address_1.json"] == {
        "unnormalized_address": "PO BOX 12, TAMPA FL 33601",
        "latitude": None,
        "longitude": None,
        "request_identifier": "req-77",
    }
    assert result.files["relationship_person_1_has_mailing_address_1.json"] == {
        "from": {"/": "./person_1.json"},
        "to": {"/": "./mailing_address_1.json"},
    }
    assert "relationship_person_2_has_mailing_address_1.json" in result.files
    assert "relationship_company_1_has_mailing_address_1.json" in result.files
    assert "relationship_person_3_has_mailing_address_1.json" not in result.files


def test_no_mailing_address_without_current_owners() -> None:
    data = {"property_5": {"owners_by_date": {"current": []}}}

    result = build_owner_files(data, "5", mailing_address="PO BOX 1")

    assert result.files == {}


def test_missing_property_raises() -> None:
    with pytest.raises(OwnerDataError):
        build_owner_files({}, "nope")


def test_write(tmp_path: Any) -> None:
    result = build_owner_files(_owner_data(), "77", link_current_to_first_sale=True)

    written = result.write(tmp_path / "data")

    assert len(written) == len(result.files)
    person = json.loads((tmp_path / "data" / "person_1.json").read_text(encoding="utf-8"))
    assert person["first_name"] == "John"
