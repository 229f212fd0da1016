"""Owner entity and relationship files for one property.

Turns a property's owner sidecar entry into the files the county
pipeline publishes next to property.json and sales_*.json:

    person_<n>.json / company_<n>.json           canonical owners
    relationship_sales_person_<k>.json           sales_<i> -> person_<n>
    relationship_sales_company_<k>.json          sales_<i> -> company_<n>
    mailing_address_1.json                       current owners' mailing address
    relationship_<owner>_has_mailing_address_1.json

Persons and companies are numbered separately, in registry order. Current
owners are registered before historical ones so they get the low numbers.
"""

import json
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional, Sequence

from parcelparty.owners.mapping import CURRENT, normalize_date_key, ordered_owner_groups
from parcelparty.parties.classify import Company, Person
from parcelparty.parties.registry import PartyRegistry

logger = logging.getLogger(__name__)

_MIDDLE_NAME_RE = re.compile(r"^[A-Z][a-zA-Z\s\-',.]*$")


def person_record(person: Person) -> dict:
    middle = person.middle_name
    if middle and not _MIDDLE_NAME_RE.match(middle):
        middle = None
    return {
        "birth_date": None,
        "first_name": person.first_name,
        "last_name": person.last_name,
        "middle_name": middle,
        "prefix_name": None,
        "suffix_name": None,
        "us_citizenship_status": None,
        "veteran_status": None,
    }


def company_record(company: Company, request_identifier: Optional[str] = None) -> dict:
    record = {"name": company.name}
    if request_identifier:
        record["request_identifier"] = request_identifier
    return record


def relationship_record(from_path: str, to_path: str) -> dict:
    return {"from": {"/": from_path}, "to": {"/": to_path}}


def _stem(path: str) -> str:
    """'./person_1.json' -> 'person_1'"""
    return Path(path).stem


@dataclass
class OwnerFiles:
    """Files produced for one property, keyed by file name."""
    files: dict[str, dict] = field(default_factory=dict)
    registry: PartyRegistry = field(default_factory=PartyRegistry)
    # registry index -> "./person_1.json"
    paths: dict[int, str] = field(default_factory=dict)

    def names(self, prefix: str) -> list[str]:
        return [n for n in self.files if n.startswith(prefix)]

    def write(self, out_dir: Path) -> list[Path]:
        """Write every file as indented JSON. Returns the written paths."""
        out_dir.mkdir(parents=True, exist_ok=True)
        written = []
        for name, record in self.files.items():
            path = out_dir / name
            with open(path, "w", encoding="utf-8") as f:
                json.dump(record, f, indent=2, ensure_ascii=False)
            written.append(path)
        logger.info("Wrote %d owner files to %s", len(written), out_dir)
        return written


def build_owner_files(
    owner_data: Mapping,
    parcel_id: str,
    sales_dates: Optional[Sequence[str]] = None,
    mailing_address: Optional[str] = None,
    request_identifier: Optional[str] = None,
    link_current_to_first_sale: bool = False,
) -> OwnerFiles:
    """Build owner entity and relationship records for one property.

    Args:
        owner_data: Loaded owner sidecar.
        parcel_id: Parcel identifier ("property_<id>" entry).
        sales_dates: Dates of sales_1.json, sales_2.json, ... in that order.
            A sale is linked to the owner group recorded for its date; the
            first sale falls back to the current owners.
        mailing_address: Unnormalized mailing address of the current owners.
        request_identifier: Copied onto company and mailing address records.
        link_current_to_first_sale: Without sales_dates, link current owners
            to sales_1.json.

    Raises:
        OwnerDataError: the property entry is missing or malformed.
    """
    result = OwnerFiles()
    registry = result.registry

    # Registration order decides numbering: current owners first.
    group_indices: dict[str, list[int]] = {}
    for hint, (key, parties) in enumerate(ordered_owner_groups(owner_data, parcel_id)):
        indices = group_indices.setdefault(normalize_date_key(key) or key, [])
        for party in parties:
            idx = registry.register_party(party, order_hint=hint)
            if idx not in indices:
                indices.append(idx)

    person_no = 0
    company_no = 0
    for canonical in registry.all():
        if isinstance(canonical.party, Person):
            person_no += 1
            name = f"person_{person_no}.json"
            result.files[name] = person_record(canonical.party)
        else:
            company_no += 1
            name = f"company_{company_no}.json"
            result.files[name] = company_record(canonical.party, request_identifier)
        result.paths[canonical.index] = f"./{name}"

    current = group_indices.get(CURRENT, [])

    # Sales links
    links: list[tuple[int, int]] = []
    if sales_dates:
        for sale_no, sale_date in enumerate(sales_dates, start=1):
            key = normalize_date_key(sale_date) if sale_date else None
            indices = group_indices.get(key, []) if key and key != CURRENT else []
            if not indices and sale_no == 1:
                indices = current
            links.extend((sale_no, idx) for idx in indices)
    elif link_current_to_first_sale:
        links = [(1, idx) for idx in current]

    rel_person = 0
    rel_company = 0
    for sale_no, idx in links:
        owner_path = result.paths[idx]
        sale_path = f"./sales_{sale_no}.json"
        if _stem(owner_path).startswith("person_"):
            rel_person += 1
            name = f"relationship_sales_person_{rel_person}.json"
        else:
            rel_company += 1
            name = f"relationship_sales_company_{rel_company}.json"
        result.files[name] = relationship_record(sale_path, owner_path)

    # Mailing address, only when there is an owner to hang it on
    if mailing_address and mailing_address.strip() and current:
        mailing_path = "./mailing_address_1.json"
        record = {
            "unnormalized_address": mailing_address.strip(),
            "latitude": None,
            "longitude": None,
        }
        if request_identifier:
            record["request_identifier"] = request_identifier
        result.files["mailing_address_1.json"] = record
        for idx in current:
            owner_path = result.paths[idx]
            name = f"relationship_{_stem(owner_path)}_has_{_stem(mailing_path)}.json"
            result.files[name] = relationship_record(owner_path, mailing_path)

    logger.info(
        "Property %s: %d persons, %d companies, %d sale links",
        parcel_id, person_no, company_no, len(links),
    )
    return result
