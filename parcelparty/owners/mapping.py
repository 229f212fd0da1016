"""Owner sidecar: classified owners grouped by date, per property.

File format (owners/owner_data.json):
{
    "property_12-34-56-7890": {
        "owners_by_date": {
            "current": [
                {"type": "person", "first_name": "John", "last_name": "Smith", "middle_name": null},
                {"type": "company", "name": "ACME HOLDINGS LLC"}
            ],
            "2019-05-01": [...]
        }
    },
    "invalid_owners": [{"raw": "SMITH", "reason": "unclassified"}]
}

"current" comes first, then ISO dates newest first. Dates that cannot be
read are kept as "unknown_date_<n>" groups after the dated ones.
"""

import json
import logging
import re
from datetime import datetime
from pathlib import Path
from typing import Iterable, Mapping

from parcelparty.parties.classify import (
    Company, Party, Person, classify, classify_all, explain,
)
from parcelparty.parties.clean import format_name, normalize_space

logger = logging.getLogger(__name__)

CURRENT = "current"

_ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_US_DATE_RE = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})$")


class OwnerDataError(ValueError):
    """Owner sidecar is missing the property or is not shaped as expected."""


def property_key(parcel_id: str) -> str:
    return f"property_{parcel_id}"


def normalize_date_key(key: str) -> str | None:
    """'current' stays, ISO and MM/DD/YYYY become YYYY-MM-DD, else None."""
    s = normalize_space(str(key))
    if s.lower() == CURRENT:
        return CURRENT
    try:
        if _ISO_DATE_RE.match(s):
            return datetime.strptime(s, "%Y-%m-%d").strftime("%Y-%m-%d")
        m = _US_DATE_RE.match(s)
        if m:
            month, day, year = (int(g) for g in m.groups())
            return datetime(year, month, day).strftime("%Y-%m-%d")
    except ValueError:
        return None
    return None


def _is_iso_date(key: str) -> bool:
    return bool(_ISO_DATE_RE.match(key))


def _ordered_keys(keys: Iterable[str]) -> list[str]:
    """current, then ISO dates newest first, then everything else as given."""
    keys = list(keys)
    dated = sorted((k for k in keys if _is_iso_date(k)), reverse=True)
    other = [k for k in keys if k != CURRENT and not _is_iso_date(k)]
    head = [CURRENT] if CURRENT in keys else []
    return head + dated + other


# ---------------------------------------------------------------------------
# Build
# ---------------------------------------------------------------------------

def build_owner_data(parcel_id: str, mentions: Mapping[str, Iterable[str] | str]) -> dict:
    """Classify raw owner mentions into the owner sidecar structure.

    Args:
        parcel_id: Parcel identifier; the entry is keyed "property_<id>".
        mentions: {date_key: [raw owner strings]}. date_key is "current",
            an ISO date or MM/DD/YYYY.

    Returns:
        Sidecar dict with "property_<id>" and "invalid_owners".
    """
    groups: dict[str, list[Party]] = {CURRENT: []}
    invalid: list[dict] = []
    unknown = 0

    for key, raws in mentions.items():
        date_key = normalize_date_key(key)
        if date_key is None:
            unknown += 1
            date_key = f"unknown_date_{unknown}"
            logger.warning("Unreadable owner date key %r, stored as %s", key, date_key)
        group = groups.setdefault(date_key, [])
        seen = {p.key() for p in group}

        if not isinstance(raws, (list, tuple)):
            raws = [raws]
        for raw in raws:
            if raw is None:
                continue
            if not isinstance(raw, str):
                logger.warning("Non-text owner mention %r under %s", raw, date_key)
                invalid.append({"raw": raw, "reason": "not_text"})
                continue
            parties = classify_all(raw)
            if not parties:
                reason = explain(raw) or "unclassified"
                if reason != "empty":
                    invalid.append({"raw": normalize_space(raw), "reason": reason})
                continue
            for party in parties:
                if party.key() in seen:
                    continue
                seen.add(party.key())
                group.append(party)

    owners_by_date = {
        k: [p.to_dict() for p in groups[k]]
        for k in _ordered_keys(groups)
        if k == CURRENT or groups[k]
    }
    total = sum(len(v) for v in owners_by_date.values())
    logger.info(
        "Owner data for %s: %d owners in %d groups, %d invalid",
        parcel_id, total, len(owners_by_date), len(invalid),
    )
    return {
        property_key(parcel_id): {"owners_by_date": owners_by_date},
        "invalid_owners": invalid,
    }


# ---------------------------------------------------------------------------
# Read
# ---------------------------------------------------------------------------

def party_from_dict(data) -> Party | None:
    """Rebuild a Person/Company from a sidecar entry. Raw strings are
    classified; anything malformed yields None."""
    if isinstance(data, str):
        return classify(data)
    if not isinstance(data, dict):
        return None

    kind = data.get("type")
    if kind == "company":
        name = normalize_space(data.get("name"))
        return Company(name=name) if name else None
    if kind == "person":
        first = format_name(data.get("first_name"))
        last = format_name(data.get("last_name"))
        if not first or not last:
            return None
        return Person(
            first_name=first,
            last_name=last,
            middle_name=format_name(data.get("middle_name")),
        )
    return None


def _read_groups(by_date, label: str, groups: dict[str, list[Party]]) -> None:
    for key, owners in by_date.items():
        if not isinstance(owners, list):
            logger.warning("Ignoring %s[%r]: expected a list", label, key)
            continue
        group = groups.setdefault(key, [])
        for owner in owners:
            party = party_from_dict(owner)
            if party is None:
                logger.warning("Skipping malformed owner %r under %s", owner, key)
                continue
            group.append(party)


def ordered_owner_groups(owner_data: Mapping, parcel_id: str) -> list[tuple[str, list[Party]]]:
    """Owner groups for one property in registration order.

    "current" first, then dated groups newest first. When "current" is empty
    the most recent dated group stands in for it.

    Raises:
        OwnerDataError: the property entry is missing or malformed.
    """
    if not isinstance(owner_data, Mapping):
        raise OwnerDataError("Owner data must be a JSON object")
    pkey = property_key(parcel_id)
    entry = owner_data.get(pkey)
    if not isinstance(entry, dict):
        raise OwnerDataError(f"No owner data for {pkey}")

    by_date = entry.get("owners_by_date", {})
    previous = entry.get("previous_owners_by_date", {})
    if not isinstance(by_date, dict) or not isinstance(previous, dict):
        raise OwnerDataError(f"owners_by_date for {pkey} is not a mapping")

    groups: dict[str, list[Party]] = {}
    _read_groups(by_date, "owners_by_date", groups)
    previous = {k: v for k, v in previous.items() if k != CURRENT}
    _read_groups(previous, "previous_owners_by_date", groups)

    current = groups.pop(CURRENT, [])
    if not current:
        for key in _ordered_keys(groups):
            if _is_iso_date(key) and groups[key]:
                current = list(groups[key])
                logger.info("No current owners for %s; using %s owners", pkey, key)
                break

    return [(CURRENT, current)] + [(k, groups[k]) for k in _ordered_keys(groups)]


def load_owner_data(path: Path) -> dict:
    """Load the owner sidecar from disk."""
    if not path.exists():
        raise OwnerDataError(f"Owner data file not found: {path}")
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise OwnerDataError(f"Owner data file {path} is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise OwnerDataError(f"Owner data file {path} must contain a JSON object")
    return data


def save_owner_data(data: dict, path: Path) -> None:
    """Atomically save the owner sidecar to disk."""
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(".tmp")
    with open(tmp, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)
    tmp.replace(path)
