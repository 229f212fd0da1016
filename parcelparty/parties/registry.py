"""Party registry: deduplicates classified owners within one extraction run.

Every mention is classified, reduced to a PartyKey and either matched to an
existing canonical party or appended with the next 1-based index. Indices
follow first-seen order, so callers register current owners before
historical ones to give present-day owners the low numbers.

One registry per run. Nothing is shared between instances.
"""

import logging
from dataclasses import dataclass, replace
from typing import Iterator, Optional

from .classify import Company, Party, Person, classify, classify_all

logger = logging.getLogger(__name__)

# ("person", FIRST, LAST) or ("company", NAME), upper-cased.
PartyKey = tuple[str, ...]


def party_key(party: Party) -> PartyKey:
    """Identity used for deduplication. Person middle names are ignored."""
    return party.key()


@dataclass
class CanonicalParty:
    """The single deduplicated record for a party within one run."""
    index: int
    party: Party
    order_hint: Optional[int] = None

    @property
    def kind(self) -> str:
        return self.party.kind

    @property
    def key(self) -> PartyKey:
        return party_key(self.party)

    def to_dict(self) -> dict:
        d = self.party.to_dict()
        d["index"] = self.index
        return d


class PartyRegistry:
    """Canonical persons and companies for one extraction run."""

    def __init__(self):
        self._parties: list[CanonicalParty] = []
        self._by_key: dict[PartyKey, CanonicalParty] = {}

    def register(self, raw: str | None, order_hint: Optional[int] = None) -> Optional[int]:
        """Classify and register one mention. Returns its index, or None
        if the mention does not classify (nothing is registered then)."""
        party = classify(raw)
        if party is None:
            logger.debug("Skipping unclassifiable mention %r", raw)
            return None
        return self.register_party(party, order_hint=order_hint)

    def register_party(self, party: Party, order_hint: Optional[int] = None) -> int:
        """Register an already classified party."""
        key = party_key(party)
        existing = self._by_key.get(key)
        if existing is None:
            canonical = CanonicalParty(
                index=len(self._parties) + 1,
                party=party,
                order_hint=order_hint,
            )
            self._parties.append(canonical)
            self._by_key[key] = canonical
            logger.debug("Registered %s #%d: %s", party.kind, canonical.index, key)
            return canonical.index

        # Backfill a middle name discovered by a later mention.
        if (
            isinstance(party, Person)
            and party.middle_name
            and isinstance(existing.party, Person)
            and not existing.party.middle_name
        ):
            existing.party = replace(existing.party, middle_name=party.middle_name)
            logger.debug("Backfilled middle name for #%d", existing.index)
        return existing.index

    def register_all(self, raw: str | None, order_hint: Optional[int] = None) -> list[int]:
        """Register every party in a possibly composite mention ('A & B')."""
        indices: list[int] = []
        for party in classify_all(raw):
            idx = self.register_party(party, order_hint=order_hint)
            if idx not in indices:
                indices.append(idx)
        return indices

    def find(self, raw: str | None) -> Optional[int]:
        """Index of an already registered mention, without registering it."""
        party = classify(raw)
        if party is None:
            return None
        return self.find_party(party)

    def find_party(self, party: Party) -> Optional[int]:
        existing = self._by_key.get(party_key(party))
        return existing.index if existing else None

    def get(self, index: int) -> CanonicalParty:
        """Canonical party by its 1-based index."""
        if index < 1 or index > len(self._parties):
            raise IndexError(f"No party with index {index}")
        return self._parties[index - 1]

    def all(self) -> list[CanonicalParty]:
        """All canonical parties in registration order."""
        return list(self._parties)

    def persons(self) -> list[CanonicalParty]:
        return [c for c in self._parties if isinstance(c.party, Person)]

    def companies(self) -> list[CanonicalParty]:
        return [c for c in self._parties if isinstance(c.party, Company)]

    def __len__(self) -> int:
        return len(self._parties)

    def __iter__(self) -> Iterator[CanonicalParty]:
        return iter(list(self._parties))
