"""Owner-name classification.

Decides whether a free-text owner / grantor string names a person or a
company, and for persons picks between "LAST FIRST [MIDDLE]" and
"FIRST [MIDDLE] LAST" by scoring both readings.

Nothing here raises on bad input: an unclassifiable mention is ``None``
(or an empty list from ``classify_all``) and callers skip it.
"""

import logging
import re
from dataclasses import dataclass
from typing import Union

from .clean import (
    clean_name, format_name, has_joiner, name_key, scrub_token, split_joined,
)
from .vocab import (
    COMMON_FIRST_NAMES, COMPANY_KEYWORDS, GENERATIONAL_SUFFIXES, SENTINELS,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Party variants
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Person:
    """A natural person. First and last name are never empty."""
    first_name: str
    last_name: str
    middle_name: str | None = None

    kind = "person"

    def __post_init__(self):
        if not self.first_name or not self.last_name:
            raise ValueError("Person requires first_name and last_name")

    def key(self) -> tuple[str, str, str]:
        # Middle name is not part of identity.
        return ("person", name_key(self.first_name), name_key(self.last_name))

    def to_dict(self) -> dict:
        return {
            "type": "person",
            "first_name": self.first_name,
            "last_name": self.last_name,
            "middle_name": self.middle_name,
        }


@dataclass(frozen=True)
class Company:
    """A company, trust, government body or other organization."""
    name: str

    kind = "company"

    def __post_init__(self):
        if not self.name or not self.name.strip():
            raise ValueError("Company requires a name")

    def key(self) -> tuple[str, str]:
        return ("company", name_key(self.name))

    def to_dict(self) -> dict:
        return {"type": "company", "name": self.name}


Party = Union[Person, Company]


# ---------------------------------------------------------------------------
# Company detection
# ---------------------------------------------------------------------------

def _keyword_pattern(keyword: str) -> str:
    """'L.L.C' -> L\\.?L\\.?C, 'REAL ESTATE' -> REAL\\s+ESTATE."""
    words = []
    for word in keyword.split():
        letters = [re.escape(part) for part in word.split(".") if part]
        words.append(r"\.?".join(letters))
    return r"\s+".join(words)


_COMPANY_RE = re.compile(
    r"(?<![A-Z0-9])(?:"
    + "|".join(_keyword_pattern(k) for k in sorted(COMPANY_KEYWORDS, key=len, reverse=True))
    + r")\.?(?![A-Z0-9])",
    re.IGNORECASE,
)

_DIGIT_RE = re.compile(r"\d")


def is_company_name(text: str | None) -> bool:
    """Does the text carry an organizational keyword (LLC, INC, TRUST, BANK ...)?"""
    if not text:
        return False
    return bool(_COMPANY_RE.search(text))


def _is_sentinel(text: str) -> bool:
    return name_key(text).strip(" .") in SENTINELS


# ---------------------------------------------------------------------------
# Person parsing
# ---------------------------------------------------------------------------

def _base_score(first: str, last: str, middle: list[str]) -> float:
    score = 0.0
    if len(first) > 1:
        score += 1
    if len(last) > 1:
        score += 2
    if middle:
        score += 0.5
    return score


def _tokenize(text: str) -> list[tuple[str, str]]:
    """(plain, with periods) pairs: plain for first/last, periods kept for middles."""
    tokens = [
        (scrub_token(t), scrub_token(t, keep_periods=True))
        for t in text.replace(",", " ").split()
    ]
    return [t for t in tokens if t[0]]


def _strip_suffixes(tokens: list[tuple[str, str]], keep: int) -> list[tuple[str, str]]:
    while len(tokens) > keep and tokens[-1][0].upper() in GENERATIONAL_SUFFIXES:
        tokens.pop()
    return tokens


def _make_person(first: str, last: str, middle: list[str]) -> Person | None:
    first_name = format_name(first)
    last_name = format_name(last)
    if not first_name or not last_name:
        return None
    return Person(
        first_name=first_name,
        last_name=last_name,
        middle_name=format_name(" ".join(middle)),
    )


def _parse_surname_first(head: str, tail: str) -> Person | None:
    """'DE LA CRUZ, MARIA': everything before the comma is the surname."""
    surname = _strip_suffixes(_tokenize(head), keep=1)
    given = _strip_suffixes(_tokenize(tail), keep=1)
    if not surname or not given:
        return None
    return _make_person(
        given[0][0],
        " ".join(t[0] for t in surname),
        [t[1] for t in given[1:]],
    )


def _parse_person(text: str) -> Person | None:
    if _DIGIT_RE.search(text):
        return None

    head, sep, tail = text.partition(",")
    comma = bool(sep)
    if comma:
        head_tokens = _tokenize(head)
        tail_tokens = _tokenize(tail)
        if (len(head_tokens) > 1 and len(tail_tokens) == 1
                and tail_tokens[0][0].upper() in GENERATIONAL_SUFFIXES):
            # "JOHN SMITH, JR": the comma only sets off the suffix
            return _parse_person(head)
        if len(head_tokens) > 1 and tail_tokens:
            return _parse_surname_first(head, tail)

    tokens = _tokenize(text)
    if len(tokens) < 2:
        return None

    last_token_is_initial = len(tokens[-1][0]) == 1
    tokens = _strip_suffixes(tokens, keep=2)

    plain = [t[0] for t in tokens]
    dotted = [t[1] for t in tokens]

    # FIRST [MIDDLE] LAST
    fl_first, fl_last, fl_middle = plain[0], plain[-1], dotted[1:-1]
    fl_score = _base_score(fl_first, fl_last, fl_middle)
    if len(fl_last) == 1:
        fl_score -= 3
    if fl_first.upper() in COMMON_FIRST_NAMES:
        fl_score += 1.5

    # LAST FIRST [MIDDLE]
    lf_last, lf_first, lf_middle = plain[0], plain[1], dotted[2:]
    lf_score = _base_score(lf_first, lf_last, lf_middle)
    if comma:
        lf_score += 4
    if last_token_is_initial:
        lf_score += 2
    if len(lf_first) == 1:
        lf_score += 1
    if lf_first.upper() in COMMON_FIRST_NAMES:
        lf_score += 1.5

    if lf_score > fl_score or (lf_score == fl_score and comma):
        first, last, middle, score = lf_first, lf_last, lf_middle, lf_score
    else:
        first, last, middle, score = fl_first, fl_last, fl_middle, fl_score

    if score <= 0:
        return None
    return _make_person(first, last, middle)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def classify(raw: str | None) -> Party | None:
    """Classify one raw owner mention as a Person, a Company, or None.

    A company keyword always wins over person heuristics. A non-company
    string that still joins several names with '&' / 'AND' is ambiguous
    here; use ``classify_all`` to split it.
    """
    cleaned = clean_name(raw)
    if not cleaned or _is_sentinel(cleaned):
        return None
    if is_company_name(cleaned):
        return Company(name=cleaned)
    if has_joiner(cleaned):
        return None
    return _parse_person(cleaned)


def _bare_given_name(segment: str) -> str | None:
    """The single given name of a segment like 'JANE', else None."""
    tokens = [scrub_token(t) for t in clean_name(segment).replace(",", " ").split()]
    tokens = [t for t in tokens if t]
    if len(tokens) != 1 or len(tokens[0]) < 2 or _is_sentinel(tokens[0]):
        return None
    return format_name(tokens[0])


def classify_all(raw: str | None) -> list[Party]:
    """Classify a mention that may join several names.

    The whole string is tried as a company first, so 'SMITH & SONS INC'
    stays one company. Otherwise each '&' / 'AND' segment is classified on
    its own. A bare given name shares the surname of the neighbouring
    person: 'SMITH JOHN & JANE' and 'JOHN & JANE SMITH' both give two
    Smiths. Results are de-duplicated by identity, order preserved.
    """
    cleaned = clean_name(raw)
    if not cleaned or _is_sentinel(cleaned):
        return []
    if is_company_name(cleaned):
        return [Company(name=cleaned)]

    results: list[Party] = []
    seen: set[tuple] = set()

    def add(party: Party) -> None:
        if party.key() not in seen:
            seen.add(party.key())
            results.append(party)

    previous: Person | None = None
    # given names still waiting for a surname from the next person
    pending: list[str] = []
    for segment in split_joined(cleaned):
        party = classify(segment)
        given = _bare_given_name(segment) if party is None else None
        if given and previous is not None:
            party = Person(first_name=given, last_name=previous.last_name)
        elif given:
            pending.append(given)
            continue
        if party is None:
            logger.debug("Unclassifiable segment %r in %r", segment, raw)
            continue
        if isinstance(party, Person):
            for name in pending:
                add(Person(first_name=name, last_name=party.last_name))
        elif pending:
            logger.debug("No surname for %r in %r", pending, raw)
        pending = []
        previous = party if isinstance(party, Person) else None
        add(party)
    if pending:
        logger.debug("No surname for %r in %r", pending, raw)
    return results


def explain(raw: str | None) -> str | None:
    """Why a mention yields no party, or None if it classifies."""
    cleaned = clean_name(raw)
    if not cleaned:
        return "empty"
    if _is_sentinel(cleaned):
        return "sentinel"
    if classify_all(raw):
        return None
    if has_joiner(cleaned):
        return "ambiguous_ampersand"
    return "unclassified"
