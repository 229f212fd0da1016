"""Name cleaning and tokenization helpers for owner classification."""

import re

from .vocab import NOISE_PHRASES, PERCENT_INTEREST


_WS_RE = re.compile(r"\s+")
_PAREN_RE = re.compile(r"\([^)]*\)|\([^)]*$")

# Whole-word match: no letter/digit immediately before or after, optional
# trailing period ("ET AL.").
_NOISE_RE = re.compile(
    r"(?<![A-Z0-9])(?:AS\s+(?:TRUSTEES?|TTEES?)|"
    + "|".join(NOISE_PHRASES)
    + r")\.?(?![A-Z0-9])",
    re.IGNORECASE,
)
_PERCENT_RE = re.compile(r"(?<![\d.])" + PERCENT_INTEREST + r"(?![A-Z0-9])", re.IGNORECASE)

_EDGE_PUNCT_RE = re.compile(r"^[\s&,;:/\-]+|[\s&,;:/\-]+$")
_EDGE_AND_RE = re.compile(r"^AND\s+|\s+AND$|^AND$", re.IGNORECASE)

_JOINER_RE = re.compile(r"\s*&\s*|\s+AND\s+", re.IGNORECASE)

_TOKEN_JUNK_RE = re.compile(r"[^\w'\-.]|[\d_]")
_TOKEN_JUNK_NO_PERIOD_RE = re.compile(r"[^\w'\-]|[\d_]")
_LETTER_RUN_RE = re.compile(r"[^\W\d_]+")


def normalize_space(text: str | None) -> str:
    """Collapse runs of whitespace (including NBSP) and trim. Non-strings
    yield ""."""
    if not isinstance(text, str):
        return ""
    return _WS_RE.sub(" ", text).strip()


def trim_conjunctions(text: str) -> str:
    """Drop leading/trailing '&', 'AND' and stray separators."""
    s = text
    while True:
        prev = s
        s = _EDGE_PUNCT_RE.sub("", s)
        s = _EDGE_AND_RE.sub("", s)
        if s == prev:
            return s


def strip_noise(text: str) -> str:
    """Remove legal boilerplate (ET AL, TRUSTEE, C/O, 50% INTEREST ...)."""
    s = _PERCENT_RE.sub(" ", text)
    s = _NOISE_RE.sub(" ", s)
    return s


def clean_name(raw: str | None) -> str:
    """Clean a raw owner string down to the name-bearing text.

    Parenthetical asides and noise phrases are removed, whitespace is
    collapsed and dangling conjunctions are trimmed. Case and interior
    punctuation (commas included) are preserved.
    """
    s = normalize_space(raw).replace("\u2019", "'")
    s = _PAREN_RE.sub(" ", s)
    s = strip_noise(s)
    s = normalize_space(s)
    return trim_conjunctions(s)


def split_joined(text: str) -> list[str]:
    """Split on '&' / whole-word 'AND'. Empty segments are dropped."""
    parts = _JOINER_RE.split(text)
    return [p for p in (trim_conjunctions(normalize_space(p)) for p in parts) if p]


def has_joiner(text: str) -> bool:
    return bool(_JOINER_RE.search(text))


def scrub_token(token: str, keep_periods: bool = False) -> str:
    """Keep letters, hyphens and apostrophes (and periods if asked).

    Separator characters may not start or end a token.
    """
    junk = _TOKEN_JUNK_RE if keep_periods else _TOKEN_JUNK_NO_PERIOD_RE
    s = junk.sub("", token)
    s = s.strip("-'")
    if not keep_periods:
        return s
    return s.lstrip(".")


def format_name(text: str | None) -> str | None:
    """Title-case every letter run: O'BRIEN -> O'Brien, SMITH-JONES -> Smith-Jones."""
    if not text:
        return None
    s = normalize_space(text)
    s = _LETTER_RUN_RE.sub(lambda m: m.group(0)[0].upper() + m.group(0)[1:].lower(), s)
    return s or None


def name_key(text: str) -> str:
    """Upper-cased, whitespace-collapsed identity text."""
    return normalize_space(text).upper()
