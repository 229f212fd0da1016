"""Split an owner cell from an appraiser page into raw owner strings.

Appraiser pages list owners one per line inside a single cell, separated by
<br> (sometimes by block elements), often with a "view all owners" link or
a modal dialog tucked inside. Only the visible name lines are kept.
"""

from bs4 import BeautifulSoup, Tag

from parcelparty.parties.clean import name_key, normalize_space

_DROP_TAGS = ["a", "script", "style", "button"]
_BLOCK_TAGS = ["p", "div", "li", "tr"]


def split_owner_cell(fragment: str | Tag | None) -> list[str]:
    """Return the owner lines of an HTML fragment or parsed tag.

    Lines are whitespace-normalized; blanks and case-insensitive
    duplicates are dropped, first occurrence wins.
    """
    if fragment is None:
        return []
    if isinstance(fragment, Tag):
        # Work on a copy; callers keep their tree intact.
        soup = BeautifulSoup(str(fragment), "html.parser")
    else:
        if not fragment.strip():
            return []
        soup = BeautifulSoup(fragment, "html.parser")

    for tag in soup.find_all(_DROP_TAGS):
        tag.decompose()
    for tag in soup.select(".modal"):
        tag.decompose()

    for br in soup.find_all("br"):
        br.replace_with("\n")
    for tag in soup.find_all(_BLOCK_TAGS):
        tag.insert_after("\n")

    lines: list[str] = []
    seen: set[str] = set()
    for line in soup.get_text().split("\n"):
        text = normalize_space(line)
        if not text:
            continue
        key = name_key(text)
        if key in seen:
            continue
        seen.add(key)
        lines.append(text)
    return lines
