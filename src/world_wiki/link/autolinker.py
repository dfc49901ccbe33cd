"""Auto-linker - wrap recognized names in ``[[wikilink]]`` markup.

Rules:
- Names shorter than the configured minimum are never linked
- Longer names win over any shorter name they contain
- Only the first mention of a name per section is linked
- Heading lines are never linked
- Text already inside ``[[...]]`` is left alone
"""

import re
from dataclasses import dataclass
from typing import Iterable

from ..config import get_settings

HEADING_LINE = re.compile(r"^(#{1,6}[ \t].*)$", re.MULTILINE)
EXISTING_LINK = re.compile(r"\[\[((?:\\\||[^\]|])+)(?:\|[^\]]*)?\]\]")

# A pipe not already escaped; inside links it would start a display label
UNESCAPED_PIPE = re.compile(r"(?<!\\)\|")


def escape_pipes(text: str) -> str:
    """Escape pipes so text survives inside a wikilink or a table cell."""
    return UNESCAPED_PIPE.sub(r"\\|", text)


@dataclass
class LinkCandidate:
    """A name the auto-linker may wrap, and the page it resolves to."""

    name: str
    page_id: str


def _as_candidate(item: "LinkCandidate | tuple[str, str]") -> LinkCandidate:
    if isinstance(item, LinkCandidate):
        return item
    name, page_id = item
    return LinkCandidate(name=name, page_id=page_id)


class AutoLinker:
    """Compiled linker for a fixed set of candidate names.

    Build one per candidate set and reuse it; the alternation pattern is
    compiled once in the constructor.
    """

    def __init__(
        self,
        candidates: Iterable["LinkCandidate | tuple[str, str]"],
        min_length: int | None = None,
    ):
        """
        Args:
            candidates: (name, page id) pairs or LinkCandidate objects
            min_length: Shortest name to link (defaults to settings)
        """
        if min_length is None:
            min_length = get_settings().min_link_length

        # First candidate wins for a given case-folded name
        self._ids: dict[str, str] = {}
        names: list[str] = []
        for item in candidates:
            candidate = _as_candidate(item)
            name = candidate.name.strip()
            if len(name) < min_length:
                continue
            key = name.casefold()
            if key in self._ids:
                continue
            self._ids[key] = candidate.page_id
            names.append(name)

        # Longest first so "Aurora Stack" beats "Aurora"
        names.sort(key=len, reverse=True)

        self._pattern: re.Pattern[str] | None = None
        if names:
            alternation = "|".join(re.escape(n) for n in names)
            self._pattern = re.compile(rf"(?<!\w)(?:{alternation})(?!\w)", re.IGNORECASE)

    def __len__(self) -> int:
        return len(self._ids)

    def page_id_for(self, name: str) -> str | None:
        return self._ids.get(name.strip().casefold())

    def link(self, text: str, exclude_id: str | None = None) -> str:
        """Wrap the first mention of each candidate in every section of text.

        Args:
            text: Markdown-ish text, possibly containing heading lines
            exclude_id: Page whose names must not be linked (e.g. the page itself)

        Returns:
            Text with ``[[...]]`` markup added
        """
        if not text or self._pattern is None:
            return text

        # Odd indices are heading lines, even indices are section bodies
        parts = HEADING_LINE.split(text)
        for i in range(0, len(parts), 2):
            parts[i] = self._link_segment(self._pattern, parts[i], exclude_id)
        return "".join(parts)

    def _link_segment(self, pattern: re.Pattern[str], segment: str, exclude_id: str | None) -> str:
        out: list[str] = []
        linked: set[str] = set()
        depth = 0
        pos = 0

        for match in pattern.finditer(segment):
            # Track bracket depth over the text we skipped past
            for ch in segment[pos:match.start()]:
                if ch == "[":
                    depth += 1
                elif ch == "]":
                    depth = max(0, depth - 1)
            out.append(segment[pos:match.start()])
            pos = match.end()

            matched = match.group(0)
            key = matched.casefold()

            if depth > 0:
                # Inside an existing link; count it as already linked
                linked.add(key)
                out.append(matched)
                continue

            if key in linked or self._ids.get(key) == exclude_id:
                out.append(matched)
                continue

            linked.add(key)
            out.append(f"[[{escape_pipes(matched)}]]")

        out.append(segment[pos:])
        return "".join(out)


def apply_wikilinks(
    text: str,
    candidates: Iterable["LinkCandidate | tuple[str, str]"],
    min_length: int | None = None,
) -> str:
    """One-shot linking of text against a candidate list."""
    return AutoLinker(candidates, min_length=min_length).link(text)


def find_wikilinks(text: str) -> list[str]:
    """Names inside ``[[Name]]`` or ``[[Name|label]]`` markup, in order."""
    return [m.group(1).replace("\\|", "|").strip() for m in EXISTING_LINK.finditer(text)]
