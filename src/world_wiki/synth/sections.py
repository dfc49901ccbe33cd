"""Split authored text into page sections, and small markdown helpers."""

import re

from ..link.autolinker import escape_pipes
from ..models.pages import WikiSection

# "## Heading" through "###### Heading"; a trailing run of #'s is ignored
HEADING_PATTERN = re.compile(r"^(#{1,6})[ \t]+(.+?)[ \t]*#*[ \t]*$", re.MULTILINE)


class SectionList:
    """Accumulates sections with sequential ids like ``section-0``."""

    def __init__(self, prefix: str = "section"):
        self.prefix = prefix
        self.sections: list[WikiSection] = []

    def add(self, heading: str, content: str, level: int = 2) -> WikiSection:
        section = WikiSection(
            id=f"{self.prefix}-{len(self.sections)}",
            heading=heading,
            level=level,
            content=content,
        )
        self.sections.append(section)
        return section


def strip_title_heading(text: str) -> str:
    """Drop a leading top-level ``# Title`` line, which duplicates the page title."""
    body = text.strip()
    if body.startswith("# "):
        _, _, rest = body.partition("\n")
        body = rest.strip()
    return body


def split_into_sections(
    text: str,
    default_heading: str,
    prefix: str = "section",
    levels: tuple[int, ...] | None = None,
) -> list[WikiSection]:
    """
    Split text into sections on markdown heading lines.

    Text before the first heading becomes a section under ``default_heading``.
    Sections with no body are skipped. Text with no headings at all becomes a
    single section. When ``levels`` is given, only headings of those levels
    split; other heading lines stay in the section body.
    """
    body = text.strip()
    if not body:
        return []

    sections = SectionList(prefix)

    # Find all heading markers
    splits = [
        m for m in HEADING_PATTERN.finditer(body)
        if levels is None or len(m.group(1)) in levels
    ]

    # Content before the first heading
    preamble_end = splits[0].start() if splits else len(body)
    preamble = body[:preamble_end].strip()
    if preamble:
        sections.add(default_heading, preamble)

    for i, match in enumerate(splits):
        heading = match.group(2).strip() or default_heading
        level = max(2, len(match.group(1)))

        # Get text until next heading (or end)
        start = match.end()
        end = splits[i + 1].start() if i + 1 < len(splits) else len(body)
        section_text = body[start:end].strip()

        if section_text:  # Skip empty sections
            sections.add(heading, section_text, level)

    if not sections.sections:
        sections.add(default_heading, body)

    return sections.sections


def escape_cell(text: str) -> str:
    """Make text safe for a single markdown table cell."""
    return escape_pipes(" ".join(text.split()))


def markdown_table(headers: list[str], rows: list[list[str]]) -> str:
    """Render a simple pipe table. Cells are escaped by the caller."""
    lines = [
        "| " + " | ".join(headers) + " |",
        "| " + " | ".join("---" for _ in headers) + " |",
    ]
    for row in rows:
        lines.append("| " + " | ".join(row) + " |")
    return "\n".join(lines)


def wikilink(name: str) -> str:
    return f"[[{escape_pipes(name)}]]"
