"""Parsers for the pipe-delimited rows printed by the bundled AppleScripts.

List output is one record per line. In the default lenient mode a
malformed line is logged and skipped; with ``strict=True`` the first
malformed line raises :class:`~things_mcp.core.errors.ThingsParseError`.
Detail output is a single record and always raises when unusable.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime
from typing import TYPE_CHECKING

from things_mcp.core.errors import ThingsParseError
from things_mcp.things.models import (
    AreaRecord,
    ProjectRecord,
    TagRecord,
    TodoDetails,
    TodoRecord,
)

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence

    from things_mcp.things.models import ThingsRecord

logger = logging.getLogger(__name__)

DETAIL_FIELD_COUNT = 11

# "Monday, June 3, 2025 at 12:00:00 AM" as printed by AppleScript dates
_VERBOSE_DATE_RE = re.compile(
    r"^(?:[A-Za-z]+,\s*)?([A-Za-z]+)\s+(\d{1,2}),\s*(\d{4})\b"
)
_FALLBACK_DATE_FORMATS = ("%Y/%m/%d", "%m/%d/%Y", "%d.%m.%Y", "%B %d %Y")


def _rows(
    output: str,
    min_fields: int,
    *,
    strict: bool,
) -> Iterator[list[str]]:
    """Yield the split fields of each well-formed, non-blank line."""
    lines = [line for line in output.split("\n") if line.strip()]
    for number, line in enumerate(lines, start=1):
        parts = line.split("|")
        if len(parts) < min_fields:
            msg = (
                f"Line {number} has invalid format "
                f"(expected at least {min_fields} parts): {line!r}"
            )
        elif not parts[0].strip() or not parts[1].strip():
            msg = f"Line {number} missing required fields (id/name): {line!r}"
        else:
            yield parts
            continue

        if strict:
            raise ThingsParseError(msg)
        logger.warning("Parser warning: %s", msg)


def _split_tags(raw: str | None) -> list[str]:
    if not raw:
        return []
    return [tag.strip() for tag in raw.split(",") if tag.strip()]


def _optional(parts: Sequence[str], index: int) -> str | None:
    if index >= len(parts):
        return None
    return parts[index].strip() or None


def parse_todo_list(output: str, *, strict: bool = False) -> list[TodoRecord]:
    """Parse ``id|name|area|tags`` rows."""
    return [
        TodoRecord(
            id=parts[0].strip(),
            name=parts[1].strip(),
            area=_optional(parts, 2),
            tags=_split_tags(_optional(parts, 3)),
        )
        for parts in _rows(output, 3, strict=strict)
    ]


def parse_project_list(output: str, *, strict: bool = False) -> list[ProjectRecord]:
    """Projects share the to-do row format."""
    return [
        ProjectRecord(
            id=parts[0].strip(),
            name=parts[1].strip(),
            area=_optional(parts, 2),
            tags=_split_tags(_optional(parts, 3)),
        )
        for parts in _rows(output, 3, strict=strict)
    ]


def parse_area_list(output: str, *, strict: bool = False) -> list[AreaRecord]:
    return [
        AreaRecord(id=parts[0].strip(), name=parts[1].strip())
        for parts in _rows(output, 2, strict=strict)
    ]


def parse_tag_list(output: str, *, strict: bool = False) -> list[TagRecord]:
    """Parse ``id|name|parent`` rows; a blank parent means top-level."""
    return [
        TagRecord(
            id=parts[0].strip(),
            name=parts[1].strip(),
            parent=_optional(parts, 2),
        )
        for parts in _rows(output, 2, strict=strict)
    ]


_LIST_PARSERS = {
    "todo": parse_todo_list,
    "project": parse_project_list,
    "area": parse_area_list,
    "tag": parse_tag_list,
}


def parse_record_list(
    output: str,
    kind: str = "todo",
    *,
    strict: bool = False,
) -> Sequence[ThingsRecord]:
    """Parse list output for *kind* (``todo``, ``project``, ``area``, ``tag``)."""
    try:
        parser = _LIST_PARSERS[kind]
    except KeyError:
        msg = f"Unknown record kind: {kind}"
        raise ValueError(msg) from None
    return parser(output, strict=strict)


def normalize_date(value: str | None) -> str | None:
    """Convert an AppleScript date string to ``YYYY-MM-DD``.

    Unparseable input is returned unchanged; this never raises.
    """
    if value is None or not value.strip():
        return None
    text = value.strip()

    match = _VERBOSE_DATE_RE.match(text)
    if match:
        month, day, year = match.groups()
        try:
            parsed = datetime.strptime(f"{month} {day} {year}", "%B %d %Y")
        except ValueError:
            pass
        else:
            return parsed.date().isoformat()

    try:
        return datetime.fromisoformat(text).date().isoformat()
    except ValueError:
        pass

    for fmt in _FALLBACK_DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date().isoformat()
        except ValueError:
            continue

    return text


def parse_todo_details(output: str) -> TodoDetails:
    """Parse the 11-field detail row of a single to-do.

    Fields: id, name, area, tags, deadline, scheduled date, status,
    creation date, completion date, project, notes. Notes come last and
    may themselves contain ``|`` or newlines.

    Raises:
        ThingsParseError: If the output is empty or lacks id/name.
    """
    text = output.strip()
    if not text:
        raise ThingsParseError("Empty output for todo details")

    parts = text.split("|", DETAIL_FIELD_COUNT - 1)
    if len(parts) < DETAIL_FIELD_COUNT:
        logger.warning(
            "Parser warning: todo details has %d fields (expected %d)",
            len(parts),
            DETAIL_FIELD_COUNT,
        )
        parts.extend([""] * (DETAIL_FIELD_COUNT - len(parts)))

    item_id, name = parts[0].strip(), parts[1].strip()
    if not item_id or not name:
        raise ThingsParseError("Missing required fields (id/name) in todo details")

    return TodoDetails(
        id=item_id,
        name=name,
        area=_optional(parts, 2),
        tags=_split_tags(_optional(parts, 3)),
        deadline=normalize_date(parts[4]),
        scheduled_date=normalize_date(parts[5]),
        status=parts[6].strip() or "open",
        creation_date=normalize_date(parts[7]),
        completion_date=normalize_date(parts[8]),
        project=_optional(parts, 9),
        notes=parts[10].strip() or None,
    )
