"""Block parser for the WOD page text.

The page is published as loosely formatted markdown. Each workout is a block:

    #### 01/02/2026          <- date header
                             <- usually a spacer line
    #### Gym A               <- location header (+2)
    #### CrossFit            <- program header (+3)
    Warm up                  <- body, until the next date header
    5 rounds

Blocks repeat for every location/program and for several days. The layout
drifts: the spacer line is sometimes missing, and some blocks omit the
location entirely. Header recovery is therefore explicit and every entry
records which rule produced it (see HeaderStatus).
"""

import re

from wodsync.logging import get_logger
from wodsync.models import DEFAULT_PROGRAM, HeaderStatus, WodEntry
from wodsync.noise import clean, split_lines

log = get_logger(__name__)

DATE_HEADER = re.compile(r"^####\s+(\d{2}/\d{2}/\d{4})\s*$")
HEADER_MARKER = re.compile(r"^####(?=\s|$)\s*")

# Offsets (relative to the date header) of the expected location/program lines
LOCATION_OFFSET = 2
PROGRAM_OFFSET = 3


def _is_date_header(line: str) -> bool:
    return DATE_HEADER.match(line.strip()) is not None


def _is_header(line: str | None) -> bool:
    return line is not None and HEADER_MARKER.match(line.strip()) is not None


def _header_text(line: str | None) -> str:
    if line is None:
        return ""
    return HEADER_MARKER.sub("", line.strip()).strip()


def _resolve_headers(
    window: list[str],
) -> tuple[str, str, int, HeaderStatus]:
    """Pick location/program out of the lines following a date header.

    Args:
        window: Up to three lines after the date header, cut short at the next
            date header.

    Returns:
        (location, program, body_offset, status) where body_offset is the
        index into window at which the body starts.
    """

    def at(offset: int) -> str | None:
        # offset is relative to the date header, window[0] is offset 1
        return window[offset - 1] if 0 < offset <= len(window) else None

    if _is_header(at(LOCATION_OFFSET)) and _is_header(at(PROGRAM_OFFSET)):
        return (
            _header_text(at(LOCATION_OFFSET)),
            _header_text(at(PROGRAM_OFFSET)),
            PROGRAM_OFFSET,
            HeaderStatus.EXACT,
        )

    # Program where expected, blank location slot: location from the line above
    if _is_header(at(PROGRAM_OFFSET)) and not (at(LOCATION_OFFSET) or "").strip():
        above = at(LOCATION_OFFSET - 1)
        return (
            _header_text(above) if _is_header(above) else "",
            _header_text(at(PROGRAM_OFFSET)),
            PROGRAM_OFFSET,
            HeaderStatus.SHIFTED if _is_header(above) else HeaderStatus.PARTIAL,
        )

    # Layout shifted by one: spacer line missing
    if _is_header(at(LOCATION_OFFSET - 1)) and _is_header(at(PROGRAM_OFFSET - 1)):
        return (
            _header_text(at(LOCATION_OFFSET - 1)),
            _header_text(at(PROGRAM_OFFSET - 1)),
            PROGRAM_OFFSET - 1,
            HeaderStatus.SHIFTED,
        )

    # A single header line: the location was left out, it is the program
    for offset in (1, 2):
        if _is_header(at(offset)):
            return "", _header_text(at(offset)), offset, HeaderStatus.PARTIAL

    # No markers at all: expected offset, else the adjacent line
    location = at(LOCATION_OFFSET)
    if location is None:
        location = at(LOCATION_OFFSET - 1)
    program = at(PROGRAM_OFFSET)
    if program is None:
        program = at(PROGRAM_OFFSET - 1)
    return (
        _header_text(location),
        _header_text(program),
        len(window),
        HeaderStatus.POSITIONAL,
    )


def parse(text: str) -> list[WodEntry]:
    """Extract every WOD block from the page text, for all dates present.

    Args:
        text: Raw page text.

    Returns:
        Entries in document order. Empty if the text has no date headers.
    """
    lines = split_lines(text)
    entries: list[WodEntry] = []

    i = 0
    while i < len(lines):
        match = DATE_HEADER.match(lines[i].strip())
        if not match:
            i += 1
            continue

        date = match.group(1)
        start = i + 1

        window: list[str] = []
        for line in lines[start : start + PROGRAM_OFFSET]:
            if _is_date_header(line):
                break
            window.append(line)

        location, program, body_offset, status = _resolve_headers(window)

        i = start + body_offset
        body: list[str] = []
        while i < len(lines) and not _is_date_header(lines[i]):
            body.append(lines[i])
            i += 1

        entry = WodEntry(
            date=date,
            location=location,
            program=program or DEFAULT_PROGRAM,
            body=clean("\n".join(body)),
            header_status=status,
        )
        if entry.recovered:
            log.debug(
                "header_recovered",
                date=date,
                status=status.value,
                location=entry.location,
                program=entry.program,
            )
        entries.append(entry)

    log.debug("page_parsed", lines=len(lines), entries=len(entries))
    return entries


def entries_for_date(entries: list[WodEntry], ddmmyyyy: str) -> list[WodEntry]:
    """Keep entries whose date header equals ddmmyyyy, in source order."""
    return [entry for entry in entries if entry.date == ddmmyyyy]
