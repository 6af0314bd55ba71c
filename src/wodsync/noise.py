"""Boilerplate removal for WOD bodies."""

import re

# Reservation notices the site repeats under every workout
BOILERPLATE_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"NO RESERVATION, NO CLASS\.", re.IGNORECASE),
    re.compile(r"MORE THAN\s+5\s+MIN", re.IGNORECASE),
)

# Only \n and \r\n end a line; other Unicode breaks stay inside the line
_LINE_BREAK = re.compile(r"\r?\n")

# Two or more blank (or whitespace-only) lines in a row
_BLANK_RUN = re.compile(r"\n(?:[ \t]*\n){2,}")


def split_lines(text: str) -> list[str]:
    return _LINE_BREAK.split(text)


def is_boilerplate(line: str) -> bool:
    return any(pattern.search(line) for pattern in BOILERPLATE_PATTERNS)


def clean(text: str) -> str:
    """Drop boilerplate lines, collapse blank-line runs, and trim.

    Args:
        text: Raw body text, "\\n" or "\\r\\n" separated.

    Returns:
        Body with at most one consecutive blank line and no surrounding
        whitespace.
    """
    kept = [line for line in split_lines(text) if not is_boilerplate(line)]
    return _BLANK_RUN.sub("\n\n", "\n".join(kept)).strip()
