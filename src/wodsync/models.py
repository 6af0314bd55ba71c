"""Pydantic models for parsed WOD entries and sync results.

All data structures use Pydantic v2 for validation, serialization, and type safety.
"""

from enum import Enum
from typing import NamedTuple

from pydantic import BaseModel, Field

DEFAULT_PROGRAM = "WOD"


class HeaderStatus(str, Enum):
    """How the location/program header lines of a block were recovered."""

    EXACT = "exact"  # headers at +2/+3 after the date line
    SHIFTED = "shifted"  # headers one line early, at +1/+2
    PARTIAL = "partial"  # single header line, taken as the program
    POSITIONAL = "positional"  # no header markers, plain line offsets


class DedupKey(NamedTuple):
    """Identity of a stored record within one target date."""

    location: str
    program: str


class WodEntry(BaseModel):
    """One workout for one date, location and program.

    Built fresh from the page text on every run and never persisted as-is;
    SyncEngine either turns it into a Notion page or drops it as a duplicate.
    """

    date: str  # "01/02/2026", exactly as printed on the page
    location: str = ""  # "Gym A"; empty when the page omits it
    program: str = DEFAULT_PROGRAM  # "CrossFit", "Open Gym", ...
    body: str = ""  # cleaned workout text
    header_status: HeaderStatus = HeaderStatus.EXACT

    @property
    def recovered(self) -> bool:
        """True when the headers were not found at their expected offsets."""
        return self.header_status is not HeaderStatus.EXACT

    @property
    def dedup_key(self) -> DedupKey:
        return DedupKey(self.location, self.program)


class TargetDate(BaseModel):
    """One calendar date in the two renderings the pipeline needs."""

    iso: str  # "2026-02-01", keys the Notion Date property
    ddmmyyyy: str  # "01/02/2026", matches the page's date headers


class SyncResult(BaseModel):
    """Outcome of one sync run for one date."""

    date: str
    created: int = 0
    skipped: int = 0
    dry_run: bool = False
    created_keys: list[tuple[str, str]] = Field(default_factory=list)
    skipped_keys: list[tuple[str, str]] = Field(default_factory=list)

    @property
    def total(self) -> int:
        return self.created + self.skipped

    def summary(self) -> str:
        """One-line run summary for the operator."""
        prefix = "Notion DB dry run" if self.dry_run else "Notion DB updated"
        return (
            f"{prefix} ({self.date}): created={self.created} "
            f"skipped={self.skipped} (total entries today={self.total})."
        )
