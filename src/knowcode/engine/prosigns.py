"""Prosign lexicon and occurrence locator.

A prosign is a procedural signal written in angle brackets (``<BT>``). Learners
may copy it literally or write its printable alternate (``=``). The locator
records where each known prosign sits in a normalized reference text so the
matcher can accept either spelling at that position.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProsignMapping:
    prosign: str
    alternate: str

    @classmethod
    def parse(cls, pair: str) -> ProsignMapping:
        """Parse a ``PROSIGN=ALTERNATE`` pair, e.g. ``<BT>==``."""
        prosign, sep, alternate = pair.partition("=")
        prosign, alternate = prosign.strip(), alternate.strip()
        if not sep or not prosign or not alternate:
            raise ValueError(f"Expected PROSIGN=ALTERNATE, got: {pair!r}")
        return cls(prosign=prosign, alternate=alternate)


@dataclass(frozen=True)
class ProsignOccurrence:
    position: int  # index into the normalized reference
    token_length: int  # length of the prosign token at that position
    alternates: tuple[str, str]  # (prosign, alternate), both uppercased


def find_prosigns(
    normalized_reference: str, table: Iterable[ProsignMapping]
) -> list[ProsignOccurrence]:
    """Find every occurrence of every prosign in the normalized reference.

    Mappings are scanned in table order. After each hit the scan resumes one
    character later, so overlapping hits of the same prosign are all kept.
    The result is sorted by position; the sort is stable, so when several
    mappings hit the same position the earlier table entry comes first.
    """
    occurrences: list[ProsignOccurrence] = []

    for mapping in table:
        prosign = mapping.prosign.upper()
        alternate = mapping.alternate.upper()
        if not prosign:
            continue

        start = 0
        while True:
            pos = normalized_reference.find(prosign, start)
            if pos == -1:
                break
            occurrences.append(ProsignOccurrence(
                position=pos,
                token_length=len(prosign),
                alternates=(prosign, alternate),
            ))
            start = pos + 1

    occurrences.sort(key=lambda o: o.position)
    logger.debug("Found %d prosign occurrence(s)", len(occurrences))
    return occurrences
