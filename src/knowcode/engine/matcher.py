"""Longest consecutive-correct search for copy-text grading.

Every start offset in the reference is aligned against every start offset in
the submission, and the longest run of one-for-one matching characters wins.
A prosign in the reference matches either the prosign itself or its
alternate in the submission.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence

from knowcode.engine.normalizer import normalize_text
from knowcode.engine.prosigns import ProsignMapping, ProsignOccurrence, find_prosigns

logger = logging.getLogger(__name__)


def _occurrence_at(
    occurrences: Sequence[ProsignOccurrence], position: int
) -> Optional[ProsignOccurrence]:
    # First hit wins when several mappings share a position.
    for occurrence in occurrences:
        if occurrence.position == position:
            return occurrence
    return None


def count_consecutive_matches(
    user: str,
    user_start: int,
    expected: str,
    expected_start: int,
    occurrences: Sequence[ProsignOccurrence],
) -> int:
    """Count matching characters from one alignment until the first mismatch."""
    user_pos = user_start
    exp_pos = expected_start
    count = 0

    while user_pos < len(user) and exp_pos < len(expected):
        occurrence = _occurrence_at(occurrences, exp_pos)
        if occurrence is not None:
            for alt in occurrence.alternates:
                if user.startswith(alt, user_pos):
                    count += len(alt)
                    user_pos += len(alt)
                    exp_pos += occurrence.token_length
                    break
            else:
                break
            continue

        if user[user_pos] != expected[exp_pos]:
            break
        count += 1
        user_pos += 1
        exp_pos += 1

    return count


def find_consecutive_correct(
    user_text: str,
    expected_text: str,
    table: Iterable[ProsignMapping] = (),
) -> int:
    """Return the longest run of consecutively correct characters.

    Both texts are normalized first. Returns 0 if either is empty.
    """
    user = normalize_text(user_text)
    expected = normalize_text(expected_text)
    if not user or not expected:
        return 0

    occurrences = find_prosigns(expected, table)

    best = 0
    for exp_start in range(len(expected)):
        for user_start in range(len(user)):
            # A run never counts more characters than the submission has left.
            if len(user) - user_start <= best:
                break
            run = count_consecutive_matches(
                user, user_start, expected, exp_start, occurrences
            )
            if run > best:
                best = run
        if best == len(user):
            break

    logger.debug(
        "Consecutive correct: %d (user=%d chars, expected=%d chars, prosigns=%d)",
        best, len(user), len(expected), len(occurrences),
    )
    return best
