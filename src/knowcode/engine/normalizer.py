"""Text normalization for copy and answer comparison."""

from __future__ import annotations


def normalize_text(text: str) -> str:
    """Normalize copy text for comparison: uppercase, collapse whitespace, trim.

    Splitting on any whitespace run and rejoining with single spaces drops
    leading and trailing whitespace too, so the result is idempotent.
    """
    return " ".join(text.upper().split())


def normalize_choice(choice: str) -> str:
    """Normalize a multiple-choice answer letter for comparison."""
    return choice.strip().upper()


def choices_match(guess: str, correct: str) -> bool:
    """Check if a multiple-choice guess matches the correct answer."""
    return normalize_choice(guess) == normalize_choice(correct)
