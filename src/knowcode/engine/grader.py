"""Grading of multiple-choice answers and copy text for a test submission."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Mapping, Optional

from knowcode.config.settings import Settings
from knowcode.engine.loader import Submission, TestKey
from knowcode.engine.matcher import find_consecutive_correct
from knowcode.engine.normalizer import choices_match, normalize_text
from knowcode.errors import InputTooLongError

logger = logging.getLogger(__name__)


@dataclass
class MatchResult:
    question_id: str
    correct: bool
    user_answer: Optional[str]
    correct_answer: str


@dataclass
class CopyResult:
    consecutive_correct: int
    normalized_length: int
    passed: bool
    rejected: bool = False  # copy exceeded the length limit and was not graded


@dataclass
class SubmissionResult:
    callsign: str
    test_id: str
    passed: bool
    score: int
    passing_score: int
    copy: CopyResult
    question_results: list[MatchResult] = field(default_factory=list)
    correct_answers: Optional[dict[str, str]] = None  # only revealed on pass

    def to_dict(self) -> dict:
        return {
            "callsign": self.callsign,
            "testId": self.test_id,
            "passed": self.passed,
            "score": self.score,
            "passingScore": self.passing_score,
            "consecutiveCorrect": self.copy.consecutive_correct,
            "copyPassed": self.copy.passed,
            "copyRejected": self.copy.rejected,
            "normalizedLength": self.copy.normalized_length,
            "questionResults": [
                {
                    "questionId": r.question_id,
                    "correct": r.correct,
                    "userAnswer": r.user_answer,
                    "correctAnswer": r.correct_answer,
                }
                for r in self.question_results
            ],
            "correctAnswers": self.correct_answers,
        }


def grade_questions(
    answers: Mapping[str, str], correct_answers: Mapping[str, str]
) -> tuple[int, list[MatchResult]]:
    """Score multiple-choice answers against the key.

    The key decides which questions exist; a missing answer is wrong.
    """
    score = 0
    results: list[MatchResult] = []
    for question_id, correct in correct_answers.items():
        user_answer = answers.get(question_id)
        is_correct = user_answer is not None and choices_match(user_answer, correct)
        if is_correct:
            score += 1
        results.append(MatchResult(
            question_id=question_id,
            correct=is_correct,
            user_answer=user_answer,
            correct_answer=correct,
        ))
    return score, results


class Grader:
    """Applies the configured pass policy on top of the matching engine."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or Settings.load()

    def _check_length(self, name: str, text: str) -> None:
        # Whitespace runs count once, as they do when matching.
        limit = self.settings.grading.max_text_length
        length = len(normalize_text(text))
        if length > limit:
            raise InputTooLongError(name, length, limit)

    def grade_copy(self, user_text: str, expected_text: str) -> CopyResult:
        self._check_length("copy_text", user_text)
        self._check_length("reference_text", expected_text)

        consecutive = find_consecutive_correct(
            user_text, expected_text, self.settings.prosign_table()
        )
        return CopyResult(
            consecutive_correct=consecutive,
            normalized_length=len(normalize_text(user_text)),
            passed=consecutive >= self.settings.grading.copy_pass_chars,
        )

    def grade_submission(self, submission: Submission, test: TestKey) -> SubmissionResult:
        """Grade questions and copy text; either one passing passes the test.

        An over-long copy is not graded and scores 0, so the questions still
        count. An over-long reference text raises ``InputTooLongError``.
        """
        self._check_length("reference_text", test.reference_text)
        passing_score = test.passing_score
        if passing_score is None:
            passing_score = self.settings.grading.question_pass_score

        score, question_results = grade_questions(submission.answers, test.correct_answers)
        copy_text = submission.copy_text or ""
        try:
            copy = self.grade_copy(copy_text, test.reference_text)
        except InputTooLongError as e:
            logger.warning("Copy from %s not graded: %s", submission.callsign, e)
            copy = CopyResult(
                consecutive_correct=0,
                normalized_length=e.length,
                passed=False,
                rejected=True,
            )

        passed = score >= passing_score or copy.passed
        logger.info(
            "Graded %s on %s: score=%d/%d consecutive=%d passed=%s",
            submission.callsign, test.test_id, score, passing_score,
            copy.consecutive_correct, passed,
        )
        return SubmissionResult(
            callsign=submission.callsign,
            test_id=test.test_id,
            passed=passed,
            score=score,
            passing_score=passing_score,
            copy=copy,
            question_results=question_results,
            correct_answers=dict(test.correct_answers) if passed else None,
        )
