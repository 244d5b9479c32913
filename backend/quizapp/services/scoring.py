"""Answer checking and attempt scoring.

Pure functions: no I/O, same inputs always give the same outcome.

Equality rule per question:
1. both values are numbers -> exact numeric equality;
2. the question is ``numeric`` -> both sides must parse as decimal literals and be equal;
3. otherwise -> case-insensitive comparison of the whitespace-trimmed text.

Decimal literal grammar (after trimming): ``[+-]?(digits[.digits?] | .digits)([eE][+-]?digits)?``.
Hex, ``inf``/``nan``, underscores and the empty string are not numbers.
"""

from __future__ import annotations

import math
import re
from collections.abc import Sequence
from dataclasses import dataclass, field

from quizapp.common.rounding import percentage_of
from quizapp.schemas.quiz import Question
from quizapp.schemas.result import AnswerRecord, ResultData

_DECIMAL_LITERAL = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")
_INTEGER_LITERAL = re.compile(r"[+-]?\d+")
# Stays under the interpreter's int/str conversion limit (4300 digits).
_MAX_INTEGER_DIGITS = 4000


def is_number(value: object) -> bool:
    """True for ints and finite floats; bools are not numbers."""
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, float) and math.isfinite(value)


def parse_number(value: object) -> int | float | None:
    """Coerce a number or a decimal-literal string to int/float, else None.

    Integer literals stay ints so arbitrarily large values compare exactly.
    """
    if is_number(value):
        return value
    if isinstance(value, str):
        text = value.strip()
        if _INTEGER_LITERAL.fullmatch(text) and len(text) <= _MAX_INTEGER_DIGITS:
            return int(text)
        if _DECIMAL_LITERAL.fullmatch(text):
            parsed = float(text)
            if math.isfinite(parsed):
                return parsed
    return None


def _as_text(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        # 4.0 reads as "4", matching what the student would have typed
        return str(int(value))
    return str(value)


def answers_match(question_type: str, submitted: object, canonical: object) -> bool:
    """Apply the type-aware equality rule to one submitted answer."""
    if is_number(submitted) and is_number(canonical):
        # int/float comparison is exact and never overflows
        return submitted == canonical

    if question_type == "numeric":
        left = parse_number(submitted)
        right = parse_number(canonical)
        return left is not None and right is not None and left == right

    return _as_text(submitted).strip().lower() == _as_text(canonical).strip().lower()


@dataclass(frozen=True)
class ScoreOutcome:
    correct: int
    total: int
    per_question: list[AnswerRecord] = field(default_factory=list)

    @property
    def percentage(self) -> int:
        return percentage_of(self.correct, self.total)

    def to_result_data(self) -> ResultData:
        return ResultData(
            correct=self.correct,
            total=self.total,
            percentage=self.percentage,
            answers=list(self.per_question),
        )


def score(questions: Sequence[Question], submitted_answers: Sequence[object]) -> ScoreOutcome:
    """Score submitted answers against a test's questions.

    ``total`` is the number of questions. Answers are paired by position; a missing
    answer is scored as blank and extra answers are ignored.
    """
    per_question: list[AnswerRecord] = []
    correct = 0
    for index, question in enumerate(questions):
        submitted = submitted_answers[index] if index < len(submitted_answers) else ""
        is_correct = answers_match(question.type, submitted, question.answer)
        if is_correct:
            correct += 1
        per_question.append(
            AnswerRecord(
                question_index=index,
                answer=submitted,
                is_correct=is_correct,
            )
        )
    return ScoreOutcome(correct=correct, total=len(questions), per_question=per_question)
