"""Pydantic schemas for graded attempts and their statistics."""

from pydantic import BaseModel, Field, model_validator

from quizapp.common.rounding import percentage_of
from quizapp.schemas.common import AnswerValue, CamelModel


class AnswerRecord(CamelModel):
    question_index: int = Field(..., ge=0)
    answer: AnswerValue | None = None
    is_correct: bool


class ResultData(CamelModel):
    """A grading outcome as accepted by ``ResultRepository.save``."""

    correct: int = Field(..., ge=0)
    total: int = Field(..., ge=0)
    percentage: int = Field(..., ge=0, le=100)
    answers: list[AnswerRecord] = Field(default_factory=list)

    @model_validator(mode="after")
    def consistent_outcome(self) -> "ResultData":
        if self.correct > self.total:
            raise ValueError("correct must not exceed total")
        expected = percentage_of(self.correct, self.total)
        if self.percentage != expected:
            raise ValueError(f"percentage must be {expected} for {self.correct}/{self.total}")
        if self.answers and len(self.answers) != self.total:
            raise ValueError("answers must hold one entry per question")
        return self


class ResultRecord(ResultData):
    """An archived attempt. Never mutated after it is written."""

    result_id: str
    test_id: str
    # Kept as the raw string; records with a missing or malformed stamp still list.
    timestamp: str | None = None


class ResultStatistics(BaseModel):
    total: int = 0
    average: int = 0
    highest: int = 0
    lowest: int = 0


class ResultListing(BaseModel):
    results: list[ResultRecord]
    statistics: ResultStatistics


class AttemptSubmission(BaseModel):
    """Raw answers in question order; missing trailing answers count as blank."""

    answers: list[AnswerValue | None]


class ResultCreated(CamelModel):
    result_id: str


class ResultCount(BaseModel):
    count: int
