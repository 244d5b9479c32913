"""Pydantic schemas for tests and their embedded questions."""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from quizapp.schemas.common import AnswerValue, CamelModel

TITLE_MAX_LENGTH = 200
PROMPT_MAX_LENGTH = 2000
MIN_CHOICES = 2


class QuestionBase(BaseModel):
    """Fields shared by every question type."""

    model_config = ConfigDict(extra="ignore")

    prompt: str = Field(..., max_length=PROMPT_MAX_LENGTH)
    answer: AnswerValue

    @field_validator("prompt")
    @classmethod
    def prompt_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("prompt must be non-empty")
        return value

    @field_validator("answer")
    @classmethod
    def answer_not_blank(cls, value):
        if isinstance(value, str) and not value.strip():
            raise ValueError("answer must be non-empty")
        return value


class MultipleChoiceQuestion(QuestionBase):
    type: Literal["multiple_choice"] = "multiple_choice"
    choices: list[str]

    @field_validator("choices")
    @classmethod
    def at_least_two_choices(cls, value: list[str]) -> list[str]:
        if len([choice for choice in value if choice.strip()]) < MIN_CHOICES:
            raise ValueError("Multiple choice questions need at least 2 non-blank choices")
        return value


class ShortAnswerQuestion(QuestionBase):
    type: Literal["short_answer"] = "short_answer"
    choices: list[str] | None = None


class NumericQuestion(QuestionBase):
    type: Literal["numeric"] = "numeric"
    choices: list[str] | None = None


class SpellingQuestion(QuestionBase):
    """The prompt is the word to pronounce; it is never shown to the student."""

    type: Literal["spelling"] = "spelling"
    choices: list[str] | None = None


Question = Annotated[
    Union[MultipleChoiceQuestion, ShortAnswerQuestion, NumericQuestion, SpellingQuestion],
    Field(discriminator="type"),
]


class TestDefinition(BaseModel):
    """Write payload for creating or replacing a test.

    An empty ``questions`` list is accepted here; it only makes the test unplayable.
    """

    model_config = ConfigDict(extra="ignore")

    title: str = Field(..., max_length=TITLE_MAX_LENGTH)
    subject: str | None = None
    grade: str | None = None
    questions: list[Question]

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("title must be non-empty")
        return value


class TestRecord(TestDefinition):
    """A stored test with its assigned id."""

    id: str


class TestCreated(BaseModel):
    id: str


class TestUpdated(CamelModel):
    id: str
    had_results: bool
    results_count: int
    purged: bool
    purged_count: int


class TestDeleted(CamelModel):
    purged_count: int
