"""Skin quiz schemas: answers, questions, score bands and submitted quizzes"""

from typing import Optional

from pydantic import AliasChoices, Field, field_validator, model_validator

from ...shared.schemas import ApiModel, DocumentResponse
from ...shared.validators import validate_reference_id, validate_required_text
from ..services.schemas import ServiceResponse


def _validate_id_list(ids: Optional[list[str]]) -> Optional[list[str]]:
    if ids is None:
        return ids
    return [validate_reference_id(item) for item in ids]


# ============================================================================
# ANSWERS
# ============================================================================


class AnswerCreate(ApiModel):
    title: str
    image: str
    point: float

    @field_validator("title", "image")
    @classmethod
    def not_blank(cls, v):
        return validate_required_text(v)


class AnswerUpdate(ApiModel):
    title: Optional[str] = None
    image: Optional[str] = None
    point: Optional[float] = None

    @field_validator("title", "image")
    @classmethod
    def not_blank(cls, v):
        return validate_required_text(v)


class AnswerResponse(DocumentResponse):
    title: str
    image: str
    point: float


# ============================================================================
# QUESTIONS
# ============================================================================


class QuestionCreate(ApiModel):
    question: str
    answer_id: list[str] = []

    @field_validator("question")
    @classmethod
    def not_blank(cls, v):
        return validate_required_text(v)

    @field_validator("answer_id")
    @classmethod
    def validate_answer_ids(cls, v):
        return _validate_id_list(v)


class QuestionUpdate(ApiModel):
    question: Optional[str] = None
    answer_id: Optional[list[str]] = None

    @field_validator("question")
    @classmethod
    def not_blank(cls, v):
        return validate_required_text(v)

    @field_validator("answer_id")
    @classmethod
    def validate_answer_ids(cls, v):
        return _validate_id_list(v)


class QuestionResponse(DocumentResponse):
    """Question with its answers expanded under ``answerId``"""

    question: str
    answer_id: list[AnswerResponse] = Field(
        default=[], validation_alias=AliasChoices("answers", "answerId", "answer_id")
    )


# ============================================================================
# SCORE BANDS
# ============================================================================


class RoadmapStepIn(ApiModel):
    service_id: str
    estimate: str

    @field_validator("service_id")
    @classmethod
    def validate_service_id(cls, v):
        return validate_reference_id(v)

    @field_validator("estimate")
    @classmethod
    def not_blank(cls, v):
        return validate_required_text(v)


class RoadmapStepResponse(ApiModel):
    service_id: str
    service: Optional[ServiceResponse] = None
    estimate: str


class ScorebandCreate(ApiModel):
    min_point: float
    max_point: float
    type_of_skin: str
    skin_explanation: str
    roadmap: list[RoadmapStepIn] = []

    @field_validator("type_of_skin", "skin_explanation")
    @classmethod
    def not_blank(cls, v):
        return validate_required_text(v)

    @model_validator(mode="after")
    def check_range(self):
        if self.min_point > self.max_point:
            raise ValueError("minPoint must not exceed maxPoint")
        return self


class ScorebandUpdate(ApiModel):
    min_point: Optional[float] = None
    max_point: Optional[float] = None
    type_of_skin: Optional[str] = None
    skin_explanation: Optional[str] = None
    roadmap: Optional[list[RoadmapStepIn]] = None

    @field_validator("type_of_skin", "skin_explanation")
    @classmethod
    def not_blank(cls, v):
        return validate_required_text(v)


class ScorebandResponse(DocumentResponse):
    min_point: float
    max_point: float
    type_of_skin: str
    skin_explanation: str
    roadmap: list[RoadmapStepResponse] = []


# ============================================================================
# USER QUIZZES
# ============================================================================


class QuestionResultIn(ApiModel):
    question_id: str
    answer_id: list[str] = Field(min_length=1)

    @field_validator("question_id")
    @classmethod
    def validate_question_id(cls, v):
        return validate_reference_id(v)

    @field_validator("answer_id")
    @classmethod
    def validate_answer_ids(cls, v):
        return _validate_id_list(v)


class QuestionResultResponse(ApiModel):
    question_id: str
    answer_id: list[str] = []


class UserQuizCreate(ApiModel):
    """Submitted quiz; the total is computed by the client"""

    score_band_id: str
    total_point: float
    question_result: list[QuestionResultIn] = []

    @field_validator("score_band_id")
    @classmethod
    def validate_score_band_id(cls, v):
        return validate_reference_id(v)


class UserQuizUpdate(ApiModel):
    score_band_id: Optional[str] = None
    total_point: Optional[float] = None
    question_result: Optional[list[QuestionResultIn]] = None

    @field_validator("score_band_id")
    @classmethod
    def validate_score_band_id(cls, v):
        return validate_reference_id(v)


class UserQuizResponse(DocumentResponse):
    account_id: str
    score_band_id: str
    scoreband: Optional[ScorebandResponse] = None
    total_point: float
    question_result: list[QuestionResultResponse] = []
