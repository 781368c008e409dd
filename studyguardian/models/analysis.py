from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Language(str, Enum):
    ENGLISH = "english"
    ARABIC = "arabic"


class InlineDocument(BaseModel):
    kind: Literal["document"] = "document"
    data: bytes
    mime_type: str  # "application/pdf" or "image/*"


class PlainText(BaseModel):
    kind: Literal["text"] = "text"
    text: str


class AnalysisRequest(BaseModel):
    content: Annotated[Union[InlineDocument, PlainText], Field(discriminator="kind")]
    language: Language = Language.ENGLISH


class ModelReply(BaseModel):
    text: str
    model: str


def _flatten(value) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, list):
        return "\n".join(f"- {_flatten(v)}" for v in value)
    if isinstance(value, dict):
        return "\n".join(f"**{k}**: {_flatten(v)}" for k, v in value.items())
    return str(value)


class AnalysisResult(BaseModel):
    """Study guide produced by one analysis run. Serialized with camelCase keys."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    summary: str = ""
    exam_questions: list[str] = Field(default_factory=list, alias="examQuestions")
    explanation: str = ""
    study_plan: str = Field(default="", alias="studyPlan")
    used_model: str = Field(default="", alias="usedModel")

    @field_validator("summary", "explanation", "study_plan", "used_model", mode="before")
    @classmethod
    def _coerce_text(cls, value):
        return _flatten(value)

    @field_validator("exam_questions", mode="before")
    @classmethod
    def _normalize_questions(cls, value):
        if value is None:
            return []
        if isinstance(value, str):
            value = [value]
        elif not isinstance(value, list):
            value = [value]
        questions = []
        for item in value:
            if isinstance(item, dict):
                # Some replies wrap each question: {"question": "..."}
                item = item.get("question") or next(iter(item.values()), "")
            text = _flatten(item).strip()
            if text:
                questions.append(text)
        return questions
