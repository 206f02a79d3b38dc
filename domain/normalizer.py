"""Turn whatever the recipe webhook sends back into a `RecipeAnswer`.

Workflows answer in a few different shapes. Each shape is a model, tried in
order, and the first one that validates wins:

1. ``{"answer": {"name": ..., "ingredients": ..., "steps": ...}}``
2. ``{"name": ..., "steps": "..." | [...], "ingredients": [...]}``
3. ``{"output": "free text ..."}`` (or one of the other `TEXT_KEYS`)

In the first two, `steps` and `ingredients` may be a list, a bare string or
null.
"""

import re
from typing import Any

from pydantic import BaseModel, ValidationError, model_validator

from domain.models import RecipeAnswer


TEXT_KEYS = ("output", "text", "answer", "message", "result", "reply")
FREE_TEXT_NAME = "Suggested recipe"
BLANK_LINE = re.compile(r"\n\s*\n")


Lines = list[str] | str | None


def as_list(value: Lines) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    return value


class LooseAnswer(BaseModel):
    name: str
    ingredients: Lines = None
    steps: Lines = None

    def to_answer(self) -> RecipeAnswer:
        return RecipeAnswer(
            name=self.name,
            ingredients=as_list(self.ingredients),
            steps=as_list(self.steps),
        )


class NestedAnswer(BaseModel):
    answer: LooseAnswer

    def to_answer(self) -> RecipeAnswer:
        return self.answer.to_answer()


class FlatAnswer(BaseModel):
    name: str
    steps: list[str] | str
    ingredients: Lines = None

    def to_answer(self) -> RecipeAnswer:
        return RecipeAnswer(
            name=self.name,
            ingredients=as_list(self.ingredients),
            steps=as_list(self.steps),
        )


class FreeTextAnswer(BaseModel):
    text: str

    @model_validator(mode="before")
    @classmethod
    def first_text_field(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        for key in TEXT_KEYS:
            value = data.get(key)
            if isinstance(value, str) and value.strip():
                return {"text": value}
        return {}

    def to_answer(self) -> RecipeAnswer:
        steps = [part.strip() for part in BLANK_LINE.split(self.text)]
        return RecipeAnswer(
            name=FREE_TEXT_NAME,
            ingredients=[],
            steps=[s for s in steps if s],
        )


SHAPES: tuple[type[NestedAnswer | FlatAnswer | FreeTextAnswer], ...] = (
    NestedAnswer,
    FlatAnswer,
    FreeTextAnswer,
)


def normalize_answer(payload: Any) -> RecipeAnswer | None:
    if not isinstance(payload, dict):
        return None

    for shape in SHAPES:
        try:
            parsed = shape.model_validate(payload)
        except ValidationError:
            continue
        return parsed.to_answer()
    return None
