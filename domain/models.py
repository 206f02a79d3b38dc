from enum import Enum
from typing import Any, Iterable

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Source(Enum):
    local = "local"
    external = "external"


class RecipeAnswer(BaseModel):
    """What the client gets back as `answer`."""

    model_config = ConfigDict(frozen=True)

    name: str
    ingredients: list[str] = Field(default_factory=list)
    steps: list[str] = Field(default_factory=list)


class RecipeRecord:
    def __init__(
        self,
        *,
        id: str,
        name: str,
        tags: Iterable[str] = (),
        ingredients: Iterable[str] = (),
        steps: Iterable[str] = (),
    ) -> None:
        self.id = id
        self.name = name
        # Ordered set.
        self.tags = tuple(dict.fromkeys(tags))
        self.ingredients = tuple(ingredients)
        self.steps = tuple(steps)

    def __repr__(self) -> str:
        return f"<RecipeRecord(id={self.id}, name={self.name})>"

    @property
    def answer(self) -> RecipeAnswer:
        return RecipeAnswer(
            name=self.name,
            ingredients=list(self.ingredients),
            steps=list(self.steps),
        )


class QueryResult(BaseModel):
    """Either an answer with its source or an error, never both."""

    transcript: str | None = None
    answer: RecipeAnswer | None = None
    source: Source | None = None
    error: str | None = None
    status_code: int = Field(default=200, exclude=True)

    @model_validator(mode="after")
    def answer_or_error(self) -> "QueryResult":
        if (self.answer is None) == (self.error is None):
            raise ValueError("Exactly one of answer and error must be set.")
        if (self.answer is None) != (self.source is None):
            raise ValueError("An answer needs a source, an error has none.")
        return self

    @classmethod
    def found(
        cls, transcript: str, answer: RecipeAnswer, source: Source
    ) -> "QueryResult":
        return cls(transcript=transcript, answer=answer, source=source)

    @classmethod
    def failed(
        cls, error: str, *, transcript: str | None = None, status_code: int = 200
    ) -> "QueryResult":
        return cls(transcript=transcript, error=error, status_code=status_code)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)
