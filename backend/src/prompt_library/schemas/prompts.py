from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


NAME_MAX_LENGTH = 255


class PromptItem(BaseModel):
    """A persisted prompt as exchanged between the server and the grid."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: int
    name: str
    description: str
    content: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_model(cls, prompt) -> "PromptItem":
        return cls(
            id=prompt.id,
            name=prompt.name,
            description=prompt.description,
            content=prompt.content,
            created_at=prompt.created_at,
            updated_at=prompt.updated_at,
        )


class PromptCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=NAME_MAX_LENGTH)
    description: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)


class PromptUpdateRequest(PromptCreateRequest):
    pass
