from __future__ import annotations

from dataclasses import dataclass, replace

from ..schemas.prompts import PromptItem


@dataclass(frozen=True)
class Draft:
    """Unsaved field values of the editor dialog."""

    name: str = ""
    description: str = ""
    content: str = ""

    @classmethod
    def from_prompt(cls, prompt: PromptItem) -> "Draft":
        return cls(name=prompt.name, description=prompt.description, content=prompt.content)

    def with_name(self, value: str) -> "Draft":
        return replace(self, name=value)

    def with_description(self, value: str) -> "Draft":
        return replace(self, description=value)

    def with_content(self, value: str) -> "Draft":
        return replace(self, content=value)

    @property
    def is_complete(self) -> bool:
        return all(value.strip() for value in (self.name, self.description, self.content))


@dataclass(frozen=True)
class Closed:
    pass


@dataclass(frozen=True)
class Creating:
    pass


@dataclass(frozen=True)
class Editing:
    prompt_id: int


@dataclass(frozen=True)
class ConfirmingDelete:
    prompt_id: int


DialogState = Closed | Creating | Editing | ConfirmingDelete

CLOSED = Closed()
