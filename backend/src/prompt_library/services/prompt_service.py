from __future__ import annotations

import logging

from ..models.prompt import Prompt
from ..repositories.prompt_repository import PromptRepository
from ..schemas.prompts import NAME_MAX_LENGTH
from ..search import filter_prompts


log = logging.getLogger("promptlib.services.prompt_service")


class PromptNotFoundError(KeyError):
    def __init__(self, prompt_id: int):
        super().__init__(prompt_id)
        self.prompt_id = prompt_id

    def __str__(self) -> str:
        return f"Prompt not found: {self.prompt_id}"


class PromptService:
    """Validation and lookup rules on top of :class:`PromptRepository`.

    Raises ``PromptNotFoundError`` for unknown ids and ``ValueError`` for
    invalid field values; callers own the transaction (commit/rollback).
    """

    def __init__(self, repo: PromptRepository):
        self.repo = repo

    def list_prompts(self, *, query: str | None = None) -> list[Prompt]:
        return filter_prompts(self.repo.list_prompts(), query)

    def get_prompt(self, prompt_id: int) -> Prompt:
        prompt = self.repo.get(prompt_id)
        if prompt is None:
            raise PromptNotFoundError(prompt_id)
        return prompt

    def create_prompt(self, *, name: str, description: str, content: str) -> Prompt:
        fields = self._clean_fields(name=name, description=description, content=content)
        return self.repo.add(**fields)

    def update_prompt(self, prompt_id: int, *, name: str, description: str, content: str) -> Prompt:
        prompt = self.get_prompt(prompt_id)
        fields = self._clean_fields(name=name, description=description, content=content)
        return self.repo.update(prompt, **fields)

    def delete_prompt(self, prompt_id: int) -> None:
        prompt = self.get_prompt(prompt_id)
        self.repo.delete(prompt)

    @staticmethod
    def _clean_fields(*, name: str, description: str, content: str) -> dict[str, str]:
        name_txt = name.strip() if isinstance(name, str) else ""
        description_txt = description.strip() if isinstance(description, str) else ""
        if not name_txt:
            raise ValueError("Name is required.")
        if len(name_txt) > NAME_MAX_LENGTH:
            raise ValueError(f"Name must be at most {NAME_MAX_LENGTH} characters.")
        if not description_txt:
            raise ValueError("Description is required.")
        # Content keeps its formatting; only reject blank templates
        if not isinstance(content, str) or not content.strip():
            raise ValueError("Content is required.")
        return {"name": name_txt, "description": description_txt, "content": content}
