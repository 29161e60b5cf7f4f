from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from ..models.prompt import Prompt


log = logging.getLogger("promptlib.repositories.prompt")


class PromptRepository:
    def __init__(self, session: Session):
        self.session = session

    def list_prompts(self) -> list[Prompt]:
        prompts = (
            self.session.query(Prompt)
            .order_by(Prompt.created_at.desc(), Prompt.id.desc())
            .all()
        )
        log.debug("Loaded %d prompts", len(prompts))
        return prompts

    def get(self, prompt_id: int) -> Prompt | None:
        return self.session.get(Prompt, prompt_id)

    def add(self, *, name: str, description: str, content: str) -> Prompt:
        prompt = Prompt(name=name, description=description, content=content)
        self.session.add(prompt)
        self.session.flush()
        log.info("Prompt created (id=%s, name=%s)", prompt.id, name)
        return prompt

    def update(self, prompt: Prompt, *, name: str, description: str, content: str) -> Prompt:
        prompt.name = name
        prompt.description = description
        prompt.content = content
        self.session.flush()
        log.info("Prompt updated (id=%s, name=%s)", prompt.id, name)
        return prompt

    def delete(self, prompt: Prompt) -> None:
        prompt_id = prompt.id
        self.session.delete(prompt)
        self.session.flush()
        log.info("Prompt deleted (id=%s)", prompt_id)
