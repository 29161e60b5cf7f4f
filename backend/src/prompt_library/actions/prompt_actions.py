"""Server-side prompt actions consumed by the prompt grid.

``PromptActions`` is the contract the grid controller depends on. The local
implementation runs the service layer in-process; the HTTP implementation
lives in ``integrations.prompts_api_client``.
"""

from __future__ import annotations

import logging
from typing import Callable, Protocol, TypeVar

import anyio.to_thread
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.database import session_scope
from ..repositories.prompt_repository import PromptRepository
from ..schemas.prompts import PromptItem
from ..services.prompt_service import PromptNotFoundError, PromptService


log = logging.getLogger("promptlib.actions.prompts")

T = TypeVar("T")


class PromptActionError(Exception):
    """A failed prompt action, carrying a message fit for display."""

    def __init__(self, message: str, *, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def __str__(self) -> str:
        return self.message


class PromptActions(Protocol):
    async def list_prompts(self) -> list[PromptItem]: ...

    async def create_prompt(self, *, name: str, description: str, content: str) -> PromptItem: ...

    async def update_prompt(
        self, prompt_id: int, *, name: str, description: str, content: str
    ) -> PromptItem: ...

    async def delete_prompt(self, prompt_id: int) -> None: ...


class LocalPromptActions:
    """Run prompt actions against the database in a worker thread.

    Every call is its own transaction.
    """

    def __init__(self, session_factory: Callable[[], Session] | None = None):
        self._session_factory = session_factory

    async def list_prompts(self) -> list[PromptItem]:
        def _work(service: PromptService) -> list[PromptItem]:
            return [PromptItem.from_model(item) for item in service.list_prompts()]

        return await self._run(_work)

    async def create_prompt(self, *, name: str, description: str, content: str) -> PromptItem:
        def _work(service: PromptService) -> PromptItem:
            prompt = service.create_prompt(name=name, description=description, content=content)
            return PromptItem.from_model(prompt)

        return await self._run(_work)

    async def update_prompt(
        self, prompt_id: int, *, name: str, description: str, content: str
    ) -> PromptItem:
        def _work(service: PromptService) -> PromptItem:
            prompt = service.update_prompt(prompt_id, name=name, description=description, content=content)
            return PromptItem.from_model(prompt)

        return await self._run(_work)

    async def delete_prompt(self, prompt_id: int) -> None:
        def _work(service: PromptService) -> None:
            service.delete_prompt(prompt_id)

        await self._run(_work)

    async def _run(self, work: Callable[[PromptService], T]) -> T:
        return await anyio.to_thread.run_sync(self._in_transaction, work)

    def _in_transaction(self, work: Callable[[PromptService], T]) -> T:
        try:
            with session_scope(self._session_factory) as session:
                return work(PromptService(PromptRepository(session)))
        except PromptNotFoundError as exc:
            raise PromptActionError(str(exc), status_code=404) from exc
        except ValueError as exc:
            raise PromptActionError(str(exc), status_code=400) from exc
        except SQLAlchemyError as exc:
            log.error("Prompt action failed at the database layer", exc_info=True)
            raise PromptActionError("The prompt store is unavailable.", status_code=503) from exc
