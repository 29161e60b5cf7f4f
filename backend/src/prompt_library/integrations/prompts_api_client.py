from __future__ import annotations

import logging
from typing import Any

import httpx

from ..actions.prompt_actions import PromptActionError
from ..schemas.prompts import PromptItem


log = logging.getLogger("promptlib.integrations.prompts_api")


def _error_message(response: httpx.Response) -> str:
    """Extract a readable message from a FastAPI error payload."""
    fallback = f"Request failed ({response.status_code})"
    try:
        payload = response.json()
    except ValueError:
        return response.text.strip() or fallback
    detail = payload.get("detail") if isinstance(payload, dict) else None
    if isinstance(detail, str) and detail.strip():
        return detail
    if isinstance(detail, list) and detail:
        first = detail[0]
        if isinstance(first, dict):
            loc = [str(part) for part in first.get("loc", []) if part != "body"]
            msg = str(first.get("msg") or "").strip()
            if msg:
                return f"{'.'.join(loc)}: {msg}" if loc else msg
    return fallback


class PromptsApiClient:
    """Prompt actions backed by the REST API (``/api/v1/prompts``)."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout_s: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=httpx.Timeout(timeout=timeout_s, connect=5),
            transport=transport,
        )

    async def __aenter__(self) -> "PromptsApiClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def list_prompts(self) -> list[PromptItem]:
        response = await self._request("GET", "/prompts")
        return [PromptItem.model_validate(item) for item in response.json()]

    async def create_prompt(self, *, name: str, description: str, content: str) -> PromptItem:
        response = await self._request(
            "POST",
            "/prompts",
            json={"name": name, "description": description, "content": content},
        )
        return PromptItem.model_validate(response.json())

    async def update_prompt(
        self, prompt_id: int, *, name: str, description: str, content: str
    ) -> PromptItem:
        response = await self._request(
            "PUT",
            f"/prompts/{prompt_id}",
            json={"name": name, "description": description, "content": content},
        )
        return PromptItem.model_validate(response.json())

    async def delete_prompt(self, prompt_id: int) -> None:
        await self._request("DELETE", f"/prompts/{prompt_id}")

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.ConnectError as exc:
            log.error("Prompts API unreachable at %s: %s", self._client.base_url, exc)
            raise PromptActionError("Could not reach the prompts service.") from exc
        except httpx.HTTPError as exc:
            log.error("Prompts API request failed (%s %s): %s", method, path, exc)
            raise PromptActionError("The prompts service request failed.") from exc
        if response.is_error:
            message = _error_message(response)
            log.info("Prompts API error %s on %s %s: %s", response.status_code, method, path, message)
            raise PromptActionError(message, status_code=response.status_code)
        return response
