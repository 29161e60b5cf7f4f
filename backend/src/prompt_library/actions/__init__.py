from __future__ import annotations

from ..core.config import settings
from .prompt_actions import LocalPromptActions, PromptActionError, PromptActions


def build_prompt_actions() -> PromptActions:
    """Return the actions backend selected by ``PROMPTS_BACKEND``."""
    if settings.prompts_backend == "http":
        from ..integrations.prompts_api_client import PromptsApiClient

        return PromptsApiClient(
            settings.prompts_api_base_url,
            timeout_s=settings.prompts_api_timeout_s,
        )
    return LocalPromptActions()


__all__ = [
    "LocalPromptActions",
    "PromptActionError",
    "PromptActions",
    "build_prompt_actions",
]
