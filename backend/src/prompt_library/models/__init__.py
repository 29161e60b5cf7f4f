from .prompt import Prompt

__all__ = [
    "Prompt",
]
