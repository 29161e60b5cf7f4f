"""Case-insensitive substring search over prompt text fields."""

from __future__ import annotations

from typing import Iterable, Protocol, Sequence, TypeVar


class _Searchable(Protocol):
    name: str
    description: str
    content: str


T = TypeVar("T", bound=_Searchable)

SEARCH_FIELDS = ("name", "description", "content")


def matches_query(prompt: _Searchable, query: str) -> bool:
    if not query:
        return True
    needle = query.casefold()
    return any(needle in (getattr(prompt, field) or "").casefold() for field in SEARCH_FIELDS)


def filter_prompts(prompts: Iterable[T], query: str | None) -> list[T]:
    """Return the prompts matching ``query`` in their existing order.

    An empty or missing query keeps every prompt.
    """
    items: Sequence[T] = list(prompts)
    if not query:
        return list(items)
    return [item for item in items if matches_query(item, query)]
