"""Adapters that turn a resource client into cache fetchers."""

from collections.abc import Awaitable, Callable
from typing import Any

from masterdesk.cache.models import Option, QueryKey
from masterdesk.client.resources import ResourceAPI

Fetcher = Callable[[QueryKey], Awaitable[Any]]


def _default_label(entity: Any) -> str:
    return str(entity.name)


def _default_value(entity: Any) -> str:
    return str(entity.id)


def option_fetcher(
    resource: ResourceAPI[Any],
    label: Callable[[Any], str] = _default_label,
    value: Callable[[Any], str] = _default_value,
) -> Fetcher:
    """Fetcher that lists a resource and projects the entities to options.

    Detail keys are delegated to ``resource.get`` so one registration
    serves both the selector and the edit forms.
    """

    async def fetch(key: QueryKey) -> Any:
        if key.entity_id is not None:
            return await resource.get(key.entity_id)
        entities = await resource.list(key.filter_text)
        return tuple(Option(label=label(e), value=value(e)) for e in entities)

    return fetch


def detail_fetcher(resource: ResourceAPI[Any]) -> Fetcher:
    """Fetcher for resources that are only ever loaded one entity at a time."""

    async def fetch(key: QueryKey) -> Any:
        if key.entity_id is None:
            return tuple(await resource.list(key.filter_text))
        return await resource.get(key.entity_id)

    return fetch
