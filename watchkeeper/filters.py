"""Predicates that decide which containers are considered for updates."""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Sequence
from typing import Any, Optional

Filter = Callable[[Any], bool]

_log = logging.getLogger(__name__)


def watchtower_containers_filter(container: Any) -> bool:
    """Keep only watchtower containers."""
    return container.is_watchtower()


def no_filter(container: Any) -> bool:
    """Keep every container, whatever it is; nothing on it is inspected."""
    return isinstance(container, object)


def _name_matches(pattern: str, name: str) -> bool:
    if pattern == name or pattern == name[1:]:
        return True
    try:
        regex = re.compile(pattern)
    except re.error:
        return False
    match = regex.search(name)
    if match is None:
        return False
    return match.start() <= 1 and match.end() >= len(name) - 1


def filter_by_names(names: Optional[Sequence[str]], base_filter: Optional[Filter]) -> Optional[Filter]:
    """Keep containers whose name equals, or fully matches as a pattern, one of ``names``.

    The leading slash of a container name may be left out. Without names,
    ``base_filter`` is returned unchanged.
    """
    if not names:
        return base_filter
    wanted = list(names)

    def by_names(container: Any) -> bool:
        name = container.name()
        if any(_name_matches(pattern, name) for pattern in wanted):
            return base_filter(container)
        return False

    return by_names


def filter_by_enable_label(base_filter: Filter) -> Filter:
    """Keep only containers on which the enable label is set."""

    def by_enable_label(container: Any) -> bool:
        if container.enabled() is None:
            return False
        return base_filter(container)

    return by_enable_label


def filter_by_disabled_label(base_filter: Filter) -> Filter:
    """Drop containers whose enable label is explicitly set to false."""

    def by_disabled_label(container: Any) -> bool:
        if container.enabled() is False:
            return False
        return base_filter(container)

    return by_disabled_label


def filter_by_scope(scope: str, base_filter: Filter) -> Filter:
    """Keep only containers whose scope label equals ``scope``.

    An empty scope returns ``base_filter`` unchanged.
    """
    if not scope:
        return base_filter

    def by_scope(container: Any) -> bool:
        if container.scope() == scope:
            return base_filter(container)
        return False

    return by_scope


def filter_by_image(images: Optional[Sequence[str]], base_filter: Filter) -> Filter:
    """Keep only containers whose image name, without tag, is one of ``images``.

    ``None`` returns ``base_filter`` unchanged.
    """
    if images is None:
        return base_filter
    targets = set(images)

    def by_image(container: Any) -> bool:
        image = container.image_name().split(":")[0]
        if image in targets:
            return base_filter(container)
        return False

    return by_image


def build_filter(
    names: Optional[Sequence[str]], enable_label: bool, scope: str
) -> tuple[Filter, str]:
    """Combine the configured filters and describe them in words."""
    names = list(names or ())
    parts: list[str] = []
    container_filter: Filter = filter_by_names(names, no_filter)

    if names:
        parts.append('which name matches "' + '" or "'.join(names) + '"')

    if enable_label:
        container_filter = filter_by_enable_label(container_filter)
        parts.append("using enable label")

    if scope:
        container_filter = filter_by_scope(scope, container_filter)
        parts.append(f'in scope "{scope}"')

    container_filter = filter_by_disabled_label(container_filter)

    if parts:
        description = "Only checking containers " + ", ".join(parts)
    else:
        description = "Checking all containers (except explicitly disabled with label)"
    return container_filter, description