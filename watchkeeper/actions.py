"""Checks run before updating and the propagation of restarts along links."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Any, Optional

_log = logging.getLogger(__name__)


def check_for_sanity(
    client: Any, container_filter: Callable[[Any], bool], rolling_restarts: bool
) -> None:
    """Make sure the configuration is usable before starting.

    With rolling restarts enabled, no selected container may depend on
    another one; a ValueError is raised otherwise.
    """
    _log.debug("Making sure everything is sane before starting")
    if not rolling_restarts:
        return
    for container in client.list_containers(container_filter):
        if container.links():
            raise ValueError(
                f"{container.name()!r} is depending on at least one other container. "
                "This is not compatible with rolling restarts"
            )


def linked_container_marked_for_restart(
    links: Sequence[str], containers: Sequence[Any]
) -> Optional[str]:
    """Return the first link that names a container marked for restart, or None."""
    for link in links:
        if any(c.name() == link and c.to_restart() for c in containers):
            return link
    return None


def update_implicit_restart(containers: Sequence[Any]) -> None:
    """Mark containers linked to a restarting container as linked to restarting."""
    for container in containers:
        if container.to_restart():
            continue
        link = linked_container_marked_for_restart(container.links(), containers)
        if link is not None:
            _log.debug(
                "container is linked to restarting (restarting=%s, linked=%s)",
                link,
                container.name(),
            )
            container.linked_to_restarting = True