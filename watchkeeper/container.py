"""Container model built on Docker inspect data, plus label helpers."""

from __future__ import annotations

import copy
import os
import re
from pathlib import Path
from typing import Any, Optional

from watchkeeper.util import (
    slice_equal,
    slice_subtract,
    string_map_subtract,
    struct_map_subtract,
)

WATCHTOWER_LABEL = "com.centurylinklabs.watchtower"
SIGNAL_LABEL = "com.centurylinklabs.watchtower.stop-signal"
ENABLE_LABEL = "com.centurylinklabs.watchtower.enable"
MONITOR_ONLY_LABEL = "com.centurylinklabs.watchtower.monitor-only"
NO_PULL_LABEL = "com.centurylinklabs.watchtower.no-pull"
DEPENDS_ON_LABEL = "com.centurylinklabs.watchtower.depends-on"
ZODIAC_LABEL = "com.centurylinklabs.zodiac.original-image"
SCOPE_LABEL = "com.centurylinklabs.watchtower.scope"
PRE_CHECK_LABEL = "com.centurylinklabs.watchtower.lifecycle.pre-check"
POST_CHECK_LABEL = "com.centurylinklabs.watchtower.lifecycle.post-check"
PRE_UPDATE_LABEL = "com.centurylinklabs.watchtower.lifecycle.pre-update"
POST_UPDATE_LABEL = "com.centurylinklabs.watchtower.lifecycle.post-update"
PRE_UPDATE_TIMEOUT_LABEL = "com.centurylinklabs.watchtower.lifecycle.pre-update-timeout"
POST_UPDATE_TIMEOUT_LABEL = "com.centurylinklabs.watchtower.lifecycle.post-update-timeout"

_DOCKER_CGROUP_PATTERN = re.compile(r"[0-9]+:.*:/docker/([a-f|0-9]{64})")
_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")
_TRUE_WORDS = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_WORDS = frozenset({"0", "f", "F", "FALSE", "false", "False"})


class ContainerConfigError(Exception):
    """The container cannot be recreated from the information available."""


class NoImageInfoError(ContainerConfigError):
    def __init__(self) -> None:
        super().__init__("no available image info")


class NoContainerInfoError(ContainerConfigError):
    def __init__(self) -> None:
        super().__init__("no available container info")


class InvalidConfigError(ContainerConfigError):
    def __init__(self) -> None:
        super().__init__("container configuration missing or invalid")


def _parse_bool(raw: str) -> Optional[bool]:
    if raw in _TRUE_WORDS:
        return True
    if raw in _FALSE_WORDS:
        return False
    return None


def _parse_timeout(raw: str) -> int:
    if not _INTEGER_PATTERN.fullmatch(raw):
        return 1
    return int(raw)


def contains_watchtower_label(labels: Optional[dict[str, str]]) -> bool:
    """Return True if the labels mark a watchtower instance."""
    return (labels or {}).get(WATCHTOWER_LABEL) == "true"


def container_id_from_cgroup(text: str) -> str:
    """Extract the Docker container ID from cgroup file contents, or return ''."""
    match = _DOCKER_CGROUP_PATTERN.search(text)
    return match.group(1) if match else ""


def get_running_container_id() -> str:
    """Resolve the ID of the container this process runs in from its cgroup data."""
    text = Path(f"/proc/{os.getpid()}/cgroup").read_text()
    return container_id_from_cgroup(text)


class Container:
    """A Docker container, described by its inspect data and its image's inspect data.

    ``container_info`` and ``image_info`` are dictionaries shaped like the
    Docker Engine API inspect responses (``Id``, ``Name``, ``State``,
    ``Config``, ``HostConfig``, ...).
    """

    def __init__(
        self,
        container_info: Optional[dict[str, Any]],
        image_info: Optional[dict[str, Any]] = None,
        *,
        stale: bool = False,
        linked_to_restarting: bool = False,
    ) -> None:
        self.container_info = container_info
        self.image_info = image_info
        self.stale = stale
        self.linked_to_restarting = linked_to_restarting

    def __repr__(self) -> str:
        name = self.container_info.get("Name") if self.container_info else None
        return f"Container(name={name!r}, stale={self.stale})"

    def _labels(self) -> dict[str, str]:
        config = self.container_info.get("Config") or {}
        return config.get("Labels") or {}

    def _label(self, label: str) -> Optional[str]:
        return self._labels().get(label)

    def _label_or_empty(self, label: str) -> str:
        return self._labels().get(label, "")

    def _bool_label(self, label: str) -> bool:
        raw = self._label(label)
        return bool(raw is not None and _parse_bool(raw))

    def id(self) -> str:
        return self.container_info["Id"]

    def name(self) -> str:
        return self.container_info["Name"]

    def is_running(self) -> bool:
        return bool((self.container_info.get("State") or {}).get("Running", False))

    def is_restarting(self) -> bool:
        return bool((self.container_info.get("State") or {}).get("Restarting", False))

    def image_id(self) -> str:
        """Return the image ID; raises NoImageInfoError when image info is missing."""
        if self.image_info is None:
            raise NoImageInfoError()
        return self.image_info["Id"]

    def safe_image_id(self) -> str:
        """Return the image ID, or an empty string when image info is missing."""
        if self.image_info is None:
            return ""
        return self.image_info.get("Id", "")

    def image_name(self) -> str:
        """Return the image name, assuming the ``latest`` tag when none is given."""
        image_name = self._label(ZODIAC_LABEL)
        if image_name is None:
            image_name = (self.container_info.get("Config") or {}).get("Image", "")
        if ":" not in image_name:
            image_name = f"{image_name}:latest"
        return image_name

    def enabled(self) -> Optional[bool]:
        """Return the enable label's value, or None if it is unset or not a boolean."""
        raw = self._label(ENABLE_LABEL)
        if raw is None:
            return None
        return _parse_bool(raw)

    def is_monitor_only(self) -> bool:
        return self._bool_label(MONITOR_ONLY_LABEL)

    def is_no_pull(self) -> bool:
        return self._bool_label(NO_PULL_LABEL)

    def scope(self) -> Optional[str]:
        """Return the scope label's value, or None if it is unset."""
        return self._label(SCOPE_LABEL)

    def links(self) -> list[str]:
        """Return the names of the containers this container depends on."""
        depends_on = self._label_or_empty(DEPENDS_ON_LABEL)
        if depends_on:
            return [
                link if link.startswith("/") else "/" + link
                for link in depends_on.split(",")
            ]
        host_config = (self.container_info or {}).get("HostConfig")
        if not host_config:
            return []
        return [link.split(":")[0] for link in host_config.get("Links") or ()]

    def to_restart(self) -> bool:
        return self.stale or self.linked_to_restarting

    def is_watchtower(self) -> bool:
        return contains_watchtower_label(self._labels())

    def pre_update_timeout(self) -> int:
        """Minutes the pre-update command may run; 0 means no limit, default 1."""
        return _parse_timeout(self._label_or_empty(PRE_UPDATE_TIMEOUT_LABEL))

    def post_update_timeout(self) -> int:
        """Minutes the post-update command may run; 0 means no limit, default 1."""
        return _parse_timeout(self._label_or_empty(POST_UPDATE_TIMEOUT_LABEL))

    def stop_signal(self) -> str:
        return self._label_or_empty(SIGNAL_LABEL)

    def lifecycle_pre_check_command(self) -> str:
        return self._label_or_empty(PRE_CHECK_LABEL)

    def lifecycle_post_check_command(self) -> str:
        return self._label_or_empty(POST_CHECK_LABEL)

    def lifecycle_pre_update_command(self) -> str:
        return self._label_or_empty(PRE_UPDATE_LABEL)

    def lifecycle_post_update_command(self) -> str:
        return self._label_or_empty(POST_UPDATE_LABEL)

    def get_create_config(self) -> dict[str, Any]:
        """Return the container config holding only what was overridden at run time.

        Settings equal to the image defaults are dropped so that the defaults
        of a newer image take effect when the container is recreated.
        """
        if self.image_info is None:
            raise NoImageInfoError()
        config = copy.deepcopy(self.container_info["Config"])
        host_config = self.container_info.get("HostConfig") or {}
        image_config = self.image_info.get("Config") or {}

        if config.get("WorkingDir", "") == image_config.get("WorkingDir", ""):
            config["WorkingDir"] = ""
        if config.get("User", "") == image_config.get("User", ""):
            config["User"] = ""
        if (host_config.get("NetworkMode") or "").startswith("container:"):
            config["Hostname"] = ""

        if slice_equal(config.get("Entrypoint"), image_config.get("Entrypoint")):
            config["Entrypoint"] = None
            if slice_equal(config.get("Cmd"), image_config.get("Cmd")):
                config["Cmd"] = None

        config["Env"] = slice_subtract(config.get("Env"), image_config.get("Env"))
        config["Labels"] = string_map_subtract(config.get("Labels"), image_config.get("Labels"))
        config["Volumes"] = struct_map_subtract(config.get("Volumes"), image_config.get("Volumes"))

        image_ports = image_config.get("ExposedPorts") or {}
        exposed = {
            port: value
            for port, value in (config.get("ExposedPorts") or {}).items()
            if port not in image_ports
        }
        for port in host_config.get("PortBindings") or {}:
            exposed[port] = {}
        config["ExposedPorts"] = exposed

        config["Image"] = self.image_name()
        return config

    def get_create_host_config(self) -> dict[str, Any]:
        """Return the host config with links rewritten for the create API."""
        host_config = copy.deepcopy(self.container_info["HostConfig"])
        rewritten = []
        for link in host_config.get("Links") or ():
            name = link[: link.index(":")]
            alias = link[link.rindex("/"):]
            rewritten.append(f"{name}:{alias}")
        if host_config.get("Links") is not None:
            host_config["Links"] = rewritten
        return host_config

    def has_image_info(self) -> bool:
        return self.image_info is not None

    def verify_configuration(self) -> None:
        """Make sure the container can be recreated once removed.

        Raises a ContainerConfigError subclass when information is missing.
        When ports are bound but none are exposed, an empty exposed-ports
        mapping is filled in.
        """
        if self.image_info is None:
            raise NoImageInfoError()
        if self.container_info is None:
            raise NoContainerInfoError()
        config = self.container_info.get("Config")
        if config is None:
            raise InvalidConfigError()
        host_config = self.container_info.get("HostConfig")
        if host_config is None:
            raise InvalidConfigError()
        if host_config.get("PortBindings") and config.get("ExposedPorts") is None:
            config["ExposedPorts"] = {}