"""Command-line flags, their environment-variable defaults and alias handling."""

from __future__ import annotations

import csv
import logging
import os
import re
from collections.abc import Iterable, Iterator, Mapping, MutableMapping
from dataclasses import dataclass
from datetime import timedelta
from enum import Enum
from pathlib import Path
from typing import Any, Optional

DOCKER_API_MIN_VERSION = "1.25"
DEFAULT_INTERVAL = 24 * 60 * 60

_log = logging.getLogger(__name__)

_TRUE_WORDS = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_WORDS = frozenset({"0", "f", "F", "FALSE", "false", "False"})

_DURATION_UNITS = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,
    "μs": 1_000,
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 3600 * 1_000_000_000,
}
_DURATION_PART = re.compile(r"([0-9]*(?:\.[0-9]*)?)(ns|us|µs|μs|ms|s|m|h)")
_DURATION_UNIT_CHARS = "nsuµmh"

_ENV_DEFAULTS: dict[str, Any] = {
    "DOCKER_HOST": "unix:///var/run/docker.sock",
    "DOCKER_API_VERSION": DOCKER_API_MIN_VERSION,
    "WATCHTOWER_POLL_INTERVAL": DEFAULT_INTERVAL,
    "WATCHTOWER_TIMEOUT": timedelta(seconds=10),
    "WATCHTOWER_NOTIFICATIONS": [],
    "WATCHTOWER_NOTIFICATIONS_LEVEL": "info",
    "WATCHTOWER_NOTIFICATION_EMAIL_SERVER_PORT": 25,
    "WATCHTOWER_NOTIFICATION_EMAIL_SUBJECTTAG": "",
    "WATCHTOWER_NOTIFICATION_SLACK_IDENTIFIER": "watchtower",
    "WATCHTOWER_LOG_LEVEL": "info",
}

_SECRET_FLAGS = (
    "notification-email-server-password",
    "notification-slack-hook-url",
    "notification-msteams-hook",
    "notification-gotify-token",
    "notification-url",
)


class FlagError(Exception):
    """A flag is unknown, malformed or used in a way that is not allowed."""


class _Kind(Enum):
    STRING = "string"
    BOOL = "bool"
    INT = "int"
    DURATION = "duration"
    STRING_SLICE = "stringSlice"
    STRING_ARRAY = "stringArray"


_LIST_KINDS = frozenset({_Kind.STRING_SLICE, _Kind.STRING_ARRAY})


@dataclass
class _Flag:
    name: str
    kind: _Kind
    value: Any
    usage: str
    shorthand: str = ""
    changed: bool = False


def _parse_bool(raw: str) -> Optional[bool]:
    if raw in _TRUE_WORDS:
        return True
    if raw in _FALSE_WORDS:
        return False
    return None


def _parse_int(raw: str) -> int:
    try:
        return int(raw, 0)
    except ValueError:
        if re.fullmatch(r"[+-]?0[0-7_]+", raw):
            return int(raw, 8)
        raise


def _parse_go_duration(text: str) -> timedelta:
    """Parse a duration such as ``1h30m`` or ``-1.5s``."""
    rest = text
    sign = 1
    if rest[:1] in ("+", "-") and rest:
        sign = -1 if rest[0] == "-" else 1
        rest = rest[1:]
    if rest == "0":
        return timedelta(0)
    if not rest:
        raise ValueError(f"invalid duration {text!r}")
    total_ns = 0.0
    pos = 0
    while pos < len(rest):
        match = _DURATION_PART.match(rest, pos)
        if match is None or match.group(1) in ("", "."):
            raise ValueError(f"invalid duration {text!r}")
        total_ns += float(match.group(1)) * _DURATION_UNITS[match.group(2)]
        pos = match.end()
    return timedelta(microseconds=sign * total_ns / 1000)


def _parse_value(flag: _Flag, value: Any) -> Any:
    kind = flag.kind
    invalid = FlagError(f'invalid argument "{value}" for "--{flag.name}" flag')
    if kind is _Kind.STRING:
        return str(value)
    if kind is _Kind.BOOL:
        if isinstance(value, bool):
            return value
        parsed = _parse_bool(str(value))
        if parsed is None:
            raise invalid
        return parsed
    if kind is _Kind.INT:
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        try:
            return _parse_int(str(value))
        except ValueError:
            raise invalid from None
    if kind is _Kind.DURATION:
        if isinstance(value, timedelta):
            return value
        try:
            return _parse_go_duration(str(value))
        except ValueError:
            raise invalid from None
    if isinstance(value, str):
        if kind is _Kind.STRING_ARRAY:
            return [value]
        if not value:
            return []
        try:
            return next(csv.reader([value]))
        except csv.Error:
            raise invalid from None
    return [str(item) for item in value]


class FlagSet:
    """A set of named flags holding typed values, parsed from command-line arguments."""

    def __init__(self) -> None:
        self._flags: dict[str, _Flag] = {}
        self._shorthands: dict[str, str] = {}

    def _define(self, name: str, kind: _Kind, default: Any, usage: str, shorthand: str = "") -> None:
        if name in self._flags:
            raise FlagError(f"flag redefined: {name}")
        if shorthand and shorthand in self._shorthands:
            raise FlagError(f"unable to redefine {shorthand!r} shorthand")
        value = list(default) if kind in _LIST_KINDS else default
        self._flags[name] = _Flag(name, kind, value, usage, shorthand)
        if shorthand:
            self._shorthands[shorthand] = name

    def _lookup(self, name: str) -> _Flag:
        try:
            return self._flags[name]
        except KeyError:
            raise FlagError(f"unknown flag: --{name}") from None

    def __getitem__(self, name: str) -> Any:
        flag = self._lookup(name)
        return list(flag.value) if flag.kind in _LIST_KINDS else flag.value

    def is_changed(self, name: str) -> bool:
        """Return True if the flag was set after being defined."""
        return self._lookup(name).changed

    def set(self, name: str, value: Any) -> None:
        """Set a flag from a string (or an already typed value) and mark it changed.

        List flags are replaced on the first set and extended on later ones.
        """
        flag = self._lookup(name)
        parsed = _parse_value(flag, value)
        if flag.kind in _LIST_KINDS and flag.changed:
            flag.value = flag.value + parsed
        else:
            flag.value = parsed
        flag.changed = True

    def append(self, name: str, *args: str) -> None:
        """Append values to a list flag without marking it changed."""
        flag = self._flags.get(name)
        if flag is None:
            raise FlagError(f"invalid flag name {name!r}")
        if flag.kind not in _LIST_KINDS:
            raise FlagError(f"the value for flag {name!r} is not a slice value")
        flag.value = flag.value + [str(arg) for arg in args]

    def _replace(self, name: str, values: Iterable[str]) -> None:
        self._lookup(name).value = list(values)

    def parse_args(self, argv: Iterable[str]) -> list[str]:
        """Parse command-line arguments into the flags and return the positional ones."""
        positional: list[str] = []
        args = iter(argv)
        for arg in args:
            if arg == "--":
                positional.extend(args)
                break
            if arg.startswith("--"):
                self._parse_long(arg[2:], args)
            elif arg.startswith("-") and len(arg) > 1:
                self._parse_shorthands(arg[1:], args)
            else:
                positional.append(arg)
        return positional

    def _parse_long(self, body: str, args: Iterator[str]) -> None:
        name, sep, value = body.partition("=")
        flag = self._lookup(name)
        if sep:
            self.set(name, value)
        elif flag.kind is _Kind.BOOL:
            self.set(name, "true")
        else:
            self.set(name, self._next_value(args, f"--{name}"))

    def _parse_shorthands(self, body: str, args: Iterator[str]) -> None:
        for pos, char in enumerate(body):
            name = self._shorthands.get(char)
            if name is None:
                raise FlagError(f"unknown shorthand flag: {char!r} in -{body}")
            rest = body[pos + 1:]
            if self._flags[name].kind is _Kind.BOOL:
                if rest.startswith("="):
                    self.set(name, rest[1:])
                    return
                self.set(name, "true")
                continue
            if rest:
                self.set(name, rest[1:] if rest.startswith("=") else rest)
            else:
                self.set(name, self._next_value(args, f"-{char}"))
            return

    @staticmethod
    def _next_value(args: Iterator[str], label: str) -> str:
        try:
            return next(args)
        except StopIteration:
            raise FlagError(f"flag needs an argument: {label}") from None


def default_environment(environ: Optional[Mapping[str, Any]] = None) -> dict[str, Any]:
    """Return the environment overlaid on the built-in defaults.

    Empty variables count as unset. ``None`` reads the process environment.
    """
    source = os.environ if environ is None else environ
    env = dict(_ENV_DEFAULTS)
    env.update({key: value for key, value in source.items() if value != ""})
    return env


def _env_str(env: Mapping[str, Any], key: str) -> str:
    value = env.get(key)
    return "" if value is None else str(value)


def _env_bool(env: Mapping[str, Any], key: str) -> bool:
    value = env.get(key)
    if isinstance(value, bool):
        return value
    return bool(value is not None and _parse_bool(str(value)))


def _env_int(env: Mapping[str, Any], key: str) -> int:
    value = env.get(key)
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if value is None:
        return 0
    try:
        return _parse_int(str(value).strip())
    except ValueError:
        return 0


def _env_duration(env: Mapping[str, Any], key: str) -> timedelta:
    value = env.get(key)
    if isinstance(value, timedelta):
        return value
    if value is None:
        return timedelta(0)
    text = str(value)
    if not any(char in text for char in _DURATION_UNIT_CHARS):
        text += "ns"
    try:
        return _parse_go_duration(text)
    except ValueError:
        return timedelta(0)


def _env_list(env: Mapping[str, Any], key: str) -> list[str]:
    value = env.get(key)
    if value is None:
        return []
    if isinstance(value, str):
        return value.split()
    return [str(item) for item in value]


_ENV_READERS = {
    _Kind.STRING: _env_str,
    _Kind.BOOL: _env_bool,
    _Kind.INT: _env_int,
    _Kind.DURATION: _env_duration,
    _Kind.STRING_SLICE: _env_list,
    _Kind.STRING_ARRAY: _env_list,
}


def _register(flags: FlagSet, env: Mapping[str, Any], table: Iterable[tuple[str, str, _Kind, str, str]]) -> None:
    for name, shorthand, kind, key, usage in table:
        flags._define(name, kind, _ENV_READERS[kind](env, key), usage, shorthand)


_DOCKER_FLAGS = (
    ("host", "H", _Kind.STRING, "DOCKER_HOST", "daemon socket to connect to"),
    ("tlsverify", "v", _Kind.BOOL, "DOCKER_TLS_VERIFY", "use TLS and verify the remote"),
    ("api-version", "a", _Kind.STRING, "DOCKER_API_VERSION", "api version to use by docker client"),
)

_SYSTEM_FLAGS = (
    ("interval", "i", _Kind.INT, "WATCHTOWER_POLL_INTERVAL", "Poll interval (in seconds)"),
    ("schedule", "s", _Kind.STRING, "WATCHTOWER_SCHEDULE", "The cron expression which defines when to update"),
    ("stop-timeout", "t", _Kind.DURATION, "WATCHTOWER_TIMEOUT", "Timeout before a container is forcefully stopped"),
    ("no-pull", "", _Kind.BOOL, "WATCHTOWER_NO_PULL", "Do not pull any new images"),
    ("no-restart", "", _Kind.BOOL, "WATCHTOWER_NO_RESTART", "Do not restart any containers"),
    ("no-startup-message", "", _Kind.BOOL, "WATCHTOWER_NO_STARTUP_MESSAGE",
     "Prevents watchtower from sending a startup message"),
    ("cleanup", "c", _Kind.BOOL, "WATCHTOWER_CLEANUP", "Remove previously used images after updating"),
    ("remove-volumes", "", _Kind.BOOL, "WATCHTOWER_REMOVE_VOLUMES", "Remove attached volumes before updating"),
    ("label-enable", "e", _Kind.BOOL, "WATCHTOWER_LABEL_ENABLE",
     "Watch containers where the com.centurylinklabs.watchtower.enable label is true"),
    ("debug", "d", _Kind.BOOL, "WATCHTOWER_DEBUG", "Enable debug mode with verbose logging"),
    ("trace", "", _Kind.BOOL, "WATCHTOWER_TRACE",
     "Enable trace mode with very verbose logging - caution, exposes credentials"),
    ("monitor-only", "m", _Kind.BOOL, "WATCHTOWER_MONITOR_ONLY",
     "Will only monitor for new images, not update the containers"),
    ("run-once", "R", _Kind.BOOL, "WATCHTOWER_RUN_ONCE", "Run once now and exit"),
    ("include-restarting", "", _Kind.BOOL, "WATCHTOWER_INCLUDE_RESTARTING",
     "Will also include restarting containers"),
    ("include-stopped", "S", _Kind.BOOL, "WATCHTOWER_INCLUDE_STOPPED",
     "Will also include created and exited containers"),
    ("revive-stopped", "", _Kind.BOOL, "WATCHTOWER_REVIVE_STOPPED",
     "Will also start stopped containers that were updated, if include-stopped is active"),
    ("enable-lifecycle-hooks", "", _Kind.BOOL, "WATCHTOWER_LIFECYCLE_HOOKS",
     "Enable the execution of commands triggered by pre- and post-update lifecycle hooks"),
    ("rolling-restart", "", _Kind.BOOL, "WATCHTOWER_ROLLING_RESTART", "Restart containers one at a time"),
    ("http-api-update", "", _Kind.BOOL, "WATCHTOWER_HTTP_API_UPDATE",
     "Runs Watchtower in HTTP API mode, so that image updates must to be triggered by a request"),
    ("http-api-metrics", "", _Kind.BOOL, "WATCHTOWER_HTTP_API_METRICS",
     "Runs Watchtower with the Prometheus metrics API enabled"),
    ("http-api-token", "", _Kind.STRING, "WATCHTOWER_HTTP_API_TOKEN",
     "Sets an authentication token to HTTP API requests."),
    ("http-api-periodic-polls", "", _Kind.BOOL, "WATCHTOWER_HTTP_API_PERIODIC_POLLS",
     "Also run periodic updates (specified with --interval and --schedule) if HTTP API is enabled"),
)

_SYSTEM_TRAILING_FLAGS = (
    ("scope", "", _Kind.STRING, "WATCHTOWER_SCOPE", "Defines a monitoring scope for the Watchtower instance."),
    ("porcelain", "P", _Kind.STRING, "WATCHTOWER_PORCELAIN",
     'Write session results to stdout using a stable versioned format. Supported values: "v1"'),
    ("log-level", "", _Kind.STRING, "WATCHTOWER_LOG_LEVEL",
     "The maximum log level that will be written to STDERR. "
     "Possible values: panic, fatal, error, warn, info, debug or trace"),
)

_NOTIFICATION_FLAGS = (
    ("notifications", "n", _Kind.STRING_SLICE, "WATCHTOWER_NOTIFICATIONS",
     " Notification types to send (valid: email, slack, msteams, gotify, shoutrrr)"),
    ("notifications-level", "", _Kind.STRING, "WATCHTOWER_NOTIFICATIONS_LEVEL",
     "The log level used for sending notifications. Possible values: panic, fatal, error, warn, info or debug"),
    ("notifications-delay", "", _Kind.INT, "WATCHTOWER_NOTIFICATIONS_DELAY",
     "Delay before sending notifications, expressed in seconds"),
    ("notifications-hostname", "", _Kind.STRING, "WATCHTOWER_NOTIFICATIONS_HOSTNAME",
     "Custom hostname for notification titles"),
    ("notification-email-from", "", _Kind.STRING, "WATCHTOWER_NOTIFICATION_EMAIL_FROM",
     "Address to send notification emails from"),
    ("notification-email-to", "", _Kind.STRING, "WATCHTOWER_NOTIFICATION_EMAIL_TO",
     "Address to send notification emails to"),
    ("notification-email-delay", "", _Kind.INT, "WATCHTOWER_NOTIFICATION_EMAIL_DELAY",
     "Delay before sending notifications, expressed in seconds"),
    ("notification-email-server", "", _Kind.STRING, "WATCHTOWER_NOTIFICATION_EMAIL_SERVER",
     "SMTP server to send notification emails through"),
    ("notification-email-server-port", "", _Kind.INT, "WATCHTOWER_NOTIFICATION_EMAIL_SERVER_PORT",
     "SMTP server port to send notification emails through"),
    ("notification-email-server-tls-skip-verify", "", _Kind.BOOL,
     "WATCHTOWER_NOTIFICATION_EMAIL_SERVER_TLS_SKIP_VERIFY",
     "Controls whether watchtower verifies the SMTP server's certificate chain and host name.\n"
     "Should only be used for testing."),
    ("notification-email-server-user", "", _Kind.STRING, "WATCHTOWER_NOTIFICATION_EMAIL_SERVER_USER",
     "SMTP server user for sending notifications"),
    ("notification-email-server-password", "", _Kind.STRING, "WATCHTOWER_NOTIFICATION_EMAIL_SERVER_PASSWORD",
     "SMTP server password for sending notifications"),
    ("notification-email-subjecttag", "", _Kind.STRING, "WATCHTOWER_NOTIFICATION_EMAIL_SUBJECTTAG",
     "Subject prefix tag for notifications via mail"),
    ("notification-slack-hook-url", "", _Kind.STRING, "WATCHTOWER_NOTIFICATION_SLACK_HOOK_URL",
     "The Slack Hook URL to send notifications to"),
    ("notification-slack-identifier", "", _Kind.STRING, "WATCHTOWER_NOTIFICATION_SLACK_IDENTIFIER",
     "A string which will be used to identify the messages coming from this watchtower instance"),
    ("notification-slack-channel", "", _Kind.STRING, "WATCHTOWER_NOTIFICATION_SLACK_CHANNEL",
     "A string which overrides the webhook's default channel. Example: #my-custom-channel"),
    ("notification-slack-icon-emoji", "", _Kind.STRING, "WATCHTOWER_NOTIFICATION_SLACK_ICON_EMOJI",
     "An emoji code string to use in place of the default icon"),
    ("notification-slack-icon-url", "", _Kind.STRING, "WATCHTOWER_NOTIFICATION_SLACK_ICON_URL",
     "An icon image URL string to use in place of the default icon"),
    ("notification-msteams-hook", "", _Kind.STRING, "WATCHTOWER_NOTIFICATION_MSTEAMS_HOOK_URL",
     "The MSTeams WebHook URL to send notifications to"),
    ("notification-msteams-data", "", _Kind.BOOL, "WATCHTOWER_NOTIFICATION_MSTEAMS_USE_LOG_DATA",
     "The MSTeams notifier will try to extract log entry fields as MSTeams message facts"),
    ("notification-gotify-url", "", _Kind.STRING, "WATCHTOWER_NOTIFICATION_GOTIFY_URL",
     "The Gotify URL to send notifications to"),
    ("notification-gotify-token", "", _Kind.STRING, "WATCHTOWER_NOTIFICATION_GOTIFY_TOKEN",
     "The Gotify Application required to query the Gotify API"),
    ("notification-gotify-tls-skip-verify", "", _Kind.BOOL, "WATCHTOWER_NOTIFICATION_GOTIFY_TLS_SKIP_VERIFY",
     "Controls whether watchtower verifies the Gotify server's certificate chain and host name.\n"
     "Should only be used for testing."),
    ("notification-template", "", _Kind.STRING, "WATCHTOWER_NOTIFICATION_TEMPLATE",
     "The shoutrrr text/template for the messages"),
    ("notification-url", "", _Kind.STRING_ARRAY, "WATCHTOWER_NOTIFICATION_URL",
     "The shoutrrr URL to send notifications to"),
    ("notification-report", "", _Kind.BOOL, "WATCHTOWER_NOTIFICATION_REPORT",
     "Use the session report as the notification template data"),
    ("notification-title-tag", "", _Kind.STRING, "WATCHTOWER_NOTIFICATION_TITLE_TAG",
     "Title prefix tag for notifications"),
    ("notification-skip-title", "", _Kind.BOOL, "WATCHTOWER_NOTIFICATION_SKIP_TITLE",
     "Do not pass the title param to notifications"),
    ("warn-on-head-failure", "", _Kind.STRING, "WATCHTOWER_WARN_ON_HEAD_FAILURE",
     "When to warn about HEAD pull requests failing. Possible values: always, auto or never"),
    ("notification-log-stdout", "", _Kind.BOOL, "WATCHTOWER_NOTIFICATION_LOG_STDOUT",
     "Write notification logs to stdout instead of logging (to stderr)"),
)


def register_docker_flags(flags: FlagSet, environ: Optional[Mapping[str, Any]] = None) -> None:
    """Define the flags used directly by the Docker API client."""
    _register(flags, default_environment(environ), _DOCKER_FLAGS)


def register_system_flags(flags: FlagSet, environ: Optional[Mapping[str, Any]] = None) -> None:
    """Define the flags that control the program flow."""
    env = default_environment(environ)
    _register(flags, env, _SYSTEM_FLAGS)
    flags._define("no-color", _Kind.BOOL, "NO_COLOR" in env, "Disable ANSI color escape codes in log output")
    _register(flags, env, _SYSTEM_TRAILING_FLAGS)


def register_notification_flags(flags: FlagSet, environ: Optional[Mapping[str, Any]] = None) -> None:
    """Define the flags that configure notifications."""
    _register(flags, default_environment(environ), _NOTIFICATION_FLAGS)


def _set_env_option(environ: MutableMapping[str, str], key: str, option: str) -> None:
    if option == "" or option == environ.get(key):
        return
    environ[key] = option


def env_config(flags: FlagSet, environ: Optional[MutableMapping[str, str]] = None) -> None:
    """Export the Docker connection flags as the environment variables the client reads."""
    target = os.environ if environ is None else environ
    host = flags["host"]
    tls = flags["tlsverify"]
    version = flags["api-version"]
    _set_env_option(target, "DOCKER_HOST", host)
    if tls:
        _set_env_option(target, "DOCKER_TLS_VERIFY", "1")
    _set_env_option(target, "DOCKER_API_VERSION", version)


def read_flags(flags: FlagSet) -> tuple[bool, bool, bool, timedelta]:
    """Return the cleanup, no-restart, monitor-only and stop-timeout values."""
    return flags["cleanup"], flags["no-restart"], flags["monitor-only"], flags["stop-timeout"]


def is_file(value: str) -> bool:
    """Return True if ``value`` looks like a path to something that exists."""
    first_colon = value.find(":")
    if first_colon not in (1, -1):
        return False
    try:
        os.stat(value)
    except FileNotFoundError:
        return False
    except ValueError:
        return False
    except OSError:
        return True
    return True


def _read_secret_file(path: str) -> str:
    try:
        return Path(path).read_text()
    except OSError as err:
        raise FlagError(f"failed to read secret from {path!r}: {err}") from err


def _secret_from_file(flags: FlagSet, name: str) -> None:
    flag = flags._lookup(name)
    if flag.kind in _LIST_KINDS:
        values: list[str] = []
        for value in flag.value:
            if value and is_file(value):
                lines = (line.rstrip("\r") for line in _read_secret_file(value).split("\n"))
                values.extend(line for line in lines if line)
            else:
                values.append(value)
        flags._replace(name, values)
        return
    value = str(flag.value)
    if value and is_file(value):
        flags.set(name, _read_secret_file(value).strip())


def get_secrets_from_files(flags: FlagSet) -> None:
    """Replace secret flags that name a file with that file's contents.

    List flags take one entry per non-empty line of each named file.
    """
    for name in _SECRET_FLAGS:
        _secret_from_file(flags, name)


def _set_if_default(flags: FlagSet, name: str, value: str) -> None:
    if flags.is_changed(name):
        return
    try:
        flags.set(name, value)
    except FlagError as err:
        _log.error("Failed to set flag: %s", err)


def process_flag_aliases(flags: FlagSet) -> None:
    """Apply the flags that stand for settings of other flags.

    Raises FlagError for an unknown porcelain version or when both a
    schedule and an interval are given.
    """
    porcelain = flags["porcelain"]
    if porcelain:
        if porcelain != "v1":
            raise FlagError(f'Unknown porcelain version {porcelain!r}. Supported values: "v1"')
        try:
            flags.append("notification-url", "logger://")
        except FlagError as err:
            _log.error("Failed to set flag: %s", err)
        _set_if_default(flags, "notification-log-stdout", "true")
        _set_if_default(flags, "notification-report", "true")
        _set_if_default(flags, "notification-template", f"porcelain.{porcelain}.summary-no-log")

    schedule_changed = flags.is_changed("schedule") or flags["schedule"] != ""
    interval_changed = flags.is_changed("interval") or flags["interval"] != DEFAULT_INTERVAL

    if interval_changed and schedule_changed:
        raise FlagError("Only schedule or interval can be defined, not both.")

    if interval_changed or not schedule_changed:
        flags.set("schedule", f"@every {flags['interval']}s")

    if flags["debug"]:
        flags.set("log-level", "debug")
    if flags["trace"]:
        flags.set("log-level", "trace")