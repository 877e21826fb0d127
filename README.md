# watchkeeper

watchkeeper holds the decision logic used to keep running containers up to
date. It reads the `com.centurylinklabs.watchtower.*` labels on a container.
It chooses which containers are watched. When one container is marked for
restart, it also marks the containers that depend on it. It handles the
options that configure a run, and it provides a small HTTP API that can
trigger an update.

The package uses only the standard library and needs Python 3.10 or later.

## Modules

### `watchkeeper.container`

`Container(container_info, image_info=None, *, stale=False, linked_to_restarting=False)`
wraps two dictionaries. Both are shaped like Docker Engine inspect responses
(`Id`, `Name`, `State`, `Config`, `HostConfig`, ...).

- Identity and state: `id()`, `name()`, `is_running()`, `is_restarting()`,
  `image_id()`, `safe_image_id()`, `image_name()` and `has_image_info()`.
  `image_name()` uses the zodiac original-image label if it is present. When
  the name has no tag, it adds `:latest`.
- Labels:
  - `enabled()` returns `True`, `False`, or `None` when the label is unset
    or is not a boolean.
  - `is_monitor_only()` and `is_no_pull()` return booleans.
  - `scope()` returns the scope, or `None` when it is unset.
  - `stop_signal()` returns the stop signal.
  - `pre_update_timeout()` and `post_update_timeout()` return a number of
    minutes. The default is 1.
  - `lifecycle_pre_check_command()`, `lifecycle_post_check_command()`,
    `lifecycle_pre_update_command()` and `lifecycle_post_update_command()`
    return the lifecycle commands.
- `links()` comes from the depends-on label. A leading `/` is added where a
  name lacks one. When the label is empty or unset, `links()` falls back to
  the host config links.
- `to_restart()` is true when the container is stale or is linked to a
  restarting container. `is_watchtower()` is true when the
  `com.centurylinklabs.watchtower` label is `"true"`.
- `get_create_config()` returns a copy of the container's config that keeps
  only the settings overridden at run time. Settings equal to the image's
  defaults are dropped. `get_create_host_config()` returns a copy of the
  host config with its links rewritten.
- `verify_configuration()` raises a `ContainerConfigError` subclass when
  the information needed to recreate the container is missing. The
  subclasses are `NoImageInfoError`, `NoContainerInfoError` and
  `InvalidConfigError`. If ports are bound but none are exposed,
  `verify_configuration()` fills in an empty exposed-ports mapping.
- `contains_watchtower_label(labels)` checks a label mapping for the
  watchtower label.
- `container_id_from_cgroup(text)` extracts a Docker container ID from
  cgroup text. `get_running_container_id()` reads
  `/proc/<pid>/cgroup` for the current process.

### `watchkeeper.filters`

Filters are predicates that take a container:

- `no_filter` and `watchtower_containers_filter`.
- `filter_by_names(names, base_filter)` matches a name exactly, without the
  leading `/`, or as a regular expression that covers the whole name.
- `filter_by_enable_label`, `filter_by_disabled_label`, `filter_by_scope`
  and `filter_by_image` select by label, scope or image.

`build_filter(names, enable_label, scope)` puts together the standard
chain. It returns the filter together with a description of it:

```python
from watchkeeper.filters import build_filter

keep, description = build_filter(["web"], False, "")
print(description)
# Only checking containers which name matches "web"
```

### `watchkeeper.actions`

- `check_for_sanity(client, container_filter, rolling_restarts)` raises
  `ValueError` when rolling restarts are requested and a selected container
  depends on another one. The `client` must provide
  `list_containers(filter)`.
- `update_implicit_restart(containers)` sets `linked_to_restarting` on every
  container that links to a container marked for restart.
- `linked_container_marked_for_restart(links, containers)` returns the first
  link that names a container marked for restart, or `None` when there is
  none.

### `watchkeeper.flags`

`FlagSet` holds typed options. It offers `parse_args(argv)`, which returns
the positional arguments. It also offers `set(name, value)`,
`append(name, *args)`, `is_changed(name)` and `flags[name]`.

The registration functions define the full set of options:
`register_docker_flags`, `register_system_flags` and
`register_notification_flags`. Their defaults are read from the
`DOCKER_*` and `WATCHTOWER_*` environment variables, or from a mapping
that you pass in. `default_environment(environ)` shows the result of
overlaying the environment on the built-in defaults.

Other functions:

- `process_flag_aliases(flags)` resolves `--porcelain v1`, `--debug`,
  `--trace`, and `--interval` versus `--schedule`.
- `get_secrets_from_files(flags)` replaces secret options that name a file
  with that file's contents.
- `env_config(flags, environ)` exports the Docker connection options as
  environment variables.
- `read_flags(flags)` returns the values of cleanup, no-restart,
  monitor-only and stop-timeout.
- `is_file(value)` tells whether a value names something on disk.

```python
from watchkeeper.flags import FlagSet, register_system_flags, process_flag_aliases

flags = FlagSet()
register_system_flags(flags, {})
flags.parse_args(["--interval", "10"])
process_flag_aliases(flags)
flags["schedule"]   # "@every 10s"
```

### `watchkeeper.api`

`Api(token)` routes requests to handlers registered with
`register(path, handler)`. Each handler is guarded by a
`Authorization: Bearer <token>` check, which `require_token` provides.

- `dispatch(method, path, headers, body)` routes a single request and
  returns a `Response`.
- `start(block, port)` serves the registered handlers over HTTP on the
  given port. The default port is 8080.

`UpdateHandler(update_fn, lock=None)` is served at `/v1/update`. It calls
`update_fn` with the images named in the `image` query parameter. When no
images are named, it calls `update_fn` with `None`. Named images make it
wait for an update that is already running. Without them, it skips when an
update is already running.

```python
from watchkeeper.api import Api, UpdateHandler

api = Api("token")
handler = UpdateHandler(lambda images: print("update", images))
api.register(handler.path, handler)
api.dispatch("POST", "/v1/update?image=nginx", {"Authorization": "Bearer token"})
```

### `watchkeeper.durations`

- `format_duration(seconds)` accepts seconds or a `timedelta`:
  `format_duration(3660)` gives `"1 hour, 1 minute"`, and
  `format_duration(0)` gives `"0 seconds"`.
- `user_agent(version)` builds the HTTP client identifier.

### `watchkeeper.util`

- `slice_equal`, `slice_subtract`, `string_map_subtract` and
  `struct_map_subtract` compare and subtract lists and mappings.
- `rand_name()` returns a random container name.
- `generate_random_sha256()` and `generate_random_prefixed_sha256()`
  return random SHA-256 digests.

## Errors

| Error | Raised by |
| --- | --- |
| `ContainerConfigError` subclasses | container configuration problems |
| `FlagError` | unknown or malformed options, an unknown porcelain version, or a schedule and an interval given together |
| `ApiError` | `Api.start` when the token is empty, or registering the same path twice |
| `ValueError` | `check_for_sanity` |

## What the package does not do

The package contains no Docker client. It does not list, pull, stop, start
or remove containers or images. It does not carry out a full update run,
run a scheduler, or send notifications, and it has no command-line entry
point. It provides the decisions and the configuration that a program
doing those things needs.