import pytest

from watchkeeper.actions import (
    check_for_sanity,
    linked_container_marked_for_restart,
    update_implicit_restart,
)
from watchkeeper.container import Container
from watchkeeper.filters import no_filter


def make_container(name, labels=None, links=None, image="fake-image:latest"):
    info = {
        "Id": name + "-id",
        "Name": name,
        "State": {"Running": True, "Restarting": False},
        "Config": {"Image": image, "Labels": labels or {}, "ExposedPorts": {}},
        "HostConfig": {"Links": links},
    }
    return Container(info, {"Id": "image-" + name, "Config": {}})


class FakeClient:
    def __init__(self, containers):
        self.containers = containers
        self.calls = []

    def list_containers(self, container_filter):
        self.calls.append(container_filter)
        return [c for c in self.containers if container_filter(c)]


def test_linked_container_is_marked_for_restart():
    provider = make_container("/test-container-provider", image="fake-image2:latest")
    provider.stale = True
    consumer = make_container(
        "/test-container-consumer",
        labels={"com.centurylinklabs.watchtower.depends-on": "test-container-provider"},
        image="fake-image3:latest",
    )
    containers = [provider, consumer]

    assert provider.to_restart() is True
    assert consumer.to_restart() is False

    update_implicit_restart(containers)

    assert containers[0].to_restart() is True
    assert containers[1].to_restart() is True
    assert consumer.linked_to_restarting is True
    assert provider.linked_to_restarting is False


def test_unlinked_container_is_not_marked():
    stale = make_container("/stale")
    stale.stale = True
    other = make_container("/other")
    update_implicit_restart([stale, other])
    assert other.to_restart() is False


def test_host_config_links_propagate_restart():
    stale = make_container("/db")
    stale.stale = True
    app = make_container("/app", links=["/db:/app/db"])
    update_implicit_restart([stale, app])
    assert app.linked_to_restarting is True


def test_linked_container_marked_for_restart_returns_first_match():
    first = make_container("/first")
    second = make_container("/second")
    second.stale = True
    third = make_container("/third")
    third.linked_to_restarting = True
    containers = [first, second, third]

    assert linked_container_marked_for_restart(["/first", "/third", "/second"], containers) == "/third"
    assert linked_container_marked_for_restart(["/first", "/missing"], containers) is None
    assert linked_container_marked_for_restart([], containers) is None


def test_check_for_sanity_skips_listing_without_rolling_restarts():
    client = FakeClient([make_container("/a", labels={"com.centurylinklabs.watchtower.depends-on": "b"})])
    assert check_for_sanity(client, no_filter, False) is None
    assert client.calls == []


def test_check_for_sanity_passes_without_links():
    client = FakeClient([make_container("/a"), make_container("/b")])
    assert check_for_sanity(client, no_filter, True) is None
    assert client.calls == [no_filter]


def test_check_for_sanity_rejects_linked_containers():
    client = FakeClient(
        [
            make_container("/a"),
            make_container("/b", labels={"com.centurylinklabs.watchtower.depends-on": "a"}),
        ]
    )
    with pytest.raises(ValueError, match="/b"):
        check_for_sanity(client, no_filter, True)


def test_check_for_sanity_propagates_client_errors():
    class BrokenClient:
        def list_containers(self, container_filter):
            raise ConnectionError("daemon unreachable")

    with pytest.raises(ConnectionError, match="daemon unreachable"):
        check_for_sanity(BrokenClient(), no_filter, True)