import pytest

from watchkeeper.filters import (
    build_filter,
    filter_by_disabled_label,
    filter_by_enable_label,
    filter_by_image,
    filter_by_names,
    filter_by_scope,
    no_filter,
    watchtower_containers_filter,
)

_UNSET = object()


class FakeContainer:
    """Answers only the questions it was given answers for."""

    def __init__(self, name=_UNSET, enabled=_UNSET, scope=_UNSET, image=_UNSET, watchtower=_UNSET):
        self._name = name
        self._enabled = enabled
        self._scope = scope
        self._image = image
        self._watchtower = watchtower
        self.calls = []

    def _answer(self, attr, value):
        self.calls.append(attr)
        if value is _UNSET:
            raise AssertionError(f"unexpected call to {attr}")
        return value

    def name(self):
        return self._answer("name", self._name)

    def enabled(self):
        return self._answer("enabled", self._enabled)

    def scope(self):
        return self._answer("scope", self._scope)

    def image_name(self):
        return self._answer("image_name", self._image)

    def is_watchtower(self):
        return self._answer("is_watchtower", self._watchtower)


def test_watchtower_containers_filter():
    container = FakeContainer(watchtower=True)
    assert watchtower_containers_filter(container) is True
    assert container.calls == ["is_watchtower"]
    assert watchtower_containers_filter(FakeContainer(watchtower=False)) is False


def test_no_filter():
    container = FakeContainer()
    assert no_filter(container) is True
    assert container.calls == []


def test_filter_by_names():
    assert filter_by_names([], None) is None
    assert filter_by_names(None, no_filter) is no_filter

    names_filter = filter_by_names(["test"], no_filter)
    assert names_filter(FakeContainer(name="test")) is True
    assert names_filter(FakeContainer(name="NoTest")) is False


def test_filter_by_names_accepts_leading_slash():
    names_filter = filter_by_names(["test"], no_filter)
    assert names_filter(FakeContainer(name="/test")) is True


def test_filter_by_names_regex():
    names_filter = filter_by_names([r"ba(b|ll)oon"], no_filter)
    assert names_filter(FakeContainer(name="balloon")) is True
    assert names_filter(FakeContainer(name="spoon")) is False
    assert names_filter(FakeContainer(name="baboonious")) is False


def test_filter_by_names_invalid_regex_is_ignored():
    names_filter = filter_by_names(["(unclosed"], no_filter)
    assert names_filter(FakeContainer(name="anything")) is False


def test_filter_by_enable_label():
    label_filter = filter_by_enable_label(no_filter)
    assert label_filter(FakeContainer(enabled=True)) is True
    assert label_filter(FakeContainer(enabled=False)) is True
    assert label_filter(FakeContainer(enabled=None)) is False


def test_filter_by_scope():
    scope_filter = filter_by_scope("testscope", no_filter)
    assert scope_filter(FakeContainer(scope="testscope")) is True
    assert scope_filter(FakeContainer(scope="nottestscope")) is False
    assert scope_filter(FakeContainer(scope=None)) is False


def test_filter_by_scope_empty_returns_base():
    assert filter_by_scope("", no_filter) is no_filter


def test_filter_by_disabled_label():
    label_filter = filter_by_disabled_label(no_filter)
    assert label_filter(FakeContainer(enabled=True)) is True
    assert label_filter(FakeContainer(enabled=False)) is False
    assert label_filter(FakeContainer(enabled=None)) is True


@pytest.mark.parametrize(
    "image, single, multiple",
    [
        ("registry:2", True, True),
        ("registry:latest", True, True),
        ("abcdef1234", False, False),
        ("bla:latest", False, True),
    ],
)
def test_filter_by_image(image, single, multiple):
    filter_empty = filter_by_image(None, no_filter)
    filter_single = filter_by_image(["registry"], no_filter)
    filter_multiple = filter_by_image(["registry", "bla"], no_filter)

    assert filter_empty(FakeContainer(image=image)) is True
    assert filter_single(FakeContainer(image=image)) is single
    assert filter_multiple(FakeContainer(image=image)) is multiple


def test_build_filter():
    built, desc = build_filter(["test", "valid"], False, "")
    assert "test" in desc
    assert "or" in desc
    assert "valid" in desc

    assert built(FakeContainer(name="Invalid", enabled=None)) is False
    assert built(FakeContainer(name="test", enabled=None)) is True
    assert built(FakeContainer(name="Invalid", enabled=True)) is False
    assert built(FakeContainer(name="test", enabled=True)) is True
    assert built(FakeContainer(enabled=False)) is False


def test_build_filter_enable_label():
    built, desc = build_filter(["test"], True, "")
    assert "using enable label" in desc

    assert built(FakeContainer(enabled=None)) is False

    invalid = FakeContainer(name="Invalid", enabled=True)
    assert built(invalid) is False
    assert invalid.calls.count("enabled") == 2

    valid = FakeContainer(name="test", enabled=True)
    assert built(valid) is True
    assert valid.calls.count("enabled") == 2

    assert built(FakeContainer(enabled=False)) is False


def test_build_filter_descriptions():
    _, desc = build_filter([], False, "")
    assert desc == "Checking all containers (except explicitly disabled with label)"

    _, desc = build_filter(["test", "valid"], False, "")
    assert desc == 'Only checking containers which name matches "test" or "valid"'

    _, desc = build_filter(None, True, "prod")
    assert desc == 'Only checking containers using enable label, in scope "prod"'


def test_build_filter_scope():
    built, _ = build_filter([], False, "prod")
    assert built(FakeContainer(enabled=None, scope="prod")) is True
    assert built(FakeContainer(enabled=None, scope="dev")) is False