import io
import threading
import urllib.error
import urllib.request
from http import HTTPStatus

import pytest

from watchkeeper.api import (
    TOKEN_MISSING_MESSAGE,
    UPDATE_PATH,
    Api,
    ApiError,
    Request,
    Response,
    UpdateHandler,
)

AUTH = {"Authorization": "Bearer token"}


class Recorder:
    def __init__(self):
        self.calls = []

    def __call__(self, images):
        self.calls.append(images)


def echo_handler(request: Request) -> Response:
    return Response(HTTPStatus.OK, request.body)


def test_dispatch_with_valid_token_runs_handler():
    api = Api(token="token")
    api.register("/echo", echo_handler)
    response = api.dispatch("POST", "/echo", AUTH, b"hello")
    assert response.status == HTTPStatus.OK
    assert response.body == b"hello"


def test_header_lookup_is_case_insensitive():
    api = Api(token="token")
    api.register("/echo", echo_handler)
    response = api.dispatch("GET", "/echo", {"authorization": "Bearer token"}, b"x")
    assert response.body == b"x"


@pytest.mark.parametrize("headers", [{}, {"Authorization": "Bearer placeholder"}, {"Authorization": "token"}])
def test_dispatch_rejects_bad_token(headers):
    api = Api(token="token")
    api.register("/echo", echo_handler)
    response = api.dispatch("GET", "/echo", headers)
    assert response.status == HTTPStatus.UNAUTHORIZED
    assert response.body == b""


def test_unknown_path_is_not_found():
    api = Api(token="token")
    api.register("/echo", echo_handler)
    assert api.dispatch("GET", "/other", AUTH).status == HTTPStatus.NOT_FOUND


def test_duplicate_registration_raises():
    api = Api(token="token")
    api.register("/echo", echo_handler)
    with pytest.raises(ApiError):
        api.register("/echo", echo_handler)


def test_start_without_handlers_is_skipped():
    api = Api(token="token")
    assert api.has_handlers is False
    assert api.start(block=False, port=0) is None


def test_start_without_token_raises():
    api = Api(token="")
    api.register("/echo", echo_handler)
    with pytest.raises(ApiError, match=TOKEN_MISSING_MESSAGE):
        api.start(block=False, port=0)


def test_update_handler_splits_image_queries():
    recorder = Recorder()
    handler = UpdateHandler(recorder)
    assert handler.handle({"image": ["a,b", "c"]}) is True
    assert recorder.calls == [["a", "b", "c"]]


def test_update_handler_without_images_passes_none():
    recorder = Recorder()
    handler = UpdateHandler(recorder)
    assert handler.handle({}) is True
    assert recorder.calls == [None]


def test_update_handler_skips_when_update_running():
    recorder = Recorder()
    lock = threading.Lock()
    handler = UpdateHandler(recorder, lock)
    lock.acquire()
    try:
        assert handler.handle({}) is False
    finally:
        lock.release()
    assert recorder.calls == []
    assert lock.acquire(blocking=False) is True


def test_update_handler_with_images_waits_for_lock():
    recorder = Recorder()
    lock = threading.Lock()
    handler = UpdateHandler(recorder, lock)
    lock.acquire()
    worker = threading.Thread(target=handler.handle, args=({"image": ["nginx"]},))
    worker.start()
    worker.join(timeout=0.2)
    assert worker.is_alive()
    assert recorder.calls == []
    lock.release()
    worker.join(timeout=5)
    assert not worker.is_alive()
    assert recorder.calls == [["nginx"]]


def test_update_handler_copies_body_to_output():
    output = io.StringIO()
    handler = UpdateHandler(Recorder(), output=output)
    handler.handle({}, b"request body")
    assert output.getvalue() == "request body"


def test_update_handler_routed_through_api():
    recorder = Recorder()
    handler = UpdateHandler(recorder)
    api = Api(token="token")
    api.register(handler.path, handler)
    response = api.dispatch("POST", f"{UPDATE_PATH}?image=redis,postgres", AUTH)
    assert response.status == HTTPStatus.OK
    assert recorder.calls == [["redis", "postgres"]]


def test_update_handler_not_run_without_token():
    recorder = Recorder()
    handler = UpdateHandler(recorder)
    api = Api(token="token")
    api.register(handler.path, handler)
    response = api.dispatch("POST", UPDATE_PATH, {})
    assert response.status == HTTPStatus.UNAUTHORIZED
    assert recorder.calls == []


def test_server_serves_requests():
    recorder = Recorder()
    handler = UpdateHandler(recorder)
    api = Api(token="token")
    api.register(handler.path, handler)
    server = api.start(block=False, port=0)
    try:
        port = server.server_address[1]
        url = f"http://127.0.0.1:{port}{UPDATE_PATH}?image=nginx"
        request = urllib.request.Request(url, headers=AUTH, method="POST", data=b"")
        with urllib.request.urlopen(request, timeout=5) as reply:
            assert reply.status == HTTPStatus.OK
        assert recorder.calls == [["nginx"]]

        anonymous = urllib.request.Request(url, method="POST", data=b"")
        with pytest.raises(urllib.error.HTTPError) as info:
            urllib.request.urlopen(anonymous, timeout=5)
        assert info.value.code == HTTPStatus.UNAUTHORIZED
        assert recorder.calls == [["nginx"]]
    finally:
        server.shutdown()
        server.server_close()