from __future__ import annotations

import socket
import threading
import time

import pytest

from stream_chat import ApiError, NetworkError, RequestTimeout, StreamChatClient, with_base_url, with_timeout

SECRET = b"a-sufficiently-long-secret-for-hs256-signing"


@pytest.fixture
def silent_server():
    # accepts connections into the backlog and never answers
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("127.0.0.1", 0))
    sock.listen(8)
    try:
        yield f"http://127.0.0.1:{sock.getsockname()[1]}"
    finally:
        sock.close()


def test_unresponsive_endpoint_times_out(silent_server) -> None:
    client = StreamChatClient("key", SECRET, with_base_url(silent_server), with_timeout(0.5))

    started = time.monotonic()
    with pytest.raises(RequestTimeout) as excinfo:
        client.get("channels")
    elapsed = time.monotonic() - started

    assert isinstance(excinfo.value, NetworkError)
    assert not isinstance(excinfo.value, ApiError)
    assert 0.4 <= elapsed < 5


def test_refused_connection_is_a_network_error() -> None:
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("127.0.0.1", 0))
    port = sock.getsockname()[1]
    sock.close()

    client = StreamChatClient("key", SECRET, with_base_url(f"http://127.0.0.1:{port}"), with_timeout(2))
    with pytest.raises(NetworkError) as excinfo:
        client.get("channels")
    assert not isinstance(excinfo.value, RequestTimeout)


@pytest.fixture
def dripping_server():
    # answers with headers at once, then one body byte every 0.3s
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("127.0.0.1", 0))
    sock.listen(8)
    body = b'{"a": "bcd"}'

    def _serve() -> None:
        try:
            conn, _ = sock.accept()
        except OSError:
            return
        with conn:
            try:
                conn.recv(65536)
                conn.sendall(
                    b"HTTP/1.1 200 OK\r\nContent-Type: application/json\r\n"
                    + f"Content-Length: {len(body)}\r\n\r\n".encode("ascii")
                )
                for i in range(len(body)):
                    time.sleep(0.3)
                    conn.sendall(body[i : i + 1])
            except OSError:
                return

    thread = threading.Thread(target=_serve, daemon=True)
    thread.start()
    try:
        yield f"http://127.0.0.1:{sock.getsockname()[1]}"
    finally:
        sock.close()
        thread.join(timeout=5)


def test_slow_body_does_not_outlive_timeout(dripping_server) -> None:
    client = StreamChatClient("key", SECRET, with_base_url(dripping_server), with_timeout(0.5))

    started = time.monotonic()
    with pytest.raises(RequestTimeout):
        client.get("channels", result_type=dict)
    elapsed = time.monotonic() - started

    assert 0.4 <= elapsed < 1.5
