import httpx

from bocchi.net import HTTP_TIMEOUT, http_client


def test_client_is_shared():
    first = http_client()
    second = http_client()
    assert first is second
    assert second.timeout.read == HTTP_TIMEOUT


def test_client_timeout():
    client = http_client()
    assert isinstance(client, httpx.AsyncClient)
    assert client.timeout.read == HTTP_TIMEOUT
    assert client.timeout.connect == 600


def test_client_follows_redirects():
    assert http_client().follow_redirects is True