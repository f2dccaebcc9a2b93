from __future__ import annotations


def _skip(msg: str) -> None:  # pragma: no cover
    try:
        import pytest  # type: ignore

        pytest.skip(msg)
    except Exception:
        raise RuntimeError(msg)


def _client():
    from regrelay.core.registry import InMemoryRegistry
    from regrelay.runtime.app import create_app

    try:
        from fastapi.testclient import TestClient
    except Exception as e:  # pragma: no cover
        _skip(f"TestClient not available ({e!r}); install test extras to run this test")
        return None, None

    reg = InMemoryRegistry()
    return TestClient(create_app(reg)), reg


def test_register_list_unregister_roundtrip() -> None:
    client, reg = _client()

    res = client.get("/?regid=tok-a")
    assert res.status_code == 200
    assert res.json() == {"result": "success"}
    client.get("/?regid=tok-b")
    client.get("/?regid=tok-a")
    assert reg.list() == ["tok-a", "tok-b"]

    listed = client.get("/?l")
    assert listed.status_code == 200
    assert listed.json() == {"result": "success", "num": 2, "0": "tok-a", "1": "tok-b"}

    gone = client.get("/?di=tok-a")
    assert gone.json() == {"result": "success"}
    assert reg.list() == ["tok-b"]


def test_unregister_unknown_device_succeeds() -> None:
    client, reg = _client()
    reg.register("tok-a")

    res = client.get("/?di=never-registered")
    assert res.status_code == 200
    assert res.json()["result"] == "success"
    assert reg.list() == ["tok-a"]


def test_empty_list() -> None:
    client, _ = _client()
    assert client.get("/?l").json() == {"result": "success", "num": 0}


def test_semantic_failures_are_http_200() -> None:
    client, reg = _client()

    for path in ("/?unknown", "/", "/?regid=", "/?di=", "/?foo=bar"):
        res = client.get(path)
        assert res.status_code == 200, path
        body = res.json()
        assert body["result"] == "failure", path
        assert body["reason"], path

    assert reg.count() == 0


def test_healthz() -> None:
    client, _ = _client()
    res = client.get("/healthz")
    assert res.status_code == 200
    assert res.json() == {"ok": True}
