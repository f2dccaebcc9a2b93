from __future__ import annotations

import pytest

from regrelay.core.errors import ParseError
from regrelay.core.results import QueryResult, devices_payload


def test_success_and_failure_serialization() -> None:
    assert QueryResult.ok().to_dict() == {"result": "success"}
    assert QueryResult.failure("nope").to_dict() == {"result": "failure", "reason": "nope"}

    body = {"result": "success", **devices_payload(["a", "b"])}
    assert body == {"result": "success", "num": 2, "0": "a", "1": "b"}


def test_from_dict_reads_list_results() -> None:
    res = QueryResult.from_dict({"result": "success", "num": 2, "0": "a", "1": "b"})
    assert res.success
    assert res.is_list
    assert res.device_ids() == ["a", "b"]


def test_from_dict_failure_without_reason() -> None:
    res = QueryResult.from_dict({"result": "failure"})
    assert not res.success
    assert res.reason == "unknown"


@pytest.mark.parametrize("body", [[], "success", {"num": 1}])
def test_from_dict_rejects_unexpected_bodies(body: object) -> None:
    with pytest.raises(ParseError):
        QueryResult.from_dict(body)


def test_device_ids_requires_every_index() -> None:
    res = QueryResult.from_dict({"result": "success", "num": 2, "0": "a"})
    with pytest.raises(ParseError):
        res.device_ids()

    bad_num = QueryResult.from_dict({"result": "success", "num": "two"})
    with pytest.raises(ParseError):
        bad_num.device_ids()
