from __future__ import annotations

import pytest

from regrelay.api.parsing import QueryCommand, QueryError, parse_query


def test_parses_the_three_commands() -> None:
    assert parse_query("regid=tok-1") == QueryCommand(action="register", device_id="tok-1")
    assert parse_query("?di=tok-1") == QueryCommand(action="unregister", device_id="tok-1")
    assert parse_query("l") == QueryCommand(action="list")
    assert parse_query("l=") == QueryCommand(action="list")


def test_decodes_percent_encoded_tokens() -> None:
    cmd = parse_query("regid=sender%3Aabc-_def")
    assert cmd.device_id == "sender:abc-_def"


def test_first_parameter_selects_the_command() -> None:
    assert parse_query("l&regid=x").action == "list"
    assert parse_query("di=x&l").action == "unregister"


@pytest.mark.parametrize("raw", ["", "?", "&&", "unknown", "regid=", "di=%20", "foo=bar"])
def test_rejects_invalid_queries(raw: str) -> None:
    with pytest.raises(QueryError):
        parse_query(raw)
