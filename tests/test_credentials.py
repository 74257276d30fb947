"""Tests for credential string parsing."""

from __future__ import annotations

import pytest

from stratumpool.credentials import Credentials, parse_userpass
from stratumpool.errors import CredentialParseError, ParseErrorKind


def test_splits_on_first_colon() -> None:
    credentials = parse_userpass("alice:s3cr3t:with:colons")

    assert credentials.user == "alice"
    assert credentials.password == "s3cr3t:with:colons"


def test_empty_parts_are_allowed() -> None:
    assert parse_userpass(":") == Credentials(user="", password="")
    assert parse_userpass("wallet:") == Credentials(user="wallet", password="")


def test_missing_separator_is_rejected() -> None:
    with pytest.raises(CredentialParseError) as excinfo:
        parse_userpass("alice")

    assert excinfo.value.kind is ParseErrorKind.MISSING_SEPARATOR


def test_password_is_hidden_from_repr() -> None:
    credentials = Credentials(user="alice", password="hunter2")

    assert "hunter2" not in repr(credentials)
    assert "alice" in repr(credentials)
