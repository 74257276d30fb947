"""``user:password`` credential strings."""

from __future__ import annotations

from dataclasses import dataclass, field

from .errors import CredentialParseError, ParseErrorKind


@dataclass(frozen=True, slots=True)
class Credentials:
    """Login sent to the pool."""

    user: str = ""
    password: str = field(default="", repr=False)


def parse_userpass(raw: str) -> Credentials:
    """Split on the first ``:``; the password keeps any further colons."""

    user, sep, password = raw.partition(":")
    if not sep:
        raise CredentialParseError(
            ParseErrorKind.MISSING_SEPARATOR,
            raw,
            "Credentials must be given as 'user:password'",
        )
    return Credentials(user=user, password=password)


__all__ = ["Credentials", "parse_userpass"]
