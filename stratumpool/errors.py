"""Error types raised while parsing and normalizing pool descriptors."""

from __future__ import annotations

from enum import Enum


class ParseErrorKind(str, Enum):
    """Reasons a connection or credential string was rejected."""

    UNSUPPORTED_SCHEME = "unsupported_scheme"
    EMPTY_OR_PATH_LIKE_HOST = "empty_or_path_like_host"
    UNTERMINATED_BRACKET = "unterminated_bracket"
    MISSING_PORT = "missing_port"
    MISSING_SEPARATOR = "missing_separator"


class PoolError(ValueError):
    """Base error for pool descriptor failures."""


class _InputError(PoolError):
    def __init__(self, kind: ParseErrorKind, raw: str, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.raw = raw


class EndpointParseError(_InputError):
    """Raised when a connection string does not match the accepted grammar."""


class CredentialParseError(_InputError):
    """Raised when a ``user:password`` string has no separator."""


class InvalidVariantError(PoolError):
    """Raised when a variant outside of auto/v0/v1 is requested."""

    def __init__(self, value: object) -> None:
        super().__init__(f"Invalid variant {value!r}; expected one of -1 (auto), 0, 1")
        self.value = value


class AlgorithmNotEnabledError(PoolError, LookupError):
    """Raised when rendering an algorithm whose slot is disabled."""


__all__ = [
    "AlgorithmNotEnabledError",
    "CredentialParseError",
    "EndpointParseError",
    "InvalidVariantError",
    "ParseErrorKind",
    "PoolError",
]
