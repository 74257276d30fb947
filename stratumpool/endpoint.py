"""Connection string grammar for pool endpoints.

Accepted forms::

    host
    host:port
    stratum+tcp://host
    stratum+tcp://host:port
    [ipv6-literal]:port
    stratum+tcp://[ipv6-literal]:port

The scheme check fires whenever ``://`` appears anywhere in the input, not
only at the start, so ``pool.example.com/a://b`` is rejected as an
unsupported scheme. Bracketed IPv6 literals must carry an explicit port.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from .errors import EndpointParseError, ParseErrorKind

DEFAULT_PORT = 3333
SCHEME = "stratum+tcp://"

_PORT_PREFIX = re.compile(r"\s*([+-]?)(\d+)", re.ASCII)

# strtol saturates at the bounds of a 64-bit long before the 16-bit cast.
_LONG_MAX = 2**63 - 1
_LONG_MIN = -(2**63)
_LONG_DIGITS = 19


@dataclass(frozen=True, slots=True)
class Endpoint:
    """Host/port pair plus the string it was parsed from."""

    host: str = ""
    port: int = DEFAULT_PORT
    url: str = ""


def parse_endpoint(raw: str) -> Endpoint:
    """Parse ``raw`` into an :class:`Endpoint` or raise :class:`EndpointParseError`."""

    base = raw
    if "://" in raw:
        if raw[: len(SCHEME)].lower() != SCHEME:
            raise EndpointParseError(
                ParseErrorKind.UNSUPPORTED_SCHEME,
                raw,
                f"Unsupported scheme in '{raw}', only {SCHEME} is accepted",
            )
        base = raw[len(SCHEME) :]

    if not base or base.startswith("/"):
        raise EndpointParseError(
            ParseErrorKind.EMPTY_OR_PATH_LIKE_HOST,
            raw,
            f"Missing host in '{raw}'",
        )

    if base.startswith("["):
        host, port = _parse_ipv6(raw, base)
    else:
        host, sep, port_text = base.partition(":")
        port = parse_port(port_text) if sep else DEFAULT_PORT

    if not host:
        raise EndpointParseError(
            ParseErrorKind.EMPTY_OR_PATH_LIKE_HOST,
            raw,
            f"Missing host in '{raw}'",
        )
    return Endpoint(host=host, port=port, url=raw)


def parse_port(text: str) -> int:
    """Read a leading base-10 integer the way ``strtol`` does, truncated to 16 bits.

    Only ASCII whitespace and digits count. Trailing garbage is ignored, text
    without digits yields ``0`` and out-of-range values saturate like ``strtol``.
    """

    match = _PORT_PREFIX.match(text)
    if match is None:
        return 0
    sign, digits = match.group(1), match.group(2).lstrip("0")
    if len(digits) > _LONG_DIGITS:
        value = _LONG_MIN if sign == "-" else _LONG_MAX
    else:
        value = max(_LONG_MIN, min(int(sign + (digits or "0")), _LONG_MAX))
    return value & 0xFFFF


def _parse_ipv6(raw: str, base: str) -> tuple[str, int]:
    end = base.find("]")
    if end == -1:
        raise EndpointParseError(
            ParseErrorKind.UNTERMINATED_BRACKET,
            raw,
            f"Unterminated IPv6 literal in '{raw}'",
        )
    colon = base.find(":", end)
    if colon == -1:
        raise EndpointParseError(
            ParseErrorKind.MISSING_PORT,
            raw,
            f"IPv6 endpoint '{raw}' requires an explicit port",
        )
    return base[1:end], parse_port(base[colon + 1 :])


__all__ = ["DEFAULT_PORT", "Endpoint", "SCHEME", "parse_endpoint", "parse_port"]
