"""Algorithm registry with per-build feature flags."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, Iterator, Mapping

from .errors import AlgorithmNotEnabledError

LOG = logging.getLogger(__name__)


class AlgorithmId(IntEnum):
    """Hashing algorithms a pool can be configured for."""

    INVALID = -1
    CRYPTONIGHT = 0
    CRYPTONIGHT_LITE = 1
    CRYPTONIGHT_HEAVY = 2
    CRYPTONIGHT_IPBC = 3


@dataclass(frozen=True, slots=True)
class AlgorithmSpec:
    """Canonical names for one algorithm slot."""

    id: AlgorithmId
    name: str
    short_name: str
    feature: str | None = None


# Table order is significant: resolution returns the first match.
ALGORITHM_SPECS: tuple[AlgorithmSpec, ...] = (
    AlgorithmSpec(AlgorithmId.CRYPTONIGHT, "cryptonight", "cn"),
    AlgorithmSpec(AlgorithmId.CRYPTONIGHT_LITE, "cryptonight-lite", "cn-lite", feature="aeon"),
    AlgorithmSpec(AlgorithmId.CRYPTONIGHT_HEAVY, "cryptonight-heavy", "cn-heavy", feature="sumo"),
    AlgorithmSpec(AlgorithmId.CRYPTONIGHT_IPBC, "cryptonight-ipbc", "cn-ipbc", feature="ipbc"),
)

DEPRECATED_ALIASES: Mapping[str, AlgorithmId] = {
    "cryptonight-light": AlgorithmId.CRYPTONIGHT_LITE,
}


class AlgorithmTable:
    """Resolves algorithm names against the slots enabled for this process."""

    def __init__(self, enabled: Iterable[AlgorithmId] | None = None) -> None:
        wanted = set(enabled) if enabled is not None else None
        self._specs: tuple[AlgorithmSpec, ...] = tuple(
            spec
            for spec in ALGORITHM_SPECS
            if spec.feature is None or wanted is None or spec.id in wanted
        )
        self._by_id: dict[AlgorithmId, AlgorithmSpec] = {spec.id: spec for spec in self._specs}

    @classmethod
    def from_flags(cls, flags: Mapping[str, bool]) -> AlgorithmTable:
        """Build a table from ``name -> enabled`` flags.

        Keys may be a long name, a short name or a feature name (``aeon``,
        ``sumo``, ``ipbc``) and are matched case-insensitively. Slots not
        mentioned stay enabled; the base algorithm cannot be disabled.
        """

        disabled: set[AlgorithmId] = set()
        for key, enabled in flags.items():
            spec = _spec_for_flag(key)
            if spec is None:
                LOG.warning("Ignoring unknown algorithm flag", extra={"flag": key})
                continue
            if not enabled and spec.feature is not None:
                disabled.add(spec.id)
        return cls(spec.id for spec in ALGORITHM_SPECS if spec.id not in disabled)

    def __iter__(self) -> Iterator[AlgorithmSpec]:
        return iter(self._specs)

    def __contains__(self, algorithm: object) -> bool:
        return algorithm in self._by_id

    def is_enabled(self, algorithm: AlgorithmId) -> bool:
        return algorithm in self._by_id

    def name_of(self, algorithm: AlgorithmId, short: bool = False) -> str:
        """Return the canonical long (or short) name for ``algorithm``."""

        if algorithm == AlgorithmId.INVALID:
            return "invalid"
        spec = self._by_id.get(algorithm)
        if spec is None:
            raise AlgorithmNotEnabledError(f"Algorithm {AlgorithmId(algorithm).name} is not enabled")
        return spec.short_name if short else spec.name

    def resolve(self, name: str) -> AlgorithmId:
        """Case-insensitively map a long name, short name or legacy alias to an id.

        Unknown names are reported on the module logger and come back as
        ``AlgorithmId.INVALID`` so the caller can decide how fatal that is.
        """

        key = name.lower()
        alias = DEPRECATED_ALIASES.get(key)
        if alias is not None and alias in self._by_id:
            LOG.warning(
                'Algorithm "%s" is deprecated, use "%s" instead',
                key,
                self._by_id[alias].name,
                extra={"algorithm": name},
            )
            return alias
        for spec in self._specs:
            if spec.name == key:
                return spec.id
        for spec in self._specs:
            if spec.short_name == key:
                return spec.id
        LOG.warning('Unknown algorithm "%s" specified.', name, extra={"algorithm": name})
        return AlgorithmId.INVALID


def _spec_for_flag(key: str) -> AlgorithmSpec | None:
    lowered = key.lower()
    for spec in ALGORITHM_SPECS:
        if lowered in (spec.name, spec.short_name, spec.feature):
            return spec
    return None


DEFAULT_TABLE = AlgorithmTable()


__all__ = [
    "ALGORITHM_SPECS",
    "AlgorithmId",
    "AlgorithmSpec",
    "AlgorithmTable",
    "DEFAULT_TABLE",
    "DEPRECATED_ALIASES",
]
