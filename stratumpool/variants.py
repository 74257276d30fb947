"""Cryptographic variant selection and per-algorithm overrides."""

from __future__ import annotations

from enum import IntEnum
from typing import Mapping

from .algorithms import AlgorithmId
from .errors import InvalidVariantError


class VariantId(IntEnum):
    """Variant requested for an algorithm; ``AUTO`` lets the pool decide."""

    AUTO = -1
    V0 = 0
    V1 = 1


# Algorithms that always hash with one variant whatever was configured.
FORCED_VARIANTS: Mapping[AlgorithmId, VariantId] = {
    AlgorithmId.CRYPTONIGHT_HEAVY: VariantId.V0,
    AlgorithmId.CRYPTONIGHT_IPBC: VariantId.V1,
}


def effective_variant(algorithm: AlgorithmId, configured: VariantId) -> VariantId:
    """Return the variant a consumer should use for ``algorithm``."""

    return FORCED_VARIANTS.get(algorithm, configured)


def coerce_variant(value: int) -> VariantId:
    """Validate a raw variant ordinal."""

    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidVariantError(value)
    try:
        return VariantId(value)
    except ValueError as exc:
        raise InvalidVariantError(value) from exc


__all__ = ["FORCED_VARIANTS", "VariantId", "coerce_variant", "effective_variant"]
