"""Domain primitives: scalar aliases and well-known identifiers.

Scalar aliases may be promoted to proper value objects later without changing imports.
"""

from __future__ import annotations

from typing import Final

type ProductId = str
type ProductNumber = str
type CurrencyId = str
type RuleId = str
type StorageId = str
type VersionId = str

# Identifier of the canonical, publicly visible catalog partition.
LIVE_VERSION_ID: Final[VersionId] = "0fa91ce3e96a4bc2be4bd9ce752c3425"


def is_live_version(version_id: VersionId) -> bool:
    return version_id == LIVE_VERSION_ID
