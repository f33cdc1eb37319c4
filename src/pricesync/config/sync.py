"""Reconciliation defaults for price and stock batches."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Final

from pricesync.domain.model import LIVE_VERSION_ID

from .env import optional_env_var
from .errors import ConfigurationError

_VERSION_ID_PATTERN: Final = re.compile(r"^[0-9a-f]{32}$")


@dataclass(frozen=True, slots=True)
class ReconciliationConfig:
    """Working catalog version the batches are applied to."""

    version_id: str = LIVE_VERSION_ID


def get_reconciliation_config(*, version_id: str | None = None) -> ReconciliationConfig:
    resolved = version_id or optional_env_var("PRICESYNC_VERSION_ID") or LIVE_VERSION_ID
    resolved = resolved.lower()
    if not _VERSION_ID_PATTERN.match(resolved):
        raise ConfigurationError(f"Invalid version id: {resolved!r}")
    return ReconciliationConfig(version_id=resolved)
