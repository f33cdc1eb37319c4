"""Single-round-trip batched lookups.

Identifier resolution and snapshot loading share one shape: take a set of keys,
issue one query, get back a mapping that simply omits keys without a match.
"""

from __future__ import annotations

from collections.abc import Callable, Collection, Hashable, Iterable, Mapping

type BatchedLookup[K: Hashable, V] = Callable[[Collection[K]], Mapping[K, V]]


def batched_lookup[K: Hashable, V](
    keys: Iterable[K],
    lookup: BatchedLookup[K, V],
) -> dict[K, V]:
    """Run ``lookup`` once over the distinct ``keys``.

    Keys are deduplicated in first-seen order. No call is made for an empty key
    set. Entries the lookup returns for keys that were not asked for are dropped.
    """

    unique_keys = tuple(dict.fromkeys(keys))
    if not unique_keys:
        return {}
    found = lookup(unique_keys)
    return {key: found[key] for key in unique_keys if key in found}
