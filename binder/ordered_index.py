"""
Persistent Volume Ordered Index

Keeps persistent volumes indexed by their access modes and answers
"which available volume best fits this claim" by searching the volumes that
share the claim's access-mode signature in ascending order of capacity.

Only volumes whose signature is identical to the requested one are candidates:
a volume offering RWO+ROX is never offered to a claim asking for RWO alone.
"""

import logging
from typing import Any, Callable, Iterable, List, Optional, Sequence, Union

from binder.access_modes import get_access_modes_as_string
from binder.cache import Indexer, meta_namespace_key_func
from binder.config import ACCESS_MODES_INDEX, RESOURCE_STORAGE
from binder.errors import NotAPersistentVolumeError
from binder.models import AccessMode, PersistentVolume, PersistentVolumeClaim

logger = logging.getLogger(__name__)

# (compare_this, to_this) -> bool. In find(), compare_this is the probe and
# to_this is the candidate under test.
MatchPredicate = Callable[[PersistentVolume, PersistentVolume], bool]


def access_modes_index_func(obj: Any) -> str:
    """Index function returning a persistent volume's access modes as a signature string."""
    if isinstance(obj, PersistentVolume):
        return get_access_modes_as_string(obj.access_modes)
    raise NotAPersistentVolumeError(obj)


# ============================================================================
# MATCH PREDICATES
# ============================================================================

def match_storage_capacity(compare_this: PersistentVolume, to_this: PersistentVolume) -> bool:
    """
    True when compare_this is unbound and no larger than to_this.

    Only compare_this is checked for a claim reference.
    """
    if compare_this.is_bound:
        return False
    return compare_this.storage_capacity <= to_this.storage_capacity


def filter_bound_volumes(compare_this: PersistentVolume, to_this: PersistentVolume) -> bool:
    """match_storage_capacity, but False as soon as either side is bound."""
    if compare_this.is_bound or to_this.is_bound:
        return False
    return match_storage_capacity(compare_this, to_this)


def by_capacity(volume: PersistentVolume):
    """Sort key: unbound volumes first, then ascending storage capacity."""
    return (volume.is_bound, volume.storage_capacity)


def _search(n: int, f: Callable[[int], bool]) -> int:
    """Smallest i in [0, n) for which f(i) is true, or n. f must be monotonic."""
    lo, hi = 0, n
    while lo < hi:
        mid = (lo + hi) // 2
        if f(mid):
            hi = mid
        else:
            lo = mid + 1
    return lo


# ============================================================================
# ORDERED INDEX
# ============================================================================

class PersistentVolumeOrderedIndex:
    """
    Store of persistent volumes indexed by access modes and ordered by storage capacity.

    Mutations go straight to the underlying Indexer. No locking is done here:
    callers that need "find a volume" and "mark it bound" to be atomic must
    serialise those steps themselves.
    """

    def __init__(self, indexer: Optional[Indexer] = None):
        """
        Args:
            indexer: Store to wrap. Must register access_modes_index_func under
                ACCESS_MODES_INDEX. A fresh one is created when omitted.
        """
        if indexer is None:
            indexer = Indexer(meta_namespace_key_func, {ACCESS_MODES_INDEX: access_modes_index_func})
        self.indexer = indexer

    # ========================================================================
    # STORE PASSTHROUGH
    # ========================================================================

    def add(self, volume: PersistentVolume) -> None:
        self.indexer.add(volume)

    def update(self, volume: PersistentVolume) -> None:
        self.indexer.update(volume)

    def delete(self, volume: PersistentVolume) -> None:
        self.indexer.delete(volume)

    def replace(self, volumes: Iterable[PersistentVolume]) -> None:
        self.indexer.replace(volumes)

    def get(self, volume: PersistentVolume) -> Optional[PersistentVolume]:
        return self.indexer.get(volume)

    def get_by_key(self, key: str) -> Optional[PersistentVolume]:
        return self.indexer.get_by_key(key)

    def list(self) -> List[PersistentVolume]:
        return self.indexer.list()

    def list_keys(self) -> List[str]:
        return self.indexer.list_keys()

    # ========================================================================
    # QUERIES
    # ========================================================================

    def list_by_access_modes(self, modes: Sequence[AccessMode]) -> List[PersistentVolume]:
        """
        List volumes with exactly the given set of access modes, smallest capacity first.

        Bound volumes come after every unbound one. Volumes with equal capacity
        keep the order in which the store returned them.

        Raises:
            IndexLookupError: the indexed lookup failed
        """
        probe = PersistentVolume(access_modes=list(modes))
        volumes = self.indexer.index(ACCESS_MODES_INDEX, probe)
        return sorted(volumes, key=by_capacity)

    def find(self, probe: PersistentVolume, match_predicate: MatchPredicate) -> Optional[PersistentVolume]:
        """
        Return the first volume in capacity order that match_predicate accepts, or None.

        Args:
            probe: Volume carrying the requested access modes (and capacity)
            match_predicate: Called as match_predicate(probe, candidate). Must be
                monotonic over the unbound candidates in capacity order.

        Bound volumes are excluded before the search: match_predicate is never
        called with a bound candidate, so even an always-true predicate returns
        None when every candidate is bound.
        """
        volumes = self.list_by_access_modes(probe.access_modes)
        # Bound volumes sort last and are never handed out
        available = _search(len(volumes), lambda i: volumes[i].is_bound)

        i = _search(available, lambda i: match_predicate(probe, volumes[i]))
        if i < available:
            logger.debug(
                f"Matched volume '{volumes[i].name}' ({volumes[i].storage_capacity}) "
                f"out of {available} available, {len(volumes) - available} bound"
            )
            return volumes[i]

        logger.debug(
            f"No match for modes={get_access_modes_as_string(probe.access_modes)!r} "
            f"among {available} available volumes"
        )
        return None

    def find_by_access_modes_and_storage_capacity(
        self,
        modes: Sequence[AccessMode],
        qty: Union[int, str],
    ) -> Optional[PersistentVolume]:
        """Find the smallest unbound volume with exactly these modes and at least qty storage."""
        probe = PersistentVolume(
            access_modes=list(modes),
            capacity={RESOURCE_STORAGE: qty},
        )
        return self.find(probe, filter_bound_volumes)

    def find_best_match_for_claim(self, claim: PersistentVolumeClaim) -> Optional[PersistentVolume]:
        """Find the volume that best satisfies the claim's access modes and storage request."""
        volume = self.find_by_access_modes_and_storage_capacity(claim.access_modes, claim.requested_storage)
        if volume is None:
            logger.info(f"No available volume for claim '{claim.namespace}/{claim.name}'")
        else:
            logger.info(f"Claim '{claim.namespace}/{claim.name}' best matched by volume '{volume.name}'")
        return volume
