"""
Keyed object store with secondary indices.

Objects are stored under the key produced by a key function. Every registered
index function derives one index value per object; objects sharing a value can
be listed together. Indices are kept in step with the stored objects on every
add, update, delete and replace.
"""

import logging
import threading
from typing import Any, Callable, Dict, Iterable, List, Optional

from binder.errors import IndexLookupError, KeyFuncError

logger = logging.getLogger(__name__)

KeyFunc = Callable[[Any], str]
IndexFunc = Callable[[Any], str]


def meta_namespace_key_func(obj: Any) -> str:
    """Key an object as "<namespace>/<name>", or "<name>" when it has no namespace."""
    name = getattr(obj, "name", None)
    if not name:
        raise KeyFuncError(f"object has no name: {obj!r}")
    namespace = getattr(obj, "namespace", "") or ""
    if namespace:
        return f"{namespace}/{name}"
    return str(name)


class Indexer:
    """
    Thread-safe keyed store with named secondary indices.

    Bucket contents are kept as insertion-ordered dicts so listings are
    reproducible.
    """

    def __init__(self, key_func: KeyFunc, indexers: Dict[str, IndexFunc]):
        """
        Args:
            key_func: Computes the storage key of an object
            indexers: Index name -> function deriving the index value of an object
        """
        self.key_func = key_func
        self.indexers = dict(indexers)
        self._items: Dict[str, Any] = {}
        # key -> index name -> value the object was filed under
        self._filed: Dict[str, Dict[str, str]] = {}
        self._indices: Dict[str, Dict[str, Dict[str, None]]] = {name: {} for name in self.indexers}
        self._lock = threading.RLock()

    # ========================================================================
    # MUTATIONS
    # ========================================================================

    def add(self, obj: Any) -> None:
        key = self._key(obj)
        with self._lock:
            self._put(key, obj)

    def update(self, obj: Any) -> None:
        self.add(obj)

    def delete(self, obj: Any) -> None:
        key = self._key(obj)
        with self._lock:
            if self._items.pop(key, None) is not None:
                self._unfile(key)

    def replace(self, objs: Iterable[Any]) -> None:
        """Drop everything and load objs instead. Nothing changes if any object fails."""
        items: Dict[str, Any] = {}
        filed: Dict[str, Dict[str, str]] = {}
        for obj in objs:
            key = self._key(obj)
            items[key] = obj
            filed[key] = self._index_values(obj)

        indices: Dict[str, Dict[str, Dict[str, None]]] = {name: {} for name in self.indexers}
        for key, values in filed.items():
            for name, value in values.items():
                indices[name].setdefault(value, {})[key] = None

        with self._lock:
            self._items = items
            self._filed = filed
            self._indices = indices
        logger.debug(f"Store replaced with {len(items)} objects")

    # ========================================================================
    # READS
    # ========================================================================

    def get(self, obj: Any) -> Optional[Any]:
        return self.get_by_key(self._key(obj))

    def get_by_key(self, key: str) -> Optional[Any]:
        with self._lock:
            return self._items.get(key)

    def list(self) -> List[Any]:
        with self._lock:
            return list(self._items.values())

    def list_keys(self) -> List[str]:
        with self._lock:
            return list(self._items.keys())

    def index(self, index_name: str, obj: Any) -> List[Any]:
        """
        Return every stored object whose index value equals obj's.

        Raises:
            IndexLookupError: unknown index, or obj's index value cannot be derived
        """
        func = self._index_func(index_name)
        try:
            indexed_value = func(obj)
        except Exception as exc:
            logger.warning(f"Cannot derive '{index_name}' index value for lookup: {exc}")
            raise IndexLookupError(f"Unable to compute '{index_name}' index value: {exc}") from exc
        return self.by_index(index_name, indexed_value)

    def by_index(self, index_name: str, indexed_value: str) -> List[Any]:
        self._index_func(index_name)
        with self._lock:
            keys = self._indices[index_name].get(indexed_value, {})
            return [self._items[key] for key in keys]

    def list_index_func_values(self, index_name: str) -> List[str]:
        self._index_func(index_name)
        with self._lock:
            return list(self._indices[index_name].keys())

    # ========================================================================
    # INTERNALS
    # ========================================================================

    def _key(self, obj: Any) -> str:
        try:
            return self.key_func(obj)
        except KeyFuncError:
            raise
        except Exception as exc:
            raise KeyFuncError(f"Unable to compute key for {obj!r}: {exc}") from exc

    def _index_func(self, index_name: str) -> IndexFunc:
        func = self.indexers.get(index_name)
        if func is None:
            raise IndexLookupError(f"Index with name {index_name} does not exist")
        return func

    def _index_values(self, obj: Any) -> Dict[str, str]:
        return {name: func(obj) for name, func in self.indexers.items()}

    def _put(self, key: str, obj: Any) -> None:
        # Derive every value before touching state so a failing index func changes nothing
        values = self._index_values(obj)
        if key in self._items:
            self._unfile(key)
        self._items[key] = obj
        self._filed[key] = values
        for name, value in values.items():
            self._indices[name].setdefault(value, {})[key] = None

    def _unfile(self, key: str) -> None:
        for name, value in self._filed.pop(key, {}).items():
            bucket = self._indices[name].get(value)
            if bucket is None:
                continue
            bucket.pop(key, None)
            if not bucket:
                del self._indices[name][value]
