class BinderError(Exception):
    """Base class for volume binder errors"""


class NotAPersistentVolumeError(BinderError, TypeError):
    """Raised when an index function receives something other than a PersistentVolume"""

    def __init__(self, obj):
        super().__init__(f"object is not a persistent volume: {obj!r}")
        self.obj = obj


class KeyFuncError(BinderError):
    """Raised when the store cannot compute a key for an object"""


class IndexLookupError(BinderError):
    """Raised when an indexed lookup against the store fails"""
