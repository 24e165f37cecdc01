"""Thread-safe singleton base class."""

import threading
import weakref
from typing import Any, ClassVar, Generic, TypeVar

T = TypeVar("T", bound="Singleton")


class Singleton(Generic[T]):
    """Base class giving each subclass a single shared instance.

    Subclasses guard their ``__init__`` with ``self._initialized`` since Python
    calls ``__init__`` on every construction, even when the cached instance is
    returned. Passing ``stub=True`` builds a fresh, unregistered instance for tests.
    """

    _instances: ClassVar[weakref.WeakKeyDictionary[type, Any]] = (
        weakref.WeakKeyDictionary()
    )
    _lock: ClassVar[threading.RLock] = threading.RLock()
    _initialized: bool

    def __new__(cls, *args: Any, stub: bool = False, **kwargs: Any) -> Any:
        if stub:
            instance = super().__new__(cls)
            instance._initialized = False
            return instance

        with cls._lock:
            instance = cls._instances.get(cls)
            if instance is None:
                instance = super().__new__(cls)
                instance._initialized = False
                cls._instances[cls] = instance
            return instance

    @classmethod
    def reset(cls) -> None:
        """Forget the cached instance so the next construction builds a new one."""
        with cls._lock:
            cls._instances.pop(cls, None)
