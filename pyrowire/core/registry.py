import logging
import threading
from typing import Callable

from pyrowire.core.models.errors import SerializerInitError, UnsupportedSerializerError
from pyrowire.core.ports.serializer import Serializer


SerializerFactory = Callable[[], Serializer]


class SerializerRegistry:
    """
    Process-wide table from wire tag to serializer instance.

    Each serializer is built lazily, at most once, the first time it is
    requested through create(). Construction runs under a lock; lookups of
    an already built serializer never take it. A failed construction leaves
    the slot empty, so the next attempt runs the factory again and reports
    the same failure instead of handing out a half-built instance.
    """

    def __init__(self) -> None:
        self._factories: dict[int, SerializerFactory] = {}
        self._instances: dict[int, Serializer] = {}
        self._lock = threading.Lock()
        self._logger = logging.getLogger("core.registry")

    def register_factory(self, serializer_id: int, factory: SerializerFactory) -> None:
        with self._lock:
            self._factories[int(serializer_id)] = factory

    def create(self, serializer_id: int) -> Serializer:
        """Return the serializer for serializer_id, building it if needed."""
        serializer_id = int(serializer_id)

        instance = self._instances.get(serializer_id)
        if instance is not None:
            return instance

        with self._lock:
            instance = self._instances.get(serializer_id)
            if instance is not None:
                return instance

            factory = self._factories.get(serializer_id)
            if factory is None:
                raise UnsupportedSerializerError(serializer_id)

            instance = self._build(serializer_id, factory)
            self._instances[serializer_id] = instance
            return instance

    def get_for(self, serializer_id: int) -> Serializer:
        """Return the already built serializer for serializer_id."""
        instance = self._instances.get(int(serializer_id))
        if instance is None:
            raise UnsupportedSerializerError(serializer_id)
        return instance

    def is_built(self, serializer_id: int) -> bool:
        return int(serializer_id) in self._instances

    @property
    def supported(self) -> frozenset[int]:
        return frozenset(self._factories)

    def _build(self, serializer_id: int, factory: SerializerFactory) -> Serializer:
        try:
            instance = factory()
        except SerializerInitError:
            self._logger.error(f"Serializer {serializer_id} could not be initialized")
            raise
        except Exception as ex:
            self._logger.error(f"Serializer {serializer_id} unavailable: {ex}")
            raise SerializerInitError(f"serializer {serializer_id} unavailable") from ex

        if instance.serializer_id != serializer_id:
            raise SerializerInitError(
                f"serializer registered for id {serializer_id} "
                f"reports id {instance.serializer_id}"
            )

        self._logger.debug(f"Serializer {serializer_id} built: {instance!r}")
        return instance
