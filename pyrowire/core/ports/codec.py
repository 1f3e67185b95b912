from typing import Protocol, Any

from pyrowire.core.codec.tree import ToDict
from pyrowire.core.resolver import Resolve


class ValueCodec(Protocol):
    """
    Boundary to the library that reads and writes the generic value tree
    (maps, sequences, sets, bytes and primitives).

    The serializer only depends on the operations below; how the library
    is located and loaded is up to the implementation.
    """

    name: str

    @property
    def version(self) -> tuple[int, ...]:
        """Version of the underlying library."""

    @property
    def minimum_version(self) -> tuple[int, ...]:
        """Oldest library version this codec can work with."""

    def register_class_converter(self, native_type: type, to_dict: ToDict) -> None:
        """Teach the codec how to turn instances of native_type into a tagged dict."""

    def encode(self, value: Any, *, indent: bool = False, set_literals: bool = True) -> bytes:
        """Encode a value tree, converting registered classes first."""

    def parse(self, data: bytes) -> Any:
        """Parse bytes into a generic value tree."""

    def materialize(self, tree: Any, resolve: Resolve) -> Any:
        """Rebuild native objects from tagged dicts found in the tree."""
