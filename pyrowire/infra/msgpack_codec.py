from typing import Any

import msgpack

from pyrowire.core.codec.tree import ConverterTable, ToDict, flatten, materialize
from pyrowire.core.resolver import Resolve


class MsgPackCodec:
    """
    ValueCodec over msgpack.

    - compact binary encoding
    - native bytes support
    - no set type: sets always travel as arrays
    """
    name = "msgpack"

    def __init__(self) -> None:
        self._converters = ConverterTable()

    @property
    def version(self) -> tuple[int, ...]:
        return tuple(msgpack.version[:3])

    @property
    def minimum_version(self) -> tuple[int, ...]:
        return 1, 0

    def register_class_converter(self, native_type: type, to_dict: ToDict) -> None:
        self._converters.register(native_type, to_dict)

    def encode(self, value: Any, *, indent: bool = False, set_literals: bool = True) -> bytes:
        tree = flatten(value, self._converters, set_literals=False)
        return msgpack.packb(tree, use_bin_type=True)

    def parse(self, data: bytes) -> Any:
        return msgpack.unpackb(data, raw=False, strict_map_key=False)

    def materialize(self, tree: Any, resolve: Resolve) -> Any:
        return materialize(tree, resolve)
