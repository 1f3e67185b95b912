import base64
from typing import Any

import serpent

from pyrowire.core.codec.tree import ConverterTable, ToDict, flatten, materialize
from pyrowire.core.helpers.utils import parse_version
from pyrowire.core.resolver import Resolve, UNRESOLVED


class SerpentCodec:
    """
    ValueCodec over the serpent library (Python literal expressions).

    - human readable, safe to parse (no code execution)
    - supports sets, tuples and nested containers
    - bytes travel as {"data": <base64>, "encoding": "base64"}

    Decoding turns every mapping of exactly that shape back into bytes,
    including a plain dict that only happens to look like one. Such a dict
    does not survive a round trip; send it with an extra key, or use
    SerpentSerializer.to_bytes on a raw parse when the distinction matters.
    """
    name = "serpent"

    def __init__(self) -> None:
        self._converters = ConverterTable()

    @property
    def version(self) -> tuple[int, ...]:
        return parse_version(serpent.__version__)

    @property
    def minimum_version(self) -> tuple[int, ...]:
        return 1, 27

    def register_class_converter(self, native_type: type, to_dict: ToDict) -> None:
        self._converters.register(native_type, to_dict)

    def encode(self, value: Any, *, indent: bool = False, set_literals: bool = True) -> bytes:
        tree = flatten(value, self._converters, set_literals)
        return serpent.dumps(tree, indent=indent)

    def parse(self, data: bytes) -> Any:
        return serpent.loads(data)

    def materialize(self, tree: Any, resolve: Resolve) -> Any:
        return materialize(tree, resolve, self.bytes_hook)

    @staticmethod
    def bytes_hook(mapping: dict) -> Any:
        if set(mapping) == {"data", "encoding"} and mapping["encoding"] == "base64":
            if isinstance(mapping["data"], str):
                return base64.b64decode(mapping["data"])
        return UNRESOLVED
