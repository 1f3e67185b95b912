from typing import Any

from pyrowire.core.models.message import SerializerId
from pyrowire.core.serializer import CodecSerializer
from pyrowire.infra.serpent_codec import SerpentCodec


class SerpentSerializer(CodecSerializer):
    """
    Serpent based implementation of the Serializer interface.
    This is the default serializer of the Pyro4 protocol.
    """
    serializer_id = SerializerId.SERPENT

    def __init__(self, *, indent: bool = False, set_literals: bool = True):
        super().__init__(SerpentCodec(), indent=indent, set_literals=set_literals)

    @staticmethod
    def to_bytes(obj: Any) -> bytes:
        """
        Convert obj back to bytes if it is a serpent-encoded bytes mapping.
        Bytes-like objects are returned as bytes; anything else is a TypeError.
        """
        if isinstance(obj, (bytes, bytearray, memoryview)):
            return bytes(obj)

        if isinstance(obj, dict):
            result = SerpentCodec.bytes_hook(obj)
            if isinstance(result, bytes):
                return result

        raise TypeError(f"cannot convert {type(obj).__name__} to bytes")
