import logging
from typing import Any, Mapping, Sequence

from pyrowire.core.helpers.utils import format_version
from pyrowire.core.models.errors import SerializerInitError
from pyrowire.core.models.message import CallEnvelope
from pyrowire.core.models.proxy import Proxy
from pyrowire.core.models.uri import URI
from pyrowire.core.picklers import UriPickler, ExceptionPickler, ProxyPickler
from pyrowire.core.ports.codec import ValueCodec
from pyrowire.core.resolver import ClassResolver


class CodecSerializer:
    """
    Serializer built on top of a generic value codec.

    The codec does the actual reading and writing; this class feeds it the
    picklers for URIs, proxies and exceptions on the way out, and the class
    resolver on the way in. Subclasses pin the codec and the wire tag.

    The codec version is checked once, when the serializer is built. A
    serializer instance holds no per-call state and can be shared by
    threads.
    """
    serializer_id: int

    def __init__(
        self,
        codec: ValueCodec,
        *,
        indent: bool = False,
        set_literals: bool = True,
    ):
        self._codec = codec
        self._indent = indent
        self._set_literals = set_literals
        self._resolver = ClassResolver()
        self._logger = logging.getLogger("core.serializer")

        if codec.version < codec.minimum_version:
            raise SerializerInitError(
                f"{codec.name} version {format_version(codec.minimum_version)} "
                f"(or newer) is required, found {format_version(codec.version)}"
            )

        codec.register_class_converter(URI, UriPickler.to_dict)
        codec.register_class_converter(Proxy, ProxyPickler.to_dict)
        codec.register_class_converter(BaseException, ExceptionPickler.to_dict)

        self._logger.info(
            f"Serializer {self.serializer_id} ready using {codec.name} "
            f"{format_version(codec.version)}"
        )

    @property
    def codec(self) -> ValueCodec:
        return self._codec

    @property
    def resolver(self) -> ClassResolver:
        return self._resolver

    def serialize_call(
        self,
        object_id: str,
        method: str,
        vargs: Sequence[Any],
        kwargs: Mapping[str, Any],
    ) -> bytes:
        envelope = CallEnvelope(object_id=object_id, method=method, vargs=vargs, kwargs=kwargs)
        data = self._encode(envelope.as_tuple())
        self._logger.debug(f"Serialized call {object_id}.{method} ({len(data)} bytes)")
        return data

    def serialize_data(self, data: Any) -> bytes:
        return self._encode(data)

    def deserialize_data(self, data: bytes) -> Any:
        tree = self._codec.parse(data)
        return self._codec.materialize(tree, self._resolver.resolve)

    def _encode(self, value: Any) -> bytes:
        return self._codec.encode(
            value,
            indent=self._indent,
            set_literals=self._set_literals,
        )

    def __repr__(self) -> str:
        return f"<{type(self).__name__} id={self.serializer_id} codec={self._codec.name}>"
