from typing import Any, Iterable

from pyrowire.core.models.uri import URI


class Proxy:
    """
    Local stand-in for a remote object.

    A proxy holds the URI of its target, the metadata advertised by the
    remote object, and local connection state. Only the URI and the
    metadata are ever serialized; a proxy read from the wire always starts
    disconnected and is expected to reconnect lazily on first use.
    """

    def __init__(
        self,
        uri: URI,
        *,
        oneway: Iterable[str] = (),
        methods: Iterable[str] = (),
        attrs: Iterable[str] = (),
        handshake: Any = None,
        timeout: float = 0.0,
        max_retries: int = 0,
    ):
        self.uri = uri
        self.oneway = set(oneway)
        self.methods = set(methods)
        self.attrs = set(attrs)
        self.handshake = handshake
        self.timeout = timeout
        self.max_retries = max_retries
        self._connection: Any = None

    @property
    def connection(self) -> Any:
        return self._connection

    @property
    def connected(self) -> bool:
        return self._connection is not None

    def attach(self, connection: Any) -> None:
        self._connection = connection

    def release(self) -> None:
        self._connection = None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Proxy):
            return NotImplemented
        return self.uri == other.uri

    def __hash__(self) -> int:
        return hash(self.uri)

    def __repr__(self) -> str:
        state = "connected" if self.connected else "not connected"
        return f"<Proxy {self.uri} ({state})>"
