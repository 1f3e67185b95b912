from typing import Protocol, Any, Mapping, Sequence


class Serializer(Protocol):
    """
    Defines the contract of a wire serializer for Pyro messages.

    Implementations must be:
    - deterministic
    - reentrant (no state shared between calls)
    - able to carry URIs, proxies and exceptions across the wire
    """

    @property
    def serializer_id(self) -> int:
        """Wire tag of this serializer, as registered by the protocol."""

    def serialize_call(
        self,
        object_id: str,
        method: str,
        vargs: Sequence[Any],
        kwargs: Mapping[str, Any],
    ) -> bytes:
        """Encode a remote method invocation."""

    def serialize_data(self, data: Any) -> bytes:
        """Encode an arbitrary value, such as a call result."""

    def deserialize_data(self, data: bytes) -> Any:
        """Decode bytes received from the network into a Python object."""
