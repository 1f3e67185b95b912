from typing import Any


class PyroError(Exception):
    """Base class of every error raised by the wire layer."""


class SerializerInitError(PyroError):
    """
    A serializer could not be constructed: its codec library is missing,
    too old, or failed while being set up.
    """


class UnsupportedSerializerError(PyroError, ValueError):
    def __init__(self, serializer_id: int):
        super().__init__(f"unsupported serializer id: {serializer_id}")
        self.serializer_id = serializer_id


class PickleFormatError(PyroError, ValueError):
    """
    A tagged mapping is missing a field, or a field has the wrong shape.
    """


class RemoteError(PyroError):
    """
    Any exception raised on the remote side.

    Every remote exception, whatever its native class, is reconstructed as
    a RemoteError. The remote class name is kept for diagnostics only.
    """

    def __init__(
        self,
        message: str,
        original_class_name: str,
        attributes: dict[str, Any] | None = None,
        remote_traceback: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.original_class_name = original_class_name
        self.attributes = attributes or {}
        self.remote_traceback = remote_traceback

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"RemoteError({self.original_class_name}: {self.message!r})"
