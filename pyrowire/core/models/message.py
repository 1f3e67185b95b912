from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Sequence, Mapping

from pyrowire.core.models.errors import PickleFormatError


class SerializerId(IntEnum):
    """
    Wire tags identifying the serializer used for a message body.
    The values are fixed by the Pyro4 protocol and must never change.
    """
    SERPENT = 1
    JSON = 2
    MARSHAL = 3
    PICKLE = 4
    DILL = 5
    MSGPACK = 6


CLASS_KEY = "__class__"
"""
Reserved key holding the fully qualified name of the originating class.
"""

EXCEPTION_KEY = "__exception__"
"""
Reserved key flagging a tagged mapping as a serialized exception.
"""

URI_CLASS = "Pyro4.core.URI"
PROXY_CLASS = "Pyro4.core.Proxy"


@dataclass(frozen=True)
class CallEnvelope:
    """
    The four fields identifying a remote method invocation.
    The field order is part of the wire contract.
    """
    object_id: str

    method: str

    vargs: Sequence[Any] = ()
    """
    Positional arguments, in call order.
    """

    kwargs: Mapping[str, Any] = field(default_factory=dict)
    """
    Keyword arguments.
    """

    def as_tuple(self) -> tuple[str, str, Sequence[Any], Mapping[str, Any]]:
        return self.object_id, self.method, self.vargs, self.kwargs

    @classmethod
    def from_tree(cls, tree: Any) -> "CallEnvelope":
        if not isinstance(tree, (list, tuple)) or len(tree) != 4:
            raise PickleFormatError(
                f"call envelope must be a sequence of 4 items, got {tree!r}"
            )

        object_id, method, vargs, kwargs = tree
        if not isinstance(object_id, str) or not isinstance(method, str):
            raise PickleFormatError("call envelope object id and method must be strings")
        if not isinstance(vargs, (list, tuple)):
            raise PickleFormatError("call envelope vargs must be a sequence")
        if not isinstance(kwargs, dict):
            raise PickleFormatError("call envelope kwargs must be a mapping")

        return cls(object_id=object_id, method=method, vargs=vargs, kwargs=kwargs)
