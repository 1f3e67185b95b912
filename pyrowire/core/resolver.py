from typing import Any, Callable

from pyrowire.core.models.message import CLASS_KEY, EXCEPTION_KEY, URI_CLASS, PROXY_CLASS
from pyrowire.core.picklers import ExceptionPickler, UriPickler, ProxyPickler


class _Unresolved:
    def __repr__(self) -> str:
        return "UNRESOLVED"


UNRESOLVED: Any = _Unresolved()
"""
Returned by a resolver that does not recognise a tagged mapping.
Distinct from None, which is a valid decoded value.
"""

Resolve = Callable[[dict], Any]


class ClassResolver:
    """
    Turns a tagged mapping back into the protocol object it describes.

    Resolution order:
    1. exception flag set -> RemoteError, whatever the class tag says
    2. known class tag -> matching pickler
    3. anything else -> UNRESOLVED
    """

    def __init__(self) -> None:
        self._dispatch: dict[str, Resolve] = {
            URI_CLASS: UriPickler.from_dict,
            PROXY_CLASS: ProxyPickler.from_dict,
        }

    @property
    def known_classes(self) -> frozenset[str]:
        return frozenset(self._dispatch)

    def resolve(self, data: dict) -> Any:
        if data.get(EXCEPTION_KEY) is True:
            return ExceptionPickler.from_dict(data)

        class_name = data.get(CLASS_KEY)
        if not isinstance(class_name, str):
            return UNRESOLVED

        from_dict = self._dispatch.get(class_name)
        if from_dict is None:
            return UNRESOLVED

        return from_dict(data)

    __call__ = resolve
