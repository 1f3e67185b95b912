import traceback
from typing import Any

from pyrowire.core.models.errors import PickleFormatError, RemoteError
from pyrowire.core.models.message import CLASS_KEY, EXCEPTION_KEY, URI_CLASS, PROXY_CLASS
from pyrowire.core.models.proxy import Proxy
from pyrowire.core.models.uri import URI


TRACEBACK_ATTR = "_pyroTraceback"
"""
Exception attribute carrying the remote traceback as a list of strings.
"""


def _field(data: dict, key: str, expected: type | tuple[type, ...], owner: str) -> Any:
    if key not in data:
        raise PickleFormatError(f"{owner}: missing '{key}' field")

    value = data[key]
    if not isinstance(value, expected):
        raise PickleFormatError(
            f"{owner}: field '{key}' must be {_shape(expected)}, got {type(value).__name__}"
        )
    return value


def _shape(expected: type | tuple[type, ...]) -> str:
    if isinstance(expected, tuple):
        return " or ".join(t.__name__ for t in expected)
    return expected.__name__


def _state(data: dict, owner: str, size: int) -> tuple | list:
    state = _field(data, "state", (tuple, list), owner)
    if len(state) < size:
        raise PickleFormatError(
            f"{owner}: field 'state' must hold {size} items, got {len(state)}"
        )
    return state


class UriPickler:
    """
    state = (protocol, object_id, sockname, host, port)

    sockname is only used by unix domain sockets and is always empty here.
    """

    @staticmethod
    def to_dict(uri: URI) -> dict[str, Any]:
        return {
            CLASS_KEY: URI_CLASS,
            "state": (uri.protocol, uri.object_id, None, uri.host, uri.port),
        }

    @staticmethod
    def from_dict(data: dict) -> URI:
        state = _state(data, URI_CLASS, 5)
        protocol, object_id, _, host, port = state[:5]

        for name, value in (("protocol", protocol), ("object_id", object_id), ("host", host)):
            if not isinstance(value, str):
                raise PickleFormatError(
                    f"{URI_CLASS}: state item '{name}' must be str, got {type(value).__name__}"
                )
        if not isinstance(port, int) or isinstance(port, bool):
            raise PickleFormatError(
                f"{URI_CLASS}: state item 'port' must be int, got {type(port).__name__}"
            )

        try:
            return URI(protocol=protocol, object_id=object_id, host=host, port=port)
        except ValueError as ex:
            raise PickleFormatError(f"{URI_CLASS}: {ex}") from ex


class ExceptionPickler:
    """
    Exceptions travel as their class name, args and instance attributes.
    Whatever the class name, they are always read back as a RemoteError.
    """

    @staticmethod
    def class_name(exc: BaseException) -> str:
        if isinstance(exc, RemoteError):
            return exc.original_class_name

        klass = type(exc)
        return f"{klass.__module__}.{klass.__qualname__}"

    @classmethod
    def to_dict(cls, exc: BaseException) -> dict[str, Any]:
        if isinstance(exc, RemoteError):
            args: tuple = (exc.message,)
            attributes = dict(exc.attributes)
            tb = exc.remote_traceback
        else:
            args = exc.args
            attributes = dict(vars(exc))
            tb = None
            if exc.__traceback__ is not None:
                tb = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))

        if tb:
            attributes[TRACEBACK_ATTR] = [tb]

        return {
            CLASS_KEY: cls.class_name(exc),
            EXCEPTION_KEY: True,
            "args": args,
            "attributes": attributes,
        }

    @staticmethod
    def from_dict(data: dict) -> RemoteError:
        class_name = _field(data, CLASS_KEY, str, "exception")
        owner = f"exception {class_name}"

        args = data.get("args", ())
        if not isinstance(args, (tuple, list)):
            raise PickleFormatError(f"{owner}: field 'args' must be tuple or list, got {type(args).__name__}")

        attributes = data.get("attributes") or {}
        if not isinstance(attributes, dict):
            raise PickleFormatError(f"{owner}: field 'attributes' must be dict, got {type(attributes).__name__}")

        attributes = dict(attributes)
        tb = attributes.pop(TRACEBACK_ATTR, None)
        if isinstance(tb, (list, tuple)):
            tb = "".join(str(line) for line in tb)

        if len(args) == 1:
            message = str(args[0])
        elif args:
            message = str(tuple(args))
        else:
            message = ""

        return RemoteError(
            message,
            original_class_name=class_name,
            attributes=attributes,
            remote_traceback=tb or None,
        )


class ProxyPickler:
    """
    state = (uri, oneway, methods, attrs, timeout, hmac_key, handshake, max_retries)

    The connection itself is never part of the state. hmac_key is always
    sent empty.
    """

    @staticmethod
    def to_dict(proxy: Proxy) -> dict[str, Any]:
        return {
            CLASS_KEY: PROXY_CLASS,
            "state": (
                str(proxy.uri),
                tuple(sorted(proxy.oneway)),
                tuple(sorted(proxy.methods)),
                tuple(sorted(proxy.attrs)),
                proxy.timeout,
                None,
                proxy.handshake,
                proxy.max_retries,
            ),
        }

    @staticmethod
    def from_dict(data: dict) -> Proxy:
        state = _state(data, PROXY_CLASS, 8)
        uri_text, oneway, methods, attrs, timeout, _, handshake, max_retries = state[:8]

        if not isinstance(uri_text, str):
            raise PickleFormatError(
                f"{PROXY_CLASS}: state item 'uri' must be str, got {type(uri_text).__name__}"
            )
        try:
            uri = URI.parse(uri_text)
        except ValueError as ex:
            raise PickleFormatError(f"{PROXY_CLASS}: {ex}") from ex

        for name, value in (("oneway", oneway), ("methods", methods), ("attrs", attrs)):
            if not isinstance(value, (set, frozenset, list, tuple)):
                raise PickleFormatError(
                    f"{PROXY_CLASS}: state item '{name}' must be a set or sequence, "
                    f"got {type(value).__name__}"
                )

        if timeout is None:
            timeout = 0.0
        if not isinstance(timeout, (int, float)) or isinstance(timeout, bool):
            raise PickleFormatError(
                f"{PROXY_CLASS}: state item 'timeout' must be float, got {type(timeout).__name__}"
            )

        if max_retries is None:
            max_retries = 0
        if not isinstance(max_retries, int) or isinstance(max_retries, bool):
            raise PickleFormatError(
                f"{PROXY_CLASS}: state item 'max_retries' must be int, got {type(max_retries).__name__}"
            )

        return Proxy(
            uri,
            oneway=oneway,
            methods=methods,
            attrs=attrs,
            handshake=handshake,
            timeout=float(timeout),
            max_retries=max_retries,
        )
