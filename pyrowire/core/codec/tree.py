from typing import Any, Callable

from pyrowire.core.models.message import CLASS_KEY
from pyrowire.core.resolver import Resolve, UNRESOLVED


ToDict = Callable[[Any], dict[str, Any]]
MappingHook = Callable[[dict], Any]


class ConverterTable:
    """
    Maps native classes to the function turning their instances into a
    tagged dict. Lookup walks the MRO so subclasses share their base's
    converter unless they have their own.
    """

    def __init__(self) -> None:
        self._converters: dict[type, ToDict] = {}

    def register(self, native_type: type, to_dict: ToDict) -> None:
        self._converters[native_type] = to_dict

    def lookup(self, obj: Any) -> ToDict | None:
        for klass in type(obj).__mro__:
            if klass in self._converters:
                return self._converters[klass]
        return None

    def __contains__(self, native_type: type) -> bool:
        return native_type in self._converters

    def __len__(self) -> int:
        return len(self._converters)


def flatten(value: Any, converters: ConverterTable, set_literals: bool = True) -> Any:
    """
    Turn a native value into a generic value tree.

    Registered classes become tagged dicts, recursively. Tuples stay
    tuples, and sets are emitted as tuples when set_literals is False or
    when an item is no longer hashable once converted. Mapping keys are
    converted too and must stay hashable.
    """
    if value is None or isinstance(value, (bool, int, float, complex, str, bytes)):
        return value

    if to_dict := converters.lookup(value):
        return flatten(to_dict(value), converters, set_literals)

    if isinstance(value, dict):
        return {
            _flatten_key(key, converters, set_literals): flatten(item, converters, set_literals)
            for key, item in value.items()
        }

    if isinstance(value, list):
        return [flatten(item, converters, set_literals) for item in value]

    if isinstance(value, tuple):
        return tuple(flatten(item, converters, set_literals) for item in value)

    if isinstance(value, (set, frozenset)):
        items = tuple(flatten(item, converters, set_literals) for item in value)
        if set_literals and all(_hashable(item) for item in items):
            return set(items)
        return items

    if isinstance(value, (bytearray, memoryview)):
        return bytes(value)

    return value


def _hashable(value: Any) -> bool:
    try:
        hash(value)
    except TypeError:
        return False
    return True


def _flatten_key(key: Any, converters: ConverterTable, set_literals: bool) -> Any:
    flat = flatten(key, converters, set_literals)
    if isinstance(key, frozenset) and isinstance(flat, set):
        flat = frozenset(flat)

    if not _hashable(flat):
        raise TypeError(
            f"mapping key {key!r} cannot be used as a key once converted "
            f"to {type(flat).__name__}"
        )
    return flat


def materialize(tree: Any, resolve: Resolve, mapping_hook: MappingHook | None = None) -> Any:
    """
    Rebuild native objects from a generic value tree, bottom-up.

    Each mapping is first offered to mapping_hook (which may return
    UNRESOLVED to decline), then, when it carries a string class tag, to
    resolve. Mappings nobody claims are returned as plain dicts.
    """
    if isinstance(tree, dict):
        mapping = {
            key: materialize(item, resolve, mapping_hook)
            for key, item in tree.items()
        }

        if mapping_hook is not None:
            result = mapping_hook(mapping)
            if result is not UNRESOLVED:
                return result

        if isinstance(mapping.get(CLASS_KEY), str):
            result = resolve(mapping)
            if result is not UNRESOLVED:
                return result

        return mapping

    if isinstance(tree, list):
        return [materialize(item, resolve, mapping_hook) for item in tree]

    if isinstance(tree, tuple):
        return tuple(materialize(item, resolve, mapping_hook) for item in tree)

    if isinstance(tree, (set, frozenset)):
        return {materialize(item, resolve, mapping_hook) for item in tree}

    return tree
