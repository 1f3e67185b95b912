import pytest

from pyrowire.core.codec.tree import ConverterTable, flatten, materialize
from pyrowire.core.models.message import CLASS_KEY
from pyrowire.core.resolver import UNRESOLVED


class Point:
    def __init__(self, x, y):
        self.x = x
        self.y = y


class Point3(Point):
    pass


def point_to_dict(p):
    return {CLASS_KEY: "geo.Point", "x": p.x, "y": p.y}


def resolve_point(data):
    if data[CLASS_KEY] == "geo.Point":
        return Point(data["x"], data["y"])
    return UNRESOLVED


@pytest.fixture
def converters() -> ConverterTable:
    table = ConverterTable()
    table.register(Point, point_to_dict)
    return table


@pytest.mark.ut
def test_converter_lookup_walks_mro(converters):
    assert converters.lookup(Point(1, 2)) is point_to_dict
    assert converters.lookup(Point3(1, 2)) is point_to_dict
    assert converters.lookup(object()) is None
    assert Point in converters
    assert len(converters) == 1


@pytest.mark.ut
def test_flatten_nested(converters):
    value = {"points": [Point(1, 2), (Point(3, 4),)], "n": None}

    assert flatten(value, converters) == {
        "points": [
            {CLASS_KEY: "geo.Point", "x": 1, "y": 2},
            ({CLASS_KEY: "geo.Point", "x": 3, "y": 4},),
        ],
        "n": None,
    }


@pytest.mark.ut
def test_flatten_converter_output_is_flattened(converters):
    value = Point(Point(0, 0), 1)

    assert flatten(value, converters)["x"] == {CLASS_KEY: "geo.Point", "x": 0, "y": 0}


@pytest.mark.ut
def test_flatten_sets(converters):
    assert flatten({1, 2}, converters) == {1, 2}

    as_tuple = flatten({1, 2}, converters, set_literals=False)
    assert isinstance(as_tuple, tuple)
    assert sorted(as_tuple) == [1, 2]


@pytest.mark.ut
def test_flatten_bytes_like(converters):
    assert flatten(bytearray(b"ab"), converters) == b"ab"
    assert flatten(memoryview(b"cd"), converters) == b"cd"


@pytest.mark.ut
def test_materialize_resolves_bottom_up():
    tree = {
        "a": [{CLASS_KEY: "geo.Point", "x": 1, "y": 2}],
        "b": ({CLASS_KEY: "geo.Point", "x": 3, "y": 4},),
    }

    result = materialize(tree, resolve_point)

    assert isinstance(result["a"][0], Point)
    assert isinstance(result["b"], tuple)
    assert (result["b"][0].x, result["b"][0].y) == (3, 4)


@pytest.mark.ut
def test_materialize_passes_unknown_through():
    tree = {CLASS_KEY: "completely.unknown.Type", "inner": {CLASS_KEY: "geo.Point", "x": 0, "y": 0}}

    result = materialize(tree, resolve_point)

    assert result[CLASS_KEY] == "completely.unknown.Type"
    assert isinstance(result["inner"], Point)


@pytest.mark.ut
def test_materialize_keeps_none_values():
    calls = []

    def resolve(data):
        calls.append(data)
        return None

    assert materialize({CLASS_KEY: "x"}, resolve) is None
    assert materialize({"plain": None}, resolve) == {"plain": None}
    assert len(calls) == 1


@pytest.mark.ut
def test_materialize_mapping_hook_first():
    def hook(mapping):
        if "raw" in mapping:
            return mapping["raw"].encode()
        return UNRESOLVED

    assert materialize([{"raw": "abc"}, {"x": 1}], resolve_point, hook) == [b"abc", {"x": 1}]


@pytest.mark.ut
@pytest.mark.parametrize("container", [set, frozenset])
def test_flatten_set_of_converted_objects(converters, container):
    value = container([Point(1, 2)])

    assert flatten(value, converters) == ({CLASS_KEY: "geo.Point", "x": 1, "y": 2},)


@pytest.mark.ut
def test_flatten_set_keeps_hashable_items(converters):
    assert flatten(frozenset(["a", ("b", 1)]), converters) == {"a", ("b", 1)}


@pytest.mark.ut
def test_flatten_converts_mapping_keys():
    table = ConverterTable()
    table.register(Point, lambda p: f"point:{p.x},{p.y}")

    assert flatten({Point(1, 2): "here"}, table) == {"point:1,2": "here"}


@pytest.mark.ut
def test_flatten_unhashable_converted_key(converters):
    with pytest.raises(TypeError, match="mapping key"):
        flatten({Point(1, 2): "here"}, converters)


@pytest.mark.ut
def test_flatten_frozenset_key_stays_usable(converters):
    assert flatten({frozenset([1, 2]): "pair"}, converters) == {frozenset([1, 2]): "pair"}
