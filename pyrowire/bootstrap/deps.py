import json
from functools import lru_cache

from pydantic import ValidationError

from pyrowire.bootstrap.config.settings import WireConfig
from pyrowire.core.models.message import SerializerId
from pyrowire.core.ports.serializer import Serializer
from pyrowire.core.registry import SerializerRegistry


def build_serpent_serializer() -> Serializer:
    # serpent is only imported when the serializer is first requested
    from pyrowire.infra.serpent_serializer import SerpentSerializer

    config = get_config()
    return SerpentSerializer(
        indent=config.serpent.indent,
        set_literals=config.serpent.set_literals,
    )


def build_msgpack_serializer() -> Serializer:
    from pyrowire.infra.msgpack_serializer import MsgPackSerializer

    return MsgPackSerializer()


@lru_cache
def get_registry() -> SerializerRegistry:
    registry = SerializerRegistry()
    registry.register_factory(SerializerId.SERPENT, build_serpent_serializer)
    registry.register_factory(SerializerId.MSGPACK, build_msgpack_serializer)
    return registry


def get_serializer(serializer_id: int | None = None) -> Serializer:
    """
    Return the serializer for serializer_id, building it on first use.
    Without an id, the serializer selected in the configuration is used.
    """
    if serializer_id is None:
        serializer_id = get_config().serializer
    return get_registry().create(serializer_id)


def get_serpent_serializer() -> Serializer:
    return get_registry().create(SerializerId.SERPENT)


def get_for(serializer_id: int) -> Serializer:
    """Look up an already built serializer, e.g. from an incoming message tag."""
    return get_registry().get_for(serializer_id)


@lru_cache
def get_config() -> WireConfig:
    try:
        return WireConfig()
    except ValidationError as ex:
        msg = ["Configuration validation failed:"]
        errs = json.loads(ex.json())
        for err in errs:
            msg.append(f"  {'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}")
        raise SystemExit("\n".join(msg))
