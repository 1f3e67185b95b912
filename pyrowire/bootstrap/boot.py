from pyrowire.bootstrap.deps import get_config, get_registry
from pyrowire.core.helpers.utils import setup_logging
from pyrowire.core.registry import SerializerRegistry


def init() -> SerializerRegistry:
    """
    Prepare the wire layer at process start: configure logging and build
    the configured serializer, so a missing or outdated codec library is
    reported immediately rather than on the first call.
    """
    config = get_config()
    setup_logging(config.log_level)

    registry = get_registry()
    registry.create(config.serializer)
    return registry
