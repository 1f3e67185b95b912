import pytest

from pyrowire.bootstrap import deps
from pyrowire.bootstrap.config.loader import get_configfile
from pyrowire.core.models.proxy import Proxy
from pyrowire.core.models.uri import URI
from pyrowire.infra.msgpack_serializer import MsgPackSerializer
from pyrowire.infra.serpent_serializer import SerpentSerializer
from tests.fake.fake_codec import FakeCodec, FakeSerializer


@pytest.fixture
def codec() -> FakeCodec:
    return FakeCodec()


@pytest.fixture
def fake_serializer(codec) -> FakeSerializer:
    return FakeSerializer(codec)


@pytest.fixture
def serpent_serializer() -> SerpentSerializer:
    return SerpentSerializer()


@pytest.fixture
def msgpack_serializer() -> MsgPackSerializer:
    return MsgPackSerializer()


@pytest.fixture
def uri() -> URI:
    return URI(protocol="PYRO", object_id="obj-123", host="example.com", port=9999)


@pytest.fixture
def proxy(uri) -> Proxy:
    return Proxy(uri, oneway={"fire"}, methods={"greet", "fire"}, attrs={"name"})


@pytest.fixture
def clean_config(tmp_path, monkeypatch):
    """
    Run with an empty working directory, no config-related environment
    variables, and fresh caches for the config and registry.
    """
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("PYROWIRECONFIG", raising=False)
    for name in ("PYROWIRE_SERIALIZER", "PYROWIRE_LOG_LEVEL",
                 "PYROWIRE_SERPENT__INDENT", "PYROWIRE_SERPENT__SET_LITERALS"):
        monkeypatch.delenv(name, raising=False)

    def clear():
        get_configfile.cache_clear()
        deps.get_config.cache_clear()
        deps.get_registry.cache_clear()

    clear()
    yield tmp_path
    clear()
