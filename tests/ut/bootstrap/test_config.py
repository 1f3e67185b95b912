import pytest
import yaml

from pyrowire.bootstrap import deps
from pyrowire.bootstrap.boot import init
from pyrowire.bootstrap.config.settings import WireConfig
from pyrowire.core.models.errors import UnsupportedSerializerError
from pyrowire.core.models.message import SerializerId
from pyrowire.infra.msgpack_serializer import MsgPackSerializer
from pyrowire.infra.serpent_serializer import SerpentSerializer


@pytest.mark.ut
def test_defaults(clean_config):
    config = WireConfig()

    assert config.serializer == SerializerId.SERPENT
    assert config.serpent.indent is False
    assert config.serpent.set_literals is True
    assert config.log_level == "INFO"


@pytest.mark.ut
def test_environment(clean_config, monkeypatch):
    monkeypatch.setenv("PYROWIRE_SERIALIZER", "6")
    monkeypatch.setenv("PYROWIRE_SERPENT__INDENT", "true")

    config = WireConfig()

    assert config.serializer == SerializerId.MSGPACK
    assert config.serpent.indent is True


@pytest.mark.ut
def test_yaml_file_in_cwd(clean_config):
    (clean_config / "pyrowire.yaml").write_text(yaml.dump({
        "serpent": {"set_literals": False},
        "log_level": "DEBUG",
    }))

    config = WireConfig()

    assert config.serpent.set_literals is False
    assert config.log_level == "DEBUG"


@pytest.mark.ut
def test_yaml_file_from_env(clean_config, monkeypatch):
    file = clean_config / "custom.yaml"
    file.write_text(yaml.dump({"serpent": {"indent": True}}))
    monkeypatch.setenv("PYROWIRECONFIG", str(file))

    assert WireConfig().serpent.indent is True


@pytest.mark.ut
def test_missing_config_file(clean_config, monkeypatch):
    monkeypatch.setenv("PYROWIRECONFIG", str(clean_config / "nope.yaml"))

    with pytest.raises(SystemExit, match="Configuration file not found"):
        WireConfig()


@pytest.mark.ut
def test_invalid_config(clean_config, monkeypatch):
    monkeypatch.setenv("PYROWIRE_LOG_LEVEL", "LOUD")

    with pytest.raises(SystemExit, match="log_level"):
        deps.get_config()


@pytest.mark.ut
def test_serializers_follow_config(clean_config, monkeypatch):
    monkeypatch.setenv("PYROWIRE_SERPENT__SET_LITERALS", "false")

    serializer = deps.get_serpent_serializer()

    assert isinstance(serializer, SerpentSerializer)
    assert deps.get_serializer() is serializer
    assert deps.get_for(SerializerId.SERPENT) is serializer
    assert isinstance(serializer.deserialize_data(serializer.serialize_data({1})), tuple)


@pytest.mark.ut
def test_get_for_requires_construction(clean_config):
    with pytest.raises(UnsupportedSerializerError, match="6"):
        deps.get_for(SerializerId.MSGPACK)

    assert isinstance(deps.get_serializer(SerializerId.MSGPACK), MsgPackSerializer)
    assert deps.get_for(SerializerId.MSGPACK).serializer_id == 6


@pytest.mark.ut
def test_init_builds_configured_serializer(clean_config, monkeypatch):
    monkeypatch.setenv("PYROWIRE_SERIALIZER", "6")

    registry = init()

    assert registry.is_built(SerializerId.MSGPACK)
    assert not registry.is_built(SerializerId.SERPENT)


@pytest.mark.ut
def test_serializer_by_name(clean_config, monkeypatch):
    monkeypatch.setenv("PYROWIRE_SERIALIZER", "msgpack")

    assert WireConfig().serializer == SerializerId.MSGPACK
