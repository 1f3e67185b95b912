from typing import Annotated, Literal

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict, PydanticBaseSettingsSource, YamlConfigSettingsSource

from pyrowire.bootstrap.config.loader import get_configfile
from pyrowire.core.models.message import SerializerId


class SerpentSettings(BaseModel):
    indent: Annotated[
        bool,
        Field(
            description=(
                "Pretty-print the serpent literal output.\n"
                "Purely cosmetic: peers parse indented and compact output alike."
            ),
            default=False
        )
    ]

    set_literals: Annotated[
        bool,
        Field(
            description=(
                "Emit sets using native set syntax.\n"
                "When disabled, sets are sent as tuples, for peers that cannot\n"
                "parse set literals."
            ),
            default=True
        )
    ]


class WireConfig(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="PYROWIRE_",
        env_nested_delimiter="__",
        extra="ignore"
    )

    serializer: Annotated[
        SerializerId,
        Field(
            description=(
                "Wire tag of the serializer used for outgoing messages.\n"
                "Incoming messages carry their own tag and may use any built serializer."
            ),
            default=SerializerId.SERPENT
        )
    ]

    serpent: Annotated[
        SerpentSettings,
        Field(
            description="Formatting options of the serpent serializer.",
            default_factory=SerpentSettings
        )
    ]

    log_level: Annotated[
        Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        Field(
            description="Logging verbosity of the wire layer.",
            default="INFO"
        )
    ]

    @field_validator("serializer", mode="before")
    @classmethod
    def parse_serializer(cls, v: object) -> object:
        # accept "6" as well as "msgpack"
        if not isinstance(v, str):
            return v
        v = v.strip()
        if v.isdigit():
            return int(v)
        return SerializerId.__members__.get(v.upper(), v)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        sources: tuple[PydanticBaseSettingsSource, ...] = (init_settings, env_settings)

        configfile = get_configfile()
        if configfile is not None:
            sources += (YamlConfigSettingsSource(settings_cls, yaml_file=configfile),)

        return sources
