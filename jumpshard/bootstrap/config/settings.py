import logging
from pathlib import Path
from typing import Annotated

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict, PydanticBaseSettingsSource, YamlConfigSettingsSource

from jumpshard.core.digest import DEFAULT_DIGEST, available_digests, get_digest
from jumpshard.core.jump import U64_MASK
from jumpshard.core.router import KeyRouter
from jumpshard.core.utils.log import LOG_LEVELS


class DigestSettings(BaseModel):
    algorithm: Annotated[
        str,
        Field(
            description=(
                "Name of the digest that turns byte/string keys into 64-bit seeds.\n"
                "Every process routing the same keys must use the same digest and\n"
                "seed, otherwise they disagree on bucket assignments.\n\n"
                "Allowed values:\n"
                "  xxh64   → XXH64 (default)\n"
                "  xxh3    → XXH3, 64-bit variant\n"
                "  md5     → first 8 bytes of MD5\n"
                "  blake2b → BLAKE2b with an 8-byte digest\n"
            ),
            default=DEFAULT_DIGEST
        )
    ]

    seed: Annotated[
        int,
        Field(
            description=(
                "64-bit seed mixed into the digest.\n"
                "Changing it reassigns every byte/string key; raw 64-bit seeds\n"
                "routed directly are not affected."
            ),
            default=0,
            ge=0,
            le=U64_MASK
        )
    ]

    @field_validator("algorithm", mode="before")
    @classmethod
    def parse_algorithm(cls, v):
        if isinstance(v, str):
            v = v.strip().lower()
            if v not in available_digests():
                raise ValueError(
                    f"unknown digest '{v}', expected one of: {', '.join(available_digests())}"
                )
        return v


class LoggingSettings(BaseModel):
    level: Annotated[
        str,
        Field(
            description=(
                "Logging verbosity.\n"
                "Choose among: DEBUG, INFO, WARNING, ERROR, CRITICAL."
            ),
            default="INFO"
        )
    ]

    @field_validator("level", mode="before")
    @classmethod
    def parse_level(cls, v):
        if isinstance(v, str):
            v = v.strip().upper()
            if v not in LOG_LEVELS:
                raise ValueError(f"unknown log level '{v}'")
        return v


class JumpShardSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="JUMPSHARD_",
        env_nested_delimiter="__",
        extra="ignore"
    )

    digest: Annotated[
        DigestSettings,
        Field(
            description=(
                "Key digest configuration.\n"
                "Defines how byte/string keys are hashed into the 64-bit seed fed\n"
                "to the jump selector."
            ),
            default_factory=DigestSettings
        )
    ]

    log: Annotated[
        LoggingSettings,
        Field(
            description="Logging configuration.",
            default_factory=LoggingSettings
        )
    ]

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return init_settings, env_settings, YamlConfigSettingsSource(settings_cls)


def load_settings(configfile: Path | None = None, **overrides) -> JumpShardSettings:
    """
    Build the settings from init overrides, JUMPSHARD_* variables and,
    if given, a YAML file (in that order of priority).
    """
    logger = logging.getLogger("jumpshard.bootstrap.config")

    if configfile is None:
        return JumpShardSettings(**overrides)

    class FileSettings(JumpShardSettings):
        model_config = SettingsConfigDict(yaml_file=configfile)

    logger.debug(f"Loading settings from {configfile}")
    return FileSettings(**overrides)


def build_router(settings: JumpShardSettings) -> KeyRouter:
    digest = get_digest(settings.digest.algorithm, settings.digest.seed)
    return KeyRouter(digest)
