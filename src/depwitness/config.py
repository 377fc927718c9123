"""DepWitness configuration — typed settings with file and environment sources.

Settings are merged from three sources, later ones winning:

1. ``depwitness.yaml`` next to the listing, or an explicit config file.
2. ``DEPWITNESS_*`` environment variables (e.g. ``DEPWITNESS_EXCLUDE``).
3. Command-line flags.

The engine never reads configuration itself; the resolved
``WitnessConfig`` is handed to ``InventoryBuilder`` and ``Verifier``.

Example ``depwitness.yaml``:

.. code-block:: yaml

    exclude: testCompileClasspath, app:lintClasspath
    manifest: dependency-hashes.gradle
    workers: 4
    fail_fast: true

Override via environment::

    export DEPWITNESS_EXCLUDE=testCompileClasspath,app:lintClasspath
    export DEPWITNESS_WORKERS=8
"""

from __future__ import annotations

from contextvars import ContextVar
from pathlib import Path
from typing import Annotated, Any

import yaml
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import (
    BaseSettings,
    NoDecode,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

from depwitness.core.inventory import ExclusionRules
from depwitness.exceptions import ConfigError

CONFIG_FILENAME = "depwitness.yaml"
ENV_PREFIX = "DEPWITNESS_"
EXCLUDE_ENV_VAR = f"{ENV_PREFIX}EXCLUDE"
DEFAULT_MANIFEST_NAME = "dependency-hashes.gradle"

# YAML file read by the settings source for the current load() call.
_config_file: ContextVar[Path | None] = ContextVar(
    "depwitness_config_file", default=None
)


def _split_exclusions(value: Any) -> Any:
    """Normalize a CSV string or list of exclusions; pass other types through."""
    if value is None:
        return ()
    if isinstance(value, str):
        return tuple(sorted(ExclusionRules.parse(value).rules))
    if isinstance(value, (list, tuple)):
        return tuple(sorted(ExclusionRules.parse([str(v) for v in value]).rules))
    return value


class WitnessConfig(BaseSettings):
    """Resolved settings for one DepWitness run.

    Attributes:
        exclude: Scope exclusions (``scope`` or ``project:scope``). Accepts a
            comma-separated string or a list.
        manifest: Path of the trusted manifest document. None means the
            default ``dependency-hashes.gradle`` beside the listing.
        workers: Number of hashing threads.
        fail_fast: Stop at the first violation instead of collecting all.
    """

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        extra="forbid",
        frozen=True,
    )

    exclude: Annotated[tuple[str, ...], NoDecode] = ()
    manifest: Path | None = None
    workers: int = Field(default=1, ge=1)
    fail_fast: bool = True

    @field_validator("exclude", mode="before")
    @classmethod
    def split_exclude(cls, value: Any) -> Any:
        return _split_exclusions(value)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        sources: list[PydanticBaseSettingsSource] = [init_settings, env_settings]
        config_file = _config_file.get()
        if config_file is not None:
            sources.append(
                YamlConfigSettingsSource(
                    settings_cls, yaml_file=config_file, yaml_file_encoding="utf-8"
                )
            )
        return tuple(sources)

    @property
    def exclusions(self) -> ExclusionRules:
        """Return the exclusions as rules for ``InventoryBuilder``."""
        return ExclusionRules.parse(self.exclude)

    @classmethod
    def load(cls, path: Path | None = None) -> WitnessConfig:
        """Build settings from the environment and an optional YAML file.

        Raises:
            ConfigError: If the file cannot be read or parsed, or a value
                fails validation.
        """
        token = _config_file.set(path)
        try:
            return cls()
        except ValidationError as exc:
            raise ConfigError(f"Invalid configuration: {exc}") from exc
        except (OSError, ValueError, TypeError, yaml.YAMLError) as exc:
            raise ConfigError(f"Cannot load config {path}: {exc}") from exc
        finally:
            _config_file.reset(token)

    def with_overrides(
        self,
        exclude: str | None = None,
        manifest: Path | None = None,
        fail_fast: bool | None = None,
    ) -> WitnessConfig:
        """Return a copy with any non-None overrides applied."""
        update: dict[str, Any] = {}
        if exclude is not None:
            update["exclude"] = _split_exclusions(exclude)
        if manifest is not None:
            update["manifest"] = manifest
        if fail_fast is not None:
            update["fail_fast"] = fail_fast
        return self.model_copy(update=update) if update else self


def resolve_config(
    listing_dir: Path, config_path: Path | None = None
) -> WitnessConfig:
    """Merge the config file and environment into a ``WitnessConfig``.

    A relative ``manifest`` resolves against the config file's directory,
    or the listing directory when no file is used.

    Args:
        listing_dir: Directory searched for ``depwitness.yaml``.
        config_path: Explicit config file; must exist when given.
    """
    if config_path is None and (listing_dir / CONFIG_FILENAME).is_file():
        config_path = listing_dir / CONFIG_FILENAME
    config = WitnessConfig.load(config_path)
    base_dir = (config_path.parent if config_path else listing_dir).resolve()
    if config.manifest is not None and not config.manifest.is_absolute():
        config = config.model_copy(update={"manifest": base_dir / config.manifest})
    return config
