from __future__ import annotations

import os
from functools import cache
from pathlib import Path
from typing import ClassVar

import yaml
from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from stringset.errors import ConfigError


class LoggingSettings(BaseModel):

    level: str = Field(default="INFO")
    json_output: bool = Field(default=False, alias="json")
    logger_name: str = Field(default="stringset")

    model_config = ConfigDict(populate_by_name=True)


class CliSettings(BaseModel):
    """Knobs for reading word lists from files."""

    encoding: str = Field(default="utf-8")
    strip: bool = Field(default=True)  # trim whitespace around each line
    skip_blank: bool = Field(default=True)  # drop lines that are empty after stripping


class StringSetConfig(BaseSettings):
    """
    Package settings.

    Source of truth:
      1) YAML file (structured config)
      2) Env overrides for logging (flat STRINGSET_* names),
         merged explicitly in from_yaml().
    """

    model_config: ClassVar[SettingsConfigDict] = SettingsConfigDict(
        env_prefix="",  # no automatic prefixing
        env_nested_delimiter="__",
        extra="ignore",
        case_sensitive=False,
    )

    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    cli: CliSettings = Field(default_factory=CliSettings)

    # ---------- YAML loader with explicit env merge ----------
    @classmethod
    def from_yaml(cls, path: Path | None = None) -> StringSetConfig:
        """
        Load config from YAML, then overlay flat env overrides.
        Search order if path is not provided:
          ./stringset.yaml
          ~/.config/stringset/config.yaml
        """
        candidates: list[Path] = []
        if path is not None:
            candidates.append(path)
        else:
            candidates.extend(
                [Path("stringset.yaml"), Path.home() / ".config" / "stringset" / "config.yaml"]
            )

        raw: dict[str, object] = {}
        for p in candidates:
            if p.exists():
                text = p.read_text(encoding="utf-8")
                loaded = yaml.safe_load(text) or {}
                if not isinstance(loaded, dict):
                    raise ConfigError(f"YAML at {p} must define a mapping at the root")
                raw = loaded
                break

        cfg = cls.model_validate(raw)

        # ---- explicit env merge (no pydantic alias magic) ----
        def _get_env(*names: str) -> str | None:
            for n in names:
                v = os.getenv(n)
                if v is not None and v != "":
                    return v
            return None

        level = _get_env("STRINGSET_LOG_LEVEL")
        if level is not None:
            cfg.logging.level = level.strip().upper()

        json_raw = _get_env("STRINGSET_LOG_JSON")
        if json_raw is not None:
            truthy = {"1", "true", "yes", "on"}
            cfg.logging.json_output = json_raw.strip().lower() in truthy

        return cfg


@cache
def get_settings() -> StringSetConfig:
    return StringSetConfig.from_yaml()


__all__ = [
    "CliSettings",
    "LoggingSettings",
    "StringSetConfig",
    "get_settings",
]
