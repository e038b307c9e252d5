"""Pydantic models for builder configuration.

Two scopes exist for the same settings:

* :class:`OrmConfig` is the *base* configuration.  It persists across every
  statement rendered by one :class:`~sqliteorm.orm.SqliteOrm` instance.
* :class:`ConfigOverride` holds per-call values.  It applies to the next
  terminal render only and is cleared afterwards.

The effective configuration for a render is ``base.merged(override)``::

    base = OrmConfig(table_name="users")
    effective = base.merged(ConfigOverride(fill_value=False))
    assert effective.table_name == "users" and not effective.fill_value
"""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from sqliteorm.errors import ConfigError
from sqliteorm.schema.types import DEFAULT_MAX_BOUND_VARIABLES


class ConfigOverride(BaseModel):
    """Per-call configuration; ``None`` means "use the base value".

    Attributes:
        table_name: Table targeted by the next render only.
        fill_value: Fill mode for the next render only.
    """

    model_config = ConfigDict(extra="forbid")

    table_name: str | None = Field(default=None, min_length=1)
    fill_value: bool | None = None

    @property
    def is_empty(self) -> bool:
        return self.table_name is None and self.fill_value is None


class OrmConfig(BaseModel):
    """Persistent builder configuration.

    Attributes:
        table_name: Target table for every statement.
        fill_value: ``True`` renders ``?`` placeholders plus a parameter list;
            ``False`` inlines literal values.
        max_bound_variables: Upper bound on placeholders per batch INSERT.
    """

    model_config = ConfigDict(extra="forbid")

    table_name: str = Field(min_length=1)
    fill_value: bool = True
    max_bound_variables: int = Field(default=DEFAULT_MAX_BOUND_VARIABLES, gt=0)

    @classmethod
    def create(cls, **values: Any) -> OrmConfig:
        """Validate ``values`` into an :class:`OrmConfig`.

        Raises:
            ConfigError: If any value is invalid.
        """
        try:
            return cls(**values)
        except PydanticValidationError as exc:
            raise ConfigError(f"Invalid builder configuration: {exc}", exc.errors()) from exc

    def updated(self, **values: Any) -> OrmConfig:
        """Return a validated copy with ``values`` replaced."""
        return OrmConfig.create(**{**self.model_dump(), **values})

    def merged(self, override: ConfigOverride) -> OrmConfig:
        """Return the effective config: override values win when set."""
        if override.is_empty:
            return self
        update = {k: v for k, v in override.model_dump().items() if v is not None}
        return self.model_copy(update=update)


def make_override(**values: Any) -> ConfigOverride:
    """Validate ``values`` into a :class:`ConfigOverride`.

    Raises:
        ConfigError: If any value is invalid.
    """
    try:
        return ConfigOverride(**values)
    except PydanticValidationError as exc:
        raise ConfigError(f"Invalid per-call configuration: {exc}", exc.errors()) from exc
