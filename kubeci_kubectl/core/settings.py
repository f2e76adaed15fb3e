"""Plugin settings read from the pipeline environment."""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict
from typing_extensions import Annotated

from ..environment.processor import split_csv


class PluginSettings(BaseSettings):
    """Options for one plugin invocation.

    Every option is read from its ``PLUGIN_*`` name first and its legacy
    unprefixed name second. Command-line values are applied on top with
    ``with_overrides``.
    """

    model_config = SettingsConfigDict(
        case_sensitive=True,
        env_ignore_empty=True,
        populate_by_name=True,
        extra="ignore",
    )

    dry_run: bool = Field(
        default=False,
        validation_alias=AliasChoices("PLUGIN_DRY_RUN", "DRY_RUN"),
    )
    files: Annotated[list[str], NoDecode] = Field(
        default_factory=list,
        validation_alias=AliasChoices("PLUGIN_FILES", "FILES"),
    )
    kubectl: str = Field(
        default="",
        validation_alias=AliasChoices("PLUGIN_KUBECTL", "KUBECTL"),
    )
    namespace: str = Field(
        default="",
        validation_alias=AliasChoices("PLUGIN_NAMESPACE", "NAMESPACE"),
    )
    templates: Annotated[list[str], NoDecode] = Field(
        default_factory=list,
        validation_alias=AliasChoices("PLUGIN_TEMPLATES", "TEMPLATES"),
    )
    debug: bool = Field(
        default=False,
        validation_alias=AliasChoices("PLUGIN_DEBUG", "DEBUG"),
    )
    kubeconfig: SecretStr | None = Field(
        default=None,
        validation_alias=AliasChoices("KUBECONFIG"),
    )

    @field_validator("files", "templates", mode="before")
    @classmethod
    def _split_lists(cls, value: Any) -> Any:
        if isinstance(value, str):
            return split_csv(value)
        return value

    def with_overrides(self, **overrides: Any) -> PluginSettings:
        """Return a copy with the given fields replaced and revalidated."""
        if not overrides:
            return self
        return type(self).model_validate({**dict(self), **overrides})
