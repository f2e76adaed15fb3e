"""Domain models for kubectl option rules."""

from __future__ import annotations

from pathlib import Path
from typing import Literal, Union

from pydantic import BaseModel, ConfigDict, Field
from typing_extensions import Annotated

FILENAME_FLAGS = ("-f", "--filename")
NAMESPACE_FLAGS = ("-n", "--namespace")


class FilesInjection(BaseModel):
    """Append ``-f`` for each manifest unless a filename flag is present."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["files"] = "files"
    files: list[str] = Field(default_factory=list, description="Manifest paths")


class NamespaceInjection(BaseModel):
    """Append ``--namespace`` unless a namespace flag is present."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["namespace"] = "namespace"
    namespace: str = Field(default="", description="Target namespace")


class TemplateFilesInjection(BaseModel):
    """Render each template and append ``-f`` for the rendered copy."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["templates"] = "templates"
    templates: list[Path] = Field(default_factory=list, description="Template paths")
    context: dict[str, str] = Field(
        default_factory=dict, description="Template variables"
    )


OptionRule = Annotated[
    Union[FilesInjection, NamespaceInjection, TemplateFilesInjection],
    Field(discriminator="kind"),
]
