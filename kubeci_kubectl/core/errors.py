"""Error taxonomy for the plugin."""

from __future__ import annotations


class PluginError(Exception):
    """Base class for failures that end an invocation with a non-zero exit."""


class ConfigError(PluginError):
    """Raised when required plugin settings are missing or invalid."""


class CredentialDecodeError(PluginError):
    """Raised when the kubeconfig blob is not valid base64."""


class TemplateError(PluginError):
    """Base class for template rendering failures."""


class TemplateParseError(TemplateError):
    """Raised when a template body is syntactically invalid."""


class TemplateExecuteError(TemplateError):
    """Raised when a template fails while rendering."""


class FileIOError(PluginError):
    """Raised when a source file or scratch file cannot be read or written."""


class ExecutionError(PluginError):
    """Raised when kubectl cannot be started."""
