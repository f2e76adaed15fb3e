"""KubeCI kubectl - Run kubectl in your pipeline.

Assembles a kubectl command line from plugin settings, renders templated
manifests from the build environment, and executes kubectl once.
"""

__version__ = "0.2.0"

# Configure logging for library use
import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())

# Re-export main CLI entry point
from .cli import main

__all__ = ["main"]
