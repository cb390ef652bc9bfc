"""Validation and defaulting of the persistence section of a service config.

The models live in :mod:`persistconf.models.config`. This module stays free of third party imports so ``setup.py`` can
read the version from it before any requirements are installed.
"""

from .version import __version__

__all__ = ["__version__"]
