"""
git-deps-keeper - Keep external git library dependencies installed and up to date
"""

from .__version__ import __version__
from .core import DependencyKeeper
from .cli.main import main

__all__ = ["DependencyKeeper", "main", "__version__"]
