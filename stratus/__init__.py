# Copyright Stratus Labs 2026
import sys

if sys.version_info[:2] < (3, 9):
    raise RuntimeError("This version of Stratus requires at least Python 3.9")

from stratus_version import __version__

from .exception import Error
from .project_spec import Function, Package, ProjectSpec

__all__ = [
    "__version__",
    "Error",
    "Function",
    "Package",
    "ProjectSpec",
]
