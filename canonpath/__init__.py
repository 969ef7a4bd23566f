import importlib.metadata as importlib_metadata
import os

from loguru import logger

from .enums import ExistenceMode
from .exceptions import CanonPathException, ResolutionError, SymlinkLoopError
from .filesystem import Filesystem, OSFilesystem
from .memory import MemoryFilesystem
from .patches import patch_realpath
from .resolver import Resolver, abspath, abspath_or_none


__version__ = importlib_metadata.version(__name__.split(".", 1)[0])


__all__ = [
    "abspath",
    "abspath_or_none",
    "CanonPathException",
    "ExistenceMode",
    "Filesystem",
    "MemoryFilesystem",
    "OSFilesystem",
    "patch_realpath",
    "ResolutionError",
    "Resolver",
    "SymlinkLoopError",
]


# silent unless an application opts in with logger.enable("canonpath")
logger.disable(__name__)


if bool(os.environ.get("CANONPATH_PATCH_REALPATH", "")):
    patch_realpath()
