"""This module implements an in-memory `Filesystem` that mimics the operating system's behavior
without touching the disk. It can be used as a drop-in replacement for `OSFilesystem` when
testing code that canonicalizes paths, or to canonicalize paths against a tree that only exists
as data.
"""

from .memoryfilesystem import MemoryFilesystem

__all__ = [
    "MemoryFilesystem",
]
