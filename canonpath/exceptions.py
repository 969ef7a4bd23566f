"""This module contains all custom exceptions in the `canonpath` library. All exceptions
subclass the [`CanonPathException` base exception][canonpath.exceptions.CanonPathException] to
facilitate catching any exception from this library.

Failures to resolve a path are `OSError` subclasses, so `errno`, `strerror` and `filename` are
available for diagnostics exactly as they would be for a failed system call.
"""

import errno
import os


class CanonPathException(Exception):
    """Base exception for all canonpath custom exceptions."""


class InvalidConfigurationException(CanonPathException, ValueError):
    pass


class ResolutionError(CanonPathException, OSError):
    """Raised when a path cannot be canonicalized. `filename` holds the partially resolved path
    up to and including the component that failed.
    """


class SymlinkLoopError(ResolutionError):
    pass


class LinkTargetTooLongError(ResolutionError):
    pass


class ComponentNotFoundError(ResolutionError, FileNotFoundError):
    pass


class ComponentNotADirectoryError(ResolutionError, NotADirectoryError):
    pass


class ComponentPermissionError(ResolutionError, PermissionError):
    pass


_ERRNO_TO_EXCEPTION = {
    errno.ELOOP: SymlinkLoopError,
    errno.ENAMETOOLONG: LinkTargetTooLongError,
    errno.ENOENT: ComponentNotFoundError,
    errno.ENOTDIR: ComponentNotADirectoryError,
    errno.EACCES: ComponentPermissionError,
    errno.EPERM: ComponentPermissionError,
}


def resolution_error(code: int, filename: str) -> ResolutionError:
    """Build the `ResolutionError` subclass matching `code`."""
    exc_class = _ERRNO_TO_EXCEPTION.get(code, ResolutionError)
    return exc_class(code, os.strerror(code), filename)
