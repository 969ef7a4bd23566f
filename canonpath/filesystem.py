import abc
import os
from typing import Any

# directory handles are only ever used as `dir_fd` bases
_DIR_FLAGS = os.O_RDONLY | getattr(os, "O_DIRECTORY", 0) | getattr(os, "O_CLOEXEC", 0)


class Filesystem(abc.ABC):
    """The primitives a `Resolver` needs from the filesystem it canonicalizes paths against.

    Handles are opaque to the resolver: it only ever passes a handle back to the same
    `Filesystem` that produced it. Failures are reported as `OSError` with the matching `errno`.
    """

    @abc.abstractmethod
    def open_root(self) -> Any:
        """Return a handle to the root directory."""
        pass

    @abc.abstractmethod
    def open_relative(self, handle: Any, name: str) -> Any:
        """Open directory `name` (a single component, possibly `..`) relative to `handle`."""
        pass

    @abc.abstractmethod
    def read_link_relative(self, handle: Any, name: str) -> str:
        """Return the target of symlink `name` relative to `handle`.

        Must raise `OSError` with `errno.EINVAL` if `name` exists but is not a symlink and with
        `errno.ENOENT` if it does not exist.
        """
        pass

    @abc.abstractmethod
    def close(self, handle: Any) -> None:
        pass

    @abc.abstractmethod
    def getcwd(self) -> str:
        pass


class OSFilesystem(Filesystem):
    """`Filesystem` backed by the operating system, using directory file descriptors."""

    def open_root(self) -> int:
        return os.open("/", _DIR_FLAGS)

    def open_relative(self, handle: int, name: str) -> int:
        return os.open(name, _DIR_FLAGS, dir_fd=handle)

    def read_link_relative(self, handle: int, name: str) -> str:
        return os.readlink(name, dir_fd=handle)

    def close(self, handle: int) -> None:
        os.close(handle)

    def getcwd(self) -> str:
        return os.getcwd()
