from typing import Any, Optional

from loguru import logger

from .filesystem import Filesystem


class DirectoryCursor:
    """The single live directory handle of one resolution.

    The handle always names the directory implied by the components committed so far. Every move
    opens the new handle relative to the current one and then releases the current one, so at
    most one handle is held between moves. Use as a context manager: leaving the block releases
    the handle whether the resolution finished or raised.
    """

    def __init__(self, filesystem: Filesystem):
        self.filesystem = filesystem
        self._handle: Optional[Any] = None

    def __enter__(self) -> "DirectoryCursor":
        self._handle = self.filesystem.open_root()
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    @property
    def handle(self) -> Any:
        if self._handle is None:
            raise ValueError("DirectoryCursor is not open.")
        return self._handle

    @property
    def closed(self) -> bool:
        return self._handle is None

    def _swap(self, new_handle: Any) -> None:
        old_handle, self._handle = self._handle, new_handle
        if old_handle is not None:
            self.filesystem.close(old_handle)

    def descend(self, name: str) -> None:
        """Move into directory `name`. On failure the cursor is left where it was."""
        self._swap(self.filesystem.open_relative(self.handle, name))
        logger.trace("cursor moved into {!r}", name)

    def ascend(self) -> None:
        """Move to the parent directory; the parent of root is root."""
        self._swap(self.filesystem.open_relative(self.handle, ".."))
        logger.trace("cursor moved up")

    def reset(self) -> None:
        """Move back to the root directory."""
        self._swap(self.filesystem.open_root())
        logger.trace("cursor reset to root")

    def read_link(self, name: str) -> str:
        return self.filesystem.read_link_relative(self.handle, name)

    def close(self) -> None:
        self._swap(None)
