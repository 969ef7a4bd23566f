import errno
import itertools
import os
from typing import Dict, Optional, Tuple, Union

from ..filesystem import Filesystem
from ..splitter import SEP, split_path

# matches the limit Linux applies when following symlinks on open
MAX_SYMLINK_HOPS = 40


def _error(code: int, filename: Optional[str] = None) -> OSError:
    return OSError(code, os.strerror(code), filename)


class _Node:
    pass


class _File(_Node):
    pass


class _Symlink(_Node):
    def __init__(self, target: str):
        self.target = target


class _Directory(_Node):
    def __init__(self, parent: Optional["_Directory"] = None):
        self.parent = parent if parent is not None else self
        self.children: Dict[str, _Node] = {}


class MemoryFilesystem(Filesystem):
    """A `Filesystem` that keeps a tree of directories, files and symlinks in memory. It reports
    the same errno values as a POSIX system would, so it can be used as a drop-in replacement
    for `OSFilesystem` in tests, or to canonicalize paths against a tree that does not exist on
    disk.

    Build the tree with `mkdir`, `touch` and `symlink`. Their paths are taken literally from the
    root: no symlinks are followed and `..` is not allowed.

    Args:
        cwd (str): The value returned by `getcwd`, which relative paths are resolved against.
    """

    def __init__(self, cwd: str = SEP):
        self.root = _Directory()
        self.cwd = cwd
        self._handles: Dict[int, _Directory] = {}
        self._handle_ids = itertools.count(3)

    @property
    def open_handles(self) -> int:
        """Number of handles opened and not yet closed."""
        return len(self._handles)

    # ====================== Filesystem primitives ======================
    def open_root(self) -> int:
        return self._new_handle(self.root)

    def open_relative(self, handle: int, name: str) -> int:
        node = self._walk(self._directory(handle), name, hops=0)
        if not isinstance(node, _Directory):
            raise _error(errno.ENOTDIR, name)
        return self._new_handle(node)

    def read_link_relative(self, handle: int, name: str) -> str:
        directory = self._directory(handle)
        if name in (".", ".."):
            raise _error(errno.EINVAL, name)

        node = directory.children.get(name)
        if node is None:
            raise _error(errno.ENOENT, name)
        if not isinstance(node, _Symlink):
            raise _error(errno.EINVAL, name)
        return node.target

    def close(self, handle: int) -> None:
        if self._handles.pop(handle, None) is None:
            raise _error(errno.EBADF)

    def getcwd(self) -> str:
        return self.cwd

    # ====================== tree builders ======================
    def mkdir(self, path: str, parents: bool = False, exist_ok: bool = False) -> None:
        if parents:
            directory = self.root
            for name in split_path(path):
                child = directory.children.setdefault(name, _Directory(parent=directory))
                if not isinstance(child, _Directory):
                    raise _error(errno.ENOTDIR, path)
                directory = child
            return

        parent, name = self._parent_and_name(path)
        if name in parent.children:
            if exist_ok and isinstance(parent.children[name], _Directory):
                return
            raise _error(errno.EEXIST, path)
        parent.children[name] = _Directory(parent=parent)

    def touch(self, path: str) -> None:
        parent, name = self._parent_and_name(path)
        if isinstance(parent.children.get(name), _Directory):
            raise _error(errno.EISDIR, path)
        parent.children.setdefault(name, _File())

    def symlink(self, target: str, path: str) -> None:
        """Create a symlink at `path` pointing to `target`, like `os.symlink(target, path)`."""
        parent, name = self._parent_and_name(path)
        if name in parent.children:
            raise _error(errno.EEXIST, path)
        parent.children[name] = _Symlink(target)

    # ====================== internals ======================
    def _new_handle(self, directory: _Directory) -> int:
        handle = next(self._handle_ids)
        self._handles[handle] = directory
        return handle

    def _directory(self, handle: int) -> _Directory:
        try:
            return self._handles[handle]
        except KeyError:
            raise _error(errno.EBADF)

    def _parent_and_name(self, path: str) -> Tuple[_Directory, str]:
        names = split_path(path)
        if not names or ".." in names or "." in names:
            raise _error(errno.EINVAL, path)

        directory = self.root
        for name in names[:-1]:
            child = directory.children.get(name)
            if child is None:
                raise _error(errno.ENOENT, path)
            if not isinstance(child, _Directory):
                raise _error(errno.ENOTDIR, path)
            directory = child
        return directory, names[-1]

    def _walk(self, start: _Directory, path: str, hops: int) -> _Node:
        """Look up `path` from `start`, following every symlink, as `open` does."""
        node: _Node = self.root if path.startswith(SEP) else start

        for name in split_path(path):
            if not isinstance(node, _Directory):
                raise _error(errno.ENOTDIR, path)
            if name == ".":
                continue
            if name == "..":
                node = node.parent
                continue

            child: Union[_Node, None] = node.children.get(name)
            if child is None:
                raise _error(errno.ENOENT, path)
            if isinstance(child, _Symlink):
                if hops >= MAX_SYMLINK_HOPS:
                    raise _error(errno.ELOOP, path)
                child = self._walk(node, child.target, hops + 1)
            node = child

        return node
