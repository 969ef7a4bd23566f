import os
from pathlib import Path

from pytest_cases import fixture, fixture_union

from canonpath import MemoryFilesystem, Resolver
from canonpath.filesystem import Filesystem, OSFilesystem

from .mock_filesystem import TrackingFilesystem


class FilesystemTestRig:
    """Holds together a filesystem backend and a scratch directory tree on it, so the same
    tests can run against the operating system and against `MemoryFilesystem`.
    """

    def __init__(self, backend: Filesystem, base: str):
        """
        Args:
            backend (Filesystem): the filesystem the tree lives on
            base (str): canonical absolute path of the scratch directory
        """
        self.backend = backend
        self.base = base
        # relative paths resolve against the scratch directory unless a test changes it
        self.filesystem = TrackingFilesystem(backend, cwd=base)

    @property
    def is_memory(self) -> bool:
        return isinstance(self.backend, MemoryFilesystem)

    def path(self, rel: str = "") -> str:
        """Absolute path of `rel` inside the scratch directory."""
        return f"{self.base}/{rel}" if rel else self.base

    def resolver(self, **kwargs) -> Resolver:
        return Resolver(filesystem=self.filesystem, **kwargs)

    def mkdir(self, rel: str) -> None:
        if self.is_memory:
            self.backend.mkdir(self.path(rel), parents=True)
        else:
            os.makedirs(self.path(rel))

    def touch(self, rel: str) -> None:
        if self.is_memory:
            self.backend.touch(self.path(rel))
        else:
            Path(self.path(rel)).write_text("hello")

    def symlink(self, target: str, rel: str) -> None:
        if self.is_memory:
            self.backend.symlink(target, self.path(rel))
        else:
            os.symlink(target, self.path(rel))


def _populate(rig: FilesystemTestRig) -> FilesystemTestRig:
    rig.mkdir("a/b")
    rig.touch("a/b/file.txt")
    rig.mkdir("c")
    rig.symlink("a/b", "rel_link")
    rig.symlink(rig.path("c"), "abs_link")
    rig.symlink("a/b/file.txt", "file_link")
    rig.symlink("/", "root_link")
    rig.symlink(rig.path("loop_b"), "loop_a")
    rig.symlink(rig.path("loop_a"), "loop_b")
    rig.symlink("missing", "dangling")
    rig.symlink(rig.path("c"), "a/b/up")
    rig.symlink("../..", "a/b/grandparent")
    rig.symlink("rel_link/grandparent/c", "chain")
    return rig


@fixture()
def os_rig(tmp_path) -> FilesystemTestRig:
    """Scratch tree on the real filesystem."""
    return _populate(FilesystemTestRig(OSFilesystem(), os.path.realpath(tmp_path)))


@fixture()
def memory_rig() -> FilesystemTestRig:
    """The same scratch tree, kept in memory."""
    backend = MemoryFilesystem()
    backend.mkdir("/work/tree", parents=True)
    return _populate(FilesystemTestRig(backend, "/work/tree"))


rig = fixture_union("rig", [os_rig, memory_rig])


@fixture()
def default_resolver():
    """Restores the default resolver after a test replaces it."""
    original = Resolver._default_resolver
    yield
    Resolver._default_resolver = original
