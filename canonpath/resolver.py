from contextlib import contextmanager
import errno
import os
from typing import AnyStr, Deque, Iterator, List, Optional, Union

from loguru import logger

from .assembler import assemble
from .cursor import DirectoryCursor
from .enums import ExistenceMode
from .exceptions import InvalidConfigurationException, ResolutionError, resolution_error
from .filesystem import Filesystem, OSFilesystem
from .splitter import SEP, prepend_components, seed_components

DEFAULT_LOOP_BUDGET = 9999
DEFAULT_MAX_LINK_SIZE = 4096

PathArg = Union[AnyStr, "os.PathLike[AnyStr]"]
ExactArg = Union[None, bool, str, ExistenceMode]


def _int_from_environment(name: str, minimum: int) -> Optional[int]:
    env_string = os.environ.get(name, "")

    if not env_string:
        return None

    try:
        value = int(env_string)
    except ValueError:
        raise InvalidConfigurationException(f"{name} must be an integer, got {env_string!r}.")

    if value < minimum:
        raise InvalidConfigurationException(f"{name} must be at least {minimum}, got {value}.")
    return value


class Resolver:
    """Canonicalizes paths against a `Filesystem`.

    A resolver only holds configuration; every call to `resolve` builds its own work queue and
    directory cursor, so an instance can be reused freely.

    Args:
        filesystem (Optional[Filesystem]): Where paths are looked up. Defaults to the operating
            system.
        loop_budget (Optional[int]): How many path components a single call may process before
            failing with `ELOOP`. Defaults to the `CANONPATH_LOOP_BUDGET` environment variable,
            then 9999.
        max_link_size (Optional[int]): Size of the buffer a symlink target is read into,
            terminator included. Longer targets fail with `ENAMETOOLONG`. Defaults to the
            `CANONPATH_MAX_LINK_SIZE` environment variable, then 4096.
    """

    _default_resolver = None

    def __init__(
        self,
        filesystem: Optional[Filesystem] = None,
        loop_budget: Optional[int] = None,
        max_link_size: Optional[int] = None,
    ):
        if loop_budget is None:
            loop_budget = _int_from_environment("CANONPATH_LOOP_BUDGET", 1)
        if max_link_size is None:
            max_link_size = _int_from_environment("CANONPATH_MAX_LINK_SIZE", 2)

        if loop_budget is not None and loop_budget < 1:
            raise InvalidConfigurationException(f"loop_budget must be positive, got {loop_budget}.")
        if max_link_size is not None and max_link_size < 2:
            raise InvalidConfigurationException(
                f"max_link_size must be at least 2, got {max_link_size}."
            )

        self.filesystem = filesystem if filesystem is not None else OSFilesystem()
        self.loop_budget = loop_budget if loop_budget is not None else DEFAULT_LOOP_BUDGET
        self.max_link_size = max_link_size if max_link_size is not None else DEFAULT_MAX_LINK_SIZE

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(filesystem={self.filesystem!r}, "
            f"loop_budget={self.loop_budget}, max_link_size={self.max_link_size})"
        )

    @classmethod
    def get_default_resolver(cls) -> "Resolver":
        """Get the default resolver, which is the one used by `abspath` and `abspath_or_none`."""
        if cls._default_resolver is None:
            cls._default_resolver = cls()
        return cls._default_resolver

    def set_as_default_resolver(self) -> None:
        """Set this resolver instance as the one used by `abspath` and `abspath_or_none`."""
        Resolver._default_resolver = self

    def resolve(self, path: PathArg, exact: ExactArg = False) -> AnyStr:
        """Return the canonical absolute form of `path`: no `.` or `..` components and no
        symlinks. Relative paths are taken relative to the filesystem's current directory.

        Args:
            path: The path to canonicalize. `bytes` input gives `bytes` output.
            exact: If true (or `ExistenceMode.exact`), the final component must exist. Otherwise
                a missing final component is returned literally. `None` reads the mode from
                `CANONPATH_EXISTENCE_MODE`.

        Raises:
            ResolutionError: The path cannot be canonicalized. `errno` says why and `filename`
                holds the partial path that failed.
        """
        path = os.fspath(path)
        if isinstance(path, bytes):
            return os.fsencode(self._resolve(os.fsdecode(path), ExistenceMode.coerce(exact)))
        return self._resolve(path, ExistenceMode.coerce(exact))

    def resolve_or_none(self, path: PathArg, exact: ExactArg = False) -> Optional[AnyStr]:
        """Like `resolve`, but returns None instead of raising `ResolutionError`."""
        try:
            return self.resolve(path, exact)
        except ResolutionError as e:
            logger.debug("cannot canonicalize {!r}: [errno {}] {}", path, e.errno, e.strerror)
            return None

    def _resolve(self, path: str, mode: ExistenceMode) -> str:
        exact = mode is ExistenceMode.exact

        cwd = ""
        if not path.startswith(SEP):
            with _failures_as(path):
                cwd = self.filesystem.getcwd()

        pending = seed_components(path, cwd)
        resolved: List[str] = []
        logger.debug(
            "canonicalizing {!r} ({}), {} components queued", path, mode.value, len(pending)
        )

        with _failures_as(path), DirectoryCursor(self.filesystem) as cursor:
            budget = self.loop_budget

            while pending:
                name = pending.popleft()

                if not budget:
                    raise resolution_error(errno.ELOOP, _partial(resolved, name))
                budget -= 1

                if name == ".":
                    continue

                if name == "..":
                    if resolved:
                        resolved.pop()
                    with _failures_as(_partial(resolved)):
                        cursor.ascend()
                    continue

                try:
                    target = cursor.read_link(name)
                except OSError as e:
                    if e.errno != errno.EINVAL:
                        # a missing component is only tolerated at the very end
                        if exact or pending or e.errno != errno.ENOENT:
                            code = e.errno or errno.EIO
                            raise resolution_error(code, _partial(resolved, name)) from e
                        logger.trace("{!r} does not exist, keeping it literally", name)
                        resolved.append(name)
                        break

                    resolved.append(name)
                    if pending:
                        with _failures_as(_partial(resolved)):
                            cursor.descend(name)
                    continue

                self._expand_link(target, name, pending, resolved, cursor)

        return assemble(resolved)

    def _expand_link(
        self,
        target: str,
        name: str,
        pending: Deque[str],
        resolved: List[str],
        cursor: DirectoryCursor,
    ) -> None:
        if not target:
            raise resolution_error(errno.ENOENT, _partial(resolved, name))
        if len(os.fsencode(target)) >= self.max_link_size:
            raise resolution_error(errno.ENAMETOOLONG, _partial(resolved, name))

        logger.trace("{!r} -> {!r}", name, target)

        if target.startswith(SEP):
            resolved.clear()
            with _failures_as(SEP):
                cursor.reset()

        prepend_components(target, pending)


@contextmanager
def _failures_as(filename: str) -> Iterator[None]:
    """Re-raise any `OSError` from the block as the matching `ResolutionError` for `filename`."""
    try:
        yield
    except ResolutionError:
        raise
    except OSError as e:
        raise resolution_error(e.errno or errno.EIO, filename) from e
    except ValueError as e:
        # names the OS cannot represent, such as ones with an embedded NUL
        raise resolution_error(errno.EINVAL, filename) from e


def _partial(resolved: List[str], name: Optional[str] = None) -> str:
    names = resolved if name is None else resolved + [name]
    return SEP + SEP.join(names)


def abspath(path: PathArg, exact: ExactArg = False) -> AnyStr:
    """Canonicalize `path` with the default resolver. See `Resolver.resolve`."""
    return Resolver.get_default_resolver().resolve(path, exact)


def abspath_or_none(path: PathArg, exact: ExactArg = False) -> Optional[AnyStr]:
    """Canonicalize `path` with the default resolver, returning None on failure."""
    return Resolver.get_default_resolver().resolve_or_none(path, exact)
