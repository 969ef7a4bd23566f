import os
import os.path
import posixpath

from .exceptions import ResolutionError
from .resolver import Resolver

# saved before any patching so the fallback is never our own replacement
_os_realpath = posixpath.realpath


def _canonpath_realpath(path, *, strict=False):
    """`os.path.realpath` backed by the default `Resolver`.

    With `strict=True` the final component must exist and failures raise. Otherwise, as with the
    builtin, failures fall back to the builtin `realpath`, which still follows every link it can.
    """
    resolver = Resolver.get_default_resolver()
    if strict:
        return resolver.resolve(path, exact=True)

    try:
        return resolver.resolve(path, exact=False)
    except ResolutionError:
        return _os_realpath(path)


class _RealpathPatch:
    def __init__(self):
        self._orig_realpath = os.path.realpath

        # patch immediately so a plain call works
        os.path.realpath = _canonpath_realpath

    def __enter__(self):
        return os.path.realpath

    def __exit__(self, exc_type, exc_value, traceback):
        os.path.realpath = self._orig_realpath


def patch_realpath():
    """Replace `os.path.realpath` with one that uses the default `Resolver`. Returns a context
    manager that restores the original on exit; calling it without `with` leaves the patch in
    place.
    """
    return _RealpathPatch()
