from collections import deque
from typing import Deque, List

SEP = "/"


def split_path(path: str) -> List[str]:
    """Split `path` on `/`, dropping the empty components left by leading, trailing or repeated
    separators.
    """
    return [name for name in path.split(SEP) if name]


def prepend_components(path: str, pending: Deque[str]) -> int:
    """Insert the components of `path`, in order, at the front of `pending`.

    Returns the number of names inserted; the names that were already queued now start at that
    index. Splitting `/` inserts nothing.
    """
    names = split_path(path)
    # extendleft reverses its argument
    pending.extendleft(reversed(names))
    return len(names)


def seed_components(path: str, cwd: str = "") -> Deque[str]:
    """Build the initial pending queue: the components of `cwd` followed by those of `path`."""
    pending: Deque[str] = deque()
    prepend_components(path, pending)
    if cwd:
        prepend_components(cwd, pending)
    return pending
