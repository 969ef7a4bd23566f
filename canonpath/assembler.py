from typing import List

from .splitter import SEP


def assemble(resolved: List[str]) -> str:
    """Join the committed components into the canonical path string.

    `resolved` is used as a stack while resolving, so its front-to-back order is already the
    final path order. The list is drained: it is empty when this returns.
    """
    names = resolved[:]
    resolved.clear()
    return SEP + SEP.join(names)
