"""Working directory inheritance.

Sessions, windows and panes may each name a directory. An absolute child
replaces its parent's, a relative one is resolved against it, and a missing
one inherits it.
"""

import os
from pathlib import PurePosixPath


def join_cwd(parent: str | None, child: str | None) -> str | None:
    """Resolve ``child`` against ``parent``.

    >>> join_cwd("/srv", "app")
    '/srv/app'
    >>> join_cwd("/srv", "/tmp")
    '/tmp'
    >>> join_cwd("/srv", None)
    '/srv'
    """
    if not child:
        return parent or None
    if os.path.isabs(child) or not parent:
        return child
    return str(PurePosixPath(parent) / child)


def relative_cwd(path: str | None, root: str | None) -> str | None:
    """Express ``path`` for a config nested under ``root``.

    Returns None when ``path`` equals ``root`` (nothing to declare), a
    relative path when it lies below it, and ``path`` unchanged otherwise.
    """
    if not path:
        return None
    if not root:
        return path
    pure, base = PurePosixPath(path), PurePosixPath(root)
    if pure == base:
        return None
    try:
        return str(pure.relative_to(base))
    except ValueError:
        return path


def expand_cwd(value: str | None) -> str | None:
    """Expand ``~`` and environment variables in a configured directory."""
    if not value:
        return None
    return os.path.expanduser(os.path.expandvars(value))
