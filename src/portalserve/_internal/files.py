"""Async filesystem probes shared by the file-serving middleware.

Existence checks go through ``anyio`` so a slow disk suspends only the
request that is waiting on it. A path that cannot name a file (missing,
under a non-directory, too long, a symlink loop, an embedded NUL) is a
normal "absent" answer. Every other ``OSError`` (permissions, I/O)
propagates so infrastructure faults surface as 500s instead of soft 404s.
"""

import errno
import mimetypes
import stat
from pathlib import Path

import anyio

_ABSENT = frozenset({errno.ENOENT, errno.ENOTDIR, errno.ENAMETOOLONG, errno.ELOOP})


def is_absent(exc: OSError) -> bool:
    """Whether *exc* means "no such file" rather than a fault."""
    return exc.errno in _ABSENT


async def _mode(path: Path) -> int | None:
    try:
        result = await anyio.Path(path).stat()
    except ValueError:
        # embedded NUL byte
        return None
    except OSError as exc:
        if is_absent(exc):
            return None
        raise
    return result.st_mode


async def is_file(path: Path) -> bool:
    """True if *path* exists and is a regular file (symlinks followed)."""
    mode = await _mode(path)
    return mode is not None and stat.S_ISREG(mode)


async def is_dir(path: Path) -> bool:
    """True if *path* exists and is a directory (symlinks followed)."""
    mode = await _mode(path)
    return mode is not None and stat.S_ISDIR(mode)


async def resolve(path: Path) -> Path | None:
    """Absolute, symlink-resolved *path*, or ``None`` if it cannot name a file."""
    try:
        return Path(await anyio.Path(path).resolve())
    except ValueError:
        return None
    except OSError as exc:
        if is_absent(exc):
            return None
        raise


async def read_file(path: Path) -> bytes:
    return await anyio.Path(path).read_bytes()


def guess_content_type(path: Path) -> str:
    """Content type from the file name; unknown types are opaque bytes."""
    content_type, _ = mimetypes.guess_type(path.name)
    return content_type or "application/octet-stream"
