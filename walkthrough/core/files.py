"""
File utilities - scoped temporary artifacts and directory helpers
"""

import uuid
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from .logging import get_logger

logger = get_logger(__name__, component="files")


def ensure_directory(dir_path: Path) -> Path:
    """Ensure directory exists, creating if necessary"""
    dir_path.mkdir(parents=True, exist_ok=True)
    return dir_path


def unique_temp_path(directory: Path, prefix: str, suffix: str) -> Path:
    """Build a collision-free path inside ``directory``.

    Names are uuid-qualified; concurrent compositions may share a work
    directory.
    """
    return directory / f"{prefix}_{uuid.uuid4().hex}{suffix}"


def remove_quietly(path: Optional[Path]) -> None:
    """Delete a file, logging instead of raising on failure"""
    if path is None:
        return
    try:
        path.unlink(missing_ok=True)
    except OSError as exc:
        logger.warning(f"Could not remove temporary file {path}: {exc}")


@contextmanager
def scoped_temp_file(directory: Path, prefix: str, suffix: str) -> Iterator[Path]:
    """Yield a unique temp path that is removed on every exit path.

    The file itself is not created; the caller (or a subprocess) writes it.
    """
    ensure_directory(directory)
    path = unique_temp_path(directory, prefix, suffix)
    try:
        yield path
    finally:
        remove_quietly(path)
