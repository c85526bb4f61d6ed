"""
File operation engine: copy, move, delete and mkdir on absolute paths.

Every operation runs synchronously to completion. Failures raise one of the
:mod:`tinycommander.core.errors` exceptions; nothing here touches panels.
"""
from __future__ import annotations

import errno
import logging
import os
import shutil
import stat
from dataclasses import dataclass
from typing import Optional

from ..constants import COPY_CHUNK_SIZE
from .errors import (
    DeleteFailed,
    DestinationUnwritable,
    DirectoryNotEmpty,
    FileOperationError,
    SourceUnreadable,
)
from .listing import PARENT_ENTRY_NAME

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class MoveOutcome:
    """How a successful move placed the data."""

    renamed: bool
    source_removed: bool = True
    source_error: Optional[FileOperationError] = None


def _reason(exc):
    return exc.strerror or None


def _same_file(src, dst):
    try:
        return os.path.samefile(src, dst)
    except OSError:
        return False


def _stream(source, target, src, dst, chunk_size):
    while True:
        try:
            chunk = source.read(chunk_size)
        except OSError as exc:
            raise SourceUnreadable(src, _reason(exc)) from exc
        if not chunk:
            return
        try:
            target.write(chunk)
        except OSError as exc:
            raise DestinationUnwritable(dst, _reason(exc)) from exc


def _copy_permissions(src, dst):
    try:
        shutil.copymode(src, dst)
    except OSError as exc:
        LOGGER.warning("could not copy permissions %s -> %s: %s", src, dst, exc)


def copy_file(src, dst, *, chunk_size=COPY_CHUNK_SIZE):
    """Copy the bytes of file ``src`` to ``dst``, then its permission bits.

    A destination left half-written by a failed transfer is not removed.
    """
    if os.path.basename(src.rstrip(os.sep)) == PARENT_ENTRY_NAME:
        raise SourceUnreadable(src, "Cannot copy the parent entry")
    if _same_file(src, dst):
        raise DestinationUnwritable(dst, "Source and destination are the same file")

    LOGGER.debug("copy %s -> %s", src, dst)
    try:
        source = open(src, "rb")
    except OSError as exc:
        raise SourceUnreadable(src, _reason(exc)) from exc

    with source:
        try:
            target = open(dst, "wb")
        except OSError as exc:
            raise DestinationUnwritable(dst, _reason(exc)) from exc
        try:
            with target:
                _stream(source, target, src, dst, chunk_size)
        except OSError as exc:
            # Flush on close.
            raise DestinationUnwritable(dst, _reason(exc)) from exc

    _copy_permissions(src, dst)
    LOGGER.info("copied %s -> %s", src, dst)


def delete_path(path):
    """Unlink a file, or remove an empty directory. Never recursive."""
    try:
        st = os.lstat(path)
    except OSError as exc:
        raise DeleteFailed(path, _reason(exc)) from exc

    if stat.S_ISDIR(st.st_mode):
        try:
            os.rmdir(path)
        except OSError as exc:
            if exc.errno in (errno.ENOTEMPTY, errno.EEXIST):
                raise DirectoryNotEmpty(path) from exc
            raise DeleteFailed(path, _reason(exc)) from exc
    else:
        try:
            os.unlink(path)
        except OSError as exc:
            raise DeleteFailed(path, _reason(exc)) from exc
    LOGGER.info("deleted %s", path)


def move_file(src, dst):
    """Rename ``src`` to ``dst``, falling back to copy-then-delete.

    The fallback never deletes before the copy has succeeded. When the copy
    succeeds but the source cannot be removed, the move still succeeds and
    the returned outcome records the leftover source.
    """
    try:
        os.rename(src, dst)
    except OSError as exc:
        rename_error = exc
    else:
        LOGGER.info("renamed %s -> %s", src, dst)
        return MoveOutcome(renamed=True)

    LOGGER.debug("rename %s -> %s failed (%s), copying instead", src, dst, rename_error)
    if os.path.isdir(src):
        raise SourceUnreadable(src, "Cannot move a directory across filesystems") from rename_error

    copy_file(src, dst)
    try:
        delete_path(src)
    except FileOperationError as exc:
        LOGGER.warning("moved %s -> %s but the source remains: %s", src, dst, exc)
        return MoveOutcome(renamed=False, source_removed=False, source_error=exc)
    return MoveOutcome(renamed=False)


def make_directory(parent, name):
    """Create directory ``name`` inside ``parent`` and return its path."""
    clean = (name or "").strip()
    path = os.path.join(parent, clean)
    if not clean or clean in (".", PARENT_ENTRY_NAME) or os.sep in clean:
        raise DestinationUnwritable(path, "Invalid directory name")
    try:
        os.mkdir(path)
    except OSError as exc:
        raise DestinationUnwritable(path, _reason(exc)) from exc
    LOGGER.info("created directory %s", path)
    return path
