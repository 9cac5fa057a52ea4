"""Atomic file writes, backups and deletions.

The write flow:
1. Write to file.tmp
2. fsync (ensure physical write)
3. rename to final name (atomic operation)

Backups go through the same temp-file-then-replace flow so that a
<name>.backup either holds the complete previous content or is absent.

Example:
    from releaseos.core.utils.atomic_write import atomic_write, backup_file

    backup_file("module/pom.xml")
    atomic_write("module/pom.xml", new_content)
"""

import logging
import os
import shutil
from pathlib import Path
from typing import Iterable, List, Union

from releaseos.core.errors import IOFailure

logger = logging.getLogger(__name__)

BACKUP_SUFFIX = ".backup"


def atomic_write(file_path: Union[str, Path], content: str, encoding: str = "utf-8") -> Path:
    """Write text to a file atomically.

    Args:
        file_path: Target file path
        content: Content to write
        encoding: Text encoding (default: utf-8)

    Returns:
        The final file path

    Raises:
        IOFailure: If the file cannot be written
    """
    file_path = Path(file_path)
    tmp_path = file_path.with_name(file_path.name + ".tmp")

    try:
        file_path.parent.mkdir(parents=True, exist_ok=True)
        with open(tmp_path, "w", encoding=encoding, newline="") as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        tmp_path.replace(file_path)
    except OSError as e:
        if tmp_path.exists():
            tmp_path.unlink()
        raise IOFailure(f"Unable to write file: {e}", path=file_path) from e

    logger.debug(f"Wrote {len(content.splitlines())} lines to {file_path}")
    return file_path


def backup_file(file_path: Union[str, Path]) -> Path:
    """Copy a file to <name>.backup, replacing any previous backup.

    Returns:
        Path to the backup file

    Raises:
        IOFailure: If the file cannot be copied
    """
    file_path = Path(file_path)
    backup_path = file_path.with_name(file_path.name + BACKUP_SUFFIX)
    tmp_path = backup_path.with_name(backup_path.name + ".tmp")

    try:
        shutil.copy2(file_path, tmp_path)
        with open(tmp_path, "rb+") as f:
            os.fsync(f.fileno())
        tmp_path.replace(backup_path)
    except OSError as e:
        tmp_path.unlink(missing_ok=True)
        raise IOFailure(f"Unable to back up file: {e}", path=file_path) from e

    logger.info(f"Backed up {file_path} to {backup_path}")
    return backup_path


def delete_files(paths: Iterable[Union[str, Path]]) -> List[Path]:
    """Delete files, returning the paths that were removed.

    Raises:
        IOFailure: If an existing file cannot be deleted
    """
    deleted = []
    for path in paths:
        path = Path(path)
        try:
            path.unlink()
        except FileNotFoundError:
            logger.debug(f"Nothing to delete at {path}")
            continue
        except OSError as e:
            raise IOFailure(f"Unable to delete file: {e}", path=path) from e
        deleted.append(path)
        logger.info(f"Deleted {path}")
    return deleted


__all__ = [
    "BACKUP_SUFFIX",
    "atomic_write",
    "backup_file",
    "delete_files",
]
