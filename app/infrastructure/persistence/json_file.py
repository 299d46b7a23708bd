"""Locked JSON file storage.

Readers never take the lock: they may observe the previous content until a
writer completes. Writers take an exclusive ``fcntl.flock`` on the target file
itself, so two processes writing the same file are serialized (last writer
wins).
"""

import fcntl
import json
import os
from pathlib import Path
from typing import Any, Optional, Union

from infrastructure.logging import get_module_logger

logger = get_module_logger()

PathLike = Union[str, Path]


def read_json(path: PathLike) -> Optional[Any]:
    """Read and decode a JSON file.

    Args:
        path: File to read.

    Returns:
        Decoded JSON value, or None if the file is missing, unreadable, empty
        or not valid JSON.
    """
    file_path = Path(path)
    try:
        content = file_path.read_text(encoding="utf-8")
    except (FileNotFoundError, PermissionError, IsADirectoryError):
        return None
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("json_file_unreadable", path=str(file_path), error=str(e))
        return None

    if not content:
        return None

    try:
        return json.loads(content)
    except json.JSONDecodeError as e:
        logger.warning("json_file_invalid", path=str(file_path), error=str(e))
        return None


def write_json_locked(path: PathLike, data: Any) -> bool:
    """Write ``data`` as pretty-printed UTF-8 JSON under an exclusive lock.

    The containing directory is created when missing. The file is opened
    without truncation, locked, then truncated and rewritten, so a concurrent
    writer never sees an empty file between open and lock.

    Args:
        path: Target file.
        data: JSON-serializable value.

    Returns:
        True on success, False on serialization, directory, lock or write failure.
    """
    file_path = Path(path)

    try:
        payload = json.dumps(data, indent=4, ensure_ascii=False)
    except (TypeError, ValueError) as e:
        logger.error("json_serialize_failed", path=str(file_path), error=str(e))
        return False

    try:
        file_path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.error("json_directory_create_failed", path=str(file_path), error=str(e))
        return False

    try:
        fd = os.open(str(file_path), os.O_RDWR | os.O_CREAT, 0o644)
    except OSError as e:
        logger.error("json_file_open_failed", path=str(file_path), error=str(e))
        return False

    try:
        try:
            fcntl.flock(fd, fcntl.LOCK_EX)
        except OSError as e:
            logger.error("json_file_lock_failed", path=str(file_path), error=str(e))
            return False

        try:
            os.ftruncate(fd, 0)
            os.lseek(fd, 0, os.SEEK_SET)
            os.write(fd, payload.encode("utf-8"))
            os.fsync(fd)
        except OSError as e:
            logger.error("json_file_write_failed", path=str(file_path), error=str(e))
            return False
        finally:
            fcntl.flock(fd, fcntl.LOCK_UN)
    finally:
        os.close(fd)

    return True
