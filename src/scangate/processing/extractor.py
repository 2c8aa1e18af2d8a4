"""Streamed tar extraction with path-containment checks"""

import logging
import os
import shutil
import sys
import tarfile
import tempfile
from typing import BinaryIO, Union

from ..core.exceptions import ExtractionError, PathTraversalError

logger = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]


def create_tmp_path(prefix: str) -> str:
    """Create a scratch directory for extracted image layers"""
    try:
        tmp_path = tempfile.mkdtemp(prefix=prefix)
    except OSError as e:
        raise ExtractionError(f"Could not create temporary folder: {e}") from e
    logger.debug(f"Created temporary folder {tmp_path}")
    return tmp_path


def resolve_member_path(target: PathLike, name: str) -> str:
    """Join an archive entry name onto the target, rejecting escapes"""
    root = os.path.normpath(os.fspath(target))
    path = os.path.normpath(os.path.join(root, name))
    if not path.startswith(root + os.sep):
        raise PathTraversalError(name)
    return path


def untar(stream: BinaryIO, target: PathLike) -> int:
    """Extract a streamed tar archive into target.

    Entries are processed in archive order. The first entry that would land
    outside target aborts the extraction with PathTraversalError; files
    written before it are left in place. Only directories and regular files
    are materialized. Returns the number of entries extracted.
    """
    extracted = 0
    with tarfile.open(fileobj=stream, mode='r|*') as archive:
        for member in archive:
            path = resolve_member_path(target, member.name)
            mode = member.mode & 0o7777

            if member.isdir():
                os.makedirs(path, mode, exist_ok=True)
                os.chmod(path, mode)
            elif member.isreg():
                fd = os.open(path, os.O_CREAT | os.O_TRUNC | os.O_WRONLY, mode)
                with open(fd, 'wb') as output, archive.extractfile(member) as source:
                    shutil.copyfileobj(source, output)
                    os.chmod(path, mode)
            else:
                logger.warning(f"Skipping non-regular archive entry {member.name}")
                continue

            extracted += 1
            logger.debug(f"Extracted {member.name}")

    logger.info(f"Extracted {extracted} entries into {target}")
    return extracted


def extract_file(archive_path: str, target: PathLike) -> int:
    """Extract an archive file, or standard input when archive_path is '-'"""
    os.makedirs(target, exist_ok=True)
    if archive_path == '-':
        return untar(sys.stdin.buffer, target)
    with open(archive_path, 'rb') as stream:
        return untar(stream, target)
