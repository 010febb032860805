"""
Best-effort filesystem cleanup.

Deleting something that is already gone, or that cannot be removed, is not
an error here: cleanup runs while another failure may be propagating and
must never replace it. Failures are logged at debug level.
"""
import logging
import shutil
from pathlib import Path

logger = logging.getLogger(__name__)


def delete_file(path: Path) -> None:
    """Delete a file. A missing file or a failed delete is not an error."""
    try:
        Path(path).unlink()
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.debug(f"Could not delete {path}: {e}")


def delete_directory(directory: Path) -> None:
    """Recursively delete a directory without following symlinks."""
    shutil.rmtree(directory, ignore_errors=True)
    if Path(directory).exists():
        logger.debug(f"Could not fully delete {directory}")


def is_path_segment(value: str) -> bool:
    """True when value names one entry inside a directory, nothing above it."""
    return bool(value) and "/" not in value and "\\" not in value and value not in (".", "..")
