"""
Pass archive writer

Zips an assembled bundle directory into a .pkpass file.
"""
import logging
import os
import zipfile
from pathlib import Path

from passbundler.errors import ArchiveError
from passbundler.utils.files import delete_file

logger = logging.getLogger(__name__)


def zip_directory(source: Path, destination: Path) -> Path:
    """
    Zip every file and directory under source into destination.

    Entries are written parent-first; each directory, empty or not, gets its
    own `name/` entry and files keep their path relative to source. An
    existing destination is overwritten.

    Raises:
        ArchiveError: if the archive cannot be opened or written
    """
    source = Path(source)
    destination = Path(destination)

    try:
        zf = zipfile.ZipFile(destination, "w", zipfile.ZIP_DEFLATED)
    except OSError as e:
        raise ArchiveError(f'Could not create ZIP file at "{destination}": {e}') from e

    try:
        with zf:
            for dirpath, dirnames, filenames in os.walk(source):
                dirnames.sort()
                current = Path(dirpath)
                if current != source:
                    zf.write(current, current.relative_to(source).as_posix())
                for filename in sorted(filenames):
                    path = current / filename
                    if path.is_file():
                        zf.write(path, path.relative_to(source).as_posix())
    except OSError as e:
        # Never leave a half-written archive behind
        delete_file(destination)
        raise ArchiveError(f'Could not write ZIP file at "{destination}": {e}') from e

    logger.debug(f"Wrote archive {destination}")
    return destination
