"""
Pass bundle assembly

Materializes the bundle file tree in a scratch directory: pass.json, the
top-level images and one `<language>.lproj/` directory per localization.
"""
import json
import logging
import os
import shutil
from pathlib import Path
from typing import Mapping

from passbundler.errors import DirectoryError
from passbundler.models import Pass
from passbundler.utils.files import delete_directory

logger = logging.getLogger(__name__)

PASS_FILENAME = "pass.json"
LOCALIZATION_EXTENSION = ".lproj"
STRINGS_FILENAME = "pass.strings"


def _make_directory(directory: Path) -> None:
    """Create one directory level; an existing directory is reused."""
    try:
        directory.mkdir(mode=0o755)
    except FileExistsError:
        if not directory.is_dir():
            raise DirectoryError(f'Directory "{directory}" could not be created')
    except OSError as e:
        raise DirectoryError(f'Directory "{directory}" could not be created: {e}') from e


def create_scratch_directory(temp_dir: Path, serial_number: str) -> Path:
    """Create an empty `<temp_dir>/<serial_number>`; leftovers from an earlier run are cleared."""
    directory = Path(temp_dir) / serial_number
    if directory.is_dir():
        delete_directory(directory)
    _make_directory(directory)
    logger.debug(f"Using scratch directory {directory}")
    return directory


def write_pass_json(pass_: Pass, directory: Path) -> Path:
    path = directory / PASS_FILENAME
    path.write_text(json.dumps(pass_.to_pass_json(), indent=2, ensure_ascii=False), encoding="utf-8")
    return path


def copy_images(pass_: Pass, directory: Path) -> None:
    for image in pass_.images:
        target = directory / f"{image.resolved_name}.{image.extension}"
        shutil.copyfile(image.path, target)


def _escape(value: str) -> str:
    # Same set as PHP addslashes: backslash, both quote styles, NUL
    return (
        value.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("'", "\\'")
        .replace("\0", "\\0")
    )


def format_strings(strings: Mapping[str, str]) -> str:
    """Render a pass.strings body: one `"key" = "value";` line per entry."""
    return "".join(
        f'"{_escape(key)}" = "{_escape(value)}";{os.linesep}'
        for key, value in strings.items()
    )


def write_localizations(pass_: Pass, directory: Path) -> None:
    for localization in pass_.localizations:
        localization_dir = directory / f"{localization.language}{LOCALIZATION_EXTENSION}"
        _make_directory(localization_dir)

        # Encode ourselves so os.linesep is written untranslated
        (localization_dir / STRINGS_FILENAME).write_bytes(
            format_strings(localization.strings).encode("utf-8")
        )

        # Localized images keep their literal names, no scale suffix logic
        for image in localization.images:
            shutil.copyfile(image.path, localization_dir / (image.name or image.filename))


def assemble_bundle(pass_: Pass, directory: Path) -> None:
    """Write pass.json, images and localizations into an existing directory."""
    write_pass_json(pass_, directory)
    copy_images(pass_, directory)
    write_localizations(pass_, directory)
    logger.debug(
        f"Assembled bundle for {pass_.serial_number}: "
        f"{len(pass_.images)} image(s), {len(pass_.localizations)} localization(s)"
    )
