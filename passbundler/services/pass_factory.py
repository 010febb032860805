"""
Apple Wallet Pass Factory

Builds a signed .pkpass archive from a Pass:

    validate -> scratch dir -> pass.json -> images -> localizations
             -> manifest.json -> signature -> zip -> remove scratch dir

Every stage runs to completion before the next one starts; the first failure
aborts the build. The scratch directory is removed on every exit path.
"""
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from passbundler.config import PASS_EXTENSION, FactoryConfig
from passbundler.errors import PassBundleError, ValidationError
from passbundler.models import Pass
from passbundler.services.archiver import zip_directory
from passbundler.services.bundle_assembler import assemble_bundle, create_scratch_directory
from passbundler.services.image_validator import validate_pass
from passbundler.services.manifest import write_manifest
from passbundler.services.signer import sign_manifest
from passbundler.utils.files import delete_directory, is_path_segment
from passbundler.utils.log import log_bundle_event

logger = logging.getLogger(__name__)


@contextmanager
def scratch_directory(temp_dir: Path, serial_number: str) -> Iterator[Path]:
    """Create `<temp_dir>/<serial_number>` and remove it when the block exits."""
    directory = create_scratch_directory(temp_dir, serial_number)
    try:
        yield directory
    finally:
        delete_directory(directory)


def archive_path(pass_: Pass, config: FactoryConfig, name: Optional[str] = None) -> Path:
    return Path(config.output_dir) / f"{name or pass_.serial_number}{PASS_EXTENSION}"


def create_pass_bundle(pass_: Pass, config: FactoryConfig, name: Optional[str] = None) -> Path:
    """
    Create a .pkpass archive for a pass.

    Args:
        pass_: The pass to bundle (never modified)
        config: Directories and signing identity for this build
        name: Archive base name, defaults to the pass serial number

    Returns:
        Path of the written .pkpass file

    Raises:
        ValidationError: if the image set breaks the pass type rules,
            or the name override is not a plain file name
        DirectoryError: if the scratch directory cannot be created
        CertificateError: if the signing certificates cannot be loaded
        SigningError: if the manifest cannot be signed
        ArchiveError: if the archive cannot be written
        OSError: if a source image cannot be read
    """
    serial = pass_.serial_number
    step = "validate"
    try:
        if name is not None and not is_path_segment(name):
            raise ValidationError(errors=[f"Archive name `{name}` must be a plain file name."])
        validate_pass(pass_)

        step = "assemble"
        with scratch_directory(config.temp_dir, serial) as directory:
            assemble_bundle(pass_, directory)

            step = "manifest"
            manifest_path = write_manifest(directory)

            step = "sign"
            signature_path = sign_manifest(manifest_path, config)

            step = "archive"
            destination = zip_directory(directory, archive_path(pass_, config, name))
    except (PassBundleError, OSError) as e:
        log_bundle_event(logger, step, serial, ok=False, extra={"error": type(e).__name__, "detail": str(e)})
        raise

    log_bundle_event(
        logger,
        "created",
        serial,
        ok=True,
        extra={"path": str(destination), "signed": signature_path is not None},
    )
    return destination
