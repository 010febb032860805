"""
Manifest generation

manifest.json maps each bundle file (path relative to the bundle root) to
the SHA-1 of its bytes. The signature covers this file, so it has to be
written after every other bundle file and before signing.
"""
import hashlib
import json
import logging
from pathlib import Path
from typing import Dict

logger = logging.getLogger(__name__)

MANIFEST_FILENAME = "manifest.json"


def compute_sha1(path: Path, chunk_size: int = 1024 * 1024) -> str:
    """Compute lowercase sha1 hex digest for a file."""
    h = hashlib.sha1()
    with Path(path).open("rb") as f:
        for chunk in iter(lambda: f.read(chunk_size), b""):
            h.update(chunk)
    return h.hexdigest()


def build_manifest(directory: Path) -> Dict[str, str]:
    """
    Hash every regular file under directory, recursively.

    Keys are forward-slash relative paths, sorted so the same tree always
    yields the same manifest. An existing manifest.json is never listed.
    """
    directory = Path(directory)
    manifest: Dict[str, str] = {}
    for path in sorted(directory.rglob("*")):
        if not path.is_file():
            continue
        relpath = path.relative_to(directory).as_posix()
        if relpath == MANIFEST_FILENAME:
            continue
        manifest[relpath] = compute_sha1(path)
    return dict(sorted(manifest.items()))


def write_manifest(directory: Path) -> Path:
    """Write manifest.json into directory and return its path."""
    manifest = build_manifest(directory)
    path = Path(directory) / MANIFEST_FILENAME
    path.write_text(json.dumps(manifest, indent=2), encoding="utf-8")
    logger.debug(f"Wrote manifest with {len(manifest)} entries to {path}")
    return path
