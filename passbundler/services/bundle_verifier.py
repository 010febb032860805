"""
Pass bundle verification

Re-opens a produced .pkpass and checks it the way Wallet will: required
files present, every manifest digest matching the archived bytes, no
unlisted files, and a signature that parses as DER PKCS#7.
"""
import hashlib
import json
import logging
import zipfile
from pathlib import Path
from typing import Dict, List, Optional

from cryptography.hazmat.primitives.serialization import pkcs7
from pydantic import BaseModel

from passbundler.services.bundle_assembler import PASS_FILENAME
from passbundler.services.manifest import MANIFEST_FILENAME
from passbundler.services.signer import SIGNATURE_FILENAME

logger = logging.getLogger(__name__)

# Not listed in the manifest: the manifest itself and the signature over it
UNHASHED_FILES = {MANIFEST_FILENAME, SIGNATURE_FILENAME}


class BundleReport(BaseModel):
    path: str
    files: List[str] = []
    missing_files: List[str] = []
    not_in_manifest: List[str] = []
    not_in_archive: List[str] = []
    digest_mismatches: Dict[str, str] = {}
    signed: bool = False
    signature_certificates: List[str] = []
    errors: List[str] = []

    @property
    def ok(self) -> bool:
        return not (
            self.missing_files
            or self.not_in_manifest
            or self.not_in_archive
            or self.digest_mismatches
            or self.errors
        )


def verify_bundle(path: Path, require_signature: bool = True) -> BundleReport:
    """
    Check a .pkpass archive against its own manifest.

    Never raises for a malformed bundle; problems are collected in the report.
    """
    report = BundleReport(path=str(path))
    try:
        zf = zipfile.ZipFile(path, "r")
    except (OSError, zipfile.BadZipFile) as e:
        report.errors.append(f"Failed to read ZIP: {e}")
        return report

    with zf:
        # Directory entries end with "/" and carry no content
        files = sorted(n for n in zf.namelist() if not n.endswith("/"))
        report.files = files

        required = [PASS_FILENAME, MANIFEST_FILENAME]
        if require_signature:
            required.append(SIGNATURE_FILENAME)
        report.missing_files = [f for f in required if f not in files]

        manifest = _read_manifest(zf, files, report)
        if manifest is not None:
            hashed = [f for f in files if f not in UNHASHED_FILES]
            report.not_in_manifest = [f for f in hashed if f not in manifest]
            report.not_in_archive = sorted(f for f in manifest if f not in files)
            for name in hashed:
                expected = manifest.get(name)
                if expected is None:
                    continue
                actual = hashlib.sha1(zf.read(name)).hexdigest()
                if actual != expected:
                    report.digest_mismatches[name] = actual

        if SIGNATURE_FILENAME in files:
            report.signed = True
            report.signature_certificates = _signature_subjects(zf.read(SIGNATURE_FILENAME), report)

    if report.ok:
        logger.info(f"Bundle {path} verified ({len(report.files)} files, signed={report.signed})")
    else:
        logger.warning(f"Bundle {path} failed verification")
    return report


def _read_manifest(zf: zipfile.ZipFile, files: List[str], report: BundleReport) -> Optional[Dict[str, str]]:
    if MANIFEST_FILENAME not in files:
        return None
    try:
        manifest = json.loads(zf.read(MANIFEST_FILENAME).decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        report.errors.append(f"manifest.json is not valid JSON: {e}")
        return None
    if not isinstance(manifest, dict):
        report.errors.append("manifest.json is not a JSON object")
        return None
    return manifest


def _signature_subjects(signature: bytes, report: BundleReport) -> List[str]:
    try:
        certs = pkcs7.load_der_pkcs7_certificates(signature)
    except ValueError as e:
        report.errors.append(f"signature is not DER-encoded PKCS#7: {e}")
        return []
    return [cert.subject.rfc4514_string() for cert in certs]
