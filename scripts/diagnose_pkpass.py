#!/usr/bin/env python3
"""
Diagnose .pkpass bundle problems

Checks a produced .pkpass the way Wallet does and prints what is wrong:
missing files, manifest entries that do not match the archived bytes, and
whether the signature parses as DER PKCS#7 with the WWDR certificate inside.

Exits non-zero on any failure.
"""
import sys
from pathlib import Path

# Add parent directory to path to import passbundler
sys.path.insert(0, str(Path(__file__).parent.parent))

from passbundler.config import get_settings
from passbundler.services.bundle_verifier import verify_bundle
from passbundler.utils.log import configure_logging


def print_report(report) -> None:
    print(f"📦 pkpass file: {report.path}")
    print(f"📋 Files in pkpass ({len(report.files)}):")
    for name in report.files:
        print(f"   {name}")
    print()

    if report.missing_files:
        print(f"❌ Missing required files: {', '.join(report.missing_files)}")
    else:
        print("✅ All required files present")

    if report.not_in_manifest or report.not_in_archive:
        print("❌ Manifest mismatch!")
        print(f"   In ZIP but not in manifest: {report.not_in_manifest}")
        print(f"   In manifest but not in ZIP: {report.not_in_archive}")
    for name, actual in report.digest_mismatches.items():
        print(f"❌ Digest mismatch for {name} (archived sha1 {actual})")

    if report.signed:
        print(f"🔐 Signature certificates found: {len(report.signature_certificates)}")
        for subject in report.signature_certificates:
            print(f"      {subject}")
        if len(report.signature_certificates) < 2:
            print("⚠️  WWDR certificate not clearly included")
    else:
        print("ℹ️  Bundle is unsigned")

    for error in report.errors:
        print(f"❌ {error}")

    print()
    print("✅ Bundle OK" if report.ok else "❌ Bundle FAILED")


def main(argv=None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    if not argv:
        print("Usage: python diagnose_pkpass.py <path-to.pkpass> [--allow-unsigned]")
        return 1

    pkpass_path = Path(argv[0])
    if not pkpass_path.exists():
        print(f"❌ File not found: {pkpass_path}")
        return 1

    configure_logging(get_settings().log_level)
    report = verify_bundle(pkpass_path, require_signature="--allow-unsigned" not in argv[1:])
    print_report(report)
    return 0 if report.ok else 1


if __name__ == "__main__":
    sys.exit(main())
