"""
Assemble and sign Apple Wallet .pkpass bundles.
"""
from passbundler.config import FactoryConfig, Settings, get_settings
from passbundler.errors import (
    ArchiveError,
    CertificateError,
    DirectoryError,
    PassBundleError,
    SigningError,
    ValidationError,
)
from passbundler.models import Barcode, Image, Localization, Location, Pass, PassField, PassStructure, PassType
from passbundler.services.bundle_verifier import BundleReport, verify_bundle
from passbundler.services.pass_factory import create_pass_bundle

__all__ = [
    "ArchiveError",
    "Barcode",
    "BundleReport",
    "CertificateError",
    "DirectoryError",
    "FactoryConfig",
    "Image",
    "Localization",
    "Location",
    "Pass",
    "PassBundleError",
    "PassField",
    "PassStructure",
    "PassType",
    "Settings",
    "SigningError",
    "ValidationError",
    "create_pass_bundle",
    "get_settings",
    "verify_bundle",
]
