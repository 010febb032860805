"""
Pass bundle errors

Every failure surfaced by create_pass_bundle() is one of these, so callers
can tell which pipeline stage failed.
"""
from typing import List, Optional


class PassBundleError(Exception):
    """Base class for all pass bundle failures"""


class ValidationError(PassBundleError):
    """Raised when the pass image set breaks one or more format rules.

    All violations are collected before raising; `errors` holds them in the
    order they were found.
    """

    def __init__(self, message: str = "Invalid pass", errors: Optional[List[str]] = None):
        self.errors = list(errors or [])
        super().__init__(message)

    def __str__(self) -> str:
        if not self.errors:
            return self.args[0]
        return f"{self.args[0]}: " + "; ".join(self.errors)


class DirectoryError(PassBundleError):
    """Raised when a scratch or localization directory cannot be created"""


class CertificateError(PassBundleError):
    """Raised when the signing certificate or the WWDR certificate is unusable"""


class SigningError(PassBundleError):
    """Raised when the manifest signature cannot be produced or re-encoded"""


class ArchiveError(PassBundleError):
    """Raised when the .pkpass archive cannot be written"""
