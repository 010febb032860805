"""
Manifest signing

Produces the `signature` file of a .pkpass bundle: a detached PKCS#7/CMS
signature over manifest.json, made with the Pass Type ID certificate from a
PKCS#12 container and carrying the Apple WWDR intermediate certificate.

The signature builder only hands back an S/MIME envelope for detached
signatures written this way, so the envelope is unwrapped to the raw DER
blob Wallet expects (see smime_to_der).
"""
import base64
import binascii
import logging
from pathlib import Path
from typing import Any, Optional, Tuple

from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.serialization import pkcs7, pkcs12

from passbundler.config import FactoryConfig
from passbundler.errors import CertificateError, SigningError

logger = logging.getLogger(__name__)

SIGNATURE_FILENAME = "signature"

SMIME_BODY_MARKER = b'filename="smime.p7s"'
# MIME boundary delimiter lines always start with two dashes
SMIME_BOUNDARY_MARKER = b"--"


def load_signing_identity(certificate_path: Optional[Path], password: str) -> Tuple[Any, x509.Certificate]:
    """
    Load the private key and leaf certificate from a PKCS#12 container.

    Raises:
        CertificateError: if the file cannot be read, the password is wrong,
            or the container lacks a key or certificate
    """
    if certificate_path is None:
        raise CertificateError("No signing certificate configured")

    try:
        p12_data = Path(certificate_path).read_bytes()
    except OSError as e:
        raise CertificateError(f'The certificate at "{certificate_path}" could not be read') from e

    password_bytes = password.encode() if password else None
    try:
        private_key, cert, _additional_certs = pkcs12.load_key_and_certificates(p12_data, password_bytes)
    except (ValueError, TypeError) as e:
        raise CertificateError(f'Invalid certificate file: "{certificate_path}"') from e

    if private_key is None or cert is None:
        raise CertificateError(f'Certificate file "{certificate_path}" does not contain a key and certificate')

    logger.debug("Loaded P12 certificate for pass signing")
    return private_key, cert


def load_trust_chain(wwdr_path: Optional[Path]) -> x509.Certificate:
    """
    Load the WWDR intermediate certificate (PEM or DER).

    Raises:
        CertificateError: if the file is missing or not a certificate
    """
    if wwdr_path is None:
        raise CertificateError("No WWDR certificate configured")

    try:
        cert_data = Path(wwdr_path).read_bytes()
    except OSError as e:
        raise CertificateError(f'The WWDR certificate at "{wwdr_path}" could not be read') from e

    try:
        return x509.load_pem_x509_certificate(cert_data)
    except ValueError:
        pass
    try:
        return x509.load_der_x509_certificate(cert_data)
    except ValueError as e:
        raise CertificateError(f'The WWDR certificate at "{wwdr_path}" is not a valid certificate') from e


def smime_to_der(smime: bytes) -> bytes:
    """
    Extract the DER signature from an S/MIME multipart/signed envelope.

    The base64 body follows the `filename="smime.p7s"` header and runs up to
    the next boundary line.

    Raises:
        SigningError: if either marker is missing or the body is not base64
    """
    start = smime.find(SMIME_BODY_MARKER)
    if start == -1:
        raise SigningError("Signature envelope has no smime.p7s part")
    body = smime[start + len(SMIME_BODY_MARKER):]

    end = body.find(SMIME_BOUNDARY_MARKER)
    if end == -1:
        raise SigningError("Signature envelope has no closing MIME boundary")

    encoded = b"".join(body[:end].split())
    if not encoded:
        raise SigningError("Signature envelope has an empty smime.p7s part")
    try:
        return base64.b64decode(encoded, validate=True)
    except binascii.Error as e:
        raise SigningError(f"Signature body is not valid base64: {e}") from e


def sign_manifest(manifest_path: Path, config: FactoryConfig) -> Optional[Path]:
    """
    Write the detached signature next to manifest.json.

    Returns the signature path, or None when config.skip_signature is set.
    """
    if config.skip_signature:
        logger.debug("Pass signing skipped (skip_signature=true)")
        return None

    private_key, cert = load_signing_identity(config.certificate_path, config.certificate_password)
    wwdr_cert = load_trust_chain(config.wwdr_path)

    manifest_path = Path(manifest_path)
    signature_path = manifest_path.parent / SIGNATURE_FILENAME

    try:
        smime = (
            pkcs7.PKCS7SignatureBuilder()
            .set_data(manifest_path.read_bytes())
            .add_signer(cert, private_key, hashes.SHA256())
            .add_certificate(wwdr_cert)
            .sign(
                serialization.Encoding.SMIME,
                [pkcs7.PKCS7Options.DetachedSignature, pkcs7.PKCS7Options.Binary],
            )
        )
    except Exception as e:
        logger.error(f"Failed to sign manifest {manifest_path}: {e}", exc_info=True)
        raise SigningError(f"Failed to sign manifest: {e}") from e

    signature_path.write_bytes(smime)
    signature_path.write_bytes(smime_to_der(signature_path.read_bytes()))

    logger.info("Pass manifest signed with detached PKCS#7 signature")
    return signature_path
