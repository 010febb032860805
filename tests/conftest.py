"""
Pytest configuration and fixtures for passbundler tests.

Provides image files, pass factories and a throwaway signing identity
(self-signed Pass Type ID certificate in a PKCS#12 container plus a separate
WWDR-style certificate).
"""
import sys
import pathlib
import datetime

import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.hazmat.primitives.serialization import pkcs12
from cryptography.x509.oid import NameOID

ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from passbundler.config import FactoryConfig
from passbundler.models import Image, Pass, PassType

P12_PASSWORD = "test-password"

# Content does not matter to the pipeline, only the bytes do
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 24


def _self_signed(common_name: str):
    key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, common_name)])
    now = datetime.datetime.now(datetime.timezone.utc)
    cert = (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(now - datetime.timedelta(days=1))
        .not_valid_after(now + datetime.timedelta(days=30))
        .sign(key, hashes.SHA256())
    )
    return key, cert


@pytest.fixture(scope="session")
def signing_material(tmp_path_factory):
    """Write pass.p12 and wwdr.pem once per test session."""
    directory = tmp_path_factory.mktemp("certs")

    key, cert = _self_signed("Pass Type ID: pass.com.example.test")
    p12_path = directory / "pass.p12"
    p12_path.write_bytes(
        pkcs12.serialize_key_and_certificates(
            b"pass",
            key,
            cert,
            None,
            serialization.BestAvailableEncryption(P12_PASSWORD.encode()),
        )
    )

    _wwdr_key, wwdr_cert = _self_signed("Test Worldwide Developer Relations")
    wwdr_path = directory / "wwdr.pem"
    wwdr_path.write_bytes(wwdr_cert.public_bytes(serialization.Encoding.PEM))

    return {
        "p12_path": p12_path,
        "password": P12_PASSWORD,
        "wwdr_path": wwdr_path,
        "wwdr_cert": wwdr_cert,
        "cert": cert,
    }


@pytest.fixture
def image_file(tmp_path):
    """Create an image file under tmp_path/src and return its path."""
    src = tmp_path / "src"
    src.mkdir(exist_ok=True)

    def _make(filename: str, content: bytes = PNG_BYTES) -> pathlib.Path:
        path = src / filename
        path.write_bytes(content)
        return path

    return _make


@pytest.fixture
def make_pass(image_file):
    def _make(pass_type=PassType.GENERIC, serial_number="ABC123", images=None, **kwargs) -> Pass:
        if images is None:
            images = [Image(path=image_file("icon.png"))]
        return Pass(
            pass_type=pass_type,
            serial_number=serial_number,
            pass_type_identifier="pass.com.example.test",
            team_identifier="TEAM123456",
            organization_name="Example",
            description="Example pass",
            images=images,
            **kwargs,
        )

    return _make


@pytest.fixture
def unsigned_config(tmp_path) -> FactoryConfig:
    scratch = tmp_path / "scratch"
    out = tmp_path / "out"
    scratch.mkdir()
    out.mkdir()
    return FactoryConfig(temp_dir=scratch, output_dir=out, skip_signature=True)


@pytest.fixture
def signed_config(unsigned_config, signing_material) -> FactoryConfig:
    return unsigned_config.with_overrides(
        skip_signature=False,
        certificate_path=signing_material["p12_path"],
        certificate_password=P12_PASSWORD,
        wwdr_path=signing_material["wwdr_path"],
    )
