"""
Pass bundler configuration

Settings are read from PASS_* environment variables (or a local .env file)
and turned into an immutable FactoryConfig that is handed to every
create_pass_bundle() call.
"""
import tempfile
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic_settings import BaseSettings, SettingsConfigDict

PASS_EXTENSION = ".pkpass"


class FactoryConfig(BaseModel):
    """Read-only inputs for one bundle build. Safe to share across threads."""

    model_config = ConfigDict(frozen=True)

    temp_dir: Path = Path(tempfile.gettempdir())
    output_dir: Path = Path(".")

    # Signing identity: PKCS#12 container + password, and the WWDR intermediate
    certificate_path: Optional[Path] = None
    certificate_password: str = ""
    wwdr_path: Optional[Path] = None

    # Development builds may skip the signature file entirely
    skip_signature: bool = False

    def with_overrides(self, **changes) -> "FactoryConfig":
        return self.model_copy(update=changes)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="PASS_", env_file=".env", extra="ignore")

    temp_dir: Path = Path(tempfile.gettempdir())
    output_dir: Path = Path(".")

    certificate_path: Optional[Path] = None
    certificate_password: str = ""
    wwdr_path: Optional[Path] = None

    skip_signature: bool = False

    # Logging
    log_level: str = "INFO"

    def factory_config(self) -> FactoryConfig:
        return FactoryConfig(
            temp_dir=self.temp_dir,
            output_dir=self.output_dir,
            certificate_path=self.certificate_path,
            certificate_password=self.certificate_password,
            wwdr_path=self.wwdr_path,
            skip_signature=self.skip_signature,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Load settings once per process.

    Tests that change PASS_* variables should call get_settings.cache_clear().
    """
    return Settings()
