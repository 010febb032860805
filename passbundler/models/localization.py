from typing import Dict, List

from pydantic import BaseModel, ConfigDict, field_validator

from passbundler.utils.files import is_path_segment

from .image import Image


class Localization(BaseModel):
    """Per-language overrides, written to `<language>.lproj/`."""

    model_config = ConfigDict(frozen=True)

    language: str
    strings: Dict[str, str] = {}
    images: List[Image] = []

    @field_validator("language")
    @classmethod
    def _language_is_path_segment(cls, value: str) -> str:
        if not is_path_segment(value):
            raise ValueError(f"language code {value!r} cannot be used as a directory name")
        return value
