"""
Pydantic models for pass image assets.
"""
from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from passbundler.utils.files import is_path_segment


class Image(BaseModel):
    """
    One image file to be copied into the bundle.

    Without a `name`, the file keeps its own base name, so `icon@2x.png`
    lands as `icon@2x.png`. With a `name`, the scale decides the suffix:
    name="icon", scale=2 lands as `icon@2x.<ext>`.
    """

    model_config = ConfigDict(frozen=True)

    path: Path
    name: Optional[str] = None
    scale: Literal[1, 2, 3] = 1

    @field_validator("name")
    @classmethod
    def _name_is_path_segment(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not is_path_segment(value):
            raise ValueError(f"image name {value!r} cannot be used as a file name")
        return value

    @property
    def extension(self) -> str:
        return self.path.suffix[1:]

    @property
    def filename(self) -> str:
        return self.path.name

    @property
    def basename(self) -> str:
        if self.extension:
            return self.path.name[:-(len(self.extension) + 1)]
        return self.path.name

    @property
    def resolved_name(self) -> str:
        if self.name is not None:
            return f"{self.name}@{self.scale}x" if self.scale > 1 else self.name
        return self.basename
