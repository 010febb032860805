"""
Pydantic models for pass.json content.

Only the commonly used top-level keys are declared; any other pass.json key
can be passed as an extra keyword and is serialized as given.
"""
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from passbundler.utils.files import is_path_segment

from .image import Image
from .localization import Localization
from .pass_type import PassType


class _PassComponent(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Location(_PassComponent):
    latitude: float
    longitude: float
    altitude: Optional[float] = None
    relevant_text: Optional[str] = None


class Barcode(_PassComponent):
    format: str = "PKBarcodeFormatQR"
    message: str
    message_encoding: str = "iso-8859-1"
    alt_text: Optional[str] = None


class PassField(_PassComponent):
    key: str
    value: Union[str, int, float]
    label: Optional[str] = None
    attributed_value: Optional[str] = None
    change_message: Optional[str] = None
    text_alignment: Optional[str] = None


class PassStructure(_PassComponent):
    header_fields: List[PassField] = []
    primary_fields: List[PassField] = []
    secondary_fields: List[PassField] = []
    auxiliary_fields: List[PassField] = []
    back_fields: List[PassField] = []
    # Boarding passes only, e.g. PKTransitTypeAir
    transit_type: Optional[str] = None


class Pass(_PassComponent):
    """
    A wallet pass: content for pass.json plus the files bundled with it.

    `pass_type`, `structure`, `images` and `localizations` are not written
    as-is; structure is nested under the pass type key and the rest become
    separate bundle files.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    pass_type: PassType = Field(exclude=True)
    structure: PassStructure = Field(default_factory=PassStructure, exclude=True)
    images: List[Image] = Field(default_factory=list, exclude=True)
    localizations: List[Localization] = Field(default_factory=list, exclude=True)

    format_version: int = 1
    serial_number: str
    pass_type_identifier: str
    team_identifier: str
    organization_name: str
    description: str

    logo_text: Optional[str] = None
    foreground_color: Optional[str] = None
    background_color: Optional[str] = None
    label_color: Optional[str] = None

    barcodes: List[Barcode] = []
    locations: List[Location] = []
    relevant_date: Optional[str] = None

    web_service_url: Optional[str] = Field(default=None, alias="webServiceURL")
    authentication_token: Optional[str] = None
    app_launch_url: Optional[str] = Field(default=None, alias="appLaunchURL")

    @field_validator("serial_number")
    @classmethod
    def _serial_is_path_segment(cls, value: str) -> str:
        # Used as scratch directory and default archive name
        if not is_path_segment(value):
            raise ValueError(f"serial number {value!r} cannot be used as a file name")
        return value

    def to_pass_json(self) -> Dict[str, Any]:
        data = self.model_dump(mode="json", by_alias=True, exclude_none=True)
        data[self.pass_type.value] = self.structure.model_dump(mode="json", by_alias=True, exclude_none=True)
        return data
