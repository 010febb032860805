from .image import Image
from .localization import Localization
from .pass_model import Barcode, Location, Pass, PassField, PassStructure
from .pass_type import ImageType, PassType

__all__ = [
    "Barcode",
    "Image",
    "ImageType",
    "Localization",
    "Location",
    "Pass",
    "PassField",
    "PassStructure",
    "PassType",
]
