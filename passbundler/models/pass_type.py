"""
Pass variants and the image roles each one accepts.
"""
from enum import Enum
from typing import FrozenSet


class ImageType(str, Enum):
    ICON = "icon"
    LOGO = "logo"
    STRIP = "strip"
    BACKGROUND = "background"
    THUMBNAIL = "thumbnail"
    FOOTER = "footer"


class PassType(str, Enum):
    """Pass style. The value is the pass.json key holding the field structure."""

    BOARDING_PASS = "boardingPass"
    COUPON = "coupon"
    EVENT_TICKET = "eventTicket"
    GENERIC = "generic"
    STORE_CARD = "storeCard"

    @property
    def allowed_images(self) -> FrozenSet[str]:
        return _ALLOWED_IMAGES[self]


_ALLOWED_IMAGES = {
    PassType.BOARDING_PASS: frozenset({ImageType.LOGO.value, ImageType.ICON.value, ImageType.FOOTER.value}),
    PassType.COUPON: frozenset({ImageType.LOGO.value, ImageType.ICON.value, ImageType.STRIP.value}),
    PassType.EVENT_TICKET: frozenset({
        ImageType.LOGO.value,
        ImageType.ICON.value,
        ImageType.STRIP.value,
        ImageType.BACKGROUND.value,
        ImageType.THUMBNAIL.value,
    }),
    PassType.GENERIC: frozenset({ImageType.LOGO.value, ImageType.ICON.value, ImageType.THUMBNAIL.value}),
    PassType.STORE_CARD: frozenset({ImageType.LOGO.value, ImageType.ICON.value, ImageType.STRIP.value}),
}
