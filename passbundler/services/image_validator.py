"""
Pass image validation

Checks the image set of a pass against the rules for its pass type before
anything is written to disk. Every rule is checked and all violations are
reported together.
"""
import logging
from typing import List

from passbundler.errors import ValidationError
from passbundler.models import ImageType, Pass, PassType

logger = logging.getLogger(__name__)

SCALE_SUFFIXES = ("@2x", "@3x")


def normalize_name(name: str) -> str:
    """Strip scale suffixes so `icon@2x` and `icon@3x` both compare as `icon`."""
    for suffix in SCALE_SUFFIXES:
        name = name.replace(suffix, "")
    return name


def is_valid_image(name: str, pass_type: PassType) -> bool:
    allowed = pass_type.allowed_images
    return name in allowed or normalize_name(name) in allowed


def validate_images(pass_: Pass) -> List[str]:
    """Return every image rule violation for the pass, in discovery order."""
    errors: List[str] = []
    has_icon = False

    for image in pass_.images:
        name = image.resolved_name
        if normalize_name(name) == ImageType.ICON.value:
            has_icon = True
        if image.extension.lower() != "png":
            errors.append(f"{image.filename}: expected .png extension, found .{image.extension}")
        if not is_valid_image(name, pass_.pass_type):
            errors.append(f"Invalid image type `{name}` for pass type `{pass_.pass_type.value}`.")

    if pass_.pass_type is PassType.EVENT_TICKET:
        errors.extend(_validate_event_ticket(pass_))

    if not has_icon:
        errors.append("The pass must have an icon image.")

    return errors


def _validate_event_ticket(pass_: Pass) -> List[str]:
    """
    For event tickets, a background or thumbnail image may only be specified
    when no strip image has been added.
    """
    roles = {normalize_name(image.resolved_name) for image in pass_.images}
    has_strip = ImageType.STRIP.value in roles
    has_thumbnail_or_background = bool(
        roles & {ImageType.THUMBNAIL.value, ImageType.BACKGROUND.value}
    )
    if has_strip and has_thumbnail_or_background:
        return ["When specifying a strip image, no background image or thumbnail may be specified."]
    return []


def validate_pass(pass_: Pass) -> None:
    """
    Validate the pass image set.

    Raises:
        ValidationError: with the complete list of violations
    """
    errors = validate_images(pass_)
    if errors:
        logger.warning(f"Pass {pass_.serial_number} failed validation with {len(errors)} error(s)")
        raise ValidationError("Invalid pass", errors)
