"""
Unit tests for pass image validation
"""
import pytest

from passbundler.errors import ValidationError
from passbundler.models import Image, PassType
from passbundler.services.image_validator import normalize_name, validate_images, validate_pass

ICON_ERROR = "The pass must have an icon image."
STRIP_ERROR = "When specifying a strip image, no background image or thumbnail may be specified."


def test_normalize_name_strips_scale_suffixes():
    assert normalize_name("icon@2x") == "icon"
    assert normalize_name("icon@3x") == "icon"
    assert normalize_name("logo") == "logo"


@pytest.mark.parametrize("pass_type", list(PassType))
def test_missing_icon_fails_for_every_pass_type(make_pass, image_file, pass_type):
    pass_ = make_pass(pass_type=pass_type, images=[Image(path=image_file("logo.png"))])

    with pytest.raises(ValidationError) as exc_info:
        validate_pass(pass_)

    assert ICON_ERROR in exc_info.value.errors


def test_pass_without_images_reports_missing_icon(make_pass):
    pass_ = make_pass(images=[])
    assert validate_images(pass_) == [ICON_ERROR]


def test_scaled_icon_counts_as_icon(make_pass, image_file):
    pass_ = make_pass(images=[Image(path=image_file("icon@2x.png"))])
    assert validate_images(pass_) == []


def test_named_icon_with_scale_counts_as_icon(make_pass, image_file):
    pass_ = make_pass(images=[
        Image(path=image_file("a.png"), name="icon"),
        Image(path=image_file("b.png"), name="icon", scale=3),
    ])
    assert validate_images(pass_) == []


def test_event_ticket_strip_and_background_is_exclusive(make_pass, image_file):
    pass_ = make_pass(
        pass_type=PassType.EVENT_TICKET,
        images=[
            Image(path=image_file("icon.png")),
            Image(path=image_file("strip.png")),
            Image(path=image_file("background@2x.png")),
        ],
    )
    assert validate_images(pass_) == [STRIP_ERROR]


def test_event_ticket_strip_and_thumbnail_reports_single_error(make_pass, image_file):
    pass_ = make_pass(
        pass_type=PassType.EVENT_TICKET,
        images=[
            Image(path=image_file("icon.png")),
            Image(path=image_file("strip.png")),
            Image(path=image_file("thumbnail.png")),
            Image(path=image_file("background.png")),
        ],
    )
    assert validate_images(pass_) == [STRIP_ERROR]


def test_event_ticket_background_without_strip_is_valid(make_pass, image_file):
    pass_ = make_pass(
        pass_type=PassType.EVENT_TICKET,
        images=[Image(path=image_file("icon.png")), Image(path=image_file("background.png"))],
    )
    assert validate_images(pass_) == []


@pytest.mark.parametrize("extension", ["png", "PNG", "Png"])
def test_png_extension_any_case_passes(make_pass, image_file, extension):
    pass_ = make_pass(images=[Image(path=image_file(f"icon.{extension}"))])
    assert validate_images(pass_) == []


@pytest.mark.parametrize("extension", ["jpg", "JPG", "jpeg", "gif"])
def test_non_png_extension_fails_naming_file(make_pass, image_file, extension):
    pass_ = make_pass(images=[Image(path=image_file(f"icon.{extension}"))])

    errors = validate_images(pass_)

    assert errors == [f"icon.{extension}: expected .png extension, found .{extension}"]


def test_disallowed_role_for_pass_type(make_pass, image_file):
    pass_ = make_pass(
        pass_type=PassType.BOARDING_PASS,
        images=[Image(path=image_file("icon.png")), Image(path=image_file("strip@2x.png"))],
    )
    assert validate_images(pass_) == ["Invalid image type `strip@2x` for pass type `boardingPass`."]


def test_all_violations_collected_in_order(make_pass, image_file):
    pass_ = make_pass(
        pass_type=PassType.COUPON,
        images=[Image(path=image_file("footer.jpg")), Image(path=image_file("banner.png"))],
    )

    with pytest.raises(ValidationError) as exc_info:
        validate_pass(pass_)

    assert exc_info.value.errors == [
        "footer.jpg: expected .png extension, found .jpg",
        "Invalid image type `footer` for pass type `coupon`.",
        "Invalid image type `banner` for pass type `coupon`.",
        ICON_ERROR,
    ]
    assert "footer.jpg" in str(exc_info.value)


def test_allowed_images_per_pass_type():
    assert PassType.BOARDING_PASS.allowed_images == {"logo", "icon", "footer"}
    assert PassType.EVENT_TICKET.allowed_images == {"logo", "icon", "strip", "background", "thumbnail"}
    assert PassType.GENERIC.allowed_images == {"logo", "icon", "thumbnail"}
    assert PassType.STORE_CARD.allowed_images == PassType.COUPON.allowed_images
