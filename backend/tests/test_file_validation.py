import pytest

from receipt_extractor.core.errors import UnsupportedMediaTypeError
from receipt_extractor.utils.file_validation import (
    ensure_supported_media_type,
    is_supported_media_type,
    mime_type_for_filename,
)


@pytest.mark.parametrize("content_type", ["image/jpeg", "image/jpg", "image/png", "image/webp"])
def test_allowed_image_types_are_accepted(content_type):
    assert is_supported_media_type(content_type) is True
    ensure_supported_media_type(content_type)


@pytest.mark.parametrize("content_type", ["image/gif", "application/pdf", "text/plain", "IMAGE/PNG", "", None])
def test_other_types_are_rejected_with_fixed_message(content_type):
    assert is_supported_media_type(content_type) is False
    with pytest.raises(UnsupportedMediaTypeError) as exc_info:
        ensure_supported_media_type(content_type)
    assert exc_info.value.status_code == 400
    assert exc_info.value.message == "Only .jpg, .jpeg, .png, and .webp files are allowed"


def test_mime_type_for_filename():
    assert mime_type_for_filename("receipt.JPG") == "image/jpeg"
    assert mime_type_for_filename("receipt.jpeg") == "image/jpeg"
    assert mime_type_for_filename("scan.png") == "image/png"
    assert mime_type_for_filename("scan.webp") == "image/webp"
    assert mime_type_for_filename("notes.txt") is None
    assert mime_type_for_filename("no_extension") is None
