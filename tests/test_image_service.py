"""Image encoder tests."""

import base64

import pytest

from sentic.common.exceptions.base_exception import ValidationError
from sentic.domain.reports.services.image_service import build_data_url, encode_image


def test_encode_image_returns_base64_text():
    assert encode_image(b"\x89PNG\r\n", "image/png") == base64.b64encode(b"\x89PNG\r\n").decode()


@pytest.mark.parametrize("missing", [None, b""])
def test_encode_image_requires_a_file(missing):
    with pytest.raises(ValidationError) as exc:
        encode_image(missing, "image/jpeg")
    assert exc.value.status_code == 400
    assert exc.value.message == "Image file is required"


def test_build_data_url_embeds_mime_type():
    assert build_data_url("QUJD", "image/png") == "data:image/png;base64,QUJD"


def test_build_data_url_defaults_to_jpeg():
    assert build_data_url("QUJD") == "data:image/jpeg;base64,QUJD"
