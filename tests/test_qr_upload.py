import base64

import pytest
from PIL import Image

from qr_upload import QRImageTooLargeError, QRUploadError, decode_qr_image, load_qr_image


def test_valid_image_becomes_data_uri(qr_png):
    data_uri = load_qr_image(qr_png)

    assert data_uri.startswith("data:image/png;base64,")
    assert decode_qr_image(data_uri).size == (64, 64)


def test_oversized_image_rejected_before_reading(qr_png, mocker):
    read = mocker.patch("pathlib.Path.read_bytes")

    with pytest.raises(QRImageTooLargeError, match="too large"):
        load_qr_image(qr_png, max_bytes=10)

    read.assert_not_called()


def test_default_ceiling_is_five_megabytes(tmp_path):
    big = tmp_path / "big.png"
    big.write_bytes(b"\0" * (5 * 1024 * 1024 + 1))

    with pytest.raises(QRImageTooLargeError):
        load_qr_image(big)


def test_missing_file(tmp_path):
    with pytest.raises(QRUploadError, match="Invalid or unsupported"):
        load_qr_image(tmp_path / "nope.png")


def test_unsupported_extension(tmp_path):
    doc = tmp_path / "qr.pdf"
    doc.write_bytes(b"%PDF-1.4")

    with pytest.raises(QRUploadError, match="Invalid or unsupported"):
        load_qr_image(doc)


def test_garbage_content_rejected(tmp_path):
    fake = tmp_path / "fake.png"
    fake.write_bytes(b"definitely not a png")

    with pytest.raises(QRUploadError, match="Not a readable image"):
        load_qr_image(fake)


def test_decode_rejects_non_image_uri():
    with pytest.raises(QRUploadError):
        decode_qr_image("data:text/plain;base64,aGVsbG8=")
    with pytest.raises(QRUploadError):
        decode_qr_image("data:image/png;base64,aGVsbG8=")


@pytest.fixture(scope="module")
def pixel_bomb(tmp_path_factory):
    """A small file that decodes to far more pixels than Pillow allows"""
    path = tmp_path_factory.mktemp("bomb") / "huge.png"
    Image.new("1", (20000, 20000)).save(path, format="PNG")
    return path


def test_oversized_pixel_count_rejected(pixel_bomb):
    assert pixel_bomb.stat().st_size < 5 * 1024 * 1024

    with pytest.raises(QRUploadError, match="Not a readable image"):
        load_qr_image(pixel_bomb)


def test_stored_pixel_bomb_is_unreadable(pixel_bomb):
    data_uri = "data:image/png;base64," + base64.b64encode(pixel_bomb.read_bytes()).decode("ascii")

    with pytest.raises(QRUploadError, match="unreadable"):
        decode_qr_image(data_uri)
