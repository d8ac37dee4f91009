from spa_booking.utils.image_storage import (
    INVALID_TYPE_MESSAGE,
    MAX_IMAGE_SIZE_BYTES,
    validate_image_file,
)

from .conftest import API

PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


def test_accepts_supported_images():
    assert validate_image_file("face.jpg", 1024, "image/jpeg") == (True, None)
    assert validate_image_file("face.JPEG", 1024, "image/jpeg") == (True, None)
    assert validate_image_file("face.png", 1024, "image/png") == (True, None)


def test_extension_and_mime_must_both_match():
    assert validate_image_file("face.gif", 1024, "image/gif") == (False, INVALID_TYPE_MESSAGE)
    assert validate_image_file("face.png", 1024, "application/pdf") == (False, INVALID_TYPE_MESSAGE)
    assert validate_image_file("face", 1024, "image/png") == (False, INVALID_TYPE_MESSAGE)


def test_rejects_path_tricks_and_large_files():
    ok, error = validate_image_file("../../etc/passwd.png", 10, "image/png")
    assert ok is False
    assert "dangerous character" in error

    ok, error = validate_image_file("big.png", MAX_IMAGE_SIZE_BYTES + 1, "image/png")
    assert ok is False
    assert "maximum" in error


def test_uploaded_image_is_served(client, customer, login_as, booking):
    login_as(customer)
    appointment_id = client.post(f"{API}/appointment", json=booking).json()["id"]

    url = client.put(
        f"{API}/appointment/{appointment_id}",
        files={"checkOutImage": ("leaving.png", PNG, "image/png")},
    ).json()["checkOutImage"]

    served = client.get(url.replace("http://testserver", ""))
    assert served.status_code == 200
    assert served.content == PNG
