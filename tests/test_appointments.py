import os
from datetime import date, time

from spa_booking.enums import RoleEnum
from spa_booking.models import Appointment, Shift, Slot, Therapist

from .conftest import API, UPLOAD_DIR

MISSING_ID = "00000000-0000-0000-0000-000000000000"

PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


def test_book_appointment_defaults(client, customer, login_as, booking, service_row):
    login_as(customer)

    response = client.post(f"{API}/appointment", json=booking)

    assert response.status_code == 201
    body = response.json()
    assert body["status"] == "Scheduled"
    assert body["amount"] == service_row.price
    assert body["customer"]["id"] == customer.id
    assert body["service"]["id"] == service_row.id


def test_missing_service_id_is_bad_request(client, customer, login_as, booking, db):
    login_as(customer)
    payload = {k: v for k, v in booking.items() if k != "serviceId"}

    response = client.post(f"{API}/appointment", json=payload)

    assert response.status_code == 400
    assert db.query(Appointment).count() == 0


def test_unauthenticated_booking_is_rejected(client, booking):
    response = client.post(f"{API}/appointment", json=booking)

    assert response.status_code == 401


def test_customer_cannot_book_for_someone_else(client, make_account, login_as, booking):
    login_as(make_account())

    response = client.post(f"{API}/appointment", json=booking)

    assert response.status_code == 403


def test_booking_with_date_reserves_shift(client, customer, login_as, booking, db):
    login_as(customer)

    first = client.post(f"{API}/appointment", json={**booking, "date": "2030-03-10"})
    second = client.post(f"{API}/appointment", json={**booking, "date": "2030-03-10"})

    assert first.status_code == 201
    assert second.status_code == 409
    shift = db.query(Shift).one()
    assert shift.appointment_id == first.json()["id"]
    assert shift.is_available is False
    assert db.query(Appointment).count() == 1


def test_cancelling_releases_shift(client, customer, login_as, booking, db):
    login_as(customer)
    appointment_id = client.post(
        f"{API}/appointment", json={**booking, "date": "2030-03-10"}
    ).json()["id"]

    response = client.put(f"{API}/appointment/{appointment_id}", data={"status": "Cancelled"})

    assert response.status_code == 200
    assert response.json()["status"] == "Cancelled"
    shift = db.query(Shift).one()
    assert shift.appointment_id is None
    assert shift.is_available is True


def test_update_with_check_in_image(client, customer, login_as, booking):
    login_as(customer)
    appointment_id = client.post(f"{API}/appointment", json=booking).json()["id"]

    response = client.put(
        f"{API}/appointment/{appointment_id}",
        data={"status": "In Progress"},
        files={"checkInImage": ("arrival.png", PNG, "image/png")},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "In Progress"
    assert body["checkInImage"].startswith("http://testserver/images/")
    assert body["checkInImage"].endswith("-arrival.png")
    assert body["checkOutImage"] is None


def test_update_without_images_preserves_paths(client, customer, login_as, booking):
    login_as(customer)
    appointment_id = client.post(f"{API}/appointment", json=booking).json()["id"]
    with_image = client.put(
        f"{API}/appointment/{appointment_id}",
        data={"notes": "first visit"},
        files={"checkInImage": ("arrival.jpg", b"\xff\xd8\xff" + b"\x00" * 16, "image/jpeg")},
    ).json()

    response = client.put(f"{API}/appointment/{appointment_id}", data={"notes": "relaxed"})

    assert response.status_code == 200
    assert response.json()["notes"] == "relaxed"
    assert response.json()["checkInImage"] == with_image["checkInImage"]


def test_update_rejects_non_image_upload(client, customer, login_as, booking):
    login_as(customer)
    appointment_id = client.post(f"{API}/appointment", json=booking).json()["id"]

    response = client.put(
        f"{API}/appointment/{appointment_id}",
        files={"checkOutImage": ("notes.txt", b"hello", "text/plain")},
    )

    assert response.status_code == 400
    assert response.json() == {"message": "Only accept image file (jpeg, jpg, png)"}


def test_update_with_unknown_status_is_bad_request(client, customer, login_as, booking):
    login_as(customer)
    appointment_id = client.post(f"{API}/appointment", json=booking).json()["id"]

    response = client.put(f"{API}/appointment/{appointment_id}", data={"status": "Lost"})

    assert response.status_code == 400


def test_appointments_by_customer(client, customer, login_as, booking):
    login_as(customer)
    client.post(f"{API}/appointment", json=booking)

    mine = client.get(f"{API}/appointment/customer/{customer.id}")

    assert mine.status_code == 200
    assert len(mine.json()) == 1


def test_delete_appointment_requires_staff(client, customer, staff, login_as, booking):
    login_as(customer)
    appointment_id = client.post(f"{API}/appointment", json=booking).json()["id"]

    assert client.delete(f"{API}/appointment/{appointment_id}").status_code == 403

    login_as(staff)
    deleted = client.delete(f"{API}/appointment/{appointment_id}")
    assert deleted.json() == {"message": "Appointment deleted successfully"}
    assert client.get(f"{API}/appointment/{appointment_id}").status_code == 404


def test_staff_books_for_customer(client, make_account, login_as, booking):
    login_as(make_account(RoleEnum.STAFF))

    response = client.post(f"{API}/appointment", json=booking)

    assert response.status_code == 201


def test_json_update_applies_fields(client, customer, login_as, booking):
    login_as(customer)
    appointment_id = client.post(f"{API}/appointment", json=booking).json()["id"]

    response = client.put(
        f"{API}/appointment/{appointment_id}", json={"notes": "relaxed", "status": "Completed"}
    )

    assert response.status_code == 200
    stored = client.get(f"{API}/appointment/{appointment_id}").json()
    assert stored["notes"] == "relaxed"
    assert stored["status"] == "Completed"


def test_json_update_with_unknown_status_is_bad_request(client, customer, login_as, booking):
    login_as(customer)
    appointment_id = client.post(f"{API}/appointment", json=booking).json()["id"]

    response = client.put(f"{API}/appointment/{appointment_id}", json={"status": "Lost"})

    assert response.status_code == 400
    assert response.json()["errors"][0]["field"] == "status"


def test_rejected_updates_leave_upload_dir_untouched(
    client, customer, make_account, login_as, booking
):
    login_as(customer)
    appointment_id = client.post(f"{API}/appointment", json=booking).json()["id"]
    before = set(os.listdir(UPLOAD_DIR))

    login_as(make_account())
    forbidden = client.put(
        f"{API}/appointment/{appointment_id}",
        files={"checkInImage": ("arrival.png", PNG, "image/png")},
    )
    missing = client.put(
        f"{API}/appointment/{MISSING_ID}",
        files={"checkOutImage": ("leaving.png", PNG, "image/png")},
    )

    assert forbidden.status_code == 403
    assert missing.status_code == 404
    assert set(os.listdir(UPLOAD_DIR)) == before


def test_changing_therapist_moves_reserved_shift(
    client, customer, make_account, login_as, booking, db
):
    other = Therapist(
        account_id=make_account(RoleEnum.THERAPIST).id, certification=[], experience="2 years"
    )
    db.add(other)
    db.commit()
    login_as(customer)
    appointment_id = client.post(
        f"{API}/appointment", json={**booking, "date": "2030-03-10"}
    ).json()["id"]

    response = client.put(f"{API}/appointment/{appointment_id}", json={"therapistId": other.id})

    assert response.status_code == 200
    assert response.json()["therapistId"] == other.id
    db.expire_all()
    shifts = {s.therapist_id: s for s in db.query(Shift).all()}
    assert shifts[booking["therapistId"]].appointment_id is None
    assert shifts[booking["therapistId"]].is_available is True
    assert shifts[other.id].appointment_id == appointment_id
    assert shifts[other.id].date == date(2030, 3, 10)


def test_moving_onto_a_booked_shift_conflicts(client, customer, login_as, booking, db):
    evening = Slot(slot_num=2, start_time=time(18, 0), end_time=time(19, 0))
    db.add(evening)
    db.commit()
    login_as(customer)
    morning_id = client.post(
        f"{API}/appointment", json={**booking, "date": "2030-03-10"}
    ).json()["id"]
    client.post(
        f"{API}/appointment", json={**booking, "slotsId": evening.id, "date": "2030-03-10"}
    )

    response = client.put(f"{API}/appointment/{morning_id}", json={"slotsId": evening.id})

    assert response.status_code == 409
    assert client.get(f"{API}/appointment/{morning_id}").json()["slotsId"] == booking["slotsId"]
    db.expire_all()
    held = db.query(Shift).filter(Shift.slots_id == booking["slotsId"]).one()
    assert held.appointment_id == morning_id


def test_cancelled_appointment_cannot_be_reopened(client, customer, login_as, booking):
    login_as(customer)
    appointment_id = client.post(
        f"{API}/appointment", json={**booking, "date": "2030-03-10"}
    ).json()["id"]
    client.put(f"{API}/appointment/{appointment_id}", json={"status": "Cancelled"})

    response = client.put(f"{API}/appointment/{appointment_id}", json={"status": "Scheduled"})

    assert response.status_code == 400
    assert client.get(f"{API}/appointment/{appointment_id}").json()["status"] == "Cancelled"
