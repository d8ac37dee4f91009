import os

import pytest

from spa_booking.models import Appointment, Feedback, Service

from .conftest import API, UPLOAD_DIR

PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


@pytest.fixture
def appointment(db, booking):
    appointment = Appointment(
        therapist_id=booking["therapistId"],
        customer_id=booking["customerId"],
        service_id=booking["serviceId"],
        slots_id=booking["slotsId"],
    )
    db.add(appointment)
    db.commit()
    db.refresh(appointment)
    return appointment


def test_feedback_copies_service_and_therapist(client, customer, login_as, appointment, db):
    other_service = Service(service_name="Pedicure", description="Spa pedicure", price=30)
    db.add(other_service)
    db.commit()
    login_as(customer)

    response = client.post(
        f"{API}/feedback",
        data={
            "appointmentId": appointment.id,
            "rating": "5",
            "comment": "Wonderful",
            "serviceId": other_service.id,
            "therapistId": "someone-else",
            "accountId": "someone-else",
        },
    )

    assert response.status_code == 201
    body = response.json()
    assert body["serviceId"] == appointment.service_id
    assert body["therapistId"] == appointment.therapist_id
    assert body["accountId"] == customer.id
    assert body["account"]["username"] == customer.username


def test_feedback_with_image(client, customer, login_as, appointment):
    login_as(customer)

    response = client.post(
        f"{API}/feedback",
        data={"appointmentId": appointment.id, "rating": "4", "comment": "Nice room"},
        files={"image": ("room.png", PNG, "image/png")},
    )

    assert response.status_code == 201
    assert response.json()["images"].endswith("-room.png")


def test_feedback_rating_out_of_range(client, customer, login_as, appointment, db):
    login_as(customer)

    response = client.post(
        f"{API}/feedback",
        data={"appointmentId": appointment.id, "rating": "9", "comment": "Too good"},
    )

    assert response.status_code == 400
    assert db.query(Feedback).count() == 0


def test_feedback_missing_comment(client, customer, login_as, appointment):
    login_as(customer)

    response = client.post(f"{API}/feedback", data={"appointmentId": appointment.id, "rating": "3"})

    assert response.status_code == 400


def test_feedback_unknown_appointment(client, customer, login_as):
    login_as(customer)

    response = client.post(
        f"{API}/feedback",
        data={
            "appointmentId": "00000000-0000-0000-0000-000000000000",
            "rating": "3",
            "comment": "Where?",
        },
    )

    assert response.status_code == 404


def test_feedback_on_someone_elses_appointment(client, make_account, login_as, appointment):
    login_as(make_account())

    response = client.post(
        f"{API}/feedback",
        data={"appointmentId": appointment.id, "rating": "1", "comment": "Not mine"},
    )

    assert response.status_code == 403


def test_rejected_feedback_does_not_store_image(client, make_account, login_as, appointment):
    login_as(make_account())
    before = set(os.listdir(UPLOAD_DIR))

    response = client.post(
        f"{API}/feedback",
        data={"appointmentId": appointment.id, "rating": "1", "comment": "Not mine"},
        files={"image": ("room.png", PNG, "image/png")},
    )

    assert response.status_code == 403
    assert set(os.listdir(UPLOAD_DIR)) == before


def test_feedback_queries_by_therapist_and_service(client, customer, login_as, appointment):
    login_as(customer)
    client.post(
        f"{API}/feedback",
        data={"appointmentId": appointment.id, "rating": "5", "comment": "Great hands"},
    )

    by_therapist = client.get(f"{API}/feedback/therapist/{appointment.therapist_id}")
    by_service = client.get(f"{API}/feedback/service/{appointment.service_id}")

    assert by_therapist.status_code == 200
    assert by_service.status_code == 200
    assert by_therapist.json()[0]["comment"] == "Great hands"
    assert by_service.json()[0]["service"]["id"] == appointment.service_id


def test_only_author_edits_feedback(client, customer, make_account, login_as, appointment):
    login_as(customer)
    feedback_id = client.post(
        f"{API}/feedback",
        data={"appointmentId": appointment.id, "rating": "2", "comment": "Meh"},
    ).json()["id"]

    updated = client.put(f"{API}/feedback/{feedback_id}", json={"rating": 3})
    assert updated.status_code == 200
    assert updated.json()["rating"] == 3
    assert updated.json()["comment"] == "Meh"

    login_as(make_account())
    assert client.delete(f"{API}/feedback/{feedback_id}").status_code == 403
