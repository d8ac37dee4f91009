import pytest

from spa_booking.models import Answer, Question, Scoreband

from .conftest import API


@pytest.fixture
def answers(db):
    rows = [
        Answer(title="Oily", image="/images/oily.png", point=3),
        Answer(title="Dry", image="/images/dry.png", point=1),
    ]
    db.add_all(rows)
    db.commit()
    for row in rows:
        db.refresh(row)
    return rows


@pytest.fixture
def question(db, answers):
    row = Question(question="How does your skin feel at noon?", answers=answers)
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


@pytest.fixture
def scoreband(db):
    row = Scoreband(min_point=0, max_point=10, type_of_skin="Dry", skin_explanation="Needs moisture")
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def test_create_answer(client, staff, login_as):
    login_as(staff)

    response = client.post(
        f"{API}/answer", json={"title": "Shiny", "image": "/images/shiny.png", "point": 2.5}
    )

    assert response.status_code == 201
    assert response.json()["point"] == 2.5


def test_question_expands_answers(client, staff, login_as, answers):
    login_as(staff)

    created = client.post(
        f"{API}/question",
        json={"question": "Pores?", "answerId": [answers[1].id, answers[0].id]},
    )

    assert created.status_code == 201
    fetched = client.get(f"{API}/question/{created.json()['id']}").json()
    assert {a["title"] for a in fetched["answerId"]} == {"Oily", "Dry"}


def test_question_with_unknown_answer(client, staff, login_as):
    login_as(staff)

    response = client.post(
        f"{API}/question",
        json={"question": "Pores?", "answerId": ["00000000-0000-0000-0000-000000000000"]},
    )

    assert response.status_code == 404


def test_scoreband_roadmap_keeps_order(client, staff, login_as, service_row, db):
    login_as(staff)

    response = client.post(
        f"{API}/scoreband",
        json={
            "minPoint": 0,
            "maxPoint": 5,
            "typeOfSkin": "Dry",
            "skinExplanation": "Lacks oil",
            "roadmap": [
                {"serviceId": service_row.id, "estimate": "2 weeks"},
                {"serviceId": service_row.id, "estimate": "1 month"},
            ],
        },
    )

    assert response.status_code == 201
    roadmap = response.json()["roadmap"]
    assert [step["estimate"] for step in roadmap] == ["2 weeks", "1 month"]
    assert roadmap[0]["service"]["serviceName"] == service_row.service_name


def test_scoreband_range_is_validated(client, staff, login_as, scoreband):
    login_as(staff)

    created = client.post(
        f"{API}/scoreband",
        json={"minPoint": 9, "maxPoint": 1, "typeOfSkin": "Oily", "skinExplanation": "Shiny"},
    )
    updated = client.put(f"{API}/scoreband/{scoreband.id}", json={"minPoint": 50})

    assert created.status_code == 400
    assert updated.status_code == 400


def test_submit_quiz_for_caller(client, customer, login_as, question, answers, scoreband):
    login_as(customer)

    response = client.post(
        f"{API}/user-quiz",
        json={
            "accountId": "ignored",
            "scoreBandId": scoreband.id,
            "totalPoint": 3,
            "questionResult": [{"questionId": question.id, "answerId": [answers[0].id]}],
        },
    )

    assert response.status_code == 201
    body = response.json()
    assert body["accountId"] == customer.id
    assert body["scoreband"]["typeOfSkin"] == "Dry"
    assert body["questionResult"] == [{"questionId": question.id, "answerId": [answers[0].id]}]

    mine = client.get(f"{API}/user-quiz/account/{customer.id}")
    assert mine.status_code == 200
    assert len(mine.json()) == 1


def test_quiz_answer_must_belong_to_question(client, customer, login_as, question, scoreband, db):
    stray = Answer(title="Stray", image="/images/stray.png", point=0)
    db.add(stray)
    db.commit()
    login_as(customer)

    response = client.post(
        f"{API}/user-quiz",
        json={
            "scoreBandId": scoreband.id,
            "totalPoint": 0,
            "questionResult": [{"questionId": question.id, "answerId": [stray.id]}],
        },
    )

    assert response.status_code == 400


def test_submit_quiz_requires_login(client, scoreband):
    response = client.post(
        f"{API}/user-quiz", json={"scoreBandId": scoreband.id, "totalPoint": 1}
    )

    assert response.status_code == 401
