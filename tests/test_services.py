from .conftest import API

FACIAL = {"serviceName": "Gold Facial", "description": "Brightening facial", "price": 60}


def test_create_then_get_service(client, staff, login_as):
    login_as(staff)

    created = client.post(f"{API}/service", json=FACIAL)
    assert created.status_code == 201
    service_id = created.json()["id"]

    fetched = client.get(f"{API}/service/{service_id}").json()
    assert fetched["serviceName"] == "Gold Facial"
    assert fetched["price"] == 60
    assert fetched["isActive"] is True


def test_create_service_rejects_negative_price(client, staff, login_as):
    login_as(staff)

    response = client.post(f"{API}/service", json={**FACIAL, "price": -1})

    assert response.status_code == 400


def test_update_service_is_partial(client, staff, login_as, service_row):
    login_as(staff)

    response = client.put(f"{API}/service/{service_row.id}", json={"price": 55.5})

    assert response.status_code == 200
    body = response.json()
    assert body["price"] == 55.5
    assert body["serviceName"] == service_row.service_name


def test_delete_service_twice(client, admin, login_as, service_row):
    login_as(admin)

    first = client.delete(f"{API}/service/{service_row.id}")
    second = client.delete(f"{API}/service/{service_row.id}")

    assert first.json() == {"message": "Service deleted successfully"}
    assert second.status_code == 404


def test_list_services_is_public(client, service_row):
    response = client.get(f"{API}/service")

    assert response.status_code == 200
    assert [s["id"] for s in response.json()] == [service_row.id]
