from __future__ import annotations

from fastapi.testclient import TestClient

from conftest import station_payload
from fuelstations.db.store import StationStore


def test_root_issues_usable_token(client: TestClient) -> None:
    response = client.get("/")

    assert response.status_code == 200
    body = response.json()
    assert body["name"]
    stations = client.get(
        "/stations", headers={"Authorization": f"Bearer {body['jwt']}"}
    )
    assert stations.status_code == 200
    assert stations.json() == {"stations": []}


def test_stations_require_token(client: TestClient) -> None:
    response = client.get("/stations")

    assert response.status_code == 401
    assert response.json() == {
        "error": "Unauthorized",
        "message": "No token was provided",
    }


def test_stations_reject_invalid_token(client: TestClient) -> None:
    response = client.get("/stations", headers={"Authorization": "Bearer nope"})

    assert response.status_code == 401
    assert response.json()["message"] == "Invalid token"


def test_token_without_bearer_prefix_is_accepted(
    client: TestClient, auth_headers: dict[str, str]
) -> None:
    raw = auth_headers["Authorization"].removeprefix("Bearer ")

    response = client.get("/stations", headers={"Authorization": raw})

    assert response.status_code == 200


def test_zero_coordinates_survive_create_and_get(
    client: TestClient, auth_headers: dict[str, str]
) -> None:
    payload = {
        "id_name": "A1",
        "name": "Station A",
        "latitude": 0,
        "longitude": 0,
        "city": "X",
        "address": "Y",
        "pumps": [{"fuel_type": "DIESEL", "price": 1.5, "available": True}],
    }

    created = client.post("/stations", json=payload, headers=auth_headers)

    assert created.status_code == 201
    assert created.json()["message"] == "Created"
    station_id = created.json()["id"]
    assert isinstance(station_id, int)

    fetched = client.get(f"/stations/{station_id}", headers=auth_headers)

    assert fetched.status_code == 200
    body = fetched.json()
    assert body["latitude"] == 0
    assert body["longitude"] == 0
    assert body["pumps"][0]["fuel_type"] == "DIESEL"
    assert body["pumps"][0]["available"] is True


def test_create_missing_field_is_bad_request(
    client: TestClient, auth_headers: dict[str, str]
) -> None:
    payload = station_payload()
    del payload["city"]

    response = client.post("/stations", json=payload, headers=auth_headers)

    assert response.status_code == 400
    assert response.json() == {
        "error": "Bad Request",
        "message": "The request body must contain a city property",
    }


def test_create_non_array_pumps_is_bad_request(
    client: TestClient, auth_headers: dict[str, str]
) -> None:
    response = client.post(
        "/stations", json=station_payload(pumps="DIESEL"), headers=auth_headers
    )

    assert response.status_code == 400
    assert response.json()["message"] == "The pumps property must be an array"


def test_create_with_non_object_body_is_bad_request(
    client: TestClient, auth_headers: dict[str, str]
) -> None:
    response = client.post("/stations", json=[1, 2], headers=auth_headers)

    assert response.status_code == 400


def test_invalid_station_id_is_bad_request(
    client: TestClient, auth_headers: dict[str, str]
) -> None:
    for method in ("GET", "PUT", "DELETE"):
        response = client.request(method, "/stations/abc", headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid station ID"


def test_missing_station_is_not_found(
    client: TestClient, auth_headers: dict[str, str]
) -> None:
    response = client.get("/stations/7", headers=auth_headers)

    assert response.status_code == 404
    assert response.json() == {"error": "Not Found", "message": "Station not found"}


def test_update_returns_merged_station(
    client: TestClient, auth_headers: dict[str, str]
) -> None:
    station_id = client.post(
        "/stations", json=station_payload(name="Old"), headers=auth_headers
    ).json()["id"]

    response = client.put(
        f"/stations/{station_id}",
        json={
            "name": "New",
            "city": "",
            "pumps": [{"fuel_type": "LPG", "price": 0.9, "available": False}],
        },
        headers=auth_headers,
    )

    assert response.status_code == 200
    body = response.json()
    assert body["id"] == station_id
    assert body["name"] == "New"
    assert body["city"] == "Zurich"
    assert [pump["fuel_type"] for pump in body["pumps"]] == ["LPG"]
    assert isinstance(body["pumps"][0]["id"], int)


def test_update_with_unknown_pump_is_not_found(
    client: TestClient, auth_headers: dict[str, str]
) -> None:
    station_id = client.post(
        "/stations", json=station_payload(), headers=auth_headers
    ).json()["id"]

    response = client.put(
        f"/stations/{station_id}",
        json={"pumps": [{"id": 555, "price": 2.0}]},
        headers=auth_headers,
    )

    assert response.status_code == 404
    assert response.json()["message"] == "Pump with ID 555 not found"


def test_delete_removes_station_from_listing(
    client: TestClient, auth_headers: dict[str, str]
) -> None:
    station_id = client.post(
        "/stations", json=station_payload(), headers=auth_headers
    ).json()["id"]

    deleted = client.delete(f"/stations/{station_id}", headers=auth_headers)

    assert deleted.status_code == 200
    assert deleted.json() == {"message": "Station deleted successfully"}
    assert client.get("/stations", headers=auth_headers).json() == {"stations": []}
    again = client.delete(f"/stations/{station_id}", headers=auth_headers)
    assert again.status_code == 404


def test_store_failure_is_opaque_internal_error(
    client: TestClient, auth_headers: dict[str, str], store: StationStore
) -> None:
    store.close()

    response = client.get("/stations", headers=auth_headers)

    assert response.status_code == 500
    assert response.json() == {
        "error": "Internal Server Error",
        "message": "Internal Server Error",
    }


def test_unknown_route_is_json_not_found(client: TestClient) -> None:
    response = client.get("/nowhere")

    assert response.status_code == 404
    assert response.json() == {
        "error": "Not Found",
        "message": "The requested URL was not found on this server: /nowhere",
    }


def test_out_of_range_station_id_is_not_found(
    client: TestClient, auth_headers: dict[str, str]
) -> None:
    for method in ("GET", "PUT", "DELETE"):
        response = client.request(
            method, "/stations/99999999999999999999", headers=auth_headers
        )

        assert response.status_code == 404
        assert response.json() == {
            "error": "Not Found",
            "message": "Station not found",
        }


def test_out_of_range_pump_id_is_not_found(
    client: TestClient, auth_headers: dict[str, str]
) -> None:
    station_id = client.post(
        "/stations", json=station_payload(), headers=auth_headers
    ).json()["id"]

    response = client.put(
        f"/stations/{station_id}",
        json={"pumps": [{"id": 10**20, "price": 1.0}]},
        headers=auth_headers,
    )

    assert response.status_code == 404
    assert response.json() == {
        "error": "Not Found",
        "message": f"Pump with ID {10**20} not found",
    }


def test_station_id_must_be_plain_digits(
    client: TestClient, auth_headers: dict[str, str]
) -> None:
    for raw in ("1_0", "+7", "%207", "١"):
        response = client.get(f"/stations/{raw}", headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid station ID"


def test_malformed_json_body_is_bad_request(
    client: TestClient, auth_headers: dict[str, str]
) -> None:
    station_id = client.post(
        "/stations", json=station_payload(), headers=auth_headers
    ).json()["id"]
    headers = {**auth_headers, "Content-Type": "application/json"}

    created = client.post("/stations", content=b"{bad", headers=headers)
    updated = client.put(f"/stations/{station_id}", content=b"{bad", headers=headers)

    for response in (created, updated):
        assert response.status_code == 400
        assert response.json() == {
            "error": "Bad Request",
            "message": "The request body must be valid JSON",
        }


def test_cors_preflight_allows_any_origin(client: TestClient) -> None:
    response = client.options(
        "/stations",
        headers={
            "Origin": "https://example.com",
            "Access-Control-Request-Method": "PUT",
            "Access-Control-Request-Headers": "authorization",
        },
    )

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "*"
    assert "PUT" in response.headers["access-control-allow-methods"]


def test_responses_carry_security_headers(client: TestClient) -> None:
    response = client.get("/")

    assert response.headers["x-content-type-options"] == "nosniff"
    assert response.headers["x-frame-options"] == "SAMEORIGIN"
    assert response.headers["referrer-policy"] == "no-referrer"


def test_openapi_documents_error_body(client: TestClient) -> None:
    schema = client.get("/openapi.json").json()

    responses = schema["paths"]["/stations/{station_id}"]["get"]["responses"]
    for code in ("400", "401", "404", "500"):
        assert responses[code]["content"]["application/json"]["schema"] == {
            "$ref": "#/components/schemas/ErrorBody"
        }
