from fastapi.testclient import TestClient
from app.main import app

client = TestClient(app)


def test_ping():
    response = client.get("/ping")
    assert response.status_code == 200
    assert response.json() == {"ok": True}


def test_list_courses():
    response = client.get("/api/courses")
    assert response.status_code == 200
    body = response.json()
    assert body["isSuccess"] is True
    assert body["code"] == "COMMON200"
    assert body["result"][0] == {"identifier": "standard", "base_fee": 500, "base_duration_hours": 1}
    assert len(body["result"]) == 4


def test_post_bill():
    payload = {
        "course": "standard",
        "entry_time": "2021-07-17T10:10:30+09:00",
        "exit_time": "2021-07-17T11:10:31+09:00",
    }
    response = client.post("/api/bills", json=payload)

    assert response.status_code == 200
    body = response.json()
    assert body["isSuccess"] is True
    result = body["result"]
    assert result["course_fee"] == 500
    assert result["extension_block_count"] == 1
    assert result["extension_fee_total"] == 100
    assert result["total_pre_tax"] == 600
    assert result["total_with_tax"] == 660
    assert result["duration_seconds"] == 3601


def test_post_bill_night():
    payload = {
        "course": "3-hour pack",
        "entry_time": "2021-07-17T23:00:00+09:00",
        "exit_time": "2021-07-18T03:20:00+09:00",
    }
    response = client.post("/api/bills/", json=payload)

    assert response.status_code == 200
    result = response.json()["result"]
    assert result["night_block_count"] == 8
    assert result["extension_fee_total"] == 920


def test_unknown_course_returns_404_envelope():
    payload = {
        "course": "10-hour pack",
        "entry_time": "2021-07-17T10:00:00+09:00",
        "exit_time": "2021-07-17T11:00:00+09:00",
    }
    response = client.post("/api/bills", json=payload)

    assert response.status_code == 404
    body = response.json()
    assert body["isSuccess"] is False
    assert body["code"] == "COURSE-001"
    assert body["result"] is None


def test_empty_course_returns_404_envelope():
    payload = {
        "course": "",
        "entry_time": "2021-07-17T10:00:00+09:00",
        "exit_time": "2021-07-17T11:00:00+09:00",
    }
    response = client.post("/api/bills", json=payload)

    assert response.status_code == 404
    body = response.json()
    assert body["isSuccess"] is False
    assert body["code"] == "COURSE-001"


def test_exit_before_entry_returns_422_envelope():
    payload = {
        "course": "standard",
        "entry_time": "2021-07-17T11:00:00+09:00",
        "exit_time": "2021-07-17T10:00:00+09:00",
    }
    response = client.post("/api/bills", json=payload)

    assert response.status_code == 422
    body = response.json()
    assert body["isSuccess"] is False
    assert body["code"] == "VALIDATION-001"
    assert body["result"]


def test_naive_datetime_returns_422_envelope():
    payload = {
        "course": "standard",
        "entry_time": "2021-07-17T10:00:00",
        "exit_time": "2021-07-17T11:00:00",
    }
    response = client.post("/api/bills", json=payload)

    assert response.status_code == 422
    assert "body.entry_time" in response.json()["result"]


def test_unknown_route_returns_envelope():
    response = client.get("/api/unknown")
    assert response.status_code == 404
    body = response.json()
    assert body["isSuccess"] is False
    assert body["code"] == "HTTP_404"


def test_api_responses_are_not_cached():
    response = client.get("/api/courses")
    assert "no-store" in response.headers["Cache-Control"]
