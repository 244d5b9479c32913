"""HTTP tests for the v1 API over the in-memory store."""

from fastapi.testclient import TestClient

from quizapp.main import create_app
from quizapp.store import keys


def create(client, admin_headers, payload) -> str:
    response = client.post("/v1/tests", json=payload, headers=admin_headers)
    assert response.status_code == 201, response.text
    return response.json()["id"]


def test_root_endpoint(client):
    response = client.get("/")
    assert response.status_code == 200
    data = response.json()
    assert data["message"] == "Practice Quiz API"
    assert data["version"] == "1.0.0"


def test_health(client):
    response = client.get("/v1/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
    assert response.headers["X-Request-ID"]


def test_request_id_is_echoed(client):
    response = client.get("/v1/health", headers={"X-Request-ID": "req-123"})
    assert response.headers["X-Request-ID"] == "req-123"


def test_ready_reports_store(client, fake_redis):
    assert client.get("/v1/ready").json()["store"] == "ok"

    fake_redis.down = True
    response = client.get("/v1/ready")
    assert response.status_code == 503
    assert response.json()["status"] == "down"


def test_ready_without_store():
    response = TestClient(create_app()).get("/v1/ready")
    assert response.status_code == 503
    assert response.json()["store"] == "not_configured"


def test_end_to_end_scenario(client, admin_headers, math_quiz):
    test_id = create(client, admin_headers, math_quiz)

    listed = client.get("/v1/tests").json()
    assert [t["id"] for t in listed] == [test_id]

    served = client.get(f"/v1/tests/{test_id}").json()
    assert served["id"] == test_id
    assert served["title"] == "Math Quiz"
    assert served["questions"][0]["type"] == "numeric"
    assert served["questions"][0]["answer"] == 4

    first = client.post(f"/v1/tests/{test_id}/attempts", json={"answers": [4]})
    assert first.status_code == 201
    body = first.json()
    assert (body["correct"], body["total"], body["percentage"]) == (1, 1, 100)
    assert body["answers"] == [{"questionIndex": 0, "answer": 4, "isCorrect": True}]
    assert body["testId"] == test_id

    second = client.post(f"/v1/tests/{test_id}/attempts", json={"answers": ["five"]}).json()
    assert (second["correct"], second["total"], second["percentage"]) == (0, 1, 0)

    review = client.get(f"/v1/tests/{test_id}/results/{body['resultId']}", headers=admin_headers)
    assert review.json() == body

    listing = client.get(f"/v1/tests/{test_id}/results", headers=admin_headers).json()
    assert listing["statistics"] == {"total": 2, "average": 50, "highest": 100, "lowest": 0}
    assert len(listing["results"]) == 2

    count = client.get(f"/v1/tests/{test_id}/results/count", headers=admin_headers).json()
    assert count == {"count": 2}

    deleted = client.delete(f"/v1/tests/{test_id}", headers=admin_headers)
    assert deleted.json() == {"purgedCount": 2}
    assert client.get("/v1/tests").json() == []
    assert client.get(f"/v1/tests/{test_id}").status_code == 404


def test_save_pre_graded_result(client, store):
    response = client.post(
        "/v1/tests/any-id/results",
        json={"correct": 2, "total": 3, "percentage": 67, "answers": []},
    )
    assert response.status_code == 201
    result_id = response.json()["resultId"]
    assert result_id in store.set_members(keys.results_index_key("any-id"))


def test_huge_integer_attempt(client, admin_headers, math_quiz):
    test_id = create(client, admin_headers, math_quiz)

    response = client.post(f"/v1/tests/{test_id}/attempts", json={"answers": [10**400]})

    assert response.status_code == 201
    assert response.json()["correct"] == 0


def test_update_reports_existing_results(client, admin_headers, math_quiz):
    test_id = create(client, admin_headers, math_quiz)
    client.post(f"/v1/tests/{test_id}/attempts", json={"answers": [4]})

    kept = client.put(f"/v1/tests/{test_id}", json=math_quiz, headers=admin_headers).json()
    assert kept == {
        "id": test_id,
        "hadResults": True,
        "resultsCount": 1,
        "purged": False,
        "purgedCount": 0,
    }

    purged = client.put(
        f"/v1/tests/{test_id}",
        params={"purge_results": "true"},
        json={**math_quiz, "title": "Math Quiz v2"},
        headers=admin_headers,
    ).json()
    assert purged["purged"] is True
    assert purged["purgedCount"] == 1
    assert client.get(f"/v1/tests/{test_id}").json()["title"] == "Math Quiz v2"


class TestErrors:
    def test_admin_routes_require_password(self, client, math_quiz):
        response = client.post("/v1/tests", json=math_quiz)
        assert response.status_code == 401
        assert response.json()["error_code"] == "HTTP_ERROR"

        response = client.post("/v1/tests", json=math_quiz, headers={"X-Admin-Password": "wrong"})
        assert response.status_code == 403
        assert response.json()["message"] == "Invalid password"

    def test_invalid_test_payload(self, client, admin_headers):
        response = client.post("/v1/tests", json={"title": "", "questions": []}, headers=admin_headers)
        assert response.status_code == 422
        body = response.json()
        assert body["error_code"] == "VALIDATION_ERROR"
        assert body["request_id"]

    def test_inconsistent_pre_graded_result(self, client, store):
        response = client.post(
            "/v1/tests/t1/results",
            json={"correct": 1, "total": 2, "percentage": 100, "answers": []},
        )
        assert response.status_code == 422
        assert response.json()["error_code"] == "VALIDATION_ERROR"
        assert store.set_members(keys.results_index_key("t1")) == set()

    def test_blank_question_fields(self, client, admin_headers):
        payload = {"title": "Quiz", "questions": [{"type": "short_answer", "prompt": "Capital?", "answer": " "}]}
        response = client.post("/v1/tests", json=payload, headers=admin_headers)
        assert response.status_code == 422

    def test_unknown_test(self, client, admin_headers, math_quiz):
        assert client.get("/v1/tests/missing").json()["error_code"] == "NOT_FOUND"
        assert client.put("/v1/tests/missing", json=math_quiz, headers=admin_headers).status_code == 404
        assert client.delete("/v1/tests/missing", headers=admin_headers).status_code == 404
        assert client.post("/v1/tests/missing/attempts", json={"answers": []}).status_code == 404

    def test_empty_test_is_not_served(self, client, admin_headers):
        test_id = create(client, admin_headers, {"title": "Draft", "questions": []})

        response = client.get(f"/v1/tests/{test_id}")
        assert response.status_code == 422
        assert response.json()["message"] == "Test has no questions"

    def test_store_failure_is_503(self, client, admin_headers, fake_redis, math_quiz):
        fake_redis.fail("set")
        response = client.post("/v1/tests", json=math_quiz, headers=admin_headers)
        assert response.status_code == 503
        assert response.json()["error_code"] == "STORE_ERROR"

    def test_advisory_reads_degrade(self, client, admin_headers, fake_redis):
        fake_redis.down = True
        assert client.get("/v1/tests").json() == []
        assert client.get("/v1/tests/t1/results/count", headers=admin_headers).json() == {"count": 0}
        listing = client.get("/v1/tests/t1/results", headers=admin_headers).json()
        assert listing == {
            "results": [],
            "statistics": {"total": 0, "average": 0, "highest": 0, "lowest": 0},
        }

    def test_store_not_configured(self, admin_headers):
        response = TestClient(create_app()).get("/v1/tests")
        assert response.status_code == 503
        assert response.json()["error_code"] == "STORE_ERROR"
