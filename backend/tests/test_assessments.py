from uuid import uuid4

from fastapi.testclient import TestClient

from app.main import app

LAYER_ANSWERS = {
    1: {"linguistic_1": 5, "linguistic_2": 4, "interpersonal_1": 4, "interpersonal_2": 4, "logical_1": 2},
    2: {"openness_1": 4, "extraversion_1": 5, "conscientiousness_1": 3},
    3: {"numerical_1": 3, "verbal_1": 5},
    4: {"education_1": 4},
    5: {"interests_1": 4, "values_1": 5},
    6: {"passion_1": "Teaching, writing and mentoring", "action_1": "Volunteer as a tutor"},
}


def _new_user():
    return f"user-{uuid4()}"


def test_questionnaire_lists_all_layers():
    with TestClient(app) as client:
        response = client.get("/api/questionnaire")
        layer = client.get("/api/questionnaire/layers/6")
        missing = client.get("/api/questionnaire/layers/7")

    assert response.status_code == 200
    body = response.json()
    assert body["layer_count"] == 6
    assert body["response_scale"]["Strongly Agree"] == 5
    assert [item["number"] for item in body["layers"]] == [1, 2, 3, 4, 5, 6]
    assert layer.json()["is_open_ended"] is True
    assert missing.status_code == 404


def test_health():
    with TestClient(app) as client:
        response = client.get("/api/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_assessment_progresses_through_layers_and_completes():
    user_id = _new_user()

    with TestClient(app) as client:
        created = client.post("/api/assessments", json={"user_id": user_id})
        assert created.status_code == 200
        assessment = created.json()
        assessment_id = assessment["assessment_id"]
        assert assessment["status"] == "in_progress"
        assert assessment["current_layer"] == 1

        current = client.get("/api/assessments/current", params={"user_id": user_id})
        assert current.json()["assessment"]["assessment_id"] == assessment_id

        for layer_number in range(1, 6):
            saved = client.put(
                f"/api/assessments/{assessment_id}/layers/{layer_number}/responses",
                json={"responses": LAYER_ANSWERS[layer_number]},
            )
            assert saved.status_code == 200
            body = saved.json()
            assert body["saved"] == len(LAYER_ANSWERS[layer_number])
            assert body["assessment"]["current_layer"] == layer_number + 1
            assert body["assessment"]["status"] == "in_progress"

        final = client.put(
            f"/api/assessments/{assessment_id}/layers/6/responses",
            json={"responses": LAYER_ANSWERS[6]},
        )
        assert final.status_code == 200
        finished = final.json()["assessment"]
        assert finished["status"] == "completed"
        assert finished["completed_at"] is not None

        no_current = client.get("/api/assessments/current", params={"user_id": user_id})
        assert no_current.json()["assessment"] is None

        history = client.get("/api/assessments", params={"user_id": user_id})
        assert [item["assessment_id"] for item in history.json()["items"]] == [assessment_id]

        responses = client.get(f"/api/assessments/{assessment_id}/responses")
        stored = responses.json()["responses"]
        assert stored["layer_1"]["linguistic_1"] == 5
        assert stored["layer_6"]["passion_1"] == "Teaching, writing and mentoring"


def test_resubmitting_a_layer_overwrites_answers_without_moving_back():
    with TestClient(app) as client:
        assessment_id = client.post("/api/assessments", json={"user_id": _new_user()}).json()["assessment_id"]
        base = f"/api/assessments/{assessment_id}/layers"

        client.put(f"{base}/1/responses", json={"responses": {"linguistic_1": 2, "logical_1": 3}})
        client.put(f"{base}/2/responses", json={"responses": {"openness_1": 4}})
        again = client.put(f"{base}/1/responses", json={"responses": {"linguistic_1": 5}})

        assert again.status_code == 200
        assert again.json()["assessment"]["current_layer"] == 3

        stored = client.get(f"/api/assessments/{assessment_id}/responses").json()["responses"]
        assert stored["layer_1"] == {"linguistic_1": 5, "logical_1": 3}


def test_invalid_layer_and_unknown_question_are_rejected():
    with TestClient(app) as client:
        assessment_id = client.post("/api/assessments", json={"user_id": _new_user()}).json()["assessment_id"]

        bad_layer = client.put(
            f"/api/assessments/{assessment_id}/layers/9/responses",
            json={"responses": {"linguistic_1": 3}},
        )
        wrong_question = client.put(
            f"/api/assessments/{assessment_id}/layers/1/responses",
            json={"responses": {"openness_1": 3}},
        )

    assert bad_layer.status_code == 400
    assert wrong_question.status_code == 400
    assert "openness_1" in wrong_question.json()["detail"]


def test_missing_assessment_returns_404():
    with TestClient(app) as client:
        response = client.put(
            "/api/assessments/does-not-exist/layers/1/responses",
            json={"responses": {"linguistic_1": 3}},
        )
        lookup = client.get("/api/assessments/does-not-exist")

    assert response.status_code == 404
    assert lookup.status_code == 404


def test_storage_failure_reports_retryable_error(monkeypatch):
    monkeypatch.setattr("app.routers.assessments.save_responses", lambda _db, **_kwargs: False)

    with TestClient(app) as client:
        assessment_id = client.post("/api/assessments", json={"user_id": _new_user()}).json()["assessment_id"]
        response = client.put(
            f"/api/assessments/{assessment_id}/layers/1/responses",
            json={"responses": {"linguistic_1": 3}},
        )

    assert response.status_code == 500
    assert response.json()["detail"] == "Failed to save progress. Please try again."


def test_scaled_layer_rejects_answers_off_the_response_scale():
    with TestClient(app) as client:
        assessment_id = client.post("/api/assessments", json={"user_id": _new_user()}).json()["assessment_id"]
        base = f"/api/assessments/{assessment_id}/layers"

        rejected = client.put(f"{base}/1/responses", json={"responses": {"linguistic_1": 42, "linguistic_2": -7}})
        fractional = client.put(f"{base}/2/responses", json={"responses": {"openness_1": 3.5}})
        text = client.put(f"{base}/1/responses", json={"responses": {"logical_1": "often"}})
        free_text = client.put(f"{base}/6/responses", json={"responses": {"passion_1": "Design"}})

        stored = client.get(f"/api/assessments/{assessment_id}/responses").json()["responses"]

    assert rejected.status_code == 400
    assert "linguistic_1" in rejected.json()["detail"]
    assert "linguistic_2" in rejected.json()["detail"]
    assert fractional.status_code == 400
    assert text.status_code == 400
    assert free_text.status_code == 200
    assert "layer_1" not in stored
    assert "layer_2" not in stored
