from __future__ import annotations


def test_submit_survey_and_check_email(client):
    response = client.post(
        "/api/v1/survey/submit",
        json={
            "name": "Riley",
            "email": "riley@example.com",
            "question_answers": {"timeline": "Q3"},
            "project_type": "BRAND_IDENTITY",
            "budget": "RANGE_5K_10K",
        },
    )
    assert response.status_code == 201
    assert response.json()["status"] == "NEW"

    check = client.get("/api/v1/survey/check-email", params={"email": "RILEY@example.com"})
    assert check.json() == {"exists": True}

    duplicate = client.post("/api/v1/survey/submit", json={"name": "Riley", "email": "riley@example.com"})
    assert duplicate.status_code == 409


def test_submit_survey_rejects_unknown_budget(client):
    response = client.post(
        "/api/v1/survey/submit",
        json={"name": "Riley", "email": "riley@example.com", "budget": "UNLIMITED"},
    )
    assert response.status_code == 422
    assert response.json()["field"] == "budget"


def test_save_progress(client):
    lead = client.post("/api/v1/survey/submit", json={"name": "Kai", "email": "kai@example.com"}).json()

    response = client.post(
        "/api/v1/survey/progress",
        json={"lead_id": lead["id"], "current_step": 2, "survey_data": {"stage": "details"}},
    )

    assert response.status_code == 200
    assert response.json()["current_step"] == 2
    assert response.json()["survey_data"]["stage"] == "details"


def test_progress_for_unknown_lead(client):
    response = client.post("/api/v1/survey/progress", json={"lead_id": "missing", "current_step": 1})
    assert response.status_code == 404
