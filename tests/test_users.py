"""
Integration tests for /users profile, preferences, education and resume endpoints.
"""
from datetime import datetime

from app.db.models.user import Education


def resume_payload(**overrides):
    payload = {
        "filename": "a1b2c3.pdf",
        "originalName": "Jane Doe CV.pdf",
        "mimetype": "application/pdf",
        "size": 48213,
        "url": "https://files.example/a1b2c3.pdf",
    }
    payload.update(overrides)
    return payload


def add_degree(client, headers, **overrides):
    payload = {"degree": "BSc Computer Science", "institution": "TU Berlin", "year": 2019, "gpa": 3.6}
    payload.update(overrides)
    return client.post("/users/education", json=payload, headers=headers)


def test_get_profile(client, test_user, auth_headers, make_job):
    make_job(test_user)

    response = client.get("/users/profile", headers=auth_headers)

    assert response.status_code == 200
    user = response.json()["data"]["user"]
    assert user["email"] == "test@example.com"
    assert user["jobCount"] == 1
    assert user["education"] == []
    assert user["resume"] is None
    assert user["preferences"]["jobTypes"] == []


def test_update_profile(client, auth_headers):
    response = client.put(
        "/users/profile",
        json={"bio": "  Backend developer  ", "location": "Hamburg", "firstName": None},
        headers=auth_headers,
    )

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Profile updated successfully"
    user = body["data"]["user"]
    assert user["bio"] == "Backend developer"
    assert user["location"] == "Hamburg"
    assert user["firstName"] == "Test"


def test_update_preferences_replaces_document(client, auth_headers):
    first = {
        "jobTypes": ["full-time", "contract"],
        "remotePreference": "hybrid",
        "salaryRange": {"min": 70000, "max": 90000, "currency": "EUR"},
        "locations": ["Berlin"],
        "industries": ["fintech"],
    }
    client.put("/users/preferences", json=first, headers=auth_headers)

    response = client.put("/users/preferences", json={"remotePreference": "remote"}, headers=auth_headers)

    assert response.status_code == 200
    preferences = response.json()["data"]["user"]["preferences"]
    assert preferences["remotePreference"] == "remote"
    assert preferences["jobTypes"] == []
    assert preferences["salaryRange"] is None


def test_update_preferences_stored(client, auth_headers):
    client.put(
        "/users/preferences",
        json={"jobTypes": ["internship"], "salaryRange": {"min": 1000, "currency": "USD"}},
        headers=auth_headers,
    )

    preferences = client.get("/users/profile", headers=auth_headers).json()["data"]["user"]["preferences"]

    assert preferences["jobTypes"] == ["internship"]
    assert preferences["salaryRange"] == {"min": 1000.0, "max": None, "currency": "USD"}


def test_update_preferences_validation(client, auth_headers):
    response = client.put(
        "/users/preferences",
        json={"jobTypes": ["gig"], "remotePreference": "moon", "salaryRange": {"currency": "EURO"}},
        headers=auth_headers,
    )

    assert response.status_code == 400
    fields = {e["field"] for e in response.json()["errors"]}
    assert {"jobTypes", "remotePreference", "salaryRange.currency"} <= fields


def test_add_education(client, auth_headers):
    response = add_degree(client, auth_headers)

    assert response.status_code == 200
    assert response.json()["message"] == "Education added successfully"
    education = response.json()["data"]["user"]["education"]
    assert len(education) == 1
    assert education[0]["institution"] == "TU Berlin"
    assert education[0]["gpa"] == 3.6


def test_add_education_validation(client, auth_headers):
    next_year = datetime.utcnow().year + 1

    response = add_degree(client, auth_headers, degree="", year=next_year, gpa=4.5)

    assert response.status_code == 400
    fields = {e["field"] for e in response.json()["errors"]}
    assert fields == {"degree", "year", "gpa"}


def test_update_education(client, auth_headers):
    entry = add_degree(client, auth_headers).json()["data"]["user"]["education"][0]

    response = client.put(
        f"/users/education/{entry['id']}",
        json={"degree": "MSc Computer Science", "year": 2021},
        headers=auth_headers,
    )

    assert response.status_code == 200
    updated = response.json()["data"]["user"]["education"][0]
    assert updated["degree"] == "MSc Computer Science"
    assert updated["year"] == 2021
    assert updated["institution"] == "TU Berlin"


def test_update_education_not_found(client, auth_headers):
    response = client.put("/users/education/999", json={"degree": "PhD"}, headers=auth_headers)

    assert response.status_code == 404
    assert response.json() == {"success": False, "message": "Education record not found"}


def test_education_of_another_user_is_not_visible(client, other_user, auth_headers, db_session):
    entry = Education(user_id=other_user.id, degree="BA", institution="Elsewhere", year=2015)
    db_session.add(entry)
    db_session.commit()

    assert client.put(f"/users/education/{entry.id}", json={"degree": "MA"}, headers=auth_headers).status_code == 404
    assert client.delete(f"/users/education/{entry.id}", headers=auth_headers).status_code == 404

    db_session.refresh(entry)
    assert entry.degree == "BA"


def test_delete_education(client, auth_headers, db_session):
    entry = add_degree(client, auth_headers).json()["data"]["user"]["education"][0]
    add_degree(client, auth_headers, degree="MSc Data Science", year=2021)

    response = client.delete(f"/users/education/{entry['id']}", headers=auth_headers)

    assert response.status_code == 200
    remaining = response.json()["data"]["user"]["education"]
    assert [e["degree"] for e in remaining] == ["MSc Data Science"]
    assert db_session.query(Education).count() == 1


def test_upload_and_delete_resume(client, auth_headers):
    response = client.post("/users/resume", json=resume_payload(), headers=auth_headers)

    assert response.status_code == 200
    resume = response.json()["data"]["user"]["resume"]
    assert resume["originalName"] == "Jane Doe CV.pdf"
    assert resume["size"] == 48213
    assert resume["uploadedAt"]

    response = client.delete("/users/resume", headers=auth_headers)

    assert response.status_code == 200
    assert response.json()["message"] == "Resume deleted successfully"
    assert response.json()["data"]["user"]["resume"] is None


def test_upload_resume_requires_every_field(client, auth_headers):
    payload = resume_payload()
    del payload["mimetype"]

    response = client.post("/users/resume", json=payload, headers=auth_headers)

    assert response.status_code == 400
    assert response.json()["errors"][0]["field"] == "mimetype"


def test_profile_routes_require_authentication(client):
    assert client.get("/users/profile").status_code == 401
    assert client.put("/users/preferences", json={}).status_code == 401
    assert client.delete("/users/resume").status_code == 401
