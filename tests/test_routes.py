import pytest
from pymongo.errors import PyMongoError

from jobportal.services.mongo_service import AccountService, ApplicationService

PASSWORD = "correct-horse"


def post_job(browser, title="Engineer", company="Acme"):
    response = browser.post("/api/jobs", json={
        "title": title, "company": company, "description": "Build things", "location": "Remote"
    })
    assert response.status_code == 201, response.text
    return response.json()["id"]


def apply(browser, job_id, data, filename="cv.pdf", content_type="application/pdf"):
    return browser.post(
        f"/api/jobs/{job_id}/apply",
        files={"resume": (filename, data, content_type)},
    )


def stored_files(upload_dir):
    if not upload_dir.exists():
        return []
    return [p for p in upload_dir.rglob("*") if p.is_file()]


# ============================================================
# END TO END
# ============================================================

def test_seeker_applies_and_employer_sees_applicant(seeker, employer, make_pdf, mongo_db):
    job_id = post_job(employer)

    response = apply(seeker, job_id, make_pdf(2 * 1024 * 1024))
    assert response.status_code == 201, response.text
    assert response.json()["status"] == "Pending"

    mine = seeker.get("/api/applications/mine")
    assert mine.status_code == 200
    entries = mine.json()
    assert len(entries) == 1
    assert entries[0]["job"]["title"] == "Engineer"
    assert entries[0]["job"]["company"] == "Acme"

    roster = employer.get("/api/employer/applicants").json()
    assert roster["has_applicants"] is True
    assert len(roster["jobs"]) == 1
    job = roster["jobs"][0]
    assert job["job_title"] == "Engineer"
    assert [(a["name"], a["email"]) for a in job["applicants"]] == [("Ana", "ana@x.com")]


def test_jobs_are_public(client, employer):
    first = post_job(employer, title="First")
    second = post_job(employer, title="Second")

    listed = client.get("/api/jobs").json()
    assert {job["id"] for job in listed} == {first, second}

    detail = client.get(f"/api/jobs/{first}")
    assert detail.status_code == 200
    assert detail.json()["title"] == "First"


def test_unknown_job_is_not_found(client):
    assert client.get("/api/jobs/000000000000000000000000").status_code == 404
    assert client.get("/api/jobs/not-an-id").json()["error"] == "not_found"


# ============================================================
# APPLICATIONS
# ============================================================

def test_second_application_to_same_job_conflicts(seeker, employer, make_pdf, mongo_db, upload_dir):
    job_id = post_job(employer)

    first = apply(seeker, job_id, make_pdf())
    second = apply(seeker, job_id, make_pdf())

    assert first.status_code == 201
    assert second.status_code == 409
    assert second.json()["error"] == "conflict"
    assert mongo_db["applications"].count_documents({}) == 1
    stored = mongo_db["applications"].find_one()
    assert str(stored["_id"]) == first.json()["id"]
    # the rejected attempt leaves no orphaned resume
    assert len(stored_files(upload_dir)) == 1


def test_non_pdf_resume_is_rejected_before_any_application(seeker, employer, mongo_db, upload_dir):
    job_id = post_job(employer)

    response = apply(seeker, job_id, b"plain text", filename="cv.txt", content_type="text/plain")

    assert response.status_code == 400
    assert response.json()["error"] == "upload_rejected"
    assert mongo_db["applications"].count_documents({}) == 0
    assert stored_files(upload_dir) == []


def test_oversize_resume_is_rejected(seeker, employer, make_pdf, mongo_db):
    job_id = post_job(employer)

    response = apply(seeker, job_id, make_pdf(5 * 1024 * 1024 + 1))

    assert response.status_code == 413
    assert mongo_db["applications"].count_documents({}) == 0


def test_apply_to_missing_job_is_not_found(seeker, make_pdf, upload_dir):
    response = apply(seeker, "000000000000000000000000", make_pdf())

    assert response.status_code == 404
    assert stored_files(upload_dir) == []


def test_my_applications_skip_removed_jobs(seeker, employer, make_pdf, mongo_db):
    kept = post_job(employer, title="Kept")
    removed = post_job(employer, title="Removed")
    apply(seeker, kept, make_pdf())
    apply(seeker, removed, make_pdf())

    mongo_db["jobs"].delete_one({"title": "Removed"})

    entries = seeker.get("/api/applications/mine").json()
    assert [entry["job"]["title"] for entry in entries] == ["Kept"]


# ============================================================
# AUTHORIZATION GATE
# ============================================================

def test_seeker_is_forbidden_from_employer_operations(seeker):
    response = seeker.post("/api/jobs", json={
        "title": "Engineer", "company": "Acme", "description": "Build things"
    })
    assert response.status_code == 403
    assert response.json() == {"detail": "Access denied", "error": "forbidden"}

    assert seeker.get("/api/employer/applicants").status_code == 403


def test_employer_is_forbidden_from_seeker_operations(employer, make_pdf):
    job_id = post_job(employer)

    assert apply(employer, job_id, make_pdf()).status_code == 403
    assert employer.get("/api/applications/mine").status_code == 403


@pytest.mark.parametrize("method, path", [
    ("get", "/api/profile"),
    ("get", "/api/applications/mine"),
    ("get", "/api/employer/applicants"),
])
def test_anonymous_caller_is_unauthorized(client, method, path):
    response = getattr(client, method)(path)
    assert response.status_code == 401
    assert response.json()["detail"] == "Access denied"


# ============================================================
# REGISTRATION / LOGIN
# ============================================================

def test_duplicate_registration_conflicts(client, mongo_db):
    body = {"name": "Ana", "email": "ana@x.com", "password": PASSWORD, "role": "seeker"}

    assert client.post("/api/auth/register", json=body).status_code == 201
    second = client.post("/api/auth/register", json={**body, "name": "Ana Two"})

    assert second.status_code == 409
    assert mongo_db["accounts"].count_documents({"email": "ana@x.com"}) == 1


def test_registration_validates_role(client):
    response = client.post("/api/auth/register", json={
        "name": "Eve", "email": "eve@x.com", "password": PASSWORD, "role": "admin"
    })
    assert response.status_code == 422
    assert response.json()["error"] == "validation"


def test_login_failures_are_indistinguishable(client, seeker):
    unknown = client.post("/api/auth/login", json={"email": "nobody@x.com", "password": PASSWORD})
    wrong = client.post("/api/auth/login", json={"email": "ana@x.com", "password": "not-it"})

    assert unknown.status_code == wrong.status_code == 401
    assert unknown.json() == wrong.json() == {
        "detail": "Invalid email or password", "error": "unauthorized"
    }


def test_auth_status_and_logout(client, seeker):
    assert client.get("/api/auth/status").json() == {"authenticated": False, "user": None}

    status = seeker.get("/api/auth/status").json()
    assert status["authenticated"] is True
    assert status["user"]["email"] == "ana@x.com"
    assert status["user"]["role"] == "seeker"

    assert seeker.post("/api/auth/logout").status_code == 200
    assert seeker.get("/api/auth/status").json()["authenticated"] is False
    assert seeker.get("/api/profile").status_code == 401


def test_logout_revokes_session_server_side(seeker, mongo_db):
    assert mongo_db["sessions"].count_documents({}) == 1
    seeker.post("/api/auth/logout")
    assert mongo_db["sessions"].count_documents({}) == 0


# ============================================================
# PROFILE
# ============================================================

def test_profile_edit_without_avatar_keeps_existing_one(seeker):
    first = seeker.put(
        "/api/profile",
        data={"bio": "Hi"},
        files={"avatar": ("me.png", b"\x89PNG first", "image/png")},
    ).json()
    assert first["avatar_url"].startswith("/uploads/profiles/avatar-")

    second = seeker.put("/api/profile", data={"phone": "555-0100"}).json()

    assert second["avatar_url"] == first["avatar_url"]
    assert second["phone"] == "555-0100"
    assert second["bio"] == "Hi"


def test_profile_edit_with_new_avatar_replaces_reference(seeker, upload_dir):
    first = seeker.put(
        "/api/profile", files={"avatar": ("a.png", b"\x89PNG a", "image/png")}
    ).json()["avatar_url"]
    second = seeker.put(
        "/api/profile", files={"avatar": ("b.jpg", b"\xff\xd8 b", "image/jpeg")}
    ).json()["avatar_url"]

    assert second != first
    assert seeker.get("/api/profile").json()["avatar_url"] == second
    # the old file stays on disk; only the reference moves
    assert len(stored_files(upload_dir)) == 2


def test_non_image_avatar_leaves_profile_untouched(seeker, make_pdf):
    response = seeker.put(
        "/api/profile",
        data={"bio": "Should not be saved"},
        files={"avatar": ("me.pdf", make_pdf(), "application/pdf")},
    )

    assert response.status_code == 400
    profile = seeker.get("/api/profile").json()
    assert profile["bio"] is None
    assert profile["avatar_url"] is None


def test_profile_edit_ignores_other_role_fields(seeker, employer):
    updated = seeker.put("/api/profile", data={
        "skills": "Python", "company_name": "Acme"
    }).json()
    assert updated["skills"] == "Python"
    assert updated["company_name"] is None

    updated = employer.put("/api/profile", data={
        "company_name": "Acme", "experience": "10 years"
    }).json()
    assert updated["company_name"] == "Acme"
    assert updated["experience"] is None
    assert updated["role"] == "employer"


def test_auth_status_sees_profile_edit_without_relogin(seeker):
    seeker.put("/api/profile", data={"name": "Ana Maria"})

    assert seeker.get("/api/auth/status").json()["user"]["name"] == "Ana Maria"


# ============================================================
# INTERNAL FAILURES
# ============================================================

def database_down(*args, **kwargs):
    raise PyMongoError("connection reset")


def test_database_failure_on_apply_is_internal_and_leaves_no_resume(
    seeker, employer, make_pdf, mongo_db, upload_dir, monkeypatch
):
    job_id = post_job(employer)
    monkeypatch.setattr(ApplicationService, "create", database_down)

    response = apply(seeker, job_id, make_pdf())

    assert response.status_code == 500
    assert response.json() == {
        "detail": "Something went wrong. Please try again.", "error": "internal"
    }
    assert mongo_db["applications"].count_documents({}) == 0
    assert stored_files(upload_dir) == []


def test_database_failure_on_profile_edit_leaves_no_avatar(seeker, upload_dir, monkeypatch):
    monkeypatch.setattr(AccountService, "update_profile", database_down)

    response = seeker.put(
        "/api/profile",
        data={"bio": "Hi"},
        files={"avatar": ("me.png", b"\x89PNG", "image/png")},
    )

    assert response.status_code == 500
    assert response.json()["error"] == "internal"
    assert stored_files(upload_dir) == []


def test_login_trims_email_like_registration(client):
    client.post("/api/auth/register", json={
        "name": "Ana", "email": " ana@x.com", "password": PASSWORD, "role": "seeker"
    })

    response = client.post("/api/auth/login", json={"email": " ana@x.com ", "password": PASSWORD})

    assert response.status_code == 200
    assert response.json()["user"]["email"] == "ana@x.com"
