from ptj.models import ApplicationStatus, JobPostStatus, RoleName


def _status_ids(client):
    response = client.get("/api/applications/statuses")
    assert response.status_code == 200
    return {item["name"]: item["id"] for item in response.json()["data"]}


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_statuses_are_seeded_in_order(client):
    ids = _status_ids(client)
    assert list(ids) == [status.value for status in ApplicationStatus]
    assert list(ids.values()) == list(range(1, 10))


def test_company_registration_flow(client, make_user, admin_user, auth_headers):
    user = make_user()

    response = client.post(
        "/api/company-requests",
        json={"name": "Acme", "tax_code": "123"},
        headers=auth_headers(user),
    )
    assert response.status_code == 201
    request = response.json()["data"]
    assert request["status"] == "Pending"

    response = client.get("/api/company-requests/pending", headers=auth_headers(admin_user))
    assert response.status_code == 200
    page = response.json()["data"]
    assert page["total_count"] == 1
    assert page["items"][0]["requester_email"] == user.email

    response = client.post(
        "/api/company-requests/approve",
        json={"request_id": request["id"]},
        headers=auth_headers(admin_user),
    )
    assert response.status_code == 200
    company = response.json()["data"]
    assert company["owner_id"] == user.id

    response = client.get(f"/api/company-requests/{request['id']}", headers=auth_headers(user))
    body = response.json()["data"]
    assert body["status"] == "Approved"
    assert body["approved_company_id"] == company["id"]

    response = client.get("/api/auth/me", headers=auth_headers(user))
    assert RoleName.EMPLOYER in response.json()["data"]["role_names"]

    response = client.post(
        "/api/company-requests/approve",
        json={"request_id": request["id"]},
        headers=auth_headers(admin_user),
    )
    assert response.status_code == 409
    assert response.json()["success"] is False


def test_non_admin_cannot_review_requests(client, make_user, make_request, auth_headers):
    user = make_user()
    request = make_request(user)

    response = client.post(
        "/api/company-requests/reject",
        json={"request_id": request.id, "rejection_reason": "Looks suspicious to me"},
        headers=auth_headers(user),
    )
    assert response.status_code == 403
    assert response.json() == {"success": False, "message": "Insufficient permissions", "errors": []}


def test_reject_with_short_reason_is_bad_request(client, make_user, make_request, admin_user, auth_headers):
    request = make_request(make_user())
    response = client.post(
        "/api/company-requests/reject",
        json={"request_id": request.id, "rejection_reason": "no"},
        headers=auth_headers(admin_user),
    )
    assert response.status_code == 400


def test_job_post_and_application_lifecycle(client, make_user, make_company, make_profile, admin_user, auth_headers):
    employer = make_user(RoleName.EMPLOYER)
    make_company(employer, name="Campus Cafe")
    student = make_user(RoleName.STUDENT)
    make_profile(student)

    response = client.post(
        "/api/job-posts",
        json={
            "title": "Weekend barista",
            "description": "Serve coffee on weekends",
            "salary_min": "15",
            "salary_max": "20",
            "shifts": [{"day_of_week": 5, "start_time": "08:00:00", "end_time": "14:00:00"}],
            "required_skills": ["Customer service", "Customer service", "Latte art"],
        },
        headers=auth_headers(employer),
    )
    assert response.status_code == 201
    job = response.json()["data"]
    assert job["status"] == JobPostStatus.PENDING.value
    assert job["company_name"] == "Campus Cafe"
    assert job["required_skills"] == ["Customer service", "Latte art"]
    assert len(job["shifts"]) == 1

    response = client.post("/api/applications", json={"job_post_id": job["id"]}, headers=auth_headers(student))
    assert response.status_code == 400

    response = client.patch(
        f"/api/admin/job-posts/{job['id']}/status",
        json={"status": "Active"},
        headers=auth_headers(admin_user),
    )
    assert response.status_code == 200

    response = client.get("/api/job-posts/search", params={"search_term": "barista"})
    assert response.json()["data"]["total_count"] == 1

    response = client.post(
        "/api/applications",
        json={"job_post_id": job["id"], "cover_letter": "I love coffee"},
        headers=auth_headers(student),
    )
    assert response.status_code == 201
    application = response.json()["data"]
    assert application["status_name"] == "Pending"

    response = client.post("/api/applications", json={"job_post_id": job["id"]}, headers=auth_headers(student))
    assert response.status_code == 409

    ids = _status_ids(client)
    response = client.patch(
        f"/api/applications/{application['id']}/status",
        json={"status_id": ids["Interviewing"], "row_version": application["row_version"]},
        headers=auth_headers(employer),
    )
    assert response.status_code == 200
    updated = response.json()["data"]

    response = client.patch(
        f"/api/applications/{application['id']}/status",
        json={"status_id": ids["Accepted"], "row_version": updated["row_version"]},
        headers=auth_headers(employer),
    )
    assert response.status_code == 200
    assert response.json()["data"]["status_name"] == "Accepted"

    response = client.get(f"/api/applications/{application['id']}/history", headers=auth_headers(student))
    history = response.json()["data"]
    assert [(row["from_status_name"], row["to_status_name"]) for row in history] == [
        ("Pending", "Interviewing"),
        ("Interviewing", "Accepted"),
    ]

    response = client.post(f"/api/applications/{application['id']}/withdraw", headers=auth_headers(student))
    assert response.status_code == 409

    response = client.get("/api/applications/me/stats", headers=auth_headers(student))
    stats = response.json()["data"]
    assert stats["total"] == 1
    assert stats["by_status"]["Accepted"] == 1

    response = client.get(f"/api/job-posts/{job['id']}/applications", headers=auth_headers(employer))
    assert response.json()["data"]["total_count"] == 1


def test_stale_row_version_over_http_conflicts(
    client, make_user, make_company, make_job, make_profile, auth_headers
):
    employer = make_user(RoleName.EMPLOYER)
    job = make_job(make_company(employer))
    student = make_user(RoleName.STUDENT)
    make_profile(student)
    application = client.post(
        "/api/applications", json={"job_post_id": job.id}, headers=auth_headers(student)
    ).json()["data"]
    ids = _status_ids(client)

    first = client.patch(
        f"/api/applications/{application['id']}/status",
        json={"status_id": ids["Reviewing"], "row_version": application["row_version"]},
        headers=auth_headers(employer),
    )
    assert first.status_code == 200
    second = client.patch(
        f"/api/applications/{application['id']}/status",
        json={"status_id": ids["Shortlisted"], "row_version": application["row_version"]},
        headers=auth_headers(employer),
    )
    assert second.status_code == 409


def test_student_cannot_view_someone_elses_application(
    client, make_user, make_company, make_job, make_profile, auth_headers
):
    job = make_job(make_company(make_user(RoleName.EMPLOYER)))
    owner = make_user(RoleName.STUDENT)
    make_profile(owner)
    other = make_user(RoleName.STUDENT)
    application = client.post(
        "/api/applications", json={"job_post_id": job.id}, headers=auth_headers(owner)
    ).json()["data"]

    response = client.get(f"/api/applications/{application['id']}", headers=auth_headers(other))
    assert response.status_code == 403


def test_unknown_application_is_not_found(client, make_user, auth_headers):
    response = client.get("/api/applications/999", headers=auth_headers(make_user()))
    assert response.status_code == 404
    assert response.json() == {"success": False, "message": "Application not found", "errors": []}
