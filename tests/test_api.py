import io

from conftest import PASSWORD, bearer


def test_health(client):
    res = client.get("/api/health")
    assert res.status_code == 200
    assert res.get_json() == {"status": "ok", "service": "ResoVista Backend"}


def test_signup_signin_profile(client):
    res = client.post(
        "/api/auth/signup",
        json={"email": "new@example.com", "password": PASSWORD, "name": "New", "role": "student"},
    )
    assert res.status_code == 200
    assert res.get_json()["user"]["role"] == "student"

    res = client.post("/api/auth/signin", json={"email": "new@example.com", "password": PASSWORD})
    token = res.get_json()["access_token"]

    res = client.put("/api/auth/profile", json={"phone": "555"}, headers={"Authorization": f"Bearer {token}"})
    assert res.get_json()["profile"]["phone"] == "555"

    res = client.get("/api/auth/profile", headers={"Authorization": f"Bearer {token}"})
    assert res.get_json()["user"]["email"] == "new@example.com"


def test_errors_are_flat_json(client, container, student):
    assert client.get("/api/todos").status_code == 401
    assert client.get("/api/todos").get_json() == {"error": "Unauthorized"}

    res = client.post("/api/auth/signup", json={"email": "x@example.com"})
    assert res.status_code == 400
    assert res.get_json() == {"error": "Email, password, name, and role are required"}

    res = client.get("/api/does-not-exist")
    assert res.status_code == 404
    assert "error" in res.get_json()

    res = client.post("/api/todos/create", data="[1, 2]", content_type="application/json",
                      headers=bearer(container, "student@example.com"))
    assert res.status_code == 400


def test_student_forbidden_from_marking_attendance(client, container, student):
    res = client.post(
        "/api/attendance/mark",
        json={"classId": "c1", "studentId": student.id, "status": "present", "date": "2024-01-10"},
        headers=bearer(container, "student@example.com"),
    )
    assert res.status_code == 403


def test_attendance_mark_list_and_export(client, container, teacher, student):
    headers = bearer(container, "teacher@example.com")
    res = client.post(
        "/api/attendance/mark",
        json={"classId": "c1", "studentId": student.id, "status": "present", "date": "2024-01-10"},
        headers=headers,
    )
    assert res.get_json()["record"]["status"] == "present"

    res = client.get("/api/attendance/c1", headers=headers)
    assert len(res.get_json()["records"]) == 1

    res = client.get("/api/attendance/c1/export", headers=headers)
    assert res.mimetype == "text/csv"
    body = res.data.decode("utf-8-sig").splitlines()
    assert body[0] == "date,class_id,student_id,status,marked_by,timestamp"
    assert body[1].startswith(f"2024-01-10,c1,{student.id},present")


def test_exam_proctoring_over_http(client, container, teacher, student):
    res = client.post(
        "/api/exams/create",
        json={"title": "Quiz", "questions": [{"id": "q1", "correctAnswer": "4"}]},
        headers=bearer(container, "teacher@example.com"),
    )
    exam_id = res.get_json()["exam"]["id"]

    headers = bearer(container, "student@example.com")
    assert client.post(f"/api/exams/{exam_id}/start", headers=headers).status_code == 200
    actions = [
        client.post(f"/api/exams/{exam_id}/proctor/visibility", json={"hidden": True, "answers": {"q1": "4"}},
                    headers=headers).get_json()
        for _ in range(3)
    ]
    assert [a["action"] for a in actions] == ["warn", "warn", "auto_submit"]
    assert actions[-1]["submission"]["submitReason"] == "tab_switch_limit"

    res = client.post(f"/api/exams/{exam_id}/submit", json={"answers": {}, "reason": "tab_switch_limit"}, headers=headers)
    assert res.status_code == 400

    res = client.get(f"/api/exams/{exam_id}/results/{student.id}", headers=headers)
    assert res.get_json()["submission"]["percentage"] == 100.0


def test_students_do_not_see_answer_key(client, container, teacher, student):
    res = client.post(
        "/api/exams/create",
        json={"title": "Quiz", "questions": [{"id": "q1", "text": "2+2?", "correctAnswer": "4"}]},
        headers=bearer(container, "teacher@example.com"),
    )
    exam_id = res.get_json()["exam"]["id"]

    headers = bearer(container, "student@example.com")
    listed = client.get("/api/exams", headers=headers).get_json()["exams"][0]
    single = client.get(f"/api/exams/{exam_id}", headers=headers).get_json()["exam"]
    for view in (listed, single):
        assert view["questions"] == [{"id": "q1", "text": "2+2?"}]

    staff = client.get(f"/api/exams/{exam_id}", headers=bearer(container, "teacher@example.com")).get_json()
    assert staff["exam"]["questions"][0]["correctAnswer"] == "4"
    assert container.exam_service.get(exam_id).questions[0]["correctAnswer"] == "4"


def test_visibility_hidden_flag_must_be_boolean(client, container, teacher, student):
    res = client.post(
        "/api/exams/create",
        json={"title": "Quiz", "questions": [{"id": "q1", "correctAnswer": "4"}]},
        headers=bearer(container, "teacher@example.com"),
    )
    exam_id = res.get_json()["exam"]["id"]
    headers = bearer(container, "student@example.com")
    client.post(f"/api/exams/{exam_id}/start", headers=headers)

    res = client.post(f"/api/exams/{exam_id}/proctor/visibility", json={"hidden": "false"}, headers=headers)
    assert res.status_code == 400
    assert res.get_json() == {"error": "hidden must be a boolean"}

    res = client.post("/api/live-classes/c1/proctor/visibility", json={"hidden": "false"}, headers=headers)
    assert res.status_code == 400

    res = client.post(f"/api/exams/{exam_id}/proctor/visibility", json={"hidden": False}, headers=headers)
    assert res.get_json()["action"] == "none"
    assert res.get_json()["count"] == 0

    res = client.post(f"/api/exams/{exam_id}/proctor/visibility", json={}, headers=headers)
    assert res.get_json()["action"] == "warn"


def test_submit_over_http_ends_proctoring(client, container, teacher, student):
    res = client.post(
        "/api/exams/create",
        json={"title": "Quiz", "questions": [{"id": "q1", "correctAnswer": "4"}]},
        headers=bearer(container, "teacher@example.com"),
    )
    exam_id = res.get_json()["exam"]["id"]
    headers = bearer(container, "student@example.com")
    client.post(f"/api/exams/{exam_id}/start", headers=headers)
    client.post(f"/api/exams/{exam_id}/submit", json={"answers": {"q1": "4"}}, headers=headers)

    actions = [
        client.post(f"/api/exams/{exam_id}/proctor/visibility", json={"hidden": True, "answers": {}},
                    headers=headers).get_json()["action"]
        for _ in range(3)
    ]
    assert actions == ["none"] * 3

    res = client.get(f"/api/exams/{exam_id}/results/{student.id}", headers=headers)
    assert res.get_json()["submission"]["percentage"] == 100.0
    assert res.get_json()["submission"]["submitReason"] == "manual"


def test_signup_with_numeric_password_is_rejected(client):
    res = client.post(
        "/api/auth/signup",
        json={"email": "n@example.com", "password": 1234567, "name": "N", "role": "student"},
    )
    assert res.status_code == 400
    assert "at least 6" in res.get_json()["error"]


def test_document_upload_download_delete(client, container, student):
    headers = bearer(container, "student@example.com")

    res = client.post("/api/documents/upload", data={"title": "t"}, headers=headers,
                      content_type="multipart/form-data")
    assert res.status_code == 400
    assert res.get_json() == {"error": "No file provided"}

    res = client.post(
        "/api/documents/upload",
        data={"file": (io.BytesIO(b"notes"), "notes.txt"), "title": "Notes", "category": "physics"},
        headers=headers,
        content_type="multipart/form-data",
    )
    document = res.get_json()["document"]
    assert document["fileName"] == "notes.txt"
    assert document["category"] == "physics"

    res = client.get(document["url"])
    assert res.status_code == 200
    assert res.data == b"notes"
    res.close()

    assert client.delete(f"/api/documents/{document['id']}", headers=headers).get_json() == {"success": True}
    assert client.get(document["url"]).status_code == 404
    assert client.get("/api/documents", headers=headers).get_json()["documents"] == []


def test_certificate_qr_and_public_verify(client, container, teacher, student):
    res = client.post(
        "/api/certificates/issue",
        json={"studentId": student.id, "labName": "Optics", "score": 90, "completionDate": "2024-01-09"},
        headers=bearer(container, "teacher@example.com"),
    )
    certificate = res.get_json()["certificate"]

    res = client.get(f"/api/certificates/verify/{certificate['certificateNumber']}")
    assert res.get_json()["valid"] is True

    res = client.get(f"/api/certificates/{certificate['id']}/qr", headers=bearer(container, "student@example.com"))
    assert res.mimetype == "image/png"
    res.close()


def test_chat_and_analytics_routes(client, container, teacher, student):
    student_headers = bearer(container, "student@example.com")
    client.post("/api/chat/send", json={"recipientId": teacher.id, "message": "hi"}, headers=student_headers)

    res = client.get(f"/api/chat/{student.id}", headers=bearer(container, "teacher@example.com"))
    assert [m["message"] for m in res.get_json()["messages"]] == ["hi"]

    res = client.get(f"/api/analytics/student/{student.id}", headers=student_headers)
    assert res.get_json()["analytics"]["totalMarks"] == 0

    assert client.get("/api/analytics/class/c1", headers=student_headers).status_code == 403


def test_cors_headers(client):
    res = client.get("/api/health", headers={"Origin": "http://localhost:3000"})
    assert res.headers.get("Access-Control-Allow-Origin") in ("*", "http://localhost:3000")
