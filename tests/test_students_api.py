"""
Tests for the /api/students endpoints.

Covers status codes, response bodies and the error envelope for every
operation, plus the full create/read/update/delete walk-through.
"""

from fastapi.testclient import TestClient

URL = "/api/students"


def error(message: str) -> dict:
    return {"status": "error", "error": message}


class TestCreateStudent:

    def test_create_returns_id(self, client: TestClient, sample_student):
        response = client.post(URL, json=sample_student)
        assert response.status_code == 201
        assert response.json() == {"id": 1}

    def test_ids_increase(self, client: TestClient, sample_student):
        first = client.post(URL, json=sample_student).json()["id"]
        second = client.post(URL, json=sample_student).json()["id"]
        assert second > first

    def test_id_in_body_is_ignored(self, client: TestClient, sample_student):
        response = client.post(URL, json={**sample_student, "id": 99})
        assert response.status_code == 201
        assert response.json() == {"id": 1}

    def test_empty_name_rejected(self, client: TestClient):
        response = client.post(URL, json={"name": "", "email": "a@b.com", "age": 10})
        assert response.status_code == 400
        assert response.json() == error("field name is required")

    def test_zero_age_treated_as_missing(self, client: TestClient):
        response = client.post(URL, json={"name": "A", "email": "a@b.com", "age": 0})
        assert response.status_code == 400
        assert response.json() == error("field age is required")

    def test_all_missing_fields_reported(self, client: TestClient):
        response = client.post(URL, json={})
        assert response.status_code == 400
        assert response.json() == error(
            "field name is required, field email is required, field age is required"
        )

    def test_wrong_type_rejected(self, client: TestClient):
        response = client.post(URL, json={"name": "A", "email": "a@b.com", "age": "35"})
        assert response.status_code == 400
        assert response.json() == error("field age is invalid")

    def test_email_format_not_checked(self, client: TestClient):
        response = client.post(URL, json={"name": "A", "email": "not-an-email", "age": 10})
        assert response.status_code == 201

    def test_empty_body(self, client: TestClient):
        response = client.post(URL, content=b"")
        assert response.status_code == 400
        assert response.json() == error("request body is empty")

    def test_malformed_json(self, client: TestClient):
        response = client.post(
            URL, content=b'{"name": ', headers={"Content-Type": "application/json"}
        )
        assert response.status_code == 400
        body = response.json()
        assert body["status"] == "error"
        assert body["error"].startswith("invalid JSON body")

    def test_non_object_body(self, client: TestClient):
        response = client.post(URL, json=[1, 2, 3])
        assert response.status_code == 400
        assert response.json() == error("request body must be a JSON object")

    def test_nothing_stored_on_failed_validation(self, client: TestClient):
        client.post(URL, json={"name": "", "email": "a@b.com", "age": 10})
        assert client.get(URL).json() == []


class TestGetStudent:

    def test_get_by_id(self, client: TestClient, sample_student):
        student_id = client.post(URL, json=sample_student).json()["id"]
        response = client.get(f"{URL}/{student_id}")
        assert response.status_code == 200
        assert response.json() == {"id": student_id, **sample_student}

    def test_get_unknown_id_is_404(self, client: TestClient):
        response = client.get(f"{URL}/999")
        assert response.status_code == 404
        assert response.json() == error("no student found with id: 999")

    def test_non_integer_id(self, client: TestClient):
        response = client.get(f"{URL}/abc")
        assert response.status_code == 400
        assert response.json() == error("invalid id: must be an integer")


class TestListStudents:

    def test_empty_list(self, client: TestClient):
        response = client.get(URL)
        assert response.status_code == 200
        assert response.json() == []
        assert response.content == b"[]\n"

    def test_list_after_create(self, client: TestClient, sample_student):
        client.post(URL, json=sample_student)
        client.post(URL, json={"name": "B", "email": "b@test.com", "age": 20})
        students = client.get(URL).json()
        assert [s["name"] for s in students] == ["Rakesh", "B"]
        assert set(students[0]) == {"id", "name", "email", "age"}


class TestUpdateStudent:

    def test_update_replaces_fields(self, client: TestClient, sample_student):
        student_id = client.post(URL, json=sample_student).json()["id"]
        new = {"name": "Rakesh Kumar", "email": "new@test.com", "age": 36}

        response = client.put(f"{URL}/{student_id}", json=new)
        assert response.status_code == 200
        assert response.json() == {"id": student_id, **new}
        assert client.get(f"{URL}/{student_id}").json() == {"id": student_id, **new}

    def test_update_unknown_id(self, client: TestClient, sample_student):
        response = client.put(f"{URL}/5", json=sample_student)
        assert response.status_code == 404
        assert response.json() == error("no student found with id: 5")
        assert client.get(URL).json() == []

    def test_update_validates_body(self, client: TestClient, sample_student):
        student_id = client.post(URL, json=sample_student).json()["id"]
        response = client.put(f"{URL}/{student_id}", json={"name": "X", "email": "", "age": 3})
        assert response.status_code == 400
        assert response.json() == error("field email is required")
        assert client.get(f"{URL}/{student_id}").json()["name"] == "Rakesh"

    def test_update_empty_body(self, client: TestClient):
        response = client.put(f"{URL}/1", content=b"")
        assert response.status_code == 400
        assert response.json() == error("request body is empty")

    def test_bad_id_reported_before_body(self, client: TestClient):
        response = client.put(f"{URL}/abc", json={})
        assert response.status_code == 400
        assert response.json() == error("invalid id: must be an integer")


class TestDeleteStudent:

    def test_delete(self, client: TestClient, sample_student):
        student_id = client.post(URL, json=sample_student).json()["id"]
        response = client.delete(f"{URL}/{student_id}")
        assert response.status_code == 200
        assert response.json() == {"status": "deleted"}
        assert client.get(f"{URL}/{student_id}").status_code == 404

    def test_delete_unknown_id_succeeds(self, client: TestClient):
        response = client.delete(f"{URL}/12345")
        assert response.status_code == 200
        assert response.json() == {"status": "deleted"}

    def test_delete_non_integer_id(self, client: TestClient):
        response = client.delete(f"{URL}/x1")
        assert response.status_code == 400
        assert response.json() == error("invalid id: must be an integer")


class TestResponseFormat:

    def test_json_content_type_and_newline(self, client: TestClient, sample_student):
        response = client.post(URL, json=sample_student)
        assert response.headers["content-type"] == "application/json"
        assert response.content == b'{"id":1}\n'

    def test_error_body_ends_with_newline(self, client: TestClient):
        response = client.get(f"{URL}/abc")
        assert response.headers["content-type"] == "application/json"
        assert response.content.endswith(b"\n")

    def test_unknown_route_uses_envelope(self, client: TestClient):
        response = client.get("/api/courses")
        assert response.status_code == 404
        assert response.json() == error("Not Found")

    def test_wrong_method_uses_envelope(self, client: TestClient):
        response = client.patch(f"{URL}/1", json={})
        assert response.status_code == 405
        assert response.json() == error("Method Not Allowed")


def test_full_lifecycle(client: TestClient):
    response = client.post(URL, json={"name": "Rakesh", "email": "rakesh@test.com", "age": 35})
    assert (response.status_code, response.json()) == (201, {"id": 1})

    response = client.get(f"{URL}/1")
    assert response.status_code == 200
    assert response.json() == {"id": 1, "name": "Rakesh", "email": "rakesh@test.com", "age": 35}

    response = client.put(
        f"{URL}/1", json={"name": "Rakesh Kumar", "email": "new@test.com", "age": 36}
    )
    assert response.status_code == 200
    assert response.json() == {"id": 1, "name": "Rakesh Kumar", "email": "new@test.com", "age": 36}

    response = client.delete(f"{URL}/1")
    assert (response.status_code, response.json()) == (200, {"status": "deleted"})

    response = client.get(f"{URL}/1")
    assert response.status_code == 404
    assert response.json()["status"] == "error"


class TestIntegerRange:
    """Values SQLite cannot store as INTEGER are rejected as bad input."""

    HUGE_ID = "99999999999999999999"

    def test_get_huge_id(self, client: TestClient):
        response = client.get(f"{URL}/{self.HUGE_ID}")
        assert response.status_code == 400
        assert response.json() == error("invalid id: must be an integer")

    def test_update_huge_id(self, client: TestClient, sample_student):
        response = client.put(f"{URL}/{self.HUGE_ID}", json=sample_student)
        assert response.status_code == 400
        assert response.json() == error("invalid id: must be an integer")

    def test_delete_huge_id(self, client: TestClient):
        response = client.delete(f"{URL}/{self.HUGE_ID}")
        assert response.status_code == 400
        assert response.json() == error("invalid id: must be an integer")

    def test_largest_id_is_accepted(self, client: TestClient):
        response = client.get(f"{URL}/{2**63 - 1}")
        assert response.status_code == 404

    def test_huge_age(self, client: TestClient):
        response = client.post(URL, json={"name": "A", "email": "a@b.com", "age": 10**20})
        assert response.status_code == 400
        assert response.json() == error("field age is invalid")
        assert client.get(URL).json() == []


class TestBodyContentType:
    """The body is read as JSON whatever Content-Type header comes with it."""

    BODY = b'{"name":"A","email":"a@b.com","age":3}'

    def test_create_with_form_content_type(self, client: TestClient):
        response = client.post(
            URL, content=self.BODY,
            headers={"Content-Type": "application/x-www-form-urlencoded"},
        )
        assert response.status_code == 201
        assert response.json() == {"id": 1}

    def test_update_with_text_content_type(self, client: TestClient, sample_student):
        student_id = client.post(URL, json=sample_student).json()["id"]
        response = client.put(
            f"{URL}/{student_id}", content=self.BODY, headers={"Content-Type": "text/plain"},
        )
        assert response.status_code == 200
        assert response.json() == {"id": student_id, "name": "A", "email": "a@b.com", "age": 3}

    def test_whitespace_body_is_empty(self, client: TestClient):
        response = client.post(URL, content=b"  \n")
        assert response.status_code == 400
        assert response.json() == error("request body is empty")

    def test_validation_still_applies(self, client: TestClient):
        response = client.post(
            URL, content=b'{"name":"","email":"a@b.com","age":3}',
            headers={"Content-Type": "text/plain"},
        )
        assert response.status_code == 400
        assert response.json() == error("field name is required")
