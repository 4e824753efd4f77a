# File: tests/test_employees_api.py

"""
Employee CRUD over HTTP, including list query composition and the
validation envelope.
"""

import math

from conftest import make_employee


def _create(client, auth_headers, **overrides):
    resp = client.post("/api/employees", json=make_employee(**overrides), headers=auth_headers)
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]


# -----------------------------
# Create
# -----------------------------

def test_create_employee(client, auth_headers):
    resp = client.post("/api/employees", json=make_employee(), headers=auth_headers)
    assert resp.status_code == 201
    body = resp.json()
    assert body["success"] is True
    assert body["message"] == "Employee created successfully"
    data = body["data"]
    assert data["id"]
    assert data["name"] == "John Doe"
    assert data["salary"] == 50000
    assert "createdAt" in data and "updatedAt" in data


def test_create_normalizes_email_and_name(client, auth_headers):
    data = _create(client, auth_headers, name="  Jane  ", email="Jane.Roe@ACME.io")
    assert data["name"] == "Jane"
    assert data["email"] == "jane.roe@acme.io"


def test_create_accepts_numeric_string_salary(client, auth_headers):
    data = _create(client, auth_headers, salary="1200.50")
    assert data["salary"] == 1200.5


def test_negative_salary_reports_salary_detail(client, auth_headers):
    resp = client.post("/api/employees", json=make_employee(salary=-1), headers=auth_headers)
    assert resp.status_code == 400
    error = resp.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert error["message"] == "Validation failed"
    salary = [d for d in error["details"] if d["field"] == "salary"]
    assert salary == [{"field": "salary", "message": "Salary must be positive.", "value": -1}]


def test_bad_mobile_reports_mobile_detail(client, auth_headers):
    for mobile in ("123", "12345678901", "abcdefghij", "98765 4321"):
        resp = client.post("/api/employees", json=make_employee(mobile=mobile), headers=auth_headers)
        assert resp.status_code == 400, mobile
        fields = [d["field"] for d in resp.json()["error"]["details"]]
        assert fields == ["mobile"], mobile


def test_all_invalid_fields_are_collected(client, auth_headers):
    payload = {
        "name": "",
        "mobile": "123",
        "email": "invalid-email",
        "position": "",
        "salary": -1000,
    }
    resp = client.post("/api/employees", json=payload, headers=auth_headers)
    assert resp.status_code == 400
    details = resp.json()["error"]["details"]
    fields = {d["field"] for d in details}
    assert fields == {"name", "mobile", "email", "position", "salary"}
    assert len(details) >= 5
    by_field = {d["field"]: d for d in details}
    assert by_field["mobile"]["message"] == "Mobile must be 10 digits."
    assert by_field["mobile"]["value"] == "123"
    assert by_field["email"]["message"] == "Valid email is required."


def test_missing_fields_are_reported(client, auth_headers):
    resp = client.post("/api/employees", json={}, headers=auth_headers)
    assert resp.status_code == 400
    messages = {d["field"]: d["message"] for d in resp.json()["error"]["details"]}
    assert messages == {
        "name": "Name is required.",
        "mobile": "Mobile is required.",
        "email": "Valid email is required.",
        "position": "Position is required.",
        "salary": "Salary must be a number.",
    }


def test_non_numeric_salary(client, auth_headers):
    resp = client.post("/api/employees", json=make_employee(salary="lots"), headers=auth_headers)
    assert resp.status_code == 400
    assert resp.json()["error"]["details"][0]["message"] == "Salary must be a number."


def test_mobile_rejects_trailing_newline_and_non_ascii_digits(client, auth_headers):
    for mobile in ("9876543210\n", "\u0660" * 10):
        resp = client.post("/api/employees", json=make_employee(mobile=mobile), headers=auth_headers)
        assert resp.status_code == 400, repr(mobile)
        details = resp.json()["error"]["details"]
        assert [d["field"] for d in details] == ["mobile"]
        assert details[0]["message"] == "Mobile must be 10 digits."


def test_non_finite_salary_is_rejected(client, auth_headers):
    body = (
        '{"name": "John Doe", "mobile": "9876543210", "email": "john.doe@acme.io", '
        '"position": "Engineer", "salary": %s}'
    )
    for literal in ("1e999", "-1e999", "NaN", "Infinity"):
        resp = client.post(
            "/api/employees",
            content=body % literal,
            headers={**auth_headers, "Content-Type": "application/json"},
        )
        assert resp.status_code == 400, literal
        error = resp.json()["error"]
        assert error["code"] == "VALIDATION_ERROR"
        assert [d["field"] for d in error["details"]] == ["salary"]
        assert error["details"][0]["message"] == "Salary must be a number."

    assert client.get("/api/employees", headers=auth_headers).json()["total"] == 0


def test_duplicate_email_is_a_validation_error(client, auth_headers):
    _create(client, auth_headers)
    resp = client.post("/api/employees", json=make_employee(name="Other"), headers=auth_headers)
    assert resp.status_code == 400
    error = resp.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert error["message"] == "email already exists. Please use a different email."


def test_malformed_json_body(client, auth_headers):
    resp = client.post(
        "/api/employees",
        content="{not json",
        headers={**auth_headers, "Content-Type": "application/json"},
    )
    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "VALIDATION_ERROR"


# -----------------------------
# List
# -----------------------------

def test_create_then_search_round_trip(client, auth_headers):
    created = _create(client, auth_headers, name="Zelda Quartz", email="zelda@acme.io")
    _create(client, auth_headers, name="Mark", email="mark@acme.io")

    resp = client.get("/api/employees", params={"search": "zelda quartz"}, headers=auth_headers)
    assert resp.status_code == 200
    body = resp.json()
    assert [e["id"] for e in body["data"]] == [created["id"]]
    assert body["total"] == 1


def test_search_matches_email_and_position(client, auth_headers):
    _create(client, auth_headers, name="A", email="a@finance.io", position="Clerk")
    _create(client, auth_headers, name="B", email="b@acme.io", position="Finance Lead")
    _create(client, auth_headers, name="C", email="c@acme.io", position="Engineer")

    resp = client.get("/api/employees", params={"search": "FINANCE"}, headers=auth_headers)
    names = sorted(e["name"] for e in resp.json()["data"])
    assert names == ["A", "B"]


def test_search_treats_wildcards_literally(client, auth_headers):
    _create(client, auth_headers, name="Percy", email="percy@acme.io")
    resp = client.get("/api/employees", params={"search": "%"}, headers=auth_headers)
    assert resp.json()["total"] == 0


def test_sort_by_salary_descending(client, auth_headers):
    for i, salary in enumerate((300, 100, 200)):
        _create(client, auth_headers, name=f"E{i}", email=f"e{i}@acme.io", salary=salary)

    resp = client.get("/api/employees", params={"sort": "salary"}, headers=auth_headers)
    assert [e["salary"] for e in resp.json()["data"]] == [300, 200, 100]


def test_sort_by_name_is_case_insensitive(client, auth_headers):
    for i, name in enumerate(("bravo", "Alpha", "charlie")):
        _create(client, auth_headers, name=name, email=f"n{i}@acme.io")

    resp = client.get("/api/employees", params={"sort": "name"}, headers=auth_headers)
    assert [e["name"] for e in resp.json()["data"]] == ["Alpha", "bravo", "charlie"]


def test_sort_by_other_field_ascending(client, auth_headers):
    for i, position in enumerate(("tester", "Architect", "manager")):
        _create(client, auth_headers, name=f"P{i}", email=f"p{i}@acme.io", position=position)

    resp = client.get("/api/employees", params={"sort": "position"}, headers=auth_headers)
    assert [e["position"] for e in resp.json()["data"]] == ["Architect", "manager", "tester"]


def test_sort_by_unknown_field_keeps_default_order(client, auth_headers):
    ids = [_create(client, auth_headers, name=f"U{i}", email=f"u{i}@acme.io")["id"] for i in range(3)]
    resp = client.get("/api/employees", params={"sort": "nonexistent"}, headers=auth_headers)
    assert resp.status_code == 200
    assert [e["id"] for e in resp.json()["data"]] == ids


def test_pagination_law(client, auth_headers):
    total = 12
    for i in range(total):
        _create(client, auth_headers, name=f"Emp {i:02d}", email=f"emp{i}@acme.io")

    limit = 5
    resp = client.get("/api/employees", params={"page": 1, "limit": limit}, headers=auth_headers)
    body = resp.json()
    assert body["total"] == total
    assert body["page"] == 1
    assert body["totalPages"] == math.ceil(total / limit)
    assert len(body["data"]) == limit

    last = client.get("/api/employees", params={"page": 3, "limit": limit}, headers=auth_headers).json()
    assert len(last["data"]) == total - 2 * limit

    beyond = client.get("/api/employees", params={"page": 4, "limit": limit}, headers=auth_headers).json()
    assert beyond["data"] == []
    assert beyond["total"] == total


def test_default_page_size_is_five(client, auth_headers):
    for i in range(7):
        _create(client, auth_headers, name=f"D{i}", email=f"d{i}@acme.io")
    body = client.get("/api/employees", headers=auth_headers).json()
    assert len(body["data"]) == 5
    assert body["totalPages"] == 2


def test_empty_collection(client, auth_headers):
    body = client.get("/api/employees", headers=auth_headers).json()
    assert body == {"success": True, "data": [], "total": 0, "page": 1, "totalPages": 0}


def test_invalid_page_is_a_validation_error(client, auth_headers):
    resp = client.get("/api/employees", params={"page": 0}, headers=auth_headers)
    assert resp.status_code == 400
    assert resp.json()["error"]["details"][0]["field"] == "page"



def test_oversized_limit_is_a_validation_error(client, auth_headers):
    for limit in ("101", "100000000000000000000"):
        resp = client.get("/api/employees", params={"limit": limit}, headers=auth_headers)
        assert resp.status_code == 400, limit
        error = resp.json()["error"]
        assert error["code"] == "VALIDATION_ERROR"
        assert error["details"][0]["field"] == "limit"


def test_oversized_page_is_a_validation_error(client, auth_headers):
    resp = client.get("/api/employees", params={"page": 2**31}, headers=auth_headers)
    assert resp.status_code == 400
    assert resp.json()["error"]["details"][0]["field"] == "page"


def test_largest_allowed_page_and_limit(client, auth_headers):
    _create(client, auth_headers)
    resp = client.get(
        "/api/employees", params={"page": 2**31 - 1, "limit": 100}, headers=auth_headers
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["data"] == []
    assert body["total"] == 1

# -----------------------------
# Update / Delete
# -----------------------------

def test_update_employee(client, auth_headers):
    created = _create(client, auth_headers)
    resp = client.put(
        f"/api/employees/{created['id']}",
        json=make_employee(position="Manager", salary=75000),
        headers=auth_headers,
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["message"] == "Employee updated successfully"
    assert body["data"]["position"] == "Manager"
    assert body["data"]["salary"] == 75000


def test_update_validates_like_create(client, auth_headers):
    created = _create(client, auth_headers)
    resp = client.put(
        f"/api/employees/{created['id']}",
        json=make_employee(mobile="12"),
        headers=auth_headers,
    )
    assert resp.status_code == 400
    assert resp.json()["error"]["details"][0]["field"] == "mobile"


def test_update_missing_employee(client, auth_headers):
    resp = client.put("/api/employees/9999", json=make_employee(), headers=auth_headers)
    assert resp.status_code == 404
    assert resp.json()["error"] == {"message": "Employee not found", "code": "NOT_FOUND"}


def test_delete_is_idempotently_not_found(client, auth_headers):
    created = _create(client, auth_headers)
    url = f"/api/employees/{created['id']}"

    first = client.delete(url, headers=auth_headers)
    assert first.status_code == 200
    assert first.json() == {"success": True, "message": "Employee deleted successfully"}

    for _ in range(2):
        again = client.delete(url, headers=auth_headers)
        assert again.status_code == 404
        assert again.json()["error"]["code"] == "NOT_FOUND"


def test_malformed_id(client, auth_headers):
    resp = client.delete("/api/employees/not-an-id", headers=auth_headers)
    assert resp.status_code == 400
    assert resp.json()["error"] == {"message": "Invalid ID format", "code": "VALIDATION_ERROR"}
