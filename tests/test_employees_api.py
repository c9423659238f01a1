from datetime import date
from unittest.mock import patch

from fastapi import status

from ops_personnel.models.evaluation import Evaluation


def _new_employee(**overrides):
    body = {
        "name": "Nia Newhire",
        "department": "Baggage Handling",
        "role": "employee",
        "email": "nia@skyport.aero",
        "username": "nia",
        "jobTitle": "Baggage Handler",
        "password": "Welcome123!",
    }
    body.update(overrides)
    return body


def test_list_is_filtered_by_role(client, admin, manager, employee, other_employee, auth_headers):
    ids = lambda response: {e["id"] for e in response.json()}

    everyone = client.get("/api/employees", headers=auth_headers(admin))
    assert ids(everyone) == {admin.id, manager.id, employee.id, other_employee.id}

    team = client.get("/api/employees", headers=auth_headers(manager))
    assert ids(team) == {manager.id, employee.id}

    me = client.get("/api/employees", headers=auth_headers(employee))
    assert ids(me) == {employee.id}


def test_list_search(client, admin, manager, other_employee, auth_headers):
    response = client.get("/api/employees", params={"search": "baggage"}, headers=auth_headers(admin))
    assert [e["id"] for e in response.json()] == [other_employee.id]


def test_records_use_camel_case(client, employee, auth_headers):
    record = client.get("/api/employees", headers=auth_headers(employee)).json()[0]
    assert record["overallScore"] == 80
    assert record["currentScore"] == 80
    assert record["hireDate"] == "2020-03-01"
    assert "overall_score" not in record


def test_create_employee_as_admin(client, admin, auth_headers):
    response = client.post("/api/employees", json=_new_employee(), headers=auth_headers(admin))
    assert response.status_code == status.HTTP_201_CREATED
    created = response.json()
    assert created["department"] == "Baggage Handling"
    assert created["overallScore"] == 80

    # the new account can sign in
    login = client.post("/api/auth/login", json={"email": "nia@skyport.aero", "password": "Welcome123!"})
    assert login.status_code == 200
    assert login.json()["user"]["id"] == created["id"]


def test_create_employee_without_password_gets_no_usable_login(client, admin, auth_headers):
    response = client.post("/api/employees", json=_new_employee(password=None), headers=auth_headers(admin))
    assert response.status_code == 201
    login = client.post("/api/auth/login", json={"email": "nia@skyport.aero", "password": "password123"})
    assert login.status_code == 401


def test_create_employee_validation(client, admin, employee, auth_headers):
    headers = auth_headers(admin)
    unknown_dept = client.post("/api/employees", json=_new_employee(department="Catering"), headers=headers)
    assert unknown_dept.status_code == 422
    assert unknown_dept.json()["errors"][0]["code"] == "INVALID_INPUT"

    duplicate = client.post("/api/employees", json=_new_employee(email=employee.email), headers=headers)
    assert duplicate.status_code == 422

    bad_email = client.post("/api/employees", json=_new_employee(email="nia-at-skyport"), headers=headers)
    assert bad_email.status_code == 422


def test_only_admin_creates_employees(client, manager, auth_headers):
    response = client.post("/api/employees", json=_new_employee(), headers=auth_headers(manager))
    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert response.json()["errors"][0]["code"] == "PERMISSION_DENIED"


def test_update_employee(client, admin, employee, auth_headers):
    body = _new_employee(
        name="Erin Employee", department="Cargo Logistics", email=employee.email,
        username=employee.username, password=None, overallScore=77,
    )
    response = client.put(f"/api/employees/{employee.id}", json=body, headers=auth_headers(admin))
    assert response.status_code == 200
    assert response.json()["department"] == "Cargo Logistics"
    assert response.json()["overallScore"] == 77


def test_update_unknown_employee(client, admin, auth_headers):
    response = client.put("/api/employees/nope", json=_new_employee(), headers=auth_headers(admin))
    assert response.status_code == 404


def test_detail_score_follows_latest_evaluation_by_date(client, db_session, manager, employee, auth_headers):
    # newer evaluation stored first
    db_session.add_all([
        Evaluation(employee_id=employee.id, year=2024, date=date(2024, 6, 1), score=91, rating="Exceeds"),
        Evaluation(employee_id=employee.id, year=2023, date=date(2023, 1, 10), score=95, rating="Exceeds"),
    ])
    db_session.commit()

    response = client.get(f"/api/employees/{employee.id}", headers=auth_headers(manager))
    assert response.status_code == 200
    detail = response.json()
    assert detail["employee"]["currentScore"] == 91
    assert detail["employee"]["overallScore"] == 80
    assert [ev["score"] for ev in detail["evaluations"]] == [91, 95]
    assert detail["leaveTotals"] == {}


def test_detail_of_invisible_employee_is_denied(client, manager, other_employee, auth_headers):
    response = client.get(f"/api/employees/{other_employee.id}", headers=auth_headers(manager))
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_detail_of_unknown_employee(client, admin, auth_headers):
    assert client.get("/api/employees/missing", headers=auth_headers(admin)).status_code == 404


def test_delete_employee_removes_login(client, admin, employee, auth_headers):
    employee_id, email = employee.id, employee.email
    response = client.delete(f"/api/employees/{employee_id}", headers=auth_headers(admin))
    assert response.status_code == 200
    assert response.json()["success"] is True
    assert client.get(f"/api/employees/{employee_id}", headers=auth_headers(admin)).status_code == 404
    login = client.post("/api/auth/login", json={"email": email, "password": "Password123!"})
    assert login.status_code == 401


def test_report_is_html(client, manager, employee, auth_headers):
    response = client.get(f"/api/employees/{employee.id}/report", headers=auth_headers(manager))
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    assert "Erin Employee" in response.text


def test_insight_without_api_key_returns_error_text(client, manager, employee, auth_headers):
    response = client.post(f"/api/employees/{employee.id}/insight", headers=auth_headers(manager))
    assert response.status_code == 200
    body = response.json()
    assert body["employeeId"] == employee.id
    assert body["insight"].startswith("ERROR:")


def test_insight_success(client, manager, employee, auth_headers):
    with patch(
        "ops_personnel.services.personnel.insight_ai.generate_performance_insight",
        return_value="Reliable ramp agent. Retention risk: Low.",
    ) as generate:
        response = client.post(f"/api/employees/{employee.id}/insight", headers=auth_headers(manager))
    assert response.json()["insight"] == "Reliable ramp agent. Retention risk: Low."
    bundle = generate.call_args.args[0]
    assert bundle["name"] == "Erin Employee"
    assert bundle["currentScore"] == 80
