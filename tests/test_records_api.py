from fastapi import status


def test_manager_adds_evaluation_and_score_updates(client, manager, employee, auth_headers):
    headers = auth_headers(manager)
    response = client.post(
        f"/api/employees/{employee.id}/evaluations",
        json={"year": 2024, "score": 93, "rating": "Exceeds", "summary": "Fast turnarounds", "date": "2024-11-02"},
        headers=headers,
    )
    assert response.status_code == status.HTTP_201_CREATED
    created = response.json()
    assert created["employeeId"] == employee.id
    assert created["score"] == 93

    listed = client.get(f"/api/employees/{employee.id}/evaluations", headers=headers).json()
    assert [ev["id"] for ev in listed] == [created["id"]]

    detail = client.get(f"/api/employees/{employee.id}", headers=headers).json()
    assert detail["employee"]["currentScore"] == 93


def test_invalid_evaluation_score(client, manager, employee, auth_headers):
    response = client.post(
        f"/api/employees/{employee.id}/evaluations",
        json={"year": 2024, "score": 150, "rating": "Exceeds"},
        headers=auth_headers(manager),
    )
    assert response.status_code == 422
    assert response.json()["errors"][0]["code"] == "INVALID_INPUT"
    assert client.get(f"/api/employees/{employee.id}/evaluations", headers=auth_headers(manager)).json() == []


def test_work_issue_is_signed_by_the_actor(client, manager, employee, auth_headers):
    response = client.post(
        f"/api/employees/{employee.id}/work-issues",
        json={"title": "Missed briefing", "text": "Arrived after the 05:30 shift briefing"},
        headers=auth_headers(manager),
    )
    assert response.status_code == 201
    note = response.json()
    assert note["authorId"] == manager.id
    assert note["authorName"] == "Morgan Manager"


def test_attendance_half_day_rule(client, manager, employee, auth_headers):
    headers = auth_headers(manager)
    url = f"/api/employees/{employee.id}/attendance"
    ok = client.post(url, json={"date": "2024-08-01", "type": "sick", "duration": 0.5}, headers=headers)
    assert ok.status_code == 201
    bad = client.post(url, json={"date": "2024-08-02", "type": "sick", "duration": 0.3}, headers=headers)
    assert bad.status_code == 422

    detail = client.get(f"/api/employees/{employee.id}", headers=headers).json()
    assert detail["leaveTotals"] == {"sick": 0.5}


def test_behaviour_issue_counts_toward_team_stats(client, manager, employee, auth_headers):
    headers = auth_headers(manager)
    response = client.post(
        f"/api/employees/{employee.id}/behaviour-issues",
        json={"date": "2024-09-10", "description": "Argued with a crew chief", "status": "open",
              "actionPlan": "Conflict training"},
        headers=headers,
    )
    assert response.status_code == 201
    assert response.json()["actionPlan"] == "Conflict training"

    summary = client.get("/api/dashboard/summary", headers=headers).json()
    assert summary["teamStats"]["openObservations"] == 1


def test_manager_cannot_record_outside_department(client, manager, other_employee, auth_headers):
    response = client.post(
        f"/api/employees/{other_employee.id}/work-issues",
        json={"title": "x", "text": "y"},
        headers=auth_headers(manager),
    )
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_employee_cannot_add_records(client, employee, auth_headers):
    response = client.post(
        f"/api/employees/{employee.id}/evaluations",
        json={"year": 2024, "score": 99, "rating": "Exceeds"},
        headers=auth_headers(employee),
    )
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_employee_reads_own_records_only(client, employee, other_employee, auth_headers):
    headers = auth_headers(employee)
    assert client.get(f"/api/employees/{employee.id}/attendance", headers=headers).status_code == 200
    assert client.get(f"/api/employees/{other_employee.id}/attendance", headers=headers).status_code == 403


def test_records_for_unknown_employee(client, admin, auth_headers):
    response = client.post(
        "/api/employees/ghost/evaluations",
        json={"year": 2024, "score": 80, "rating": "Meets"},
        headers=auth_headers(admin),
    )
    assert response.status_code == 404
