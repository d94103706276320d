def _request(client, headers):
    response = client.post("/requests", json={"type": "Equipment", "items": [{"name": "Laptop", "quantity": 1}]}, headers=headers)
    assert response.status_code == 200, response.text
    return response.json()


def test_admin_creates_and_lists_workflows(client, admin, user):
    payload = {"employee_id": user.employee_id, "type": "Termination", "details": "Contract ends"}
    response = client.post("/workflows", json=payload, headers=admin.headers)
    assert response.status_code == 200, response.text
    assert response.json()["status"] == "Pending"

    response = client.get("/workflows", headers=admin.headers)
    assert response.status_code == 200
    assert "Termination" in [w["type"] for w in response.json()]


def test_workflow_for_unknown_employee(client, admin):
    response = client.post("/workflows", json={"employee_id": 999, "type": "Onboarding"}, headers=admin.headers)
    assert response.status_code == 404
    assert response.json()["message"] == "Employee not found"


def test_users_cannot_list_or_create(client, user):
    assert client.get("/workflows", headers=user.headers).status_code == 401
    response = client.post("/workflows", json={"employee_id": user.employee_id, "type": "Onboarding"}, headers=user.headers)
    assert response.status_code == 401


def test_initiate_onboarding(client, admin, user):
    response = client.post("/workflows/onboarding", json={"employee_id": user.employee_id}, headers=admin.headers)
    assert response.status_code == 200
    data = response.json()
    assert data["type"] == "Onboarding"
    assert data["status"] == "Pending"
    assert data["details"] == "Onboarding started for employee EMP-001"


def test_employee_history_visibility(client, admin, user, other_user):
    response = client.get(f"/workflows/employee/{user.employee_id}", headers=user.headers)
    assert response.status_code == 200
    assert [w["type"] for w in response.json()] == ["Onboarding"]

    assert client.get(f"/workflows/employee/{user.employee_id}", headers=admin.headers).status_code == 200
    assert client.get(f"/workflows/employee/{user.employee_id}", headers=other_user.headers).status_code == 401


def test_update_status_of_manual_workflow(client, admin, user):
    onboarding = client.get(f"/workflows/employee/{user.employee_id}", headers=admin.headers).json()[0]

    response = client.put(f"/workflows/{onboarding['id']}/status", json={"status": "Approved"}, headers=admin.headers)
    assert response.status_code == 200
    assert response.json()["status"] == "Approved"


def test_request_workflows_are_read_only(client, admin, user):
    request = _request(client, user.headers)
    history = client.get(f"/workflows/employee/{user.employee_id}", headers=admin.headers).json()
    request_workflow = next(w for w in history if w["request_id"] == request["id"])

    response = client.put(f"/workflows/{request_workflow['id']}/status", json={"status": "Approved"}, headers=admin.headers)
    assert response.status_code == 400
    assert response.json()["message"] == "Request workflows change only through their request"


def test_update_missing_workflow(client, admin):
    response = client.put("/workflows/999/status", json={"status": "Approved"}, headers=admin.headers)
    assert response.status_code == 404
