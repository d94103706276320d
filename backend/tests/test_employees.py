from models.enums import WorkflowType
from models.request import Request
from models.workflow import Workflow

NEW_EMPLOYEE = {"employee_id": "EMP-100", "position": "Analyst", "hire_date": "2024-03-01"}


def _workflow_types(db_session, employee_id):
    rows = db_session.query(Workflow).filter(Workflow.employee_id == employee_id).order_by(Workflow.id).all()
    return [(w.type.value, w.status.value) for w in rows]


def _department(client, headers, name):
    response = client.post("/departments", json={"name": name}, headers=headers)
    assert response.status_code == 200, response.text
    return response.json()


def test_create_employee_starts_onboarding(client, db_session, admin):
    response = client.post("/employees", json=NEW_EMPLOYEE, headers=admin.headers)
    assert response.status_code == 200, response.text
    data = response.json()
    assert data["status"] == "Active"
    assert _workflow_types(db_session, data["id"]) == [("Onboarding", "Pending")]


def test_user_cannot_manage_employees(client, user):
    assert client.post("/employees", json=NEW_EMPLOYEE, headers=user.headers).status_code == 401
    assert client.get("/employees", headers=user.headers).status_code == 200


def test_employee_code_is_unique(client, admin):
    client.post("/employees", json=NEW_EMPLOYEE, headers=admin.headers)
    response = client.post("/employees", json=NEW_EMPLOYEE, headers=admin.headers)
    assert response.status_code == 400
    assert response.json()["message"] == 'Employee ID "EMP-100" is already in use'


def test_unknown_manager_is_rejected(client, admin):
    response = client.post("/employees", json={**NEW_EMPLOYEE, "reporting_to": 999}, headers=admin.headers)
    assert response.status_code == 404
    assert response.json()["message"] == "Manager not found"


def test_employee_cannot_report_to_self(client, admin, user):
    response = client.put(f"/employees/{user.employee_id}", json={"reporting_to": user.employee_id}, headers=admin.headers)
    assert response.status_code == 400


def test_reporting_line(client, admin, user):
    response = client.put(f"/employees/{user.employee_id}", json={"reporting_to": admin.employee_id}, headers=admin.headers)
    assert response.status_code == 200
    assert response.json()["manager"]["id"] == admin.employee_id


def test_transfer_records_department_change(client, db_session, admin, user):
    engineering = _department(client, admin.headers, "Engineering")
    sales = _department(client, admin.headers, "Sales")

    response = client.post(f"/employees/{user.employee_id}/transfer",
                           json={"department_id": engineering["id"]}, headers=admin.headers)
    assert response.status_code == 200
    response = client.post(f"/employees/{user.employee_id}/transfer",
                           json={"department_id": sales["id"]}, headers=admin.headers)
    assert response.status_code == 200
    assert response.json()["department"]["name"] == "Sales"

    changes = (
        db_session.query(Workflow)
        .filter(Workflow.employee_id == user.employee_id, Workflow.type == WorkflowType.DEPARTMENT_CHANGE)
        .order_by(Workflow.id)
        .all()
    )
    assert [w.details for w in changes] == [
        "Transferred from no department to Engineering",
        "Transferred from Engineering to Sales",
    ]


def test_transfer_to_same_department_is_noop(client, db_session, admin, user):
    engineering = _department(client, admin.headers, "Engineering")
    for _ in range(2):
        client.post(f"/employees/{user.employee_id}/transfer",
                    json={"department_id": engineering["id"]}, headers=admin.headers)
    assert _workflow_types(db_session, user.employee_id).count(("DepartmentChange", "Approved")) == 1


def test_transfer_to_missing_department(client, admin, user):
    response = client.post(f"/employees/{user.employee_id}/transfer", json={"department_id": 999}, headers=admin.headers)
    assert response.status_code == 404
    assert response.json()["message"] == "Department not found"


def test_update_department_goes_through_transfer(client, db_session, admin, user):
    engineering = _department(client, admin.headers, "Engineering")
    response = client.put(f"/employees/{user.employee_id}", json={"department_id": engineering["id"]}, headers=admin.headers)
    assert response.status_code == 200
    assert response.json()["department_id"] == engineering["id"]
    assert ("DepartmentChange", "Approved") in _workflow_types(db_session, user.employee_id)


def test_termination_records_workflow(client, db_session, admin, user):
    response = client.put(f"/employees/{user.employee_id}", json={"status": "Terminated"}, headers=admin.headers)
    assert response.status_code == 200
    assert response.json()["status"] == "Terminated"

    # Setting the same status again does not add another row
    client.put(f"/employees/{user.employee_id}", json={"status": "Terminated"}, headers=admin.headers)
    assert _workflow_types(db_session, user.employee_id).count(("Termination", "Approved")) == 1


def test_delete_employee_keeps_requests(client, db_session, admin, user):
    client.post("/requests", json={"type": "Leave", "items": [{"name": "Annual leave", "quantity": 5}]}, headers=user.headers)

    response = client.delete(f"/employees/{user.employee_id}", headers=admin.headers)
    assert response.status_code == 200
    assert client.get(f"/employees/{user.employee_id}", headers=admin.headers).status_code == 404

    db_session.expire_all()
    request = db_session.query(Request).one()
    assert request.employee_id is None


def test_null_for_required_field_is_ignored(client, admin, user):
    response = client.put(f"/employees/{user.employee_id}", json={"position": None, "job_title": "Lead"}, headers=admin.headers)
    assert response.status_code == 200
    assert response.json()["position"] == "Engineer"
    assert response.json()["job_title"] == "Lead"


def test_failed_update_changes_nothing(client, db_session, admin, user):
    response = client.put(f"/employees/{user.employee_id}",
                          json={"position": "Manager", "department_id": 999}, headers=admin.headers)
    assert response.status_code == 404
    assert response.json()["message"] == "Department not found"

    response = client.get(f"/employees/{user.employee_id}", headers=admin.headers)
    assert response.json()["position"] == "Engineer"
    assert response.json()["department_id"] is None
    assert ("DepartmentChange", "Approved") not in _workflow_types(db_session, user.employee_id)


def test_update_fields_and_department_together(client, db_session, admin, user):
    engineering = _department(client, admin.headers, "Engineering")
    response = client.put(f"/employees/{user.employee_id}",
                          json={"position": "Manager", "department_id": engineering["id"]}, headers=admin.headers)
    assert response.status_code == 200
    assert response.json()["position"] == "Manager"
    assert response.json()["department"]["name"] == "Engineering"
    assert _workflow_types(db_session, user.employee_id).count(("DepartmentChange", "Approved")) == 1


def test_clear_department(client, admin, user):
    engineering = _department(client, admin.headers, "Engineering")
    client.post(f"/employees/{user.employee_id}/transfer", json={"department_id": engineering["id"]}, headers=admin.headers)

    response = client.put(f"/employees/{user.employee_id}", json={"department_id": None}, headers=admin.headers)
    assert response.status_code == 200
    assert response.json()["department_id"] is None
