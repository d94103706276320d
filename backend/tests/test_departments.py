from models.employee import Employee


def test_create_and_get_department(client, admin, user):
    response = client.post("/departments", json={"name": "Finance", "description": "Money matters"}, headers=admin.headers)
    assert response.status_code == 200
    department_id = response.json()["id"]

    response = client.get(f"/departments/{department_id}", headers=user.headers)
    assert response.status_code == 200
    assert response.json()["description"] == "Money matters"


def test_department_name_is_unique(client, admin):
    client.post("/departments", json={"name": "Finance"}, headers=admin.headers)
    response = client.post("/departments", json={"name": "Finance"}, headers=admin.headers)
    assert response.status_code == 400
    assert response.json()["message"] == 'Department "Finance" already exists'


def test_rename_to_existing_name_is_rejected(client, admin):
    client.post("/departments", json={"name": "Finance"}, headers=admin.headers)
    legal = client.post("/departments", json={"name": "Legal"}, headers=admin.headers).json()

    response = client.put(f"/departments/{legal['id']}", json={"name": "Finance"}, headers=admin.headers)
    assert response.status_code == 400

    response = client.put(f"/departments/{legal['id']}", json={"name": "Compliance"}, headers=admin.headers)
    assert response.status_code == 200
    assert response.json()["name"] == "Compliance"


def test_list_includes_employee_count(client, admin, user, other_user):
    finance = client.post("/departments", json={"name": "Finance"}, headers=admin.headers).json()
    client.post("/departments", json={"name": "Empty"}, headers=admin.headers)
    for member in (user, other_user):
        client.post(f"/employees/{member.employee_id}/transfer", json={"department_id": finance["id"]}, headers=admin.headers)

    response = client.get("/departments", headers=user.headers)
    assert response.status_code == 200
    counts = {d["name"]: d["employee_count"] for d in response.json()}
    assert counts == {"Finance": 2, "Empty": 0}


def test_user_cannot_manage_departments(client, user):
    response = client.post("/departments", json={"name": "Finance"}, headers=user.headers)
    assert response.status_code == 401


def test_delete_department_unassigns_employees(client, db_session, admin, user):
    finance = client.post("/departments", json={"name": "Finance"}, headers=admin.headers).json()
    client.post(f"/employees/{user.employee_id}/transfer", json={"department_id": finance["id"]}, headers=admin.headers)

    response = client.delete(f"/departments/{finance['id']}", headers=admin.headers)
    assert response.status_code == 200
    assert client.get(f"/departments/{finance['id']}", headers=admin.headers).status_code == 404

    db_session.expire_all()
    assert db_session.query(Employee).filter(Employee.id == user.employee_id).one().department_id is None
