from sqlalchemy import update

from appraisal.db import models


def _create_cl(client, payload):
    r = client.post("/api/cl", json=payload)
    assert r.status_code == 201, r.text
    return r.json()["id"]


def _idp_payload(catalog, cl_id):
    return {
        "cl_header_id": cl_id,
        "employee_id": catalog.employee.id,
        "supervisor_id": catalog.supervisor.id,
        "cycle_id": catalog.cycle.id,
    }


def test_idp_lifecycle(client, cl_payload, catalog):
    cl_id = _create_cl(client, cl_payload())
    r = client.post("/api/idp", json=_idp_payload(catalog, cl_id))
    assert r.status_code == 201, r.text
    idp_id = r.json()["id"]

    r = client.get(f"/api/idp/{idp_id}")
    assert r.status_code == 200
    assert r.json()["header"]["status"] == "DRAFT"
    assert r.json()["items"] == []

    r = client.put(f"/api/idp/{idp_id}", json={"items": [
        {
            "competency_id": catalog.communication.id,
            "current_level": 3,
            "target_level": 4,
            "development_activity": "Shadow a senior engineer",
            "development_type": "Mentoring",
            "start_date": "2025-03-01",
            "end_date": "2025-05-31",
        },
    ]})
    assert r.status_code == 200, r.text
    item = r.json()["items"][0]
    assert item["status"] == "NOT_STARTED"
    assert item["competency_name"] == "Communication"
    assert item["start_date"] == "2025-03-01"

    r = client.put(f"/api/idp/{idp_id}", json={"items": [
        {"id": item["id"], "development_activity": "Pair on incident reviews", "end_date": "2025-06-30"},
    ]})
    assert r.status_code == 200, r.text
    assert r.json()["items"][0]["development_activity"] == "Pair on incident reviews"

    r = client.put(f"/api/idp/{idp_id}/submit")
    assert r.status_code == 200
    assert r.json()["header"]["status"] == "PENDING_AM"


def test_create_for_unknown_cl_is_422(client, catalog):
    r = client.post("/api/idp", json=_idp_payload(catalog, 777))
    assert r.status_code == 422


def test_new_item_without_competency_is_422(client, cl_payload, catalog):
    cl_id = _create_cl(client, cl_payload())
    idp_id = client.post("/api/idp", json=_idp_payload(catalog, cl_id)).json()["id"]
    r = client.put(f"/api/idp/{idp_id}", json={"items": [{"development_activity": "??"}]})
    assert r.status_code == 422


def test_missing_idp_routes_are_404(client):
    assert client.get("/api/idp/31").status_code == 404
    assert client.put("/api/idp/31", json={"items": []}).status_code == 404
    assert client.put("/api/idp/31/submit").status_code == 404


def test_employees_for_creation(client, db, cl_payload, catalog):
    cl_id = _create_cl(client, cl_payload())
    db.execute(update(models.CLHeader).where(models.CLHeader.id == cl_id).values(status="APPROVED"))
    db.commit()

    r = client.get(f"/api/idp/supervisor/{catalog.supervisor.id}/for-creation")
    assert r.status_code == 200
    assert [row["cl_id"] for row in r.json()] == [cl_id]

    client.post("/api/idp", json=_idp_payload(catalog, cl_id))
    assert client.get(f"/api/idp/supervisor/{catalog.supervisor.id}/for-creation").json() == []
