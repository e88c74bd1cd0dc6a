from datetime import datetime

from sqlalchemy import select

from branch_api.core.security import token_payload
from branch_api.domain.schedule import DayOfWeek
from branch_api.models import BranchWorkingHour, UserRole


def test_writes_require_authentication(client, make_branch):
    branch = make_branch()
    r = client.put(
        f"/api/v1/branches/{branch.id}/working-hours",
        json={"data": [{"day_of_week": 1, "is_closed": True}]},
    )
    assert r.status_code == 401
    assert r.json()["success"] is False


def test_writes_require_admin_role(client, make_branch, make_user):
    branch = make_branch()
    customer = make_user(role=UserRole.CUSTOMER, email=None, phone="0500000000", password=None)
    headers = {"Authorization": f"Bearer {token_payload(customer)['access_token']}"}
    r = client.put(
        f"/api/v1/branches/{branch.id}/working-hours/1/close",
        headers=headers,
    )
    assert r.status_code == 403


def test_inactive_admin_is_rejected(client, make_branch, make_user):
    branch = make_branch()
    admin = make_user(is_active=False)
    headers = {"Authorization": f"Bearer {token_payload(admin)['access_token']}"}
    r = client.put(f"/api/v1/branches/{branch.id}/working-hours/1/close", headers=headers)
    assert r.status_code == 403


def test_set_working_hours_upserts_days(client, db, make_branch, admin_headers):
    branch = make_branch(hours=[(DayOfWeek.MONDAY, "08:00:00", "12:00:00", False)])
    payload = {
        "data": [
            {"day_of_week": 1, "opens_at": "09:00:00", "closes_at": "18:00:00", "is_closed": False},
            {"day_of_week": 5, "opens_at": None, "closes_at": None, "is_closed": True},
            {"day_of_week": 6, "opens_at": "22:00", "closes_at": "02:00", "is_closed": False},
        ]
    }
    r = client.put(f"/api/v1/branches/{branch.id}/working-hours", json=payload, headers=admin_headers)
    assert r.status_code == 200
    data = r.json()["data"]
    assert [d["day_of_week"] for d in data] == [1, 5, 6]
    assert data[0]["opens_at"] == "09:00:00"
    assert data[2]["is_overnight"] is True

    rows = db.scalars(select(BranchWorkingHour).where(BranchWorkingHour.branch_id == branch.id)).all()
    assert len(rows) == 3


def test_set_working_hours_keeps_days_not_in_payload(client, make_branch, admin_headers):
    branch = make_branch(hours=[(DayOfWeek.SUNDAY, "10:00:00", "16:00:00", False)])
    payload = {"data": [{"day_of_week": 2, "opens_at": "09:00:00", "closes_at": "17:00:00", "is_closed": False}]}
    data = client.put(f"/api/v1/branches/{branch.id}/working-hours", json=payload, headers=admin_headers).json()["data"]
    assert [d["day_of_week"] for d in data] == [0, 2]


def test_set_working_hours_reports_field_errors(client, make_branch, admin_headers):
    branch = make_branch()
    payload = {
        "data": [
            {"day_of_week": 1, "opens_at": "09:00:00", "closes_at": "18:00:00", "is_closed": True},
            {"day_of_week": 2, "opens_at": None, "closes_at": "18:00:00", "is_closed": False},
            {"day_of_week": 3, "opens_at": "09:00:00", "closes_at": "09:00:00", "is_closed": False},
        ]
    }
    r = client.put(f"/api/v1/branches/{branch.id}/working-hours", json=payload, headers=admin_headers)
    assert r.status_code == 422
    body = r.json()
    assert body["success"] is False
    assert set(body["errors"]) == {"data.0.opens_at", "data.0.closes_at", "data.1.opens_at", "data.2.closes_at"}
    assert client.get(f"/api/v1/branches/{branch.id}/working-hours").json()["data"] == []


def test_set_working_hours_rejects_bad_shapes(client, make_branch, admin_headers):
    branch = make_branch()
    payload = {"data": [{"day_of_week": 9, "opens_at": "25:00:00", "is_closed": False}]}
    r = client.put(f"/api/v1/branches/{branch.id}/working-hours", json=payload, headers=admin_headers)
    assert r.status_code == 422
    assert "data.0.day_of_week" in r.json()["errors"]
    assert "data.0.opens_at" in r.json()["errors"]


def test_set_working_hours_missing_branch(client, admin_headers):
    payload = {"data": [{"day_of_week": 1, "is_closed": True}]}
    r = client.put("/api/v1/branches/424242/working-hours", json=payload, headers=admin_headers)
    assert r.status_code == 404


def test_open_and_close_single_day(client, make_branch, admin_headers, pin_now):
    pin_now(datetime(2026, 2, 5, 12, 0))
    branch = make_branch()
    r = client.put(
        f"/api/v1/branches/{branch.id}/working-hours/4/open",
        json={"opens_at": "09:00:00", "closes_at": "18:00:00"},
        headers=admin_headers,
    )
    assert r.status_code == 200
    assert client.get(f"/api/v1/branches/{branch.id}").json()["data"]["is_open_now"] is True

    r = client.put(f"/api/v1/branches/{branch.id}/working-hours/4/close", headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["data"] == [
        {
            "day_of_week": 4,
            "day_name": "Thursday",
            "opens_at": None,
            "closes_at": None,
            "is_closed": True,
            "is_overnight": False,
        }
    ]
    assert client.get(f"/api/v1/branches/{branch.id}").json()["data"]["is_open_now"] is False


def test_open_day_rejects_equal_times(client, make_branch, admin_headers):
    branch = make_branch()
    r = client.put(
        f"/api/v1/branches/{branch.id}/working-hours/2/open",
        json={"opens_at": "09:00:00", "closes_at": "09:00:00"},
        headers=admin_headers,
    )
    assert r.status_code == 422
    assert "closes_at" in r.json()["errors"]


def test_open_day_rejects_unknown_weekday(client, make_branch, admin_headers):
    branch = make_branch()
    r = client.put(
        f"/api/v1/branches/{branch.id}/working-hours/7/open",
        json={"opens_at": "09:00:00", "closes_at": "17:00:00"},
        headers=admin_headers,
    )
    assert r.status_code == 422


def test_branch_crud(client, admin_headers):
    created = client.post(
        "/api/v1/branches",
        json={"name": {"ar": "الفرع الرئيسي", "en": "Main Branch"}, "address": {"en": "Olaya St"}},
        headers={**admin_headers, "Accept-Language": "en"},
    )
    assert created.status_code == 201
    branch = created.json()["data"]
    assert branch["name"] == "Main Branch"
    assert branch["is_open_now"] is False

    updated = client.put(
        f"/api/v1/branches/{branch['id']}",
        json={"description": {"en": "Flagship"}},
        headers={**admin_headers, "Accept-Language": "en"},
    )
    assert updated.json()["data"]["description"] == "Flagship"
    assert updated.json()["data"]["name"] == "Main Branch"

    deactivated = client.post(f"/api/v1/branches/{branch['id']}/deactivate", headers=admin_headers)
    assert deactivated.json()["data"]["is_active"] is False
    assert client.get("/api/v1/branches").json()["data"] == []

    activated = client.post(f"/api/v1/branches/{branch['id']}/activate", headers=admin_headers)
    assert activated.json()["data"]["is_active"] is True


def test_create_branch_requires_a_name(client, admin_headers):
    r = client.post("/api/v1/branches", json={"name": {}}, headers=admin_headers)
    assert r.status_code == 422
    assert "name" in r.json()["errors"]


def test_delete_branch_cascades_working_hours(client, db, make_branch, admin_headers):
    branch = make_branch(hours=[(DayOfWeek.MONDAY, "09:00:00", "17:00:00", False)])
    branch_id = branch.id
    r = client.delete(f"/api/v1/branches/{branch_id}", headers=admin_headers)
    assert r.status_code == 200
    assert client.get(f"/api/v1/branches/{branch_id}").status_code == 404
    db.expire_all()
    remaining = db.scalars(select(BranchWorkingHour).where(BranchWorkingHour.branch_id == branch_id)).all()
    assert remaining == []
