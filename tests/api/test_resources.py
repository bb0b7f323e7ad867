"""End-to-end flows over the resource routers."""

from datetime import datetime, timedelta, timezone

import pytest

from coffeeshop.employees.service import EmployeeService


@pytest.fixture
def employee(auth_headers):
    return auth_headers("Employee")


# --- Auth ---


def test_register_then_login_requires_verification(client):
    body = {
        "name": "Linh",
        "email": "Linh@Coffeeshop.io",
        "password": "espresso-42",
        "confirm_password": "espresso-42",
        "confirm_tos": True,
    }
    response = client.post("/api/v1/auth/register", json=body)
    assert response.status_code == 201
    assert response.json()["data"]["email"] == "linh@coffeeshop.io"

    again = client.post("/api/v1/auth/register", json=body)
    assert again.status_code == 400
    assert again.json()["detail"] == "Account already exists"

    login = client.post("/api/v1/auth/login", json={"email": "linh@coffeeshop.io", "password": "espresso-42"})
    assert login.status_code == 403
    assert login.json()["detail"] == "Account not verified"


@pytest.mark.parametrize(
    "overrides, detail",
    [
        ({"confirm_password": "different-1"}, "Passwords do not match"),
        ({"confirm_tos": False}, "Please accept TOS"),
        ({"password": "short", "confirm_password": "short"}, "Password too short"),
    ],
)
def test_register_rejections(client, overrides, detail):
    body = {
        "name": "Minh",
        "email": "minh@coffeeshop.io",
        "password": "espresso-42",
        "confirm_password": "espresso-42",
        "confirm_tos": True,
        **overrides,
    }
    response = client.post("/api/v1/auth/register", json=body)
    assert response.status_code == 400
    assert response.json()["detail"] == detail


async def _seed_employee(db, **overrides):
    data = {
        "name": "Barista",
        "email": "barista@coffeeshop.io",
        "phone_number": "0987654321",
        "password": "latte-art-1",
        "role": "Employee",
        "is_active": True,
        "is_verified": True,
        **overrides,
    }
    return await EmployeeService(db).create(data)


@pytest.mark.asyncio
async def test_employee_login_and_profile(db, app):
    from fastapi.testclient import TestClient

    await _seed_employee(db)

    with TestClient(app) as client:
        wrong = client.post("/api/v1/auth/login", json={"email": "barista@coffeeshop.io", "password": "nope"})
        assert wrong.status_code == 401
        assert wrong.json()["detail"] == "Wrong password"

        login = client.post("/api/v1/auth/login", json={"email": "BARISTA@coffeeshop.io", "password": "latte-art-1"})
        assert login.status_code == 200
        token = login.json()["data"]["access_token"]
        headers = {"Authorization": f"Bearer {token}"}

        me = client.get("/api/v1/profile/me", headers=headers)
        assert me.status_code == 200
        assert me.json()["data"]["email"] == "barista@coffeeshop.io"
        assert "password" not in me.json()["data"]

        updated = client.put("/api/v1/profile/me", json={"name": "Head Barista"}, headers=headers)
        assert updated.json()["data"]["name"] == "Head Barista"


def test_login_unknown_account(client):
    response = client.post("/api/v1/auth/login", json={"email": "ghost@coffeeshop.io", "password": "whatever"})
    assert response.status_code == 404
    assert response.json()["detail"] == "Account not found"


# --- Pagination ---


@pytest.mark.parametrize(
    "query, detail",
    [
        ("page=0", "Page and limit must be greater than 0"),
        ("limit=0", "Page and limit must be greater than 0"),
        ("limit=101", "Limit must be less than 100"),
    ],
)
def test_pagination_validation(client, employee, query, detail):
    response = client.get(f"/api/v1/customers/?{query}", headers=employee)
    assert response.status_code == 400
    assert response.json()["detail"] == detail


def test_pagination_envelope(client, employee):
    for i in range(5):
        client.post("/api/v1/customers/", json={"name": f"Guest {i}", "phone_number": f"090000000{i}"}, headers=employee)

    page = client.get("/api/v1/customers/?page=2&limit=2", headers=employee).json()["data"]
    assert page["total_items"] == 5
    assert page["total_pages"] == 3
    assert page["current_page"] == 2
    assert page["limit"] == 2
    assert len(page["items"]) == 2


# --- Customers ---


def test_customer_crud(client, employee):
    created = client.post(
        "/api/v1/customers/", json={"name": "Hoa", "phone_number": "090 123-4567"}, headers=employee
    )
    assert created.status_code == 201
    customer = created.json()["data"]
    assert customer["phone_number"] == "0901234567"

    duplicate = client.post("/api/v1/customers/", json={"name": "Hoa 2", "phone_number": "0901234567"}, headers=employee)
    assert duplicate.status_code == 409

    found = client.get("/api/v1/customers/search?search=ho", headers=employee)
    assert [c["name"] for c in found.json()["data"]] == ["Hoa"]

    assert client.get("/api/v1/customers/search?search=zzz", headers=employee).status_code == 404
    assert client.get("/api/v1/customers/search", headers=employee).status_code == 400

    cid = customer["_id"]
    renamed = client.put(f"/api/v1/customers/{cid}", json={"name": "Hoa Tran"}, headers=employee)
    assert renamed.json()["data"]["name"] == "Hoa Tran"

    assert client.delete(f"/api/v1/customers/{cid}", headers=employee).status_code == 200
    assert client.get(f"/api/v1/customers/{cid}", headers=employee).status_code == 404
    assert client.delete(f"/api/v1/customers/{cid}", headers=employee).status_code == 404


def test_malformed_id_is_400(client, employee):
    assert client.get("/api/v1/customers/not-an-id", headers=employee).status_code == 400


# --- Employees ---


def test_employee_manager_cannot_mint_admin(client, auth_headers):
    body = {"name": "Eve", "email": "eve@coffeeshop.io", "phone_number": "0912345678", "password": "long-enough", "role": "Admin"}
    response = client.post("/api/v1/employees/", json=body, headers=auth_headers("EmployeeManager"))
    assert response.status_code == 403
    assert response.json()["detail"] == "Cannot assign role Admin"

    body["role"] = "Employee"
    created = client.post("/api/v1/employees/", json=body, headers=auth_headers("EmployeeManager"))
    assert created.status_code == 201
    assert "password" not in created.json()["data"]


# --- Sales & vouchers ---


def test_sale_with_voucher(client, employee):
    expiry = (datetime.now(timezone.utc) + timedelta(days=7)).isoformat()
    voucher = client.post(
        "/api/v1/vouchers/", json={"name": "WELCOME", "value": 10, "expiry_date": expiry}, headers=employee
    ).json()["data"]

    items = [
        {"name": "Latte", "price": 4.5, "quant": 2, "unit": "cup"},
        {"name": "Croissant", "price": 3, "quant": 1, "unit": "pcs"},
    ]
    sale = client.post(
        "/api/v1/sales/", json={"items": items, "voucher_id": voucher["_id"]}, headers=employee
    ).json()["data"]
    assert sale["total_value"] == 12
    assert sale["final_value"] == 2

    summary = client.get("/api/v1/reports/summary", headers=employee)
    assert summary.status_code == 403


def test_expired_voucher_is_rejected(client, employee):
    expiry = (datetime.now(timezone.utc) - timedelta(days=1)).isoformat()
    voucher = client.post(
        "/api/v1/vouchers/", json={"name": "OLD", "value": 5, "expiry_date": expiry}, headers=employee
    ).json()["data"]
    response = client.post(
        "/api/v1/sales/",
        json={"items": [{"name": "Mocha", "price": 5, "quant": 1}], "voucher_id": voucher["_id"]},
        headers=employee,
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Voucher expired"


def test_reports_summary(client, employee, auth_headers):
    client.post("/api/v1/customers/", json={"name": "An", "phone_number": "0911111111"}, headers=employee)
    client.post("/api/v1/sales/", json={"items": [{"name": "Tea", "price": 2, "quant": 3}]}, headers=employee)
    client.post("/api/v1/sales/", json={"items": [{"name": "Tea", "price": 2, "quant": 1}]}, headers=employee)

    data = client.get("/api/v1/reports/summary", headers=auth_headers("Accounting")).json()["data"]
    assert data["customers"] == 1
    assert data["sales"] == 2
    assert data["revenue"] == 8


def _hire(client, auth_headers, email="nam@coffeeshop.io", password="cold-brew-9", **extra) -> dict:
    body = {
        "name": "Nam",
        "email": email,
        "phone_number": "0933333333",
        "password": password,
        "is_verified": True,
        **extra,
    }
    response = client.post("/api/v1/employees/", json=body, headers=auth_headers("EmployeeManager"))
    assert response.status_code == 201
    return response.json()["data"]


def _login(client, email, password) -> dict:
    response = client.post("/api/v1/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['data']['access_token']}"}


def test_employee_list_requires_view_employees(client, auth_headers):
    assert client.get("/api/v1/employees/", headers=auth_headers("EmployeeManager")).status_code == 403
    assert client.get("/api/v1/employees/count", headers=auth_headers("Accounting")).status_code == 403
    assert client.get("/api/v1/employees/count", headers=auth_headers("Admin")).status_code == 200


def test_employee_email_cannot_shadow_a_customer_account(client, auth_headers):
    client.post(
        "/api/v1/auth/register",
        json={
            "name": "Lan",
            "email": "lan@coffeeshop.io",
            "password": "espresso-42",
            "confirm_password": "espresso-42",
            "confirm_tos": True,
        },
    )
    body = {"name": "Lan", "email": "LAN@coffeeshop.io", "phone_number": "0944444444", "password": "cold-brew-9"}
    response = client.post("/api/v1/employees/", json=body, headers=auth_headers("EmployeeManager"))
    assert response.status_code == 400
    assert response.json()["detail"] == "Email already exists"


def test_update_status_and_verify_need_a_manager(client, auth_headers):
    employee = _hire(client, auth_headers, is_verified=False)
    body = {"id": employee["_id"], "is_active": False}

    assert client.post("/api/v1/employees/update-status", json=body, headers=auth_headers("Employee")).status_code == 403
    disabled = client.post("/api/v1/employees/update-status", json=body, headers=auth_headers("WarehouseManager"))
    assert disabled.status_code == 200
    assert disabled.json()["data"]["is_active"] is False

    verify = {"id": employee["_id"]}
    assert client.post("/api/v1/employees/verify", json=verify, headers=auth_headers("Customer")).status_code == 403
    verified = client.post("/api/v1/employees/verify", json=verify, headers=auth_headers("Accounting"))
    assert verified.json()["data"]["is_verified"] is True


def test_employee_checkins(client, auth_headers):
    employee = _hire(client, auth_headers)
    url = f"/api/v1/employees/{employee['_id']}/checkins"
    staff = auth_headers("Employee")

    assert client.post(url, json={"type": "in"}, headers=auth_headers("Customer")).status_code == 403
    assert client.post(url, json={"type": "in"}, headers=staff).status_code == 201
    assert client.post(url, json={"type": "out", "value": 8}, headers=staff).status_code == 201
    assert client.post(url, json={"type": "lunch"}, headers=staff).status_code == 422

    checkins = client.get(url, headers=staff).json()["data"]
    assert [c["type"] for c in checkins] == ["in", "out"]
    assert checkins[1]["value"] == 8

    missing = "/api/v1/employees/000000000000000000000000/checkins"
    assert client.post(missing, json={"type": "in"}, headers=staff).status_code == 404


def test_change_password(client, auth_headers):
    _hire(client, auth_headers)
    headers = _login(client, "nam@coffeeshop.io", "cold-brew-9")
    url = "/api/v1/profile/change-password"

    wrong = client.post(
        url,
        json={"current_password": "nope", "new_password": "flat-white-7", "confirm_password": "flat-white-7"},
        headers=headers,
    )
    assert wrong.status_code == 401

    same = client.post(
        url,
        json={"current_password": "cold-brew-9", "new_password": "cold-brew-9", "confirm_password": "cold-brew-9"},
        headers=headers,
    )
    assert same.status_code == 400

    changed = client.post(
        url,
        json={"current_password": "cold-brew-9", "new_password": "flat-white-7", "confirm_password": "flat-white-7"},
        headers=headers,
    )
    assert changed.status_code == 200
    _login(client, "nam@coffeeshop.io", "flat-white-7")


def test_customer_phone_update_conflict(client, employee):
    client.post("/api/v1/customers/", json={"name": "Mai", "phone_number": "0955555555"}, headers=employee)
    other = client.post("/api/v1/customers/", json={"name": "Tu", "phone_number": "0966666666"}, headers=employee)
    cid = other.json()["data"]["_id"]

    clash = client.put(f"/api/v1/customers/{cid}", json={"phone_number": "0955555555"}, headers=employee)
    assert clash.status_code == 409
    own = client.put(f"/api/v1/customers/{cid}", json={"phone_number": "0966666666"}, headers=employee)
    assert own.status_code == 200


# --- Suppliers ---


SUPPLIER = {"name": "Highland Dairy", "field": "dairy", "phone": "0281234567", "address": "12 Le Loi"}


def test_supplier_gates_and_crud(client, auth_headers, employee):
    assert client.post("/api/v1/suppliers/", json=SUPPLIER, headers=employee).status_code == 403
    assert client.post("/api/v1/suppliers/", json=SUPPLIER, headers=auth_headers("WarehouseManager")).status_code == 403

    created = client.post("/api/v1/suppliers/", json=SUPPLIER, headers=auth_headers("EmployeeManager"))
    assert created.status_code == 201
    sid = created.json()["data"]["_id"]

    assert client.get("/api/v1/suppliers/", headers=auth_headers("Accounting")).status_code == 200
    assert client.get("/api/v1/suppliers/", headers=auth_headers("Customer")).status_code == 403
    assert client.get(f"/api/v1/suppliers/{sid}", headers=auth_headers("Accounting")).status_code == 403
    assert client.get(f"/api/v1/suppliers/{sid}", headers=employee).status_code == 200
    assert len(client.get("/api/v1/suppliers/all", headers=employee).json()["data"]) == 1

    renamed = client.put(f"/api/v1/suppliers/{sid}", json={"name": "Highland Milk"}, headers=employee)
    assert renamed.status_code == 200
    assert renamed.json()["data"]["name"] == "Highland Milk"

    assert client.delete(f"/api/v1/suppliers/{sid}", headers=employee).status_code == 200
    assert client.get(f"/api/v1/suppliers/{sid}", headers=employee).status_code == 404


def test_supplier_phone_is_unique(client, auth_headers, employee):
    manager = auth_headers("EmployeeManager")
    client.post("/api/v1/suppliers/", json=SUPPLIER, headers=manager)
    assert client.post("/api/v1/suppliers/", json={**SUPPLIER, "name": "Other"}, headers=manager).status_code == 409

    other = client.post("/api/v1/suppliers/", json={**SUPPLIER, "phone": "0287654321"}, headers=manager)
    sid = other.json()["data"]["_id"]
    assert client.put(f"/api/v1/suppliers/{sid}", json={"phone": "0281234567"}, headers=employee).status_code == 409


# --- Menu ---


def test_menu_routes(client, auth_headers, employee):
    item = {"name": "Cold brew", "type": "coffee", "price": 4.0}
    assert client.post("/api/v1/menu/", json=item, headers=employee).status_code == 403
    created = client.post("/api/v1/menu/", json=item, headers=auth_headers("EmployeeManager"))
    assert created.status_code == 201
    mid = created.json()["data"]["_id"]

    assert client.get("/api/v1/menu/all", headers=auth_headers("Customer")).json()["data"][0]["name"] == "Cold brew"
    assert client.get("/api/v1/menu/", headers=auth_headers("Accounting")).status_code == 403

    assert client.put(f"/api/v1/menu/{mid}", json={"price": 4.5}, headers=employee).json()["data"]["price"] == 4.5
    assert client.delete(f"/api/v1/menu/{mid}", headers=employee).status_code == 200
    assert client.get("/api/v1/menu/all", headers=employee).json()["data"] == []


# --- Exports ---


def test_export_routes(client, auth_headers):
    manager = auth_headers("WarehouseManager")
    beans = {"name": "Robusta", "price": 8, "quant": 5, "unit": "kg"}
    assert client.post("/api/v1/warehouse/imports", json={"items": [beans]}, headers=manager).status_code == 201

    assert client.post("/api/v1/exports/", json={"items": [beans]}, headers=auth_headers("Employee")).status_code == 403
    short = client.post("/api/v1/exports/", json={"items": [{**beans, "quant": 6}]}, headers=manager)
    assert short.status_code == 400
    assert short.json()["detail"] == "Insufficient stock for Robusta"

    created = client.post("/api/v1/exports/", json={"items": [{**beans, "quant": 3}]}, headers=manager)
    assert created.status_code == 201
    eid = created.json()["data"]["_id"]
    assert client.get("/api/v1/exports/", headers=manager).json()["data"]["total_items"] == 1
    assert client.get(f"/api/v1/exports/{eid}", headers=manager).status_code == 200

    stock = client.get("/api/v1/warehouse/stock", headers=manager).json()["data"]["items"]
    assert stock[0]["quantity"] == 2

    assert client.delete(f"/api/v1/exports/{eid}", headers=manager).status_code == 200
    stock = client.get("/api/v1/warehouse/stock", headers=manager).json()["data"]["items"]
    assert stock[0]["quantity"] == 5


# --- Sale updates ---


def test_sale_update_with_expired_or_cleared_voucher(client, db, employee):
    expiry = (datetime.now(timezone.utc) + timedelta(days=1)).isoformat()
    voucher = client.post(
        "/api/v1/vouchers/", json={"name": "TEN", "value": 10, "expiry_date": expiry}, headers=employee
    ).json()["data"]
    sale = client.post(
        "/api/v1/sales/",
        json={"items": [{"name": "Latte", "price": 5, "quant": 4}], "voucher_id": voucher["_id"]},
        headers=employee,
    ).json()["data"]
    assert sale["final_value"] == 10

    db["vouchers"].docs[0]["expiry_date"] = datetime.now(timezone.utc) - timedelta(days=1)

    edited = client.put(
        f"/api/v1/sales/{sale['_id']}", json={"items": [{"name": "Latte", "price": 5, "quant": 6}]}, headers=employee
    )
    assert edited.status_code == 200
    assert edited.json()["data"]["final_value"] == 20

    cleared = client.put(f"/api/v1/sales/{sale['_id']}", json={"voucher_id": None}, headers=employee)
    assert cleared.status_code == 200
    assert "voucher_id" not in cleared.json()["data"]
    assert cleared.json()["data"]["final_value"] == 30
