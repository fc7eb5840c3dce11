import pytest


@pytest.fixture
def tenant(make_company, make_user, user_headers):
    company = make_company(name="Acme Traders")
    user = make_user(company, role="admin")
    return company, user_headers(user, company)


@pytest.fixture
def other_tenant(make_company, make_user, user_headers):
    company = make_company(name="Globex")
    user = make_user(company, role="admin")
    return company, user_headers(user, company)


def test_pending_company_is_stopped_before_the_handler(client, make_company, make_user, user_headers):
    company = make_company(status="pending")
    headers = user_headers(make_user(company))

    # an invalid body would be a 400 if the handler were reached
    res = client.post("/api/customers", json={}, headers=headers)

    assert res.status_code == 403
    assert res.json()["error"] == (
        "Your company must be approved to access this resource. Please wait for admin approval."
    )


def test_stale_token_status_is_what_the_gate_sees(client, make_company, make_user, user_headers):
    company = make_company(status="approved")
    headers = user_headers(make_user(company), company, company_status="suspended")

    assert client.get("/api/products", headers=headers).status_code == 403


def test_platform_admin_cannot_use_tenant_routes(client, make_admin, admin_headers):
    assert client.get("/api/customers", headers=admin_headers(make_admin())).status_code == 403


def test_customer_crud(client, tenant):
    _, headers = tenant

    created = client.post(
        "/api/customers",
        json={
            "name": "Wayne Enterprises",
            "email": "AP@wayne.com",
            "gstTinNumber": "GST-1",
            "address": {"city": "Gotham", "country": "US"},
        },
        headers=headers,
    )
    assert created.status_code == 201
    customer = created.json()["data"]
    assert customer["id"].startswith("cus_")
    assert customer["email"] == "ap@wayne.com"
    assert customer["address"]["city"] == "Gotham"

    updated = client.put(f"/api/customers/{customer['id']}", json={"phone": "+15550199"}, headers=headers)
    assert updated.status_code == 200
    assert updated.json()["data"]["phone"] == "+15550199"
    assert updated.json()["data"]["address"]["city"] == "Gotham"

    listing = client.get("/api/customers", headers=headers)
    assert [c["id"] for c in listing.json()["data"]] == [customer["id"]]

    deleted = client.delete(f"/api/customers/{customer['id']}", headers=headers)
    assert deleted.json()["data"] == {"id": customer["id"]}
    assert client.get(f"/api/customers/{customer['id']}", headers=headers).status_code == 404


def test_customer_email_unique_within_company_only(client, tenant, other_tenant):
    _, headers = tenant
    _, other_headers = other_tenant
    payload = {"name": "Wayne Enterprises", "email": "ap@wayne.com"}

    assert client.post("/api/customers", json=payload, headers=headers).status_code == 201
    duplicate = client.post("/api/customers", json=payload, headers=headers)
    elsewhere = client.post("/api/customers", json=payload, headers=other_headers)

    assert duplicate.status_code == 409
    assert duplicate.json()["error"] == "Email already exists for this company"
    assert elsewhere.status_code == 201


def test_customers_are_invisible_across_tenants(client, tenant, other_tenant):
    _, headers = tenant
    _, other_headers = other_tenant
    customer = client.post("/api/customers", json={"name": "Wayne"}, headers=headers).json()["data"]

    assert client.get("/api/customers", headers=other_headers).json()["data"] == []
    assert client.get(f"/api/customers/{customer['id']}", headers=other_headers).status_code == 404
    assert client.put(f"/api/customers/{customer['id']}", json={"name": "Mine"}, headers=other_headers).status_code == 404
    assert client.delete(f"/api/customers/{customer['id']}", headers=other_headers).status_code == 404
    assert client.get(f"/api/customers/{customer['id']}", headers=headers).status_code == 200


def test_product_crud_and_defaults(client, tenant):
    _, headers = tenant

    created = client.post(
        "/api/products",
        json={"name": "Consulting hour", "sku": "CONS-1", "unitPrice": "120.50"},
        headers=headers,
    )
    assert created.status_code == 201
    product = created.json()["data"]
    assert product["id"].startswith("prd_")
    assert product["unitPrice"] == 120.5
    assert product["taxRate"] == 0

    updated = client.put(f"/api/products/{product['id']}", json={"taxRate": 18}, headers=headers)
    assert updated.json()["data"]["taxRate"] == 18
    assert updated.json()["data"]["unitPrice"] == 120.5

    assert client.delete(f"/api/products/{product['id']}", headers=headers).status_code == 200
    assert client.get(f"/api/products/{product['id']}", headers=headers).status_code == 404


def test_product_sku_conflicts(client, tenant, other_tenant):
    _, headers = tenant
    _, other_headers = other_tenant
    payload = {"name": "Widget", "sku": "W-1", "unitPrice": 10}

    first = client.post("/api/products", json=payload, headers=headers).json()["data"]
    duplicate = client.post("/api/products", json=payload, headers=headers)
    elsewhere = client.post("/api/products", json=payload, headers=other_headers)
    second = client.post("/api/products", json={**payload, "sku": "W-2"}, headers=headers).json()["data"]
    rename = client.put(f"/api/products/{second['id']}", json={"sku": "W-1"}, headers=headers)
    keep_own = client.put(f"/api/products/{first['id']}", json={"sku": "W-1", "name": "Widget+"}, headers=headers)

    assert duplicate.status_code == 409
    assert duplicate.json()["error"] == "SKU already exists for this company"
    assert elsewhere.status_code == 201
    assert rename.status_code == 409
    assert keep_own.status_code == 200


def test_product_validation(client, tenant):
    _, headers = tenant

    res = client.post("/api/products", json={"name": "Widget", "unitPrice": -1}, headers=headers)

    assert res.status_code == 400
    assert res.json()["details"][0]["field"] == "unitPrice"


def test_company_profile_read_and_admin_update(client, tenant):
    company, headers = tenant

    profile = client.get("/api/company/profile", headers=headers)
    assert profile.status_code == 200
    assert profile.json()["data"]["id"] == company.id

    res = client.put(
        "/api/company/profile",
        json={
            "headerNote": "Thanks for your business",
            "logoUrl": "",
            "address": {"street": "1 Main St", "city": "Pune"},
            "bankAccounts": [
                {
                    "bankName": "HDFC",
                    "accountHolder": "Acme Traders",
                    "accountNumber": "0001",
                    "ifscCode": "HDFC0001",
                }
            ],
        },
        headers=headers,
    )

    assert res.status_code == 200
    data = res.json()["data"]
    assert data["headerNote"] == "Thanks for your business"
    assert data["logoUrl"] is None
    assert data["address"]["city"] == "Pune"
    assert data["bankAccounts"][0]["bankName"] == "HDFC"
    assert data["name"] == "Acme Traders"


def test_company_profile_update_requires_admin_role(client, make_company, make_user, user_headers):
    company = make_company()
    member = make_user(company, role="member")

    res = client.put("/api/company/profile", json={"headerNote": "x"}, headers=user_headers(member, company))

    assert res.status_code == 403
    assert res.json()["error"] == "This action requires one of these roles: admin"


def test_company_profile_email_cannot_collide(client, tenant, other_tenant):
    _, headers = tenant
    other_company, _ = other_tenant

    res = client.put("/api/company/profile", json={"email": other_company.email}, headers=headers)

    assert res.status_code == 409


def test_concurrent_duplicate_customer_email_is_conflict(client, tenant, monkeypatch):
    _, headers = tenant
    payload = {"name": "Wayne Enterprises", "email": "ap@wayne.com"}
    assert client.post("/api/customers", json=payload, headers=headers).status_code == 201

    # skip the pre-check so the database constraint decides
    monkeypatch.setattr("hisaabu.customers.service._ensure_email_free", lambda *args: None)
    res = client.post("/api/customers", json=payload, headers=headers)

    assert res.status_code == 409
    assert res.json()["error"] == "Email already exists for this company"
    assert len(client.get("/api/customers", headers=headers).json()["data"]) == 1


def test_concurrent_duplicate_sku_is_conflict(client, tenant, monkeypatch):
    _, headers = tenant
    payload = {"name": "Widget", "sku": "W-1", "unitPrice": 10}
    assert client.post("/api/products", json=payload, headers=headers).status_code == 201
    other = client.post("/api/products", json={**payload, "sku": "W-2"}, headers=headers).json()["data"]

    monkeypatch.setattr("hisaabu.products.service._ensure_sku_free", lambda *args: None)
    created = client.post("/api/products", json=payload, headers=headers)
    renamed = client.put(f"/api/products/{other['id']}", json={"sku": "W-1"}, headers=headers)

    assert created.status_code == 409
    assert renamed.status_code == 409
    assert renamed.json()["error"] == "SKU already exists for this company"


def test_blank_record_names_are_rejected(client, tenant):
    _, headers = tenant

    customer = client.post("/api/customers", json={"name": "   "}, headers=headers)
    product = client.post("/api/products", json={"name": "  Widget ", "unitPrice": 1}, headers=headers)

    assert customer.status_code == 400
    assert product.status_code == 201
    assert product.json()["data"]["name"] == "Widget"
