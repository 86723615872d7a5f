"""
Integration tests for post office, client and employee endpoints.
"""

import pytest


async def create_post_office(client, name="Kyiv Central", city="Kyiv", postcode="01001", street="Khreshchatyk 22"):
    response = await client.post("/v1/post-offices", json={
        "name": name, "city": city, "postcode": postcode, "street": street
    })
    assert response.status_code == 201
    return response.json()


# --- Post offices ---

@pytest.mark.asyncio
async def test_post_office_crud(client):
    created = await create_post_office(client)
    office_id = created["id"]
    
    fetched = await client.get(f"/v1/post-offices/{office_id}")
    assert fetched.json()["name"] == "Kyiv Central"
    
    updated = await client.put(f"/v1/post-offices/{office_id}", json={
        "name": "Kyiv Podil", "city": "Kyiv", "postcode": "04070", "street": "Sahaidachnoho 1"
    })
    assert updated.status_code == 200
    assert updated.json()["postcode"] == "04070"
    
    deleted = await client.delete(f"/v1/post-offices/{office_id}")
    assert deleted.status_code == 204
    
    missing = await client.get(f"/v1/post-offices/{office_id}")
    assert missing.status_code == 404
    assert (await client.delete(f"/v1/post-offices/{office_id}")).status_code == 404


@pytest.mark.asyncio
async def test_post_office_search(client):
    await create_post_office(client)
    await create_post_office(client, name="Lviv Main", city="Lviv", postcode="79000", street="Slovatskoho 1")
    await create_post_office(client, name="Kyiv Obolon", city="Kyiv", postcode="04210", street="Heroiv Dnipra 2")
    
    kyiv = (await client.get("/v1/post-offices", params={"city": "kYiV"})).json()
    assert kyiv["total"] == 2
    
    narrowed = (await client.get("/v1/post-offices", params={"city": "kyiv", "name": "obolon"})).json()
    assert [p["name"] for p in narrowed["post_offices"]] == ["Kyiv Obolon"]
    
    everything = (await client.get("/v1/post-offices", params={"name": ""})).json()
    assert everything["total"] == 3


@pytest.mark.asyncio
async def test_post_office_validation(client):
    response = await client.post("/v1/post-offices", json={
        "name": "X", "city": "Kyiv", "postcode": "01001-99999", "street": "Somewhere"
    })
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_referenced_post_office_cannot_be_deleted(client):
    office = await create_post_office(client)
    await client.post("/v1/employees", json={
        "first_name": "Olena", "last_name": "Koval", "position": "CLERK", "post_office_id": office["id"]
    })
    
    response = await client.delete(f"/v1/post-offices/{office['id']}")
    
    assert response.status_code == 409
    assert response.json()["error_code"] == "ERR_CONFLICT_001"


# --- Clients ---

@pytest.mark.asyncio
async def test_client_crud(client):
    created = await client.post("/v1/clients", json={
        "first_name": "Alice", "last_name": "Smith", "email": "alice@test.com", "phone": "+380991234567"
    })
    assert created.status_code == 201
    client_id = created.json()["id"]
    
    listed = (await client.get("/v1/clients")).json()
    assert [c["id"] for c in listed] == [client_id]
    
    updated = await client.put(f"/v1/clients/{client_id}", json={
        "first_name": "Alice", "last_name": "Brown", "email": "alice@test.com", "phone": "+380991234567"
    })
    assert updated.json()["last_name"] == "Brown"
    
    assert (await client.delete(f"/v1/clients/{client_id}")).status_code == 204
    assert (await client.get(f"/v1/clients/{client_id}")).status_code == 404


@pytest.mark.asyncio
@pytest.mark.parametrize("overrides", [
    {"email": "not-an-email"},
    {"phone": "12345"},
    {"phone": "+38-099-123-45-67"},
    {"first_name": ""},
])
async def test_client_validation(client, overrides):
    payload = {"first_name": "Alice", "last_name": "Smith", "email": "alice@test.com", "phone": "+380991234567"}
    payload.update(overrides)
    
    response = await client.post("/v1/clients", json=payload)
    
    assert response.status_code == 422


# --- Employees ---

@pytest.mark.asyncio
async def test_employee_requires_existing_post_office(client):
    response = await client.post("/v1/employees", json={
        "first_name": "Olena", "last_name": "Koval", "position": "CLERK", "post_office_id": 42
    })
    
    assert response.status_code == 404
    assert "Post Office" in response.json()["message"]


@pytest.mark.asyncio
async def test_employee_crud_and_listing(client):
    kyiv = await create_post_office(client)
    lviv = await create_post_office(client, name="Lviv Main", city="Lviv", postcode="79000", street="Slovatskoho 1")
    
    clerk = (await client.post("/v1/employees", json={
        "first_name": "Olena", "last_name": "Koval", "position": "CLERK", "post_office_id": kyiv["id"]
    })).json()
    await client.post("/v1/employees", json={
        "first_name": "Taras", "last_name": "Bondar", "position": "DRIVER", "post_office_id": lviv["id"]
    })
    
    everyone = (await client.get("/v1/employees")).json()
    assert everyone["total"] == 2
    
    at_kyiv = (await client.get(f"/v1/employees/by-post-office/{kyiv['id']}")).json()
    assert [e["id"] for e in at_kyiv["employees"]] == [clerk["id"]]
    
    moved = await client.put(f"/v1/employees/{clerk['id']}", json={
        "first_name": "Olena", "last_name": "Koval", "position": "MANAGER", "post_office_id": lviv["id"]
    })
    assert moved.status_code == 200
    assert moved.json()["position"] == "MANAGER"
    assert moved.json()["post_office_id"] == lviv["id"]
    
    bad_move = await client.put(f"/v1/employees/{clerk['id']}", json={
        "first_name": "Olena", "last_name": "Koval", "position": "MANAGER", "post_office_id": 999
    })
    assert bad_move.status_code == 404
    
    assert (await client.delete(f"/v1/employees/{clerk['id']}")).status_code == 204
    assert (await client.get(f"/v1/employees/{clerk['id']}")).status_code == 404


@pytest.mark.asyncio
async def test_health_and_root(client):
    health = await client.get("/health")
    assert health.json()["status"] == "healthy"
    
    root = await client.get("/")
    assert root.json()["docs"] == "/docs"
