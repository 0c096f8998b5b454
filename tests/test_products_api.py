import pytest


@pytest.fixture
def alice(register, login):
    user = register("alice")
    return user, login(user)


@pytest.fixture
def bob(register, login):
    user = register("bob")
    return user, login(user)


def test_create_product_requires_token(client):
    res = client.post("/products", json={"name": "Lamp", "price": 12.5})
    assert res.status_code == 401
    assert res.json() == {"error": "Missing token"}


def test_create_and_list_products_with_owner(client, alice):
    user, headers = alice
    res = client.post(
        "/products",
        json={"name": "Lamp", "price": 12.5, "description": "Brass"},
        headers=headers,
    )

    assert res.status_code == 200
    product = res.json()
    assert product["name"] == "Lamp"
    assert product["price"] == 12.5
    assert product["userId"] == user["id"]
    assert product["user"] == {"id": user["id"], "username": "alice"}

    listing = client.get("/products").json()
    assert [p["id"] for p in listing] == [product["id"]]
    assert "otpSecret" not in listing[0]["user"]
    assert "hashedPassword" not in listing[0]["user"]


@pytest.mark.parametrize(
    "payload",
    [
        {"name": "Lamp"},
        {"name": "", "price": 3},
        {"name": "Lamp", "price": "12"},
        {"name": "Lamp", "price": True},
    ],
)
def test_create_product_rejects_invalid_data(client, alice, payload):
    _, headers = alice
    res = client.post("/products", json=payload, headers=headers)

    assert res.status_code == 400
    assert res.json() == {"error": "Invalid data"}


def test_integer_price_is_accepted(client, alice):
    _, headers = alice
    res = client.post("/products", json={"name": "Chair", "price": 20}, headers=headers)
    assert res.status_code == 200
    assert res.json()["price"] == 20


def test_owner_can_update_and_delete(client, alice):
    _, headers = alice
    product = client.post("/products", json={"name": "Lamp", "price": 1}, headers=headers).json()

    res = client.put(f"/products/{product['id']}", json={"price": 2.5}, headers=headers)
    assert res.status_code == 200
    assert res.json()["price"] == 2.5
    assert res.json()["name"] == "Lamp"

    res = client.delete(f"/products/{product['id']}", headers=headers)
    assert res.status_code == 200
    assert res.json() == {"id": product["id"]}

    assert client.get(f"/products/{product['id']}").status_code == 404


def test_update_rejects_null_required_fields(client, alice):
    _, headers = alice
    product = client.post("/products", json={"name": "Lamp", "price": 1}, headers=headers).json()

    res = client.put(f"/products/{product['id']}", json={"name": None}, headers=headers)
    assert res.status_code == 400


def test_non_owner_gets_not_found(client, alice, bob):
    _, alice_headers = alice
    _, bob_headers = bob
    product = client.post("/products", json={"name": "Lamp", "price": 1}, headers=alice_headers).json()

    put = client.put(f"/products/{product['id']}", json={"price": 0}, headers=bob_headers)
    delete = client.delete(f"/products/{product['id']}", headers=bob_headers)
    missing = client.delete("/products/9999", headers=bob_headers)

    assert put.status_code == delete.status_code == missing.status_code == 404
    assert put.json() == delete.json() == missing.json() == {"error": "Not found"}
    assert client.get(f"/products/{product['id']}").json()["price"] == 1
