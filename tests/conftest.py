import os

os.environ["JWT_SECRET"] = "test-secret"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BCRYPT_ROUNDS"] = "4"

import pytest
from fastapi.testclient import TestClient

from core.broadcast import manager
from core.totp import generate_totp
from database import engine
from main import app
from models import Base


@pytest.fixture(autouse=True)
def fresh_state():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    manager.clear()
    yield
    manager.clear()


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def register(client):
    def _register(username="alice", password="s3cret"):
        res = client.post("/register", json={"username": username, "password": password})
        assert res.status_code == 200, res.text
        return res.json()
    return _register


@pytest.fixture
def login(client):
    def _login(user, password="s3cret"):
        res = client.post(
            "/login",
            json={
                "username": user["username"],
                "password": password,
                "otp": generate_totp(user["otpSecret"]),
            },
        )
        assert res.status_code == 200, res.text
        return {"Authorization": f"Bearer {res.json()['token']}"}
    return _login
