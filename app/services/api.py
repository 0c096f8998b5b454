# app/services/api.py

import os
import requests
from dotenv import load_dotenv

load_dotenv()

# Base URL of the marketplace backend
FASTAPI_URL = os.getenv("MARKET_API_URL", "http://localhost:8000")

TIMEOUT = 10


def _auth_headers(token):
    return {"Authorization": f"Bearer {token}"}


def _result(res):
    """
    Returns the decoded body on success, otherwise {"error": ...}.
    """
    try:
        data = res.json()
    except ValueError:
        data = None

    if res.ok:
        return data
    if isinstance(data, dict) and data.get("error"):
        return {"error": data["error"]}
    return {"error": f"Status {res.status_code}"}


def _request(method, path, token=None, **kwargs):
    headers = _auth_headers(token) if token else None
    try:
        res = requests.request(
            method,
            f"{FASTAPI_URL}{path}",
            headers=headers,
            timeout=TIMEOUT,
            **kwargs,
        )
    except requests.RequestException as e:
        return {"error": str(e)}
    return _result(res)


# -------------------------------
# Authentication
# -------------------------------

def register_user(username, password):
    """
    Registers a user. On success the response carries the OTP secret,
    which the server never discloses again.
    """
    return _request("POST", "/register", json={"username": username, "password": password})


def login_user(username, password, otp=None):
    """
    Logs in and returns {"token": ...} or {"error": ...}.
    """
    payload = {"username": username, "password": password}
    if otp:
        payload["otp"] = otp
    return _request("POST", "/login", json=payload)


def get_user_info(token):
    return _request("GET", "/me", token=token)


# -------------------------
# Products
# -------------------------

def list_products():
    data = _request("GET", "/products")
    return data if isinstance(data, list) else []


def create_product(token, name, price, description=None):
    payload = {"name": name, "price": price}
    if description:
        payload["description"] = description
    return _request("POST", "/products", token=token, json=payload)


def update_product(token, product_id, **changes):
    return _request("PUT", f"/products/{product_id}", token=token, json=changes)


def delete_product(token, product_id):
    return _request("DELETE", f"/products/{product_id}", token=token)


# -------------------------
# Transactions
# -------------------------

def list_transactions(token):
    data = _request("GET", "/transactions", token=token)
    return data if isinstance(data, list) else []


def create_transaction(token, to_user_id, amount, product_id=None):
    payload = {"toUserId": to_user_id, "amount": amount}
    if product_id is not None:
        payload["productId"] = product_id
    return _request("POST", "/transactions", token=token, json=payload)


def update_transaction_status(token, transaction_id, status):
    return _request("PATCH", f"/transactions/{transaction_id}", token=token, json={"status": status})
