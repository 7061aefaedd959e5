"""
Local fake of the DummyJSON endpoints used by the API suites.

The integration tests run the API helper against this Flask app over real
HTTP, so login, token refresh and cart lookups can be exercised without
reaching the public service. Responses mirror the shapes DummyJSON returns.

Endpoints:
    POST /auth/login                -- Credentials in, user record plus tokens out.
    GET  /auth/me                   -- Current user for a Bearer access token.
    POST /auth/refresh              -- New token pair for a refresh token.
    GET  /carts                     -- Paginated cart list (``limit``/``skip``).
    GET  /carts/<id>                -- Single cart, 404 when unknown.
    GET  /carts/user/<id>           -- Carts belonging to one user.
    GET  /http/<status>/<message>   -- Answers with the requested status.
    *    /echo                      -- Reflects method, headers, query and body.
    GET  /plain                     -- Non-JSON body.

Key Concepts Demonstrated:
- Application factory pattern for isolated test instances
- Stateless JWT issuing and verification with PyJWT
- Consistent ``{"message": ...}`` error envelope, as DummyJSON uses
"""

from __future__ import annotations

import copy
import logging
from typing import Any

import jwt
from faker import Faker
from flask import Blueprint, Flask, Response, current_app, jsonify, request

from shared.test_helpers import create_fake_token, decode_fake_token

logger = logging.getLogger(__name__)

fake_api_bp = Blueprint("fake_dummyjson", __name__)

DEFAULT_USERS: list[dict[str, Any]] = [
    {
        "id": 1,
        "username": "emilys",
        "password": "emilyspass",
        "email": "emily.johnson@x.dummyjson.com",
        "firstName": "Emily",
        "lastName": "Johnson",
        "gender": "female",
        "image": "https://dummyjson.com/icon/emilys/128",
    },
    {
        "id": 11,
        "username": "emmaj",
        "password": "emmajpass",
        "email": "emma.miller@x.dummyjson.com",
        "firstName": "Emma",
        "lastName": "Miller",
        "gender": "female",
        "image": "https://dummyjson.com/icon/emmaj/128",
    },
]


def build_carts(user_ids: list[int], per_user: int = 2, seed: int = 1234) -> list[dict[str, Any]]:
    """Generate a deterministic set of carts for the given users."""
    fake = Faker()
    fake.seed_instance(seed)
    carts = []
    cart_id = 1
    for user_id in user_ids:
        for _ in range(per_user):
            products = []
            for product_index in range(fake.random_int(min=1, max=4)):
                quantity = fake.random_int(min=1, max=5)
                price = fake.pyfloat(right_digits=2, min_value=1, max_value=500)
                products.append(
                    {
                        "id": cart_id * 10 + product_index,
                        "title": fake.catch_phrase(),
                        "price": price,
                        "quantity": quantity,
                        "total": round(price * quantity, 2),
                    }
                )
            carts.append(
                {
                    "id": cart_id,
                    "products": products,
                    "total": round(sum(p["total"] for p in products), 2),
                    "userId": user_id,
                    "totalProducts": len(products),
                    "totalQuantity": sum(p["quantity"] for p in products),
                }
            )
            cart_id += 1
    return carts


# =====================================================================
# Helper Functions
# =====================================================================


def _message(message: str, status_code: int) -> tuple[Response, int]:
    return jsonify({"message": message}), status_code


def _public_user(user: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in user.items() if key != "password"}


def _find_user(user_id: int) -> dict[str, Any] | None:
    for user in current_app.config["FAKE_USERS"]:
        if user["id"] == user_id:
            return user
    return None


def _token_pair(user: dict[str, Any]) -> dict[str, str]:
    return {
        "accessToken": create_fake_token(user["id"], user["username"], "access"),
        "refreshToken": create_fake_token(user["id"], user["username"], "refresh"),
    }


def _int_arg(name: str, default: int) -> int:
    try:
        return int(request.args.get(name, default))
    except ValueError:
        return default


# =====================================================================
# Auth Routes
# =====================================================================


@fake_api_bp.route("/auth/login", methods=["POST"])
def login() -> tuple[Response, int]:
    data = request.get_json(silent=True) or {}
    username = data.get("username")
    password = data.get("password")
    if not username or not password:
        return _message("Username and password required", 400)

    for user in current_app.config["FAKE_USERS"]:
        if user["username"] == username and user["password"] == password:
            body = {**_token_pair(user), **_public_user(user)}
            response = jsonify(body)
            # DummyJSON also sets the token as a cookie.
            response.set_cookie("accessToken", body["accessToken"], httponly=True)
            logger.info("Fake login succeeded for %s", username)
            return response, 200

    return _message("Invalid credentials", 400)


@fake_api_bp.route("/auth/me", methods=["GET"])
def current_user() -> tuple[Response, int]:
    auth_header = request.headers.get("Authorization", "")
    if not auth_header.startswith("Bearer "):
        return _message("Access Token is required", 401)

    try:
        claims = decode_fake_token(auth_header[len("Bearer "):], "access")
    except jwt.InvalidTokenError:
        return _message("Invalid/expired Token!", 401)

    user = _find_user(claims["id"])
    if user is None:
        return _message("User not found", 404)
    return jsonify(_public_user(user)), 200


@fake_api_bp.route("/auth/refresh", methods=["POST"])
def refresh() -> tuple[Response, int]:
    data = request.get_json(silent=True) or {}
    refresh_token = data.get("refreshToken")
    if not refresh_token:
        return _message("Refresh token required", 401)

    try:
        claims = decode_fake_token(refresh_token, "refresh")
    except jwt.InvalidTokenError:
        return _message("Invalid refresh token", 403)

    user = _find_user(claims["id"])
    if user is None:
        return _message("User not found", 404)
    return jsonify(_token_pair(user)), 200


# =====================================================================
# Cart Routes
# =====================================================================


@fake_api_bp.route("/carts", methods=["GET"])
def list_carts() -> tuple[Response, int]:
    carts = current_app.config["FAKE_CARTS"]
    skip = max(_int_arg("skip", 0), 0)
    limit = max(_int_arg("limit", 30), 0)
    page = carts[skip:skip + limit] if limit else carts[skip:]
    return jsonify({"carts": page, "total": len(carts), "skip": skip, "limit": len(page)}), 200


@fake_api_bp.route("/carts/<int:cart_id>", methods=["GET"])
def get_cart(cart_id: int) -> tuple[Response, int]:
    for cart in current_app.config["FAKE_CARTS"]:
        if cart["id"] == cart_id:
            return jsonify(cart), 200
    return _message(f"Cart with id '{cart_id}' not found", 404)


@fake_api_bp.route("/carts/user/<int:user_id>", methods=["GET"])
def get_user_carts(user_id: int) -> tuple[Response, int]:
    carts = [cart for cart in current_app.config["FAKE_CARTS"] if cart["userId"] == user_id]
    return jsonify({"carts": carts, "total": len(carts), "skip": 0, "limit": len(carts)}), 200


# =====================================================================
# Utility Routes
# =====================================================================


@fake_api_bp.route("/http/<int:status>", defaults={"message": ""}, methods=["GET"])
@fake_api_bp.route("/http/<int:status>/<message>", methods=["GET"])
def http_status(status: int, message: str) -> tuple[Response, int]:
    return jsonify({"status": str(status), "message": message or "OK"}), status


@fake_api_bp.route("/echo", methods=["GET", "POST", "PUT", "PATCH", "DELETE"])
def echo() -> tuple[Response, int]:
    return jsonify(
        {
            "method": request.method,
            "headers": dict(request.headers.items()),
            "args": list(request.args.items(multi=True)),
            "query": request.query_string.decode("utf-8"),
            "body": request.get_data(as_text=True),
            "cookies": dict(request.cookies),
        }
    ), 200


@fake_api_bp.route("/plain", methods=["GET"])
def plain() -> Response:
    return Response("pong", mimetype="text/plain")


def create_app(users: list[dict[str, Any]] | None = None) -> Flask:
    """
    Create a fake DummyJSON application.

    Args:
        users: User records (including ``password``). Defaults to
            ``DEFAULT_USERS``.

    Returns:
        Configured Flask application.
    """
    app = Flask(__name__)
    app.config["TESTING"] = True
    app.config["FAKE_USERS"] = copy.deepcopy(users or DEFAULT_USERS)
    app.config["FAKE_CARTS"] = build_carts([user["id"] for user in app.config["FAKE_USERS"]])
    app.register_blueprint(fake_api_bp)
    logger.info("Created fake DummyJSON app with %d users", len(app.config["FAKE_USERS"]))
    return app
