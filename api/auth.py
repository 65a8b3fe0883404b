"""
Authentication blueprint:
- POST /auth/register
- POST /auth/login
- POST /auth/logout

The implementation:
- Uses argon2 for password hashing (via utils.security)
- Issues short-lived HS256 access tokens and, when enabled, opaque refresh tokens
- Stores refresh tokens in DB (RefreshToken model) so they can be revoked
"""
from __future__ import annotations

from flask import Blueprint, request, jsonify, current_app

from models.schemas.auth import LoginSchema, LogoutSchema, LoginOutSchema
from models.schemas.user import UserCreateSchema, UserOutSchema
from utils.decorators import jwt_required

bp = Blueprint("auth", __name__)

user_create_schema = UserCreateSchema()
user_out_schema = UserOutSchema()
login_schema = LoginSchema()
logout_schema = LogoutSchema()
login_out_schema = LoginOutSchema()


@bp.post("/register")
def register():
    """
    register a new user.
    ---
    tags:
      - Auth
    consumes:
      - application/json
    parameters:
      - in: body
        name: body
        schema:
          type: object
          properties:
            firstName: { type: string }
            lastName: { type: string }
            email: { type: string }
            password: { type: string }
    responses:
      201:
        description: Created
      409:
        description: Email already registered
      422:
        description: Validation error
    """
    payload = request.get_json(silent=True) or {}
    data = user_create_schema.load(payload)

    user = current_app.extensions["user_service"].register(**data)

    return jsonify(
        {
            "data": user_out_schema.dump(user)
        }
    ), 201


@bp.post("/login")
def login():
    """
    Login: return an access token and, when enabled, a refresh token
    ---
    tags:
      - Auth
    consumes:
      - application/json
    parameters:
      -  in: body
         name: body
         schema:
           type: object
           properties:
             email: { type: string }
             password: { type: string }
    responses:
      200:
        description: OK (returns token and refreshToken)
      401:
        description: Invalid credentials
    """
    payload = request.get_json(silent=True) or {}
    data = login_schema.load(payload)

    result = current_app.extensions["auth_service"].login(data["email"], data["password"])

    body = {"token": result.token}
    if result.refresh_token:
        body["refresh_token"] = result.refresh_token
    return jsonify(login_out_schema.dump(body)), 200


@bp.post("/logout")
@jwt_required()
def logout(ctx):
    """
    logout: revokes a refresh token owned by the caller
    ---
    tags:
      - Auth
    security:
      - Bearer: []
    consumes:
      - application/json
    parameters:
      -  in: body
         name: body
         schema:
           type: object
           properties:
             refreshToken: { type: string }
    responses:
      204:
        description: ""
      401:
        description: Unauthorized
      404:
        description: Unknown refresh token
    """
    payload = request.get_json(silent=True) or {}
    data = logout_schema.load(payload)

    current_app.extensions["auth_service"].revoke_refresh_token(ctx, data["refresh_token"])
    return ("", 204)
