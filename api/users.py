from __future__ import annotations

from flask import Blueprint, request, jsonify, abort, current_app
from typing import Tuple

from models.schemas.user import UserOutSchema
from utils.decorators import jwt_required

MAX_LIMIT = 100

bp = Blueprint("users", __name__)

user_out_schema = UserOutSchema()
user_list_out_schema = UserOutSchema(many=True)


def parse_pagination() -> Tuple[int, int]:
    try:
        page = int(request.args.get("page", "1"))
        limit = int(request.args.get("limit", "20"))
        page = max(page, 1)
        limit = max(1, min(limit, MAX_LIMIT))
        return page, limit
    except ValueError:
        abort(400, description="page and limit must be integers")


@bp.get("/users")
@jwt_required()
def list_users(ctx):
    """
    List all Users
    ---
    tags:
      - Users
    security:
      - Bearer: []
    parameters:
      - in: query
        name: page
        type: integer
      - in: query
        name: limit
        type: integer
    responses:
      200: { description: OK }
      401: { description: Unauthorized }
    """
    page, limit = parse_pagination()
    rows, total = current_app.extensions["user_service"].list(page=page, limit=limit)
    return jsonify(
        {
            "data": user_list_out_schema.dump(rows),
            "meta": {"page": page, "limit": limit, "total": total}
        }
    )


@bp.get("/users/<user_id>")
@jwt_required()
def get_user(user_id: str, ctx):
    """
    Get a user by id
    ---
    tags:
      - Users
    security:
      - Bearer: []
    parameters:
      - in: path
        name: user_id
        type: string
        required: true
    responses:
      200: { description: OK }
      401: { description: Unauthorized }
      404: { description: Not found }
    """
    user = current_app.extensions["user_service"].get(user_id)
    return jsonify({"data": user_out_schema.dump(user)}), 200


@bp.get("/me")
@jwt_required()
def me(ctx):
    """
    Get current user info.
    ---
    tags:
      - Users
    security:
      - Bearer: []
    responses:
      200:
        description: OK
      401:
        description: Unauthorized
    """
    user = current_app.extensions["user_service"].current(ctx)
    return jsonify(
        {
            "data": user_out_schema.dump(user)
        }
    ), 200
