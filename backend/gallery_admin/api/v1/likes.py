"""Like endpoints for signed-in viewers."""

from __future__ import annotations

from flask import Blueprint

from gallery_admin.api.deps import json_body, ok, parse_pagination, timing
from gallery_admin.api.guards import authenticate, current_user
from gallery_admin.schemas import LikeSchema, LikeToggleSchema, build_pagination
from gallery_admin.services.likes.dto import LikeToggleIn
from gallery_admin.services.likes.service import LikeService

bp = Blueprint("likes", __name__)

likes_schema = LikeSchema(many=True)
toggle_schema = LikeToggleSchema()


@bp.get("")
@authenticate
@timing
def list_likes():
    pagination = parse_pagination(default_limit=20)
    page = LikeService().list_likes(
        current_user().id, page=pagination.page, limit=pagination.limit
    )
    payload = {"likes": likes_schema.dump(page.items), "pagination": build_pagination(page)}
    return ok("Likes retrieved successfully", payload)


@bp.post("/<int:image_id>/toggle")
@authenticate
@timing
def toggle_like(image_id: int):
    data = toggle_schema.load(json_body())
    liked = None if data["status"] is None else data["status"] == "like"
    state = LikeService().set_like(
        LikeToggleIn(user_id=current_user().id, image_id=image_id, liked=liked)
    )
    message = "Image liked" if state.is_liked else "Image unliked"
    return ok(message, {"isLiked": state.is_liked})
