"""Viewer-facing endpoints: profile, password, public feed and footer links."""

from __future__ import annotations

from flask import Blueprint, g

from gallery_admin.api.deps import image_service, json_body, ok, timing, user_service
from gallery_admin.api.guards import authenticate, current_user, optional_user
from gallery_admin.schemas import (
    PasswordChangeSchema,
    RandomImageSchema,
    RandomImagesQuerySchema,
    SocialMediaLinkSchema,
    UserSchema,
)
from gallery_admin.services.images.dto import RandomImagesIn
from gallery_admin.services.social_media.service import SocialMediaService

bp = Blueprint("users", __name__)

user_schema = UserSchema()
password_schema = PasswordChangeSchema()
random_query_schema = RandomImagesQuerySchema()
random_images_schema = RandomImageSchema(many=True)
links_schema = SocialMediaLinkSchema(many=True)


@bp.get("/social-media")
@timing
def social_media():
    links = SocialMediaService().list_links()
    return ok("Social media links retrieved successfully", links_schema.dump(links))


@bp.post("/random-images")
@optional_user
@timing
def random_images():
    """Up to ten unseen images; ``isLiked`` reflects the caller when signed in."""

    data = random_query_schema.load(json_body())
    viewer = g.current_user
    images = image_service(with_storage=False).random_images(
        RandomImagesIn(
            seen_ids=tuple(data["seen_ids"]),
            viewer_id=viewer.id if viewer is not None else None,
        )
    )
    return ok("Random images retrieved successfully", random_images_schema.dump(images))


@bp.put("/password")
@authenticate
@timing
def change_password():
    data = password_schema.load(json_body())
    user_service().change_password(current_user().id, data["password"])
    return ok("Password updated successfully")


@bp.get("/<int:user_id>")
@authenticate
@timing
def get_user(user_id: int):
    user = user_service().get_user(user_id)
    return ok("User retrieved successfully", user_schema.dump(user))
