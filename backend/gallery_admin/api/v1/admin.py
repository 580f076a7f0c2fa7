"""Admin endpoints: dashboard, user management, image library and footer links.

Every route requires an authenticated admin.
"""

from __future__ import annotations

from flask import Blueprint, request

from gallery_admin.api.deps import image_service, json_body, ok, parse_pagination, timing, user_service
from gallery_admin.api.guards import authenticate, current_user, is_admin
from gallery_admin.core.errors import BadRequest
from gallery_admin.schemas import (
    ImageSchema,
    SocialMediaLinkSchema,
    SocialMediaUpdateSchema,
    UserListQuerySchema,
    UserSchema,
    UserStatusSchema,
    UserUpdateSchema,
    build_pagination,
)
from gallery_admin.services.dashboard.service import DashboardService
from gallery_admin.services.images.dto import ImageUploadIn
from gallery_admin.services.social_media.service import INVALID_LINKS_BODY, SocialMediaService
from gallery_admin.services.users.dto import UserListIn, UserUpdateIn

bp = Blueprint("admin", __name__)

user_schema = UserSchema()
users_schema = UserSchema(many=True)
user_query_schema = UserListQuerySchema()
user_update_schema = UserUpdateSchema()
user_status_schema = UserStatusSchema()
image_schema = ImageSchema()
images_schema = ImageSchema(many=True)
link_schema = SocialMediaLinkSchema()
links_schema = SocialMediaLinkSchema(many=True)
links_update_schema = SocialMediaUpdateSchema()


@authenticate
@is_admin
def _admin_gate() -> None:
    return None


@bp.before_request
def _require_admin():
    """Gate the whole blueprint. CORS preflights pass through unauthenticated."""
    if request.method == "OPTIONS":
        return None
    return _admin_gate()


# --------------------------------------------------------------------------- #
# Dashboard
# --------------------------------------------------------------------------- #


@bp.get("/dashboard/stats")
@timing
def dashboard_stats():
    stats = DashboardService().stats()
    payload = {
        "totalUsers": stats.total_users,
        "activeUsers": stats.active_users,
        "pendingUsers": stats.pending_users,
        "blockedUsers": stats.blocked_users,
        "totalImages": stats.total_images,
        "totalLikes": stats.total_likes,
    }
    return ok("Dashboard stats retrieved successfully", payload)


# --------------------------------------------------------------------------- #
# Users
# --------------------------------------------------------------------------- #


@bp.get("/users")
@timing
def list_users():
    query = user_query_schema.load(request.args)
    page = user_service().list_users(UserListIn(**query), actor_id=current_user().id)
    payload = {"users": users_schema.dump(page.items), "pagination": build_pagination(page)}
    return ok("Users retrieved successfully", payload)


@bp.put("/users/<int:user_id>")
@timing
def update_user(user_id: int):
    fields = user_update_schema.load(json_body())
    user = user_service().update_user(user_id, UserUpdateIn(fields=fields))
    return ok("User updated successfully", user_schema.dump(user))


@bp.delete("/users/<int:user_id>")
@timing
def delete_user(user_id: int):
    user_service().delete_user(user_id, actor_id=current_user().id)
    return ok("User deleted successfully")


@bp.patch("/users/<int:user_id>/status")
@timing
def update_user_status(user_id: int):
    data = user_status_schema.load(json_body())
    user = user_service().set_status(user_id, data["status"], actor_id=current_user().id)
    return ok(f"User status updated to {user.status.value}", user_schema.dump(user))


# --------------------------------------------------------------------------- #
# Images
# --------------------------------------------------------------------------- #


@bp.post("/images/upload")
@timing
def upload_image():
    upload = request.files.get("image")
    if upload is None or not upload.filename:
        raise BadRequest("No file uploaded")
    image = image_service().upload(
        ImageUploadIn(
            filename=upload.filename,
            data=upload.read(),
            mimetype=upload.mimetype or "",
            uploaded_by=current_user().id,
        )
    )
    return ok("Image uploaded successfully", image_schema.dump(image), status=201)


@bp.get("/images")
@timing
def list_images():
    pagination = parse_pagination(default_limit=20)
    page = image_service(with_storage=False).list_images(
        page=pagination.page, limit=pagination.limit
    )
    payload = {"images": images_schema.dump(page.items), "pagination": build_pagination(page)}
    return ok("Images retrieved successfully", payload)


@bp.get("/images/<int:image_id>")
@timing
def get_image(image_id: int):
    image = image_service(with_storage=False).get_image(image_id)
    return ok("Image retrieved successfully", image_schema.dump(image))


@bp.delete("/images/<int:image_id>")
@timing
def delete_image(image_id: int):
    image_service().delete_image(image_id)
    return ok("Image deleted successfully")


# --------------------------------------------------------------------------- #
# Social media
# --------------------------------------------------------------------------- #


@bp.put("/social-media")
@timing
def update_social_media():
    data = links_update_schema.load(json_body())
    if data["links"] is None:
        raise BadRequest(INVALID_LINKS_BODY)
    links = SocialMediaService().update_links(data["links"])
    return ok("All social media links updated successfully", links_schema.dump(links))


@bp.patch("/social-media/<string:platform>/toggle")
@timing
def toggle_social_media(platform: str):
    link = SocialMediaService().toggle(platform)
    state = "activated" if link.is_active else "deactivated"
    return ok(f"{link.platform.value} status {state} successfully", link_schema.dump(link))
