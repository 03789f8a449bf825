"""
Profile APIs for the signed-in user.

GET /user/me, PUT /user/update, DELETE /user/delete,
GET/PUT /user/notification-settings
"""

import logging

from fastapi import APIRouter

from app.api.auth import CurrentUser
from app.models.common import utcnow
from app.models.user import Education, Project, User
from app.schemas.user import NotificationSettingsUpdate, UserUpdate
from app.services.entity_resolver import SKILLS, populate, resolve_or_raise

logger = logging.getLogger(__name__)
router = APIRouter()

# Never leaves the server
PRIVATE_FIELDS = {
    "password",
    "otp",
    "otp_expiry",
    "two_factor_otp",
    "two_factor_otp_expiry",
    "password_reset_token",
    "password_reset_expires",
    "revision_id",
}


async def user_to_dict(user: User) -> dict:
    """Public view of a user with skill references expanded to {id, name}."""
    data = user.model_dump(mode="json", exclude=PRIVATE_FIELDS)
    data["skills"] = await populate(SKILLS, user.skills)
    for i, project in enumerate(user.projects):
        data["projects"][i]["skills_used"] = await populate(SKILLS, project.skills_used)
    for i, education in enumerate(user.education):
        data["education"][i]["skills"] = await populate(SKILLS, education.skills)
    return data


@router.get("/me", summary="Current user's profile")
async def read_me(current_user: CurrentUser) -> dict:
    return {"user": await user_to_dict(current_user)}


@router.put("/update", summary="Update the current user's profile")
async def update_me(payload: UserUpdate, current_user: CurrentUser) -> dict:
    """
    Write the fields present in the request. Skill tags are resolved (new
    names become Skill entities) before anything is saved, so a tag that
    cannot be resolved rejects the whole update.
    """
    update = payload.model_dump(exclude_unset=True, exclude={"skills", "education", "projects"})

    if payload.skills is not None:
        update["skills"] = await resolve_or_raise(SKILLS, payload.skills)
    if payload.education is not None:
        entries = []
        for item in payload.education:
            fields = item.model_dump(exclude={"id", "skills"})
            if item.id is not None:
                fields["id"] = item.id
            entries.append(Education(**fields, skills=await resolve_or_raise(SKILLS, item.skills)))
        update["education"] = entries
    if payload.projects is not None:
        entries = []
        for item in payload.projects:
            fields = item.model_dump(exclude={"id", "skills_used"})
            if item.id is not None:
                fields["id"] = item.id
            entries.append(Project(**fields, skills_used=await resolve_or_raise(SKILLS, item.skills_used)))
        update["projects"] = entries

    for field_name in ("address", "certifications", "courses", "awards", "reference_contacts"):
        if field_name in update:
            update[field_name] = getattr(payload, field_name)

    for field_name, value in update.items():
        setattr(current_user, field_name, value)
    current_user.updated_at = utcnow()
    await current_user.save_changes()
    logger.info("Updated profile of user %s (%s)", current_user.id, ", ".join(sorted(update)))

    return {"message": "User updated successfully", "user": await user_to_dict(current_user)}


@router.delete("/delete", summary="Delete the current user's account")
async def delete_me(current_user: CurrentUser) -> dict:
    await current_user.delete()
    logger.info("Deleted user %s", current_user.id)
    return {"message": "Account deleted successfully"}


@router.get("/notification-settings", summary="Notification preferences")
async def read_notification_settings(current_user: CurrentUser) -> dict:
    return {
        "settings": [s.model_dump() for s in current_user.notification_settings],
        "sendTime": current_user.notification_send_time or "online",
    }


@router.put("/notification-settings", summary="Update notification preferences")
async def update_notification_settings(payload: NotificationSettingsUpdate, current_user: CurrentUser) -> dict:
    current_user.notification_settings = payload.settings
    current_user.notification_send_time = payload.send_time
    await current_user.save_changes()
    return {"message": "Notification settings updated successfully"}
