from __future__ import annotations

from django.core.exceptions import PermissionDenied

from .models import Survey


def can_edit_survey(user, survey: Survey) -> bool:
    if not user.is_authenticated:
        return False
    if survey.owner_id == getattr(user, "id", None):
        return True
    return bool(user.is_superuser)


def require_can_edit(user, survey: Survey) -> None:
    if not can_edit_survey(user, survey):
        raise PermissionDenied("You do not have permission to edit this survey.")
