"""Database-backed collaborators for the redirect decision."""

from __future__ import annotations

from typing import Any, Optional

from django.conf import settings
from django.http import HttpRequest

from revisit_app.surveys.fieldmap import short_field_map
from revisit_app.surveys.models import Survey, SurveyAccessToken, SurveyResponse

from .decision import RedirectDecider
from .models import RedirectSetting
from .options import SettingScope, SettingsResolver


class DatabaseSettingsStore:
    """Settings store over ``RedirectSetting`` rows."""

    def get(self, name: str, scope: SettingScope, survey_id: Optional[int] = None) -> Any:
        scope = SettingScope(scope)
        qs = RedirectSetting.objects.filter(name=name, scope=scope.value)
        if scope is SettingScope.SURVEY:
            qs = qs.filter(survey_id=survey_id)
        row = qs.only("value").first()
        return row.value if row is not None else None

    def set(
        self, name: str, value: Any, scope: SettingScope, survey_id: Optional[int] = None
    ) -> None:
        scope = SettingScope(scope)
        RedirectSetting.objects.update_or_create(
            name=name,
            scope=scope.value,
            survey_id=survey_id if scope is SettingScope.SURVEY else None,
            defaults={"value": value},
        )


class OrmLookups:
    """Survey, token and response finders backed by the surveys app."""

    def find_survey(self, survey_id) -> Optional[Survey]:
        if not survey_id:
            return None
        return Survey.objects.filter(pk=survey_id).first()

    def find_token(self, survey_id, token: str) -> Optional[SurveyAccessToken]:
        return SurveyAccessToken.objects.filter(survey_id=survey_id, token=token).first()

    def find_latest_response(self, survey_id, token: str) -> Optional[SurveyResponse]:
        return (
            SurveyResponse.objects.filter(survey_id=survey_id, token=token)
            .order_by("-id")
            .first()
        )

    def short_field_map(self, survey: Survey, language: str):
        return short_field_map(survey, language)


class RequestTokenSource:
    """Current participant token for a request.

    Checks the token taken from the URL, then the ``token`` request
    parameter, then the token remembered in the session for the survey.
    """

    def __init__(self, request: HttpRequest, token: Optional[str] = None):
        self.request = request
        self.token = token

    def current_token(self, survey_id: int) -> Optional[str]:
        candidate = (
            self.token
            or self.request.GET.get("token")
            or self.request.POST.get("token")
        )
        if candidate and str(candidate).strip():
            return str(candidate).strip()
        session = getattr(self.request, "session", None)
        if session is None:
            return None
        stored = (session.get(f"survey_{survey_id}") or {}).get("token")
        if stored and str(stored).strip():
            return str(stored).strip()
        return None


def get_resolver() -> SettingsResolver:
    return SettingsResolver(DatabaseSettingsStore())


def build_decider() -> RedirectDecider:
    # No evaluator here: render() loads REVISIT_EXPRESSION_EVALUATOR inside its guard
    return RedirectDecider(
        get_resolver(),
        OrmLookups(),
        allowed_schemes=getattr(settings, "REDIRECT_ALLOWED_SCHEMES", []),
    )
