from __future__ import annotations

import logging

from django.contrib import messages
from django.http import Http404, HttpRequest, HttpResponse
from django.shortcuts import get_object_or_404, redirect, render
from django.views.decorators.http import require_http_methods
from django_ratelimit.decorators import ratelimit

from .models import Survey, SurveyAccessToken, SurveyQuestion, SurveyResponse
from .signals import INVALID_TOKEN, SURVEY_NOT_ACTIVE, survey_access_denied

logger = logging.getLogger(__name__)


def session_key(survey: Survey) -> str:
    return f"survey_{survey.id}"


def _deny_access(
    request: HttpRequest,
    survey: Survey,
    reason: str,
    token: str | None = None,
    message: str | None = None,
) -> HttpResponse:
    """Announce the denial; return the first response a receiver offers, else 404.

    ``message`` is only queued for the participant when the denial stands.
    """
    results = survey_access_denied.send(
        sender=Survey,
        request=request,
        survey_id=survey.id,
        reason=reason,
        token=token,
    )
    for _receiver, result in results:
        if isinstance(result, HttpResponse):
            return result
    if message:
        messages.error(request, message)
    raise Http404()


@require_http_methods(["GET", "POST"])
@ratelimit(key="ip", rate="10/m", block=True)
def survey_take(request: HttpRequest, slug: str) -> HttpResponse:
    """Participant-facing endpoint for PUBLIC surveys.

    TOKEN surveys are forwarded to their dedicated route when a ``?token=``
    parameter is present; without one, access is denied as an invalid token.
    """
    survey = get_object_or_404(Survey, slug=slug)
    if not survey.is_live():
        return _deny_access(request, survey, SURVEY_NOT_ACTIVE)
    if survey.visibility == Survey.Visibility.TOKEN:
        token = (request.GET.get("token") or "").strip()
        if token:
            return redirect("surveys:take_token", slug=slug, token=token)
        return _deny_access(request, survey, INVALID_TOKEN)
    return _handle_participant_submission(request, survey, token_obj=None)


@require_http_methods(["GET", "POST"])
@ratelimit(key="ip", rate="10/m", block=True)
def survey_take_token(request: HttpRequest, slug: str, token: str) -> HttpResponse:
    survey = get_object_or_404(Survey, slug=slug)
    if not survey.is_live():
        return _deny_access(request, survey, SURVEY_NOT_ACTIVE, token=token)
    if survey.visibility != Survey.Visibility.TOKEN:
        raise Http404()
    tok = SurveyAccessToken.objects.filter(survey=survey, token=token).first()
    if tok is None or not tok.is_valid():
        return _deny_access(
            request,
            survey,
            INVALID_TOKEN,
            token=token,
            message="This invite link has expired or already been used.",
        )
    request.session[session_key(survey)] = {"token": tok.token}
    return _handle_participant_submission(request, survey, token_obj=tok)


def _handle_participant_submission(
    request: HttpRequest, survey: Survey, token_obj: SurveyAccessToken | None
) -> HttpResponse:
    questions = list(survey.questions.all())
    language = (
        request.POST.get("lang")
        or request.GET.get("lang")
        or (token_obj.language if token_obj else "")
        or survey.language
    )

    if request.method == "POST":
        answers = {}
        for q in questions:
            key = f"q_{q.id}"
            value = (
                request.POST.getlist(key)
                if q.type == SurveyQuestion.Types.MULTIPLE_CHOICE_MULTI
                else request.POST.get(key)
            )
            answers[q.field_name] = value

        SurveyResponse.objects.create(
            survey=survey,
            token=token_obj.token if token_obj else "",
            language=language,
            answers=answers,
            submitted_by=request.user if request.user.is_authenticated else None,
        )

        if token_obj:
            token_obj.mark_completed()
            logger.info("Token completed for survey %s", survey.id)

        messages.success(request, "Thank you for your response.")
        return redirect("surveys:thank_you", slug=survey.slug)

    for i, q in enumerate(questions, start=1):
        setattr(q, "idx", i)
        setattr(q, "display_text", q.localized_text(language))
    ctx = {
        "survey": survey,
        "survey_title": survey.localized_title(language),
        "questions": questions,
        "language": language,
    }
    return render(request, "surveys/detail.html", ctx)


@require_http_methods(["GET"])
def survey_thank_you(request: HttpRequest, slug: str) -> HttpResponse:
    """Simple post-submission landing page for participants.

    Does not leak whether a survey exists beyond being reachable from a valid submission.
    """
    survey = Survey.objects.filter(slug=slug).first()
    # Render generic thank you even if survey missing to avoid information leakage
    return render(request, "surveys/thank_you.html", {"survey": survey})
