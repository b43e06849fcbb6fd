from __future__ import annotations

from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.http import HttpRequest, HttpResponse
from django.shortcuts import get_object_or_404, redirect, render
from django.views.decorators.http import require_http_methods

from revisit_app.surveys.models import Survey
from revisit_app.surveys.permissions import require_can_edit

from .forms import SurveyRedirectSettingsForm
from .lookups import get_resolver


@login_required
@require_http_methods(["GET", "POST"])
def survey_redirect_settings(request: HttpRequest, slug: str) -> HttpResponse:
    survey = get_object_or_404(Survey, slug=slug)
    require_can_edit(request.user, survey)
    resolver = get_resolver()
    schema = resolver.survey_form_schema(survey.id)
    if request.method == "POST":
        form = SurveyRedirectSettingsForm(request.POST, schema=schema)
        if form.is_valid():
            resolver.apply(survey.id, form.cleaned_data)
            messages.success(request, "Redirect settings saved.")
            return redirect("redirects:settings", slug=slug)
    else:
        form = SurveyRedirectSettingsForm(schema=schema)
    return render(
        request,
        "redirects/survey_settings.html",
        {"survey": survey, "form": form},
    )
