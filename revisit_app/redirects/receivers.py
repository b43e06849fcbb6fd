from __future__ import annotations

import logging

from django.core.exceptions import DisallowedRedirect
from django.dispatch import receiver
from django.http import HttpResponseRedirect

from revisit_app.surveys.signals import INVALID_TOKEN, survey_access_denied

from .decision import Redirect
from .lookups import RequestTokenSource, build_decider

logger = logging.getLogger(__name__)


@receiver(survey_access_denied, dispatch_uid="redirect_completed_participant")
def redirect_completed_participant(sender, request, survey_id, reason, token=None, **kwargs):
    """Send participants whose invite token is already used to the survey's redirect URL."""
    if reason != INVALID_TOKEN or not survey_id:
        return None

    decision = build_decider().decide(survey_id, RequestTokenSource(request, token))
    if not isinstance(decision, Redirect):
        return None

    try:
        response = HttpResponseRedirect(decision.url)
    except DisallowedRedirect:
        logger.debug("Redirect target for survey %s uses a refused scheme", survey_id)
        return None
    logger.info("Redirecting completed participant of survey %s", survey_id)
    return response
