"""Signals sent by the participant-facing survey views."""

from django.dispatch import Signal

# Sent when a participant is refused access to a survey.
#
# Keyword arguments: ``request``, ``survey_id``, ``reason`` and ``token``
# (the token presented in the URL, or None). Known reasons are
# ``invalidToken`` and ``surveyNotActive``. A receiver may return an
# ``HttpResponse``; the view then returns it instead of its own denial.
survey_access_denied = Signal()

INVALID_TOKEN = "invalidToken"
SURVEY_NOT_ACTIVE = "surveyNotActive"
