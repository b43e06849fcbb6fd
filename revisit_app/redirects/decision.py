"""Decide whether a returning, already-completed participant is redirected.

The decider walks a fixed sequence of gates. The first gate that fails ends
the decision with ``Suppressed(reason)``; passing all of them gives
``Redirect(url)``. Suppression is the normal outcome and is only logged at
debug level.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional, Union

from .options import SettingScope, SettingsResolver
from .rendering import render
from .replacements import build_replacements
from .sanitizer import sanitize_redirect_url

logger = logging.getLogger(__name__)


class SuppressionReason(str, Enum):
    SURVEY_NOT_FOUND = "survey_not_found"
    DISABLED = "disabled"
    EDITABLE = "editable_after_completion"
    NO_TOKEN = "no_token"
    TOKEN_NOT_FOUND = "token_not_found"
    TOKEN_INCOMPLETE = "token_incomplete"
    NO_TEMPLATE = "no_template"
    EMPTY_URL = "empty_url"
    UNSAFE_URL = "unsafe_url"


@dataclass(frozen=True)
class Redirect:
    url: str


@dataclass(frozen=True)
class Suppressed:
    reason: SuppressionReason


Decision = Union[Redirect, Suppressed]


class StaticTokenSource:
    """Token source that always answers with the same token."""

    def __init__(self, token: Optional[str]):
        self.token = token

    def current_token(self, survey_id: int) -> Optional[str]:
        return (self.token or "").strip() or None


class RedirectDecider:
    """Runs the redirect decision for one survey access.

    ``lookups`` provides ``find_survey(survey_id)``,
    ``find_token(survey_id, token)``, ``find_latest_response(survey_id, token)``
    and ``short_field_map(survey, language)``; each finder returns None when
    there is nothing to find.
    """

    def __init__(
        self,
        resolver: SettingsResolver,
        lookups,
        evaluator=None,
        allowed_schemes: Optional[Iterable[str]] = None,
    ):
        self.resolver = resolver
        self.lookups = lookups
        self.evaluator = evaluator
        self.allowed_schemes = list(allowed_schemes or [])

    def _suppress(self, survey_id, reason: SuppressionReason) -> Suppressed:
        logger.debug("No redirect for survey %s: %s", survey_id, reason.value)
        return Suppressed(reason)

    def decide(self, survey_id: int, token_source) -> Decision:
        survey = self.lookups.find_survey(survey_id)
        if survey is None:
            return self._suppress(survey_id, SuppressionReason.SURVEY_NOT_FOUND)

        if not self.resolver.resolve("enabled", SettingScope.SURVEY, survey_id):
            return self._suppress(survey_id, SuppressionReason.DISABLED)

        if (
            self.resolver.resolve("skipIfEditable", SettingScope.SURVEY, survey_id)
            and survey.allow_edit_after_completion
        ):
            return self._suppress(survey_id, SuppressionReason.EDITABLE)

        token_value = token_source.current_token(survey_id)
        if not token_value:
            return self._suppress(survey_id, SuppressionReason.NO_TOKEN)

        token = self.lookups.find_token(survey_id, token_value)
        if token is None:
            return self._suppress(survey_id, SuppressionReason.TOKEN_NOT_FOUND)
        if not token.is_complete():
            return self._suppress(survey_id, SuppressionReason.TOKEN_INCOMPLETE)

        response = self.lookups.find_latest_response(survey_id, token_value)

        template = self.resolver.template_for(survey_id)
        if not template:
            return self._suppress(survey_id, SuppressionReason.NO_TEMPLATE)

        table = build_replacements(
            survey, token, response, field_map=self.lookups.short_field_map
        )
        expression_mode = self.resolver.resolve(
            "parseExpressions", SettingScope.SURVEY, survey_id
        )
        rendered = render(template, table, expression_mode, self.evaluator)

        if not rendered.strip():
            return self._suppress(survey_id, SuppressionReason.EMPTY_URL)
        url = sanitize_redirect_url(rendered, self.allowed_schemes)
        if url is None:
            return self._suppress(survey_id, SuppressionReason.UNSAFE_URL)
        return Redirect(url)
