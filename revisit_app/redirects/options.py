"""Redirect options and their resolution across global and survey scope.

Every option is stored globally (applies to all surveys) and optionally per
survey. Survey values win; a missing survey value falls back to the option's
global counterpart, then to the option's static default.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional

TRUE_STRINGS = {"1", "true", "on", "yes", "y"}


class SettingScope(str, Enum):
    GLOBAL = "global"
    SURVEY = "survey"


class UnknownOption(KeyError):
    """Raised when an option name is not registered."""


@dataclass(frozen=True)
class OptionSpec:
    name: str
    type: str  # "boolean" or "string"
    default: Any
    label: str
    global_counterpart: Optional[str] = None
    survey_form: bool = False
    placeholder: str = ""

    def coerce(self, value: Any) -> Any:
        if self.type == "boolean":
            return to_bool(value)
        return "" if value is None else str(value)


def to_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in TRUE_STRINGS
    return bool(value)


URL_PLACEHOLDER = "https://example.com/?token={TOKEN}"

OPTIONS: dict[str, OptionSpec] = {
    spec.name: spec
    for spec in [
        OptionSpec(
            "globalEnabled",
            "boolean",
            False,
            "Enable redirect for all surveys by default",
        ),
        OptionSpec(
            "defaultRedirectUrl",
            "string",
            "",
            "Default redirect URL template",
            placeholder=URL_PLACEHOLDER,
        ),
        OptionSpec(
            "defaultParseExpressions",
            "boolean",
            True,
            "Parse expression placeholders in default template",
        ),
        OptionSpec(
            "enabled",
            "boolean",
            False,
            "Redirect completed tokens",
            global_counterpart="globalEnabled",
            survey_form=True,
        ),
        OptionSpec(
            "redirectUrl",
            "string",
            "",
            "Redirect URL template",
            global_counterpart="defaultRedirectUrl",
            survey_form=True,
            placeholder=URL_PLACEHOLDER,
        ),
        OptionSpec(
            "parseExpressions",
            "boolean",
            True,
            "Parse expression placeholders",
            global_counterpart="defaultParseExpressions",
            survey_form=True,
        ),
        OptionSpec(
            "skipIfEditable",
            "boolean",
            True,
            "Skip redirect when responses are editable after completion",
            survey_form=True,
        ),
    ]
}


def get_option(name: str) -> OptionSpec:
    try:
        return OPTIONS[name]
    except KeyError:
        raise UnknownOption(name) from None


class MemorySettingsStore:
    """Settings store kept in a dict, for tests and command-line previews."""

    def __init__(self, values: Optional[Mapping[tuple, Any]] = None):
        self._values: dict[tuple, Any] = dict(values or {})

    def get(self, name: str, scope: SettingScope, survey_id: Optional[int] = None) -> Any:
        return self._values.get(self._key(name, scope, survey_id))

    def set(
        self, name: str, value: Any, scope: SettingScope, survey_id: Optional[int] = None
    ) -> None:
        self._values[self._key(name, scope, survey_id)] = value

    @staticmethod
    def _key(name, scope, survey_id):
        scope = SettingScope(scope)
        return (name, scope, survey_id if scope is SettingScope.SURVEY else None)


class SettingsResolver:
    """Reads and writes redirect options through a settings store.

    The store needs ``get(name, scope, survey_id)`` returning the stored value
    or None when nothing is stored, and ``set(name, value, scope, survey_id)``.
    """

    def __init__(self, store):
        self.store = store

    def resolve(
        self,
        name: str,
        scope: SettingScope = SettingScope.SURVEY,
        survey_id: Optional[int] = None,
    ) -> Any:
        spec = get_option(name)
        scope = SettingScope(scope)
        if scope is SettingScope.SURVEY:
            value = self.store.get(name, SettingScope.SURVEY, survey_id)
            if value is not None:
                return spec.coerce(value)
            if spec.global_counterpart:
                return self.resolve(spec.global_counterpart, SettingScope.GLOBAL)
            return spec.default
        value = self.store.get(name, SettingScope.GLOBAL)
        if value is not None:
            return spec.coerce(value)
        return spec.default

    def apply(self, survey_id: int, values: Mapping[str, Any]) -> None:
        """Store each entry at survey scope, coercing known options to their type."""
        for name, value in values.items():
            spec = OPTIONS.get(name)
            if spec is not None:
                value = spec.coerce(value)
            self.store.set(name, value, SettingScope.SURVEY, survey_id)

    def template_for(self, survey_id: int) -> str:
        """Redirect template for a survey; a blank survey template uses the global one."""
        template = self.store.get("redirectUrl", SettingScope.SURVEY, survey_id)
        if template is None or not str(template).strip():
            template = self.resolve("defaultRedirectUrl", SettingScope.GLOBAL)
        return str(template or "").strip()

    def survey_form_schema(self, survey_id: int) -> dict[str, dict[str, Any]]:
        """Survey-scoped options with labels, defaults and current resolved values.

        String options report the survey's own value as ``current`` and the
        global template they fall back to as ``placeholder``, so saving the
        form unchanged never copies the global template into the survey.
        """
        schema = {}
        for spec in OPTIONS.values():
            if not spec.survey_form:
                continue
            entry = {"type": spec.type, "label": spec.label, "default": spec.default}
            if spec.type == "string":
                stored = self.store.get(spec.name, SettingScope.SURVEY, survey_id)
                entry["current"] = spec.coerce(stored)
                fallback = ""
                if spec.global_counterpart:
                    fallback = self.resolve(spec.global_counterpart, SettingScope.GLOBAL)
                entry["placeholder"] = fallback or spec.placeholder
            else:
                entry["current"] = self.resolve(spec.name, SettingScope.SURVEY, survey_id)
            schema[spec.name] = entry
        return schema
