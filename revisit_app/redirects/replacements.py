"""Build the placeholder table used to render redirect templates."""

from __future__ import annotations

from typing import Any, Callable, Iterable, Mapping, Optional

FieldMap = Callable[[Any, str], Iterable[Mapping[str, str]]]


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return ",".join(str(v) for v in value)
    return str(value)


def _is_blank(value: Any) -> bool:
    return value is None or value == "" or value == [] or value == ()


def build_replacements(
    survey, token, response=None, field_map: Optional[FieldMap] = None
) -> dict[str, str]:
    """Return the placeholder name -> value table for one redirect.

    ``survey`` needs ``id``, ``language`` and ``localized_title(language)``;
    ``token`` needs ``token`` and ``token_attributes()``; ``response`` (optional)
    needs ``language`` and ``answers``. ``field_map(survey, language)`` yields
    ``{"fieldname", "title"}`` entries for the survey's questions.

    Token attributes are keyed twice, as ``NAME`` and ``TOKEN:NAME``. Answers
    are keyed by their question code as written and upper-cased, and are added
    last so they shadow token attributes with the same name. Empty answers are
    left out so their placeholders stay unresolved.
    """
    language = (getattr(response, "language", "") if response is not None else "") or survey.language
    table = {
        "SID": str(survey.id),
        "SURVEYID": str(survey.id),
        "SURVEYNAME": _as_text(survey.localized_title(language)),
        "TOKEN": _as_text(token.token),
    }

    # Attribute names differing only by case collide here; the later one wins.
    for name, value in token.token_attributes().items():
        key = str(name).upper()
        table[key] = _as_text(value)
        table["TOKEN:" + key] = _as_text(value)

    if response is None or field_map is None:
        return table

    answers = response.answers or {}
    for field in field_map(survey, language):
        code = field.get("title")
        if not code:
            continue
        fieldname = field.get("fieldname")
        if fieldname not in answers:
            continue
        value = answers[fieldname]
        if _is_blank(value):
            continue
        code = str(code)
        table[code] = _as_text(value)
        table[code.upper()] = _as_text(value)
    return table
