from __future__ import annotations

from .models import Survey


def short_field_map(survey: Survey, language: str | None = None) -> list[dict[str, str]]:
    """Map each answer field of ``survey`` to its short question code.

    Entries are ``{"fieldname", "title", "question"}`` in question order;
    ``question`` is the question text in ``language`` when a translation exists.
    """
    return [
        {
            "fieldname": q.field_name,
            "title": q.code,
            "question": q.localized_text(language),
        }
        for q in survey.questions.all()
    ]
