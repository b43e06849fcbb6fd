"""Render redirect URL templates against a replacement table.

Two modes are supported:

* literal: ``{KEY}`` is replaced when ``KEY`` is in the table, exact case;
* expression: ``{TOKEN:name}`` is first rewritten to ``{NAME}`` and the template
  is handed to an expression evaluator.

Evaluators implement ``evaluate(template, context) -> str``. They work in
substitution-only mode and must leave unknown placeholders in place. A failing
evaluator never breaks rendering; the normalized template is used instead.
"""

from __future__ import annotations

import logging
import re
from typing import Mapping, Optional

from django.conf import settings
from django.utils.module_loading import import_string

logger = logging.getLogger(__name__)

_LITERAL_RE = re.compile(r"\{([^{}]+)\}")
_TOKEN_PREFIX_RE = re.compile(r"\{TOKEN:([A-Z0-9_]+)\}", re.IGNORECASE)
# A brace followed by whitespace is plain text, not a placeholder.
_PLACEHOLDER_RE = re.compile(r"\{([^{}\s][^{}]*)\}")


class PlaceholderEvaluator:
    """Substitution-only evaluator.

    ``{NAME}`` resolves by exact key, then by upper-cased key. Anything that
    does not resolve is written back unchanged.
    """

    def evaluate(self, template: str, context: Mapping[str, str]) -> str:
        def replace(match: re.Match[str]) -> str:
            name = match.group(1).strip()
            if name in context:
                return str(context[name])
            if name.upper() in context:
                return str(context[name.upper()])
            return match.group(0)

        return _PLACEHOLDER_RE.sub(replace, template)


def get_evaluator():
    """Instantiate the evaluator named by ``REVISIT_EXPRESSION_EVALUATOR``."""
    path = getattr(
        settings,
        "REVISIT_EXPRESSION_EVALUATOR",
        "revisit_app.redirects.rendering.PlaceholderEvaluator",
    )
    return import_string(path)()


def render_literal(template: str, table: Mapping[str, str]) -> str:
    # Single pass, unlike replacing key by key: substituted values are never expanded again.
    def replace(match: re.Match[str]) -> str:
        key = match.group(1)
        if key in table:
            return str(table[key])
        return match.group(0)

    return _LITERAL_RE.sub(replace, template)


def normalize_token_placeholders(template: str) -> str:
    """Rewrite ``{TOKEN:name}`` (any case) to ``{NAME}``."""
    return _TOKEN_PREFIX_RE.sub(lambda m: "{" + m.group(1).upper() + "}", template)


def render_expressions(template: str, table: Mapping[str, str], evaluator=None) -> str:
    normalized = normalize_token_placeholders(template)
    try:
        if evaluator is None:
            evaluator = get_evaluator()
        rendered = evaluator.evaluate(normalized, dict(table))
    except Exception:
        logger.warning("Expression evaluation failed, using template as is", exc_info=True)
        rendered = normalized
    return str(rendered if rendered is not None else normalized).strip()


def render(
    template: str,
    table: Mapping[str, str],
    expression_mode: bool = True,
    evaluator: Optional[object] = None,
) -> str:
    if expression_mode:
        return render_expressions(template, table, evaluator)
    return render_literal(template, table)
