"""
Django management command to preview the completed-participant redirect.

Runs the same decision as the participant views for one survey and token,
without sending anyone anywhere.

Usage:
    python manage.py preview_redirect 12 ABC123
    python manage.py preview_redirect 12 ABC123 --show-table
"""

from django.core.management.base import BaseCommand

from revisit_app.redirects.decision import Redirect, StaticTokenSource
from revisit_app.redirects.lookups import OrmLookups, build_decider
from revisit_app.redirects.replacements import build_replacements


class Command(BaseCommand):
    help = "Show whether a returning participant would be redirected, and where"

    def add_arguments(self, parser):
        parser.add_argument("survey_id", type=int)
        parser.add_argument("token")
        parser.add_argument(
            "--show-table",
            action="store_true",
            help="Also print the placeholder table for the token",
        )

    def handle(self, *args, **options):
        survey_id = options["survey_id"]
        token_value = options["token"]

        decision = build_decider().decide(survey_id, StaticTokenSource(token_value))
        if isinstance(decision, Redirect):
            self.stdout.write(self.style.SUCCESS(f"Redirect: {decision.url}"))
        else:
            self.stdout.write(self.style.WARNING(f"Suppressed: {decision.reason.value}"))

        if options["show_table"]:
            self._show_table(survey_id, token_value)

    def _show_table(self, survey_id, token_value):
        lookups = OrmLookups()
        survey = lookups.find_survey(survey_id)
        token = lookups.find_token(survey_id, token_value) if survey else None
        if token is None:
            self.stdout.write(self.style.WARNING("No token record to build a table from"))
            return
        response = lookups.find_latest_response(survey_id, token_value)
        table = build_replacements(survey, token, response, field_map=lookups.short_field_map)
        self.stdout.write(self.style.HTTP_INFO("\n--- Placeholders ---"))
        for key, value in table.items():
            self.stdout.write(f"{{{key}}} = {value}")
