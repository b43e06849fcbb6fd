from django.db import models
from django.db.models import Q

from revisit_app.surveys.models import Survey


class RedirectSetting(models.Model):
    """One stored value of a redirect option.

    Global rows have no survey; survey rows override the matching global option.
    """

    class Scope(models.TextChoices):
        GLOBAL = "global", "Global"
        SURVEY = "survey", "Survey"

    name = models.CharField(max_length=64)
    scope = models.CharField(max_length=20, choices=Scope.choices)
    survey = models.ForeignKey(
        Survey,
        null=True,
        blank=True,
        on_delete=models.CASCADE,
        related_name="redirect_settings",
    )
    value = models.JSONField(null=True, blank=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=["name", "survey"],
                condition=Q(scope="survey"),
                name="uq_redirectsetting_survey_option",
            ),
            models.UniqueConstraint(
                fields=["name"],
                condition=Q(scope="global"),
                name="uq_redirectsetting_global_option",
            ),
            models.CheckConstraint(
                condition=(
                    Q(scope="global", survey__isnull=True)
                    | Q(scope="survey", survey__isnull=False)
                ),
                name="redirectsetting_scope_matches_survey",
            ),
        ]

    def __str__(self) -> str:  # pragma: no cover
        if self.survey_id:
            return f"{self.name} (survey {self.survey_id})"
        return f"{self.name} (global)"
