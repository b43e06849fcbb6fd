import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("surveys", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="RedirectSetting",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                ("name", models.CharField(max_length=64)),
                (
                    "scope",
                    models.CharField(
                        choices=[("global", "Global"), ("survey", "Survey")],
                        max_length=20,
                    ),
                ),
                ("value", models.JSONField(blank=True, null=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "survey",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="redirect_settings",
                        to="surveys.survey",
                    ),
                ),
            ],
            options={
                "constraints": [
                    models.UniqueConstraint(
                        condition=models.Q(("scope", "survey")),
                        fields=("name", "survey"),
                        name="uq_redirectsetting_survey_option",
                    ),
                    models.UniqueConstraint(
                        condition=models.Q(("scope", "global")),
                        fields=("name",),
                        name="uq_redirectsetting_global_option",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(
                            models.Q(("scope", "global"), ("survey__isnull", True)),
                            models.Q(("scope", "survey"), ("survey__isnull", False)),
                            _connector="OR",
                        ),
                        name="redirectsetting_scope_matches_survey",
                    ),
                ],
            },
        ),
    ]
