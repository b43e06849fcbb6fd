from django.apps import AppConfig


class SurveysConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "revisit_app.surveys"
    verbose_name = "Surveys"
