from django.apps import AppConfig


class RedirectsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "revisit_app.redirects"
    verbose_name = "Completed participant redirects"

    def ready(self):
        from . import receivers  # noqa: F401
