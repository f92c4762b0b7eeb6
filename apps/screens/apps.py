from django.apps import AppConfig  # type: ignore


class ScreensConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.screens"
    verbose_name = "Screens"
