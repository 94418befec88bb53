from django.apps import AppConfig


class WellnessConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'wellness'

    def ready(self) -> None:
        # Registers the pre-persist hooks
        from . import signals  # noqa: F401
