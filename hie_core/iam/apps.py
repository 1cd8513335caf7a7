from django.apps import AppConfig


class IamConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "hie_core.iam"

    def ready(self) -> None:
        # import here so app loading doesn't break tooling
        from hie_core.iam import signals  # noqa: F401
        from hie_core.iam import openapi  # noqa: F401
        from hie_core.iam.guard import validate_route_table

        # Misconfigured allow-lists fail at startup, never at request time.
        validate_route_table()
