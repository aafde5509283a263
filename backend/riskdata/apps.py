from django.apps import AppConfig


class RiskdataConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "riskdata"
    verbose_name = "Risk data"
