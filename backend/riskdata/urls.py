"""URL patterns for the `riskdata` app."""
from django.urls import path

from .views import HealthView, PointListView, RiskDataListView, UploadView

urlpatterns = [
    path("upload", UploadView.as_view(), name="upload"),
    path("risk-data", RiskDataListView.as_view(), name="risk-data"),
    path("points", PointListView.as_view(), name="points"),
    path("health", HealthView.as_view(), name="health"),
]
