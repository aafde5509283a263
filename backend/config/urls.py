"""
Root URL configuration for the backend project.

The ingestion endpoints sit at the root (``/upload``, ``/risk-data``, ...)
so the clients do not need an API prefix.
"""
from django.contrib import admin
from django.urls import path, include

urlpatterns = [
    path("admin/", admin.site.urls),
    path("", include("riskdata.urls")),
]
