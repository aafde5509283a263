import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from rest_framework.test import APIClient


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def upload_dir(settings, tmp_path):
    folder = tmp_path / "uploads"
    settings.UPLOAD_DIR = folder
    return folder


@pytest.fixture
def csv_upload():
    def make(content: str | bytes, name: str = "data.csv") -> SimpleUploadedFile:
        if isinstance(content, str):
            content = content.encode("utf-8")
        return SimpleUploadedFile(name, content, content_type="text/csv")

    return make


@pytest.fixture
def risk_csv():
    return RISK_CSV


RISK_CSV = (
    "Respondent Type,Hotspot,Location,Phase,Risk Score,Likelihood,Severity,Risk Level,Metric Name,Timeline\n"
    "Officer,HS1,Port,2,4.5,3,2,Moderate,Trafficking,2024\n"
    "Resident,HS1,Market,,not-a-number,,7,High,Extortion,\n"
    "Officer,HS2,Border,x,6,1.5,4,High,Smuggling,2025\n"
)
