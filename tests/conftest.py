"""
Shared fixtures: temporary storage directories, settings, an API client and
an openpyxl workbook builder for price-list fixtures.
"""
import io
from datetime import datetime

import pytest
from fastapi.testclient import TestClient
from openpyxl import Workbook

from app.core.config import Settings
from main import create_app


SAMPLE_ROWS = [
    ["Milk", "120", "60", "Fresh milk 1l", "Yes", "130", "110", "Percent", "7 days"],
    ["Bread", "45", "45", "White bread", "Yes", "50", "", "", ""],
    ["Cheese", "480", "960", "Sheep cheese 500g", "No", "520", "450", "Fixed", "3 days"],
]


def build_workbook(rows, update_date=datetime(2025, 3, 14), update_time=0.5, label="Ажурирано:"):
    """Return the bytes of an .xlsx price list with a date/time header row."""
    wb = Workbook()
    ws = wb.active
    ws.append([label, update_date, update_time])
    for row in rows:
        ws.append(row)

    buf = io.BytesIO()
    wb.save(buf)
    return buf.getvalue()


@pytest.fixture
def workbook_bytes():
    return build_workbook


@pytest.fixture
def sample_xlsx(tmp_path):
    """A three-product price list saved to disk."""
    path = tmp_path / "sample.xlsx"
    path.write_bytes(build_workbook(SAMPLE_ROWS))
    return path


@pytest.fixture
def upload_dir(tmp_path):
    return tmp_path / "uploads" / "marketFiles"


@pytest.fixture
def session_dir(tmp_path):
    return tmp_path / "sessions"


@pytest.fixture
def test_settings(upload_dir, session_dir):
    return Settings(
        _env_file=None,
        UPLOAD_DIR=str(upload_dir),
        SESSION_DIR=str(session_dir),
        ADMIN_USERNAME="admin",
        ADMIN_PASSWORD="s3cret",
        ADMIN_PASSWORD_HASH=None,
        CORS_ORIGINS="*",
    )


@pytest.fixture
def client(test_settings):
    with TestClient(create_app(test_settings)) as c:
        yield c
