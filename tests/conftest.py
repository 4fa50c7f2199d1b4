"""
Pytest configuration and fixtures
"""
import io

import docx
import fitz
import pytest
from fastapi.testclient import TestClient

from backend.app.main import app
from backend.services import simplifier


WELL_FORMED_REPLY = "SUMMARY: S\nPROS:\n1. A\n2. B\n3. C\nCONS:\n1. D\n2. E\n3. F"


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def fake_generator():
    """Replace Gemini with a recorder that returns a canned reply."""
    calls = []
    state = {"reply": WELL_FORMED_REPLY}

    def generate(prompt_text: str) -> str:
        calls.append(prompt_text)
        return state["reply"]

    generate.calls = calls
    generate.state = state
    app.dependency_overrides[simplifier.get_text_generator] = lambda: generate
    yield generate
    app.dependency_overrides.pop(simplifier.get_text_generator, None)


@pytest.fixture
def pdf_bytes():
    doc = fitz.open()
    page = doc.new_page()
    page.insert_text((72, 72), "Housing Policy 2024")
    page.insert_text((72, 100), "Rent increases are capped at three percent.")
    data = doc.tobytes()
    doc.close()
    return data


@pytest.fixture
def blank_pdf_bytes():
    doc = fitz.open()
    doc.new_page()
    data = doc.tobytes()
    doc.close()
    return data


@pytest.fixture
def docx_bytes():
    document = docx.Document()
    document.add_paragraph("Section 1. Scope")
    document.add_paragraph("This policy applies to all public schools.")
    buffer = io.BytesIO()
    document.save(buffer)
    return buffer.getvalue()


@pytest.fixture
def docx_table_bytes():
    document = docx.Document()
    table = document.add_table(rows=1, cols=2)
    table.cell(0, 0).text = "Tax rate"
    table.cell(0, 1).text = "Rises to 5 percent"
    buffer = io.BytesIO()
    document.save(buffer)
    return buffer.getvalue()


@pytest.fixture
def docx_mixed_bytes():
    document = docx.Document()
    document.add_paragraph("Schedule A")
    table = document.add_table(rows=2, cols=2)
    table.cell(0, 0).text = "Band"
    table.cell(0, 1).text = "Rate"
    table.cell(1, 0).text = "Under 50k"
    table.cell(1, 1).text = "2 percent"
    document.add_paragraph("End of schedule")
    buffer = io.BytesIO()
    document.save(buffer)
    return buffer.getvalue()
