import asyncio
import base64
import json
import time
from unittest import mock

import fitz  # PyMuPDF
import httpx
import pytest
import requests
from fastapi.testclient import TestClient

import api.main as api_main
from clients.analysis_client import AnalysisClient
from models.demo import DEMO_REPORT


@pytest.fixture
def client(monkeypatch):
    monkeypatch.setattr(api_main, "analysis_client", AnalysisClient(endpoint=""))
    return TestClient(api_main.app)


def make_pdf():
    doc = fitz.open()
    try:
        doc.new_page()
        return doc.tobytes()
    finally:
        doc.close()


def test_health_check(client):
    response = client.get("/health")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["analysis_service_configured"] is False


def test_root_lists_endpoints(client):
    body = client.get("/").json()
    assert "POST /export" in body["endpoints"]


def test_analyze_upload_falls_back_to_demo_data(client):
    response = client.post(
        "/analyze",
        files={"file": ("cv.pdf", make_pdf(), "application/pdf")},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "fallback"
    assert body["used_fallback"] is True
    assert "not configured" in body["error"]
    assert body["analysis"] == DEMO_REPORT.to_dict()
    assert body["resume"]["page_count"] == 1


def test_analyze_base64_upload(client):
    response = client.post(
        "/analyze/base64",
        json={"file": base64.b64encode(make_pdf()).decode("ascii"), "filename": "cv.pdf"},
    )
    assert response.status_code == 200
    assert response.json()["resume"]["filename"] == "cv.pdf"


def test_analyze_rejects_wrong_file_type(client):
    response = client.post("/analyze", files={"file": ("cv.txt", b"text", "text/plain")})
    assert response.status_code == 400


def test_analyze_base64_rejects_bad_encoding(client):
    response = client.post("/analyze/base64", json={"file": "***", "filename": "cv.pdf"})
    assert response.status_code == 400


def test_export_returns_pdf_attachment(client):
    response = client.post("/export", json=DEMO_REPORT.to_dict())

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert 'filename="resume-analysis.pdf"' in response.headers["content-disposition"]
    assert response.content.startswith(b"%PDF")

    doc = fitz.open(stream=response.content, filetype="pdf")
    try:
        assert doc.page_count == int(response.headers["x-page-count"])
    finally:
        doc.close()


def test_export_rejects_non_object_payload(client):
    response = client.post("/export", json=["not", "a", "report"])
    assert response.status_code == 422


def test_export_with_nan_score_still_renders(client):
    body = json.dumps(DEMO_REPORT.to_dict()).replace('"overallScore": 82', '"overallScore": NaN')

    response = client.post("/export", content=body, headers={"Content-Type": "application/json"})

    assert response.status_code == 200
    assert response.content.startswith(b"%PDF")


def test_slow_analysis_does_not_block_other_requests(monkeypatch):
    def slow_post(*args, **kwargs):
        time.sleep(0.5)
        raise requests.ConnectionError("refused")

    session = mock.Mock(spec=requests.Session)
    session.post.side_effect = slow_post
    monkeypatch.setattr(
        api_main,
        "analysis_client",
        AnalysisClient(endpoint="https://analysis.example.test/api/analyze", session=session),
    )
    finished = []

    async def send(request, name):
        response = await request
        finished.append((name, response.status_code))

    async def run():
        transport = httpx.ASGITransport(app=api_main.app)
        async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as http:
            analysis = asyncio.create_task(send(
                http.post("/analyze/base64", json={
                    "file": base64.b64encode(make_pdf()).decode("ascii"),
                    "filename": "cv.pdf",
                }),
                "analyze",
            ))
            await asyncio.sleep(0.1)
            await send(http.get("/health"), "health")
            await analysis

    asyncio.run(run())

    assert finished == [("health", 200), ("analyze", 200)]
