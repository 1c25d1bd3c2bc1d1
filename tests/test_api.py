from app.reports import service as service_module


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_generate_and_fetch_report(client, captured):
    response = client.post("/api/generate-report", json={"capturedData": captured})
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["emailSent"] is False
    report_id = body["reportId"]
    assert body["downloadUrl"] == f"/api/report/{report_id}/download"

    fetched = client.get(f"/api/report/{report_id}")
    assert fetched.status_code == 200
    report = fetched.json()["report"]
    assert report["restaurantName"] == "Test Restaurant"
    assert report["period"] == {"startDate": "2024-01-01", "endDate": "2024-01-03"}
    assert report["summary"]["totalSales"] == 1500
    assert report["summary"]["averageBasket"] == 50
    assert report["summary"]["adROI"] == 300
    assert 1 <= len(report["recommendations"]) <= 3

    download = client.get(body["downloadUrl"])
    assert download.status_code == 200
    assert download.headers["content-type"] == "application/pdf"
    assert download.headers["content-disposition"] == f'attachment; filename="uber-eats-report-{report_id}.pdf"'
    assert download.content.startswith(b"%PDF")


def test_generate_with_email(client, captured, email_provider):
    response = client.post("/api/generate-report", json={"capturedData": captured, "email": "owner@example.com"})
    body = response.json()
    assert body["emailSent"] is True
    assert email_provider.sent[0].to == "owner@example.com"


def test_generate_rejects_empty_capture(client):
    response = client.post("/api/generate-report", json={"capturedData": []})
    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "No captured data provided"}

    missing = client.post("/api/generate-report", json={})
    assert missing.status_code == 400


def test_generate_rejects_null_capture(client):
    response = client.post("/api/generate-report", json={"capturedData": None})
    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "No captured data provided"}


def test_generate_with_malformed_email(client, captured, email_provider):
    response = client.post("/api/generate-report", json={"capturedData": captured, "email": "not-an-email"})
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["emailSent"] is False
    assert email_provider.sent == []


def test_malformed_body_uses_failure_shape(client):
    response = client.post("/api/generate-report", json={"capturedData": "not a list"})
    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["error"] == "Invalid request body"
    assert "capturedData" in body["message"]
    assert "detail" not in body


def test_email_render_failure_still_succeeds(monkeypatch, client, captured):
    def broken_render(report):
        raise RuntimeError("template missing")

    monkeypatch.setattr(service_module, "render_email", broken_render)
    response = client.post("/api/generate-report", json={"capturedData": captured, "email": "owner@example.com"})
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["emailSent"] is False
    assert client.get(body["downloadUrl"]).status_code == 200


def test_generate_rejects_capture_without_restaurant(client):
    response = client.post(
        "/api/generate-report",
        json={"capturedData": [{"timestamp": "2024-01-01T00:00:00Z", "data": {"sales": {"totalSales": 5}}}]},
    )
    assert response.status_code == 400
    assert response.json()["error"] == "Unable to process captured data"


def test_generate_render_failure(client, service, captured):
    def broken_writer(report, report_id):
        raise OSError("read-only filesystem")

    service.pdf_writer = broken_writer
    response = client.post("/api/generate-report", json={"capturedData": captured})
    assert response.status_code == 500
    body = response.json()
    assert body["success"] is False
    assert body["error"] == "Failed to generate report"
    assert "read-only" in body["message"]


def test_unknown_report(client):
    response = client.get("/api/report/does-not-exist")
    assert response.status_code == 404
    assert response.json() == {"success": False, "error": "Report not found"}
    download = client.get("/api/report/does-not-exist/download")
    assert download.status_code == 404
    assert download.json()["error"] == "Report PDF not found"


def test_sample_report_endpoint(client):
    response = client.post("/api/test-data")
    report = response.json()["report"]
    assert report["restaurantId"] == "test-restaurant-123"
    assert report["summary"]["totalSales"] == 1500
    assert report["summary"]["adROI"] == 200
    assert len(report["recommendations"]) == 2


def test_unknown_route(client):
    response = client.get("/api/nothing-here")
    assert response.status_code == 404
    assert response.json() == {"success": False, "error": "Route not found"}
