"""Unit tests for the HTTP API."""

from reviewguide.api import routes


def test_root(client) -> None:
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["check"] == "/check"


def test_list_rules(client) -> None:
    response = client.get("/rules")

    assert response.status_code == 200
    rules = response.json()
    assert [rule["id"] for rule in rules][:2] == ["RG001", "RG002"]
    assert rules[0]["default_severity"] == "error"


def test_get_rule_by_name(client) -> None:
    response = client.get("/rules/duplicate-heading")
    assert response.status_code == 200
    assert response.json()["id"] == "RG003"


def test_get_unknown_rule(client) -> None:
    response = client.get("/rules/RG999")
    assert response.status_code == 404


def test_check_clean_document(client, sample_document) -> None:
    response = client.post("/check", json={"content": sample_document, "path": "sample.md"})

    assert response.status_code == 200
    data = response.json()
    assert data["path"] == "sample.md"
    assert data["findings"] == []
    assert data["toc_entries"] == 2


def test_check_reports_findings(client) -> None:
    content = "## Table of Contents\n\n- [Security](#security)\n"

    response = client.post("/check", json={"content": content})

    findings = response.json()["findings"]
    assert [f["rule_id"] for f in findings] == ["RG001"]
    assert findings[0]["line"] == 3
    assert findings[0]["path"] == "document.md"


def test_check_with_ignore(client) -> None:
    content = "## Table of Contents\n\n- [Security](#security)\n"

    response = client.post("/check", json={"content": content, "ignore": ["RG001"]})

    finding = response.json()["findings"][0]
    assert finding["suppressed"] is True
    assert finding["suppressed_by"] == "config: ignore"


def test_check_requires_content(client) -> None:
    response = client.post("/check", json={"path": "a.md"})
    assert response.status_code == 422


def test_check_rejects_oversize_document(client, monkeypatch) -> None:
    monkeypatch.setattr(routes.settings, "max_document_bytes", 10)

    response = client.post("/check", json={"content": "# A much longer title\n"})

    assert response.status_code == 413


def test_toc(client) -> None:
    content = "## Contents\n\n- [Old](#old)\n\n## New\n"

    response = client.post("/toc", json={"content": content})

    data = response.json()
    assert response.status_code == 200
    assert data["changed"] is True
    assert "- [New](#new)" in data["content"]


def test_toc_rejects_inverted_levels(client) -> None:
    response = client.post("/toc", json={"content": "## Contents\n", "level": 3, "max_level": 2})
    assert response.status_code == 422
