from datetime import date
from unittest.mock import MagicMock, patch

import pytest
import requests

from ops_personnel.core.config import settings
from ops_personnel.schemas.records import EmployeeRecord, ObservationRecord, WorkIssueRecord
from ops_personnel.services import insight_ai
from ops_personnel.services.openrouter_client import OPENROUTER_URL

POST = "ops_personnel.services.openrouter_client.requests.post"


@pytest.fixture
def bundle():
    employee = EmployeeRecord(
        id="e1", name="Jane Ramp", department="Ramp Operations", job_title="Ramp Agent",
        email="jane@skyport.aero", username="jane", role="employee", current_score=84,
    )
    notes = [
        WorkIssueRecord(id="n1", employee_id="e1", date=date(2024, 1, 5), author_id="m1",
                        author_name="Sam Lead", title="Late", text="Late to stand 4"),
        WorkIssueRecord(id="n2", employee_id="e1", date=date(2024, 3, 9), author_id="m1",
                        author_name="Sam Lead", title="FOD", text="Left debris near gate"),
    ]
    observations = [
        ObservationRecord(id="o1", employee_id="e1", date=date(2024, 2, 1),
                          description="Helped a new hire", status="closed"),
    ]
    return insight_ai.build_insight_bundle(employee, notes, [], observations)


@pytest.fixture
def api_key(monkeypatch):
    monkeypatch.setattr(settings.ai, "openrouter_api_key", "test-key")
    monkeypatch.setattr(settings.ai, "kill_switch", False)


def _http_error_response(status_code):
    response = requests.Response()
    response.status_code = status_code
    response.url = OPENROUTER_URL
    return response


def test_bundle_shape(bundle):
    assert bundle["name"] == "Jane Ramp"
    assert bundle["role"] == "Ramp Agent"
    assert bundle["currentScore"] == 84
    # newest first, camelCase keys
    assert [n["id"] for n in bundle["workIssues"]] == ["n2", "n1"]
    assert bundle["workIssues"][0]["authorName"] == "Sam Lead"
    assert bundle["attendance"] == []
    assert bundle["behaviourIssues"][0]["status"] == "closed"


def test_success_returns_narrative(bundle, api_key):
    response = MagicMock()
    response.json.return_value = {"choices": [{"message": {"content": "  Solid performer.\nRisk: Low  "}}]}
    with patch(POST, return_value=response) as post:
        result = insight_ai.generate_performance_insight(bundle)

    assert result == "Solid performer.\nRisk: Low"
    assert not insight_ai.is_error(result)
    post.assert_called_once()
    sent = post.call_args.kwargs["json"]
    assert sent["temperature"] == 0.7
    assert sent["top_p"] == 0.95
    assert "Jane Ramp" in sent["messages"][1]["content"]


def test_missing_key(bundle, monkeypatch):
    monkeypatch.setattr(settings.ai, "openrouter_api_key", None)
    with patch(POST) as post:
        result = insight_ai.generate_performance_insight(bundle)
    assert result.startswith("ERROR:")
    assert "configuration" in result.lower()
    post.assert_not_called()


def test_kill_switch(bundle, api_key, monkeypatch):
    monkeypatch.setattr(settings.ai, "kill_switch", True)
    with patch(POST) as post:
        result = insight_ai.generate_performance_insight(bundle)
    assert insight_ai.is_error(result)
    post.assert_not_called()


@pytest.mark.parametrize("status_code,fragment", [
    (401, "Invalid API key"),
    (429, "Rate limit"),
    (500, "500"),
])
def test_http_errors_are_reported_once(bundle, api_key, status_code, fragment):
    with patch(POST, return_value=_http_error_response(status_code)) as post:
        result = insight_ai.generate_performance_insight(bundle)
    assert result.startswith("ERROR:")
    assert fragment in result
    # no retries
    assert post.call_count == 1


@pytest.mark.parametrize("error", [requests.Timeout("slow"), requests.ConnectionError("down")])
def test_transport_failures(bundle, api_key, error):
    with patch(POST, side_effect=error):
        assert insight_ai.generate_performance_insight(bundle).startswith("ERROR:")


@pytest.mark.parametrize("body", [{"choices": []}, {"choices": [{"message": {"content": "   "}}]}, {}])
def test_empty_response(bundle, api_key, body):
    response = MagicMock()
    response.json.return_value = body
    with patch(POST, return_value=response):
        result = insight_ai.generate_performance_insight(bundle)
    assert result.startswith("ERROR:")
    assert "Empty" in result
