import copy

import pytest
from fastapi.testclient import TestClient

from app_builder.core.config import Settings
from app_builder.core.errors import UpstreamError
from app_builder.core.llm_client import ParsedOutput, RawOutput
from app_builder.main import create_app

VALID_APP = {
    "app_name": "Course Manager",
    "entities": [
        {
            "name": "Course",
            "fields": [
                {"name": "id", "type": "id"},
                {"name": "title", "type": "string"},
                {"name": "description", "type": "text"},
                {"name": "start_date", "type": "date"},
            ],
        },
        {
            "name": "Student",
            "fields": [
                {"name": "id", "type": "id"},
                {"name": "first_name", "type": "first_name"},
                {"name": "last_name", "type": "last_name"},
                {"name": "email", "type": "email"},
                {"name": "active", "type": "boolean"},
            ],
        },
    ],
    "roles": [
        {
            "name": "Teacher",
            "actions": [
                {"name": "Create Course", "entity": "Course", "type": "form"},
                {"name": "View Students", "entity": "Student", "type": "table"},
                {"name": "Generate Report", "entity": "Report", "type": "none"},
            ],
        },
        {
            "name": "Student",
            "actions": [
                {"name": "View Courses", "entity": "Course", "type": "table"},
            ],
        },
    ],
}


class StubClient:
    """Completion client double: returns a canned output and records every call."""

    def __init__(self, output=None, error=None):
        self.output = output
        self.error = error
        self.calls = []

    def complete(self, instructions, text, max_output_tokens):
        self.calls.append({"instructions": instructions, "text": text, "max_output_tokens": max_output_tokens})
        if self.error is not None:
            raise self.error
        return self.output


@pytest.fixture
def valid_app():
    return copy.deepcopy(VALID_APP)


@pytest.fixture
def settings(tmp_path):
    return Settings(model="test-model", api_key=None, log_dir=str(tmp_path / "logs"))


@pytest.fixture
def parsed_client(valid_app):
    return StubClient(ParsedOutput(valid_app))


@pytest.fixture
def make_api(settings):
    """Build a TestClient around a stub completion client."""
    def _make(stub):
        return TestClient(create_app(settings=settings, client=stub))
    return _make


@pytest.fixture
def raw_client():
    def _make(text):
        return StubClient(RawOutput(text))
    return _make


@pytest.fixture
def failing_client():
    return StubClient(error=UpstreamError("quota exceeded", raw_response='{"error": "quota"}'))
