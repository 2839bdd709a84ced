"""
Tests for row helpers, query parameter parsing and log formatting.
"""

import json
import logging

from app.core.logging_config import CustomJsonFormatter
from app.crud.filters import parse_csv
from app.models.application import Application, ApplicationStatus
from app.models.columns import project
from app.models.job import Job


class TestApplyFields:
    """Tests for FlexibleFieldsMixin.apply_fields"""

    def test_known_fields_become_columns(self):
        job = Job()
        job.apply_fields({"title": "Backend", "salary_min": 100})

        assert job.title == "Backend"
        assert job.salary_min == 100
        assert job.extra_fields == {}

    def test_unknown_fields_are_extras(self):
        job = Job()
        job.apply_fields({"title": "Backend", "remote_policy": "hybrid"})

        assert job.extra_fields == {"remote_policy": "hybrid"}
        assert job.to_dict()["remote_policy"] == "hybrid"
        assert "extra_fields" not in job.to_dict()

    def test_reserved_fields_ignored(self):
        job = Job()
        job.apply_fields({"id": "spoofed", "employer_id": "spoofed", "extra_fields": {"x": 1}, "title": "Backend"})

        assert job.id is None
        assert job.employer_id is None
        assert job.extra_fields == {}

    def test_extras_accumulate(self):
        job = Job()
        job.apply_fields({"perk": "gym"})
        job.apply_fields({"team": "core"})

        assert job.extra_fields == {"perk": "gym", "team": "core"}

    def test_columns_win_over_extras_in_to_dict(self):
        job = Job(title="Real title")
        job.extra_fields = {"title": "Stale"}

        assert job.to_dict()["title"] == "Real title"


class TestSerialization:
    """Tests for to_dict and project"""

    def test_enum_values(self):
        application = Application(status=ApplicationStatus.REVIEWED)

        assert application.to_dict()["status"] == "reviewed"

    def test_project(self):
        job = Job(title="Backend", location="Remote", description="Long text")

        assert project(job, ("title", "location", "missing")) == {
            "title": "Backend",
            "location": "Remote",
            "missing": None
        }

    def test_project_none(self):
        assert project(None, ("title",)) is None


class TestParseCsv:
    """Tests for comma-separated query parameters"""

    def test_splits_and_strips(self):
        assert parse_csv(" Python, Go ,,Rust ") == ["Python", "Go", "Rust"]

    def test_empty(self):
        assert parse_csv(None) == []
        assert parse_csv("") == []
        assert parse_csv(" , ") == []


class TestJsonLogs:
    """Tests for the structured log formatter"""

    def test_record_fields(self):
        formatter = CustomJsonFormatter('%(timestamp)s %(level)s %(logger)s %(message)s')
        record = logging.LogRecord(
            name="app.api.endpoints.jobs",
            level=logging.WARNING,
            pathname=__file__,
            lineno=42,
            msg="Job %s not found",
            args=("abc",),
            exc_info=None
        )

        payload = json.loads(formatter.format(record))

        assert payload["message"] == "Job abc not found"
        assert payload["level"] == "WARNING"
        assert payload["logger"] == "app.api.endpoints.jobs"
        assert payload["line"] == 42
        assert "timestamp" in payload
