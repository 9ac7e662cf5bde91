"""
Tests for complaint submission.

1. Complaint IDs follow CIR-<YYYYMMDD>-<NNNN>
2. Collisions are regenerated, then reported once attempts run out
3. A submission stores the issue with routing and history, and queues it
"""
import re
from datetime import datetime, timezone

import pytest
from pymongo.errors import DuplicateKeyError

from civic_queue.config.settings import settings
from civic_queue.domain.errors import ComplaintIdExhaustedError, IssueNotFoundError
from civic_queue.domain.models import Coordinates, IssueAnalysis
from civic_queue.repositories.mongo_client import ISSUES, ISSUE_QUEUE
from civic_queue.services import issue_service
from civic_queue.services.issue_service import IssueService, build_tracking
from civic_queue.utils.idgen import generate_complaint_id
from tests.factories import BASE_TIME, make_issue, store_issue

COMPLAINT_ID = re.compile(r"^CIR-\d{8}-\d{4}$")


def id_sequence(monkeypatch, *ids):
    """Make the service draw complaint IDs from a fixed list"""
    remaining = iter(ids)
    monkeypatch.setattr(issue_service, "generate_complaint_id", lambda now=None: next(remaining))


class TestGenerateComplaintId:
    """Tests for generate_complaint_id."""

    def test_format(self):
        for _ in range(50):
            complaint_id = generate_complaint_id()
            assert COMPLAINT_ID.match(complaint_id)
            assert 1000 <= int(complaint_id.rsplit("-", 1)[1]) <= 9999

    def test_uses_submission_date(self):
        now = datetime(2026, 1, 5, 23, 59, tzinfo=timezone.utc)
        assert generate_complaint_id(now).startswith("CIR-20260105-")


class TestBuildTracking:
    """Tests for build_tracking."""

    def test_high_severity_starts_in_progress(self):
        status, history = build_tracking("High", BASE_TIME)

        assert status == "InProgress"
        assert [h.status for h in history] == ["Submitted", "InProgress", "Resolved"]
        assert history[0].timestamp == BASE_TIME
        assert (history[1].timestamp - BASE_TIME).total_seconds() == 30 * 60
        assert history[2].timestamp is None

    @pytest.mark.parametrize("severity", ["Low", "Medium", "unknown"])
    def test_other_severities_start_submitted(self, severity):
        status, history = build_tracking(severity, BASE_TIME)

        assert status == "Submitted"
        assert history[0].timestamp == BASE_TIME
        assert history[1].timestamp is None
        assert history[2].timestamp is None


class TestSubmitIssue:
    """Tests for IssueService.submit_issue."""

    def test_stores_issue_and_queue_entry(self, db, sample_analysis):
        analysis = IssueAnalysis.model_validate(sample_analysis)

        issue = IssueService(db).submit_issue(
            analysis,
            location=Coordinates(lat=12.95, lng=77.60),
            description="Car tyre burst on it this morning",
            user_id="resident-42",
            user_email="resident@civicmail.org",
        )

        assert COMPLAINT_ID.match(issue.complaint_id)
        assert issue.department == "Municipal Roads Department"
        assert issue.routing.priority == 1
        assert issue.routing.jurisdiction == "Central Zone"
        assert issue.status == "InProgress"

        doc = db[ISSUES].find_one({"_id": issue.complaint_id})
        assert doc["routing"]["response_sla"] == "Within 12 hours"
        assert doc["user_email"] == "resident@civicmail.org"
        assert len(doc["history"]) == 3

        entry = db[ISSUE_QUEUE].find_one({"complaint_id": issue.complaint_id})
        assert entry["status"] == "Escalated"
        assert entry["priority"] == 1
        assert entry["department_id"] == "Municipal Roads Department"
        assert entry["coordinates"] == {"lat": 12.95, "lng": 77.6}

    def test_low_severity_unmatched_issue_queued(self, db):
        analysis = IssueAnalysis(issue_type="Mystery Noise", severity="low", title="Strange hum at night")

        issue = IssueService(db).submit_issue(analysis)

        assert issue.department == "Civic Response Center"
        assert issue.status == "Submitted"
        entry = db[ISSUE_QUEUE].find_one({"complaint_id": issue.complaint_id})
        assert entry["status"] == "Queued"
        assert entry["priority"] == 3

    def test_collision_regenerates_id(self, db, monkeypatch):
        store_issue(db, make_issue("CIR-20261019-1234"))
        id_sequence(monkeypatch, "CIR-20261019-1234", "CIR-20261019-5678")

        issue = IssueService(db).submit_issue(IssueAnalysis(issue_type="pothole", title="Hole"))

        assert issue.complaint_id == "CIR-20261019-5678"
        assert db[ISSUES].count_documents({}) == 2

    def test_concurrent_insert_regenerates_id(self, db, monkeypatch):
        id_sequence(monkeypatch, "CIR-20261019-1111", "CIR-20261019-2222")
        service = IssueService(db)
        create_issue = service.issue_repo.create_issue
        calls = []

        def racing_create(issue):
            calls.append(issue.complaint_id)
            if len(calls) == 1:
                raise DuplicateKeyError("E11000 duplicate key error")
            return create_issue(issue)

        monkeypatch.setattr(service.issue_repo, "create_issue", racing_create)

        issue = service.submit_issue(IssueAnalysis(issue_type="pothole", title="Hole"))

        assert calls == ["CIR-20261019-1111", "CIR-20261019-2222"]
        assert issue.complaint_id == "CIR-20261019-2222"

    def test_exhausted_ids_raise(self, db, monkeypatch):
        store_issue(db, make_issue("CIR-20261019-1234"))
        monkeypatch.setattr(settings, "complaint_id_max_attempts", 3)
        id_sequence(monkeypatch, *["CIR-20261019-1234"] * 3)

        with pytest.raises(ComplaintIdExhaustedError) as exc_info:
            IssueService(db).submit_issue(IssueAnalysis(issue_type="pothole", title="Hole"))

        assert exc_info.value.http_status == 503
        assert db[ISSUE_QUEUE].count_documents({}) == 0

    def test_get_issue(self, db):
        store_issue(db, make_issue("CIR-20261019-4242"))

        issue = IssueService(db).get_issue("CIR-20261019-4242")

        assert issue.title == "Issue CIR-20261019-4242"
        assert issue.created_at == BASE_TIME

    def test_get_missing_issue_raises(self, db):
        with pytest.raises(IssueNotFoundError):
            IssueService(db).get_issue("CIR-20261019-0000")
