"""
Pytest Configuration and Fixtures

MongoDB is replaced by an in-memory mongomock database per test.
"""

from typing import Any, Dict

import mongomock
import pytest
from fastapi.testclient import TestClient

from civic_queue.api.deps import get_db_dep
from civic_queue.main import create_app


@pytest.fixture
def db():
    """Fresh in-memory database"""
    client = mongomock.MongoClient()
    yield client["civic_queue_test"]
    client.close()


@pytest.fixture
def client(db) -> TestClient:
    """API client bound to the in-memory database (lifespan not started)"""
    app = create_app()
    app.dependency_overrides[get_db_dep] = lambda: db
    return TestClient(app)


@pytest.fixture
def sample_analysis() -> Dict[str, Any]:
    """Classifier output for a pothole report"""
    return {
        "issueType": "Massive Pothole on 5th Ave",
        "severity": "High",
        "urgency": "Immediate",
        "title": "Deep pothole blocking lane",
        "summary": "A large pothole has opened in the left lane near the junction.",
        "keywords": ["pothole", "asphalt", "lane"],
    }
