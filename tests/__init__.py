"""
Test Suite

Structure:
    tests/
    ├── conftest.py                  # Fixtures
    ├── factories.py                 # Document builders
    ├── test_routing_resolver.py     # Pure routing rules
    ├── test_routing_config_repo.py  # Config store defaults and seeding
    ├── test_priority_queue.py       # Enqueue, ordering, dedup, stats
    ├── test_queue_status.py         # Status controller transitions
    ├── test_issue_service.py        # Submission flow and complaint IDs
    ├── test_api.py                  # HTTP endpoints
    ├── test_cli.py                  # run.py and scripts.init_routing
    └── test_infrastructure.py       # JSON logging and indexes

To run tests:
    pytest tests/
"""
