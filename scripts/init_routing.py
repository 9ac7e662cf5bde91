"""
Routing Config Script - Seeds or prints route templates and severity configs
Run: python -m scripts.init_routing [--show]
"""
import argparse
import json
import sys
from typing import List, Optional

from civic_queue.config.settings import settings
from civic_queue.repositories.mongo_client import create_indexes, get_database
from civic_queue.repositories.routing_config_repo import RoutingConfigRepository
from civic_queue.utils.logger import setup_logging


def show_configuration(repo: RoutingConfigRepository) -> None:
    """Print the effective routing configuration"""
    print("Route templates (first match wins, in this order):")
    for template in repo.fetch_route_configs():
        print(f"  [{template.id}] {template.department} - {template.response_sla}")
        print(f"      keywords: {', '.join(template.keywords)}")

    print("\nSeverity configs:")
    for level, config in repo.fetch_severity_configs().items():
        print(f"  {level}: {json.dumps(config.model_dump(mode='json', by_alias=True))}")


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Seed or inspect routing configuration")
    parser.add_argument(
        "--show",
        action="store_true",
        help="Print the current configuration instead of seeding"
    )
    args = parser.parse_args(argv)

    setup_logging()

    db = get_database()
    repo = RoutingConfigRepository(db)

    if args.show:
        show_configuration(repo)
        return 0

    create_indexes(db)
    if repo.initialize_routing_configs():
        print("Routing configurations initialized successfully")
        return 0

    print(f"Routing configurations partially initialized - check {settings.logs_path}/error.log")
    return 1


if __name__ == "__main__":
    sys.exit(main())
