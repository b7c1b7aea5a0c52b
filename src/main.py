"""
Main application entry point for the Job Application Tracker.

    python -m src.main serve             # run the HTTP API
    python -m src.main create-session 1  # issue a session token for user 1
    python -m src.main check             # validate configuration and database
"""

import argparse
import sys

from src.api import run_server
from src.config import DatabaseManager, get_config, validate_config
from src.utils import setup_logging, get_logger

logger = get_logger("main")

def check_system() -> bool:
    """Validate configuration and open the database."""
    issues = validate_config()
    for warning in issues["warnings"]:
        logger.warning(f"Configuration warning: {warning}")
    if issues["errors"]:
        for error in issues["errors"]:
            logger.error(f"Configuration error: {error}")
        return False

    try:
        db = DatabaseManager(get_config().database.path)
    except Exception as e:
        logger.error(f"❌ Database system failed: {e}")
        return False
    logger.info(f"✅ Database ready at {db.db_path}")
    return True

def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Job Application Tracker")
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", help="Bind address (default: TRACKER_API_HOST)")
    serve.add_argument("--port", type=int, help="Port (default: TRACKER_API_PORT)")

    session = subparsers.add_parser("create-session", help="Issue a session token for a user")
    session.add_argument("user_id", type=int)

    subparsers.add_parser("check", help="Validate configuration and database")

    args = parser.parse_args(argv)

    setup_logging()
    config = get_config()

    if args.command == "check":
        return 0 if check_system() else 1

    db = DatabaseManager(config.database.path)

    if args.command == "create-session":
        token = db.create_session(args.user_id)
        print(token)
        return 0

    run_server(db, host=args.host or config.api.host, port=args.port or config.api.port)
    return 0

if __name__ == "__main__":
    sys.exit(main())
