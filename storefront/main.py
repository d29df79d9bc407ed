import argparse
import sys
from pathlib import Path

# Add parent directory to path for imports
parent_dir = str(Path(__file__).parent.parent)
if parent_dir not in sys.path:
    sys.path.append(parent_dir)

from storefront.cli.menu import StorefrontMenu, greeting
from storefront.config import config
from storefront.db import db
from storefront.exceptions import DatabaseConnectionError
from storefront.logging_setup import logger

def build_parser():
    parser = argparse.ArgumentParser(
        prog='storefront',
        description='Storefront command-line client'
    )
    parser.add_argument('dbname', help='Name of the PostgreSQL database')
    parser.add_argument('port', help='Port the PostgreSQL server listens on')
    parser.add_argument('user', help='Database user name')
    return parser

def init_application(args):
    """Connect to the database named on the command line.

    Args:
        args: Parsed command-line arguments

    Raises:
        DatabaseConnectionError: If the database can't be reached
    """
    log = logger.app_logger

    print("Connecting to database...", end='')
    db.initialize(config.get_db_url(database=args.dbname, port=args.port, username=args.user))
    print("Done")

    log.info(f"Storefront client connected to {args.dbname} on port {args.port} as {args.user}")

def main(argv=None):
    """Main application entry point.

    Returns:
        Process exit status
    """
    args = build_parser().parse_args(argv)
    log = logger.app_logger

    greeting()
    try:
        init_application(args)
    except DatabaseConnectionError as e:
        log.error(str(e))
        print()
        print(f"Error - {e.message}", file=sys.stderr)
        print("Make sure you started postgres on this machine")
        return 1

    try:
        StorefrontMenu().run()
    except (KeyboardInterrupt, EOFError):
        print("\nInterrupted by user. Exiting.")
    finally:
        print("Disconnecting from database...", end='')
        db.close()
        print("Done\n\nBye !")

    return 0

if __name__ == "__main__":
    sys.exit(main())
