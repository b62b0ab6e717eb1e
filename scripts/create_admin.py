"""Create an ADMIN account.

Admins cannot self-register through the API; use this to bootstrap one.

Usage:
  python scripts/create_admin.py --name "Site Admin" --email admin@example.com --password '...'
"""

import argparse
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "src"))

from config import load_settings
from core.database import init_db, make_engine, make_session_factory
from core.exceptions import ConflictError
from core.logging_config import setup_logging
from utils.user_manager import UserManager


def main() -> None:
    ap = argparse.ArgumentParser()
    ap.add_argument("--name", required=True)
    ap.add_argument("--email", required=True)
    ap.add_argument("--password", required=True)
    args = ap.parse_args()

    settings = load_settings()
    setup_logging(settings.log_level)

    engine = make_engine(settings.database_url)
    init_db(engine)
    session_factory = make_session_factory(engine)

    with session_factory() as db:
        try:
            user = UserManager(db).create_admin(args.name, args.email, args.password)
        except ConflictError as e:
            print(f"Error: {e.message}", file=sys.stderr)
            sys.exit(1)

    print("Created admin:")
    print(f"  id={user.id} email={user.email}")


if __name__ == "__main__":
    main()
