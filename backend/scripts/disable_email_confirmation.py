#!/usr/bin/env python3
"""
Turn email confirmation off (default) or back on.

Disabling also confirms every account still waiting for confirmation, and
accounts created afterwards are confirmed on insert.

Usage:
    python scripts/disable_email_confirmation.py [--enable]
"""

import argparse
import logging
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy.exc import SQLAlchemyError

from diabfit.core.database import SessionLocal
from diabfit.services.auth_service import AuthService

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Toggle email confirmation")
    parser.add_argument(
        "--enable", action="store_true", help="Require email confirmation again"
    )
    args = parser.parse_args(argv)

    db = SessionLocal()
    try:
        config, confirmed = AuthService(db).set_email_confirmation(args.enable)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"❌ Could not update auth config: {e}")
        return 1
    finally:
        db.close()

    state = "ENABLED" if config.enable_email_confirmations else "DISABLED"
    print("\n" + "=" * 60)
    print(f"🔐 Email confirmation {state}")
    print("=" * 60)
    print(f"  Sign-ups allowed:        {config.enable_signup}")
    print(f"  Pending accounts confirmed: {confirmed}")
    print()
    return 0


if __name__ == "__main__":
    sys.exit(main())
