"""
Provision the bootstrap admin. Run once per deployment from project root:
  python -m app.scripts.provision_admin EMAIL PASSWORD
or with BOOTSTRAP_ADMIN_EMAIL / BOOTSTRAP_ADMIN_PASSWORD set:
  python -m app.scripts.provision_admin
Re-running is harmless: an existing admin is reported and left approved.
"""
import argparse
import logging
import sys

from app.core.config import get_settings
from app.core.context import AppContext
from app.core.exceptions import AppException
from app.core.logging_setup import configure_logging
from app.services.users import provision_admin

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create the approved admin account if it does not exist.")
    parser.add_argument("email", nargs="?", help="Admin email (defaults to BOOTSTRAP_ADMIN_EMAIL)")
    parser.add_argument("password", nargs="?", help="Admin password (defaults to BOOTSTRAP_ADMIN_PASSWORD)")
    args = parser.parse_args(argv)

    settings = get_settings()
    configure_logging(settings)

    email = args.email or settings.BOOTSTRAP_ADMIN_EMAIL
    password = args.password
    if password is None and settings.BOOTSTRAP_ADMIN_PASSWORD is not None:
        password = settings.BOOTSTRAP_ADMIN_PASSWORD.get_secret_value()
    if not email or not password:
        print("Email and password are required (arguments or BOOTSTRAP_ADMIN_* env).", file=sys.stderr)
        return 1

    context = AppContext(settings)
    db = context.session()
    try:
        user, created = provision_admin(db, email, password, settings=settings)
    except AppException as e:
        print(e.message, file=sys.stderr)
        return 1
    finally:
        db.close()
        context.close()

    if created:
        logger.info("Provisioned admin id=%s", user.id)
        print(f"Created admin '{user.email}'.")
    else:
        print(f"Admin '{user.email}' already exists.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
