"""
Create a user (e.g. first admin). Run from project root:
  python -m edu_registry.scripts.create_user EMAIL PASSWORD "FULL NAME" [role] [--worker-number N]
Example:
  python -m edu_registry.scripts.create_user admin@tec.mx your-secure-password "Ana Admin" admin --worker-number 1024
"""
import argparse
import logging
import sys

from edu_registry.core.database import SessionLocal
from edu_registry.core.errors import AuthServiceError
from edu_registry.core.security import hash_password, validate_new_password
from edu_registry.models import Role, User
from edu_registry.services.user_store import UserStore

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create an Edu Registry user.")
    parser.add_argument("email", help="Login email (unique)")
    parser.add_argument("password", help="Password (at least 6 chars)")
    parser.add_argument("nombre_completo", help="Full name")
    parser.add_argument(
        "role", nargs="?", default=Role.USER.value, choices=[r.value for r in Role]
    )
    parser.add_argument("--username", help="Defaults to the email local part")
    parser.add_argument("--worker-number", help="Staff number, admins only")
    args = parser.parse_args(argv)

    email = args.email.strip()
    if not email or "@" not in email or len(email) > 255:
        logger.error("Invalid email.")
        return 1
    if args.worker_number and args.role != Role.ADMIN.value:
        logger.error("--worker-number is only accepted for admin users.")
        return 1

    db = SessionLocal()
    try:
        validate_new_password(args.password)
        store = UserStore(db)
        if store.email_taken(email):
            logger.error("User '%s' already exists.", email)
            return 1
        store.add(
            User(
                email=email,
                username=args.username or email.split("@")[0],
                password_hash=hash_password(args.password),
                role=args.role,
                nombre_completo=args.nombre_completo,
                numero_trabajador=args.worker_number,
            )
        )
        logger.info("Created user '%s' with role '%s'.", email, args.role)
        return 0
    except AuthServiceError as e:
        logger.error("%s", e.message)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
