"""
Create a user from the command line (e.g. the first administrator, who then
gets a token via POST /api/auth/login). Run from project root:
  python -m iacp.scripts.create_user USERNAME EMAIL PHONE PASSWORD
Example:
  python -m iacp.scripts.create_user admin admin@example.com +15550100 your-secure-password
"""
import argparse
import logging
import sys

from pydantic import ValidationError

from iacp.core.database import SessionLocal
from iacp.schemas.users import UserCreate
from iacp.services.errors import ConflictError
from iacp.services.users import create_user

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create an IACP user.")
    parser.add_argument("username", help="Username (3-255 chars: letters, digits, underscore)")
    parser.add_argument("email", help="Email address")
    parser.add_argument("phone", help="Phone number (max 20 chars)")
    parser.add_argument("password", help="Password (6-255 chars)")
    args = parser.parse_args(argv)

    try:
        body = UserCreate(
            username=args.username.strip(),
            email=args.email.strip(),
            phone=args.phone.strip(),
            password=args.password,
        )
    except ValidationError as e:
        for err in e.errors():
            field = ".".join(str(p) for p in err.get("loc", ()))
            print(f"Invalid {field}: {err.get('msg')}", file=sys.stderr)
        return 1

    db = SessionLocal()
    try:
        user = create_user(db, body.username, str(body.email), body.phone, body.password)
    except ConflictError as e:
        print(e.message, file=sys.stderr)
        return 1
    except Exception as e:
        logger.exception("Failed to create user: %s", e)
        return 1
    finally:
        db.close()
    print(f"Created user '{user.username}' (id={user.id}).")
    return 0


if __name__ == "__main__":
    sys.exit(main())
