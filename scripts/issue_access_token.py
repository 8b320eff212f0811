"""Utility script to mint an access token for an existing user."""

from __future__ import annotations

import argparse
from datetime import timedelta

from sqlalchemy.exc import SQLAlchemyError

from inbox.infrastructure.database import SessionLocal, initialize_database
from inbox.infrastructure.repositories import UserRepository
from inbox.infrastructure.security import create_access_token


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for token generation."""

    parser = argparse.ArgumentParser(
        description="Issue a bearer token to call the notifications API as a given user.",
    )
    target = parser.add_mutually_exclusive_group(required=True)
    target.add_argument("--user-id", type=int, help="Identificador del usuario")
    target.add_argument("--username", help="Nombre de usuario")
    parser.add_argument(
        "--expires-minutes",
        type=int,
        default=None,
        help="Minutos de validez del token (por defecto: ACCESS_TOKEN_EXPIRE_MINUTES)",
    )
    return parser.parse_args()


def main() -> None:
    """Look up the user and print a freshly signed token."""

    args = parse_args()
    initialize_database()
    session = SessionLocal()
    try:
        repository = UserRepository(session)
        if args.user_id is not None:
            user = repository.get(args.user_id)
        else:
            user = repository.get_by_username(args.username)
    except SQLAlchemyError as exc:
        raise SystemExit(f"No se pudo consultar el usuario: {exc}") from exc
    finally:
        session.close()

    if user is None:
        raise SystemExit("Usuario no encontrado")

    expires = timedelta(minutes=args.expires_minutes) if args.expires_minutes else None
    print(create_access_token(user.id, expires_delta=expires))


if __name__ == "__main__":
    main()
