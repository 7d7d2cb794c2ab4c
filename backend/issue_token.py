#!/usr/bin/env python3
"""Issue an access token for a user id (local testing of the upload API)"""
import sys

from config.settings import load_config
from services.auth_service import create_access_token


def main(argv: list[str]) -> int:
    if len(argv) < 2:
        print("usage: issue_token.py <user_id> [expires_minutes]")
        return 1

    config = load_config()
    user_id = argv[1]
    expires = int(argv[2]) if len(argv) > 2 else 60

    token = create_access_token(user_id, config.jwt_secret, config.jwt_algorithm, expires)
    print(f"✓ Token for {user_id} (valid {expires} min):\n")
    print(token)
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))
