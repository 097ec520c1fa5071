#!/usr/bin/env python
"""
CLI script to create users for the Voice Relay service.

Usage:
    python create_user.py --name "Ann" --email user@example.com
    python create_user.py --name "Ann" --email user@example.com --password mypassword

If no password is provided, a random secure password will be generated.
"""
import argparse
import asyncio
import secrets
import string
import sys

from voice_relay.config import get_settings
from voice_relay.exceptions import UserAlreadyExistsError, VoiceRelayError
from voice_relay.logging_config import setup_logging
from voice_relay.services.accounts import AccountService
from voice_relay.services.firestore import FirestoreUserStore


def generate_password(length: int = 16) -> str:
    """Generate a random secure password."""
    alphabet = string.ascii_letters + string.digits + "!@#$%^&*"
    return ''.join(secrets.choice(alphabet) for _ in range(length))


async def create_user(name: str, email: str, password: str) -> int:
    """Create a user in Firestore. Returns the process exit code."""
    settings = get_settings()
    accounts = AccountService(FirestoreUserStore.from_settings(settings), settings)

    try:
        user = await accounts.register(name=name, email=email.strip().lower(), password=password)
    except UserAlreadyExistsError:
        print(f"Error: User with email '{email}' already exists.")
        return 1
    except VoiceRelayError as e:
        print(f"Error: {e.message}")
        return 1

    print(f"\n{'='*50}")
    print("User created successfully!")
    print(f"{'='*50}")
    print(f"Name:     {user.name}")
    print(f"Email:    {user.email}")
    print(f"Password: {password}")
    print(f"User ID:  {user.id}")
    print(f"{'='*50}")
    print("\nPlease save the password securely and send it to the user.")
    print("The password cannot be retrieved later - only changed.\n")
    return 0


def main():
    parser = argparse.ArgumentParser(
        description="Create a user for the Voice Relay service"
    )
    parser.add_argument(
        "--name",
        required=True,
        help="User's display name"
    )
    parser.add_argument(
        "--email",
        required=True,
        help="User's email address"
    )
    parser.add_argument(
        "--password",
        required=False,
        help="User's password (optional - will generate if not provided)"
    )

    args = parser.parse_args()
    setup_logging("WARNING")

    # Generate password if not provided
    password = args.password
    if not password:
        password = generate_password()
        print(f"Generated password: {password}")

    # Validate email format (basic check)
    if "@" not in args.email or "." not in args.email:
        print(f"Error: Invalid email format: {args.email}")
        sys.exit(1)

    sys.exit(asyncio.run(create_user(args.name, args.email, password)))


if __name__ == "__main__":
    main()
