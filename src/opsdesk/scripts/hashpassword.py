"""Print a salted SHA-256 hash for a password, for use in OPSDESK_ACCOUNTS."""

import sys
from getpass import getpass

from opsdesk.core.security import hash_password

MIN_PASSWORD_LENGTH = 8


def prompt_for_password(prompt=getpass) -> str:
    """Prompt for password with validation."""
    while True:
        password = prompt("Password: ")

        if len(password) < MIN_PASSWORD_LENGTH:
            print(f"❌ Password must be at least {MIN_PASSWORD_LENGTH} characters")
            continue

        password_confirm = prompt("Password (confirm): ")

        if password != password_confirm:
            print("❌ Passwords don't match")
            continue

        return password


def main() -> int:
    """Interactive hash generation."""
    print("\n" + "=" * 50)
    print("opsdesk - Hash password")
    print("=" * 50 + "\n")

    try:
        password = prompt_for_password()
    except (KeyboardInterrupt, EOFError):
        print("\n\n❌ Cancelled\n")
        return 1

    print("\n✅ Add this as password_hash in OPSDESK_ACCOUNTS:")
    print(f"   {hash_password(password)}\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
