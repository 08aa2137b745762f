#!/usr/bin/env python3
"""
Generate a session encryption secret.

The storefront derives its cookie encryption key from ENCRYPTION_KEY.
This script prints a fresh random secret and, when asked, writes it to
config/.env, moving the previous key to ENCRYPTION_KEY_FALLBACKS so
existing carts stay readable.

Usage:
    python scripts/generate_secret.py [--write]
"""

import json
import sys
from pathlib import Path

from cryptography.fernet import Fernet
from dotenv import dotenv_values, set_key

# Project root
PROJECT_ROOT = Path(__file__).parent.parent
ENV_FILE = PROJECT_ROOT / "config" / ".env"


def generate_secret() -> str:
    """Random 32-byte URL-safe secret"""
    return Fernet.generate_key().decode()


def write_secret(env_file: Path, secret: str) -> None:
    """Store a new primary key and keep the old one as a fallback"""
    env_file.parent.mkdir(parents=True, exist_ok=True)
    env_file.touch(exist_ok=True)

    current = dotenv_values(env_file)
    previous = current.get("ENCRYPTION_KEY")
    fallbacks = json.loads(current.get("ENCRYPTION_KEY_FALLBACKS") or "[]")
    if previous:
        fallbacks.insert(0, previous)

    set_key(str(env_file), "ENCRYPTION_KEY", secret, quote_mode="never")
    set_key(str(env_file), "ENCRYPTION_KEY_FALLBACKS", json.dumps(fallbacks), quote_mode="never")


def main():
    secret = generate_secret()

    print("=" * 60)
    print("Session Secret Generator")
    print("=" * 60)

    if "--write" in sys.argv:
        if ENV_FILE.exists() and dotenv_values(ENV_FILE).get("ENCRYPTION_KEY"):
            response = input("\nENCRYPTION_KEY already set. Rotate it? [y/N]: ")
            if response.lower() != "y":
                print("Aborted.")
                sys.exit(0)
        write_secret(ENV_FILE, secret)
        print(f"\nWrote ENCRYPTION_KEY to {ENV_FILE}")
    else:
        print("\nAdd the following line to config/.env:")
        print(f"\nENCRYPTION_KEY={secret}")

    print("\n" + "=" * 60)


if __name__ == "__main__":
    main()
