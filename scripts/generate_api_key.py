#!/usr/bin/env python3
"""
Script: generate_api_key.py
Description: Generate an API key for the webhook dispatch endpoint.

Prints a new plain API key and the API_KEY_HASH value to configure on
the service. Only the hash is stored with the deployment.

Usage:
    python scripts/generate_api_key.py
    python scripts/generate_api_key.py --hash-only whk_existing_key

Security Note:
    The plaintext API key is shown only once. Store it securely!
"""

import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from auth.api_key import generate_api_key, hash_api_key  # noqa: E402


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Generate an API key and its PBKDF2 hash"
    )
    parser.add_argument(
        "--hash-only",
        metavar="API_KEY",
        help="Hash an existing key instead of generating a new one"
    )
    args = parser.parse_args()

    api_key = args.hash_only or generate_api_key()

    try:
        hashed_key = hash_api_key(api_key)
    except ValueError as e:
        print(f"ERROR: {e}")
        return 1

    if not args.hash_only:
        print(f"API key:      {api_key}")
        print("   WARNING: Store this key securely! It will not be shown again.")
    print(f"API_KEY_HASH={hashed_key}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
