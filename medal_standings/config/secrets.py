"""
Secret management for the medals API key.

Usage:
    from medal_standings.config.secrets import get_rapidapi_key

    # Will raise if key is missing
    key = get_rapidapi_key()

CLI check:
    python -m medal_standings.config.secrets --check
"""

import os
import sys
from pathlib import Path

from dotenv import load_dotenv

# Find .env file - walk up from this file to repo root
_current = Path(__file__).resolve()
_repo_root = _current.parent.parent.parent  # medal_standings/config/secrets.py -> repo root
_env_path = _repo_root / ".env"

if _env_path.exists():
    load_dotenv(_env_path)
else:
    # Also try current working directory
    load_dotenv()


RAPIDAPI_KEY_VAR = "RAPIDAPI_KEY"


class MissingAPIKeyError(Exception):
    """Raised when a required API key is not configured."""
    pass


def get_rapidapi_key() -> str:
    """
    Get the RapidAPI key for the structured medals API.

    Returns:
        str: The API key

    Raises:
        MissingAPIKeyError: If RAPIDAPI_KEY is not set
    """
    key = os.environ.get(RAPIDAPI_KEY_VAR, "").strip()
    if not key:
        raise MissingAPIKeyError(
            f"{RAPIDAPI_KEY_VAR} not found. "
            "Copy .env.example to .env and add your key."
        )
    return key


def check_keys() -> dict:
    """
    Check which API keys are configured.

    Returns:
        dict: Status of each key ("OK" or "MISSING")
    """
    key = os.environ.get(RAPIDAPI_KEY_VAR, "").strip()
    return {RAPIDAPI_KEY_VAR: "OK" if key else "MISSING"}


def _cli_check() -> int:
    """CLI entry point for --check flag."""
    status = check_keys()
    all_ok = True

    for key_name, key_status in status.items():
        print(f"{key_name}: {key_status}")
        if key_status == "MISSING":
            all_ok = False

    if not all_ok:
        print("\nTo configure keys:")
        print("  1. Copy .env.example to .env")
        print(f"  2. Add {RAPIDAPI_KEY_VAR} to .env")
        print("  (Only needed when source is 'api'.)")
        return 1

    print("\nAll keys configured.")
    return 0


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(
        description="Check API key configuration"
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Check if API keys are configured"
    )

    args = parser.parse_args()

    if args.check:
        sys.exit(_cli_check())
    else:
        parser.print_help()
