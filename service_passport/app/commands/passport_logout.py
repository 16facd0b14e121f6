#!/usr/bin/env python3
"""
Force a refresh token onto the revocation list.

Operators run this when an admin session must end before its refresh token
expires. The token is read from ``--token`` or prompted for interactively;
it is decoded, validated and verified before being revoked for the rest of
its lifetime.
"""

import argparse
import asyncio
import sys
from typing import Callable, List, Optional

from pydantic import ValidationError as SettingsError

from shared.config import get_settings
from shared.errors import PassportException, RevocationError
from shared.logging import configure_logging, get_logger

from ..passport import PassportService
from ..revocation import RedisRevocationStore

MAX_ATTEMPTS = 3

logger = get_logger("passport.commands.logout")


def ask_for_refresh_token(prompt: Callable[[str], str] = input, attempts: int = MAX_ATTEMPTS) -> Optional[str]:
    """Prompt until a non-empty token is entered, at most ``attempts`` times."""
    for _ in range(attempts):
        value = (prompt("Please enter a refreshToken: ") or "").strip()
        if value:
            return value
    return None


async def run_logout(service: PassportService, refresh_token: str) -> int:
    """Revoke ``refresh_token`` and report the outcome; returns an exit code."""
    try:
        if await service.is_revoked(refresh_token):
            print("error: refresh token is already logged out", file=sys.stderr)
            return 1

        result = await service.logout(refresh_token)
    except PassportException as exc:
        print(f"error: {exc.message}", file=sys.stderr)
        return 1
    except Exception as exc:  # pragma: no cover - CLI surface
        logger.error("Logout failed", error=str(exc), error_type=type(exc).__name__)
        print("error: logout failed", file=sys.stderr)
        return 1

    if result.already_revoked:
        print("error: refresh token is already logged out", file=sys.stderr)
        return 1

    print(f"Logout success and adminid is: {result.admin_id}")
    return 0


async def _logout_with_redis(service: PassportService, store: RedisRevocationStore, refresh_token: str) -> int:
    try:
        await store.start()
        return await run_logout(service, refresh_token)
    except RevocationError as exc:
        print(f"error: {exc.message}", file=sys.stderr)
        return 1
    finally:
        await store.stop()


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Revoke a passport refresh token (force logout).")
    parser.add_argument("--token", default=None, help="Refresh token to revoke; prompted for when omitted")
    parser.add_argument("--redis-url", default=None, help="Redis connection URL (defaults to PASSPORT_REDIS_URL)")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None, prompt: Callable[[str], str] = input) -> int:
    args = _parse_args(argv)

    try:
        settings = get_settings()
        configure_logging("passport", settings.log_level)

        refresh_token = args.token.strip() if args.token else ask_for_refresh_token(prompt)
        if not refresh_token:
            print("error: no refresh token entered", file=sys.stderr)
            return 1

        store = RedisRevocationStore(
            args.redis_url or settings.redis_url,
            prefix=settings.revocation_prefix,
            timeout=settings.redis_timeout,
        )
        service = PassportService.from_settings(settings, store)
    except PassportException as exc:
        print(f"error: {exc.message}", file=sys.stderr)
        return 1
    except SettingsError:
        print("error: passport configuration is invalid", file=sys.stderr)
        return 1
    except (EOFError, KeyboardInterrupt):
        return 130

    try:
        return asyncio.run(_logout_with_redis(service, store, refresh_token))
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    raise SystemExit(main())
