"""Verify the client's environment configuration before a session is started.

Three checks are available:

1. ``check`` loads ``AppSettings`` from an env file, reporting a missing or
   malformed ``BUJO_BASE_URL`` and confirming the session database directory
   is writable when the SQLite backend is selected.
2. ``record`` runs the same validation and stores a SHA256 baseline of the
   env file.
3. ``verify`` validates again and compares the env file with that baseline,
   so an unexpected edit (for example, pointing the client at a different
   API origin) is noticed.

Example usages::

    python -m scripts.check_env record --env-file ~/.config/bujo/.env \
        --hash-file ~/.config/bujo/.env.sha256

    python -m scripts.check_env verify --env-file ~/.config/bujo/.env \
        --hash-file ~/.config/bujo/.env.sha256
"""

from __future__ import annotations

import argparse
import hashlib
import os
import sys
from pathlib import Path
from typing import Callable

from pydantic import ValidationError

from bujo.core.config import AppSettings

EXIT_OK = 0
EXIT_VALIDATION_ERROR = 2
EXIT_CHECKSUM_ERROR = 3
EXIT_STORAGE_ERROR = 4
EXIT_RUNTIME_ERROR = 5


def _digest(env_file: Path) -> str:
    return hashlib.sha256(env_file.read_bytes()).hexdigest()


def _load_settings(env_file: Path) -> AppSettings:
    """Instantiate settings from ``env_file``; OS environment still takes priority."""
    return AppSettings(_env_file=env_file)  # type: ignore[call-arg]


def _session_dir_writable(settings: AppSettings) -> bool:
    if settings.session_backend != "sqlite":
        return True
    directory = Path(settings.session_db_path).expanduser().resolve().parent
    while not directory.exists() and directory != directory.parent:
        directory = directory.parent
    return os.access(directory, os.W_OK)


def _record(env_file: Path, hash_file: Path) -> int:
    checksum = _digest(env_file)
    hash_file.write_text(f"{checksum}\n", encoding="utf-8")
    print(f"Recorded baseline {checksum} to {hash_file}")
    return EXIT_OK


def _verify(env_file: Path, hash_file: Path) -> int:
    if not hash_file.exists():
        print(
            f"No baseline at {hash_file}; run the 'record' command first.",
            file=sys.stderr,
        )
        return EXIT_RUNTIME_ERROR

    expected = hash_file.read_text(encoding="utf-8").strip()
    actual = _digest(env_file)
    if expected == actual:
        print("Environment checksum OK.")
        return EXIT_OK

    print(
        "Environment file changed since the baseline was recorded.\n"
        f"  baseline: {expected}\n"
        f"  current:  {actual}",
        file=sys.stderr,
    )
    return EXIT_CHECKSUM_ERROR


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Validate client settings and detect .env drift."
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    for name, help_text, needs_hash in (
        ("check", "Validate settings only.", False),
        ("record", "Validate settings and store a checksum baseline.", True),
        ("verify", "Validate settings and compare against the baseline.", True),
    ):
        subparser = subparsers.add_parser(name, help=help_text)
        subparser.add_argument(
            "--env-file",
            default=".env",
            type=Path,
            help="Path to the environment file (default: ./.env).",
        )
        if needs_hash:
            subparser.add_argument(
                "--hash-file",
                required=True,
                type=Path,
                help="Checksum baseline location.",
            )

    return parser


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    env_file: Path = args.env_file

    if not env_file.exists():
        print(f"Environment file {env_file} does not exist.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    try:
        settings = _load_settings(env_file)
    except ValidationError as exc:
        print(
            "Settings validation failed:\n" f"{exc.json(indent=2)}",
            file=sys.stderr,
        )
        return EXIT_VALIDATION_ERROR

    if not _session_dir_writable(settings):
        print(
            f"Session database location {settings.session_db_path} is not writable.",
            file=sys.stderr,
        )
        return EXIT_STORAGE_ERROR

    print(f"API base URL: {settings.base_url}")

    handlers: dict[str, Callable[[], int]] = {
        "check": lambda: EXIT_OK,
        "record": lambda: _record(env_file, args.hash_file),
        "verify": lambda: _verify(env_file, args.hash_file),
    }
    return handlers[args.command]()


if __name__ == "__main__":  # pragma: no cover - script entry point
    sys.exit(main())
