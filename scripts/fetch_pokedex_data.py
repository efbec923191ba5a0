#!/usr/bin/env python3
"""Download the pokedex CSV exports the bot builds its catalog from."""

from __future__ import annotations

import argparse
import asyncio
import os
import sys
from pathlib import Path
from typing import Sequence

import aiohttp
from dotenv import load_dotenv

REPO_ROOT = Path(__file__).resolve().parent.parent
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dexbot.catalog import FLAVOR_TEXT_FILE, SPECIES_NAMES_FILE  # noqa: E402

DEFAULT_BASE_URL = "https://raw.githubusercontent.com/veekun/pokedex/master/pokedex/data/csv"
DATA_FILES: Sequence[str] = (SPECIES_NAMES_FILE, FLAVOR_TEXT_FILE)


async def _download(session: aiohttp.ClientSession, url: str, target: Path) -> None:
    async with session.get(url, timeout=aiohttp.ClientTimeout(total=60)) as resp:
        if resp.status != 200:
            raise RuntimeError(f"GET {url} returned HTTP {resp.status}")
        payload = await resp.read()
    tmp_path = target.with_suffix(target.suffix + ".part")
    tmp_path.write_bytes(payload)
    tmp_path.replace(target)
    print(f"[OK] {target} ({len(payload)} bytes)")


async def fetch_all(dest: Path, base_url: str, *, force: bool) -> int:
    dest.mkdir(parents=True, exist_ok=True)
    failures = 0
    async with aiohttp.ClientSession() as session:
        for filename in DATA_FILES:
            target = dest / filename
            if target.exists() and not force:
                print(f"[SKIP] {target} already exists (use --force to refresh)")
                continue
            url = f"{base_url.rstrip('/')}/{filename}"
            try:
                await _download(session, url, target)
            except (aiohttp.ClientError, asyncio.TimeoutError, RuntimeError, OSError) as exc:
                print(f"[ERROR] {filename}: {exc}", file=sys.stderr)
                failures += 1
    return failures


def main(argv: Sequence[str] | None = None) -> int:
    load_dotenv()
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--dest",
        type=Path,
        default=Path(os.getenv("DEXBOT_DATA_DIR", str(REPO_ROOT / "pokedex"))),
        help="Directory to write the CSV files into.",
    )
    parser.add_argument("--base-url", default=DEFAULT_BASE_URL, help="Where the CSV exports live.")
    parser.add_argument("--force", action="store_true", help="Overwrite files that already exist.")
    args = parser.parse_args(argv)

    failures = asyncio.run(fetch_all(args.dest.expanduser(), args.base_url, force=args.force))
    return 1 if failures else 0


if __name__ == "__main__":
    raise SystemExit(main())
