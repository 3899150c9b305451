"""Command-line entry point for the alt-text backfill."""

from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
import time
from pathlib import Path
from typing import Callable, Optional, Sequence

from .assets import fetch_all_assets, filter_assets_without_alt
from .client import StoryblokClient
from .config import AltTextConfig, load_config
from .errors import AltTextError, StoryblokAPIError
from .pipeline import AltTextEnricher
from .report import current_millis, summarize, write_report

logger = logging.getLogger("storyblok_alt.cli")


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description=(
            "Generate missing image alt text for a Storyblok space. "
            "Settings come from the environment; these flags override them."
        ),
    )
    parser.add_argument(
        "--env-file",
        type=Path,
        default=None,
        help="Load environment variables from this file instead of ./.env",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Generate alt text but do not write it back (overrides DRY_RUN)",
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Process at most this many assets (overrides ASSETS_LIMIT)",
    )
    parser.add_argument(
        "--report-dir",
        type=Path,
        default=None,
        help="Directory for the JSON report (overrides REPORT_DIR)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    argv = list(sys.argv[1:] if argv is None else argv)
    return parser.parse_args(argv)


def _apply_overrides(config: AltTextConfig, args: argparse.Namespace) -> AltTextConfig:
    changes = {}
    if args.dry_run:
        changes["dry_run"] = True
    if args.limit is not None:
        if args.limit < 0:
            raise AltTextError(f"--limit must not be negative, got {args.limit}")
        changes["assets_limit"] = args.limit or None
    if args.report_dir is not None:
        changes["report_dir"] = args.report_dir
    return dataclasses.replace(config, **changes) if changes else config


def run(
    config: AltTextConfig,
    client: Optional[StoryblokClient] = None,
    sleep: Optional[Callable[[float], None]] = None,
) -> Path:
    """Execute one backfill run and return the path of the written report."""
    started_at_ms = current_millis()
    client = client or StoryblokClient(config)

    logger.info("Fetching all assets...")
    all_assets = fetch_all_assets(client)
    candidates = filter_assets_without_alt(all_assets)
    to_process = (
        candidates[: config.assets_limit] if config.assets_limit else candidates
    )
    logger.info(
        "Processing %d of %d assets without alt%s",
        len(to_process),
        len(candidates),
        " (dry run)" if config.dry_run else "",
    )

    enricher = AltTextEnricher(client, dry_run=config.dry_run, sleep=sleep)
    results = enricher.run(to_process)

    path = write_report(results, config.report_dir, started_at_ms)
    counts = summarize(results)
    logger.info(
        "Done: %s",
        ", ".join(f"{status}={count}" for status, count in counts.items()),
    )
    return path


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )

    overall_start = time.perf_counter()
    try:
        config = _apply_overrides(load_config(env_file=args.env_file), args)
        run(config)
    except StoryblokAPIError as exc:
        logger.error("Fatal error: %s", exc.describe())
        return 1
    except (AltTextError, OSError) as exc:
        logger.error("Fatal error: %s", exc)
        return 1
    except Exception:  # pylint: disable=broad-except
        logger.exception("Fatal error")
        return 1

    logger.info("Finished in %.2fs", time.perf_counter() - overall_start)
    return 0


if __name__ == "__main__":
    sys.exit(main())
