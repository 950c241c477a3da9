"""CLI entry point for indexer conformance tests."""

import argparse
import asyncio
import json
import logging
import sys
from typing import Any, TextIO

from indexer_tester.adapters.loading import load_indexer_manifest
from indexer_tester.models.result import RunResult
from indexer_tester.tester import TesterOptions, run_conformance


def format_output(result: RunResult) -> dict[str, Any]:
    """Format a run result for JSON output."""
    return {
        "indexer": result.indexer_id,
        "status": "success" if result.succeeded else "failure",
        "error": str(result.error) if result.error is not None else None,
        "steps": [
            {
                "label": outcome.label,
                "status": outcome.status,
                "duration": outcome.duration,
                "message": outcome.message,
            }
            for outcome in result.outcomes
        ],
    }


async def run(
    indexer_key: str,
    indexer_config_json: str,
    download: bool = False,
    json_output: bool = False,
) -> int:
    """Run conformance tests and return exit code."""
    log = logging.getLogger("indexer_tester")

    log.info("Loading indexer: %s", indexer_key)
    manifest = load_indexer_manifest(indexer_key)

    config_dict = json.loads(indexer_config_json)
    config = manifest.config_cls(**config_dict)

    options = TesterOptions(download=download)
    progress: TextIO = sys.stderr if json_output else sys.stdout

    async with manifest.indexer_factory(config) as indexer:
        result = await run_conformance(indexer, options, output=progress, logger=log)

    if json_output:
        print(json.dumps(format_output(result), indent=2))

    return 0 if result.succeeded else 1


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Run conformance tests against an indexer"
    )
    parser.add_argument(
        "--indexer",
        required=True,
        help="Indexer key as registered by its plugin (e.g., static)",
    )
    parser.add_argument(
        "--indexer-config",
        default="{}",
        help="JSON configuration for the indexer",
    )
    parser.add_argument(
        "--download",
        action="store_true",
        help="Also download every non-magnet result link",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print a JSON report to stdout (progress goes to stderr)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    exit_code = asyncio.run(
        run(
            indexer_key=args.indexer,
            indexer_config_json=args.indexer_config,
            download=args.download,
            json_output=args.json,
        )
    )
    sys.exit(exit_code)


if __name__ == "__main__":  # pragma: no cover
    main()
