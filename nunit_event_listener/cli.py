"""CLI entry point replaying recorded test event reports."""

import argparse
import asyncio
import json
import logging
import sys
from collections.abc import Iterable, Mapping, Sequence
from pathlib import Path
from typing import Any

from nunit_event_listener.config import ListenerConfig
from nunit_event_listener.errors import ReportError
from nunit_event_listener.listener import TestEventListener
from nunit_event_listener.models.result import TestResult

STATUS_SYMBOLS = {
    "passed": "✓",
    "failed": "✗",
    "skipped": "-",
    "inconclusive": "?",
    "warning": "!",
}


def log_results_summary(
    log: logging.Logger, results: Mapping[str, TestResult], completed: bool
) -> None:
    """Log a formatted summary of the consolidated test results."""
    log.info("=" * 80)
    log.info("Test Results Summary:")
    log.info("=" * 80)

    for result in results.values():
        symbol = STATUS_SYMBOLS.get((result.outcome or "").lower(), "?")
        log.info(
            "%s %s: %s (%ds)",
            symbol,
            result.name,
            result.outcome,
            result.duration_seconds,
        )
        if result.external_test_id:
            log.info("  Test ID: %s", result.external_test_id)
        if result.failure_message:
            log.info("  Message: %s", result.failure_message)

    if not completed:
        log.warning("Test run did not report completion")


def read_fragments(inputs: Sequence[str]) -> Sequence[str]:
    """Read report fragments, one per non-blank line, from files or stdin."""
    fragments: list[str] = []
    for source in inputs:
        if source == "-":
            lines: Iterable[str] = sys.stdin
        else:
            lines = Path(source).read_text(encoding="utf-8").splitlines()
        fragments.extend(line.strip() for line in lines if line.strip())
    return fragments


def replay_fragments(listener: TestEventListener, fragments: Sequence[str]) -> int:
    """Feed fragments to the listener in order and return the rejected count."""
    rejected = 0
    for fragment in fragments:
        try:
            listener.on_test_event(fragment)
        except ReportError:
            # Already logged by the listener; keep replaying the stream.
            rejected += 1
    return rejected


async def run(inputs: Sequence[str], config_json: str = "{}") -> int:
    """Replay recorded reports and return exit code."""
    log = logging.getLogger("nunit_event_listener")

    config = ListenerConfig(**json.loads(config_json))
    listener = TestEventListener.from_config(config)

    fragments = read_fragments(inputs)
    log.info("Replaying %d report fragment(s)...", len(fragments))

    rejected = await asyncio.to_thread(replay_fragments, listener, fragments)
    completed = await listener.store.wait_for_completion_async(
        timeout=config.completion_timeout
    )

    results = listener.store.snapshot()
    log_results_summary(log, results, completed)

    output = format_output(results, rejected=rejected, completed=completed)
    print(json.dumps(output, indent=2))

    has_failures = any(result.failed for result in results.values())
    return 1 if has_failures or rejected or not completed else 0


def format_output(
    results: Mapping[str, TestResult], rejected: int, completed: bool
) -> dict[str, Any]:
    """Format consolidated results for JSON output."""
    all_results = [json.loads(result.to_json()) for result in results.values()]
    outcomes = [(result.outcome or "").lower() for result in results.values()]

    return {
        "total": len(all_results),
        "passed": outcomes.count("passed"),
        "failed": outcomes.count("failed"),
        "skipped": outcomes.count("skipped"),
        "rejected": rejected,
        "completed": completed,
        "results": all_results,
    }


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Replay NUnit test event reports and consolidate results"
    )
    parser.add_argument(
        "--input",
        action="append",
        required=True,
        help="File with one report fragment per line ('-' for stdin)",
    )
    parser.add_argument(
        "--config",
        default="{}",
        help="JSON configuration for the listener",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    exit_code = asyncio.run(run(inputs=args.input, config_json=args.config))
    sys.exit(exit_code)


if __name__ == "__main__":  # pragma: no cover
    main()
