"""Tests for CLI module."""

import io
import json
import logging
from pathlib import Path

import pytest

from nunit_event_listener.cli import (
    format_output,
    log_results_summary,
    read_fragments,
    replay_fragments,
    run,
)
from nunit_event_listener.listener import TestEventListener
from nunit_event_listener.models.result import TestResult

NO_LOG_CONFIG = '{"log_path": null}'

RETRIED_RUN = "\n".join(
    [
        '<start-run count="2"/>',
        '<start-test id="0-1" name="T1"/>',
        '<test-case id="0-1" name="T1" result="Failed" duration="0.1">'
        '<properties><property name="ZephyrTestId" value="ZEP-1"/></properties>'
        "<failure><message>flaky</message></failure></test-case>",
        '<test-case id="0-1" name="T1" result="Passed" duration="0.2">'
        '<properties><property name="ZephyrTestId" value="ZEP-1"/></properties>'
        "</test-case>",
        "",
        '<test-case id="0-2" name="T2" result="Passed" duration="2.5"/>',
        '<test-run id="2" result="Passed" total="2"/>',
    ]
)


def write_fragments(tmp_path: Path, content: str) -> str:
    """Write fragments to a file and return its path."""
    path = tmp_path / "events.txt"
    path.write_text(content, encoding="utf-8")
    return str(path)


def test_log_results_summary(caplog: pytest.LogCaptureFixture) -> None:
    """Logs each result with its outcome symbol."""
    results = {
        "T1": TestResult(name="T1", outcome="Passed", duration_seconds=2),
        "T2": TestResult(
            name="T2",
            outcome="Failed",
            duration_seconds=1,
            external_test_id="ZEP-9",
            failure_message="Expected 1 but was 2",
        ),
    }

    with caplog.at_level(logging.INFO):
        log_results_summary(logging.getLogger(), results, completed=True)

    assert "Test Results Summary:" in caplog.text
    assert "✓ T1: Passed (2s)" in caplog.text
    assert "✗ T2: Failed (1s)" in caplog.text
    assert "Test ID: ZEP-9" in caplog.text
    assert "Message: Expected 1 but was 2" in caplog.text
    assert "did not report completion" not in caplog.text


def test_log_results_summary_incomplete(caplog: pytest.LogCaptureFixture) -> None:
    """Warns when the run never completed."""
    with caplog.at_level(logging.INFO):
        log_results_summary(logging.getLogger(), {}, completed=False)

    assert "Test run did not report completion" in caplog.text


def test_read_fragments_skips_blank_lines(tmp_path: Path) -> None:
    """Each non-blank line is one fragment."""
    path = write_fragments(tmp_path, "<a/>\n\n   \n  <b/>  \n")

    assert read_fragments([path]) == ["<a/>", "<b/>"]


def test_read_fragments_from_stdin(monkeypatch: pytest.MonkeyPatch) -> None:
    """Reads fragments from stdin for '-'."""
    monkeypatch.setattr("sys.stdin", io.StringIO("<a/>\n<b/>\n"))

    assert read_fragments(["-"]) == ["<a/>", "<b/>"]


def test_replay_counts_rejected_fragments() -> None:
    """Rejected fragments are counted and replay continues."""
    listener = TestEventListener()

    rejected = replay_fragments(
        listener,
        [
            '<test-case name="T1" result="Passed" duration="1"/>',
            "<test-case",
            '<test-case name="\ud800" duration="1"/>',
            '<test-case name="T2" result="Passed"/>',
            '<test-case name="T3" result="Passed" duration="1"/>',
        ],
    )

    assert rejected == 3
    assert list(listener.store.snapshot()) == ["T1", "T3"]


def test_format_output() -> None:
    """Formats counts and records for JSON output."""
    results = {
        "T1": TestResult(name="T1", outcome="Passed"),
        "T2": TestResult(name="T2", outcome="Failed"),
        "T3": TestResult(name="T3", outcome="Skipped"),
    }

    output = format_output(results, rejected=1, completed=True)

    assert output["total"] == 3
    assert output["passed"] == 1
    assert output["failed"] == 1
    assert output["skipped"] == 1
    assert output["rejected"] == 1
    assert output["completed"] is True
    assert [r["name"] for r in output["results"]] == ["T1", "T2", "T3"]


async def test_run_consolidates_retries(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """Replays a run with a retried test and reports final outcomes."""
    path = write_fragments(tmp_path, RETRIED_RUN)

    exit_code = await run([path], NO_LOG_CONFIG)

    output = json.loads(capsys.readouterr().out)
    assert exit_code == 0
    assert output["total"] == 2
    assert output["passed"] == 2
    assert output["completed"] is True
    first = output["results"][0]
    assert first["name"] == "T1"
    assert first["outcome"] == "Passed"
    assert first["external_test_id"] == "ZEP-1"
    assert first["failure_message"] is None
    assert output["results"][1]["duration_seconds"] == 2


async def test_run_fails_on_failed_tests(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """Returns 1 when a final outcome is a failure."""
    path = write_fragments(
        tmp_path,
        '<test-case name="T1" result="Failed" duration="1"/>\n'
        '<test-run result="Failed"/>\n',
    )

    exit_code = await run([path], NO_LOG_CONFIG)

    assert exit_code == 1
    assert json.loads(capsys.readouterr().out)["failed"] == 1


async def test_run_fails_without_completion(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """Returns 1 when the run never reports completion."""
    path = write_fragments(
        tmp_path,
        '<test-case name="T1" result="Passed" duration="1"/>\n<test-run id="2"/>\n',
    )

    exit_code = await run([path], '{"log_path": null, "completion_timeout": 0.05}')

    assert exit_code == 1
    assert json.loads(capsys.readouterr().out)["completed"] is False


async def test_run_fails_on_rejected_fragments(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """Returns 1 when fragments were rejected."""
    path = write_fragments(
        tmp_path,
        "<test-case name='T1'\n<test-run result=\"Passed\"/>\n",
    )

    exit_code = await run([path], NO_LOG_CONFIG)

    output = json.loads(capsys.readouterr().out)
    assert exit_code == 1
    assert output["rejected"] == 1
    assert output["total"] == 0


async def test_run_writes_log_file(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """Writes one log entry per processed test case."""
    path = write_fragments(tmp_path, RETRIED_RUN)
    log_path = tmp_path / "TestEventListener.log"

    await run([path], json.dumps({"log_path": str(log_path)}))

    capsys.readouterr()
    assert log_path.read_text(encoding="utf-8").count("TestCase Result:") == 3
