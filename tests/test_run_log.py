import logging
import re
from datetime import datetime, timedelta
from pathlib import Path

from pixorder_app.core.errors import FileSkippedError
from pixorder_app.core.ratio import AspectRatio
from pixorder_app.core.results import ClassificationResult, ClassificationSummary
from pixorder_app.core.rules import default_rules
from pixorder_app.utils.run_log import LogLevel, RunLogger

LINE_PATTERN = re.compile(
    r"^\[\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}\.\d{3}\] \[(DEBUG|INFO|WARNING|ERROR)\] .+$"
)


def _summary(results, total=None):
    start = datetime(2024, 1, 1, 12, 0, 0)
    successes = sum(1 for r in results if r.success)
    total = len(results) if total is None else total
    return ClassificationSummary(
        start_time=start,
        end_time=start + timedelta(seconds=1.5),
        total_files=total,
        successful_files=successes,
        failed_files=total - successes,
        results=results,
    )


def test_file_lines_are_timestamped(tmp_path):
    log_path = tmp_path / "run.log"
    run_log = RunLogger(log_path=log_path)
    run_log.log("first")
    run_log.log("second", LogLevel.WARNING)

    lines = log_path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 2
    assert all(LINE_PATTERN.match(line) for line in lines)
    assert lines[1].endswith("[WARNING] second")
    assert run_log.message_count == 2


def test_log_to_file_uses_log_dir(tmp_path):
    run_log = RunLogger(log_to_file=True, log_dir=tmp_path)
    run_log.log("hello")

    assert run_log.log_path.parent == tmp_path
    assert run_log.log_path.name.startswith("pixorder_")
    assert run_log.log_path.exists()


def test_no_file_by_default(tmp_path, caplog):
    run_log = RunLogger()
    with caplog.at_level(logging.INFO, logger="pixorder_app.utils.run_log"):
        run_log.log("only to logger")

    assert run_log.log_path is None
    assert "only to logger" in caplog.text


def test_listener_receives_message_and_level():
    received = []
    run_log = RunLogger(listener=lambda message, level: received.append((message, level)))
    run_log.log("hi", LogLevel.ERROR)
    run_log.close()
    run_log.log("after close")

    assert received == [("hi", LogLevel.ERROR)]


def test_unwritable_log_file_falls_back(tmp_path):
    blocker = tmp_path / "not_a_dir"
    blocker.write_text("x")
    run_log = RunLogger(log_path=blocker / "run.log")

    run_log.log("one")
    run_log.log("two")

    assert run_log.message_count == 2
    assert not (blocker / "run.log").exists()


def test_result_and_summary_lines(tmp_path):
    log_path = tmp_path / "run.log"
    square = default_rules()[0]
    results = [
        ClassificationResult(
            original_path=Path("/in/a.jpg"),
            aspect_ratio=AspectRatio(1.0),
            success=True,
            destination_path=Path("/out/Square/a.jpg"),
            matched_rule=square,
        ),
        ClassificationResult(
            original_path=Path("/in/pano.jpg"),
            aspect_ratio=AspectRatio(3.0),
            success=True,
            destination_path=Path("/out/Other/pano.jpg"),
        ),
        ClassificationResult(
            original_path=Path("/in/b.jpg"),
            aspect_ratio=AspectRatio(0),
            success=False,
            error=FileSkippedError(path="/out/Square/b.jpg"),
        ),
    ]

    with RunLogger(log_path=log_path) as run_log:
        for result in results:
            run_log.log_classification_result(result)
        run_log.log_classification_summary(_summary(results, total=4))

    text = log_path.read_text(encoding="utf-8")
    assert "[INFO] ✓ a.jpg (1:1) → Square (1:1)" in text
    assert "[INFO] ✓ pano.jpg (3.000:1) → No matching rule" in text
    assert "[ERROR] ✗ b.jpg: File was skipped due to conflict: /out/Square/b.jpg" in text
    assert "Classification completed in 1.50s" in text
    assert "Results: 2/4 files processed successfully" in text
    assert "[WARNING] Failed to process 2 files" in text
    assert "  Square (1:1): 1 files" in text
