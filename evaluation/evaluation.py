#!/usr/bin/env python3
"""
Evaluation runner for the static Huffman text codec.

This evaluation script:
- Runs pytest tests on the tests/ folder against the project modules
- Collects individual test results with pass/fail status
- Measures compression of a sample message with a code built from a corpus
- Writes a JSON report of both

Run with:
    python evaluation/evaluation.py [options]
"""
import os
import sys
import json
import uuid
import platform
import subprocess
from datetime import datetime
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from huffman_service import HuffmanService  # noqa: E402

DEFAULT_CORPUS = (
    "It was the best of times, it was the worst of times, it was the age of "
    "wisdom, it was the age of foolishness, it was the epoch of belief, it was "
    "the epoch of incredulity, it was the season of Light, it was the season of "
    "Darkness, it was the spring of hope, it was the winter of despair."
)
DEFAULT_MESSAGE = "it was the season of hope, it was the age of wisdom."


def generate_run_id():
    """Generate a short unique run ID."""
    return uuid.uuid4().hex[:8]


def run_pytest_with_pythonpath(pythonpath, tests_dir, timeout=120):
    """
    Run pytest on the tests/ folder with specific PYTHONPATH.

    Args:
        pythonpath: The PYTHONPATH to use for the tests
        tests_dir: Path to the tests directory
        timeout: Seconds before the pytest subprocess is abandoned

    Returns:
        dict with test results
    """
    print(f"\n{'=' * 60}")
    print("RUNNING TESTS")
    print(f"{'=' * 60}")
    print(f"PYTHONPATH: {pythonpath}")
    print(f"Tests directory: {tests_dir}")

    cmd = [
        sys.executable, "-m", "pytest",
        str(tests_dir),
        "-v",
        "--tb=short",
    ]

    env = os.environ.copy()
    env["PYTHONPATH"] = pythonpath

    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            cwd=str(Path(tests_dir).parent),
            env=env,
            timeout=timeout
        )
    except subprocess.TimeoutExpired:
        print("Test execution timed out")
        return {
            "success": False,
            "exit_code": -1,
            "tests": [],
            "summary": {"error": "Test execution timed out"},
            "stdout": "",
            "stderr": "",
        }

    stdout = result.stdout
    stderr = result.stderr

    tests = parse_pytest_verbose_output(stdout)
    summary = summarize_outcomes(tests)

    print(
        f"\nResults: {summary['passed']} passed, {summary['failed']} failed, "
        f"{summary['errors']} errors, {summary['skipped']} skipped (total: {summary['total']})"
    )
    for test in tests:
        print(f"  {test.get('outcome', 'unknown').upper():8} {test.get('nodeid', 'unknown')}")

    return {
        "success": result.returncode == 0,
        "exit_code": result.returncode,
        "tests": tests,
        "summary": summary,
        "stdout": stdout[-3000:] if len(stdout) > 3000 else stdout,
        "stderr": stderr[-1000:] if len(stderr) > 1000 else stderr,
    }


STATUS_WORDS = {
    " PASSED": "passed",
    " FAILED": "failed",
    " ERROR": "error",
    " SKIPPED": "skipped",
}


def parse_pytest_verbose_output(output):
    """Parse pytest verbose output to extract test results."""
    tests = []

    for line in output.split('\n'):
        line_stripped = line.strip()

        # Match lines like: tests/test_huffman_service.py::test_roundtrip_simple PASSED
        if '::' not in line_stripped:
            continue

        for status_word, outcome in STATUS_WORDS.items():
            if status_word in line_stripped:
                nodeid = line_stripped.split(status_word)[0].strip()
                tests.append({
                    "nodeid": nodeid,
                    "name": nodeid.split("::")[-1],
                    "outcome": outcome,
                })
                break

    return tests


def summarize_outcomes(tests):
    """Count test outcomes by kind."""
    return {
        "total": len(tests),
        "passed": sum(1 for t in tests if t.get("outcome") == "passed"),
        "failed": sum(1 for t in tests if t.get("outcome") == "failed"),
        "errors": sum(1 for t in tests if t.get("outcome") == "error"),
        "skipped": sum(1 for t in tests if t.get("outcome") == "skipped"),
    }


def measure_compression(corpus, message):
    """Build a code from corpus and report how well it compresses message."""
    svc = HuffmanService(corpus)
    compressed = svc.compress(message)
    restored = svc.decompress(compressed)
    original_size = len(message.encode("utf-8"))

    return {
        "distinct_symbols": len(svc.encoding_map),
        "root_weight": svc.root_weight,
        "longest_code_bits": max(len(code) for code in svc.encoding_map.values()),
        "original_bytes": original_size,
        "compressed_bytes": len(compressed),
        "ratio": round(len(compressed) / original_size, 6) if original_size else None,
        "roundtrip_ok": restored == message,
    }


def run_evaluation(corpus, message):
    """
    Run the test suite and the compression measurement.

    Returns dict with test results and the compression summary.
    """
    print(f"\n{'=' * 60}")
    print("STATIC HUFFMAN CODEC EVALUATION")
    print(f"{'=' * 60}")

    test_results = run_pytest_with_pythonpath(str(PROJECT_ROOT), PROJECT_ROOT / "tests")
    compression = measure_compression(corpus, message)

    print(f"\n{'=' * 60}")
    print("EVALUATION SUMMARY")
    print(f"{'=' * 60}")
    print(f"  Tests: {'PASSED' if test_results.get('success') else 'FAILED'}")
    print(f"  {test_results['summary'].get('passed', 0)}/{test_results['summary'].get('total', 0)} passed")
    print(f"  Compression: {compression['original_bytes']} -> {compression['compressed_bytes']} bytes "
          f"(ratio {compression['ratio']})")
    print(f"  Round trip: {'OK' if compression['roundtrip_ok'] else 'MISMATCH'}")

    return {
        "tests": test_results,
        "compression": compression,
    }


def generate_output_path():
    """Generate output path in format: evaluation/YYYY-MM-DD/HH-MM-SS/report.json"""
    now = datetime.now()
    date_str = now.strftime("%Y-%m-%d")
    time_str = now.strftime("%H-%M-%S")

    output_dir = PROJECT_ROOT / "evaluation" / date_str / time_str
    output_dir.mkdir(parents=True, exist_ok=True)

    return output_dir / "report.json"


def main(argv=None):
    """Main entry point for evaluation."""
    import argparse

    parser = argparse.ArgumentParser(description="Run the static Huffman codec evaluation")
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Output JSON file path (default: evaluation/YYYY-MM-DD/HH-MM-SS/report.json)"
    )
    parser.add_argument(
        "--corpus",
        type=str,
        default=None,
        help="Path to a UTF-8 text file used to build the code (default: built-in sample)"
    )
    parser.add_argument(
        "--message",
        type=str,
        default=DEFAULT_MESSAGE,
        help="Message to compress with the corpus code"
    )

    args = parser.parse_args(argv)

    if args.corpus:
        corpus = Path(args.corpus).read_text(encoding="utf-8")
    else:
        corpus = DEFAULT_CORPUS

    run_id = generate_run_id()
    started_at = datetime.now()

    print(f"Run ID: {run_id}")
    print(f"Started at: {started_at.isoformat()}")

    try:
        results = run_evaluation(corpus, args.message)
        success = results["tests"].get("success", False) and results["compression"]["roundtrip_ok"]
        error_message = None if success else "Tests failed or round trip mismatched"
    except Exception as e:
        import traceback
        print(f"\nERROR: {str(e)}")
        traceback.print_exc()
        results = None
        success = False
        error_message = str(e)

    finished_at = datetime.now()
    duration = (finished_at - started_at).total_seconds()

    report = {
        "run_id": run_id,
        "started_at": started_at.isoformat(),
        "finished_at": finished_at.isoformat(),
        "duration_seconds": round(duration, 6),
        "success": success,
        "error": error_message,
        "python_version": platform.python_version(),
        "results": results,
    }

    if args.output:
        output_path = Path(args.output)
    else:
        output_path = generate_output_path()

    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, "w") as f:
        json.dump(report, f, indent=2)
    print(f"\nReport saved to: {output_path}")

    print(f"\n{'=' * 60}")
    print("EVALUATION COMPLETE")
    print(f"{'=' * 60}")
    print(f"Run ID: {run_id}")
    print(f"Duration: {duration:.2f}s")
    print(f"Success: {'YES' if success else 'NO'}")

    return 0 if success else 1


if __name__ == "__main__":
    sys.exit(main())
