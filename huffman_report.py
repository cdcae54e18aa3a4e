"""
Compression report for a directory of text files.

This runner:
- Compresses and decompresses every file with the Huffman codec
- Verifies that each round trip reproduces the original text
- Records sizes, ratio and timings per file
- Wraps the results with run metadata and environment information

Run with:
    huffman-codec report <dir> [--output report.json]
"""
import json
import platform
import subprocess
import time
import uuid
from datetime import datetime
from pathlib import Path

from huffman_errors import HuffmanError
from huffman_service import HuffmanService


def generate_run_id():
    """Generate a short unique run ID."""
    return uuid.uuid4().hex[:8]


def _git(*args):
    try:
        result = subprocess.run(["git", *args], capture_output=True, text=True, timeout=5)
    except (OSError, subprocess.SubprocessError):
        return "unknown"
    if result.returncode != 0:
        return "unknown"
    return result.stdout.strip()


def get_git_info():
    """Get git commit and branch information."""
    commit = _git("rev-parse", "HEAD")
    return {
        "git_commit": commit[:8] if commit != "unknown" else commit,
        "git_branch": _git("rev-parse", "--abbrev-ref", "HEAD"),
    }


def get_environment_info():
    """Collect environment information for the report."""
    git_info = get_git_info()

    return {
        "python_version": platform.python_version(),
        "platform": platform.platform(),
        "os": platform.system(),
        "architecture": platform.machine(),
        "git_commit": git_info["git_commit"],
        "git_branch": git_info["git_branch"],
    }


def measure(service, text):
    """Compress and decompress ``text``, timing both passes.

    Returns a dict whose keys land directly in the per-file report entry.
    A round trip that does not reproduce ``text`` is reported as failed.
    """
    t0 = time.perf_counter()
    blob = service.compress(text)
    t1 = time.perf_counter()
    decoded = service.decompress(blob)
    t2 = time.perf_counter()

    return {
        "compressed_size": len(blob),
        "compression_time_ms": round((t1 - t0) * 1000, 3),
        "decompression_time_ms": round((t2 - t1) * 1000, 3),
        "outcome": "passed" if decoded == text else "failed",
    }


def evaluate_file(service, path):
    data = path.read_bytes()
    entry = {"file": path.name, "original_size": len(data)}

    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError:
        entry.update(outcome="skipped", reason="not UTF-8 text")
        return entry
    if not text:
        entry.update(outcome="skipped", reason="empty file")
        return entry

    try:
        entry.update(measure(service, text))
    except HuffmanError as exc:
        entry.update(outcome="failed", reason=str(exc))
        return entry

    entry["compression_ratio"] = round(len(data) / entry["compressed_size"], 3)
    return entry


def run_report(directory, service=None):
    """
    Evaluate every regular file in ``directory``.

    Returns dict with the per-file entries and a summary of outcomes.
    """
    service = service or HuffmanService()
    directory = Path(directory)

    print(f"\n{'=' * 60}")
    print(f"COMPRESSION REPORT: {directory}")
    print(f"{'=' * 60}")

    files = []
    for path in sorted(directory.iterdir()):
        if not path.is_file():
            continue
        entry = evaluate_file(service, path)
        files.append(entry)

        status_icon = {"passed": "✅", "failed": "❌", "skipped": "⏭️"}[entry["outcome"]]
        ratio = entry.get("compression_ratio")
        detail = f"ratio {ratio}" if ratio is not None else entry.get("reason", "")
        print(f"  {status_icon} {path.name}: {entry['outcome']} {detail}")

    summary = {
        "total": len(files),
        "passed": sum(1 for f in files if f["outcome"] == "passed"),
        "failed": sum(1 for f in files if f["outcome"] == "failed"),
        "skipped": sum(1 for f in files if f["outcome"] == "skipped"),
    }
    print(f"\nResults: {summary['passed']} passed, {summary['failed']} failed, "
          f"{summary['skipped']} skipped (total: {summary['total']})")

    return {"success": summary["failed"] == 0, "files": files, "summary": summary}


def build_report(results, started_at, finished_at, run_id=None):
    duration = (finished_at - started_at).total_seconds()
    return {
        "run_id": run_id or generate_run_id(),
        "started_at": started_at.isoformat(),
        "finished_at": finished_at.isoformat(),
        "duration_seconds": round(duration, 6),
        "success": results["success"],
        "environment": get_environment_info(),
        "results": results,
    }


def generate_output_path(root="."):
    """Generate output path in format: evaluation/YYYY-MM-DD/HH-MM-SS/report.json"""
    now = datetime.now()
    output_dir = Path(root) / "evaluation" / now.strftime("%Y-%m-%d") / now.strftime("%H-%M-%S")
    return output_dir / "report.json"


def write_report(directory, output=None, service=None):
    """Run the report over ``directory`` and save it as JSON. Returns the report."""
    started_at = datetime.now()
    results = run_report(directory, service)
    report = build_report(results, started_at, datetime.now())

    output_path = Path(output) if output else generate_output_path()
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w") as f:
        json.dump(report, f, indent=2)
    print(f"\n✅ Report saved to: {output_path}")

    return report
