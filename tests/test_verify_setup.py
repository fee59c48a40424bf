"""Tests for the setup verification script."""
import os
import subprocess
import sys
from pathlib import Path

from aiohttp import test_utils


SCRIPT = Path(__file__).resolve().parent.parent / "scripts" / "verify_setup.py"


def test_script_runs_from_another_directory(tmp_path):
    """Test the script imports the project when started outside the repo."""
    env = {
        key: value for key, value in os.environ.items()
        if key not in ("GITHUB_TOKEN", "PAGE_SIZE", "REQUEST_TIMEOUT", "PYTHONPATH")
    }
    env["GITHUB_API_URL"] = f"http://127.0.0.1:{test_utils.unused_port()}"
    env["PYTHONIOENCODING"] = "utf-8"

    completed = subprocess.run(
        [sys.executable, str(SCRIPT)],
        cwd=tmp_path,
        env=env,
        capture_output=True,
        text=True,
        encoding="utf-8",
        timeout=60
    )

    assert "ModuleNotFoundError" not in completed.stderr
    assert "✅ PASS: Configuration" in completed.stdout
    assert "❌ FAIL: GitHub API Access" in completed.stdout
    assert completed.returncode == 1
