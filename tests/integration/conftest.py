"""
Auto-mark all tests in this directory as integration tests.

These compile the generated builders with a real JDK and run them, so
they are skipped when ``javac``/``java`` are not on PATH.

Run ONLY integration tests:
    pytest tests/integration/ -m integration

Run ONLY unit tests:
    pytest -m "not integration"
"""

import shutil
import subprocess
from pathlib import Path

import pytest


def pytest_collection_modifyitems(items):
    """Auto-apply the 'integration' marker to every test in this directory."""
    for item in items:
        if "/integration/" in str(item.fspath):
            item.add_marker(pytest.mark.integration)


@pytest.fixture
def jdk():
    """Compile-and-run helper; skips the test when no JDK is installed."""
    javac = shutil.which("javac")
    java = shutil.which("java")
    if not javac or not java:
        pytest.skip("JDK (javac/java) not available on PATH")

    def run(sources: list[Path], classes: Path, main: str) -> str:
        classes.mkdir(parents=True, exist_ok=True)
        compiled = subprocess.run(
            [javac, "-d", str(classes), *[str(s) for s in sources]],
            capture_output=True, text=True, timeout=120,
        )
        assert compiled.returncode == 0, compiled.stderr
        ran = subprocess.run(
            [java, "-cp", str(classes), main],
            capture_output=True, text=True, timeout=60,
        )
        assert ran.returncode == 0, ran.stderr
        return ran.stdout

    return run
