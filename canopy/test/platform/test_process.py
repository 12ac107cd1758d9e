from __future__ import annotations

import sys
from pathlib import Path

import pytest

from canopy.core.result import Err, Ok
from canopy.platform.process import ProcessError, run


def test_run_returns_stdout(tmp_path: Path) -> None:
    result = run([sys.executable, "-c", "print('hello')"], cwd=tmp_path)

    assert isinstance(result, Ok)
    assert result.value.strip() == "hello"


def test_run_uses_given_cwd(tmp_path: Path) -> None:
    result = run([sys.executable, "-c", "import os; print(os.getcwd())"], cwd=tmp_path)

    assert isinstance(result, Ok)
    assert Path(result.value.strip()).resolve() == tmp_path.resolve()


def test_run_nonzero_exit(tmp_path: Path) -> None:
    result = run(
        [sys.executable, "-c", "import sys; sys.stderr.write('bad'); sys.exit(3)"], cwd=tmp_path
    )

    assert isinstance(result, Err)
    assert result.error.returncode == 3
    assert result.error.stderr == "bad"


def test_run_missing_executable(tmp_path: Path) -> None:
    result = run(["definitely-not-a-real-binary-xyz"], cwd=tmp_path)

    assert isinstance(result, Err)
    assert result.error.returncode == -1


def test_run_timeout(tmp_path: Path) -> None:
    result = run([sys.executable, "-c", "import time; time.sleep(5)"], cwd=tmp_path, timeout=0.2)

    assert isinstance(result, Err)
    assert "timed out" in result.error.stderr


def test_process_error_str_truncates_command() -> None:
    error = ProcessError(command=("mdbook", "build", "src", "--dest-dir", "x"), returncode=1, stdout="", stderr="")
    assert str(error) == "mdbook build src ... failed (exit 1)"


def test_run_inherits_parent_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CANOPY_PROCESS_MARK", "inherited")

    result = run(
        [sys.executable, "-c", "import os; print(os.environ['CANOPY_PROCESS_MARK'])"], cwd=tmp_path
    )

    assert isinstance(result, Ok)
    assert result.value.strip() == "inherited"
