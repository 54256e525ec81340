"""Boundary tests for the pure resolution and normalization modules."""

from __future__ import annotations

import os
import subprocess
import sys
from pathlib import Path


def _package_dir() -> Path:
    return Path(__file__).resolve().parents[3] / "src" / "testrun_orchestrator"


def test_pure_modules_do_not_import_engine_or_sinks() -> None:
    package_dir = _package_dir()
    pure_modules = (
        package_dir / "output_planning" / "output_plan_resolver.py",
        package_dir / "tag_filtering" / "tag_policy.py",
        package_dir / "engine_configuration" / "run_config_builder.py",
        package_dir / "result_normalization" / "result_normalizer.py",
    )
    forbidden_import_fragments = (
        "import pytest",
        "testrun_orchestrator.test_engine.pytest_engine",
        "testrun_orchestrator.sink_dispatch",
        "testrun_orchestrator.notifications",
        "import requests",
    )

    for module_path in pure_modules:
        text = module_path.read_text(encoding="utf-8")
        for fragment in forbidden_import_fragments:
            assert fragment not in text, f"Forbidden dependency in {module_path}: {fragment}"


def test_importing_pure_modules_does_not_load_pytest() -> None:
    source_dir = _package_dir().parent
    code = (
        "import sys\n"
        "import testrun_orchestrator.output_planning\n"
        "import testrun_orchestrator.tag_filtering\n"
        "import testrun_orchestrator.engine_configuration\n"
        "import testrun_orchestrator.result_normalization\n"
        "import testrun_orchestrator.test_engine\n"
        "heavy = ('pytest', '_pytest', 'requests')\n"
        "loaded = sorted(name for name in heavy if name in sys.modules)\n"
        "print(','.join(loaded))\n"
    )
    python_path = os.pathsep.join([str(source_dir), os.environ.get("PYTHONPATH", "")])
    env = {**os.environ, "PYTHONPATH": python_path}

    result = subprocess.run(
        [sys.executable, "-c", code],
        check=False,
        capture_output=True,
        text=True,
        env=env,
    )

    assert result.returncode == 0, result.stderr
    assert result.stdout.strip() == ""
