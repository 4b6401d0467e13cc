"""Each entry module must import cleanly in a fresh interpreter."""

import os
import subprocess
import sys

import pytest


@pytest.mark.parametrize(
    "module",
    [
        "speciescatalog.config",
        "speciescatalog.system.path_resolver",
        "speciescatalog.system.structlog_configurator",
        "speciescatalog.cli.seed_catalog",
        "speciescatalog.web.main",
    ],
)
def test_imports_on_its_own(module, repo_root, tmp_path):
    """Should import without relying on another module having been loaded first."""
    env = {
        **os.environ,
        "SPECIESCATALOG_APP": str(repo_root),
        "SPECIESCATALOG_DATA": str(tmp_path),
        "PYTHONPATH": os.pathsep.join(
            filter(None, [str(repo_root / "src"), os.environ.get("PYTHONPATH")])
        ),
    }
    env.pop("SPECIESCATALOG_CONFIG", None)

    result = subprocess.run(
        [sys.executable, "-c", f"import {module}"],
        capture_output=True,
        text=True,
        env=env,
        timeout=60,
    )

    assert result.returncode == 0, result.stderr
