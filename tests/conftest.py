import os
import sys
from pathlib import Path

import pytest

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'dsc' and tests/ importable for 'helpers'
for p in (SRC_ROOT, TESTS_ROOT):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))


from helpers.cache_utils import reset_dsc_caches


@pytest.fixture(autouse=True)
def isolated_dsc_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point dsc at a private config dir and hide the developer's DSC_* variables.

    Every test gets its own ``<tmp>/dsc-config`` directory, so no test can
    read or overwrite a real session file.
    """
    for key in list(os.environ):
        if key.startswith("DSC_"):
            monkeypatch.delenv(key, raising=False)
    config_dir = tmp_path / "dsc-config"
    monkeypatch.setenv("DSC_paths__config_dir", str(config_dir))
    reset_dsc_caches()
    yield config_dir
    reset_dsc_caches()


@pytest.fixture
def config_dir(isolated_dsc_env: Path) -> Path:
    """The isolated user config directory, created."""
    isolated_dsc_env.mkdir(parents=True, exist_ok=True)
    return isolated_dsc_env


@pytest.fixture
def token_file(config_dir: Path) -> Path:
    return config_dir / "dsc-token.json"
