from __future__ import annotations

import subprocess
import sys
from pathlib import Path

import pytest


@pytest.mark.integration
# src/ だけを sys.path に置いた別プロセスで公開 API が import できること
# （リポジトリルートや CWD に依存しない）。
def test_public_api_importable_from_src_only(tmp_path: Path):
    repo_root = Path(__file__).resolve().parents[2]
    src_dir = repo_root / "src"
    script = (
        "import sys, importlib\n"
        "from pathlib import Path\n"
        f"src = Path(r'{src_dir}')\n"
        f"repo = Path(r'{repo_root}')\n"
        "sys.path[:] = [str(src)] + [p for p in sys.path if p and Path(p).resolve() != repo.resolve()]\n"
        "m = importlib.import_module('api')\n"
        "assert hasattr(m, 'run') and hasattr(m, 'worldline') and hasattr(m, 'build_simulation')\n"
        "assert 'pyglet.window' not in sys.modules\n"
    )
    proc = subprocess.run([sys.executable, "-c", script], capture_output=True, text=True, cwd=tmp_path)
    assert proc.returncode == 0, proc.stderr
