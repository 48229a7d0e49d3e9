import json
import subprocess
import sys
from pathlib import Path

import pytest

from basescan.catalog.feature_ids import FEATURE_ID_MAP
from basescan.core.config import ScanSettings
from basescan.core.grammars import get_grammars
from basescan.core.registry import FeatureRegistry, reset_default_registry
from basescan.core.scanner import ParserManager

REPO_ROOT = Path(__file__).resolve().parent.parent


def run_cli(args, cwd=REPO_ROOT, env=None, timeout=120):
    """
    Run the CLI as a subprocess: python -m basescan.cli <args>
    Returns CompletedProcess with stdout/stderr text captured.
    """
    cmd = [sys.executable, "-m", "basescan.cli"] + list(map(str, args))
    return subprocess.run(cmd, cwd=cwd, env=env, capture_output=True, text=True, timeout=timeout)


def load_json(p: Path):
    with p.open("r", encoding="utf-8") as f:
        return json.load(f)


def assert_exit_ok(proc):
    assert proc.returncode == 0, f"Non-zero exit:\nSTDOUT:\n{proc.stdout}\nSTDERR:\n{proc.stderr}"


def assert_file(p: Path):
    assert p.exists(), f"Expected file missing: {p}"
    return p


@pytest.fixture()
def cli():
    return run_cli


@pytest.fixture()
def registry() -> FeatureRegistry:
    """Every canonical id the catalogs can produce."""
    ids = set(FEATURE_ID_MAP.values()) | {"css-variables"}
    return FeatureRegistry.from_mapping(
        {i: {"name": i, "status": {"baseline": "high"}} for i in sorted(ids)}
    )


@pytest.fixture()
def settings() -> ScanSettings:
    return ScanSettings(batch_delay=0.0)


@pytest.fixture()
def manager(registry, settings) -> ParserManager:
    return ParserManager(registry=registry, settings=settings)


@pytest.fixture()
def write(tmp_path: Path):
    def _write(name: str, content: str) -> Path:
        p = tmp_path / name
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(content, encoding="utf-8")
        return p
    return _write


@pytest.fixture()
def out_dir(tmp_path: Path) -> Path:
    d = tmp_path / "out"
    d.mkdir(parents=True, exist_ok=True)
    return d


@pytest.fixture(autouse=True)
def _fresh_process_state():
    yield
    reset_default_registry()


@pytest.fixture()
def grammars():
    return get_grammars()




@pytest.fixture()
def project_dir(tmp_path: Path) -> Path:
    """A small multi-dialect project tree."""
    root = tmp_path / "project"
    files = {
        "src/main.js": "const x = a?.b ?? c;\nfetch('/api');\n",
        "src/App.jsx": "export const App = () => <dialog open><img loading=\"lazy\" /></dialog>;\n",
        "src/Card.vue": "<template>\n  <details><summary>More</summary></details>\n</template>\n"
                        "<script setup>\nconst id = crypto.randomUUID()\n</script>\n",
        "src/Widget.svelte": "<script>\n  const obs = new ResizeObserver(() => {});\n</script>\n<dialog></dialog>\n",
        "styles/site.css": ".x { container-type: inline-size; }\n",
        "index.html": "<dialog></dialog>\n",
        "node_modules/lib/index.js": "fetch('/vendored');\n",
        "README.md": "# demo\n",
    }
    for rel, content in files.items():
        p = root / rel
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(content, encoding="utf-8")
    return root
