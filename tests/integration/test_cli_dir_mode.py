import json
from pathlib import Path


def _features_by_file(out_dir: Path):
    data = json.loads((out_dir / "features.json").read_text(encoding="utf-8"))
    grouped = {}
    for item in data:
        grouped.setdefault(Path(item["file"]).name, []).append(item["feature"])
    return data, grouped


def test_dir_mode_end_to_end(cli, project_dir: Path, out_dir: Path):
    proc = cli(["dir", project_dir, "--out", out_dir, "--no-progress"])
    assert proc.returncode == 0, f"STDOUT:\n{proc.stdout}\nSTDERR:\n{proc.stderr}"

    data, grouped = _features_by_file(out_dir)
    for item in data:
        assert set(item) == {"feature", "type", "context", "file", "line", "column"}
        assert item["type"] in ("markup", "style", "script")
        assert item["line"] >= 1 and item["column"] >= 0

    assert sorted(grouped["main.js"]) == ["fetch", "nullish-coalescing", "optional-chaining"]
    assert sorted(grouped["App.jsx"]) == ["dialog", "loading-lazy-attr"]
    assert sorted(grouped["Card.vue"]) == ["crypto-randomuuid", "details", "details"]
    assert sorted(grouped["Widget.svelte"]) == ["dialog", "resizeobserver"]
    assert grouped["site.css"] == ["container-queries"]
    assert grouped["index.html"] == ["dialog"]
    assert "index.js" not in grouped  # node_modules is excluded by default

    summary = (out_dir / "summary.md").read_text(encoding="utf-8")
    assert "# Feature Scan Summary" in summary
    assert "| dialog | dialog element | high | 3 |" in summary


def test_dir_mode_custom_excludes_and_depth(cli, project_dir: Path, out_dir: Path):
    proc = cli(["dir", project_dir, "--out", out_dir, "--no-progress", "--exclude", "src,styles", "--max-depth", "1"])
    assert proc.returncode == 0, proc.stderr
    _, grouped = _features_by_file(out_dir)
    assert set(grouped) == {"index.html"}


def test_dir_mode_with_registry_override(cli, project_dir: Path, out_dir: Path, tmp_path: Path):
    registry = tmp_path / "mini.json"
    registry.write_text(json.dumps({"features": {"dialog": {"name": "Dialog", "status": {"baseline": "high"}}}}))
    proc = cli(["dir", project_dir, "--out", out_dir, "--no-progress", "--features", registry])
    assert proc.returncode == 0, proc.stderr
    data, _ = _features_by_file(out_dir)
    assert data and {item["feature"] for item in data} == {"dialog"}


def test_dir_mode_missing_directory(cli, tmp_path: Path, out_dir: Path):
    proc = cli(["dir", tmp_path / "does-not-exist", "--out", out_dir])
    assert proc.returncode == 2
    assert "Not a directory" in proc.stderr
