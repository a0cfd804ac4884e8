"""
Shared pytest fixtures for the asset compression pipeline.
"""

import pytest

import pipeline_configs


def pytest_configure(config):
    config.addinivalue_line("markers", "slow: tests that compress large inputs")


@pytest.fixture(autouse=True)
def reset_codec_cache(monkeypatch):
    """Every test starts without a process-wide codec"""
    monkeypatch.delenv(pipeline_configs.CODEC_ENV_VAR, raising=False)
    pipeline_configs.reset_active_codec()
    yield
    pipeline_configs.reset_active_codec()


@pytest.fixture
def site_dir(tmp_path, monkeypatch):
    """Working directory holding a.txt ("hello") and b.txt ("world")"""
    (tmp_path / "a.txt").write_bytes(b"hello")
    (tmp_path / "b.txt").write_bytes(b"world")
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def dist_dir(tmp_path, monkeypatch):
    """Working directory laid out like a typical build output"""
    static = tmp_path / "dist" / "static"
    nested = static / "css" / "themes"
    pkg = tmp_path / "dist" / "pkg"
    for directory in (nested, pkg):
        directory.mkdir(parents=True)

    (static / "main.css").write_text("body { margin: 0; padding: 0; }\n" * 50)
    (static / "print.css").write_text("@media print { nav { display: none; } }\n")
    (nested / "dark.css").write_text(":root { --bg: #000; --fg: #fff; }\n" * 20)
    (static / "logo.svg").write_text("<svg></svg>")
    (pkg / "app.js").write_text("export function main() { return 42; }\n" * 100)
    (pkg / "app_bg.wasm").write_bytes(bytes(range(256)) * 16)
    (pkg / "package.json").write_text('{"name": "app"}')

    monkeypatch.chdir(tmp_path)
    return tmp_path
