from pathlib import Path

import yaml

from rodger.config import DEFAULT_CONFIG, load_config, resolve_paths, save_config


def test_missing_config_uses_defaults(tmp_path):
    assert load_config(tmp_path / "missing.yaml") == DEFAULT_CONFIG
    assert load_config() == DEFAULT_CONFIG


def test_partial_config_is_merged(tmp_path):
    path = tmp_path / "rodger.yaml"
    path.write_text(yaml.safe_dump({"data_dir": str(tmp_path / "books")}))

    cfg = load_config(path)

    assert cfg["data_dir"] == str(tmp_path / "books")
    assert cfg["ledger_file"] == "ledger.json"
    ledger_path, items_path = resolve_paths(cfg)
    assert ledger_path == tmp_path / "books" / "ledger.json"
    assert items_path == tmp_path / "books" / "items.json"


def test_env_overrides_data_dir(tmp_path, monkeypatch):
    monkeypatch.setenv("RODGER_DATA_DIR", str(tmp_path / "env"))
    assert load_config()["data_dir"] == str(tmp_path / "env")


def test_save_config_round_trip(tmp_path):
    path = tmp_path / "conf" / "rodger.yaml"
    save_config({"data_dir": "x", "search_limit": 3}, path)
    cfg = load_config(path)
    assert cfg["data_dir"] == "x"
    assert cfg["search_limit"] == 3
    assert Path(path).exists()
