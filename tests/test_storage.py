from rodger.storage import load_json, save_json


def test_save_and_load(tmp_path):
    path = tmp_path / "nested" / "doc.json"
    save_json(path, {"05-03-2026": [{"item_name": "चावल"}]})

    assert load_json(path, dict) == {"05-03-2026": [{"item_name": "चावल"}]}
    assert "चावल" in path.read_text(encoding="utf-8")
    assert [p.name for p in path.parent.iterdir()] == ["doc.json"]


def test_missing_and_corrupt_files_use_default(tmp_path):
    path = tmp_path / "doc.json"
    assert load_json(path, list) == []

    path.write_text("{", encoding="utf-8")
    assert load_json(path, dict) == {}
