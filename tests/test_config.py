import json
import logging

from inkmark.config import ColorPreset, InkmarkSettings, load_settings


def test_missing_file_gives_defaults(tmp_path):
    settings = load_settings(tmp_path / "absent.json")
    assert settings == InkmarkSettings()
    assert settings.preset_colors[1] == ColorPreset("Yellow", "yellow")


def test_load_overrides_and_ignores_unknown_keys(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({
        "preset_colors": [{"label": "Green", "value": "green"}],
        "default_bookmark_label": "Bookmark",
        "unknown": 1,
    }), encoding="utf-8")

    settings = load_settings(path)

    assert settings.preset_colors == [ColorPreset("Green", "green")]
    assert settings.default_bookmark_label == "Bookmark"
    assert settings.outline_level == 1


def test_malformed_file_falls_back_with_warning(tmp_path, caplog):
    path = tmp_path / "settings.json"
    path.write_text("{not json", encoding="utf-8")

    with caplog.at_level(logging.WARNING, logger="inkmark.config"):
        settings = load_settings(path)

    assert settings == InkmarkSettings()
    assert "Failed to load settings" in caplog.text


def test_non_object_json_falls_back(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text("[1, 2]", encoding="utf-8")
    assert load_settings(path) == InkmarkSettings()


def test_settings_dict_round_trip():
    settings = InkmarkSettings(custom_color_label="Mine", outline_level=2)
    assert InkmarkSettings.from_dict(settings.to_dict()) == settings


def test_default_path_uses_config_dir(tmp_path, monkeypatch):
    monkeypatch.setattr("inkmark.config.get_config_dir",
                        lambda create=False: tmp_path / "Inkmark")
    (tmp_path / "Inkmark").mkdir()
    (tmp_path / "Inkmark" / "settings.json").write_text(
        json.dumps({"front_matter_label": "Preface"}), encoding="utf-8")

    assert load_settings().front_matter_label == "Preface"
