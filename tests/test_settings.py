"""Tests for settings persistence."""

from __future__ import annotations

from pathlib import Path

import pytest

from deficit.config import Settings, get_settings, reload_settings
from deficit.units import HeightUnit, WeightUnit


class TestSettings:
    """Tests for Settings load/set/save."""

    def test_defaults_when_missing(self, tmp_path):
        settings = Settings.load(tmp_path / "missing.yaml")
        assert settings.display.weight_unit == WeightUnit.KG
        assert settings.display.height_unit == HeightUnit.CM
        assert settings.display.output_format == "table"
        assert settings.data.profile_path is None
        assert settings.logging.level == "WARNING"

    def test_save_and_load(self, tmp_path):
        path = tmp_path / "config.yaml"
        settings = Settings()
        settings.set("display.weight_unit", "lbs")
        settings.set("data.logs_path", "/data/logs.csv")
        settings.set("logging.level", "debug")
        settings.save(path)

        loaded = Settings.load(path)
        assert loaded.display.weight_unit == WeightUnit.LBS
        assert loaded.data.logs_path == Path("/data/logs.csv")
        assert loaded.logging.level == "DEBUG"

    def test_unknown_key(self):
        with pytest.raises(KeyError):
            Settings().set("display.colour", "red")

    @pytest.mark.parametrize(
        "key,value",
        [
            ("display.weight_unit", "stone"),
            ("display.output_format", "xml"),
            ("logging.level", "LOUD"),
        ],
    )
    def test_invalid_values(self, key, value):
        with pytest.raises(ValueError):
            Settings().set(key, value)

    def test_invalid_file_value_skipped(self, tmp_path):
        """A bad value in the file falls back to the default."""
        path = tmp_path / "config.yaml"
        path.write_text("display:\n  output_format: xml\n  weight_unit: lbs\n")
        settings = Settings.load(path)
        assert settings.display.output_format == "table"
        assert settings.display.weight_unit == WeightUnit.LBS

    def test_unknown_key_skipped(self, tmp_path):
        """Keys from older versions or typos are ignored, not fatal."""
        path = tmp_path / "config.yaml"
        path.write_text("display:\n  theme: dark\n  height_unit: ft\nextras:\n  a: 1\n")
        settings = Settings.load(path)
        assert settings.display.height_unit == HeightUnit.FT

    @pytest.mark.parametrize("text", ["- display\n- data\n", "just a string\n"])
    def test_non_mapping_document(self, tmp_path, text):
        """A top-level list or scalar loads as defaults."""
        path = tmp_path / "config.yaml"
        path.write_text(text)
        assert Settings.load(path).to_dict() == Settings().to_dict()

    def test_default_path_under_home(self, tmp_path):
        """Global settings read ~/.deficit/config.yaml."""
        config = tmp_path / ".deficit" / "config.yaml"
        config.parent.mkdir()
        config.write_text("display:\n  weight_unit: lbs\n")
        reload_settings()
        assert get_settings().display.weight_unit == WeightUnit.LBS
