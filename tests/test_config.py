"""Tests for configuration loading."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from config import Settings, load_config


class TestLoadConfig:

    def test_missing_file_gives_defaults(self, tmp_path: Path) -> None:
        settings = load_config(tmp_path / "config.json")
        assert settings == Settings()
        assert settings.rover_port == 5005
        assert settings.control_interval_ms == 50
        assert settings.bind_port is None

    def test_file_overrides_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"rover_host": "10.0.0.7", "rover_port": 6000, "default_speed_multiplier": 4}))
        settings = load_config(path)
        assert settings.rover_host == "10.0.0.7"
        assert settings.rover_port == 6000
        assert settings.default_speed_multiplier == 4
        assert settings.camera_resolution == (640, 480)

    @pytest.mark.parametrize(
        "overrides",
        [{"rover_port": 0}, {"default_speed_multiplier": 11}, {"control_interval_ms": 0}],
    )
    def test_invalid_values_rejected(self, tmp_path: Path, overrides: dict) -> None:
        path = tmp_path / "config.json"
        path.write_text(json.dumps(overrides))
        with pytest.raises(ValidationError):
            load_config(path)
