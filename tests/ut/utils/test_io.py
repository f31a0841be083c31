"""JSON / YAML 读写工具测试"""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from pushbot.utils.json_io import dumps_pretty, load_json, save_pretty_json
from pushbot.utils.yaml_io import load_yaml, parse_yaml


class TestJsonIO:
    def test_round_trip_keeps_key_order(self, tmp_path: Path) -> None:
        data = {"z": 1, "a": {"y": "2", "b": [1, 2]}, "m": "ü"}
        p = tmp_path / "nested" / "package.json"
        save_pretty_json(p, data)
        assert list(load_json(p)) == ["z", "a", "m"]
        assert load_json(p) == data

    def test_stable_layout(self) -> None:
        text = dumps_pretty({"name": "app", "dependencies": {"a": "1.0.0"}})
        assert text == '{\n  "name": "app",\n  "dependencies": {\n    "a": "1.0.0"\n  }\n}\n'

    def test_load_invalid(self, tmp_path: Path) -> None:
        p = tmp_path / "bad.json"
        p.write_text("{", encoding="utf-8")
        with pytest.raises(ValueError):
            load_json(p)


class TestYamlIO:
    def test_missing_file(self, tmp_path: Path) -> None:
        assert load_yaml(tmp_path / "none.yml") == {}

    def test_non_dict(self) -> None:
        assert parse_yaml("- a\n- b\n") == {}

    def test_invalid(self, tmp_path: Path) -> None:
        p = tmp_path / "bad.yml"
        p.write_text("a: [", encoding="utf-8")
        with pytest.raises(yaml.YAMLError):
            load_yaml(p)
