"""
Tests for TreeConfig, presets and YAML loading.
"""

import pytest

from uiauto_tree import ConfigError, QuerySettings, TimeoutSettings, TreeConfig
from uiauto_tree.config import available_presets


@pytest.fixture(autouse=True)
def clean_config():
    TreeConfig.reset_to_defaults()
    yield
    TreeConfig.reset_to_defaults()


class TestDefaults:
    """Tests for the base configuration."""

    def test_wait_defaults(self):
        cfg = TreeConfig.current()
        assert cfg.wait_for_element.timeout == 4.5
        assert cfg.wait_for_element.interval == 0.05

    def test_query_defaults(self):
        query = TreeConfig.current().query
        assert query.test_id_prop == "test_id"
        assert query.text_types == ("Text", "TextInput")
        assert query.handler_prefix == "on_"

    def test_default_is_singleton(self):
        assert TreeConfig.default() is TreeConfig.default()

    def test_available_presets(self):
        assert set(available_presets()) == {"default", "fast", "slow", "ci"}


class TestBuildFrom:
    """Tests for presets and overrides."""

    def test_preset(self):
        cfg = TreeConfig.build_from(preset="ci")
        assert cfg.wait_for_element.timeout == 15.0
        assert cfg.wait_for_element.interval == 0.1

    def test_preset_name_case_insensitive(self):
        assert TreeConfig.build_from(preset="FAST").wait_for_element.timeout == 1.0

    def test_overrides_apply_after_preset(self):
        """Should keep preset values the override leaves out."""
        cfg = TreeConfig.build_from(preset="slow", overrides={"wait_for_element": {"timeout": 3}})
        assert cfg.wait_for_element.timeout == 3
        assert cfg.wait_for_element.interval == 0.1

    def test_unknown_preset(self):
        with pytest.raises(ConfigError) as exc_info:
            TreeConfig.build_from(preset="turbo")
        assert "turbo" in str(exc_info.value)

    def test_unknown_field(self):
        with pytest.raises(ConfigError):
            TreeConfig.build_from(overrides={"retries": 3})

    def test_unknown_query_field(self):
        with pytest.raises(ConfigError):
            TreeConfig.build_from(overrides={"query": {"selector": "x"}})

    def test_invalid_timeout_value(self):
        with pytest.raises(ConfigError):
            TreeConfig.build_from(overrides={"wait_for_element": 5})

    def test_settings_objects(self):
        cfg = TreeConfig.build_from(overrides={
            "wait_for_element": TimeoutSettings(timeout=2, interval=0.5),
            "query": QuerySettings(test_id_prop="testID"),
        })
        assert cfg.wait_for_element == TimeoutSettings(timeout=2, interval=0.5)
        assert cfg.query.test_id_prop == "testID"

    def test_clone_is_independent(self):
        cfg = TreeConfig.build_from(preset="fast")
        copy = cfg.clone()
        copy.wait_for_element.timeout = 99

        assert cfg.wait_for_element.timeout == 1.0
        assert copy.to_dict()["query"] == cfg.to_dict()["query"]


class TestScopedConfig:
    """Tests for override and use."""

    def test_override_restores_previous(self):
        with TreeConfig.override(wait_for_element={"timeout": 0.2}) as cfg:
            assert TreeConfig.current() is cfg
            assert cfg.wait_for_element.timeout == 0.2
            assert cfg.wait_for_element.interval == 0.05

        assert TreeConfig.current().wait_for_element.timeout == 4.5

    def test_override_nests(self):
        with TreeConfig.override(query={"test_id_prop": "testID"}):
            with TreeConfig.override(wait_for_element={"interval": 0.2}):
                cfg = TreeConfig.current()
                assert cfg.query.test_id_prop == "testID"
                assert cfg.wait_for_element.interval == 0.2
            assert TreeConfig.current().wait_for_element.interval == 0.05

    def test_override_restores_after_error(self):
        with pytest.raises(RuntimeError):
            with TreeConfig.override(wait_for_element={"timeout": 1}):
                raise RuntimeError("boom")
        assert TreeConfig.current().wait_for_element.timeout == 4.5

    def test_override_does_not_touch_default(self):
        default = TreeConfig.default()
        with TreeConfig.override(wait_for_element={"timeout": 9}):
            pass
        assert default.wait_for_element.timeout == 4.5

    def test_use(self):
        cfg = TreeConfig.build_from(preset="ci")
        with TreeConfig.use(cfg):
            assert TreeConfig.current() is cfg
        assert TreeConfig.current() is TreeConfig.default()

    def test_reset_replaces_default(self):
        before = TreeConfig.default()
        TreeConfig.reset_to_defaults()
        assert TreeConfig.default() is not before
        assert TreeConfig.default().wait_for_element.timeout == 4.5


class TestFromYaml:
    """Tests for loading config files."""

    def test_valid_file(self, tmp_path):
        path = tmp_path / "tree.yaml"
        path.write_text(
            "preset: fast\n"
            "wait_for_element:\n"
            "  interval: 0.01\n"
            "query:\n"
            "  test_id_prop: testID\n"
            "  text_types: [Text, Label]\n",
            encoding="utf-8",
        )

        cfg = TreeConfig.from_yaml(str(path))

        assert cfg.wait_for_element.timeout == 1.0
        assert cfg.wait_for_element.interval == 0.01
        assert cfg.query.test_id_prop == "testID"
        assert cfg.query.text_types == ("Text", "Label")

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")

        cfg = TreeConfig.from_yaml(str(path))
        assert cfg.to_dict() == TreeConfig().to_dict()

    def test_schema_violation(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text(
            "wait_for_element:\n"
            "  timeout: -1\n"
            "unknown: true\n",
            encoding="utf-8",
        )

        with pytest.raises(ConfigError) as exc_info:
            TreeConfig.from_yaml(str(path))

        message = str(exc_info.value)
        assert "schema validation failed" in message
        assert "timeout" in message

    def test_unknown_preset_rejected_by_schema(self, tmp_path):
        path = tmp_path / "preset.yaml"
        path.write_text("preset: turbo\n", encoding="utf-8")

        with pytest.raises(ConfigError):
            TreeConfig.from_yaml(str(path))

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError) as exc_info:
            TreeConfig.from_yaml(str(tmp_path / "nope.yaml"))
        assert "not found" in str(exc_info.value)

    def test_malformed_yaml(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("query: [unclosed\n", encoding="utf-8")

        with pytest.raises(ConfigError) as exc_info:
            TreeConfig.from_yaml(str(path))
        assert "Invalid YAML" in str(exc_info.value)

    def test_non_mapping_root(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")

        with pytest.raises(ConfigError) as exc_info:
            TreeConfig.from_yaml(str(path))
        assert "mapping" in str(exc_info.value)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
