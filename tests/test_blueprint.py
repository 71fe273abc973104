"""Tests for the YAML declaration front end."""

import pytest

from rustsmith.build.blueprint import apply_properties, load_blueprint, load_blueprints
from rustsmith.build.errors import BlueprintError
from rustsmith.rust import rust_test_factory


class TestLoadBlueprint:

    def test_parses_modules(self, write_blueprint, module_dir):
        path = write_blueprint([
            {"type": "rust_test", "name": "foo_test", "srcs": ["foo_test.rs"]},
            {"type": "rust_binary", "name": "foo"},
        ])

        first, second = load_blueprint(path)

        assert first.type == "rust_test"
        assert first.name == "foo_test"
        assert first.properties == {"srcs": ["foo_test.rs"]}
        assert first.module_dir == module_dir
        assert first.source == path
        assert second.properties == {}

    def test_empty_file_has_no_modules(self, module_dir):
        path = module_dir / "empty.yaml"
        path.write_text("modules: []\n")
        assert load_blueprint(path) == []

    def test_missing_file(self, tmp_path):
        with pytest.raises(BlueprintError):
            load_blueprint(tmp_path / "absent.yaml")

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("modules: [\n")
        with pytest.raises(BlueprintError, match="invalid YAML"):
            load_blueprint(path)

    def test_top_level_must_be_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(BlueprintError, match="mapping"):
            load_blueprint(path)

    def test_modules_must_be_list(self, tmp_path):
        path = tmp_path / "m.yaml"
        path.write_text("modules: {}\n")
        with pytest.raises(BlueprintError, match="must be a list"):
            load_blueprint(path)

    def test_entry_needs_type_and_name(self, write_blueprint):
        path = write_blueprint([{"srcs": ["a.rs"]}])
        with pytest.raises(BlueprintError, match="missing type, name"):
            load_blueprint(path)

    def test_duplicate_names_across_files(self, write_blueprint):
        a = write_blueprint([{"type": "rust_test", "name": "foo_test"}], name="a.yaml")
        b = write_blueprint([{"type": "rust_binary", "name": "foo_test"}], name="b.yaml")

        with pytest.raises(BlueprintError, match="already defined"):
            load_blueprints([a, b])


class TestApplyProperties:

    def test_values_reach_their_property_sets(self):
        module = rust_test_factory()

        errors = apply_properties(module.properties, "foo_test", {
            "srcs": ["foo_test.rs"],
            "prefer_dynamic": True,
            "test_suites": ["general-tests"],
            "host_supported": True,
        })

        assert errors == []
        assert module.compiler.base_compiler.properties.srcs == ["foo_test.rs"]
        assert module.compiler.binary.properties.prefer_dynamic is True
        assert module.compiler.properties.test_suites == ["general-tests"]
        assert module.common_properties.host_supported is True

    def test_unknown_property(self):
        module = rust_test_factory()

        [error] = apply_properties(module.properties, "foo_test", {"sources": ["a.rs"]})

        assert error.field == "sources"
        assert error.message == 'unrecognized property "sources"'

    def test_invalid_value(self):
        module = rust_test_factory()

        errors = apply_properties(module.properties, "foo_test", {
            "test_suites": "general-tests",
            "srcs": ["foo_test.rs"],
        })

        assert [e.field for e in errors] == ["test_suites"]
        assert module.compiler.base_compiler.properties.srcs == ["foo_test.rs"]
