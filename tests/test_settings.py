"""Tests for configuration loading."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from rustsmith.build.arch import HostOrDeviceSupported, Multilib, decode_targets
from rustsmith.settings import get_default_config, load_config


@pytest.fixture
def project_file(tmp_path):
    path = tmp_path / "rustsmith.yaml"
    path.write_text(
        "build_dir: build\n"
        "device_arch: x86_64\n"
        "device_secondary_arch: x86\n"
        "logging:\n"
        "  level: verbose\n"
    )
    return path


class TestDefaults:

    def test_output_locations(self, config, project_dir):
        assert config.build_dir == project_dir / "out"
        assert config.product_out == project_dir / "out" / "target" / "product" / "generic"
        assert config.host_out == project_dir / "out" / "host" / "linux-x86"

    def test_architectures(self, config):
        assert (config.device_arch, config.device_secondary_arch) == ("arm64", "arm")
        assert (config.host_arch, config.host_secondary_arch) == ("x86_64", "x86")
        assert config.default_edition == "2018"
        assert config.logging.level == "normal"

    def test_ignores_environment(self, monkeypatch, project_dir):
        monkeypatch.setenv("RSMITH_DEVICE_ARCH", "x86")
        assert get_default_config(project_dir=project_dir).device_arch == "arm64"


class TestProjectFile:

    def test_values_and_project_dir(self, project_file, tmp_path):
        config = load_config(project_file=project_file)

        assert config.project_file == project_file
        assert config.project_dir == tmp_path.resolve()
        assert config.build_dir == tmp_path.resolve() / "build"
        assert config.device_arch == "x86_64"
        assert config.logging.level == "verbose"

    def test_environment_beats_file(self, monkeypatch, project_file):
        monkeypatch.setenv("RSMITH_DEVICE_ARCH", "arm64")
        monkeypatch.setenv("RSMITH_LOGGING__LEVEL", "debug")

        config = load_config(project_file=project_file)

        assert config.device_arch == "arm64"
        assert config.logging.level == "debug"

    def test_log_level_shorthand(self, monkeypatch, project_file):
        monkeypatch.setenv("RSMITH_LOG_LEVEL", "quiet")
        assert load_config(project_file=project_file).logging.level == "quiet"

    def test_cli_beats_environment(self, monkeypatch, project_file):
        monkeypatch.setenv("RSMITH_DEVICE_ARCH", "arm64")
        assert load_config(project_file=project_file, device_arch="arm").device_arch == "arm"

    def test_env_vars_expanded_in_file(self, monkeypatch, tmp_path):
        monkeypatch.setenv("OUT_ROOT", str(tmp_path / "elsewhere"))
        path = tmp_path / "rustsmith.yaml"
        path.write_text("build_dir: ${OUT_ROOT}\n")

        config = load_config(project_file=path)

        assert config.build_dir == tmp_path / "elsewhere"

    def test_discovered_from_cwd(self, monkeypatch, project_file, tmp_path):
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        monkeypatch.chdir(nested)
        monkeypatch.delenv("RSMITH_PROJECT_DIR", raising=False)

        config = load_config()

        assert config.project_file == project_file.resolve()
        assert config.device_arch == "x86_64"


class TestOverrides:

    def test_relative_cli_path_resolves_to_cwd(self, monkeypatch, tmp_path, project_dir):
        monkeypatch.chdir(tmp_path)
        config = get_default_config(project_dir=project_dir, build_dir="custom")
        assert config.build_dir == tmp_path.resolve() / "custom"

    def test_explicit_install_roots(self, project_dir):
        config = get_default_config(project_dir=project_dir, product_out="/opt/product", host_out="/opt/host")
        assert config.product_out == Path("/opt/product")
        assert config.host_out == Path("/opt/host")

    def test_unknown_arch_rejected(self, project_dir):
        with pytest.raises(ValidationError):
            get_default_config(project_dir=project_dir, device_arch="mips")

    def test_unknown_multilib_conflict_rejected(self, project_dir):
        with pytest.raises(ValidationError):
            get_default_config(project_dir=project_dir, multilib_conflicts=["riscv64"])

    def test_empty_secondary_arch_disables_second_width(self, project_dir):
        config = get_default_config(project_dir=project_dir, device_secondary_arch="")

        assert config.device_secondary_arch is None
        targets = decode_targets(HostOrDeviceSupported.DEVICE_SUPPORTED, Multilib.BOTH, config)
        assert [t.variant_name for t in targets] == ["android_arm64"]

    @pytest.mark.parametrize("field", ["host_arch", "host_secondary_arch"])
    def test_host_arch_needs_a_host_toolchain(self, project_dir, field):
        with pytest.raises(ValidationError, match="Unsupported host architecture"):
            get_default_config(project_dir=project_dir, **{field: "arm64"})
