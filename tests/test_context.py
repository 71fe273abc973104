"""Tests for the per-variant module context."""

from pathlib import Path

from rustsmith.build.context import ModuleContext
from rustsmith.build.errors import HarnessConfigError, ModuleError, PropertyError
from rustsmith.build.rules import BuildRule

from .conftest import DEVICE_ARM64, HOST_X86_64


class TestErrorChannel:

    def test_property_error(self, device_ctx):
        device_ctx.property_error("srcs", "bad")

        [error] = device_ctx.errors
        assert isinstance(error, PropertyError)
        assert str(error) == "foo_test: srcs: bad"
        assert device_ctx.failed

    def test_module_error_keeps_cause(self, device_ctx):
        cause = OSError("disk full")
        device_ctx.module_error("could not write", cause=cause)

        [error] = device_ctx.errors
        assert isinstance(error, ModuleError)
        assert error.__cause__ is cause
        assert str(error) == "foo_test: could not write"

    def test_report_keeps_error_unchanged(self, device_ctx):
        error = HarnessConfigError("broken")
        device_ctx.report(error)
        assert device_ctx.errors == [error]


class TestPaths:

    def test_module_out_is_per_variant(self, config, module_dir):
        device = ModuleContext("foo_test", module_dir, DEVICE_ARM64, config)
        host = ModuleContext("foo_test", module_dir, HOST_X86_64, config)

        assert device.path_for_module_out("x") == config.build_dir / ".intermediates" / "src" / "foo_test" / "android_arm64" / "x"
        assert host.path_for_module_out("x").parent.name == "linux_glibc_x86_64"

    def test_module_outside_project(self, config, tmp_path_factory):
        elsewhere = tmp_path_factory.mktemp("elsewhere")
        ctx = ModuleContext("foo_test", elsewhere, DEVICE_ARM64, config)

        assert ctx.path_for_module_out() == config.build_dir / ".intermediates" / elsewhere.name / "foo_test" / "android_arm64"

    def test_optional_source(self, device_ctx, module_dir):
        assert device_ctx.optional_path_for_module_src("foo_test.rs") == module_dir / "foo_test.rs"
        assert device_ctx.optional_path_for_module_src("nope.rs") is None

    def test_install_roots(self, device_ctx, host_ctx, config):
        assert device_ctx.install_root() == config.product_out
        assert host_ctx.install_root() == config.host_out


class TestSinks:

    def test_summary(self, device_ctx):
        device_ctx.build(BuildRule("rustc", outputs=[Path("/o/foo_test")]))
        device_ctx.write_file(Path("/o/foo_test.config"), "<configuration />")
        dest = device_ctx.install_file(Path("/d"), "foo_test", Path("/o/foo_test"))
        device_ctx.property_error("srcs", "bad")

        summary = device_ctx.summary()

        assert dest == Path("/d/foo_test")
        assert [r["rule"] for r in summary["rules"]] == ["rustc", "write_file"]
        assert summary["installs"] == [{"src": "/o/foo_test", "dest": "/d/foo_test"}]
        assert summary["errors"] == ["foo_test: srcs: bad"]
