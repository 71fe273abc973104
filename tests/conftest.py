"""Shared fixtures for the rustsmith test suite."""

from pathlib import Path

import pytest

from rustsmith.build.arch import ArchType, OsClass, Target
from rustsmith.build.context import ModuleContext
from rustsmith.rust import default_registry, find_toolchain
from rustsmith.settings import get_default_config, reset_config

DEVICE_ARM64 = Target(OsClass.DEVICE, ArchType.ARM64)
DEVICE_ARM = Target(OsClass.DEVICE, ArchType.ARM, primary=False)
HOST_X86_64 = Target(OsClass.HOST, ArchType.X86_64)


@pytest.fixture(autouse=True)
def _reset_cached_config():
    yield
    reset_config()


@pytest.fixture
def project_dir(tmp_path) -> Path:
    return tmp_path.resolve()


@pytest.fixture
def config(project_dir):
    """Default configuration rooted in a temporary project directory."""
    return get_default_config(project_dir=project_dir)


@pytest.fixture
def module_dir(project_dir) -> Path:
    """Module source directory holding foo_test.rs."""
    path = project_dir / "src"
    path.mkdir()
    (path / "foo_test.rs").write_text("#[test]\nfn it_works() {}\n")
    return path


@pytest.fixture
def make_ctx(config, module_dir):
    """Factory for ModuleContexts of a module in module_dir."""

    def _make(name: str = "foo_test", target: Target = DEVICE_ARM64) -> ModuleContext:
        return ModuleContext(name, module_dir, target, config, toolchain=find_toolchain(target))

    return _make


@pytest.fixture
def device_ctx(make_ctx) -> ModuleContext:
    return make_ctx()


@pytest.fixture
def host_ctx(make_ctx) -> ModuleContext:
    return make_ctx(target=HOST_X86_64)


@pytest.fixture
def registry():
    return default_registry()


@pytest.fixture
def write_blueprint(module_dir):
    """Write a declaration file into module_dir from a list of module mappings."""
    import yaml

    def _write(modules: list[dict], name: str = "modules.yaml") -> Path:
        path = module_dir / name
        path.write_text(yaml.safe_dump({"modules": modules}, sort_keys=False))
        return path

    return _write
