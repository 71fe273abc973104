# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Test capability layer and the rust_test module types.

A test module is a binary module compiled with --test, installed into its
own named directory under nativetest/nativetest64, and shipped with a
harness config for the test runner.
"""

import logging
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from rustsmith.build.arch import HostOrDeviceSupported, Multilib
from rustsmith.harness.config import auto_gen_rust_test_config

from .binary import BinaryDecorator
from .compiler import AutoDep, BaseCompiler, Compiler, Deps, Flags, InstallLocation
from .module import Module

logger = logging.getLogger(__name__)

_UNSET = object()


class TestProperties(BaseModel):
    """Properties specific to test modules."""

    __test__ = False

    no_named_install_directory: Optional[bool] = Field(
        default=None,
        description=(
            "Don't create a test-specific install directory. Requires relative_install_path; "
            "useful when several tests must share one directory."
        ),
    )
    test_config: Optional[str] = Field(
        default=None, description="Harness config (e.g. AndroidTest.xml) installed with the module"
    )
    test_config_template: Optional[str] = Field(
        default=None, description="Template used when the harness config is generated"
    )
    test_suites: list[str] = Field(
        default_factory=list, description="Compatibility suites (e.g. cts, vts) the module is installed into"
    )
    auto_gen_config: Optional[bool] = Field(
        default=None,
        description=(
            "Generate the harness config. Implied when no AndroidTest.xml sits next to the "
            "declaration file."
        ),
    )

    model_config = ConfigDict(extra="forbid", validate_assignment=True)


def multilib_for_test(hod: HostOrDeviceSupported) -> Multilib:
    """Width variants to build for a test module.

    Device tests are built for both widths. Host tests get only the first,
    since some host dependencies cannot be built for both.
    """
    if hod in (HostOrDeviceSupported.DEVICE_SUPPORTED, HostOrDeviceSupported.HOST_AND_DEVICE_SUPPORTED):
        return Multilib.BOTH
    return Multilib.FIRST


class TestDecorator(Compiler):
    """Wraps a BinaryDecorator to build a test executable."""

    __test__ = False

    def __init__(self, binary: BinaryDecorator):
        self.binary = binary
        self.properties = TestProperties()
        self._test_config = _UNSET

    @property
    def base_compiler(self) -> BaseCompiler:
        return self.binary.base_compiler

    @property
    def test_config(self) -> Optional[Path]:
        """Harness config attached during install, None before then or when there is none."""
        return None if self._test_config is _UNSET else self._test_config

    def compiler_props(self) -> list[BaseModel]:
        return [*self.binary.compiler_props(), self.properties]

    def compiler_flags(self, ctx, flags: Flags) -> Flags:
        flags = self.binary.compiler_flags(ctx, flags)
        return flags.extended(rust_flags=["--test"])

    def compiler_deps(self, ctx, deps: Deps) -> Deps:
        return self.binary.compiler_deps(ctx, deps)

    def compile(self, ctx, flags: Flags, deps: Deps) -> Optional[Path]:
        return self.binary.compile(ctx, flags, deps)

    def install(self, ctx, file: Path) -> None:
        if self._test_config is not _UNSET:
            raise RuntimeError(f"{ctx.module_name()}: test config already attached")

        props = self.properties
        self._test_config = auto_gen_rust_test_config(
            ctx,
            props.test_config,
            props.test_config_template,
            props.test_suites,
            None,
            props.auto_gen_config,
        )

        base = self.base_compiler
        if not props.no_named_install_directory:
            base.relative = ctx.module_name()
        elif not base.relative_install_path():
            ctx.property_error(
                "no_named_install_directory",
                "module install directory may only be disabled if relative_install_path is set",
            )

        self.binary.install(ctx, file)

    def auto_dep(self) -> AutoDep:
        return AutoDep.RLIB

    def native_coverage(self) -> bool:
        return True


def new_rust_test(hod: HostOrDeviceSupported) -> tuple[Module, TestDecorator]:
    module = Module(hod, multilib_for_test(hod))
    test = TestDecorator(BinaryDecorator(BaseCompiler("nativetest", "nativetest64", InstallLocation.DATA)))
    module.compiler = test
    return module, test


def rust_test_factory() -> Module:
    module, _ = new_rust_test(HostOrDeviceSupported.HOST_AND_DEVICE_SUPPORTED)
    return module.init()


def rust_test_host_factory() -> Module:
    module, _ = new_rust_test(HostOrDeviceSupported.HOST_SUPPORTED)
    return module.init()
