# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Binary capability layer and the rust_binary module types."""

import logging
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from rustsmith.build.arch import HostOrDeviceSupported, Multilib
from rustsmith.build.rules import BuildRule

from .compiler import AutoDep, BaseCompiler, Compiler, Deps, Flags, InstallLocation
from .module import Module

logger = logging.getLogger(__name__)


class BinaryProperties(BaseModel):
    """Properties specific to executables."""

    prefer_dynamic: Optional[bool] = Field(
        default=None, description="Link Rust library dependencies dynamically"
    )

    model_config = ConfigDict(extra="forbid", validate_assignment=True)


class BinaryDecorator(Compiler):
    """Wraps a BaseCompiler to produce an executable."""

    def __init__(self, base: BaseCompiler):
        self.base = base
        self.properties = BinaryProperties()

    @property
    def base_compiler(self) -> BaseCompiler:
        return self.base

    def prefer_dynamic(self) -> bool:
        return bool(self.properties.prefer_dynamic)

    def compiler_props(self) -> list[BaseModel]:
        return [*self.base.compiler_props(), self.properties]

    def compiler_flags(self, ctx, flags: Flags) -> Flags:
        flags = self.base.compiler_flags(ctx, flags)

        if ctx.toolchain.bionic:
            flags = flags.extended(link_flags=["-Wl,--gc-sections", "-Wl,-z,nocopyreloc"])
        if self.prefer_dynamic():
            flags = flags.extended(rust_flags=["-C prefer-dynamic"])
        return flags

    def compiler_deps(self, ctx, deps: Deps) -> Deps:
        return self.base.compiler_deps(ctx, deps)

    def compile(self, ctx, flags: Flags, deps: Deps) -> Optional[Path]:
        crate_root = self.base.crate_root(ctx)
        if crate_root is None:
            return None

        output = ctx.path_for_module_out(ctx.module_name() + ctx.toolchain.executable_suffix)
        ctx.build(BuildRule(
            rule="rustc",
            outputs=[output],
            inputs=[crate_root],
            args={
                'crate_name': self.base.crate_name(ctx),
                'crate_type': "bin",
                'target': ctx.toolchain.triple,
                'rust_flags': [*flags.global_rust_flags, *flags.rust_flags],
                'link_flags': [*flags.global_link_flags, *flags.link_flags],
                **deps.to_dict(),
            },
        ))
        return output

    def install(self, ctx, file: Path) -> None:
        self.base.install(ctx, file)

    def auto_dep(self) -> AutoDep:
        return AutoDep.DYLIB if self.prefer_dynamic() else AutoDep.RLIB

    def native_coverage(self) -> bool:
        return True


def new_rust_binary(hod: HostOrDeviceSupported) -> tuple[Module, BinaryDecorator]:
    module = Module(hod, Multilib.FIRST)
    binary = BinaryDecorator(BaseCompiler("bin", "", InstallLocation.SYSTEM))
    module.compiler = binary
    return module, binary


def rust_binary_factory() -> Module:
    module, _ = new_rust_binary(HostOrDeviceSupported.HOST_AND_DEVICE_SUPPORTED)
    return module.init()


def rust_binary_host_factory() -> Module:
    module, _ = new_rust_binary(HostOrDeviceSupported.HOST_SUPPORTED)
    return module.init()
