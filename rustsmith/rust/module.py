# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""The Rust module aggregate.

A Module owns the outermost capability layer of its chain and the list of
property sets the declaration front end fills in. generate_build_actions()
drives one variant through deps, flags, compile and install.
"""

import logging
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from rustsmith.build.arch import HostOrDeviceSupported, Multilib, Target, decode_targets
from rustsmith.build.errors import BuildError

from .compiler import AutoDep, Compiler, Deps, Flags
from .toolchain import find_toolchain

logger = logging.getLogger(__name__)


class CommonProperties(BaseModel):
    """Properties every module type accepts."""

    enabled: Optional[bool] = Field(default=None, description="Set to false to skip the module")
    host_supported: Optional[bool] = Field(default=None, description="Also build for the host")
    device_supported: Optional[bool] = Field(default=None, description="Build for the device")

    model_config = ConfigDict(extra="forbid", validate_assignment=True)


class Module:
    """One declared Rust module, built for a single variant.

    Args:
        hod: Which OS classes the module type supports
        multilib: Architecture-width policy, fixed at construction
    """

    def __init__(self, hod: HostOrDeviceSupported, multilib: Multilib):
        self.hod = hod
        self.multilib = multilib
        self.compiler: Optional[Compiler] = None

        self.common_properties = CommonProperties()
        self.properties: list[BaseModel] = [self.common_properties]

        self.deps: Optional[Deps] = None
        self.flags: Optional[Flags] = None
        self.output_file: Optional[Path] = None

    def add_properties(self, *props: BaseModel) -> None:
        for prop in props:
            if not any(prop is existing for existing in self.properties):
                self.properties.append(prop)

    def init(self) -> "Module":
        """Attach the compiler chain's property sets; returns self."""
        if self.compiler is not None:
            self.add_properties(*self.compiler.compiler_props())
        return self

    @property
    def enabled(self) -> bool:
        return self.common_properties.enabled is not False

    def targets(self, config) -> list[Target]:
        return decode_targets(
            self.hod,
            self.multilib,
            config,
            host_supported=self.common_properties.host_supported,
            device_supported=self.common_properties.device_supported,
        )

    @property
    def installed_path(self) -> Optional[Path]:
        return self.compiler.base_compiler.path if self.compiler is not None else None

    @property
    def test_config(self) -> Optional[Path]:
        return getattr(self.compiler, "test_config", None)

    def compute_deps(self, ctx) -> Deps:
        """Collect dependencies and route rustlibs by the chain's linkage preference."""
        deps = self.compiler.compiler_deps(ctx, Deps())

        if self.compiler.auto_dep() is AutoDep.DYLIB:
            deps.dylibs.extend(deps.rustlibs)
        else:
            deps.rlibs.extend(deps.rustlibs)
        deps.rustlibs = []
        return deps

    def generate_build_actions(self, ctx) -> None:
        """Run deps, flags, compile and (after a clean compile) install for ctx's variant.

        Build errors raised by any capability layer are recorded on ctx as-is.
        """
        if self.compiler is None:
            return

        try:
            if ctx.toolchain is None:
                ctx.toolchain = find_toolchain(ctx.target)
        except ValueError as e:
            ctx.module_error(str(e), cause=e)
            logger.warning(f"Module {ctx.module_name()} ({ctx.target}) has no toolchain")
            return

        try:
            self.deps = self.compute_deps(ctx)
            self.flags = self.compiler.compiler_flags(ctx, Flags())
            logger.debug(f"{ctx.module_name()} ({ctx.target}) flags: {self.flags}")

            self.output_file = self.compiler.compile(ctx, self.flags, self.deps)
            if self.output_file is not None and not ctx.failed:
                self.compiler.install(ctx, self.output_file)
        except BuildError as e:
            logger.debug(f"{ctx.module_name()} ({ctx.target}) failed: {e}")
            ctx.report(e)
        except OSError as e:
            ctx.module_error(f"cannot read module inputs: {e}", cause=e)

        if ctx.failed:
            logger.warning(f"Module {ctx.module_name()} ({ctx.target}) has {len(ctx.errors)} error(s)")
