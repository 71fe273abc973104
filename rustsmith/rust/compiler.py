# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Compiler capability interface and the base compiler layer.

Module kinds are built from a short chain of capability layers. The
innermost layer is BaseCompiler; more specialized layers (binary, test)
each own the layer they wrap and implement the same Compiler interface,
either delegating to it, extending its result or replacing it.

Logging Strategy:
    - DEBUG: Flag composition and install directory resolution
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .toolchain import Toolchain

logger = logging.getLogger(__name__)


class AutoDep(Enum):
    """Linkage variant chosen for automatically-routed library dependencies."""

    RLIB = "rlib"
    DYLIB = "dylib"

    def __str__(self) -> str:
        return self.value


class InstallLocation(Enum):
    """Device partition an installed file lands in."""

    SYSTEM = "system"
    DATA = "data"

    @property
    def partition(self) -> str:
        return self.value


@dataclass(frozen=True)
class Flags:
    """Compiler and linker flags for one module variant.

    Instances are immutable; layers derive new ones with extended().
    """

    global_rust_flags: tuple[str, ...] = ()
    global_link_flags: tuple[str, ...] = ()
    rust_flags: tuple[str, ...] = ()
    link_flags: tuple[str, ...] = ()

    def extended(self, **additions) -> "Flags":
        """Return a copy with the given sequences appended to the named fields."""
        changes = {name: getattr(self, name) + tuple(values) for name, values in additions.items()}
        return replace(self, **changes)

    def to_dict(self) -> dict[str, list[str]]:
        return {
            'global_rust_flags': list(self.global_rust_flags),
            'global_link_flags': list(self.global_link_flags),
            'rust_flags': list(self.rust_flags),
            'link_flags': list(self.link_flags),
        }


@dataclass
class Deps:
    """Library dependencies declared by a module variant, by linkage kind."""

    rlibs: list[str] = field(default_factory=list)
    dylibs: list[str] = field(default_factory=list)
    proc_macros: list[str] = field(default_factory=list)
    rustlibs: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, list[str]]:
        return {
            'rlibs': list(self.rlibs),
            'dylibs': list(self.dylibs),
            'proc_macros': list(self.proc_macros),
        }


class BaseCompilerProperties(BaseModel):
    """Properties shared by every Rust module kind."""

    srcs: list[str] = Field(default_factory=list, description="Crate root source file (exactly one)")
    crate_name: Optional[str] = Field(default=None, description="Crate name, defaults to the module name")
    edition: Optional[str] = Field(default=None, description="Rust edition, defaults to the configured edition")
    flags: list[str] = Field(default_factory=list, description="Extra rustc flags")
    ld_flags: list[str] = Field(default_factory=list, description="Extra linker flags")
    features: list[str] = Field(default_factory=list, description="Crate features to enable")
    cfgs: list[str] = Field(default_factory=list, description="--cfg values")
    deny_warnings: Optional[bool] = Field(default=None, description="Treat warnings as errors")
    relative_install_path: Optional[str] = Field(
        default=None, description="Install into a subdirectory of the default install path"
    )
    rlibs: list[str] = Field(default_factory=list, description="Statically linked Rust libraries")
    dylibs: list[str] = Field(default_factory=list, description="Dynamically linked Rust libraries")
    proc_macros: list[str] = Field(default_factory=list, description="Procedural macro libraries")
    rustlibs: list[str] = Field(
        default_factory=list, description="Rust libraries linked with the module's preferred linkage"
    )

    model_config = ConfigDict(extra="forbid", validate_assignment=True)


class Compiler(ABC):
    """Operation surface shared by every capability layer."""

    @abstractmethod
    def compiler_props(self) -> list[BaseModel]:
        """Property sets of this layer and the layers it wraps, innermost first."""

    @abstractmethod
    def compiler_flags(self, ctx, flags: Flags) -> Flags:
        """Return flags extended with this layer's contributions. Must not mutate input."""

    @abstractmethod
    def compiler_deps(self, ctx, deps: Deps) -> Deps:
        """Add this layer's library dependencies."""

    @abstractmethod
    def compile(self, ctx, flags: Flags, deps: Deps) -> Optional[Path]:
        """Record the compile rule; return the output file or None on error."""

    @abstractmethod
    def install(self, ctx, file: Path) -> None:
        """Install a built file."""

    @abstractmethod
    def auto_dep(self) -> AutoDep:
        """Linkage used for rustlibs dependencies."""

    @abstractmethod
    def native_coverage(self) -> bool:
        """Whether coverage instrumentation applies to this module kind."""

    @property
    @abstractmethod
    def base_compiler(self) -> "BaseCompiler":
        """Innermost layer of the chain."""


class BaseCompiler(Compiler):
    """Innermost layer: flags, deps and install location common to all kinds.

    Args:
        dir: Install directory name for 32-bit (or width-agnostic) variants
        dir64: Install directory name for 64-bit variants, empty to reuse dir
        location: Device partition to install into
    """

    def __init__(self, dir: str, dir64: str, location: InstallLocation):
        self.properties = BaseCompilerProperties()
        self.dir = dir
        self.dir64 = dir64
        self.location = location

        # Set by outer layers before install
        self.sub_dir = ""
        self.relative = ""

        self.path: Optional[Path] = None

    @property
    def base_compiler(self) -> "BaseCompiler":
        return self

    def compiler_props(self) -> list[BaseModel]:
        return [self.properties]

    def relative_install_path(self) -> str:
        return self.properties.relative_install_path or ""

    def crate_name(self, ctx) -> str:
        return self.properties.crate_name or ctx.module_name().replace("-", "_")

    def edition(self, ctx) -> str:
        return self.properties.edition or ctx.config.default_edition

    def compiler_flags(self, ctx, flags: Flags) -> Flags:
        props = self.properties
        toolchain: Toolchain = ctx.toolchain

        rust_flags = []
        if props.deny_warnings:
            rust_flags.append("-D warnings")
        rust_flags.extend(props.flags)
        rust_flags.extend(f"--cfg 'feature=\"{feature}\"'" for feature in props.features)
        rust_flags.append(f"--edition={self.edition(ctx)}")

        link_flags = list(props.ld_flags)
        if ctx.host:
            lib = "lib64" if toolchain.is_64bit else "lib"
            link_flags.append(f"-Wl,-rpath,$ORIGIN/{lib}")
            link_flags.append(f"-Wl,-rpath,$ORIGIN/../{lib}")

        global_rust_flags = [f"--cfg {cfg}" for cfg in props.cfgs]
        global_rust_flags.extend(toolchain.rust_flags)

        return flags.extended(
            rust_flags=rust_flags,
            link_flags=link_flags,
            global_rust_flags=global_rust_flags,
            global_link_flags=toolchain.link_flags,
        )

    def compiler_deps(self, ctx, deps: Deps) -> Deps:
        props = self.properties
        deps.rlibs.extend(props.rlibs)
        deps.dylibs.extend(props.dylibs)
        deps.proc_macros.extend(props.proc_macros)
        deps.rustlibs.extend(props.rustlibs)
        if ctx.device:
            deps.rustlibs.append("libstd")
        return deps

    def crate_root(self, ctx) -> Optional[Path]:
        """The single source file a crate is compiled from, or None after reporting an error."""
        srcs = self.properties.srcs
        if len(srcs) != 1:
            ctx.property_error("srcs", "srcs can only contain one path for rust modules")
            return None

        path = ctx.optional_path_for_module_src(srcs[0])
        if path is None:
            ctx.property_error("srcs", f"module source path {srcs[0]!r} does not exist")
        return path

    def compile(self, ctx, flags: Flags, deps: Deps) -> Optional[Path]:
        """Not reached through a module chain: outer layers own the compile step."""
        raise NotImplementedError(f"{type(self).__name__} does not produce an output on its own")

    def install_dir(self, ctx) -> Path:
        dir = self.dir
        if ctx.toolchain.is_64bit and self.dir64:
            dir = self.dir64

        root = ctx.install_root()
        if ctx.device:
            if ctx.config.has_multilib_conflict(str(ctx.target.arch)):
                dir = str(Path(dir) / str(ctx.target.arch))
            root = root / self.location.partition

        install_dir = root.joinpath(dir, self.sub_dir, self.relative_install_path(), self.relative)
        logger.debug(f"Install dir for {ctx.module_name()} ({ctx.target}): {install_dir}")
        return install_dir

    def install(self, ctx, file: Path) -> None:
        self.path = ctx.install_file(self.install_dir(ctx), Path(file).name, file)

    def auto_dep(self) -> AutoDep:
        return AutoDep.RLIB

    def native_coverage(self) -> bool:
        return False
