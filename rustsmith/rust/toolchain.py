# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Per-target Rust toolchain descriptions."""

from dataclasses import dataclass, field

from rustsmith.build.arch import ArchType, OsClass, Target


@dataclass(frozen=True)
class Toolchain:
    """Flags and naming conventions of the toolchain for one target."""

    triple: str
    arch: ArchType
    os_class: OsClass
    rust_flags: tuple[str, ...] = field(default_factory=tuple)
    link_flags: tuple[str, ...] = field(default_factory=tuple)
    executable_suffix: str = ""

    @property
    def is_64bit(self) -> bool:
        return self.arch.is_64bit

    @property
    def bionic(self) -> bool:
        return self.os_class is OsClass.DEVICE


_DEVICE_LINK_FLAGS = ("-Wl,--icf=safe", "-Wl,-z,max-page-size=4096")

_TOOLCHAINS = {
    (OsClass.DEVICE, ArchType.ARM64): Toolchain(
        triple="aarch64-linux-android",
        arch=ArchType.ARM64,
        os_class=OsClass.DEVICE,
        rust_flags=("--target=aarch64-linux-android",),
        link_flags=_DEVICE_LINK_FLAGS,
    ),
    (OsClass.DEVICE, ArchType.ARM): Toolchain(
        triple="armv7-linux-androideabi",
        arch=ArchType.ARM,
        os_class=OsClass.DEVICE,
        rust_flags=("--target=armv7-linux-androideabi",),
        link_flags=_DEVICE_LINK_FLAGS,
    ),
    (OsClass.DEVICE, ArchType.X86_64): Toolchain(
        triple="x86_64-linux-android",
        arch=ArchType.X86_64,
        os_class=OsClass.DEVICE,
        rust_flags=("--target=x86_64-linux-android",),
        link_flags=_DEVICE_LINK_FLAGS,
    ),
    (OsClass.DEVICE, ArchType.X86): Toolchain(
        triple="i686-linux-android",
        arch=ArchType.X86,
        os_class=OsClass.DEVICE,
        rust_flags=("--target=i686-linux-android",),
        link_flags=_DEVICE_LINK_FLAGS,
    ),
    (OsClass.HOST, ArchType.X86_64): Toolchain(
        triple="x86_64-unknown-linux-gnu",
        arch=ArchType.X86_64,
        os_class=OsClass.HOST,
        rust_flags=("--target=x86_64-unknown-linux-gnu",),
        link_flags=("-m64",),
    ),
    (OsClass.HOST, ArchType.X86): Toolchain(
        triple="i686-unknown-linux-gnu",
        arch=ArchType.X86,
        os_class=OsClass.HOST,
        rust_flags=("--target=i686-unknown-linux-gnu",),
        link_flags=("-m32",),
    ),
}


def find_toolchain(target: Target) -> Toolchain:
    """Toolchain for a target.

    Arch-neutral targets use the primary 64-bit toolchain of their OS class.

    Raises:
        ValueError: If no toolchain is known for the target
    """
    arch = target.arch
    if arch is None:
        arch = ArchType.X86_64 if target.host else ArchType.ARM64
    try:
        return _TOOLCHAINS[(target.os_class, arch)]
    except KeyError:
        raise ValueError(f"No Rust toolchain for {target.os_class} {arch}") from None
