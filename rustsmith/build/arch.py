# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Architectures, targets and the host/device support classification.

decode_targets() expands one module declaration into the concrete
targets it is built for.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

logger = logging.getLogger(__name__)


class OsClass(Enum):
    """Where a variant runs."""

    DEVICE = "android"
    HOST = "linux_glibc"

    def __str__(self) -> str:
        return self.value


class ArchType(Enum):
    """Supported CPU architectures, valued by name."""

    ARM = "arm"
    ARM64 = "arm64"
    X86 = "x86"
    X86_64 = "x86_64"

    @property
    def is_64bit(self) -> bool:
        return self in (ArchType.ARM64, ArchType.X86_64)

    @property
    def multilib(self) -> str:
        return "lib64" if self.is_64bit else "lib32"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_string(cls, s: str) -> "ArchType":
        try:
            return cls(s)
        except ValueError:
            valid = ", ".join(a.value for a in cls)
            raise ValueError(f"Invalid architecture: '{s}'. Must be one of: {valid}")


class HostOrDeviceSupported(Enum):
    """Which OS classes a module type can be built for."""

    HOST_SUPPORTED = "host"
    HOST_SUPPORTED_NO_CROSS = "host_no_cross"
    DEVICE_SUPPORTED = "device"
    HOST_AND_DEVICE_SUPPORTED = "host_and_device"
    HOST_AND_DEVICE_DEFAULT = "host_and_device_default"
    NEITHER_HOST_NOR_DEVICE_SUPPORTED = "neither"

    @property
    def host_supported(self) -> bool:
        return self in (
            HostOrDeviceSupported.HOST_SUPPORTED,
            HostOrDeviceSupported.HOST_SUPPORTED_NO_CROSS,
            HostOrDeviceSupported.HOST_AND_DEVICE_SUPPORTED,
            HostOrDeviceSupported.HOST_AND_DEVICE_DEFAULT,
        )

    @property
    def device_supported(self) -> bool:
        return self in (
            HostOrDeviceSupported.DEVICE_SUPPORTED,
            HostOrDeviceSupported.HOST_AND_DEVICE_SUPPORTED,
            HostOrDeviceSupported.HOST_AND_DEVICE_DEFAULT,
        )


class Multilib(Enum):
    """How many architecture-width variants to build per OS class."""

    BOTH = "both"
    FIRST = "first"
    LIB32 = "32"
    LIB64 = "64"
    COMMON = "common"


@dataclass(frozen=True)
class Target:
    """One build variant: an OS class plus an architecture.

    arch is None for arch-neutral (common) variants.
    """

    os_class: OsClass
    arch: Optional[ArchType]
    primary: bool = True

    @property
    def host(self) -> bool:
        return self.os_class is OsClass.HOST

    @property
    def device(self) -> bool:
        return self.os_class is OsClass.DEVICE

    @property
    def variant_name(self) -> str:
        if self.arch is None:
            return f"{self.os_class}_common"
        return f"{self.os_class}_{self.arch}"

    def __str__(self) -> str:
        return self.variant_name


def _arches_for(os_class: OsClass, config) -> list[ArchType]:
    """Primary then (optional) secondary arch configured for an OS class."""
    if os_class is OsClass.DEVICE:
        names = [config.device_arch, config.device_secondary_arch]
    else:
        names = [config.host_arch, config.host_secondary_arch]
    return [ArchType.from_string(name) for name in names if name]


def _select(arches: list[ArchType], multilib: Multilib) -> list[ArchType]:
    if multilib is Multilib.BOTH:
        return arches
    if multilib is Multilib.FIRST:
        return arches[:1]
    if multilib is Multilib.LIB32:
        return [a for a in arches if not a.is_64bit][:1]
    if multilib is Multilib.LIB64:
        return [a for a in arches if a.is_64bit][:1]
    raise ValueError(f"Unhandled multilib {multilib}")


def enabled_os_classes(
    hod: HostOrDeviceSupported,
    host_supported: Optional[bool] = None,
    device_supported: Optional[bool] = None,
) -> list[OsClass]:
    """OS classes a module is built for, honoring its declared overrides.

    HOST_AND_DEVICE_SUPPORTED builds for the device by default and for the
    host only when host_supported is set. HOST_AND_DEVICE_DEFAULT builds
    for both unless one is switched off.
    """
    device = hod.device_supported
    host = hod.host_supported

    if hod is HostOrDeviceSupported.HOST_AND_DEVICE_SUPPORTED:
        device = device_supported is not False
        host = bool(host_supported)
    elif hod is HostOrDeviceSupported.HOST_AND_DEVICE_DEFAULT:
        device = device_supported is not False
        host = host_supported is not False

    os_classes = []
    if device:
        os_classes.append(OsClass.DEVICE)
    if host:
        os_classes.append(OsClass.HOST)
    return os_classes


def decode_targets(
    hod: HostOrDeviceSupported,
    multilib: Multilib,
    config,
    host_supported: Optional[bool] = None,
    device_supported: Optional[bool] = None,
) -> list[Target]:
    """Expand a module's support classification and multilib into targets.

    Device targets come before host targets; within an OS class the
    primary architecture comes first.
    """
    os_classes = enabled_os_classes(hod, host_supported, device_supported)

    targets = []
    for os_class in os_classes:
        if multilib is Multilib.COMMON:
            targets.append(Target(os_class, None))
            continue

        arches = _arches_for(os_class, config)
        for arch in _select(arches, multilib):
            targets.append(Target(os_class, arch, primary=(arch is arches[0])))

    logger.debug(f"Decoded {hod.value}/{multilib.value} into {[str(t) for t in targets]}")
    return targets
