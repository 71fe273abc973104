"""Tests for target decoding."""

import pytest

from rustsmith.build.arch import (
    ArchType,
    HostOrDeviceSupported,
    Multilib,
    OsClass,
    Target,
    decode_targets,
    enabled_os_classes,
)


class TestArchType:

    def test_widths(self):
        assert ArchType.ARM64.is_64bit
        assert ArchType.X86_64.is_64bit
        assert not ArchType.ARM.is_64bit
        assert ArchType.X86.multilib == "lib32"
        assert ArchType.ARM64.multilib == "lib64"

    def test_from_string_rejects_unknown(self):
        with pytest.raises(ValueError, match="Invalid architecture: 'mips'"):
            ArchType.from_string("mips")


class TestEnabledOsClasses:

    def test_host_and_device_supported_builds_device_only_by_default(self):
        assert enabled_os_classes(HostOrDeviceSupported.HOST_AND_DEVICE_SUPPORTED) == [OsClass.DEVICE]

    def test_host_and_device_supported_with_host_opt_in(self):
        classes = enabled_os_classes(HostOrDeviceSupported.HOST_AND_DEVICE_SUPPORTED, host_supported=True)
        assert classes == [OsClass.DEVICE, OsClass.HOST]

    def test_device_can_be_switched_off(self):
        classes = enabled_os_classes(
            HostOrDeviceSupported.HOST_AND_DEVICE_DEFAULT, device_supported=False
        )
        assert classes == [OsClass.HOST]

    def test_host_only(self):
        assert enabled_os_classes(HostOrDeviceSupported.HOST_SUPPORTED, host_supported=False) == [OsClass.HOST]

    def test_neither(self):
        assert enabled_os_classes(HostOrDeviceSupported.NEITHER_HOST_NOR_DEVICE_SUPPORTED) == []


class TestDecodeTargets:

    def test_both_on_device(self, config):
        targets = decode_targets(HostOrDeviceSupported.DEVICE_SUPPORTED, Multilib.BOTH, config)
        assert [t.variant_name for t in targets] == ["android_arm64", "android_arm"]
        assert targets[0].primary and not targets[1].primary

    def test_first_on_host(self, config):
        targets = decode_targets(HostOrDeviceSupported.HOST_SUPPORTED, Multilib.FIRST, config)
        assert targets == [Target(OsClass.HOST, ArchType.X86_64)]

    def test_lib32_picks_32bit_arch(self, config):
        targets = decode_targets(HostOrDeviceSupported.DEVICE_SUPPORTED, Multilib.LIB32, config)
        assert [t.arch for t in targets] == [ArchType.ARM]

    def test_common_is_arch_neutral(self, config):
        targets = decode_targets(HostOrDeviceSupported.HOST_SUPPORTED, Multilib.COMMON, config)
        assert targets == [Target(OsClass.HOST, None)]
        assert targets[0].variant_name == "linux_glibc_common"

    def test_both_without_secondary_arch(self, project_dir):
        from rustsmith.settings import get_default_config

        config = get_default_config(project_dir=project_dir, device_secondary_arch="")
        targets = decode_targets(HostOrDeviceSupported.DEVICE_SUPPORTED, Multilib.BOTH, config)
        assert [t.arch for t in targets] == [ArchType.ARM64]

    def test_device_targets_precede_host_targets(self, config):
        targets = decode_targets(
            HostOrDeviceSupported.HOST_AND_DEVICE_SUPPORTED, Multilib.FIRST, config, host_supported=True
        )
        assert [t.os_class for t in targets] == [OsClass.DEVICE, OsClass.HOST]
