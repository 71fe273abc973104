"""Tests for the multilib policy of test modules."""

import pytest

from rustsmith.build.arch import HostOrDeviceSupported, Multilib
from rustsmith.rust import multilib_for_test, new_rust_test, rust_test_factory, rust_test_host_factory

BOTH_WIDTHS = [
    HostOrDeviceSupported.DEVICE_SUPPORTED,
    HostOrDeviceSupported.HOST_AND_DEVICE_SUPPORTED,
]
FIRST_ONLY = [hod for hod in HostOrDeviceSupported if hod not in BOTH_WIDTHS]


class TestMultilibForTest:

    @pytest.mark.parametrize("hod", BOTH_WIDTHS)
    def test_device_capable_builds_both_widths(self, hod):
        assert multilib_for_test(hod) is Multilib.BOTH

    @pytest.mark.parametrize("hod", FIRST_ONLY)
    def test_everything_else_builds_first_only(self, hod):
        assert multilib_for_test(hod) is Multilib.FIRST

    def test_selected_at_construction(self):
        module, _ = new_rust_test(HostOrDeviceSupported.HOST_SUPPORTED)
        assert module.multilib is Multilib.FIRST

    def test_factories(self):
        assert rust_test_factory().multilib is Multilib.BOTH
        assert rust_test_host_factory().multilib is Multilib.FIRST


class TestVariantCount:

    def test_host_test_has_exactly_one_variant(self, config):
        module = rust_test_host_factory()
        targets = module.targets(config)
        assert len(targets) == 1
        assert targets[0].host

    def test_device_test_has_two_variants(self, config):
        module = rust_test_factory()
        assert [t.variant_name for t in module.targets(config)] == ["android_arm64", "android_arm"]
