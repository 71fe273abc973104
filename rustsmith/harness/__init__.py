# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Test-harness configuration generation."""

from .config import (
    DEFAULT_TEST_CONFIG,
    Option,
    HarnessConfigRenderer,
    auto_gen_rust_test_config,
    resolve_test_config_path,
)

__all__ = [
    "DEFAULT_TEST_CONFIG",
    "Option",
    "HarnessConfigRenderer",
    "auto_gen_rust_test_config",
    "resolve_test_config_path",
]
