# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Internal utilities for rustsmith.

Private implementation details that are not part of the public API and
may change without notice.

Subpackages:
- io: YAML loading and dumping

Modules:
- logging: Logging configuration
"""
