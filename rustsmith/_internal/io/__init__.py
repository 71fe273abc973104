# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""I/O utilities for module declaration and plan files.

Not part of the public API.
"""
