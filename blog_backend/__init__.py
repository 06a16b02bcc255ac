# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Blog backend: user registration and token-based login."""

__version__ = "0.1.0"
