# Copyright 2025 t54 labs
# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations


class EdgeError(Exception):
    pass


class AuthenticationError(EdgeError):
    """Token exchange failed. Carries no upstream detail."""


class UpstreamResponseError(EdgeError):
    """Payment API answered successfully but the reply can't be relayed."""


class AssetNotFound(EdgeError, LookupError):
    pass
