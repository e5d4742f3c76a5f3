# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Dataclass exports for ProxyCheck."""

from ..http.models import Headers, ProxyDescriptor, RawResponse, TargetDescriptor
from .result import Timings, VerificationResult

__all__ = [
    "Headers",
    "ProxyDescriptor",
    "RawResponse",
    "TargetDescriptor",
    "Timings",
    "VerificationResult",
]
