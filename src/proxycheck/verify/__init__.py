# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Proxy verification engine."""

from .engine import NOTE_FAILED, NOTE_NOT_PASSED, NOTE_WORKING, AttemptTimer, ProxyVerifier, verify_proxy

__all__ = ["AttemptTimer", "NOTE_FAILED", "NOTE_NOT_PASSED", "NOTE_WORKING", "ProxyVerifier", "verify_proxy"]
