# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Shared helpers."""

from .ip import Anonymity, classify_anonymity, extract_external_ip

__all__ = ["Anonymity", "classify_anonymity", "extract_external_ip"]
