# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Status line and header block parsing.

HTTP header field names are case-insensitive (RFC 9110), so names are stored
lower-cased. There is no folding or multi-value support: the last
occurrence of a header wins.
"""

from __future__ import annotations

import re

from .models import Headers, RawResponse

_STATUS_LINE_RE = re.compile(r"^HTTP/\d(?:\.\d)?\s+(\d{3})(?:\s+(.*))?$", re.IGNORECASE)


def parse_status_line(line: str) -> tuple[int, str]:
    """Return `(status_code, status_text)`; `(0, "")` when the line is not an HTTP status line."""
    match = _STATUS_LINE_RE.match(line.strip())
    if not match:
        return 0, ""
    return int(match.group(1)), (match.group(2) or "").strip()


def parse_header_lines(lines: list[str]) -> Headers:
    headers: Headers = {}
    for line in lines:
        name, sep, value = line.partition(":")
        if not sep:
            continue
        key = name.strip().lower()
        if not key:
            continue
        headers[key] = value.strip()
    return headers


def parse_head(head: bytes) -> RawResponse:
    """Decode a raw header block (status line through the blank line) into a RawResponse without body."""
    text = head.decode("iso-8859-1")
    lines = [line for line in text.split("\r\n") if line]
    status_line = lines.pop(0) if lines else ""
    status_code, status_text = parse_status_line(status_line)
    return RawResponse(
        status_code=status_code,
        status_text=status_text,
        headers=parse_header_lines(lines),
    )


__all__ = ["parse_head", "parse_header_lines", "parse_status_line"]
