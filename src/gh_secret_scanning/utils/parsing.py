"""
Parsing helpers for secret scanning data.

Provides secret-type identifier splitting.
"""

from __future__ import annotations

import re

SECRET_TYPE_SEPARATOR_RE = re.compile(r"[_.]")


def provider_prefix(secret_type: str) -> str:
	"""
	Return the provider part of a secret-type identifier.

	``slack_api_token`` -> ``slack``; the prefix ends at the first
	underscore or dot.
	"""
	return SECRET_TYPE_SEPARATOR_RE.split(secret_type, maxsplit=1)[0].lower()


__all__ = ["provider_prefix"]
