"""
Plain-text sanitizer for user supplied task fields.

Title and description are stored as plain text, so the policy is strict:
- active-content elements (script, style, iframe, ...) are removed with their content
- HTML comments are removed
- every other tag is stripped, its text is kept

  "<script>alert('x')</script>Buy groceries"  ->  "Buy groceries"
  "Buy groceries"                              ->  "Buy groceries"
"""
from __future__ import annotations

import logging
import re
from typing import Optional

from taskmanager.core.errors import MalformedInputError

logger = logging.getLogger(__name__)

_BLOCK_TAGS = (
    "script", "style", "iframe", "object", "embed", "applet",
    "noscript", "template", "frameset", "frame", "svg", "math",
)
_BLOCK_NAMES = "|".join(_BLOCK_TAGS)

_BLOCK_RE = re.compile(
    rf"<({_BLOCK_NAMES})\b[^>]*>.*?</\s*\1\s*>",
    re.IGNORECASE | re.DOTALL,
)
# 닫는 태그가 없으면 끝까지 제거
_UNCLOSED_BLOCK_RE = re.compile(
    rf"<({_BLOCK_NAMES})\b[^>]*>.*\Z",
    re.IGNORECASE | re.DOTALL,
)
_COMMENT_RE = re.compile(r"<!--.*?(-->|\Z)", re.DOTALL)
_TAG_RE = re.compile(r"</?[a-zA-Z!?][^>]*>")
# 닫히지 않은 태그 시작
_DANGLING_RE = re.compile(r"<(?=[a-zA-Z/!?])")


class Sanitizer:
    def __init__(self, fail_closed: bool = False):
        self.fail_closed = fail_closed

    def sanitize(self, text: Optional[str]) -> Optional[str]:
        if text is None or not text.strip():
            return text

        try:
            cleaned = self._clean(text)
        except Exception:
            logger.exception("Sanitization failed (fail_closed=%s)", self.fail_closed)
            if self.fail_closed:
                raise MalformedInputError("Input could not be sanitized")
            return text

        if cleaned != text:
            logger.warning(
                "Sanitization removed markup: original=%r cleaned=%r", text, cleaned
            )
        return cleaned

    @staticmethod
    def _clean(text: str) -> str:
        # Removing one tag can join its neighbours into a new one, so repeat until stable.
        cleaned = text
        while True:
            previous = cleaned
            cleaned = _COMMENT_RE.sub("", cleaned)
            cleaned = _BLOCK_RE.sub("", cleaned)
            cleaned = _UNCLOSED_BLOCK_RE.sub("", cleaned)
            cleaned = _TAG_RE.sub("", cleaned)
            if cleaned == previous:
                # Only once no complete tag is left: drop "<" that still opens one.
                cleaned = _DANGLING_RE.sub("", cleaned)
                if cleaned == previous:
                    break
        return cleaned
