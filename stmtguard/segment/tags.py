from __future__ import annotations

import re

# ASCII only – PostgreSQL tags follow identifier rules, \w would admit more.
_TAG_RE = re.compile(r"\$[A-Za-z0-9_]*\$")


def read_dollar_tag(text: str, start: int) -> str | None:
    """
    Return the dollar‑quote tag (``$$`` or ``$name$``) that begins at
    *start*, or ``None`` when the ``$`` there does not open a complete tag.
    """
    if not text.startswith("$", start):
        return None
    m = _TAG_RE.match(text, start)
    return m.group(0) if m else None
