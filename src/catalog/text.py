"""
text.py

Title canonicalization applied right before the catalog is written.
"""

from __future__ import annotations

import html
import re

_CURLY_SINGLE_QUOTES = re.compile("[‘’]")

# Non-greedy, non-nesting on purpose: existing catalogs were written with
# exactly this rewrite, so changing it would churn stored titles.
_DOUBLE_QUOTED = re.compile(r'"([^"]+)"')


def normalize_title(title: str) -> str:
    """
    Canonicalize a video title.

    1. Decode HTML character entities (&quot;, &amp;, &#39;, ...)
    2. Turn curly single quotes into a plain apostrophe
    3. Rewrite "double quoted" spans as 'single quoted'

    Unbalanced or nested double quotes are left as they are.

    Examples:
        >>> normalize_title("He said &quot;Hi&rsquo;s&quot; fine")
        "He said 'Hi's' fine"
    """
    t = html.unescape(title or "")
    t = _CURLY_SINGLE_QUOTES.sub("'", t)
    t = _DOUBLE_QUOTED.sub(r"'\1'", t)
    return t
