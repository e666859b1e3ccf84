"""Post-assembly corrections over generated SQL text.

The WHERE builder renders ``payload`` as ``CAST(self, 'string')``.  When such
a comparison has a bare number on the other side (``payload > 25``), the rule
engine would compare text against a number.  :func:`coerce_payload_comparisons`
runs over the finished WHERE text and re-casts those payload references to
``float``.  It only looks at the self-reference; casts of named fields are
left alone.
"""
from __future__ import annotations

import re

_NUMBER = r"[0-9]+(?:\.[0-9]+)?"
_COMPARISON = r"[<>!=]=?"
_PAYLOAD_AS_STRING = r"CAST\(self,\s*'string'\)"

# CAST(self, 'string') <op> <number>
_PAYLOAD_LEFT = re.compile(rf"({_PAYLOAD_AS_STRING})\s*({_COMPARISON})\s*({_NUMBER})")
# <number> <op> CAST(self, 'string')
_PAYLOAD_RIGHT = re.compile(rf"({_NUMBER})\s*({_COMPARISON})\s*({_PAYLOAD_AS_STRING})")


def coerce_payload_comparisons(sql: str) -> str:
    """Wrap payload-as-string references compared with numbers in a float cast.

    >>> coerce_payload_comparisons("(CAST(self, 'string') > 25)")
    "(CAST(CAST(self, 'string'), 'float') > 25)"
    """
    sql = _PAYLOAD_LEFT.sub(r"CAST(\1, 'float') \2 \3", sql)
    return _PAYLOAD_RIGHT.sub(r"\1 \2 CAST(\3, 'float')", sql)
