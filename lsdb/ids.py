from __future__ import annotations

import itertools
import os
import time

_COUNTER = itertools.count()


def new_id() -> str:
    """
    Generate a 26-char hex document id:

      <12 hex ms timestamp><6 hex process counter><8 hex random>

    Ids issued by one process sort in creation order.
    """
    ts = int(time.time() * 1000)
    n = next(_COUNTER) & 0xFFFFFF
    rand = os.urandom(4).hex()
    return f"{ts:012x}{n:06x}{rand}"
