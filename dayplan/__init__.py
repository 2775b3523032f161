"""dayplan Python package.

Public API:
  - import from `dayplan.api` (preferred) or `import dayplan` (re-export)
"""

from __future__ import annotations

from .api import *  # noqa: F401,F403
from . import api as _api

__all__ = list(_api.__all__)

from .api import (
    occurs_on_date,
    free_slots,
    parse_date_query,
    DateQuery,
    Event,
    TimeSlot,
)
