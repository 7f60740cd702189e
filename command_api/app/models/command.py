"""
The ``Command`` entity as persisted in the ``commands`` table.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class Command:
    """A named shell instruction for a platform.

    ``id`` is assigned by storage and stays ``None`` until the entity
    has been saved.
    """

    how_to: str
    platform: str
    command_line: str
    id: Optional[int] = None
