"""
Memory Space Tracking
=====================

The active DSP memory space is selected by S0 records and cleared by S8
and unsupported records. MemorySpaceTracker holds that state for one
conversion run; it is created by the conversion loop and passed to
whatever needs to read it.
"""

import logging

from srec2inc.records import (
    DataRecord,
    EndOfFile,
    MemorySpace,
    MemorySpaceSwitch,
    Record,
    Unsupported,
)

# Logger for this module
logger = logging.getLogger(__name__)


class MemorySpaceTracker:
    """
    Current memory space of a conversion run.

    Attributes:
        current: The active MemorySpace, UNKNOWN until an S0 selects one

    Example:
        >>> tracker = MemorySpaceTracker()
        >>> tracker.apply(MemorySpaceSwitch(MemorySpace.P))
        >>> tracker.current
        <MemorySpace.P: 4>
    """

    def __init__(self) -> None:
        self.current = MemorySpace.UNKNOWN

    def on_switch(self, space: MemorySpace) -> None:
        """Select a new memory space."""
        logger.debug(f"Memory space {self.current.name} -> {space.name}")
        self.current = space

    def on_reset(self) -> None:
        """Forget the active memory space."""
        if self.current.is_known():
            logger.debug(f"Memory space {self.current.name} reset")
        self.current = MemorySpace.UNKNOWN

    def apply(self, record: Record) -> None:
        """Update the active space from a record; data records leave it as is."""
        if isinstance(record, MemorySpaceSwitch):
            self.on_switch(record.space)
        elif isinstance(record, (EndOfFile, Unsupported)):
            self.on_reset()
        elif not isinstance(record, DataRecord):
            raise TypeError(f"Not a record: {record!r}")
