"""Wall clock abstraction.

All persisted timestamps are integer epoch seconds.
"""

import time


class Clock:
    """System clock returning epoch seconds."""

    def now(self) -> int:
        """Current time as integer epoch seconds."""
        return int(time.time())
