"""
Frame scheduler for the pygame main loop.

Callbacks are requested for "the next frame" and receive an opaque
token that can be used to cancel them. The main loop calls
run_pending() once per display frame; anything requested while those
callbacks run waits for the following frame.
"""

import itertools
import logging

logger = logging.getLogger(__name__)


class FrameScheduler:

    def __init__(self):
        self._pending = {}  # token -> callback, in request order
        self._tokens = itertools.count(1)

    def request(self, callback):
        """Schedule callback for the next frame. Returns its token."""
        token = next(self._tokens)
        self._pending[token] = callback
        return token

    def cancel(self, token):
        """Drop a scheduled callback. Unknown or fired tokens are ignored."""
        self._pending.pop(token, None)

    def is_pending(self, token):
        return token in self._pending

    def __len__(self):
        return len(self._pending)

    def run_pending(self):
        """Fire every callback requested before this call. Returns the count."""
        due = list(self._pending)
        fired = 0
        for token in due:
            # An earlier callback this frame may have cancelled it
            callback = self._pending.pop(token, None)
            if callback is None:
                continue
            callback()
            fired += 1
        if fired:
            logger.debug("fired %d frame callback(s)", fired)
        return fired
