"""
Session Registry Module
One independent FatigueEngine per active detection session
"""

import logging

from fatigue_engine.engine import FatigueEngine
from fatigue_engine.errors import SessionExistsError, SessionNotFoundError

logger = logging.getLogger(__name__)


class SessionRegistry:
    """
    Maps session ids to their engines. Engines never share state; ending a
    session stops its engine and forgets it.
    """

    def __init__(self, engine_factory=FatigueEngine):
        """
        Args:
            engine_factory: Callable accepting session_id=... and returning
                            an uninitialized engine
        """
        self.engine_factory = engine_factory
        self._engines = {}

    def __len__(self):
        return len(self._engines)

    def __contains__(self, session_id):
        return session_id in self._engines

    def start(self, session_id, **engine_kwargs):
        """
        Create and initialize the engine of a new session.

        Raises:
            SessionExistsError: if the session is already active
        """
        if session_id in self._engines:
            raise SessionExistsError(f"Session already active: {session_id}")

        engine = self.engine_factory(session_id=session_id, **engine_kwargs)
        engine.initialize()
        self._engines[session_id] = engine
        logger.info("Started detection session %s (%d active)", session_id, len(self._engines))
        return engine

    def get(self, session_id):
        try:
            return self._engines[session_id]
        except KeyError:
            raise SessionNotFoundError(session_id) from None

    def reset(self, session_id):
        self.get(session_id).reset()

    def end(self, session_id):
        """Stop the session's engine and drop it from the registry."""
        engine = self.get(session_id)
        del self._engines[session_id]
        engine.stop()
        logger.info("Ended detection session %s (%d active)", session_id, len(self._engines))
        return engine

    def end_all(self):
        for session_id in list(self._engines):
            self.end(session_id)
