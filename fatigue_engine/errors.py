"""
Exception hierarchy for the fatigue engine.

Missing landmarks and missing faces are never errors; these exceptions are
raised for caller bugs (lifecycle or session misuse) and for a camera
that cannot be opened at all.
"""


class FatigueEngineError(Exception):
    """Base class for all fatigue engine errors."""


class EngineLifecycleError(FatigueEngineError, RuntimeError):
    """An engine operation was called in a state that does not allow it."""


class EngineNotStartedError(EngineLifecycleError):
    """Raised when the engine is used before initialize()."""


class EngineStoppedError(EngineLifecycleError):
    """Raised when the engine is used after stop()."""


class SessionExistsError(FatigueEngineError):
    """Raised when starting a session id that is already active."""


class SessionNotFoundError(FatigueEngineError, KeyError):
    """Raised when a session id has no active engine."""


class CameraUnavailableError(FatigueEngineError, RuntimeError):
    """Raised when no camera index or backend yields frames."""
