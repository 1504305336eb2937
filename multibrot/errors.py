"""Exceptions raised by the renderer. Every one of them is fatal to a run."""


class MultibrotError(Exception):
    pass


class ConfigurationError(MultibrotError, ValueError):
    """Invalid constants or process-group topology, detected at startup."""


class FrameWriteError(MultibrotError, OSError):
    """An output frame could not be written."""

    def __init__(self, path, reason):
        super().__init__(f"cannot write frame to {path}: {reason}")
        self.path = path


class CoordinationError(MultibrotError):
    """A worker broke the per-frame exchange."""


class CoordinationTimeout(CoordinationError, TimeoutError):
    pass
