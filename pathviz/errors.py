# pathviz/errors.py


class PathvizError(Exception):
    """Base class for every error raised by pathviz."""


class RunRejected(PathvizError):
    """A request was refused before anything changed (missing endpoint, run in progress, ...)."""


class SnapshotError(PathvizError, ValueError):
    """Snapshot data is malformed or does not fit the grid."""


class ConfigError(PathvizError, ValueError):
    pass
