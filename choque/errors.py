"""Exception types raised across the prober."""


class ChoqueError(Exception):
    """Base class for operator-facing failures."""


class ConfigError(ChoqueError):
    """The config file exists but cannot be read or parsed."""


class MissingArgumentError(ChoqueError):
    """A required command-line flag was not supplied or is malformed."""


class NoTargetsConfiguredError(ChoqueError):
    """The scheduler was started without any targets."""


class ReportError(ChoqueError):
    """The log file could not be read while building a report."""
