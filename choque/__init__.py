"""Keep-alive HTTP prober with log-based reporting."""

__version__ = "1.0.0"
