"""TribeTask - Backend simulado con persistencia local."""

__version__ = "1.0.0"
