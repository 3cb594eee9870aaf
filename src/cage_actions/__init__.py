"""cage-actions: GitHub Actions glue for the cage deploy and audit CLI."""

__version__ = "0.1.0"
