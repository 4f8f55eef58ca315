"""
Alert definition management CLI.

List, filter, enable/disable, delete and copy alert definitions across domains.
"""

__version__ = "0.1.0"

from alertdefs.config import Cloud, RunConfig

# Configure structlog once at import time (quiet by default).
from alertdefs.logging import configure_structlog

configure_structlog()

__all__ = [
    "Cloud",
    "RunConfig",
    "__version__",
]
