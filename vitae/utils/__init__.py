"""
Shared utilities for VITAE.

Common functionality used across contexts:
- Logger setup with provenance
- Settings and path resolution
- HTML tree helpers
- Timestamps for log directories
"""

from vitae.utils.settings import get_settings
from vitae.utils.timestamp import now

__all__ = ["get_settings", "now"]
