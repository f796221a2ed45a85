from __future__ import annotations


class ConfigurationError(ValueError):
    """Raised when a process or engine configuration is rejected."""


class WorkloadError(ValueError):
    """Raised when a workload source cannot be turned into processes."""
