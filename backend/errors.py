from __future__ import annotations


class DashboardError(Exception):
    """Base class for backend errors."""


class ProbeUnavailableError(DashboardError):
    """A host probe (bootc, version file) could not produce a result."""


class UpdateStatusError(DashboardError):
    """The update-status verdict could not be computed."""
