from __future__ import annotations


class DashboardError(Exception):
    """Base class for dashboard failures."""


class DatasetLoadError(DashboardError):
    """The titles file could not be read or parsed. Fatal to startup."""


class DashboardConfigError(DashboardError):
    """Filter controls cannot be derived from the loaded dataset."""


class DashboardStateError(DashboardError):
    """An event arrived while the dashboard was not ready."""
