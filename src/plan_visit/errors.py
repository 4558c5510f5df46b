from __future__ import annotations


class PlanVisitError(Exception):
    pass


class ConfigurationError(PlanVisitError):
    """Points to visit are not given as lat/lon pairs, or settings failed validation."""


class ActivationRejected(PlanVisitError):
    """Activation requested while the waypoint configuration is invalid."""
