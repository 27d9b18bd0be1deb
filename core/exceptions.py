"""
core/exceptions.py
Error taxonomy for vehicle lookups
"""


class FleetFaultsError(Exception):
    """Base class for lookup failures."""


class ConfigurationError(FleetFaultsError):
    """A required credential is not configured."""


class UpstreamError(FleetFaultsError):
    """An upstream API answered with a non-success status."""

    def __init__(self, service: str, status: int, body: str = ""):
        self.service = service
        self.status = status
        self.body = body
        super().__init__(f"{service} request failed with status {status}")


class AdvisoryUnavailable(FleetFaultsError):
    """A text-generation provider could not produce an answer."""
