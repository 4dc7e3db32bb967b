"""
Custom exceptions for the PWR simulator library.
"""


class PWRSimulatorError(Exception):
    """Base exception for all simulator library errors."""
    pass


class ConfigurationError(PWRSimulatorError):
    """Invalid physics or simulation configuration."""

    def __init__(self, message: str, field: str = None):
        super().__init__(message)
        self.field = field


class InvalidCommandError(PWRSimulatorError):
    """Control command that cannot be applied in the current plant state."""
    pass


class UnknownVariableError(PWRSimulatorError):
    """Variable not tracked by the state metadata or trend history."""

    def __init__(self, variable_name: str):
        super().__init__(f"Variable not found: {variable_name}")
        self.variable_name = variable_name
