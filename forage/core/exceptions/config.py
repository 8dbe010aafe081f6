"""
Configuration resolution exceptions.
"""

from .base import ConfigurationError


class MissingConfigurationError(ConfigurationError):
    """
    Raised when a required setting resolved to nothing after the full tier walk.

    Carries both spellings of the setting so the operator can set either the
    property or the environment variable.
    """

    def __init__(self, property_name: str, env_name: str, message: str = None):
        self.property_name = property_name
        self.env_name = env_name
        reason = message or "Missing required configuration"
        reason += f" (set property '{property_name}' or environment variable '{env_name}')"
        super().__init__(config_key=property_name, reason=reason)
