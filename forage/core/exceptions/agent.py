"""
Agent selection exceptions.
"""

from typing import Optional

from .base import NotFoundError


class UndefinedAgentError(NotFoundError):
    """Raised when no agent is configured for the id extracted from an exchange."""

    def __init__(self, source: str, source_name: Optional[str] = None, agent_id: Optional[str] = None):
        self.source = source
        self.source_name = source_name
        self.agent_id = agent_id
        identifier = f"{source}"
        if source_name:
            identifier += f" {source_name}"
        identifier += f"={agent_id}"
        super().__init__("Agent", identifier)

    @classmethod
    def from_route_id(cls, route_id: Optional[str]) -> "UndefinedAgentError":
        return cls("route-id", agent_id=route_id)

    @classmethod
    def from_header(cls, header_name: str, value: Optional[str]) -> "UndefinedAgentError":
        return cls("header", header_name, value)

    @classmethod
    def from_property(cls, property_name: str, value: Optional[str]) -> "UndefinedAgentError":
        return cls("property", property_name, value)

    @classmethod
    def from_variable(cls, variable_name: str, value: Optional[str]) -> "UndefinedAgentError":
        return cls("variable", variable_name, value)
