"""
Multi-agent settings.
"""

from typing import List, Optional

from forage.config.core import Config, literal


class MultiAgentConfig(Config):
    """Agents available to a route and how the agent id is read from an exchange."""

    component_name = "forage-agent-factory"

    ENTRIES = {
        "multi.agent.names": None,
        "multi.agent.id.source": literal("route-id"),
        "multi.agent.id.source.header": None,
        "multi.agent.id.source.property": None,
        "multi.agent.id.source.variable": None,
    }

    def multi_agent_names(self) -> List[str]:
        return self.get_list("multi.agent.names")

    def multi_agent_id_source(self) -> str:
        return self.get("multi.agent.id.source")

    def multi_agent_id_source_header(self) -> Optional[str]:
        return self.get("multi.agent.id.source.header")

    def multi_agent_id_source_property(self) -> Optional[str]:
        return self.get("multi.agent.id.source.property")

    def multi_agent_id_source_variable(self) -> Optional[str]:
        return self.get("multi.agent.id.source.variable")
