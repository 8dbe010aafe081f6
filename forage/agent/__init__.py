"""
Multi-agent settings and agent id selection.
"""

from .config import MultiAgentConfig
from .selector import (
    AgentExchange, AgentIdSource, HeaderAgentSelector, PropertyAgentSelector,
    RouteIdAgentSelector, VariableAgentSelector, create_selector,
    resolve_agent_id, select_agent_id, undefined_agent_error
)

__all__ = [
    'MultiAgentConfig',
    'AgentExchange',
    'AgentIdSource',
    'HeaderAgentSelector',
    'PropertyAgentSelector',
    'RouteIdAgentSelector',
    'VariableAgentSelector',
    'create_selector',
    'resolve_agent_id',
    'select_agent_id',
    'undefined_agent_error'
]
