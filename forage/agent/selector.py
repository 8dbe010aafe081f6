"""
Agent id selection strategies.

The id of the agent handling an exchange is read from its route id, a
header, an exchange property or a variable, depending on the
``multi.agent.id.source`` setting.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

from forage.core.exceptions import ConfigurationError, UndefinedAgentError
from forage.logger import get_forage_logger
from .config import MultiAgentConfig

logger = get_forage_logger().bind(component="AgentIdSelector")


class AgentIdSource(Enum):
    """Where the agent id of an exchange is read from."""
    ROUTE_ID = "route-id"
    HEADER = "header"
    PROPERTY = "property"
    VARIABLE = "variable"

    @classmethod
    def from_value(cls, value: Optional[str]) -> "AgentIdSource":
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            raise ConfigurationError(
                "multi.agent.id.source", value,
                f"unknown agent ID source type, supported types are: {', '.join(s.value for s in cls)}"
            )


@dataclass
class AgentExchange:
    """The parts of a message exchange an agent id can be read from."""
    exchange_id: str = ""
    route_id: Optional[str] = None
    headers: Dict[str, Any] = field(default_factory=dict)
    properties: Dict[str, Any] = field(default_factory=dict)
    variables: Dict[str, Any] = field(default_factory=dict)


def _as_str(value: Any) -> Optional[str]:
    return None if value is None else str(value)


@dataclass(frozen=True)
class RouteIdAgentSelector:
    def select(self, exchange: AgentExchange) -> Optional[str]:
        return exchange.route_id


@dataclass(frozen=True)
class HeaderAgentSelector:
    header_name: str

    def select(self, exchange: AgentExchange) -> Optional[str]:
        return _as_str(exchange.headers.get(self.header_name))


@dataclass(frozen=True)
class PropertyAgentSelector:
    property_name: str

    def select(self, exchange: AgentExchange) -> Optional[str]:
        return _as_str(exchange.properties.get(self.property_name))


@dataclass(frozen=True)
class VariableAgentSelector:
    variable_name: str

    def select(self, exchange: AgentExchange) -> Optional[str]:
        return _as_str(exchange.variables.get(self.variable_name))


def _required(value: Optional[str], setting: str, source: AgentIdSource) -> str:
    if not value:
        raise ConfigurationError(setting, reason=f"must be configured when using {source.value} source type")
    return value


def create_selector(config: MultiAgentConfig):
    """Build the selector for the configured agent id source."""
    source = AgentIdSource.from_value(config.multi_agent_id_source())

    if source is AgentIdSource.ROUTE_ID:
        return RouteIdAgentSelector()
    elif source is AgentIdSource.HEADER:
        return HeaderAgentSelector(_required(
            config.multi_agent_id_source_header(), "multi.agent.id.source.header", source))
    elif source is AgentIdSource.PROPERTY:
        return PropertyAgentSelector(_required(
            config.multi_agent_id_source_property(), "multi.agent.id.source.property", source))
    elif source is AgentIdSource.VARIABLE:
        return VariableAgentSelector(_required(
            config.multi_agent_id_source_variable(), "multi.agent.id.source.variable", source))
    raise AssertionError(f"Unhandled agent id source {source}")


def select_agent_id(config: MultiAgentConfig, exchange: AgentExchange) -> Optional[str]:
    agent_id = create_selector(config).select(exchange)
    logger.info("Selected agent id", exchange_id=exchange.exchange_id, agent_id=agent_id)
    return agent_id


def undefined_agent_error(config: MultiAgentConfig, exchange: AgentExchange) -> UndefinedAgentError:
    """Describe where the agent id of ``exchange`` was looked for; unknown sources report the route id."""
    try:
        source = AgentIdSource.from_value(config.multi_agent_id_source())
    except ConfigurationError:
        source = AgentIdSource.ROUTE_ID

    if source is AgentIdSource.HEADER:
        name = config.multi_agent_id_source_header()
        value = _as_str(exchange.headers.get(name)) if name else None
        return UndefinedAgentError.from_header(name, value)
    elif source is AgentIdSource.PROPERTY:
        name = config.multi_agent_id_source_property()
        value = _as_str(exchange.properties.get(name)) if name else None
        return UndefinedAgentError.from_property(name, value)
    elif source is AgentIdSource.VARIABLE:
        name = config.multi_agent_id_source_variable()
        value = _as_str(exchange.variables.get(name)) if name else None
        return UndefinedAgentError.from_variable(name, value)
    return UndefinedAgentError.from_route_id(exchange.route_id)


def resolve_agent_id(config: MultiAgentConfig, exchange: AgentExchange) -> str:
    """
    Select the agent id and check it names a configured agent.

    Raises:
        UndefinedAgentError: If no id is found or it is not in ``multi.agent.names``
    """
    agent_id = select_agent_id(config, exchange)
    if agent_id is None or agent_id not in config.multi_agent_names():
        raise undefined_agent_error(config, exchange)
    return agent_id
