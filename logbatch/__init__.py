"""Client-side log batching: buffer structured events and ship them in payloads.

Module-level functions operate on a default process-wide agent. Construct a
``LoggingAgent`` directly for an independent buffer and configuration.
"""

from typing import Any, Mapping, Optional

from logbatch.agent import AgentState, LoggingAgent
from logbatch.config import AgentConfig, load_config, load_yaml_config
from logbatch.logger import Logger
from logbatch.merge import merge
from logbatch.sender import HTTPSender, Sender

__all__ = [
    "AgentConfig",
    "AgentState",
    "HTTPSender",
    "Logger",
    "LoggingAgent",
    "Sender",
    "configure",
    "create_logger",
    "flush",
    "get_agent",
    "load_config",
    "load_yaml_config",
    "merge",
    "shutdown",
]

_default_agent = LoggingAgent()


def get_agent() -> LoggingAgent:
    """Return the process-wide default agent."""
    return _default_agent


def configure(config: Optional[AgentConfig] = None, **options: Any) -> AgentConfig:
    return _default_agent.configure(config, **options)


def create_logger(name: str, fields: Optional[Mapping[str, Any]] = None) -> Logger:
    return _default_agent.create_logger(name, fields)


async def flush():
    """Send all pending logs. Await this before the process exits."""
    await _default_agent.flush()


async def shutdown():
    await _default_agent.shutdown()
