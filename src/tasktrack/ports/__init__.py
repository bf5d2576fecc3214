"""Ports - interfaces/protocols for external dependencies."""

from .task_gateway import GatewayError, TaskGateway

__all__ = [
    "GatewayError",
    "TaskGateway",
]
