"""Application services."""
from .routing_orchestrator import RoutingOrchestrator, RoutingResult

__all__ = ['RoutingOrchestrator', 'RoutingResult']
