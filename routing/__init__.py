#Marks routing as a package.
#Re-exports clean public APIs (e.g., OSRMClient, RouteResolver, Route)
#so other modules import from routing without knowing internal file names.
#No business logic.

from .policy import RoutingPolicy, ConfigError, default_routing_policy
from .osrm_client import (
    OSRMClient,
    RoutingError,
    RoutingUnavailableError,
    RoutingEmptyError,
)
from .route_service import Route, RouteResolver, decode_geometry

__all__ = [
    "RoutingPolicy",
    "ConfigError",
    "default_routing_policy",
    "OSRMClient",
    "RoutingError",
    "RoutingUnavailableError",
    "RoutingEmptyError",
    "Route",
    "RouteResolver",
    "decode_geometry",
]
