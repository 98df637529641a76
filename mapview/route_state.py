from enum import Enum


class RouteState(Enum):
    IDLE = "IDLE"                   # 0 or 1 marker, no route
    ROUTE_PENDING = "ROUTE_PENDING" # >= 2 markers, resolution in flight
    ROUTE_READY = "ROUTE_READY"     # last resolution succeeded
    ROUTE_FAILED = "ROUTE_FAILED"   # last resolution came back empty


class RouteStateError(Exception):
    """Raised when an invalid state transition is attempted."""
    pass


def transition_to_pending(state: RouteState, marker_count: int) -> RouteState:
    """
    Called whenever the first two markers need a (new) route: the second
    marker was just added, marker 0/1 was removed, or the user hit calculate.
    Allowed from every state as long as there is something to route.
    """
    if marker_count < 2:
        raise RouteStateError(
            f"Cannot transition to {RouteState.ROUTE_PENDING.value} from {state.value} with {marker_count} markers"
        )
    return RouteState.ROUTE_PENDING


def transition_to_resolved(state: RouteState, route_found: bool) -> RouteState:
    """
    Called when the resolver answers. Only a pending resolution can land.
    """
    if state != RouteState.ROUTE_PENDING:
        raise RouteStateError(f"No resolution in flight. Current: {state.value}")
    return RouteState.ROUTE_READY if route_found else RouteState.ROUTE_FAILED


def transition_to_idle(state: RouteState, marker_count: int) -> RouteState:
    """
    Fewer than two markers left: whatever was shown goes away.
    """
    if marker_count >= 2:
        raise RouteStateError(
            f"Cannot go {RouteState.IDLE.value} from {state.value} with {marker_count} markers"
        )
    return RouteState.IDLE
