"""
Purpose: Orchestrator for the marker/route page (the "glue").
What it does:
Owns the MarkerStore and the RouteDisplay. Map clicks, "Remove Marker" and
"Calculate Distance" come in as method calls; whenever the first two markers
change (or the user asks) the route is resolved in the background and the
display is replaced with the answer.

Rule: Only the first two markers are ever routed.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from typing import Callable, List, Optional

from markers.models import GeoPoint, Marker
from markers.store import MarkerStore
from mapview.display import INSUFFICIENT_MARKERS_NOTICE, RouteDisplay
from mapview.route_state import (
    RouteState,
    transition_to_idle,
    transition_to_pending,
    transition_to_resolved,
)
from routing.route_service import Route, RouteResolver

logger = logging.getLogger(__name__)

#anything with resolve(origin, destination) semantics works, RouteResolver is the real one
Resolve = Callable[[GeoPoint, GeoPoint], Optional[Route]]


class InsufficientMarkersError(Exception):
    """Calculate was pressed with fewer than two markers. Shown to the user, not a crash."""

    def __init__(self, message: str = INSUFFICIENT_MARKERS_NOTICE):
        super().__init__(message)
        self.notice = message


class RouteController:
    """
    Single owner of the marker list and the route overlay.

    Every method that starts a resolution returns its Future so callers can
    wait on it; the display itself is replaced from the worker when the
    answer lands. Each resolution carries a token, and an answer whose token
    was superseded by a newer trigger (or by a clear) is dropped instead of
    overwriting the display with an outdated route.
    """

    def __init__(
        self,
        resolver: Optional[Resolve] = None,
        store: Optional[MarkerStore] = None,
        executor: Optional[Executor] = None,
    ):
        self.store = store or MarkerStore()
        self.resolve: Resolve = resolver or RouteResolver()
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(max_workers=1, thread_name_prefix="route-resolver")

        self._state = RouteState.IDLE
        self._display: Optional[RouteDisplay] = None
        self._token = 0
        self._lock = threading.Lock() # guards state/display/token against the resolver worker

    #----------------
    # read-only projection
    #----------------
    @property
    def state(self) -> RouteState:
        return self._state

    @property
    def display(self) -> Optional[RouteDisplay]:
        return self._display

    def markers(self) -> List[Marker]:
        return self.store.markers()

    #----------------
    # user events
    #----------------
    def add(self, point: GeoPoint) -> Optional[Future]:
        """
        Map click. Appending never changes markers 0/1 once they exist, so
        only the click that creates the second marker starts a resolution.
        """
        self.store.add(point)
        if self._state == RouteState.IDLE and len(self.store) >= 2:
            return self._start_resolution(clear_display=True)
        return None

    def remove_at(self, index: int) -> Optional[Future]:
        """
        "Remove Marker" button.

        Raises:
            MarkerIndexError: index does not address a marker.
        """
        self.store.remove_at(index)

        if len(self.store) < 2:
            self._clear()
            return None

        if index < 2:
            #the first two changed: drop the old overlay before asking again
            return self._start_resolution(clear_display=True)
        return None

    def calculate(self) -> Future:
        """
        "Calculate Distance" button: re-resolve the current first two.
        The current overlay stays up until the new answer replaces it.

        Raises:
            InsufficientMarkersError: fewer than two markers.
        """
        if len(self.store) < 2:
            logger.info("Calculate requested with %d marker(s)", len(self.store))
            raise InsufficientMarkersError()
        return self._start_resolution(clear_display=False)

    #----------------
    # internals
    #----------------
    def _clear(self) -> None:
        with self._lock:
            self._token += 1 # anything still in flight is now stale
            self._state = transition_to_idle(self._state, len(self.store))
            self._display = None
        logger.debug("Route display cleared, %d marker(s) left", len(self.store))

    def _start_resolution(self, clear_display: bool) -> Future:
        origin, destination = self.store.first_pair()
        with self._lock:
            self._token += 1
            token = self._token
            self._state = transition_to_pending(self._state, len(self.store))
            if clear_display:
                self._display = None

        logger.debug("Resolving route #%d %s -> %s", token, origin, destination)
        return self._executor.submit(self._resolve_and_apply, token, origin, destination)

    def _resolve_and_apply(self, token: int, origin: GeoPoint, destination: GeoPoint) -> Optional[Route]:
        try:
            route = self.resolve(origin, destination)
        except Exception:
            logger.exception("Resolver crashed for route #%d %s -> %s", token, origin, destination)
            with self._lock:
                if token == self._token:
                    self._state = transition_to_resolved(self._state, route_found=False)
            raise

        with self._lock:
            if token != self._token:
                logger.debug("Discarding stale route #%d (latest is #%d)", token, self._token)
                return route

            self._state = transition_to_resolved(self._state, route_found=route is not None)
            if route is not None:
                self._display = RouteDisplay.from_route(route)
            else:
                #marker mutations already cleared the overlay; calculate keeps the last good one
                logger.warning("No route between %s and %s", origin, destination)
        return route

    def close(self) -> None:
        if self._owns_executor:
            self._executor.shutdown(wait=True)

    def __enter__(self) -> RouteController:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
