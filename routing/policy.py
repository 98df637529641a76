"""
Purpose: Central configuration for talking to the routing service.
What it does:

Stores the knobs for the OSRM /route call:

BASE_URL (from .env / environment), profile, transport timeout,
overview/geometries/steps query values and the polyline precision.

Rule: No logic here, just parameters so you can tune without rewriting code.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Optional

from dotenv import load_dotenv

# Read OSRM base URL from environment
# Example in .env:
# OSRM_BASE_URL=http://router.project-osrm.org
load_dotenv()

DEFAULT_BASE_URL = "https://router.project-osrm.org"


class ConfigError(ValueError):
    """Raised when the routing configuration is unusable."""
    pass


def base_url_from_env() -> str:
    #OSRM_BASE_URL wins, BASE_URL kept for older .env files
    return os.getenv("OSRM_BASE_URL") or os.getenv("BASE_URL") or DEFAULT_BASE_URL


@dataclass(frozen=True)
class RoutingPolicy:
    """
    Central configuration for the route request.
    """

    base_url: str = field(default_factory=base_url_from_env)

    # --- Request shape ---
    # only the driving profile is used, other modes are out of scope
    profile: str = "driving"
    overview: str = "full"
    geometries: str = "polyline"
    steps: bool = False

    # --- Transport ---
    # None leaves the HTTP library default in place (no override)
    timeout: Optional[float] = None

    # --- Geometry decoding ---
    # polyline precision used by OSRM for geometries=polyline
    precision: int = 5

    def validate(self) -> None:
        """
        Basic sanity checks.
        """
        if not self.base_url or not self.base_url.strip():
            raise ConfigError("OSRM base URL not set. Please set OSRM_BASE_URL in the .env file.")

        if not self.base_url.startswith(("http://", "https://")):
            raise ConfigError(f"OSRM base URL must start with http:// or https://, got {self.base_url!r}")

        if not self.profile:
            raise ConfigError("profile must not be empty")

        if self.timeout is not None and self.timeout <= 0:
            raise ConfigError("timeout must be > 0 when set")

        if self.precision <= 0:
            raise ConfigError("precision must be > 0")

    def query_params(self) -> dict:
        """Query string for /route, OSRM wants lowercase booleans."""
        return {
            "overview": self.overview,
            "geometries": self.geometries,
            "steps": "true" if self.steps else "false",
        }


def default_routing_policy(**overrides) -> RoutingPolicy:
    """
    Convenience factory for the default policy.
    """
    p = RoutingPolicy(**overrides)
    p.validate()
    return p
