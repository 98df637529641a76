#Marks markers as a package.
#Re-exports the point/marker models and the ordered store so callers
#do not need to know the internal file names.
#No business logic.

from .models import GeoPoint, Marker
from .store import MarkerStore, MarkerIndexError

__all__ = [
    "GeoPoint",
    "Marker",
    "MarkerStore",
    "MarkerIndexError",
]
