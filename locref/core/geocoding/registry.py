"""Geocoding backend registry.

Maps the configured backend identity to an instance. A backend is named
either by a registered short name or by a ``module:Class`` path.
"""

import importlib
import inspect

from locref.core.config import Settings
from locref.core.exceptions import BackendConfigurationError
from locref.core.geocoding.base import GeocodingBackend

BACKENDS: dict[str, str] = {
    "standard": "locref.core.geocoding.base:StandardGeocodingBackend",
    "geopy": "locref.core.geocoding.geopy_backend:GeopyGeocodingBackend",
}


def load_backend_class(name: str) -> type[GeocodingBackend]:
    """Import the backend class registered under ``name``.

    Raises:
        BackendConfigurationError: If the name cannot be resolved to a
            ``GeocodingBackend`` subclass
    """
    path = BACKENDS.get(name.strip().lower(), name.strip())
    module_name, _, class_name = path.partition(":")
    if not module_name or not class_name:
        raise BackendConfigurationError(
            f"Unknown geocoding backend {name!r}; use one of "
            f"{sorted(BACKENDS)} or a 'module:Class' path"
        )

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise BackendConfigurationError(
            f"Cannot import geocoding backend module {module_name!r}: {e}"
        ) from e

    backend_class = getattr(module, class_name, None)
    if not (
        inspect.isclass(backend_class) and issubclass(backend_class, GeocodingBackend)
    ):
        raise BackendConfigurationError(
            f"{path!r} is not a GeocodingBackend subclass"
        )
    return backend_class


def get_backend(name: str, settings: Settings | None = None) -> GeocodingBackend:
    """Create the backend registered under ``name``.

    Backends whose constructor accepts a ``settings`` argument receive the
    given settings.
    """
    backend_class = load_backend_class(name)
    if "settings" in inspect.signature(backend_class.__init__).parameters:
        return backend_class(settings=settings)
    return backend_class()
