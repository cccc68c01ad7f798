"""Locations derived from a parent entity.

Objects using ``ParentLocatable`` take their geometry from their parent, if
there is one, and describe that with a ``DERIVED`` location reference.
The host class provides ``parent``, ``geometry``, ``location_reference`` and
``location_reference_format`` attributes.
"""

from typing import Any

DERIVED_FORMAT = "DERIVED"
NULL_FORMAT = "NULL"
DERIVED_REFERENCE = "Derived from parent"


class ParentLocatable:
    """Mixin for objects whose location comes from their parent."""

    parent: Any = None
    geometry: Any = None
    location_reference: str | None = None
    location_reference_format: str | None = None

    def derive_geometry(self) -> None:
        """Copy the parent's geometry; keep the current one without a parent."""
        if self.parent is not None:
            self.geometry = self.parent.geometry

    def set_location_reference(self) -> None:
        if self.parent is None:
            self.location_reference_format = NULL_FORMAT
            self.location_reference = None
        else:
            self.location_reference_format = DERIVED_FORMAT
            self.location_reference = DERIVED_REFERENCE
