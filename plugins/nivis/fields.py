"""
Field selection: which engine accessor produces the buffer for a field.
"""

from .errors import UnknownField
from .parameters import FieldKind

FIELD_ACCESSORS = {
    FieldKind.PHI: lambda engine: engine.get_phi_buffer(),
    FieldKind.TEMPERATURE: lambda engine: engine.get_temperature_buffer(),
}


class FieldSelector:
    """Closed FieldKind -> accessor table."""

    def __init__(self, accessors=None):
        self.accessors = dict(accessors or FIELD_ACCESSORS)
        missing = [kind for kind in FieldKind if kind not in self.accessors]
        if missing:
            raise UnknownField(f"no accessor for {missing}")

    def fetch(self, field, engine):
        """Return the pixel buffer for field from engine."""
        try:
            accessor = self.accessors[FieldKind.coerce(field)]
        except KeyError:
            raise UnknownField(f"unknown field: {field!r}") from None
        return accessor(engine)
