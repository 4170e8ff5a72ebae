from types import MappingProxyType

from .exceptions import MediaInfoError


class Section:
    """
    Field/value pairs of one block of a mediainfo report

    Fields are always listed in field name order.
    """

    def __init__(self):
        self._field_to_value = dict()
        self._sealed = False

    def add_field_value(self, field, value):
        if self._sealed:
            raise MediaInfoError("Section is read-only, cannot set " + field)
        self._field_to_value[field] = value

    def seal(self):
        # called once the document is built
        self._sealed = True

    @property
    def sealed(self):
        return self._sealed

    @property
    def field_values(self):
        """
        Read-only mapping of field to value, sorted by field name
        """
        return MappingProxyType(
            {field: self._field_to_value[field] for field in self.field_names}
        )

    @property
    def field_names(self):
        return sorted(self._field_to_value)

    @property
    def values(self):
        return [self._field_to_value[field] for field in self.field_names]

    def get_field_value(self, field, default=None):
        return self._field_to_value.get(field, default)

    def has_field(self, field):
        return field in self._field_to_value

    def __contains__(self, field):
        return self.has_field(field)

    def __iter__(self):
        return iter(self.field_names)

    def __len__(self):
        return len(self._field_to_value)

    def __eq__(self, other):
        if not isinstance(other, Section):
            return NotImplemented
        return self._field_to_value == other._field_to_value

    def __repr__(self):
        return "Section(" + repr(dict(self.field_values)) + ")"
