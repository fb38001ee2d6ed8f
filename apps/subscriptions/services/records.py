"""Field access shared by the engine functions.

Engine functions accept Subscription model instances as well as plain
mappings (e.g. ``queryset.values()`` rows or API payloads) carrying the
same field names.
"""

from collections.abc import Mapping


def field_value(record, name):
    """Read ``name`` from a model instance or a mapping."""
    if isinstance(record, Mapping):
        return record[name]
    return getattr(record, name)
