"""Represent records and trace values as strings for the trace, testing or debugging."""

import collections.abc
import io
import textwrap
from typing import Sequence, Union, Any, List

from inheritance_idioms.common import assert_never, indent_but_first_line
from inheritance_idioms.objects import Record, Constructor, ClassDeclaration

# We have to separate Stringifiable and Sequence[Stringifiable] since recursive types
# are not supported in mypy, see https://github.com/python/mypy/issues/731.
PrimitiveStringifiable = Union[
    bool, int, float, str, "Entity", "Property", "PropertyEllipsis", None
]

Stringifiable = Union[
    PrimitiveStringifiable,
    Sequence[PrimitiveStringifiable],
]


class Property:
    """Represent a property of an entity to be stringified."""

    def __init__(self, name: str, value: Stringifiable) -> None:
        self.name = name
        self.value = value

    def __repr__(self) -> str:
        return dump(self)


class PropertyEllipsis:
    """Represent a property whose value is not displayed."""

    def __init__(self, name: str, ignored_value: Any) -> None:
        """Initialize with the given values."""
        self.name = name

        # The ignored value is only used to distinguish ``None`` from the rest.
        self.ignored_value = ignored_value

    def __repr__(self) -> str:
        return dump(self)


class Entity:
    """Represent a stringifiable entity which is defined by its properties."""

    def __init__(
        self, name: str, properties: Sequence[Union[Property, PropertyEllipsis]]
    ) -> None:
        """Initialize with the given values."""
        self.name = name
        self.properties = properties

    def __repr__(self) -> str:
        return dump(self)


def dump(stringifiable: Stringifiable) -> str:
    """Produce a string representation of ``stringifiable`` for debugging or testing."""
    if isinstance(stringifiable, (bool, int, float)):
        return repr(stringifiable)

    elif isinstance(stringifiable, str):
        return repr(stringifiable)

    elif isinstance(stringifiable, Entity):
        if len(stringifiable.properties) == 0:
            return f"{stringifiable.name}()"

        writer = io.StringIO()
        writer.write(f"{stringifiable.name}(\n")

        for i, prop in enumerate(stringifiable.properties):
            if isinstance(prop, Property):
                value_str = dump(prop.value)
                writer.write(f"  {prop.name}={indent_but_first_line(value_str, '  ')}")
            elif isinstance(prop, PropertyEllipsis):
                value_str = "None" if prop.ignored_value is None else "..."
                writer.write(f"  {prop.name}={value_str}")
            else:
                assert_never(prop)

            if i == len(stringifiable.properties) - 1:
                writer.write(")")
            else:
                writer.write(",\n")

        return writer.getvalue()

    elif isinstance(stringifiable, collections.abc.Sequence):
        if len(stringifiable) == 0:
            return "[]"

        writer = io.StringIO()
        writer.write("[\n")
        for i, value in enumerate(stringifiable):
            writer.write(textwrap.indent(dump(value), "  "))

            if i == len(stringifiable) - 1:
                writer.write("]")
            else:
                writer.write(",\n")

        return writer.getvalue()

    elif stringifiable is None:
        return repr(None)

    elif isinstance(stringifiable, Property):
        value_str = dump(stringifiable.value)
        return f"Property({stringifiable.name}={indent_but_first_line(value_str, '')})"

    elif isinstance(stringifiable, PropertyEllipsis):
        value_str = "None" if stringifiable.ignored_value is None else "..."
        return f"PropertyEllipsis({stringifiable.name}={value_str})"

    else:
        assert_never(stringifiable)

    raise AssertionError("Should not have gotten here")


def record_to_entity(record: Record) -> Entity:
    """
    Convert the own members of ``record`` to a stringifiable entity.

    Callables and nested records are elided, while the prototype is shown by
    its label so that the absence of delegation is visible.
    """
    prototype_label = record.prototype.label if record.prototype is not None else None

    properties = [
        Property("prototype", prototype_label)
    ]  # type: List[Union[Property, PropertyEllipsis]]

    for name, value in record.own_items():
        if isinstance(value, (bool, int, float, str)) or value is None:
            properties.append(Property(name, value))

        elif isinstance(value, list) and all(isinstance(item, str) for item in value):
            properties.append(Property(name, list(value)))

        else:
            properties.append(PropertyEllipsis(name, value))

    return Entity(record.label, properties)


def dump_value(value: Any) -> str:
    """Render ``value`` on a single line of the trace."""
    if isinstance(value, str):
        return value

    elif isinstance(value, (bool, int, float)) or value is None:
        return repr(value)

    elif isinstance(value, (list, tuple)):
        return repr(list(value))

    elif isinstance(value, Record):
        return value.label

    elif isinstance(value, (Constructor, ClassDeclaration)):
        return value.name

    elif callable(value):
        return f"<method {getattr(value, '__name__', type(value).__name__)}>"

    else:
        return repr(value)
