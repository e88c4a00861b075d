"""Type model for Avro schemas as consumed by the TypeScript generators.

Schemas are kept in their parsed JSON shape. A type position holds one of:

- a primitive name (``"string"``, ``"int"``, ...),
- a reference to a named type (any other string),
- a record or enum definition (``dict`` with ``type`` of ``record``/``enum``),
- an array or map (``dict`` with ``type`` of ``array``/``map``),
- a union (``list`` of types).

The predicates below distinguish these cases. They carry no behavior beyond that.
"""

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Dict, Optional

from avsctots.fqnresolver import FqnResolver

PRIMITIVE_TYPES = ['string', 'boolean', 'long', 'int', 'double', 'float', 'bytes', 'null']


def unwrap_primitive(avro_type: Any) -> Any:
    """Return the primitive name for a ``{"type": "<primitive>"}`` wrapper, else the type unchanged."""
    if isinstance(avro_type, dict) and isinstance(avro_type.get('type'), str) and avro_type['type'] in PRIMITIVE_TYPES:
        return avro_type['type']
    return avro_type


def is_primitive(avro_type: Any) -> bool:
    return isinstance(unwrap_primitive(avro_type), str) and unwrap_primitive(avro_type) in PRIMITIVE_TYPES


def is_reference(avro_type: Any) -> bool:
    """A string in a type position that names a record or enum."""
    return isinstance(avro_type, str) and avro_type not in PRIMITIVE_TYPES


def is_record_type(avro_type: Any) -> bool:
    return isinstance(avro_type, dict) and avro_type.get('type') in ('record', 'error')


def is_enum_type(avro_type: Any) -> bool:
    return isinstance(avro_type, dict) and avro_type.get('type') == 'enum'


def is_array_type(avro_type: Any) -> bool:
    return isinstance(avro_type, dict) and avro_type.get('type') == 'array'


def is_map_type(avro_type: Any) -> bool:
    return isinstance(avro_type, dict) and avro_type.get('type') == 'map'


def is_union(avro_type: Any) -> bool:
    return isinstance(avro_type, list)


def is_optional(avro_type: Any) -> bool:
    """True for a union whose first alternative is ``null``."""
    return is_union(avro_type) and len(avro_type) > 0 and unwrap_primitive(avro_type[0]) == 'null'


def is_multi_union(avro_type: Any) -> bool:
    return is_union(avro_type) and len(avro_type) > 1


class EnumVariant(Enum):
    """Output strategy for Avro enums."""
    ENUM = 'ENUM'
    CONST_ENUM = 'CONST_ENUM'
    STRING = 'STRING'


@dataclass(frozen=True)
class Options:
    """Generation options. Built once per run and passed to every generator."""
    convert_enum_to_type: bool = False
    remove_namespace: bool = False
    enums: EnumVariant = EnumVariant.ENUM
    custom_mode: bool = False

    _CAMEL_KEYS = {
        'convertEnumToType': 'convert_enum_to_type',
        'removeNameSpace': 'remove_namespace',
        'customMode': 'custom_mode',
    }

    @property
    def enum_variant(self) -> EnumVariant:
        """The enum strategy actually in effect."""
        return EnumVariant.STRING if self.convert_enum_to_type else self.enums

    @classmethod
    def from_dict(cls, values: Optional[Dict[str, Any]] = None) -> 'Options':
        """Merge user supplied values (snake_case or the camelCase keys of the npm tool) over the defaults."""
        known = {f.name for f in fields(cls)}
        kwargs: Dict[str, Any] = {}
        for key, value in (values or {}).items():
            key = cls._CAMEL_KEYS.get(key, key)
            if key not in known or value is None:
                continue
            if key == 'enums':
                value = value if isinstance(value, EnumVariant) else EnumVariant(str(value).upper())
            else:
                value = bool(value)
            kwargs[key] = value
        return cls(**kwargs)


@dataclass
class GenerationContext:
    """Per-run state shared by the generators: the options, the resolver and the FQN lookup table."""
    options: Options = field(default_factory=Options)
    fqn_resolver: FqnResolver = field(default_factory=FqnResolver)
    name_to_type_mapping: Dict[str, Dict[str, Any]] = field(default_factory=dict)
