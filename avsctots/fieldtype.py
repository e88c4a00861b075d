""" TypeScript type expressions for Avro types in field positions """

from typing import Any

from avsctots.common import q_enum_name, q_interface_name, resolve_reference
from avsctots.errors import UnknownPrimitiveError, UnknownTypeError
from avsctots.model import (GenerationContext, is_array_type, is_enum_type, is_map_type,
                            is_multi_union, is_optional, is_primitive, is_record_type, is_reference, is_union,
                            unwrap_primitive)

PRIMITIVE_MAPPING = {
    'long': 'number',
    'int': 'number',
    'double': 'number',
    'float': 'number',
    'bytes': 'Buffer',
    'null': 'null',
    'boolean': 'boolean',
    'string': 'string',
}


def generate_primitive(avro_type: str) -> str:
    """ Map an Avro primitive to its TypeScript type """
    if avro_type not in PRIMITIVE_MAPPING:
        raise UnknownPrimitiveError(avro_type)
    return PRIMITIVE_MAPPING[avro_type]


def generate_field_type(avro_type: Any, context: GenerationContext) -> str:
    """ Generate the TypeScript type expression for ``avro_type`` """
    if is_primitive(avro_type):
        return generate_primitive(unwrap_primitive(avro_type))
    if is_reference(avro_type):
        return generate_field_type(resolve_reference(avro_type, context), context)
    if is_union(avro_type):
        return ' | '.join(generate_field_type(t, context) for t in avro_type)
    if is_record_type(avro_type):
        return q_interface_name(avro_type, context.options)
    if is_enum_type(avro_type):
        return q_enum_name(avro_type, context.options)
    if is_array_type(avro_type):
        if is_multi_union(avro_type['items']):
            return f"({generate_field_type(avro_type['items'], context)})[]"
        return f"{generate_field_type(avro_type['items'], context)}[]"
    if is_map_type(avro_type):
        return f"{{ [index:string]: {generate_field_type(avro_type['values'], context)} }}"
    raise UnknownTypeError(avro_type)


def generate_property_type(avro_type: Any, context: GenerationContext) -> str:
    """ Type of a declared property. Optional unions drop their leading null, the property itself is marked with ``?`` """
    if is_optional(avro_type) and len(avro_type) > 1:
        return generate_field_type(avro_type[1:], context)
    return generate_field_type(avro_type, context)
