""" Declarations for Avro enums and records: TypeScript enums, interfaces and classes """

# pylint: disable=line-too-long

import logging
from typing import Any, Dict, List

from avsctots.common import class_name, enum_name, interface_name, process_template, qualified_name
from avsctots.fieldtype import generate_property_type
from avsctots.model import EnumVariant, GenerationContext, is_optional
from avsctots.serialization import generate_deserialize, generate_serialize

logger = logging.getLogger(__name__)


def generate_enum_type(avro_schema: Dict[str, Any], context: GenerationContext) -> str:
    """Generate the declaration for an Avro enum in the configured output style."""
    variant = context.options.enum_variant
    logger.debug("Generating %s declaration for enum %s", variant.value, qualified_name(avro_schema))
    if variant == EnumVariant.STRING:
        return process_template(
            "avrotots/string_union.ts.jinja",
            enum_name=enum_name(avro_schema),
            symbols=avro_schema.get('symbols', []),
        )
    return process_template(
        "avrotots/enum.ts.jinja",
        enum_name=enum_name(avro_schema),
        symbols=avro_schema.get('symbols', []),
        const=variant == EnumVariant.CONST_ENUM,
    )


def generate_field_declarations(avro_schema: Dict[str, Any], context: GenerationContext) -> List[Dict[str, Any]]:
    """Name, type and optionality of every field, in declaration order."""
    return [{
        'name': field['name'],
        'type': generate_property_type(field['type'], context),
        'optional': is_optional(field['type']),
    } for field in avro_schema.get('fields', [])]


def generate_interface(avro_schema: Dict[str, Any], context: GenerationContext) -> str:
    """Generate the interface describing the plain shape of an Avro record."""
    logger.debug("Generating interface for record %s", qualified_name(avro_schema))
    return process_template(
        "avrotots/interface.ts.jinja",
        interface_name=interface_name(avro_schema, context.options),
        fields=generate_field_declarations(avro_schema, context),
    )


def generate_class(avro_schema: Dict[str, Any], context: GenerationContext) -> str:
    """Generate the class implementing a record's interface, with static serialize and deserialize methods."""
    logger.debug("Generating class for record %s", qualified_name(avro_schema))
    return process_template(
        "avrotots/class.ts.jinja",
        class_name=class_name(avro_schema),
        interface_name=interface_name(avro_schema, context.options),
        fqn=qualified_name(avro_schema),
        fields=generate_field_declarations(avro_schema, context),
        deserialize=generate_deserialize(avro_schema, context),
        serialize=generate_serialize(avro_schema, context),
    )


def generate_namespace_block(namespace: str, declarations: List[str]) -> str:
    """Wrap the declarations of one namespace in a TypeScript namespace."""
    return process_template(
        "avrotots/namespace.ts.jinja",
        namespace=namespace,
        body='\n\n'.join(declarations),
    )
