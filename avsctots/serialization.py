"""
Generation of the static ``serialize`` and ``deserialize`` methods of record classes.

Values cross the wire as plain JSON-compatible objects. Union values are tagged:
``null`` stays ``null`` and any other alternative is wrapped in a single-key object
whose key names the alternative, e.g. ``{ "string": "x" }`` or
``{ "com.example.Address": {...} }``.

Both directions compile a union into an ordered list of ``Branch`` entries and
render that list as an ``if / else if`` chain. The first matching branch wins,
so alternative order in the schema decides ambiguous cases.
"""

# pylint: disable=line-too-long

from dataclasses import dataclass
from typing import Any, Dict, List

from avsctots.common import (as_self_executing, class_name, get_type_name, indent, join_conditional, q_class_name,
                             qualified_name, resolve_reference)
from avsctots.errors import UnknownPrimitiveError, UnknownTypeError
from avsctots.fieldtype import generate_field_type
from avsctots.model import (GenerationContext, is_array_type, is_enum_type, is_map_type, is_multi_union, is_optional,
                            is_primitive, is_record_type, is_reference, is_union, unwrap_primitive)

UNRESOLVABLE_TYPE_MESSAGE = 'Unresolvable type'
UNSERIALIZABLE_TYPE_MESSAGE = 'Unserializable type!'


@dataclass(frozen=True)
class Branch:
    """One entry of a union dispatch table."""
    condition: str
    body: str


def render_dispatch(branches: List[Branch], error_message: str) -> str:
    """Render a dispatch table as a self executing function that throws when nothing matches."""
    chain = join_conditional([(branch.condition, branch.body) for branch in branches])
    return as_self_executing(f"{chain}\nthrow new TypeError('{error_message}')")


def local_name(name: str, depth: int) -> str:
    """Variable names of nested conversions get a depth suffix so inner scopes never shadow outer ones."""
    return name if depth == 0 else f"{name}{depth}"


def union_key(avro_type: Any, context: GenerationContext) -> str:
    """The expression of the tag that identifies ``avro_type`` inside a tagged union value."""
    if is_reference(avro_type):
        return union_key(resolve_reference(avro_type, context), context)
    if is_record_type(avro_type):
        return f"{q_class_name(avro_type, context.options)}.FQN"
    if is_enum_type(avro_type):
        return f"'{qualified_name(avro_type)}'"
    type_name = get_type_name(avro_type, context)
    if type_name is None:
        raise UnknownTypeError(avro_type)
    return f"'{type_name}'"


def null_branch(input_var: str, optional: bool) -> Branch:
    """Optional fields treat a missing value like null; null on the wire becomes an omitted property."""
    if optional:
        return Branch(f"{input_var} == null", "return undefined")
    return Branch(f"{input_var} === null", "return null")


def non_null_alternatives(avro_type: List[Any]) -> List[Any]:
    return [t for t in avro_type if unwrap_primitive(t) != 'null']


def has_null_alternative(avro_type: List[Any]) -> bool:
    return len(non_null_alternatives(avro_type)) != len(avro_type)


def map_conversion(avro_type: Dict[str, Any], input_var: str, output_type: str, value_conversion, depth: int) -> str:
    """Statements that convert every value of a map into a fresh output object."""
    keys = local_name('keys', depth)
    output = local_name('output', depth)
    map_key = local_name('mapKey', depth)
    map_value = local_name('mapValue', depth)
    converted = value_conversion(avro_type['values'], map_value, depth + 1)
    loop_body = f"const {map_value} = {input_var}[{map_key}]\n{output}[{map_key}] = {converted}"
    return as_self_executing(
        f"const {keys} = Object.keys({input_var})\n"
        f"const {output}: {output_type} = {{}}\n"
        f"for (const {map_key} of {keys}) {{\n{indent(loop_body)}\n}}\n"
        f"return {output}")


def array_conversion(avro_type: Dict[str, Any], input_var: str, element_conversion, depth: int) -> str:
    """Map every element of an array through ``element_conversion``."""
    element = local_name('e', depth)
    converted = element_conversion(avro_type['items'], element, depth + 1)
    if is_multi_union(avro_type['items']):
        return f"{input_var}.map(({element}: any) => {{\n{indent('return ' + converted)}\n}})"
    return f"{input_var}.map(({element}: any) => {converted})"


def generate_deserialize_value(avro_type: Any, context: GenerationContext, input_var: str, depth: int = 0, optional: bool = False) -> str:
    """Expression converting the wire value in ``input_var`` into its class-side value."""
    def convert(inner_type, inner_var, inner_depth):
        return generate_deserialize_value(inner_type, context, inner_var, inner_depth)

    if is_reference(avro_type):
        return generate_deserialize_value(resolve_reference(avro_type, context), context, input_var, depth, optional)
    if is_primitive(avro_type) or is_enum_type(avro_type):
        return input_var
    if is_record_type(avro_type):
        return f"{q_class_name(avro_type, context.options)}.deserialize({input_var})"
    if is_array_type(avro_type):
        return array_conversion(avro_type, input_var, convert, depth)
    if is_map_type(avro_type):
        return map_conversion(avro_type, input_var, generate_field_type(avro_type, context), convert, depth)
    if is_union(avro_type):
        if len(avro_type) == 1:
            return generate_deserialize_value(avro_type[0], context, input_var, depth, optional)
        branches = []
        if has_null_alternative(avro_type):
            branches.append(null_branch(input_var, optional))
        for alternative in non_null_alternatives(avro_type):
            tagged = f"{input_var}[{union_key(alternative, context)}]"
            branches.append(Branch(
                f"{tagged} !== undefined",
                f"return {generate_deserialize_value(alternative, context, tagged, depth)}"))
        return render_dispatch(branches, UNRESOLVABLE_TYPE_MESSAGE)
    raise UnknownTypeError(avro_type)


def generate_serialize_condition(avro_type: Any, context: GenerationContext, input_var: str) -> str:
    """Runtime test recognizing a class-side value of ``avro_type``."""
    if is_reference(avro_type):
        return generate_serialize_condition(resolve_reference(avro_type, context), context, input_var)
    if is_primitive(avro_type):
        primitive = unwrap_primitive(avro_type)
        if primitive in ('string', 'boolean'):
            return f"typeof {input_var} === '{primitive}'"
        if primitive in ('int', 'long'):
            return f"Number.isInteger({input_var})"
        if primitive in ('float', 'double'):
            return f"typeof {input_var} === 'number'"
        if primitive == 'bytes':
            return f"Buffer.isBuffer({input_var})"
        if primitive == 'null':
            return f"{input_var} === null"
        raise UnknownPrimitiveError(primitive)
    if is_array_type(avro_type):
        return f"Array.isArray({input_var})"
    if is_record_type(avro_type):
        return f"{input_var} instanceof {q_class_name(avro_type, context.options)}"
    if is_enum_type(avro_type):
        symbols = ', '.join(f"'{s}'" for s in avro_type.get('symbols', []))
        return f"typeof {input_var} === 'string' && [{symbols}].indexOf({input_var}) >= 0"
    if is_map_type(avro_type):
        return f"typeof {input_var} === 'object' && {input_var} !== null && Object.getPrototypeOf({input_var}) === Object.prototype"
    raise UnknownTypeError(avro_type)


def generate_union_wrapper(avro_type: Any, context: GenerationContext, input_var: str, depth: int) -> str:
    """Statement returning the tagged wire value for one union alternative."""
    if is_reference(avro_type):
        return generate_union_wrapper(resolve_reference(avro_type, context), context, input_var, depth)
    key = union_key(avro_type, context)
    if is_record_type(avro_type):
        key = f"[{key}]"
    return f"return {{ {key}: {generate_serialize_value(avro_type, context, input_var, depth)} }}"


def generate_serialize_value(avro_type: Any, context: GenerationContext, input_var: str, depth: int = 0, optional: bool = False) -> str:
    """Expression converting the class-side value in ``input_var`` into its wire value."""
    def convert(inner_type, inner_var, inner_depth):
        return generate_serialize_value(inner_type, context, inner_var, inner_depth)

    if is_reference(avro_type):
        return generate_serialize_value(resolve_reference(avro_type, context), context, input_var, depth, optional)
    if is_primitive(avro_type) or is_enum_type(avro_type):
        return input_var
    if is_record_type(avro_type):
        return f"{q_class_name(avro_type, context.options)}.serialize({input_var})"
    if is_array_type(avro_type):
        return array_conversion(avro_type, input_var, convert, depth)
    if is_map_type(avro_type):
        return map_conversion(avro_type, input_var, 'any', convert, depth)
    if is_union(avro_type):
        if len(avro_type) == 1:
            return generate_serialize_value(avro_type[0], context, input_var, depth, optional)
        branches = []
        if has_null_alternative(avro_type):
            branch = null_branch(input_var, optional)
            branches.append(Branch(branch.condition, "return null"))
        for alternative in non_null_alternatives(avro_type):
            branches.append(Branch(
                generate_serialize_condition(alternative, context, input_var),
                generate_union_wrapper(alternative, context, input_var, depth)))
        return render_dispatch(branches, UNSERIALIZABLE_TYPE_MESSAGE)
    raise UnknownTypeError(avro_type)


def generate_field_assignments(avro_schema: Dict[str, Any], generate_value) -> str:
    """One ``name: value,`` line per field of the record."""
    assignments = []
    for field in avro_schema.get('fields', []):
        value = generate_value(field['type'], f"input.{field['name']}", is_optional(field['type']))
        assignments.append(f"{field['name']}: {value},")
    return '\n'.join(assignments)


def generate_deserialize(avro_schema: Dict[str, Any], context: GenerationContext) -> str:
    """The static ``deserialize`` method of a record class."""
    name = class_name(avro_schema)
    assignments = generate_field_assignments(
        avro_schema, lambda t, var, optional: generate_deserialize_value(t, context, var, optional=optional))
    body = f"return new {name}({{\n{indent(assignments)}\n}})" if assignments else f"return new {name}({{}})"
    return f"public static deserialize(input: any): {name} {{\n{indent(body)}\n}}"


def generate_serialize(avro_schema: Dict[str, Any], context: GenerationContext) -> str:
    """The static ``serialize`` method of a record class."""
    name = class_name(avro_schema)
    assignments = generate_field_assignments(
        avro_schema, lambda t, var, optional: generate_serialize_value(t, context, var, optional=optional))
    body = f"return {{\n{indent(assignments)}\n}}" if assignments else "return {}"
    return f"public static serialize(input: {name}): object {{\n{indent(body)}\n}}"
