"""
Common utility functions for avsctots.
"""

# pylint: disable=line-too-long

import os
from collections import OrderedDict
from typing import Any, Dict, List, Optional, Sequence, Tuple

import jinja2

from avsctots.errors import UnresolvedReferenceError
from avsctots.model import (GenerationContext, Options, is_array_type, is_enum_type, is_map_type, is_primitive,
                            is_record_type, is_reference, unwrap_primitive)

INDENT = ' ' * 2


def qualified_name(avro_schema: Dict[str, Any]) -> str:
    """
    Constructs the full name of a record or enum.

    Args:
        avro_schema (dict): The record or enum definition.

    Returns:
        str: ``namespace.name``, or the bare name when there is no namespace.
    """
    namespace = avro_schema.get('namespace')
    return f"{namespace}.{avro_schema['name']}" if namespace else avro_schema['name']


def interface_name(avro_schema: Dict[str, Any], options: Options) -> str:
    """Interfaces carry an ``I`` prefix when classes are generated next to them."""
    return f"I{avro_schema['name']}" if options.custom_mode else avro_schema['name']


def class_name(avro_schema: Dict[str, Any]) -> str:
    return avro_schema['name']


def enum_name(avro_schema: Dict[str, Any]) -> str:
    return avro_schema['name']


def type_reference_name(avro_schema: Dict[str, Any], base_name: str, options: Options) -> str:
    """The name under which generated code refers to a declaration of ``avro_schema``."""
    namespace = avro_schema.get('namespace')
    if options.remove_namespace or not namespace:
        return base_name
    return f"{namespace}.{base_name}"


def q_interface_name(avro_schema: Dict[str, Any], options: Options) -> str:
    return type_reference_name(avro_schema, interface_name(avro_schema, options), options)


def q_class_name(avro_schema: Dict[str, Any], options: Options) -> str:
    return type_reference_name(avro_schema, class_name(avro_schema), options)


def q_enum_name(avro_schema: Dict[str, Any], options: Options) -> str:
    return type_reference_name(avro_schema, enum_name(avro_schema), options)


def resolve_reference(ref: str, context: GenerationContext) -> Dict[str, Any]:
    """Look up the record or enum definition a reference string points to."""
    fqn = context.fqn_resolver.get(ref)
    if fqn is None or fqn not in context.name_to_type_mapping:
        raise UnresolvedReferenceError(ref)
    return context.name_to_type_mapping[fqn]


def get_type_name(avro_type: Any, context: GenerationContext) -> Optional[str]:
    """The tag that identifies ``avro_type`` as a union alternative."""
    if is_primitive(avro_type):
        return unwrap_primitive(avro_type)
    if is_array_type(avro_type) or is_map_type(avro_type):
        return avro_type['type']
    if is_record_type(avro_type) or is_enum_type(avro_type):
        return qualified_name(avro_type)
    if is_reference(avro_type):
        return context.fqn_resolver.get(avro_type)
    return None


def sort_by_name(types: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Stable lexicographic ordering by the ``name`` attribute."""
    return sorted(types, key=lambda t: t['name'])


def group_by_namespace(items: Sequence[Tuple[Optional[str], str]]) -> Dict[Optional[str], List[str]]:
    """Group ``(namespace, text)`` pairs by namespace, keeping first-seen order of the namespaces."""
    mapping: Dict[Optional[str], List[str]] = OrderedDict()
    for namespace, text in items:
        mapping.setdefault(namespace or None, []).append(text)
    return mapping


def indent(text: str, levels: int = 1) -> str:
    """Indent every non-empty line of ``text``."""
    prefix = INDENT * levels
    return '\n'.join(prefix + line if line.strip() else line for line in text.split('\n'))


def as_self_executing(code: str) -> str:
    """Wrap a block of statements in an immediately invoked arrow function."""
    return f"(() => {{\n{indent(code)}\n}})()"


def join_conditional(branches: Sequence[Tuple[str, str]]) -> str:
    """Render ``(condition, body)`` pairs as an ``if / else if`` chain."""
    if not branches:
        return ''
    (first_cond, first_branch), *rest = branches
    chain = f"if ({first_cond}) {{\n{indent(first_branch)}\n}}"
    for cond, branch in rest:
        chain += f" else if ({cond}) {{\n{indent(branch)}\n}}"
    return chain


def process_template(file_path: str, **kvargs) -> str:
    """
    Process a file as a Jinja2 template with the given object as input.

    Args:
        file_path (str): The path to the template, relative to the package directory.
        **kvargs: The values to render the template with.

    Returns:
        str: The processed template as a string.
    """
    file_dir = os.path.dirname(__file__)
    template_loader = jinja2.FileSystemLoader(searchpath=file_dir)
    template_env = jinja2.Environment(loader=template_loader, trim_blocks=True, lstrip_blocks=True)
    template_env.filters['indent_code'] = indent

    template = template_env.get_template(file_path)
    return template.render(**kvargs).rstrip('\n')
