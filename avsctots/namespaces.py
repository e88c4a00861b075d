"""
Namespace augmentation of Avro schemas.

Two passes over the schema tree, each producing a new tree:

1. ``augment_records_and_enums`` gives every record and enum its effective
   namespace (its own, or the one of the closest enclosing record) and registers
   its full name with the resolver before descending into its fields.
2. ``augment_references`` rewrites every reference string to the full name the
   resolver returns for it.

The input schema is never modified.
"""

import copy
import logging
from typing import Any, Dict, Optional, Tuple

from avsctots.fqnresolver import FqnResolver
from avsctots.model import (GenerationContext, is_array_type, is_enum_type, is_map_type, is_record_type, is_reference,
                            is_union)

logger = logging.getLogger(__name__)


def split_fullname(avro_schema: Dict[str, Any], parent_namespace: Optional[str]) -> Tuple[Optional[str], str]:
    """
    Work out the effective namespace and short name of a record or enum.

    A dotted name is a full name and wins over any ``namespace`` attribute. An
    explicit empty namespace means no namespace; a missing one is inherited.
    """
    name = avro_schema['name']
    if '.' in name:
        namespace, name = name.rsplit('.', 1)
        return namespace or None, name
    if 'namespace' in avro_schema and avro_schema['namespace'] is not None:
        return avro_schema['namespace'] or None, name
    return parent_namespace, name


def augment_records_and_enums(avro_type: Any, namespace: Optional[str], fqn_resolver: FqnResolver) -> Any:
    """Return a copy of ``avro_type`` with namespaces assigned to all named types, registering each one."""
    if is_union(avro_type):
        return [augment_records_and_enums(t, namespace, fqn_resolver) for t in avro_type]
    if is_enum_type(avro_type):
        enum_namespace, name = split_fullname(avro_type, namespace)
        fqn_resolver.add(enum_namespace, name)
        augmented = copy.deepcopy(avro_type)
        augmented.update(name=name, namespace=enum_namespace)
        return augmented
    if is_record_type(avro_type):
        record_namespace, name = split_fullname(avro_type, namespace)
        fqn_resolver.add(record_namespace, name)
        augmented = {k: copy.deepcopy(v) for k, v in avro_type.items() if k != 'fields'}
        augmented.update(name=name, namespace=record_namespace)
        augmented['fields'] = [
            dict(field, type=augment_records_and_enums(field['type'], record_namespace, fqn_resolver))
            for field in avro_type.get('fields', [])
        ]
        return augmented
    if is_array_type(avro_type):
        return dict(avro_type, items=augment_records_and_enums(avro_type['items'], namespace, fqn_resolver))
    if is_map_type(avro_type):
        return dict(avro_type, values=augment_records_and_enums(avro_type['values'], namespace, fqn_resolver))
    return copy.deepcopy(avro_type)


def augment_reference(ref: str, fqn_resolver: FqnResolver) -> str:
    """Resolve a single reference. Unknown names stay as written and fail when first generated."""
    fqn = fqn_resolver.get(ref)
    if fqn is None:
        logger.debug("Reference %s does not match any known type", ref)
        return ref
    if fqn != ref:
        logger.debug("Resolved reference %s to %s", ref, fqn)
    return fqn


def augment_references(avro_type: Any, fqn_resolver: FqnResolver) -> Any:
    """Return a copy of ``avro_type`` with every reference string replaced by its full name."""
    if is_reference(avro_type):
        return augment_reference(avro_type, fqn_resolver)
    if is_union(avro_type):
        return [augment_references(t, fqn_resolver) for t in avro_type]
    if is_record_type(avro_type):
        return dict(avro_type, fields=[
            dict(field, type=augment_references(field['type'], fqn_resolver))
            for field in avro_type.get('fields', [])
        ])
    if is_array_type(avro_type):
        return dict(avro_type, items=augment_references(avro_type['items'], fqn_resolver))
    if is_map_type(avro_type):
        return dict(avro_type, values=augment_references(avro_type['values'], fqn_resolver))
    return avro_type


def add_namespaces(avro_schema: Any, context: GenerationContext) -> Any:
    """Run both augmentation passes, registering named types with the context's resolver."""
    augmented = augment_records_and_enums(avro_schema, None, context.fqn_resolver)
    return augment_references(augmented, context.fqn_resolver)
