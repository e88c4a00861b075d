""" Collects the record and enum definitions reachable from an augmented schema """

from typing import Any, Dict, List, Optional

from avsctots.common import qualified_name
from avsctots.model import is_array_type, is_enum_type, is_map_type, is_record_type, is_union


def get_all_record_types(avro_type: Any, types: Optional[List[Dict[str, Any]]] = None) -> List[Dict[str, Any]]:
    """ Depth-first list of every record definition, one entry per place it is defined """
    if types is None:
        types = []
    if is_record_type(avro_type):
        types.append(avro_type)
        for field in avro_type.get('fields', []):
            get_all_record_types(field['type'], types)
    elif is_union(avro_type):
        for option_type in avro_type:
            get_all_record_types(option_type, types)
    elif is_array_type(avro_type):
        get_all_record_types(avro_type['items'], types)
    elif is_map_type(avro_type):
        get_all_record_types(avro_type['values'], types)
    return types


def get_all_enum_types(avro_type: Any, types: Optional[List[Dict[str, Any]]] = None) -> List[Dict[str, Any]]:
    """ Depth-first list of every enum definition, one entry per place it is defined """
    if types is None:
        types = []
    if is_enum_type(avro_type):
        types.append(avro_type)
    elif is_union(avro_type):
        for option_type in avro_type:
            get_all_enum_types(option_type, types)
    elif is_record_type(avro_type):
        for field in avro_type.get('fields', []):
            get_all_enum_types(field['type'], types)
    elif is_array_type(avro_type):
        get_all_enum_types(avro_type['items'], types)
    elif is_map_type(avro_type):
        get_all_enum_types(avro_type['values'], types)
    return types


def get_name_to_type_mapping(types: List[Dict[str, Any]]) -> Dict[str, Dict[str, Any]]:
    """ Lookup table from full name to definition """
    return {qualified_name(t): t for t in types}
