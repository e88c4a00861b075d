# pylint: disable=line-too-long

""" Convert Avro schemas to TypeScript interfaces, enums and serializable classes """

import json
import logging
import os
import sys
from typing import Any, Dict, Iterable, List, Optional, TextIO, Tuple, Union

from avsctots.common import group_by_namespace, sort_by_name
from avsctots.declarations import generate_class, generate_enum_type, generate_interface, generate_namespace_block
from avsctots.errors import AvroToTypeScriptError, ConfigurationError, InputNotFoundError, SchemaParseError
from avsctots.model import GenerationContext, Options
from avsctots.namespaces import add_namespaces
from avsctots.typegraph import get_all_enum_types, get_all_record_types, get_name_to_type_mapping

logger = logging.getLogger(__name__)

AVRO_SCHEMA_EXTENSION = '.avsc'


class AvroToTypeScript:
    """Converts an Avro schema to TypeScript declarations."""

    def __init__(self, options: Optional[Options] = None) -> None:
        self.options = options or Options()

    def generate_all(self, avro_schema: Any) -> str:
        """Generate every declaration for the named types reachable from ``avro_schema``."""
        context = GenerationContext(options=self.options)
        augmented = add_namespaces(avro_schema, context)
        enum_types = sort_by_name(get_all_enum_types(augmented))
        record_types = sort_by_name(get_all_record_types(augmented))
        context.name_to_type_mapping = get_name_to_type_mapping(enum_types + record_types)
        logger.debug("Generating %d enums and %d records", len(enum_types), len(record_types))

        declarations: List[Tuple[Optional[str], str]] = []
        declarations.extend((t.get('namespace'), generate_enum_type(t, context)) for t in enum_types)
        declarations.extend((t.get('namespace'), generate_interface(t, context)) for t in record_types)
        if self.options.custom_mode:
            declarations.extend((t.get('namespace'), generate_class(t, context)) for t in record_types)
        return self.join_declarations(declarations)

    def join_declarations(self, declarations: List[Tuple[Optional[str], str]]) -> str:
        """Concatenate declarations, wrapping each namespace's share in a namespace block unless namespaces are removed."""
        if self.options.remove_namespace:
            return '\n\n'.join(text for _, text in declarations)
        blocks = []
        for namespace, texts in group_by_namespace(declarations).items():
            if namespace:
                blocks.append(generate_namespace_block(namespace, texts))
            else:
                blocks.extend(texts)
        return '\n\n'.join(blocks)


def load_avro_schema(avro_schema_path: str) -> Union[Dict, List]:
    """Read and parse an Avro schema document."""
    if not os.path.exists(avro_schema_path):
        raise InputNotFoundError(avro_schema_path)
    with open(avro_schema_path, 'r', encoding='utf-8') as file:
        try:
            return json.load(file)
        except json.JSONDecodeError as e:
            raise SchemaParseError(avro_schema_path, str(e)) from e


def collect_files(file_path: str, accumulated: Optional[List[str]] = None) -> List[str]:
    """Collect ``file_path`` if it is a schema file, or all schema files below it if it is a directory."""
    if accumulated is None:
        accumulated = []
    if not os.path.exists(file_path):
        raise InputNotFoundError(file_path)
    if os.path.isdir(file_path):
        for child in sorted(os.listdir(file_path)):
            collect_files(os.path.join(file_path, child), accumulated)
    elif os.path.splitext(file_path)[1] == AVRO_SCHEMA_EXTENSION:
        accumulated.append(file_path)
    return accumulated


def collect_all_files(files: Union[str, Iterable[str], None]) -> List[str]:
    """Resolve the input paths and collect every schema file they contain."""
    if not files:
        raise ConfigurationError('Argument --file or -f should be provided!')
    input_files = [files] if isinstance(files, str) else list(files)
    all_files: List[str] = []
    for input_file in input_files:
        collect_files(os.path.abspath(input_file), all_files)
    return all_files


def convert_avro_schema_to_typescript(avro_schema: Any, options: Optional[Options] = None) -> str:
    """Convert an already parsed Avro schema to TypeScript source text."""
    return AvroToTypeScript(options).generate_all(avro_schema)


def convert_avro_to_typescript(avro_schema_path: str, options: Optional[Options] = None) -> str:
    """Convert one Avro schema file, prefixed with a comment naming the file."""
    schema = load_avro_schema(avro_schema_path)
    ts_content = convert_avro_schema_to_typescript(schema, options)
    return f"// Generated from {os.path.basename(avro_schema_path)}\n\n{ts_content}\n"


def convert_avro_files_to_typescript(files: Union[str, Iterable[str], None], options: Optional[Options] = None,
                                     out: Optional[TextIO] = None, continue_on_error: bool = False) -> List[str]:
    """
    Convert every schema file found under ``files`` and write the results to ``out``.

    Args:
        files: File or directory paths.
        options: Generation options.
        out: Output stream, standard output by default.
        continue_on_error: Log and skip documents that fail instead of aborting the batch.

    Returns:
        The paths of the files that were converted.
    """
    out = out or sys.stdout
    converted = []
    for avro_schema_path in collect_all_files(files):
        try:
            ts_content = convert_avro_to_typescript(avro_schema_path, options)
        except AvroToTypeScriptError as e:
            if not continue_on_error:
                raise
            logger.warning("Skipping %s: %s", avro_schema_path, e)
            continue
        out.write(ts_content)
        converted.append(avro_schema_path)
    return converted


def convert_avro_to_typescript_file(file, ts_file_path=None, convert_enum_to_type=False, remove_namespace=False,
                                    custom_mode=False, enums='ENUM', continue_on_error=False):
    """Convert Avro schema files to TypeScript, writing to ``ts_file_path`` or standard output."""
    options = Options.from_dict({
        'convert_enum_to_type': convert_enum_to_type,
        'remove_namespace': remove_namespace,
        'custom_mode': custom_mode,
        'enums': enums,
    })
    if not ts_file_path:
        return convert_avro_files_to_typescript(file, options, sys.stdout, continue_on_error)
    directory = os.path.dirname(ts_file_path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(ts_file_path, 'w', encoding='utf-8') as out:
        return convert_avro_files_to_typescript(file, options, out, continue_on_error)
