"""Exceptions raised while converting Avro schemas to TypeScript."""

from typing import Any, Iterable


class AvroToTypeScriptError(Exception):
    """Base class for all conversion errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ConfigurationError(AvroToTypeScriptError):
    """Raised when required options, such as the input path, are missing."""


class InputNotFoundError(AvroToTypeScriptError, FileNotFoundError):
    """Raised when an input path does not exist."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f'Path "{path}" doesn\'t exist!')


class SchemaParseError(AvroToTypeScriptError):
    """Raised when an input document is not valid JSON."""

    def __init__(self, path: str, reason: str):
        self.path = path
        super().__init__(f"Cannot parse Avro schema {path}: {reason}")


class AmbiguousReferenceError(AvroToTypeScriptError):
    """Raised when a short type name matches more than one registered full name."""

    def __init__(self, name: str, candidates: Iterable[str]):
        self.name = name
        self.candidates = sorted(candidates)
        super().__init__(f"Multiple matching fqns for {name}: {', '.join(self.candidates)}")


class UnresolvedReferenceError(AvroToTypeScriptError):
    """Raised when a type reference does not name any known record or enum."""

    def __init__(self, name: Any):
        self.name = name
        super().__init__(f"Cannot resolve type reference {name!r}")


class UnknownTypeError(AvroToTypeScriptError):
    """Raised when a type node matches none of the known type shapes."""

    def __init__(self, avro_type: Any, message: str = ''):
        self.avro_type = avro_type
        super().__init__(message or f"Unknown type {avro_type!r}!")


class UnknownPrimitiveError(UnknownTypeError):
    """Raised for a primitive tag outside the supported set."""

    def __init__(self, avro_type: Any):
        super().__init__(avro_type, f"Unknown primitive type: {avro_type}")
