"""schemashift - Build Swagger 2.0 schemas from type descriptors and convert them to OpenAPI 3.0.

schemashift has two halves. The schema builder turns declarative type
descriptors (primitives, arrays, objects, tagged unions, tuples) into
Swagger 2.0 schema nodes and a definitions table, and assembles operations
into a complete Swagger document. The converter upgrades any Swagger 2.0
document to OpenAPI 3.0, reporting lossy steps as warnings instead of
failing.

Quick Start:
    >>> from schemashift import (
    ...     DocumentAssembler, FieldDescriptor, ObjectType, OperationDescriptor, PrimitiveType,
    ... )
    >>> from schemashift.openapi.v2 import DataType
    >>>
    >>> pet = ObjectType(name='Pet', fields=[
    ...     FieldDescriptor('name', PrimitiveType(data_type=DataType.STRING)),
    ... ])
    >>> assembler = DocumentAssembler(title='Pets', version='1.0.0')
    >>> assembler.add(OperationDescriptor(method='get', path='/pets', response=pet))
    >>> swagger = assembler.build()
    >>> openapi, warnings = swagger.upgrade()

CLI Usage:
    $ schemashift convert swagger.yaml -o openapi.json
    $ schemashift convert swagger.json --format yaml
"""

from schemashift.config import ConversionConfig, get_config
from schemashift.convert import DocumentConverter
from schemashift.exceptions import (
    ConfigurationError,
    DescriptorError,
    DocumentError,
    DocumentLoadError,
    DocumentValidationError,
    OutputError,
    SchemaShiftError,
    SecuritySchemeError,
)
from schemashift.openapi import UniversalOpenAPI
from schemashift.schema import (
    Adjacent,
    ArrayType,
    DocumentAssembler,
    ErrorDescriptor,
    External,
    FieldDescriptor,
    Internal,
    Metadata,
    ObjectType,
    OperationDescriptor,
    PrimitiveType,
    ReferenceResolver,
    SchemaBuilder,
    SecuritySchemeDescriptor,
    TaggedUnionType,
    TupleType,
    Untagged,
    VariantDescriptor,
)

__all__ = [
    # Main classes
    'SchemaBuilder',
    'ReferenceResolver',
    'DocumentAssembler',
    'DocumentConverter',
    'UniversalOpenAPI',
    # Descriptors
    'PrimitiveType',
    'ArrayType',
    'ObjectType',
    'FieldDescriptor',
    'TaggedUnionType',
    'VariantDescriptor',
    'TupleType',
    'SecuritySchemeDescriptor',
    'OperationDescriptor',
    'ErrorDescriptor',
    'Metadata',
    # Tagging
    'External',
    'Internal',
    'Adjacent',
    'Untagged',
    # Configuration
    'ConversionConfig',
    'get_config',
    # Exceptions
    'SchemaShiftError',
    'DescriptorError',
    'SecuritySchemeError',
    'DocumentError',
    'DocumentLoadError',
    'DocumentValidationError',
    'ConfigurationError',
    'OutputError',
]

from schemashift._version import version as __version__
