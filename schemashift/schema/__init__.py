"""Schema building from type descriptors."""

from schemashift.schema.builder import SchemaBuilder
from schemashift.schema.descriptors import (
    ArrayType,
    DescriptorKind,
    FieldDescriptor,
    Metadata,
    ObjectType,
    PrimitiveType,
    SecuritySchemeDescriptor,
    TaggedUnionType,
    TupleType,
    TypeDescriptor,
    VariantDescriptor,
)
from schemashift.schema.operations import (
    DocumentAssembler,
    ErrorDescriptor,
    OperationDescriptor,
)
from schemashift.schema.resolver import ReferenceResolver
from schemashift.schema.tagging import (
    Adjacent,
    External,
    Internal,
    TaggingStrategy,
    Untagged,
    tagging_for,
)

__all__ = [
    'SchemaBuilder',
    'ReferenceResolver',
    'DocumentAssembler',
    'OperationDescriptor',
    'ErrorDescriptor',
    # Descriptors
    'DescriptorKind',
    'TypeDescriptor',
    'PrimitiveType',
    'ArrayType',
    'ObjectType',
    'FieldDescriptor',
    'TaggedUnionType',
    'VariantDescriptor',
    'TupleType',
    'SecuritySchemeDescriptor',
    'Metadata',
    # Tagging
    'TaggingStrategy',
    'External',
    'Internal',
    'Adjacent',
    'Untagged',
    'tagging_for',
]
