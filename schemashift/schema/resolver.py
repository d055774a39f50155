"""Reference resolution and the central definitions table.

Named types are built once, stored under their canonical name, and pointed
to by ``#/definitions/<name>`` references everywhere else. Inline types are
copied into place and never named.
"""

import logging
from typing import TYPE_CHECKING

from schemashift.exceptions import DescriptorError
from schemashift.openapi.v2 import DataType, Schema
from schemashift.schema.descriptors import (
    ArrayType,
    Metadata,
    PrimitiveType,
    TypeDescriptor,
)
from schemashift.utils import parse_example

if TYPE_CHECKING:
    from schemashift.schema.builder import SchemaBuilder

logger = logging.getLogger(__name__)

DEFINITIONS_PREFIX = '#/definitions/'


def apply_metadata(schema: Schema, metadata: Metadata) -> None:
    """Write ``metadata`` onto ``schema`` in place."""
    if metadata.description is not None:
        schema.description = metadata.description
    if metadata.example is not None:
        schema.example = parse_example(metadata.example)
    schema.extensions.update(metadata.extensions())


class ReferenceResolver:
    """Decides between inline and by-reference schemas for nested types.

    The resolver owns the definitions table for one build pass. Each named
    type is built at most once; a type referenced while it is still being
    built resolves to its reference, which makes recursive types terminate.
    """

    def __init__(self):
        self._builder: 'SchemaBuilder | None' = None
        self._built: dict[str, Schema] = {}
        self._in_progress: set[str] = set()
        self._referenced: list[str] = []

    def bind(self, builder: 'SchemaBuilder') -> None:
        self._builder = builder

    @property
    def builder(self) -> 'SchemaBuilder':
        if self._builder is None:
            # Import here to avoid circular imports
            from schemashift.schema.builder import SchemaBuilder

            SchemaBuilder(resolver=self)
        return self._builder

    def canonical_name(self, descriptor: TypeDescriptor) -> str | None:
        """Name under which ``descriptor`` is defined, or None if it is inline.

        Generic types render as ``Base<Arg1, Arg2>`` with their arguments in
        declaration order.
        """
        if descriptor.inline:
            return None
        base = descriptor.rename or descriptor.name
        if not base:
            return None
        if not descriptor.generic_args:
            return base
        args = ', '.join(self.render_name(arg) for arg in descriptor.generic_args)
        return f'{base}<{args}>'

    def render_name(self, descriptor: TypeDescriptor) -> str:
        """Name of ``descriptor`` as it appears inside a generic name."""
        if isinstance(descriptor, PrimitiveType):
            return descriptor.format or descriptor.data_type.value
        if isinstance(descriptor, ArrayType):
            inner = self.render_name(descriptor.items) if descriptor.items else 'any'
            return f'List<{inner}>'
        name = self.canonical_name(descriptor)
        if name is None:
            name = descriptor.rename or descriptor.name or 'object'
        return name

    def raw_schema(self, descriptor: TypeDescriptor) -> Schema:
        """Return the full schema of ``descriptor``, building it at most once per name."""
        name = self.canonical_name(descriptor)
        if name is None:
            schema = self.builder.build_node(descriptor)
            schema.name = None
            return schema

        if name not in self._built:
            if name in self._in_progress:
                raise DescriptorError(name, 'type contains itself without a reference')
            self._in_progress.add(name)
            try:
                schema = self.builder.build_node(descriptor)
            finally:
                self._in_progress.discard(name)
            schema.name = name
            self._built[name] = schema

        return self._built[name].model_copy(deep=True)

    def schema_with_ref(self, descriptor: TypeDescriptor) -> Schema:
        """Return a reference to ``descriptor``, or its inline schema if it is unnamed."""
        name = self.canonical_name(descriptor)
        if name is None:
            return self.raw_schema(descriptor)

        if name in self._in_progress:
            logger.debug('Recursive reference to %s', name)
        elif name not in self._built:
            self.raw_schema(descriptor)

        if name not in self._referenced:
            self._referenced.append(name)
        return self.reference(name)

    def register(self, schema: Schema) -> Schema:
        """Add a synthesized named schema to the definitions and return a reference to it."""
        if not schema.name:
            raise DescriptorError(None, 'only named schemas can be registered')
        self._built[schema.name] = schema
        if schema.name not in self._referenced:
            self._referenced.append(schema.name)
        return self.reference(schema.name)

    def reference(self, name: str) -> Schema:
        return Schema(name=name, reference=f'{DEFINITIONS_PREFIX}{name}')

    def data_type_of(self, schema: Schema) -> DataType | None:
        """Data type of ``schema``, following a reference into the definitions."""
        if schema.reference and schema.reference.startswith(DEFINITIONS_PREFIX):
            target = self._built.get(schema.reference[len(DEFINITIONS_PREFIX):])
            return target.data_type if target is not None else None
        return schema.data_type

    def overlay(
        self,
        schema: Schema,
        metadata: Metadata,
        data_type: DataType | None = None,
    ) -> Schema:
        """Attach ``metadata`` to ``schema`` without touching shared definitions.

        A reference cannot carry metadata itself, so it is composed as
        ``all_of: [reference, metadata]`` where the second node repeats the
        referenced data type. Inline schemas are updated on a copy.
        """
        if metadata.is_empty():
            return schema

        if schema.reference:
            fresh = Schema(data_type=data_type or self.data_type_of(schema))
            apply_metadata(fresh, metadata)
            return Schema(all_of=[schema, fresh])

        merged = schema.model_copy(deep=True)
        apply_metadata(merged, metadata)
        return merged

    @property
    def definitions(self) -> dict[str, Schema]:
        """Every referenced definition, keyed by canonical name."""
        return {
            name: self._built[name].model_copy(deep=True)
            for name in self._referenced
            if name in self._built
        }
