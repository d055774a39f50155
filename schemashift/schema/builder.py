import logging
from typing import Callable

from schemashift.exceptions import DescriptorError
from schemashift.openapi.v2 import DataType, Schema
from schemashift.schema.descriptors import (
    ArrayType,
    DescriptorKind,
    FieldDescriptor,
    ObjectType,
    PrimitiveType,
    TaggedUnionType,
    TupleType,
    TypeDescriptor,
    VariantDescriptor,
)
from schemashift.schema.resolver import ReferenceResolver, apply_metadata
from schemashift.schema.tagging import tagging_for
from schemashift.utils import CONVERSION_ERROR_KEY, RenameRule

__all__ = ['SchemaBuilder']

logger = logging.getLogger(__name__)


class SchemaBuilder:
    """Builds schema nodes from type descriptors.

    Named nested types are referenced through the resolver, which collects
    their definitions. Problems that do not prevent a usable schema, such as
    a format that does not fit its data type, are logged and recorded in
    ``warnings`` instead of being raised.

    Example:
        builder = SchemaBuilder()
        schema = builder.build(pet_descriptor)
        definitions = builder.definitions
    """

    def __init__(self, resolver: ReferenceResolver | None = None):
        self.resolver = resolver or ReferenceResolver()
        self.resolver.bind(self)
        self.warnings: list[str] = []
        self._builders: dict[DescriptorKind, Callable[[TypeDescriptor], Schema]] = {
            DescriptorKind.PRIMITIVE: self._build_primitive,
            DescriptorKind.ARRAY: self._build_array,
            DescriptorKind.OBJECT: self._build_object,
            DescriptorKind.UNION: self._build_union,
            DescriptorKind.TUPLE: self._build_tuple,
        }

    def build(self, descriptor: TypeDescriptor) -> Schema:
        """Build the full schema of ``descriptor``, named by its canonical name."""
        return self.resolver.raw_schema(descriptor)

    @property
    def definitions(self) -> dict[str, Schema]:
        return self.resolver.definitions

    def build_node(self, descriptor: TypeDescriptor) -> Schema:
        kind = getattr(descriptor, 'kind', None)
        build = self._builders.get(kind)
        if build is None:
            raise DescriptorError(
                getattr(descriptor, 'name', None), f'unknown descriptor kind: {kind!r}'
            )
        return build(descriptor)

    def field_schema(self, field: FieldDescriptor) -> Schema:
        """Schema of one field, with the field's own metadata overlaid."""
        if field.inline:
            schema = self.resolver.raw_schema(field.type)
            schema.name = None
        else:
            schema = self.resolver.schema_with_ref(field.type)
        return self.resolver.overlay(schema, field.metadata)

    def object_schema(
        self, fields: list[FieldDescriptor], rename_all: RenameRule | None = None
    ) -> Schema:
        """Object schema with one property per non-skipped, non-flattened field.

        Each flattened field wraps the schema accumulated so far as
        ``all_of: [accumulated, field]``.
        """
        base = Schema(data_type=DataType.OBJECT)
        flattened = []
        for field in fields:
            if field.skip:
                continue
            schema = self.field_schema(field)
            if field.flatten:
                flattened.append(schema)
                continue
            name = field.rendered_name(rename_all)
            base.properties[name] = schema
            if field.is_required():
                base.required.add(name)

        result = base
        for schema in flattened:
            result = Schema(all_of=[result, schema])
        return result

    def variant_schema(self, variant: VariantDescriptor) -> Schema | None:
        """Schema of the data a variant carries, or None for a unit variant."""
        if variant.fields:
            return self.object_schema(variant.fields, variant.rename_all)
        if variant.data is not None:
            return self.resolver.schema_with_ref(variant.data)
        return None

    def _build_primitive(self, descriptor: PrimitiveType) -> Schema:
        schema = Schema(data_type=descriptor.data_type, format=descriptor.format)
        if schema.format is not None and not descriptor.data_type.accepts_format(schema.format):
            self.warn(
                f"Format '{descriptor.format}' does not fit data type "
                f"'{descriptor.data_type.value}'"
            )
        apply_metadata(schema, descriptor.metadata)
        return schema

    def _build_array(self, descriptor: ArrayType) -> Schema:
        if descriptor.items is None:
            return self.error_schema(
                f"Invalid array '{descriptor.name or 'anonymous'}', it should have an item type"
            )
        schema = Schema(
            data_type=DataType.ARRAY,
            items=self.resolver.schema_with_ref(descriptor.items),
        )
        apply_metadata(schema, descriptor.metadata)
        return schema

    def _build_object(self, descriptor: ObjectType) -> Schema:
        schema = self.object_schema(descriptor.fields, descriptor.rename_all)
        if not schema.properties and not schema.all_of:
            logger.debug('%s has no fields, emitting an empty object', descriptor.name)
        apply_metadata(schema, descriptor.metadata)
        return schema

    def _build_union(self, descriptor: TaggedUnionType) -> Schema:
        schema = tagging_for(descriptor).render(self, descriptor)
        apply_metadata(schema, descriptor.metadata)
        return schema

    def _build_tuple(self, descriptor: TupleType) -> Schema:
        elements = descriptor.elements
        if len(elements) == 1:
            element = elements[0]
            if element.skip:
                schema = Schema()
                apply_metadata(schema, descriptor.metadata)
                return schema
            return self.resolver.overlay(self.field_schema(element), descriptor.metadata)

        # Positions become properties keyed by index; this does not encode
        # the fixed length or the order of the tuple.
        schema = Schema(data_type=DataType.OBJECT)
        for index, element in enumerate(elements):
            if element.skip:
                continue
            key = str(index)
            schema.properties[key] = self.field_schema(element)
            if element.is_required():
                schema.required.add(key)
        if not elements:
            logger.debug('%s has no elements, emitting an empty object', descriptor.name)
        apply_metadata(schema, descriptor.metadata)
        return schema

    def error_schema(self, message: str) -> Schema:
        """Placeholder schema that carries ``message`` into the document."""
        self.warn(message)
        return Schema(description=message, extensions={CONVERSION_ERROR_KEY: message})

    def warn(self, message: str) -> None:
        logger.warning(message)
        self.warnings.append(message)
