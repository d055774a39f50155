"""Rendering strategies for tagged unions.

A union is rendered in one of four ways, selected once per union from its
declared configuration:

- ``External``: ``{"<variant>": <data>}`` objects, or a plain string enum
  when every variant is a unit.
- ``Internal(tag)``: the variant's fields and a constant ``tag`` property in
  one object.
- ``Adjacent(tag, content)``: a constant ``tag`` property next to a
  ``content`` property holding the variant's data.
- ``Untagged``: the variant data schemas as they are.

Apart from the plain string enum, the union is always ``any_of`` over the
per-variant schemas.
"""

import logging
from typing import TYPE_CHECKING

from schemashift.openapi.v2 import DataType, Schema
from schemashift.schema.descriptors import Metadata, TaggedUnionType, VariantDescriptor

if TYPE_CHECKING:
    from schemashift.schema.builder import SchemaBuilder

__all__ = [
    'TaggingStrategy',
    'External',
    'Internal',
    'Adjacent',
    'Untagged',
    'tagging_for',
]

logger = logging.getLogger(__name__)


class TaggingStrategy:
    """Base class of the union rendering strategies."""

    # Whether an all-unit union collapses into a plain string enum.
    allows_string_enum = False

    def render(self, builder: 'SchemaBuilder', union: TaggedUnionType) -> Schema:
        variants = [v for v in union.variants if not v.skip]
        if not variants:
            logger.debug('Union %s has no variants, emitting an empty object', union.name)
            schema = Schema(data_type=DataType.OBJECT)
        elif self.allows_string_enum and all(v.is_unit for v in variants):
            schema = Schema(
                data_type=DataType.STRING,
                enum_=[v.rendered_name(union.rename_all) for v in variants],
            )
        else:
            schema = Schema(
                any_of=[self.render_variant(builder, union, v) for v in variants]
            )
        return schema

    def render_variant(
        self, builder: 'SchemaBuilder', union: TaggedUnionType, variant: VariantDescriptor
    ) -> Schema:
        raise NotImplementedError

    @staticmethod
    def constant(value: str, description: str | None = None) -> Schema:
        return Schema(const_=value, description=description)

    @staticmethod
    def named(builder: 'SchemaBuilder', union: TaggedUnionType, variant: VariantDescriptor,
              schema: Schema) -> Schema:
        """Register ``schema`` as ``<UnionName><VariantName>`` and return a reference.

        Variants of an inline union have no name to derive from and stay inline.
        """
        union_name = builder.resolver.canonical_name(union)
        if union_name is None:
            return schema
        schema.name = f'{union_name}{variant.name}'
        return builder.resolver.register(schema)

    def __eq__(self, other):
        return type(self) is type(other) and vars(self) == vars(other)

    def __hash__(self):
        return hash((type(self), tuple(sorted(vars(self).items()))))

    def __repr__(self):
        args = ', '.join(f'{k}={v!r}' for k, v in vars(self).items())
        return f'{type(self).__name__}({args})'


class External(TaggingStrategy):
    """Variant name as the single key of an object holding the variant data."""

    allows_string_enum = True

    def render_variant(self, builder, union, variant):
        name = variant.rendered_name(union.rename_all)
        data = builder.variant_schema(variant)
        if data is None:
            data = Schema(data_type=DataType.OBJECT)
        return Schema(
            data_type=DataType.OBJECT,
            properties={name: data},
            required={name},
            description=variant.description,
        )


class Internal(TaggingStrategy):
    """Tag property stored next to the variant's own fields."""

    def __init__(self, tag: str):
        self.tag = tag

    def render_variant(self, builder, union, variant):
        name = variant.rendered_name(union.rename_all)
        tag = self.constant(name)
        tag.extensions['x-priority'] = 0

        schema = Schema(
            data_type=DataType.OBJECT,
            properties={self.tag: tag},
            required={self.tag},
        )
        data = builder.variant_schema(variant)
        if data is not None:
            if _is_plain_object(data):
                schema.properties.update(data.properties)
                schema.required.update(data.required)
            else:
                schema = Schema(all_of=[schema, data])
        schema.description = variant.description
        return self.named(builder, union, variant, schema)


class Adjacent(TaggingStrategy):
    """Tag and content stored as two sibling properties."""

    def __init__(self, tag: str, content: str):
        self.tag = tag
        self.content = content

    def render_variant(self, builder, union, variant):
        name = variant.rendered_name(union.rename_all)
        schema = Schema(
            data_type=DataType.OBJECT,
            properties={self.tag: self.constant(name, variant.description)},
            required={self.tag},
        )
        data = builder.variant_schema(variant)
        if data is not None:
            schema.properties[self.content] = data
            schema.required.add(self.content)
        return self.named(builder, union, variant, schema)


class Untagged(TaggingStrategy):
    """Variant data without any wrapper; callers resolve ambiguity themselves."""

    allows_string_enum = True

    def render_variant(self, builder, union, variant):
        data = builder.variant_schema(variant)
        if data is None:
            return self.constant(variant.rendered_name(union.rename_all), variant.description)
        if variant.description is not None:
            return builder.resolver.overlay(data, Metadata(description=variant.description))
        return data


def _is_plain_object(schema: Schema) -> bool:
    return (
        schema.data_type is DataType.OBJECT
        and not schema.reference
        and not schema.all_of
        and not schema.any_of
    )


def tagging_for(union: TaggedUnionType) -> TaggingStrategy:
    """Select the rendering strategy declared by ``union``."""
    if union.tag is not None and union.content is not None:
        return Adjacent(union.tag, union.content)
    if union.tag is not None:
        return Internal(union.tag)
    if union.untagged:
        return Untagged()
    return External()

