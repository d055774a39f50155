"""Type descriptors consumed by the schema builder.

Descriptors are plain values describing a type: its name, whether it is
required by default, its data kind and format, and its nested fields or
variants. Whatever produces them (reflection, schema files or hand-written
builders) is outside this package; the builder only dispatches on
``DescriptorKind``.
"""

import dataclasses
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar

from pydantic import TypeAdapter

from schemashift.exceptions import SecuritySchemeError
from schemashift.openapi.v2 import (
    ApiKeyLocation,
    DataType,
    OAuth2Flow,
    SecurityScheme,
    SecuritySchemeType,
)
from schemashift.utils import RenameRule

__all__ = [
    'DescriptorKind',
    'Metadata',
    'TypeDescriptor',
    'PrimitiveType',
    'ArrayType',
    'FieldDescriptor',
    'ObjectType',
    'VariantDescriptor',
    'TaggedUnionType',
    'TupleType',
    'SecuritySchemeDescriptor',
]


class DescriptorKind(str, Enum):
    """The closed set of descriptor shapes the builder understands."""

    PRIMITIVE = 'primitive'
    ARRAY = 'array'
    OBJECT = 'object'
    UNION = 'union'
    TUPLE = 'tuple'


@dataclass
class Metadata:
    """Documentation attached to a field or a type rather than to its shape."""

    description: str | None = None
    example: Any | None = None
    priority: int | None = None
    preview_gate: str | None = None
    collapsed: bool | None = None

    def is_empty(self) -> bool:
        return all(getattr(self, f.name) is None for f in dataclasses.fields(self))

    def extensions(self) -> dict[str, Any]:
        """Vendor extensions this metadata contributes to a schema."""
        result: dict[str, Any] = {}
        if self.priority is not None:
            result['x-priority'] = self.priority
        if self.preview_gate is not None:
            result['x-preview-gate'] = self.preview_gate
        if self.collapsed is not None:
            result['x-collapsed'] = self.collapsed
        return result


@dataclass
class TypeDescriptor:
    """Common capabilities of every described type.

    Attributes:
        name: Declared identifier of the type, if it has one.
        rename: Explicit name overriding ``name`` in generated documents.
        required: Whether values of the type are present by default.
        inline: Inline types never get a name and are never referenced.
        description: Documentation of the type, usually its docstring.
        example: Example value; strings holding JSON are decoded.
        generic_args: Type arguments of a parameterized type, in order.
    """

    kind: ClassVar[DescriptorKind]

    name: str | None = None
    rename: str | None = None
    required: bool = True
    inline: bool = False
    description: str | None = None
    example: Any | None = None
    generic_args: list['TypeDescriptor'] = field(default_factory=list)

    def optional(self) -> 'TypeDescriptor':
        """Return a copy of this descriptor whose values may be absent."""
        return dataclasses.replace(self, required=False)

    @property
    def metadata(self) -> Metadata:
        return Metadata(description=self.description, example=self.example)


@dataclass
class PrimitiveType(TypeDescriptor):
    """A scalar type. Primitives are always inlined."""

    kind: ClassVar[DescriptorKind] = DescriptorKind.PRIMITIVE

    data_type: DataType = DataType.STRING
    format: str | None = None
    inline: bool = True


@dataclass
class ArrayType(TypeDescriptor):
    """A homogeneous sequence of ``items``."""

    kind: ClassVar[DescriptorKind] = DescriptorKind.ARRAY

    items: TypeDescriptor | None = None
    inline: bool = True


@dataclass
class FieldDescriptor:
    """A named field of an object, or a position of a tuple when unnamed.

    ``required`` and ``optional`` override the field type's own
    requiredness; ``optional`` wins when both are set.
    """

    name: str | None
    type: TypeDescriptor
    rename: str | None = None
    skip: bool = False
    flatten: bool = False
    inline: bool = False
    required: bool = False
    optional: bool = False
    description: str | None = None
    example: Any | None = None
    priority: int | None = None
    preview_gate: str | None = None
    collapsed: bool | None = None

    @property
    def metadata(self) -> Metadata:
        return Metadata(
            description=self.description,
            example=self.example,
            priority=self.priority,
            preview_gate=self.preview_gate,
            collapsed=self.collapsed,
        )

    def is_required(self) -> bool:
        return (self.type.required or self.required) and not self.optional

    def rendered_name(self, rename_all: RenameRule | None = None) -> str:
        if self.rename:
            return self.rename
        if rename_all is not None:
            return rename_all.apply(self.name)
        return self.name


@dataclass
class ObjectType(TypeDescriptor):
    """A type with named fields."""

    kind: ClassVar[DescriptorKind] = DescriptorKind.OBJECT

    fields: list[FieldDescriptor] = field(default_factory=list)
    rename_all: RenameRule | None = None


@dataclass
class VariantDescriptor:
    """One alternative of a tagged union.

    A variant carries named ``fields``, a single ``data`` type, or nothing
    at all (a unit variant).
    """

    name: str
    rename: str | None = None
    skip: bool = False
    description: str | None = None
    fields: list[FieldDescriptor] = field(default_factory=list)
    data: TypeDescriptor | None = None
    rename_all: RenameRule | None = None

    @property
    def is_unit(self) -> bool:
        return not self.fields and self.data is None

    def rendered_name(self, rename_all: RenameRule | None = None) -> str:
        if self.rename:
            return self.rename
        if rename_all is not None:
            return rename_all.apply(self.name)
        return self.name


@dataclass
class TaggedUnionType(TypeDescriptor):
    """A closed choice between variants.

    ``tag`` alone selects internal tagging, ``tag`` with ``content``
    adjacent tagging, ``untagged`` untagged rendering, and nothing at all
    external tagging.
    """

    kind: ClassVar[DescriptorKind] = DescriptorKind.UNION

    variants: list[VariantDescriptor] = field(default_factory=list)
    tag: str | None = None
    content: str | None = None
    untagged: bool = False
    rename_all: RenameRule | None = None


@dataclass
class TupleType(TypeDescriptor):
    """A type with unnamed positional fields."""

    kind: ClassVar[DescriptorKind] = DescriptorKind.TUPLE

    elements: list[FieldDescriptor] = field(default_factory=list)


_security_scheme_adapter = TypeAdapter(SecurityScheme)


@dataclass
class SecuritySchemeDescriptor:
    """Describes a security scheme, or a scope set glued onto a parent scheme.

    A descriptor declares either a scheme ``type`` or a ``parent``
    descriptor, never both.
    """

    name: str
    type: SecuritySchemeType | None = None
    alias: str | None = None
    key_name: str | None = None
    in_: ApiKeyLocation | None = None
    flow: OAuth2Flow | None = None
    auth_url: str | None = None
    token_url: str | None = None
    description: str | None = None
    parent: 'SecuritySchemeDescriptor | None' = None
    scopes: list[str] = field(default_factory=list)

    def __post_init__(self):
        if self.type is not None and self.parent is not None:
            raise SecuritySchemeError(self.name, 'declares both a scheme type and a parent')
        if self.type is None and self.parent is None:
            raise SecuritySchemeError(self.name, 'declares neither a scheme type nor a parent')

    @property
    def scheme_name(self) -> str:
        """Name under which the scheme is registered in a document."""
        if self.parent is not None:
            return self.parent.scheme_name
        return self.alias or self.name

    def scope_mapping(self) -> dict[str, str]:
        return {scope: scope for scope in self.scopes}

    def build(self) -> tuple[str, SecurityScheme]:
        """Return the scheme name and its definition.

        Parent descriptors produce a copy of the parent scheme whose scopes
        are this descriptor's scopes.
        """
        if self.parent is not None:
            name, scheme = self.parent.build()
            if hasattr(scheme, 'scopes'):
                scheme = scheme.model_copy(update={'scopes': self.scope_mapping()})
            return name, scheme

        raw: dict[str, Any] = {'type': self.type.value}
        if self.description:
            raw['description'] = self.description
        if self.type is SecuritySchemeType.API_KEY:
            raw['name'] = self.key_name or self.name
            raw['in'] = (self.in_ or ApiKeyLocation.HEADER).value
        elif self.type is SecuritySchemeType.OAUTH2:
            raw['flow'] = (self.flow or OAuth2Flow.IMPLICIT).value
            raw['scopes'] = self.scope_mapping()
            if self.auth_url:
                raw['authorizationUrl'] = self.auth_url
            if self.token_url:
                raw['tokenUrl'] = self.token_url

        try:
            scheme = _security_scheme_adapter.validate_python(raw)
        except ValueError as e:
            raise SecuritySchemeError(self.name, str(e)) from e
        return self.scheme_name, scheme

    def requirement(self) -> dict[str, list[str]]:
        """Security requirement entry referencing this scheme by name."""
        return {self.scheme_name: list(self.scopes)}
