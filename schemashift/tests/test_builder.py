"""Tests for building schemas from type descriptors."""

import pytest

from schemashift.exceptions import DescriptorError
from schemashift.openapi.v2 import DataType, DataTypeFormat
from schemashift.schema import (
    ArrayType,
    FieldDescriptor,
    ObjectType,
    PrimitiveType,
    SchemaBuilder,
    TupleType,
    TypeDescriptor,
)
from schemashift.utils import CONVERSION_ERROR_KEY, RenameRule


def string():
    return PrimitiveType(data_type=DataType.STRING)


def integer(fmt='int64'):
    return PrimitiveType(data_type=DataType.INTEGER, format=fmt)


@pytest.fixture
def builder():
    return SchemaBuilder()


@pytest.fixture
def owner():
    return ObjectType(name='Owner', fields=[FieldDescriptor('name', string())])


class TestObjectSchemas:
    """Test object descriptors."""

    def test_properties_and_required(self, builder):
        """Test that every field becomes a property and only required ones are listed."""
        pet = ObjectType(
            name='Pet',
            fields=[
                FieldDescriptor('id', integer()),
                FieldDescriptor('name', string()),
                FieldDescriptor('tag', string().optional()),
            ],
        )

        schema = builder.build(pet)

        assert schema.data_type is DataType.OBJECT
        assert set(schema.properties) == {'id', 'name', 'tag'}
        assert schema.required == {'id', 'name'}
        assert schema.properties['id'].format is DataTypeFormat.INT64

    def test_skipped_fields_are_left_out(self, builder):
        """Test that skipped fields are neither properties nor required."""
        pet = ObjectType(
            name='Pet',
            fields=[
                FieldDescriptor('name', string()),
                FieldDescriptor('secret', string(), skip=True),
            ],
        )

        schema = builder.build(pet)

        assert list(schema.properties) == ['name']
        assert schema.required == {'name'}

    def test_field_requiredness_overrides(self, builder):
        """Test that field-level required and optional override the type."""
        form = ObjectType(
            name='Form',
            fields=[
                FieldDescriptor('forced', string().optional(), required=True),
                FieldDescriptor('relaxed', string(), optional=True),
                FieldDescriptor('both', string(), required=True, optional=True),
            ],
        )

        schema = builder.build(form)

        assert schema.required == {'forced'}

    def test_rename_all_and_explicit_rename(self, builder):
        """Test that rename_all applies unless a field is renamed explicitly."""
        user = ObjectType(
            name='User',
            rename_all=RenameRule.CAMEL,
            fields=[
                FieldDescriptor('user_id', integer()),
                FieldDescriptor('display_name', string(), rename='label'),
            ],
        )

        schema = builder.build(user)

        assert set(schema.properties) == {'userId', 'label'}
        assert schema.required == {'userId', 'label'}

    def test_empty_object(self, builder):
        """Test that an object without fields is an empty object schema."""
        schema = builder.build(ObjectType(name='Empty'))

        assert schema.data_type is DataType.OBJECT
        assert schema.properties == {}

    def test_type_documentation(self, builder):
        """Test that a type's description and JSON example are applied."""
        pet = ObjectType(
            name='Pet',
            description='A pet.',
            example='{"name": "Rex"}',
            fields=[FieldDescriptor('name', string())],
        )

        schema = builder.build(pet)

        assert schema.description == 'A pet.'
        assert schema.example == {'name': 'Rex'}


class TestReferences:
    """Test references to named types and the definitions table."""

    def test_named_field_type_is_referenced(self, builder, owner):
        """Test that a named field type becomes a reference and a definition."""
        pet = ObjectType(name='Pet', fields=[FieldDescriptor('owner', owner)])

        schema = builder.build(pet)

        assert schema.properties['owner'].reference == '#/definitions/Owner'
        assert set(builder.definitions) == {'Owner'}
        assert 'name' in builder.definitions['Owner'].properties

    def test_named_type_is_built_once(self, builder, owner):
        """Test that referencing a type twice yields one definition."""
        pet = ObjectType(
            name='Pet',
            fields=[
                FieldDescriptor('owner', owner),
                FieldDescriptor('previous_owner', owner),
            ],
        )

        schema = builder.build(pet)

        assert schema.properties['owner'].reference == schema.properties['previous_owner'].reference
        assert list(builder.definitions) == ['Owner']

    def test_metadata_on_reference_is_composed(self, builder, owner):
        """Test that field metadata on a reference becomes all_of of two schemas."""
        pet = ObjectType(
            name='Pet',
            fields=[FieldDescriptor('owner', owner, description='Who owns the pet', priority=1)],
        )

        schema = builder.build(pet)
        field = schema.properties['owner']

        assert field.reference is None
        assert len(field.all_of) == 2
        assert field.all_of[0].reference == '#/definitions/Owner'
        assert field.all_of[1].description == 'Who owns the pet'
        assert field.all_of[1].data_type is DataType.OBJECT
        assert field.all_of[1].extensions == {'x-priority': 1}

    def test_metadata_does_not_leak_into_definition(self, builder, owner):
        """Test that overlaying metadata leaves the shared definition untouched."""
        pet = ObjectType(
            name='Pet',
            fields=[
                FieldDescriptor('owner', owner, description='Who owns the pet'),
                FieldDescriptor('sitter', owner),
            ],
        )

        schema = builder.build(pet)

        assert builder.definitions['Owner'].description is None
        assert schema.properties['sitter'].reference == '#/definitions/Owner'

    def test_metadata_on_inline_schema_is_merged(self, builder):
        """Test that metadata on an inline schema is written onto a copy."""
        pet = ObjectType(
            name='Pet',
            fields=[
                FieldDescriptor('name', string(), description='Pet name', preview_gate='beta'),
                FieldDescriptor('nickname', string()),
            ],
        )

        schema = builder.build(pet)

        assert schema.properties['name'].description == 'Pet name'
        assert schema.properties['name'].extensions == {'x-preview-gate': 'beta'}
        assert schema.properties['nickname'].description is None

    def test_metadata_serializes_as_vendor_extensions(self, builder):
        """Test that metadata extensions are flattened when dumping."""
        pet = ObjectType(
            name='Pet',
            fields=[FieldDescriptor('name', string(), priority=3, collapsed=True)],
        )

        dumped = builder.build(pet).model_dump(by_alias=True, exclude_none=True)

        assert dumped['properties']['name'] == {
            'type': 'string',
            'x-priority': 3,
            'x-collapsed': True,
        }

    def test_inline_types_are_never_referenced(self, builder):
        """Test that inline types stay inline however deeply nested."""
        innermost = ObjectType(name='C', inline=True, fields=[FieldDescriptor('value', string())])
        middle = ObjectType(name='B', inline=True, fields=[FieldDescriptor('c', innermost)])
        outer = ObjectType(name='A', inline=True, fields=[FieldDescriptor('b', middle)])
        root = ObjectType(name='Root', fields=[FieldDescriptor('a', outer)])

        schema = builder.build(root)

        a = schema.properties['a']
        b = a.properties['b']
        c = b.properties['c']
        assert [node.reference for node in (a, b, c)] == [None, None, None]
        assert c.properties['value'].data_type is DataType.STRING
        assert builder.definitions == {}

    def test_inline_field_copies_named_type(self, builder, owner):
        """Test that an inline field embeds a named type without a definition."""
        pet = ObjectType(name='Pet', fields=[FieldDescriptor('owner', owner, inline=True)])

        schema = builder.build(pet)

        assert schema.properties['owner'].reference is None
        assert 'name' in schema.properties['owner'].properties
        assert builder.definitions == {}

    def test_recursive_type_terminates(self, builder):
        """Test that a type referring to itself resolves to a reference."""
        node = ObjectType(name='Node', fields=[FieldDescriptor('value', string())])
        node.fields.append(FieldDescriptor('children', ArrayType(items=node)))

        schema = builder.build(node)

        assert schema.properties['children'].items.reference == '#/definitions/Node'
        assert 'Node' in builder.definitions

    def test_inline_self_containment_is_rejected(self, builder):
        """Test that a type containing itself inline raises DescriptorError."""
        loop = ObjectType(name='Loop')
        loop.fields.append(FieldDescriptor('again', loop, inline=True))

        with pytest.raises(DescriptorError):
            builder.build(loop)


class TestFlatten:
    """Test flattened fields."""

    def test_flattened_field_wraps_base(self, builder, owner):
        """Test that a flattened field produces all_of of the base and the field."""
        pet = ObjectType(
            name='Pet',
            fields=[
                FieldDescriptor('name', string()),
                FieldDescriptor('owner', owner, flatten=True),
            ],
        )

        schema = builder.build(pet)

        assert len(schema.all_of) == 2
        base, flattened = schema.all_of
        assert set(base.properties) == {'name'}
        assert base.required == {'name'}
        assert flattened.reference == '#/definitions/Owner'

    def test_flattened_fields_nest(self, builder, owner):
        """Test that each flattened field adds one level of all_of."""
        audit = ObjectType(name='Audit', fields=[FieldDescriptor('created', string())])
        pet = ObjectType(
            name='Pet',
            fields=[
                FieldDescriptor('owner', owner, flatten=True),
                FieldDescriptor('name', string()),
                FieldDescriptor('audit', audit, flatten=True),
            ],
        )

        schema = builder.build(pet)

        inner, last = schema.all_of
        assert last.reference == '#/definitions/Audit'
        base, first = inner.all_of
        assert first.reference == '#/definitions/Owner'
        assert set(base.properties) == {'name'}


class TestPrimitivesAndArrays:
    """Test primitive and array descriptors."""

    def test_primitive_with_format(self, builder):
        """Test that a primitive keeps its data type and format."""
        schema = builder.build(PrimitiveType(data_type=DataType.STRING, format='date-time'))

        assert schema.data_type is DataType.STRING
        assert schema.format is DataTypeFormat.DATE_TIME
        assert builder.warnings == []

    def test_unknown_string_format_is_kept(self, builder):
        """Test that strings accept formats outside the known set."""
        schema = builder.build(PrimitiveType(data_type=DataType.STRING, format='email'))

        assert schema.format == 'email'
        assert builder.warnings == []

    def test_format_mismatch_warns(self, builder):
        """Test that a format not fitting the data type is reported."""
        builder.build(PrimitiveType(data_type=DataType.INTEGER, format='date'))

        assert len(builder.warnings) == 1
        assert "'date'" in builder.warnings[0]

    def test_array_of_named_type(self, builder, owner):
        """Test that array items reference named types."""
        schema = builder.build(ArrayType(items=owner))

        assert schema.data_type is DataType.ARRAY
        assert schema.items.reference == '#/definitions/Owner'

    def test_array_without_items_is_a_placeholder(self, builder):
        """Test that an array without an item type becomes an error placeholder."""
        schema = builder.build(ArrayType(name='Broken'))

        message = "Invalid array 'Broken', it should have an item type"
        assert schema.data_type is None
        assert schema.description == message
        assert schema.extensions == {CONVERSION_ERROR_KEY: message}
        assert builder.warnings == [message]

    def test_placeholder_keeps_sibling_fields(self, builder):
        """Test that a broken field does not prevent the rest of the object."""
        thing = ObjectType(
            name='Thing',
            fields=[
                FieldDescriptor('label', string()),
                FieldDescriptor('bad', ArrayType()),
            ],
        )

        schema = builder.build(thing)

        assert schema.properties['label'].data_type is DataType.STRING
        assert CONVERSION_ERROR_KEY in schema.properties['bad'].extensions
        assert schema.required == {'label', 'bad'}
        dumped = schema.model_dump(by_alias=True, exclude_none=True)
        assert dumped['properties']['bad'][CONVERSION_ERROR_KEY].startswith('Invalid array')

    def test_unknown_kind_is_rejected(self, builder):
        """Test that a descriptor without a known kind raises DescriptorError."""
        with pytest.raises(DescriptorError, match='unknown descriptor kind'):
            builder.build(TypeDescriptor(name='Mystery'))


class TestTuples:
    """Test tuple descriptors."""

    def test_single_element_tuple_is_its_element(self, builder):
        """Test that a one-element tuple renders as the element schema."""
        wrapper = TupleType(elements=[FieldDescriptor(None, integer())])

        schema = builder.build(wrapper)

        assert schema.data_type is DataType.INTEGER

    def test_single_element_tuple_description(self, builder):
        """Test that a one-element tuple carries its own description."""
        wrapper = TupleType(description='An identifier', elements=[FieldDescriptor(None, integer())])

        schema = builder.build(wrapper)

        assert schema.description == 'An identifier'

    def test_multi_element_tuple_is_index_keyed(self, builder):
        """Test that tuple positions become properties keyed by index."""
        pair = TupleType(
            elements=[
                FieldDescriptor(None, string()),
                FieldDescriptor(None, integer().optional()),
                FieldDescriptor(None, integer(), skip=True),
            ]
        )

        schema = builder.build(pair)

        assert schema.data_type is DataType.OBJECT
        assert set(schema.properties) == {'0', '1'}
        assert schema.required == {'0'}


class TestGenericNames:
    """Test canonical names of generic types."""

    def test_generic_name(self, builder):
        """Test that type arguments render inside angle brackets."""
        pet = ObjectType(name='Pet')
        page = ObjectType(name='Page', generic_args=[pet])

        assert builder.resolver.canonical_name(page) == 'Page<Pet>'

    def test_generic_name_with_primitives_and_arrays(self, builder):
        """Test that primitives render by format and arrays as List<...>."""
        pet = ObjectType(name='Pet')
        pair = ObjectType(
            name='Pair',
            generic_args=[integer(), string(), ArrayType(items=pet)],
        )

        assert builder.resolver.canonical_name(pair) == 'Pair<int64, string, List<Pet>>'

    def test_generic_name_is_stable(self, builder):
        """Test that computing a canonical name twice gives the same result."""
        page = ObjectType(name='Page', generic_args=[ObjectType(name='Pet')])

        first = builder.resolver.canonical_name(page)
        second = builder.resolver.canonical_name(page)

        assert first == second

    def test_generic_types_are_separate_definitions(self, builder):
        """Test that differently parameterized types get their own definitions."""
        pets = ObjectType(name='Page', generic_args=[ObjectType(name='Pet')])
        owners = ObjectType(name='Page', generic_args=[ObjectType(name='Owner')])
        root = ObjectType(
            name='Root',
            fields=[FieldDescriptor('pets', pets), FieldDescriptor('owners', owners)],
        )

        schema = builder.build(root)

        assert schema.properties['pets'].reference == '#/definitions/Page<Pet>'
        assert set(builder.definitions) == {'Page<Pet>', 'Page<Owner>'}

    def test_rename_replaces_base_name(self, builder):
        """Test that an explicit rename is used as the canonical name."""
        pet = ObjectType(name='PetModel', rename='Pet')

        assert builder.resolver.canonical_name(pet) == 'Pet'

    def test_inline_type_has_no_name(self, builder):
        """Test that inline types have no canonical name."""
        assert builder.resolver.canonical_name(ObjectType(name='X', inline=True)) is None
