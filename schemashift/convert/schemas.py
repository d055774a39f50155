"""Translation of Swagger 2.0 schemas, items and headers to OpenAPI 3.0 schemas.

Translation never fails: formats that do not fit their data type are
dropped, enum values that do not fit are discarded, and items that cannot
be expressed become placeholder schemas carrying the error message. Each of
these cases is logged and recorded as a warning.
"""

import logging
from typing import Any

from schemashift.openapi import v2 as openapi_v2
from schemashift.openapi import v3 as openapi_v3
from schemashift.openapi.v2 import DataType, DataTypeFormat
from schemashift.utils import CONVERSION_ERROR_KEY, update_ref

__all__ = ['SchemaTranslator', 'CONVERSION_ERROR_KEY']

logger = logging.getLogger(__name__)

SchemaOrReference = openapi_v3.Reference | openapi_v3.Schema

# v2 attribute name -> v3 keyword, shared by schemas, items, parameters and headers
_CONSTRAINTS = (
    ('default', 'default'),
    ('multiple_of', 'multipleOf'),
    ('maximum', 'maximum'),
    ('exclusive_maximum', 'exclusiveMaximum'),
    ('minimum', 'minimum'),
    ('exclusive_minimum', 'exclusiveMinimum'),
    ('max_length', 'maxLength'),
    ('min_length', 'minLength'),
    ('pattern', 'pattern'),
    ('max_items', 'maxItems'),
    ('min_items', 'minItems'),
    ('unique_items', 'uniqueItems'),
)

# String formats an item schema may declare
_ITEM_STRING_FORMATS = (
    DataTypeFormat.BYTE,
    DataTypeFormat.BINARY,
    DataTypeFormat.DATE,
    DataTypeFormat.DATE_TIME,
    DataTypeFormat.PASSWORD,
)


def _format_value(fmt: DataTypeFormat | str) -> str:
    return fmt.value if isinstance(fmt, DataTypeFormat) else fmt


def _constraints(source: Any) -> dict[str, Any]:
    result = {}
    for attribute, keyword in _CONSTRAINTS:
        value = getattr(source, attribute, None)
        if value is not None:
            result[keyword] = value
    return result


class SchemaTranslator:
    """Translates v2 schema shapes, appending diagnostics to ``warnings``."""

    def __init__(self, warnings: list[str] | None = None):
        self.warnings = warnings if warnings is not None else []

    def schema(
        self, node: openapi_v2.Schema | openapi_v2.FileSchema
    ) -> SchemaOrReference:
        """Translate a schema node; references become pure ``$ref`` objects."""
        if isinstance(node, openapi_v2.FileSchema):
            return openapi_v3.Schema(
                type=openapi_v3.Type.string, format='binary', description=node.description
            )

        if node.reference:
            return openapi_v3.Reference(ref=update_ref(node.reference))

        fields: dict[str, Any] = _constraints(node)
        for attribute in ('title', 'description', 'example'):
            value = getattr(node, attribute)
            if value is not None:
                fields[attribute] = value
        if node.read_only:
            fields['readOnly'] = True
        if node.discriminator:
            fields['discriminator'] = openapi_v3.Discriminator(propertyName=node.discriminator)

        if node.data_type is not None:
            fields.update(self._typed(node))
        elif node.any_of:
            fields['anyOf'] = [self.schema(child) for child in node.any_of]
        elif node.all_of:
            fields['allOf'] = [self.schema(child) for child in node.all_of]
        elif isinstance(node.const_, str):
            fields['type'] = openapi_v3.Type.string
            fields['enum'] = [node.const_]
        elif node.properties:
            fields.update(self._object(node))
        else:
            fields['type'] = openapi_v3.Type.object

        fields.update(node.extensions)
        return openapi_v3.Schema.model_validate(fields)

    def items(self, items: openapi_v2.PrimitivesItems) -> SchemaOrReference:
        """Translate the items of an array parameter or header."""
        if items.type is None:
            return self.error_schema('Invalid item, it should have a data type')
        if items.type in (DataType.FILE, DataType.OBJECT):
            return self.error_schema(f'Invalid item data type: {items.type.value}')

        fields: dict[str, Any] = _constraints(items)
        fields['type'] = openapi_v3.Type(items.type.value)

        if items.format:
            fmt = DataTypeFormat.from_token(items.format) or items.format
            valid = items.type.accepts_format(fmt)
            if items.type is DataType.STRING:
                valid = fmt in _ITEM_STRING_FORMATS
            if not valid:
                return self.error_schema(f"Invalid data type format: '{items.format}'")
            fields['format'] = _format_value(fmt)

        enum = self._coerce_enum(items.type, items.enum or [])
        if enum:
            fields['enum'] = enum

        if items.type is DataType.ARRAY and items.items is not None:
            fields['items'] = self.items(items.items)

        return openapi_v3.Schema.model_validate(fields)

    def parameter_schema(
        self, param: openapi_v2.NonBodyParameter | openapi_v2.Header
    ) -> openapi_v3.Schema:
        """Schema of a non-body parameter or a response header."""
        data_type = DataType(param.type.value)
        if data_type is DataType.FILE:
            return openapi_v3.Schema(type=openapi_v3.Type.string, format='binary')

        fields: dict[str, Any] = _constraints(param)
        fields['type'] = openapi_v3.Type(data_type.value)

        fmt = self.format(data_type, param.format, getattr(param, 'name', None))
        if fmt is not None:
            fields['format'] = fmt

        enum = self._coerce_enum(data_type, param.enum or [])
        if enum:
            fields['enum'] = enum

        if data_type is DataType.ARRAY:
            if param.items is not None:
                fields['items'] = self.items(param.items)
            else:
                self._warn(f"Array parameter '{getattr(param, 'name', '')}' declares no items")

        return openapi_v3.Schema.model_validate(fields)

    def header(self, header: openapi_v2.Header) -> openapi_v3.Header:
        return openapi_v3.Header(
            description=header.description,
            schema=self.parameter_schema(header),
            **header.vendor_extensions,
        )

    def format(
        self,
        data_type: DataType,
        fmt: DataTypeFormat | str | None,
        context: str | None = None,
    ) -> str | None:
        """Return ``fmt`` if it fits ``data_type``, otherwise None with a warning."""
        if fmt is None:
            return None
        if isinstance(fmt, str) and not isinstance(fmt, DataTypeFormat):
            fmt = DataTypeFormat.from_token(fmt) or fmt
        if not data_type.accepts_format(fmt):
            where = f" on '{context}'" if context else ''
            self._warn(
                f"Format '{_format_value(fmt)}' is not valid for type "
                f"'{data_type.value}'{where}, dropping it"
            )
            return None
        return _format_value(fmt)

    def error_schema(self, message: str) -> openapi_v3.Schema:
        """Placeholder schema that shows ``message`` in the converted document."""
        self._warn(message)
        return openapi_v3.Schema.model_validate(
            {'description': message, CONVERSION_ERROR_KEY: message}
        )

    def _typed(self, node: openapi_v2.Schema) -> dict[str, Any]:
        data_type = node.data_type

        if data_type is DataType.FILE:
            return {'type': openapi_v3.Type.string, 'format': 'binary'}

        if data_type is DataType.OBJECT:
            return self._object(node)

        fields: dict[str, Any] = {'type': openapi_v3.Type(data_type.value)}

        if data_type is DataType.ARRAY:
            if node.items is not None:
                fields['items'] = self.schema(node.items)
            return fields

        if data_type is DataType.BOOLEAN:
            return fields

        fmt = self.format(data_type, node.format, node.name or node.title)
        if fmt is not None:
            fields['format'] = fmt

        values = list(node.enum_)
        if not values and node.const_ is not None:
            values = [node.const_]
        enum = self._coerce_enum(data_type, values)
        if enum:
            fields['enum'] = enum
        return fields

    def _object(self, node: openapi_v2.Schema) -> dict[str, Any]:
        fields: dict[str, Any] = {'type': openapi_v3.Type.object}
        if node.properties:
            fields['properties'] = {
                name: self.schema(child) for name, child in node.properties.items()
            }
        if node.required:
            fields['required'] = sorted(node.required)
        if isinstance(node.additional_properties, bool):
            fields['additionalProperties'] = node.additional_properties
        elif node.additional_properties is not None:
            fields['additionalProperties'] = self.schema(node.additional_properties)
        return fields

    def _coerce_enum(self, data_type: DataType, values: list[Any]) -> list[Any]:
        """Keep the enum values that fit ``data_type``."""
        result = []
        for value in values:
            coerced = _coerce(data_type, value)
            if coerced is None:
                self._warn(f"Enum value {value!r} does not fit type '{data_type.value}', dropping it")
                continue
            result.append(coerced)
        return result

    def _warn(self, message: str) -> None:
        logger.warning(message)
        self.warnings.append(message)


def _coerce(data_type: DataType, value: Any) -> Any:
    if value is None:
        return None
    if data_type is DataType.STRING:
        return value if isinstance(value, str) else None
    if data_type is DataType.BOOLEAN:
        return value if isinstance(value, bool) else None
    if isinstance(value, bool):
        return None
    if data_type is DataType.INTEGER:
        if isinstance(value, int):
            return value
        if isinstance(value, float) and value.is_integer():
            return int(value)
        if isinstance(value, str):
            try:
                return int(value)
            except ValueError:
                return None
        return None
    if data_type is DataType.NUMBER:
        if isinstance(value, (int, float)):
            return value
        if isinstance(value, str):
            try:
                return float(value)
            except ValueError:
                return None
        return None
    return value
