"""Sorting of Swagger 2.0 operation parameters into OpenAPI 3.0 buckets.

Swagger 2.0 keeps request payloads in the parameter list: one ``body``
parameter, or any number of ``formData`` parameters. OpenAPI 3.0 moves them
into a single ``requestBody``. The bucketer scans an operation's parameters
in order:

- references pass through with their target rewritten, unless they point
  at a body or form parameter, which is resolved and bucketed;
- the first body parameter becomes the request body;
- form parameters become properties of one synthesized object schema;
- everything else becomes an OpenAPI 3.0 parameter.

An explicit body always wins over the synthesized form object.
"""

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from schemashift.openapi import v2 as openapi_v2
from schemashift.openapi import v3 as openapi_v3
from schemashift.openapi.v2 import ParameterLocation, PrimitiveType
from schemashift.utils import update_ref

if TYPE_CHECKING:
    from schemashift.convert.converter import DocumentConverter

__all__ = ['BucketResult', 'ParameterBucketer']

logger = logging.getLogger(__name__)

MULTIPART_FORM = 'multipart/form-data'
URLENCODED_FORM = 'application/x-www-form-urlencoded'


@dataclass
class BucketResult:
    parameters: list[openapi_v3.Reference | openapi_v3.Parameter] = field(default_factory=list)
    request_body: openapi_v3.RequestBody | None = None


@dataclass
class _FormObject:
    """Object schema accumulated from form parameters."""

    properties: dict[str, openapi_v3.Schema] = field(default_factory=dict)
    required: list[str] = field(default_factory=list)
    has_file: bool = False

    def add(self, name: str, schema: openapi_v3.Schema, required: bool) -> None:
        self.properties[name] = schema
        if required and name not in self.required:
            self.required.append(name)

    def schema(self) -> openapi_v3.Schema:
        return openapi_v3.Schema(
            type=openapi_v3.Type.object,
            properties=dict(self.properties),
            required=list(self.required) or None,
        )


class ParameterBucketer:
    """Splits parameters into v3 parameters and at most one request body."""

    def __init__(self, converter: 'DocumentConverter'):
        self.converter = converter

    def bucket(
        self,
        parameters: list[openapi_v2.Parameter],
        consumes: list[str] | None,
    ) -> BucketResult:
        result = BucketResult()
        form: _FormObject | None = None

        for parameter in parameters:
            if isinstance(parameter, openapi_v2.JsonReference):
                target = self.converter.resolve_parameter(parameter.ref)
                if not self.is_payload(target):
                    result.parameters.append(openapi_v3.Reference(ref=update_ref(parameter.ref)))
                    continue
                parameter = target

            if isinstance(parameter, openapi_v2.BodyParameter):
                if result.request_body is None:
                    result.request_body = self.converter.request_body(parameter, consumes)
                else:
                    self.converter.warn(
                        f"Ignoring additional body parameter '{parameter.name}'"
                    )
            elif parameter.in_ == ParameterLocation.FORM_DATA:
                if form is None:
                    form = _FormObject()
                schema = self.converter.translator.parameter_schema(parameter)
                if parameter.description:
                    schema.description = parameter.description
                form.add(parameter.name, schema, parameter.required)
                form.has_file = form.has_file or parameter.type is PrimitiveType.FILE
            else:
                result.parameters.append(self.converter.parameter(parameter))

        if form is not None:
            if result.request_body is None:
                result.request_body = self._form_body(form, consumes)
            else:
                logger.debug(
                    'Discarding form parameters %s in favour of the explicit body',
                    list(form.properties),
                )

        return result

    def _form_body(self, form: _FormObject, consumes: list[str] | None) -> openapi_v3.RequestBody:
        media_types = consumes
        if not media_types:
            media_types = [MULTIPART_FORM if form.has_file else URLENCODED_FORM]
            self.converter.warn(
                f'No media type declared for form parameters, using {media_types[0]}'
            )

        schema = form.schema()
        return openapi_v3.RequestBody(
            content={
                media_type: openapi_v3.MediaType(schema=schema.model_copy(deep=True))
                for media_type in media_types
            },
            required=True if form.required else None,
        )

    @staticmethod
    def is_payload(parameter: openapi_v2.Parameter | None) -> bool:
        if isinstance(parameter, openapi_v2.BodyParameter):
            return True
        return (
            isinstance(parameter, openapi_v2.NonBodyParameter)
            and parameter.in_ == ParameterLocation.FORM_DATA
        )
