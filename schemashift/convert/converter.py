"""Conversion of complete Swagger 2.0 documents to OpenAPI 3.0.

The conversion is a single pass over the input document and always produces
a document. Lossy or approximate steps are logged and returned as warnings:

- Response keys that are not status codes (``default``) are dropped unless
  ``keep_default_response`` is set
- Formats that do not fit their data type are dropped
- Form parameters are merged into one synthesized request body
- OAuth2 flows are restructured
- Collection formats become ``style``/``explode`` pairs
"""

import logging
import re
from typing import Any

from schemashift.config import ConversionConfig
from schemashift.convert.parameters import ParameterBucketer
from schemashift.convert.schemas import SchemaTranslator
from schemashift.convert.security import (
    convert_security_requirements,
    convert_security_scheme,
)
from schemashift.openapi import v2 as openapi_v2
from schemashift.openapi import v3 as openapi_v3
from schemashift.openapi.v2 import (
    CollectionFormat,
    CollectionFormatWithMulti,
    ParameterLocation,
    PrimitiveType,
    SchemeType,
)
from schemashift.utils import update_ref

__all__ = ['DocumentConverter', 'parse_status_code']

logger = logging.getLogger(__name__)

_STATUS_CODE_RE = re.compile(r'[0-9]{1,5}')


def parse_status_code(key: str) -> int | None:
    """Parse a response key as an unsigned 16-bit status code."""
    if not _STATUS_CODE_RE.fullmatch(key):
        return None
    code = int(key)
    return code if code <= 0xFFFF else None


class DocumentConverter:
    """Converts a Swagger 2.0 document into an OpenAPI 3.0 document.

    Example:
        converter = DocumentConverter(ConversionConfig(keep_default_response=True))
        openapi, warnings = converter.convert(swagger)
    """

    def __init__(self, config: ConversionConfig | None = None):
        self.config = config or ConversionConfig()
        self.warnings: list[str] = []
        self.translator = SchemaTranslator(self.warnings)
        self.bucketer = ParameterBucketer(self)
        self._swagger: openapi_v2.Swagger | None = None

    def convert(self, swagger: openapi_v2.Swagger) -> tuple[openapi_v3.OpenAPI, list[str]]:
        """
        Convert ``swagger`` to OpenAPI 3.0.

        Returns:
            A tuple of (OpenAPI 3.0 model, list of warnings)
        """
        self.warnings = []
        self.translator = SchemaTranslator(self.warnings)
        self._swagger = swagger

        openapi = openapi_v3.OpenAPI(
            openapi=self.config.openapi_version,
            info=self._info(),
            servers=self._servers(),
            paths=self._paths(),
            components=self._components(),
            security=convert_security_requirements(swagger.security),
            tags=self._tags(),
            externalDocs=self._external_docs(swagger.external_docs),
            **swagger.vendor_extensions,
        )
        return openapi, list(self.warnings)

    @property
    def swagger(self) -> openapi_v2.Swagger:
        if self._swagger is None:
            raise RuntimeError('No document is being converted')
        return self._swagger

    def warn(self, message: str) -> None:
        logger.warning(message)
        self.warnings.append(message)

    def resolve_parameter(self, ref: str) -> openapi_v2.Parameter | None:
        """Look up a ``#/parameters/<name>`` reference in the document being converted."""
        prefix = '#/parameters/'
        if not ref.startswith(prefix) or not self.swagger.parameters:
            return None
        return self.swagger.parameters.get(ref[len(prefix):])

    def request_body(
        self, parameter: openapi_v2.BodyParameter, consumes: list[str] | None
    ) -> openapi_v3.RequestBody:
        """Request body of an explicit body parameter, once per media type."""
        media_types = consumes or [self.config.default_media_type]
        schema = self.translator.schema(parameter.schema_)
        return openapi_v3.RequestBody(
            description=parameter.description,
            content={
                media_type: openapi_v3.MediaType(schema=schema.model_copy(deep=True))
                for media_type in media_types
            },
            required=True if parameter.required else None,
            **parameter.vendor_extensions,
        )

    def parameter(self, parameter: openapi_v2.NonBodyParameter) -> openapi_v3.Parameter:
        """Convert a query, header or path parameter."""
        style, explode = None, None
        if parameter.type == PrimitiveType.ARRAY and parameter.collection_format:
            style, explode = self._collection_format(parameter.collection_format, parameter.in_)

        return openapi_v3.Parameter(
            name=parameter.name,
            in_=parameter.in_.value,
            description=parameter.description,
            required=True if parameter.required else None,
            allowEmptyValue=parameter.allow_empty_value,
            style=style,
            explode=explode,
            schema=self.translator.parameter_schema(parameter),
            **parameter.vendor_extensions,
        )

    def responses(
        self, responses: openapi_v2.Responses, produces: list[str]
    ) -> openapi_v3.Responses:
        """Convert an operation's responses, keyed by numeric status code."""
        codes = {}
        default = None

        for key, response in responses.items():
            if not isinstance(response, (openapi_v2.Response, openapi_v2.JsonReference)):
                logger.debug("Dropping response entry '%s'", key)
                continue
            code = parse_status_code(key)
            if code is not None:
                codes[code] = self._response_or_reference(response, produces)
            elif key == 'default' and self.config.keep_default_response:
                default = self._response_or_reference(response, produces)
            else:
                logger.debug("Dropping response '%s': not a status code", key)
                self.warnings.append(f"Response '{key}' dropped: not a numeric status code")

        return openapi_v3.Responses(codes=codes, default=default)

    def response(self, response: openapi_v2.Response, produces: list[str]) -> openapi_v3.Response:
        content = None
        if response.schema_ is not None:
            schema = self.translator.schema(response.schema_)
            content = {
                media_type: openapi_v3.MediaType(schema=schema.model_copy(deep=True))
                for media_type in produces
            }

        # In OpenAPI 3.0, examples are per media type
        if response.examples:
            content = content or {}
            for media_type, example in response.examples.items():
                if media_type in content:
                    content[media_type].example = example
                else:
                    content[media_type] = openapi_v3.MediaType(example=example)

        headers = None
        if response.headers:
            headers = {
                name: self.translator.header(header)
                for name, header in response.headers.items()
            }

        return openapi_v3.Response(
            description=response.description,
            headers=headers,
            content=content,
            **response.vendor_extensions,
        )

    def _response_or_reference(
        self, response: openapi_v2.ResponseValue, produces: list[str]
    ) -> openapi_v3.Reference | openapi_v3.Response:
        if isinstance(response, openapi_v2.JsonReference):
            return openapi_v3.Reference(ref=update_ref(response.ref))
        return self.response(response, produces)

    def _info(self) -> openapi_v3.Info:
        info = self.swagger.info
        contact = None
        if info.contact:
            contact = openapi_v3.Contact(
                name=info.contact.name,
                url=str(info.contact.url) if info.contact.url else None,
                email=info.contact.email,
            )

        license_obj = None
        if info.license:
            license_obj = openapi_v3.License(
                name=info.license.name,
                url=str(info.license.url) if info.license.url else None,
            )

        return openapi_v3.Info(
            title=info.title,
            version=info.version,
            description=info.description,
            termsOfService=info.terms_of_service,
            contact=contact,
            license=license_obj,
            **info.vendor_extensions,
        )

    def _server_urls(self, schemes: list[SchemeType] | None) -> list[str]:
        host = self.swagger.host or ''
        base_path = self.swagger.base_path or ''
        if not host:
            return [base_path or '/']
        return [f'{scheme.value}://{host}{base_path}' for scheme in schemes or [SchemeType.HTTP]]

    def _servers(self) -> list[openapi_v3.Server]:
        """Convert host, basePath, and schemes to servers array."""
        if not self.swagger.host and not self.swagger.base_path:
            self.warnings.append("No host or basePath specified, defaulting to server URL '/'")
            return [openapi_v3.Server(url='/')]
        return [openapi_v3.Server(url=url) for url in self._server_urls(self.swagger.schemes)]

    def _paths(self) -> openapi_v3.Paths:
        result = {}
        for path, path_item in self.swagger.paths.items():
            if isinstance(path_item, openapi_v2.PathItem):
                result[path] = self._path_item(path_item)
            else:
                logger.debug("Dropping vendor extension '%s' of the paths object", path)
        return openapi_v3.Paths(result)

    def _path_item(self, path_item: openapi_v2.PathItem) -> openapi_v3.PathItem:
        shared: list[openapi_v2.Parameter] = []
        payload: list[openapi_v2.Parameter] = []
        for parameter in path_item.parameters or []:
            target = parameter
            if isinstance(parameter, openapi_v2.JsonReference):
                target = self.resolve_parameter(parameter.ref) or parameter
            if ParameterBucketer.is_payload(target):
                payload.append(parameter)
            else:
                shared.append(parameter)

        # Payload parameters cannot live on a v3 path item; every operation
        # inherits them unless it declares its own parameter of that name.
        operations = {
            method: self._operation(operation, _inherit(payload, operation.parameters, self))
            for method, operation in path_item.operations()
        }

        parameters = self.bucketer.bucket(shared, None).parameters if shared else None

        return openapi_v3.PathItem(
            field_ref=update_ref(path_item.ref) if path_item.ref else None,
            parameters=parameters,
            **operations,
            **path_item.vendor_extensions,
        )

    def _operation(
        self, operation: openapi_v2.Operation, parameters: list[openapi_v2.Parameter]
    ) -> openapi_v3.Operation:
        consumes = operation.consumes or self.swagger.consumes
        produces = (
            operation.produces or self.swagger.produces or [self.config.default_media_type]
        )
        bucket = self.bucketer.bucket(parameters, consumes)

        servers = None
        if operation.schemes:
            servers = [openapi_v3.Server(url=url) for url in self._server_urls(operation.schemes)]

        return openapi_v3.Operation(
            tags=operation.tags,
            summary=operation.summary,
            description=operation.description,
            externalDocs=self._external_docs(operation.external_docs),
            operationId=operation.operation_id,
            parameters=bucket.parameters or None,
            requestBody=bucket.request_body,
            responses=self.responses(operation.responses, produces),
            deprecated=True if operation.deprecated else None,
            security=convert_security_requirements(operation.security),
            servers=servers,
            **operation.vendor_extensions,
        )

    def _components(self) -> openapi_v3.Components | None:
        """Convert definitions, parameters, responses, and security to components."""
        swagger = self.swagger

        schemas = None
        if swagger.definitions:
            schemas = {
                name: self.translator.schema(schema)
                for name, schema in swagger.definitions.items()
            }

        parameters = None
        if swagger.parameters:
            parameters = {}
            for name, parameter in swagger.parameters.items():
                if ParameterBucketer.is_payload(parameter):
                    logger.debug("Parameter '%s' is inlined into request bodies", name)
                elif isinstance(parameter, openapi_v2.JsonReference):
                    parameters[name] = openapi_v3.Reference(ref=update_ref(parameter.ref))
                else:
                    parameters[name] = self.parameter(parameter)
            parameters = parameters or None

        responses = None
        if swagger.responses:
            produces = swagger.produces or [self.config.default_media_type]
            responses = {
                name: self.response(response, produces)
                for name, response in swagger.responses.items()
            }

        security_schemes = None
        if swagger.security_definitions:
            security_schemes = {
                name: convert_security_scheme(scheme, self.warnings)
                for name, scheme in swagger.security_definitions.items()
            }

        if not any([schemas, parameters, responses, security_schemes]):
            return None

        return openapi_v3.Components(
            schemas=schemas,
            parameters=parameters,
            responses=responses,
            securitySchemes=security_schemes,
        )

    def _tags(self) -> list[openapi_v3.Tag] | None:
        if not self.swagger.tags:
            return None
        return [
            openapi_v3.Tag(
                name=tag.name,
                description=tag.description,
                externalDocs=self._external_docs(tag.external_docs),
                **tag.vendor_extensions,
            )
            for tag in self.swagger.tags
        ]

    @staticmethod
    def _external_docs(
        docs: openapi_v2.ExternalDocs | None,
    ) -> openapi_v3.ExternalDocumentation | None:
        if docs is None:
            return None
        return openapi_v3.ExternalDocumentation(url=str(docs.url), description=docs.description)

    def _collection_format(
        self,
        collection_format: CollectionFormat | CollectionFormatWithMulti,
        location: ParameterLocation,
    ) -> tuple[str | None, bool | None]:
        """
        Convert collectionFormat to style and explode.

        Returns (style, explode) tuple.
        """
        default_styles = {
            ParameterLocation.QUERY: 'form',
            ParameterLocation.PATH: 'simple',
            ParameterLocation.HEADER: 'simple',
        }

        if collection_format.value == CollectionFormatWithMulti.MULTI.value:
            self.warnings.append("collectionFormat 'multi' converted to style=form with explode=true")
            return 'form', True

        collection_format = CollectionFormat(collection_format.value)
        if collection_format == CollectionFormat.TSV:
            self.warnings.append(
                "collectionFormat 'tsv' has no direct equivalent in OpenAPI 3.0, using pipeDelimited"
            )

        format_map = {
            CollectionFormat.CSV: (default_styles.get(location, 'simple'), False),
            CollectionFormat.SSV: ('spaceDelimited', False),
            CollectionFormat.TSV: ('pipeDelimited', False),
            CollectionFormat.PIPES: ('pipeDelimited', False),
        }
        return format_map[collection_format]


def _inherit(
    inherited: list[openapi_v2.Parameter],
    own: list[openapi_v2.Parameter],
    converter: DocumentConverter,
) -> list[openapi_v2.Parameter]:
    """Path-level parameters not overridden by the operation, then the operation's own."""
    if not inherited:
        return list(own)

    def key(parameter: openapi_v2.Parameter) -> Any:
        if isinstance(parameter, openapi_v2.JsonReference):
            parameter = converter.resolve_parameter(parameter.ref) or parameter
        if isinstance(parameter, openapi_v2.JsonReference):
            return parameter.ref
        return parameter.name, parameter.in_

    overridden = {key(p) for p in own}
    return [p for p in inherited if key(p) not in overridden] + list(own)

