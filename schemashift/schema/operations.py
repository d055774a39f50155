"""Assemble Swagger 2.0 documents from operation descriptors.

An operation descriptor names its route, its documentation and the type
descriptors of its inputs and outputs. ``DocumentAssembler`` builds every
schema through one ``SchemaBuilder`` so that named types end up once in the
document's definitions.
"""

import http
import logging
from dataclasses import dataclass, field

from schemashift.exceptions import DescriptorError
from schemashift.openapi.v2 import (
    HTTP_METHODS,
    BodyParameter,
    DataType,
    Info,
    NonBodyParameter,
    Operation,
    ParameterLocation,
    PathItem,
    Paths,
    PrimitiveType as ParameterType,
    PrimitivesItems,
    Response,
    Responses,
    Schema,
    SecurityScheme,
    Swagger,
)
from schemashift.schema.builder import SchemaBuilder
from schemashift.schema.descriptors import (
    ArrayType,
    FieldDescriptor,
    ObjectType,
    PrimitiveType,
    SecuritySchemeDescriptor,
    TypeDescriptor,
)
from schemashift.utils import split_documentation

__all__ = ['ErrorDescriptor', 'OperationDescriptor', 'DocumentAssembler']

logger = logging.getLogger(__name__)


@dataclass
class ErrorDescriptor:
    """An error response an operation may return.

    Without a description the status code's reason phrase is used.
    """

    code: int
    description: str | None = None
    schema: TypeDescriptor | None = None


@dataclass
class OperationDescriptor:
    """Everything needed to document one route.

    ``doc`` is the handler's docstring: its first paragraph becomes the
    summary and the rest the description, unless ``summary`` is given.
    ``query``, ``headers`` and ``form`` are objects whose fields expand into
    one parameter each.
    """

    method: str
    path: str
    doc: str | None = None
    summary: str | None = None
    description: str | None = None
    operation_id: str | None = None
    tags: list[str] = field(default_factory=list)
    consumes: list[str] = field(default_factory=list)
    produces: list[str] = field(default_factory=list)
    deprecated: bool = False
    skip: bool = False
    path_params: list[FieldDescriptor] = field(default_factory=list)
    query: ObjectType | None = None
    headers: ObjectType | None = None
    form: ObjectType | None = None
    body: TypeDescriptor | None = None
    response: TypeDescriptor | None = None
    response_code: int = 200
    response_description: str = 'OK'
    errors: list[ErrorDescriptor] = field(default_factory=list)
    security: list[SecuritySchemeDescriptor] = field(default_factory=list)


class DocumentAssembler:
    """Collects operations into a Swagger 2.0 document.

    Example:
        assembler = DocumentAssembler(title='Pets', version='1.0.0')
        assembler.add(OperationDescriptor(method='get', path='/pets', response=pets))
        swagger = assembler.build()
    """

    def __init__(
        self,
        title: str = 'API',
        version: str = '1.0.0',
        builder: SchemaBuilder | None = None,
    ):
        self.title = title
        self.version = version
        self.builder = builder or SchemaBuilder()
        self._path_items: dict[str, PathItem] = {}
        self._security_definitions: dict[str, SecurityScheme] = {}

    @property
    def warnings(self) -> list[str]:
        return self.builder.warnings

    def add(self, descriptor: OperationDescriptor) -> None:
        """Add one operation; skipped operations are left out of the document."""
        if descriptor.skip:
            logger.debug('Skipping %s %s', descriptor.method.upper(), descriptor.path)
            return

        method = descriptor.method.lower()
        if method not in HTTP_METHODS:
            raise DescriptorError(descriptor.operation_id, f'unsupported HTTP method: {method}')

        path_item = self._path_items.setdefault(descriptor.path, PathItem())
        if getattr(path_item, method) is not None:
            logger.warning('Replacing %s %s', method.upper(), descriptor.path)
        setattr(path_item, method, self._operation(descriptor))

    def build(self) -> Swagger:
        return Swagger(
            info=Info(title=self.title, version=self.version),
            paths=Paths.model_validate(dict(self._path_items)),
            definitions=self.builder.definitions or None,
            security_definitions=dict(self._security_definitions) or None,
        )

    def _operation(self, descriptor: OperationDescriptor) -> Operation:
        summary, description = split_documentation(descriptor.doc)
        summary = descriptor.summary or summary
        description = descriptor.description or description

        parameters = []
        for path_field in descriptor.path_params:
            parameters.append(self._parameter(path_field, ParameterLocation.PATH))
        for container, location in (
            (descriptor.query, ParameterLocation.QUERY),
            (descriptor.headers, ParameterLocation.HEADER),
            (descriptor.form, ParameterLocation.FORM_DATA),
        ):
            if container is not None:
                parameters.extend(self._parameters(container, location))
        if descriptor.body is not None:
            parameters.append(self._body(descriptor.body))

        responses: dict[str, Response] = {}
        if descriptor.response is not None:
            responses[str(descriptor.response_code)] = Response(
                description=descriptor.response_description,
                schema=self.builder.resolver.schema_with_ref(descriptor.response),
            )
        for error in descriptor.errors:
            responses[str(error.code)] = self._error(error)

        security = None
        if descriptor.security:
            security = [self._security(scheme) for scheme in descriptor.security]

        return Operation(
            tags=descriptor.tags or None,
            summary=summary,
            description=description,
            operation_id=descriptor.operation_id,
            consumes=descriptor.consumes or None,
            produces=descriptor.produces or None,
            parameters=parameters,
            responses=Responses.model_validate(responses),
            deprecated=descriptor.deprecated,
            security=security,
        )

    def _parameters(self, container: ObjectType, location: ParameterLocation) -> list[NonBodyParameter]:
        return [
            self._parameter(f, location, container)
            for f in container.fields
            if not f.skip
        ]

    def _parameter(
        self,
        descriptor: FieldDescriptor,
        location: ParameterLocation,
        container: ObjectType | None = None,
    ) -> NonBodyParameter:
        rename_all = container.rename_all if container is not None else None
        name = descriptor.rendered_name(rename_all)
        type_ = descriptor.type

        items = None
        if isinstance(type_, ArrayType):
            items = self._items(name, type_.items)
        elif not isinstance(type_, PrimitiveType):
            raise DescriptorError(name, f'{location.value} parameter must be primitive or an array')
        elif type_.data_type is DataType.OBJECT:
            raise DescriptorError(name, f'{location.value} parameter cannot be an object')

        data_type = DataType.ARRAY if items is not None else type_.data_type
        return NonBodyParameter(
            name=name,
            in_=location,
            type=ParameterType(data_type.value),
            format=getattr(type_, 'format', None),
            items=items,
            required=location is ParameterLocation.PATH or descriptor.is_required(),
            description=descriptor.description or type_.description,
        )

    def _items(self, name: str, descriptor: TypeDescriptor | None) -> PrimitivesItems:
        """Items of an array parameter.

        Items that a parameter cannot carry are left without a type; the
        converter turns them into an error placeholder.
        """
        if isinstance(descriptor, ArrayType):
            return PrimitivesItems(type=DataType.ARRAY, items=self._items(name, descriptor.items))
        if isinstance(descriptor, PrimitiveType) and descriptor.data_type not in (
            DataType.OBJECT,
            DataType.FILE,
        ):
            return PrimitivesItems(type=descriptor.data_type, format=descriptor.format)

        self.builder.warn(f"Items of parameter '{name}' must be primitive")
        return PrimitivesItems()

    def _body(self, descriptor: TypeDescriptor) -> BodyParameter:
        return BodyParameter(
            name='body',
            description=descriptor.description,
            required=True,
            schema=self.builder.resolver.schema_with_ref(descriptor),
        )

    def _error(self, error: ErrorDescriptor) -> Response:
        description = error.description
        if description is None:
            try:
                description = http.HTTPStatus(error.code).phrase
            except ValueError:
                logger.warning('Status code %s has no reason phrase', error.code)
                description = ''

        schema: Schema | None = None
        if error.schema is not None:
            schema = self.builder.resolver.schema_with_ref(error.schema)
        return Response(description=description, schema=schema)

    def _security(self, descriptor: SecuritySchemeDescriptor) -> dict[str, list[str]]:
        name, scheme = descriptor.build()
        existing = self._security_definitions.get(name)
        if existing is not None and hasattr(existing, 'scopes'):
            existing.scopes.update(getattr(scheme, 'scopes', {}))
        else:
            self._security_definitions[name] = scheme
        return descriptor.requirement()
