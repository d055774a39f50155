from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PositiveFloat,
    RootModel,
    StringConstraints,
    model_serializer,
    model_validator,
)


class Reference(BaseModel):
    model_config = ConfigDict(extra='forbid', populate_by_name=True)

    ref: str = Field(..., alias='$ref')


class Contact(BaseModel):
    model_config = ConfigDict(extra='allow')

    name: Optional[str] = None
    url: Optional[str] = None
    email: Optional[str] = None


class License(BaseModel):
    model_config = ConfigDict(extra='allow')

    name: str
    url: Optional[str] = None


class ServerVariable(BaseModel):
    model_config = ConfigDict(extra='allow')

    enum: Optional[List[str]] = None
    default: str
    description: Optional[str] = None


class Type(Enum):
    integer = 'integer'
    number = 'number'
    string = 'string'
    boolean = 'boolean'
    array = 'array'
    object = 'object'


class Discriminator(BaseModel):
    propertyName: str
    mapping: Optional[Dict[str, str]] = None


class Example(BaseModel):
    model_config = ConfigDict(extra='allow')

    summary: Optional[str] = None
    description: Optional[str] = None
    value: Optional[Any] = None
    externalValue: Optional[str] = None


class Style(Enum):
    simple = 'simple'


class ParameterStyle(Enum):
    matrix = 'matrix'
    label = 'label'
    form = 'form'
    simple = 'simple'
    spaceDelimited = 'spaceDelimited'
    pipeDelimited = 'pipeDelimited'
    deepObject = 'deepObject'


class SecurityRequirement(RootModel[Dict[str, List[str]]]):
    pass


class ExternalDocumentation(BaseModel):
    model_config = ConfigDict(extra='allow')

    description: Optional[str] = None
    url: str


class APIKeySecurityScheme(BaseModel):
    model_config = ConfigDict(extra='allow', populate_by_name=True)

    type: Literal['apiKey'] = 'apiKey'
    name: str
    in_: Literal['header', 'query', 'cookie'] = Field(..., alias='in')
    description: Optional[str] = None


class HTTPSecurityScheme(BaseModel):
    model_config = ConfigDict(extra='allow')

    type: Literal['http'] = 'http'
    scheme: str
    bearerFormat: Optional[str] = None
    description: Optional[str] = None


class OpenIdConnectSecurityScheme(BaseModel):
    model_config = ConfigDict(extra='allow')

    type: Literal['openIdConnect'] = 'openIdConnect'
    openIdConnectUrl: str
    description: Optional[str] = None


class ImplicitOAuthFlow(BaseModel):
    model_config = ConfigDict(extra='allow')

    authorizationUrl: str
    refreshUrl: Optional[str] = None
    scopes: Dict[str, str]


class PasswordOAuthFlow(BaseModel):
    model_config = ConfigDict(extra='allow')

    tokenUrl: str
    refreshUrl: Optional[str] = None
    scopes: Dict[str, str]


class ClientCredentialsFlow(BaseModel):
    model_config = ConfigDict(extra='allow')

    tokenUrl: str
    refreshUrl: Optional[str] = None
    scopes: Dict[str, str]


class AuthorizationCodeOAuthFlow(BaseModel):
    model_config = ConfigDict(extra='allow')

    authorizationUrl: str
    tokenUrl: str
    refreshUrl: Optional[str] = None
    scopes: Dict[str, str]


class OAuthFlows(BaseModel):
    model_config = ConfigDict(extra='allow')

    implicit: Optional[ImplicitOAuthFlow] = None
    password: Optional[PasswordOAuthFlow] = None
    clientCredentials: Optional[ClientCredentialsFlow] = None
    authorizationCode: Optional[AuthorizationCodeOAuthFlow] = None


class OAuth2SecurityScheme(BaseModel):
    model_config = ConfigDict(extra='allow')

    type: Literal['oauth2'] = 'oauth2'
    flows: OAuthFlows
    description: Optional[str] = None


SecurityScheme = Annotated[
    Union[
        APIKeySecurityScheme,
        HTTPSecurityScheme,
        OAuth2SecurityScheme,
        OpenIdConnectSecurityScheme,
    ],
    Field(discriminator='type'),
]


class Info(BaseModel):
    model_config = ConfigDict(extra='allow')

    title: str
    description: Optional[str] = None
    termsOfService: Optional[str] = None
    contact: Optional[Contact] = None
    license: Optional[License] = None
    version: str


class Server(BaseModel):
    model_config = ConfigDict(extra='allow')

    url: str
    description: Optional[str] = None
    variables: Optional[Dict[str, ServerVariable]] = None


class Schema(BaseModel):
    # x-* extensions are carried as extra fields
    model_config = ConfigDict(extra='allow')

    title: Optional[str] = None
    multipleOf: Optional[PositiveFloat] = None
    maximum: Optional[float] = None
    exclusiveMaximum: Optional[bool] = None
    minimum: Optional[float] = None
    exclusiveMinimum: Optional[bool] = None
    maxLength: Optional[Annotated[int, Field(ge=0)]] = None
    minLength: Optional[Annotated[int, Field(ge=0)]] = None
    pattern: Optional[str] = None
    maxItems: Optional[Annotated[int, Field(ge=0)]] = None
    minItems: Optional[Annotated[int, Field(ge=0)]] = None
    uniqueItems: Optional[bool] = None
    required: Optional[List[str]] = Field(None, min_length=1)
    enum: Optional[List[Any]] = Field(None, min_length=1)
    type: Optional[Type] = None
    not_: Optional[Union[Reference, Schema]] = Field(None, alias='not')
    allOf: Optional[List[Union[Reference, Schema]]] = None
    oneOf: Optional[List[Union[Reference, Schema]]] = None
    anyOf: Optional[List[Union[Reference, Schema]]] = None
    items: Optional[Union[Reference, Schema]] = None
    properties: Optional[Dict[str, Union[Reference, Schema]]] = None
    additionalProperties: Optional[Union[Reference, Schema, bool]] = None
    description: Optional[str] = None
    format: Optional[str] = None
    default: Optional[Any] = None
    nullable: Optional[bool] = None
    discriminator: Optional[Discriminator] = None
    readOnly: Optional[bool] = None
    writeOnly: Optional[bool] = None
    example: Optional[Any] = None
    externalDocs: Optional[ExternalDocumentation] = None
    deprecated: Optional[bool] = None


class Tag(BaseModel):
    model_config = ConfigDict(extra='allow')

    name: str
    description: Optional[str] = None
    externalDocs: Optional[ExternalDocumentation] = None


class MediaType(BaseModel):
    model_config = ConfigDict(extra='allow', populate_by_name=True)

    schema_: Optional[Union[Reference, Schema]] = Field(None, alias='schema')
    example: Optional[Any] = None
    examples: Optional[Dict[str, Union[Reference, Example]]] = None


class Header(BaseModel):
    model_config = ConfigDict(extra='allow', populate_by_name=True)

    description: Optional[str] = None
    required: Optional[bool] = None
    deprecated: Optional[bool] = None
    style: Optional[Style] = None
    explode: Optional[bool] = None
    schema_: Optional[Union[Reference, Schema]] = Field(None, alias='schema')
    example: Optional[Any] = None


class Response(BaseModel):
    model_config = ConfigDict(extra='allow')

    description: str
    headers: Optional[Dict[str, Union[Reference, Header]]] = None
    content: Optional[Dict[str, MediaType]] = None


class Responses(BaseModel):
    """Responses keyed by numeric status code, plus the catch-all ``default``."""

    model_config = ConfigDict(extra='forbid')

    codes: Dict[int, Union[Reference, Response]] = Field(default_factory=dict)
    default: Optional[Union[Reference, Response]] = None

    @model_validator(mode='before')
    @classmethod
    def split_status_codes(cls, data: Any) -> Any:
        if not isinstance(data, dict) or 'codes' in data:
            return data

        codes = {}
        for key, value in data.items():
            key = str(key)
            if key == 'default':
                continue
            if not key.isdigit():
                raise ValueError(f"Response key must be a status code or 'default', got: {key}")
            codes[int(key)] = value
        return {'codes': codes, 'default': data.get('default')}

    @model_serializer(mode='wrap')
    def serialize(self, handler) -> Dict[str, Any]:
        data = handler(self)
        result = {str(code): value for code, value in (data.get('codes') or {}).items()}
        if data.get('default') is not None:
            result['default'] = data['default']
        return result

    def __getitem__(self, code: int) -> Union[Reference, Response]:
        return self.codes[code]

    def __len__(self) -> int:
        return len(self.codes) + (1 if self.default is not None else 0)


class Parameter(BaseModel):
    model_config = ConfigDict(extra='allow', populate_by_name=True)

    name: str
    in_: Literal['query', 'header', 'path', 'cookie'] = Field(..., alias='in')
    description: Optional[str] = None
    required: Optional[bool] = None
    deprecated: Optional[bool] = None
    allowEmptyValue: Optional[bool] = None
    style: Optional[ParameterStyle] = None
    explode: Optional[bool] = None
    schema_: Optional[Union[Reference, Schema]] = Field(None, alias='schema')
    example: Optional[Any] = None

    @model_validator(mode='after')
    def validate_path_required(self) -> Parameter:
        if self.in_ == 'path' and not self.required:
            raise ValueError('Path parameters must have required=True')
        return self


class RequestBody(BaseModel):
    model_config = ConfigDict(extra='allow')

    description: Optional[str] = None
    content: Dict[str, MediaType]
    required: Optional[bool] = None


class Operation(BaseModel):
    model_config = ConfigDict(extra='allow')

    tags: Optional[List[str]] = None
    summary: Optional[str] = None
    description: Optional[str] = None
    externalDocs: Optional[ExternalDocumentation] = None
    operationId: Optional[str] = None
    parameters: Optional[List[Union[Reference, Parameter]]] = None
    requestBody: Optional[Union[Reference, RequestBody]] = None
    responses: Responses
    deprecated: Optional[bool] = None
    security: Optional[List[SecurityRequirement]] = None
    servers: Optional[List[Server]] = None


class PathItem(BaseModel):
    model_config = ConfigDict(extra='allow', populate_by_name=True)

    field_ref: Optional[str] = Field(None, alias='$ref')
    summary: Optional[str] = None
    description: Optional[str] = None
    get: Optional[Operation] = None
    put: Optional[Operation] = None
    post: Optional[Operation] = None
    delete: Optional[Operation] = None
    options: Optional[Operation] = None
    head: Optional[Operation] = None
    patch: Optional[Operation] = None
    trace: Optional[Operation] = None
    servers: Optional[List[Server]] = None
    parameters: Optional[List[Union[Reference, Parameter]]] = None


class Paths(RootModel[Dict[Annotated[str, StringConstraints(pattern=r'^/')], PathItem]]):
    def __getitem__(self, path: str) -> PathItem:
        return self.root[path]

    def __len__(self) -> int:
        return len(self.root)


class Components(BaseModel):
    model_config = ConfigDict(extra='allow')

    schemas: Optional[Dict[str, Union[Reference, Schema]]] = None
    responses: Optional[Dict[str, Union[Reference, Response]]] = None
    parameters: Optional[Dict[str, Union[Reference, Parameter]]] = None
    examples: Optional[Dict[str, Union[Reference, Example]]] = None
    requestBodies: Optional[Dict[str, Union[Reference, RequestBody]]] = None
    headers: Optional[Dict[str, Union[Reference, Header]]] = None
    securitySchemes: Optional[Dict[str, Union[Reference, SecurityScheme]]] = None


class OpenAPI(BaseModel):
    model_config = ConfigDict(extra='allow')

    openapi: Annotated[str, StringConstraints(pattern=r'^3\.0\.\d(-.+)?$')]
    info: Info
    externalDocs: Optional[ExternalDocumentation] = None
    servers: Optional[List[Server]] = None
    security: Optional[List[SecurityRequirement]] = None
    tags: Optional[List[Tag]] = None
    paths: Paths
    components: Optional[Components] = None

    def dump(self) -> Dict[str, Any]:
        """Return the document as plain JSON-compatible data."""
        return self.model_dump(by_alias=True, exclude_none=True, mode='json')


Schema.model_rebuild()
MediaType.model_rebuild()
Header.model_rebuild()
Response.model_rebuild()
Responses.model_rebuild()
Parameter.model_rebuild()
Operation.model_rebuild()
PathItem.model_rebuild()
Paths.model_rebuild()
Components.model_rebuild()
OpenAPI.model_rebuild()
