"""
Pydantic V2 models for Swagger/OpenAPI 2.0 documents.

Based on the JSON Schema at: http://swagger.io/v2/schema.json, extended with
the few JSON Schema keywords (``anyOf``, ``const``) that schemas built from
tagged unions need.

Usage Example:
-------------

    from schemashift.openapi.v2 import Swagger

    spec = Swagger.model_validate(swagger_dict)

    # Access the parsed data
    print(f"API: {spec.info.title} v{spec.info.version}")
    for path, path_item in spec.paths.items():
        if path_item.get:
            print(f"GET {path}: {path_item.get.summary}")

    # Upgrade to OpenAPI 3.0
    openapi, warnings = spec.upgrade()

Features:
---------
- Swagger 2.0 document support
- ``Schema`` doubles as the in-memory schema node produced by
  ``schemashift.schema.SchemaBuilder``
- Vendor extensions (x-*) support
- Proper validation of path parameters (must be required)
- JSON reference ($ref) support
- All OAuth2 flows supported
"""

from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, Iterator, List, Literal, Optional, Set, Tuple, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    HttpUrl,
    field_validator,
    model_serializer,
    model_validator,
)

if TYPE_CHECKING:
    from schemashift.config import ConversionConfig
    from schemashift.openapi.v3 import OpenAPI


# ============================================================================
# Enums
# ============================================================================


class SchemeType(str, Enum):
    """Transfer protocol schemes."""

    HTTP = "http"
    HTTPS = "https"
    WS = "ws"
    WSS = "wss"


class ParameterLocation(str, Enum):
    """Parameter location types."""

    QUERY = "query"
    HEADER = "header"
    PATH = "path"
    FORM_DATA = "formData"
    BODY = "body"


class DataType(str, Enum):
    """Data types a schema node can declare."""

    INTEGER = "integer"
    NUMBER = "number"
    STRING = "string"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"
    FILE = "file"

    def accepts_format(self, fmt: Union["DataTypeFormat", str]) -> bool:
        """Whether ``fmt`` is a meaningful refinement of this data type.

        Strings accept any format, known or not.
        """
        if self is DataType.STRING:
            return True
        if self is DataType.INTEGER:
            return fmt in (DataTypeFormat.INT32, DataTypeFormat.INT64)
        if self is DataType.NUMBER:
            return fmt in (DataTypeFormat.FLOAT, DataTypeFormat.DOUBLE)
        if self is DataType.FILE:
            return fmt == DataTypeFormat.BINARY
        return False


class PrimitiveType(str, Enum):
    """Primitive types for non-body parameters."""

    STRING = "string"
    NUMBER = "number"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    ARRAY = "array"
    FILE = "file"


class DataTypeFormat(str, Enum):
    """Known refinements of a data type."""

    INT32 = "int32"
    INT64 = "int64"
    FLOAT = "float"
    DOUBLE = "double"
    BYTE = "byte"
    BINARY = "binary"
    DATE = "date"
    DATE_TIME = "date-time"
    PASSWORD = "password"
    URL = "url"
    UUID = "uuid"
    IP = "ip"
    IPV4 = "ipv4"
    IPV6 = "ipv6"
    OTHER = "other"

    @classmethod
    def from_token(cls, token: str) -> Optional["DataTypeFormat"]:
        """Return the format named by ``token``, or None if it is unknown."""
        if token == "datetime":
            return cls.DATE_TIME
        try:
            return cls(token)
        except ValueError:
            return None


class CollectionFormat(str, Enum):
    """Collection format for array parameters."""

    CSV = "csv"
    SSV = "ssv"
    TSV = "tsv"
    PIPES = "pipes"


class CollectionFormatWithMulti(str, Enum):
    """Collection format including multi for query/formData parameters."""

    CSV = "csv"
    SSV = "ssv"
    TSV = "tsv"
    PIPES = "pipes"
    MULTI = "multi"


class SecuritySchemeType(str, Enum):
    """Security scheme types."""

    BASIC = "basic"
    API_KEY = "apiKey"
    OAUTH2 = "oauth2"


class OAuth2Flow(str, Enum):
    """OAuth2 flow types."""

    IMPLICIT = "implicit"
    PASSWORD = "password"
    APPLICATION = "application"
    ACCESS_CODE = "accessCode"


class ApiKeyLocation(str, Enum):
    """API key location."""

    HEADER = "header"
    QUERY = "query"


# ============================================================================
# Base Models
# ============================================================================


class BaseModelWithVendorExtensions(BaseModel):
    """Base model that allows vendor extensions (x- fields)."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    @property
    def vendor_extensions(self) -> Dict[str, Any]:
        """Vendor extensions (x-*) declared on this object."""
        if not self.__pydantic_extra__:
            return {}
        return {k: v for k, v in self.__pydantic_extra__.items() if k.startswith("x-")}


class JsonReference(BaseModel):
    """JSON Reference object."""

    ref: str = Field(..., alias="$ref")

    model_config = ConfigDict(populate_by_name=True)


# ============================================================================
# Info Models
# ============================================================================


class Contact(BaseModelWithVendorExtensions):
    """Contact information for the API."""

    name: Optional[str] = None
    url: Optional[HttpUrl] = None
    email: Optional[str] = None


class License(BaseModelWithVendorExtensions):
    """License information for the API."""

    name: str
    url: Optional[HttpUrl] = None


class Info(BaseModelWithVendorExtensions):
    """General information about the API."""

    title: str
    version: str
    description: Optional[str] = None
    terms_of_service: Optional[str] = Field(None, alias="termsOfService")
    contact: Optional[Contact] = None
    license: Optional[License] = None


class ExternalDocs(BaseModelWithVendorExtensions):
    """External documentation reference."""

    url: HttpUrl
    description: Optional[str] = None


class Tag(BaseModelWithVendorExtensions):
    """API tag for grouping operations."""

    name: str
    description: Optional[str] = None
    external_docs: Optional[ExternalDocs] = Field(None, alias="externalDocs")


# ============================================================================
# Schema Model
# ============================================================================

# Containers that are left out of the serialized form when empty.
_OMIT_WHEN_EMPTY = {"properties", "required", "enum", "enum_", "anyOf", "any_of", "allOf", "all_of"}


class Schema(BaseModel):
    """
    Schema node for Swagger 2.0 documents.

    This is the in-memory schema representation shared by the schema builder
    and the document converter. ``name`` is the identity used for reference
    generation and is never serialized; ``reference`` marks the node as a pure
    pointer to another definition. Vendor extensions live in ``extensions``
    and are flattened into the serialized object.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = Field(None, exclude=True)
    reference: Optional[str] = Field(None, alias="$ref")
    data_type: Optional[DataType] = Field(None, alias="type")
    format: Optional[Union[DataTypeFormat, str]] = None
    title: Optional[str] = None
    description: Optional[str] = None
    default: Optional[Any] = None
    multiple_of: Optional[float] = Field(None, alias="multipleOf", gt=0)
    maximum: Optional[float] = None
    exclusive_maximum: Optional[bool] = Field(None, alias="exclusiveMaximum")
    minimum: Optional[float] = None
    exclusive_minimum: Optional[bool] = Field(None, alias="exclusiveMinimum")
    max_length: Optional[int] = Field(None, alias="maxLength", ge=0)
    min_length: Optional[int] = Field(None, alias="minLength", ge=0)
    pattern: Optional[str] = None
    max_items: Optional[int] = Field(None, alias="maxItems", ge=0)
    min_items: Optional[int] = Field(None, alias="minItems", ge=0)
    unique_items: Optional[bool] = Field(None, alias="uniqueItems")
    properties: Dict[str, "Schema"] = Field(default_factory=dict)
    required: Set[str] = Field(default_factory=set)
    items: Optional["Schema"] = None
    enum_: List[Any] = Field(default_factory=list, alias="enum")
    const_: Optional[Any] = Field(None, alias="const")
    any_of: List["Schema"] = Field(default_factory=list, alias="anyOf")
    all_of: List["Schema"] = Field(default_factory=list, alias="allOf")
    additional_properties: Optional[Union["Schema", bool]] = Field(
        None, alias="additionalProperties"
    )
    discriminator: Optional[str] = None
    read_only: Optional[bool] = Field(None, alias="readOnly")
    example: Optional[Any] = None
    extensions: Dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def collect_extensions(cls, data: Any) -> Any:
        """Move x-* keys of a raw schema object into ``extensions``."""
        if not isinstance(data, dict):
            return data
        extensions = {k: v for k, v in data.items() if isinstance(k, str) and k.startswith("x-")}
        if not extensions:
            return data
        result = {k: v for k, v in data.items() if k not in extensions}
        result["extensions"] = {**result.get("extensions", {}), **extensions}
        return result

    @field_validator("format", mode="before")
    @classmethod
    def parse_format(cls, value: Any) -> Any:
        """Known format tokens become ``DataTypeFormat``, others stay raw strings."""
        if isinstance(value, str) and not isinstance(value, DataTypeFormat):
            return DataTypeFormat.from_token(value) or value
        return value

    @model_validator(mode="after")
    def default_enum_type(self) -> "Schema":
        """Enumerations without a declared type are string enumerations."""
        if self.enum_ and self.data_type is None and self.reference is None:
            self.data_type = DataType.STRING
        return self

    @model_serializer(mode="wrap")
    def serialize(self, handler) -> Dict[str, Any]:
        data = handler(self)
        extensions = data.pop("extensions", None) or {}
        for key in list(data):
            if key in _OMIT_WHEN_EMPTY and not data[key]:
                del data[key]
        if data.get("required"):
            data["required"] = sorted(data["required"])
        data.update(extensions)
        return data

    @property
    def is_reference(self) -> bool:
        return bool(self.reference)


SchemaNode = Schema


class FileSchema(BaseModelWithVendorExtensions):
    """Schema for file uploads."""

    type: Literal["file"]
    format: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    default: Optional[Any] = None
    required: Optional[List[str]] = None
    read_only: bool = Field(False, alias="readOnly")
    external_docs: Optional[ExternalDocs] = Field(None, alias="externalDocs")
    example: Optional[Any] = None


# ============================================================================
# Parameter Models
# ============================================================================


class PrimitivesItems(BaseModelWithVendorExtensions):
    """Items object for primitive array parameters and headers."""

    type: Optional[DataType] = None
    format: Optional[str] = None
    items: Optional["PrimitivesItems"] = None
    collection_format: Optional[CollectionFormat] = Field(
        CollectionFormat.CSV, alias="collectionFormat"
    )
    default: Optional[Any] = None
    maximum: Optional[float] = None
    exclusive_maximum: Optional[bool] = Field(None, alias="exclusiveMaximum")
    minimum: Optional[float] = None
    exclusive_minimum: Optional[bool] = Field(None, alias="exclusiveMinimum")
    max_length: Optional[int] = Field(None, alias="maxLength", ge=0)
    min_length: Optional[int] = Field(None, alias="minLength", ge=0)
    pattern: Optional[str] = None
    max_items: Optional[int] = Field(None, alias="maxItems", ge=0)
    min_items: Optional[int] = Field(None, alias="minItems", ge=0)
    unique_items: Optional[bool] = Field(None, alias="uniqueItems")
    enum: Optional[List[Any]] = None
    multiple_of: Optional[float] = Field(None, alias="multipleOf", gt=0)


class BaseParameterFields(BaseModelWithVendorExtensions):
    """Common fields for all parameter types."""

    name: str
    in_: ParameterLocation = Field(..., alias="in")
    description: Optional[str] = None
    required: bool = False


class BodyParameter(BaseParameterFields):
    """Body parameter definition."""

    in_: Literal[ParameterLocation.BODY] = Field(
        ParameterLocation.BODY, alias="in"
    )
    schema_: Schema = Field(..., alias="schema")
    required: bool = False


class NonBodyParameter(BaseParameterFields):
    """Non-body parameter (query, header, path, formData)."""

    in_: Literal[
        ParameterLocation.QUERY,
        ParameterLocation.HEADER,
        ParameterLocation.PATH,
        ParameterLocation.FORM_DATA,
    ] = Field(..., alias="in")
    type: PrimitiveType
    format: Optional[str] = None
    allow_empty_value: Optional[bool] = Field(None, alias="allowEmptyValue")
    items: Optional[PrimitivesItems] = None
    collection_format: Optional[
        Union[CollectionFormat, CollectionFormatWithMulti]
    ] = Field(None, alias="collectionFormat")
    default: Optional[Any] = None
    maximum: Optional[float] = None
    exclusive_maximum: Optional[bool] = Field(None, alias="exclusiveMaximum")
    minimum: Optional[float] = None
    exclusive_minimum: Optional[bool] = Field(None, alias="exclusiveMinimum")
    max_length: Optional[int] = Field(None, alias="maxLength", ge=0)
    min_length: Optional[int] = Field(None, alias="minLength", ge=0)
    pattern: Optional[str] = None
    max_items: Optional[int] = Field(None, alias="maxItems", ge=0)
    min_items: Optional[int] = Field(None, alias="minItems", ge=0)
    unique_items: Optional[bool] = Field(None, alias="uniqueItems")
    enum: Optional[List[Any]] = None
    multiple_of: Optional[float] = Field(None, alias="multipleOf", gt=0)

    @model_validator(mode="after")
    def validate_path_required(self) -> "NonBodyParameter":
        """Path parameters must be required."""
        if self.in_ == ParameterLocation.PATH and not self.required:
            raise ValueError("Path parameters must have required=True")
        return self


Parameter = Union[BodyParameter, NonBodyParameter, JsonReference]


def _parse_parameter(value: Any) -> Any:
    if not isinstance(value, dict):
        return value
    if "$ref" in value:
        return JsonReference.model_validate(value)
    if value.get("in") == ParameterLocation.BODY.value:
        return BodyParameter.model_validate(value)
    return NonBodyParameter.model_validate(value)


# ============================================================================
# Response Models
# ============================================================================


class Header(BaseModelWithVendorExtensions):
    """Response header definition."""

    type: DataType
    format: Optional[str] = None
    items: Optional[PrimitivesItems] = None
    collection_format: Optional[CollectionFormat] = Field(
        CollectionFormat.CSV, alias="collectionFormat"
    )
    default: Optional[Any] = None
    maximum: Optional[float] = None
    minimum: Optional[float] = None
    max_length: Optional[int] = Field(None, alias="maxLength", ge=0)
    min_length: Optional[int] = Field(None, alias="minLength", ge=0)
    pattern: Optional[str] = None
    max_items: Optional[int] = Field(None, alias="maxItems", ge=0)
    min_items: Optional[int] = Field(None, alias="minItems", ge=0)
    unique_items: Optional[bool] = Field(None, alias="uniqueItems")
    enum: Optional[List[Any]] = None
    multiple_of: Optional[float] = Field(None, alias="multipleOf", gt=0)
    description: Optional[str] = None


class Response(BaseModelWithVendorExtensions):
    """Response object."""

    description: str
    schema_: Optional[Union[FileSchema, Schema]] = Field(None, alias="schema")
    headers: Optional[Dict[str, Header]] = None
    examples: Optional[Dict[str, Any]] = None


ResponseValue = Union[Response, JsonReference]


class Responses(BaseModelWithVendorExtensions):
    """
    Response definitions for an operation.

    Keys are HTTP status codes (as strings), "default", or vendor extensions.
    Keys are kept verbatim here; the converter decides which ones survive.
    """

    def __getitem__(self, key: str) -> ResponseValue:
        """Allow dict-like access to response codes."""
        return self.__pydantic_extra__[key]

    def __len__(self) -> int:
        return len(self.__pydantic_extra__ or {})

    def items(self) -> Iterator[Tuple[str, Any]]:
        """Iterate over (status key, response) pairs in declaration order."""
        return iter((self.__pydantic_extra__ or {}).items())

    @model_validator(mode="before")
    @classmethod
    def convert_responses(cls, data: Any) -> Any:
        """Convert raw response objects to Response or JsonReference objects."""
        if not isinstance(data, dict):
            return data

        result = {}
        for key, value in data.items():
            key = str(key)
            if key.startswith("x-") or not isinstance(value, dict):
                result[key] = value
            elif "$ref" in value:
                result[key] = JsonReference.model_validate(value)
            else:
                result[key] = Response.model_validate(value)

        return result


# ============================================================================
# Operation Models
# ============================================================================


class Operation(BaseModelWithVendorExtensions):
    """Operation (HTTP method) on a path."""

    tags: Optional[List[str]] = None
    summary: Optional[str] = None
    description: Optional[str] = None
    external_docs: Optional[ExternalDocs] = Field(None, alias="externalDocs")
    operation_id: Optional[str] = Field(None, alias="operationId")
    consumes: Optional[List[str]] = None
    produces: Optional[List[str]] = None
    parameters: List[Parameter] = Field(default_factory=list)
    responses: Responses = Field(default_factory=Responses)
    schemes: Optional[List[SchemeType]] = None
    deprecated: bool = False
    security: Optional[List[Dict[str, List[str]]]] = None

    @field_validator("parameters", mode="before")
    @classmethod
    def parse_parameters(cls, value: Any) -> Any:
        if isinstance(value, list):
            return [_parse_parameter(p) for p in value]
        return value


HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch")


class PathItem(BaseModelWithVendorExtensions):
    """Path item with operations."""

    ref: Optional[str] = Field(None, alias="$ref")
    get: Optional[Operation] = None
    put: Optional[Operation] = None
    post: Optional[Operation] = None
    delete: Optional[Operation] = None
    options: Optional[Operation] = None
    head: Optional[Operation] = None
    patch: Optional[Operation] = None
    parameters: Optional[List[Parameter]] = None

    @field_validator("parameters", mode="before")
    @classmethod
    def parse_parameters(cls, value: Any) -> Any:
        if isinstance(value, list):
            return [_parse_parameter(p) for p in value]
        return value

    def operations(self) -> Iterator[Tuple[str, Operation]]:
        """Iterate over (method, operation) pairs that are defined."""
        for method in HTTP_METHODS:
            operation = getattr(self, method)
            if operation is not None:
                yield method, operation


class Paths(BaseModelWithVendorExtensions):
    """
    Paths object containing all API paths.

    Keys must start with "/" (except vendor extensions starting with "x-").
    """

    def items(self) -> Iterator[Tuple[str, Any]]:
        """Iterate over (path, path item) pairs in declaration order."""
        return iter((self.__pydantic_extra__ or {}).items())

    @model_validator(mode="before")
    @classmethod
    def validate_and_convert_paths(cls, data: Any) -> Any:
        """Validate path keys and convert path items to PathItem objects."""
        if not isinstance(data, dict):
            return data

        result = {}
        for key, value in data.items():
            if not key.startswith("x-") and not key.startswith("/"):
                raise ValueError(f"Path must start with '/', got: {key}")

            if key.startswith("/") and isinstance(value, dict):
                result[key] = PathItem.model_validate(value)
            else:
                result[key] = value

        return result


# ============================================================================
# Security Models
# ============================================================================


class BasicAuthenticationSecurity(BaseModelWithVendorExtensions):
    """Basic authentication security scheme."""

    type: Literal[SecuritySchemeType.BASIC]
    description: Optional[str] = None


class ApiKeySecurity(BaseModelWithVendorExtensions):
    """API key security scheme."""

    type: Literal[SecuritySchemeType.API_KEY]
    name: str
    in_: ApiKeyLocation = Field(..., alias="in")
    description: Optional[str] = None


class OAuth2ImplicitSecurity(BaseModelWithVendorExtensions):
    """OAuth2 implicit flow security scheme."""

    type: Literal[SecuritySchemeType.OAUTH2]
    flow: Literal[OAuth2Flow.IMPLICIT]
    authorization_url: str = Field(..., alias="authorizationUrl")
    scopes: Dict[str, str] = {}
    description: Optional[str] = None


class OAuth2PasswordSecurity(BaseModelWithVendorExtensions):
    """OAuth2 password flow security scheme."""

    type: Literal[SecuritySchemeType.OAUTH2]
    flow: Literal[OAuth2Flow.PASSWORD]
    token_url: str = Field(..., alias="tokenUrl")
    scopes: Dict[str, str] = {}
    description: Optional[str] = None


class OAuth2ApplicationSecurity(BaseModelWithVendorExtensions):
    """OAuth2 application flow security scheme."""

    type: Literal[SecuritySchemeType.OAUTH2]
    flow: Literal[OAuth2Flow.APPLICATION]
    token_url: str = Field(..., alias="tokenUrl")
    scopes: Dict[str, str] = {}
    description: Optional[str] = None


class OAuth2AccessCodeSecurity(BaseModelWithVendorExtensions):
    """OAuth2 access code flow security scheme."""

    type: Literal[SecuritySchemeType.OAUTH2]
    flow: Literal[OAuth2Flow.ACCESS_CODE]
    authorization_url: str = Field(..., alias="authorizationUrl")
    token_url: str = Field(..., alias="tokenUrl")
    scopes: Dict[str, str] = {}
    description: Optional[str] = None


SecurityScheme = Union[
    BasicAuthenticationSecurity,
    ApiKeySecurity,
    OAuth2ImplicitSecurity,
    OAuth2PasswordSecurity,
    OAuth2ApplicationSecurity,
    OAuth2AccessCodeSecurity,
]


# ============================================================================
# Main Swagger Model
# ============================================================================


class Swagger(BaseModelWithVendorExtensions):
    """
    Root Swagger 2.0 specification object.

    This is the main model representing a complete Swagger/OpenAPI 2.0 document.
    """

    swagger: Literal["2.0"] = "2.0"
    info: Info
    host: Optional[str] = Field(None, pattern=r"^[^{}/ :\\]+(?::\d+)?$")
    base_path: Optional[str] = Field(None, alias="basePath", pattern=r"^/")
    schemes: Optional[List[SchemeType]] = None
    consumes: Optional[List[str]] = None
    produces: Optional[List[str]] = None
    paths: Paths = Field(default_factory=Paths)
    definitions: Optional[Dict[str, Schema]] = None
    parameters: Optional[Dict[str, Parameter]] = None
    responses: Optional[Dict[str, Response]] = None
    security_definitions: Optional[Dict[str, SecurityScheme]] = Field(
        None, alias="securityDefinitions"
    )
    security: Optional[List[Dict[str, List[str]]]] = None
    tags: Optional[List[Tag]] = None
    external_docs: Optional[ExternalDocs] = Field(None, alias="externalDocs")

    @field_validator("parameters", mode="before")
    @classmethod
    def parse_parameters(cls, value: Any) -> Any:
        if isinstance(value, dict):
            return {name: _parse_parameter(p) for name, p in value.items()}
        return value

    def upgrade(
        self, config: Optional["ConversionConfig"] = None
    ) -> Tuple["OpenAPI", List[str]]:
        """
        Upgrade this Swagger 2.0 specification to OpenAPI 3.0.

        Returns:
            A tuple of (OpenAPI 3.0 model, list of warnings)

        Warnings are generated for:
        - Lossy conversions (dropped response keys, unsupported formats)
        - Structural changes (OAuth2 flow restructuring)
        - Missing data that requires defaults
        - Collection format conversions
        """
        # Import here to avoid circular imports
        from schemashift.convert import DocumentConverter

        return DocumentConverter(config).convert(self)


# Update forward references for recursive models
Schema.model_rebuild()
PrimitivesItems.model_rebuild()
