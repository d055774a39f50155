"""OpenAPI/Swagger 2.0 specification models."""

from schemashift.openapi.v2.v2 import (
    HTTP_METHODS,
    ApiKeyLocation,
    ApiKeySecurity,
    BasicAuthenticationSecurity,
    BodyParameter,
    CollectionFormat,
    CollectionFormatWithMulti,
    Contact,
    DataType,
    DataTypeFormat,
    ExternalDocs,
    FileSchema,
    Header,
    Info,
    JsonReference,
    License,
    NonBodyParameter,
    OAuth2AccessCodeSecurity,
    OAuth2ApplicationSecurity,
    OAuth2Flow,
    OAuth2ImplicitSecurity,
    OAuth2PasswordSecurity,
    Operation,
    Parameter,
    ParameterLocation,
    PathItem,
    Paths,
    PrimitiveType,
    PrimitivesItems,
    Response,
    Responses,
    ResponseValue,
    Schema,
    SchemaNode,
    SchemeType,
    SecurityScheme,
    SecuritySchemeType,
    Swagger,
    Tag,
)

__all__ = [
    # Main model
    "Swagger",
    # Info models
    "Info",
    "Contact",
    "License",
    "Tag",
    "ExternalDocs",
    # Schema models
    "Schema",
    "SchemaNode",
    "FileSchema",
    # Parameter models
    "Parameter",
    "BodyParameter",
    "NonBodyParameter",
    "PrimitivesItems",
    # Response models
    "Response",
    "Responses",
    "ResponseValue",
    "Header",
    # Operation models
    "Operation",
    "PathItem",
    "Paths",
    "HTTP_METHODS",
    # Security models
    "SecurityScheme",
    "BasicAuthenticationSecurity",
    "ApiKeySecurity",
    "OAuth2ImplicitSecurity",
    "OAuth2PasswordSecurity",
    "OAuth2ApplicationSecurity",
    "OAuth2AccessCodeSecurity",
    # Enums
    "SchemeType",
    "ParameterLocation",
    "DataType",
    "DataTypeFormat",
    "PrimitiveType",
    "CollectionFormat",
    "CollectionFormatWithMulti",
    "SecuritySchemeType",
    "OAuth2Flow",
    "ApiKeyLocation",
    # Utilities
    "JsonReference",
]
