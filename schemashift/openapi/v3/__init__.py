"""OpenAPI 3.0 specification models."""

from schemashift.openapi.v3.v3 import (
    APIKeySecurityScheme,
    AuthorizationCodeOAuthFlow,
    ClientCredentialsFlow,
    Components,
    Contact,
    Discriminator,
    Example,
    ExternalDocumentation,
    Header,
    HTTPSecurityScheme,
    ImplicitOAuthFlow,
    Info,
    License,
    MediaType,
    OAuth2SecurityScheme,
    OAuthFlows,
    OpenAPI,
    OpenIdConnectSecurityScheme,
    Operation,
    Parameter,
    ParameterStyle,
    PasswordOAuthFlow,
    PathItem,
    Paths,
    Reference,
    RequestBody,
    Response,
    Responses,
    Schema,
    SecurityRequirement,
    SecurityScheme,
    Server,
    Style,
    Tag,
    Type,
)

__all__ = [
    'OpenAPI',
    'Info',
    'Contact',
    'License',
    'Server',
    'Tag',
    'ExternalDocumentation',
    'Components',
    'Paths',
    'PathItem',
    'Operation',
    'Parameter',
    'ParameterStyle',
    'RequestBody',
    'MediaType',
    'Example',
    'Response',
    'Responses',
    'Header',
    'Style',
    'Schema',
    'Type',
    'Discriminator',
    'Reference',
    'SecurityRequirement',
    'SecurityScheme',
    'APIKeySecurityScheme',
    'HTTPSecurityScheme',
    'OAuth2SecurityScheme',
    'OpenIdConnectSecurityScheme',
    'OAuthFlows',
    'ImplicitOAuthFlow',
    'PasswordOAuthFlow',
    'ClientCredentialsFlow',
    'AuthorizationCodeOAuthFlow',
]
