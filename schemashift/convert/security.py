"""Security scheme and requirement conversion.

Swagger 2.0 declares one OAuth2 flow per scheme; OpenAPI 3.0 nests flows
under ``flows`` and renames two of them (``application`` becomes
``clientCredentials`` and ``accessCode`` becomes ``authorizationCode``).
Basic authentication becomes an ``http`` scheme.
"""

import logging

from schemashift.openapi import v2 as openapi_v2
from schemashift.openapi import v3 as openapi_v3

__all__ = ['convert_security_scheme', 'convert_security_requirements']

logger = logging.getLogger(__name__)


def convert_security_scheme(
    scheme: openapi_v2.SecurityScheme, warnings: list[str]
) -> openapi_v3.SecurityScheme:
    """Convert a single security scheme."""
    extensions = scheme.vendor_extensions

    if isinstance(scheme, openapi_v2.BasicAuthenticationSecurity):
        return openapi_v3.HTTPSecurityScheme(
            scheme='basic', description=scheme.description, **extensions
        )

    if isinstance(scheme, openapi_v2.ApiKeySecurity):
        return openapi_v3.APIKeySecurityScheme(
            name=scheme.name,
            in_=scheme.in_.value,
            description=scheme.description,
            **extensions,
        )

    if isinstance(scheme, openapi_v2.OAuth2ImplicitSecurity):
        flows = openapi_v3.OAuthFlows(
            implicit=openapi_v3.ImplicitOAuthFlow(
                authorizationUrl=scheme.authorization_url,
                scopes=dict(scheme.scopes),
            )
        )
    elif isinstance(scheme, openapi_v2.OAuth2PasswordSecurity):
        flows = openapi_v3.OAuthFlows(
            password=openapi_v3.PasswordOAuthFlow(
                tokenUrl=scheme.token_url,
                scopes=dict(scheme.scopes),
            )
        )
    elif isinstance(scheme, openapi_v2.OAuth2ApplicationSecurity):
        _warn(warnings, 'OAuth2 application flow converted to clientCredentials for OpenAPI 3.0')
        flows = openapi_v3.OAuthFlows(
            clientCredentials=openapi_v3.ClientCredentialsFlow(
                tokenUrl=scheme.token_url,
                scopes=dict(scheme.scopes),
            )
        )
    elif isinstance(scheme, openapi_v2.OAuth2AccessCodeSecurity):
        _warn(warnings, 'OAuth2 accessCode flow converted to authorizationCode for OpenAPI 3.0')
        flows = openapi_v3.OAuthFlows(
            authorizationCode=openapi_v3.AuthorizationCodeOAuthFlow(
                authorizationUrl=scheme.authorization_url,
                tokenUrl=scheme.token_url,
                scopes=dict(scheme.scopes),
            )
        )
    else:
        raise TypeError(f'Unsupported security scheme: {type(scheme).__name__}')

    return openapi_v3.OAuth2SecurityScheme(
        flows=flows, description=scheme.description, **extensions
    )


def convert_security_requirements(
    requirements: list[dict[str, list[str]]] | None,
) -> list[openapi_v3.SecurityRequirement] | None:
    """Convert security requirement sets.

    An empty list means no security was declared and maps to None; it is
    not carried over as an empty requirement list.
    """
    if not requirements:
        return None
    return [
        openapi_v3.SecurityRequirement({name: list(scopes) for name, scopes in requirement.items()})
        for requirement in requirements
    ]


def _warn(warnings: list[str], message: str) -> None:
    logger.info(message)
    warnings.append(message)
