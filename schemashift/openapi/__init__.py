from typing import Annotated, Any, Literal

from pydantic import Discriminator, RootModel, Tag

from schemashift.openapi.v2 import Swagger
from schemashift.openapi.v3 import OpenAPI

__all__ = [
    'UniversalOpenAPI',
]


def _get_openapi_version(data: Any) -> Literal['2.0', '3.0']:
    """Discriminator function to determine the document version from raw data."""
    if isinstance(data, Swagger):
        return '2.0'
    if isinstance(data, dict) and 'swagger' in data:
        return '2.0'
    # Anything else must validate as OpenAPI 3.0
    return '3.0'


class UniversalOpenAPI(
    RootModel[
        Annotated[
            Annotated[Swagger, Tag('2.0')] | Annotated[OpenAPI, Tag('3.0')],
            Discriminator(_get_openapi_version),
        ]
    ]
):
    """Universal model that can parse Swagger 2.0 or OpenAPI 3.0 documents."""

    @property
    def is_swagger(self) -> bool:
        return isinstance(self.root, Swagger)
