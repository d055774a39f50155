"""Test fixtures for schemashift tests.

This module provides sample Swagger 2.0 and OpenAPI 3.0 documents shared by
the converter and CLI tests.
"""

# Minimal Swagger 2.0 document
MINIMAL_SWAGGER = {
    'swagger': '2.0',
    'info': {'title': 'Minimal API', 'version': '1.0.0'},
    'paths': {},
}

# Minimal OpenAPI 3.0 document
MINIMAL_OPENAPI = {
    'openapi': '3.0.3',
    'info': {'title': 'Minimal API', 'version': '1.0.0'},
    'paths': {},
}

# Petstore-like Swagger 2.0 document exercising most of the conversion
PETSTORE_SWAGGER = {
    'swagger': '2.0',
    'info': {
        'title': 'Petstore API',
        'version': '1.0.0',
        'description': 'A sample Petstore API for testing',
        'contact': {'name': 'API Team', 'email': 'api@example.com'},
    },
    'host': 'petstore.example.com',
    'basePath': '/v1',
    'schemes': ['https'],
    'consumes': ['application/json'],
    'produces': ['application/json'],
    'paths': {
        '/pets': {
            'get': {
                'operationId': 'listPets',
                'summary': 'List all pets',
                'tags': ['pets'],
                'parameters': [
                    {
                        'name': 'limit',
                        'in': 'query',
                        'type': 'integer',
                        'format': 'int32',
                        'required': False,
                    },
                    {
                        'name': 'tags',
                        'in': 'query',
                        'type': 'array',
                        'items': {'type': 'string'},
                        'collectionFormat': 'multi',
                    },
                ],
                'responses': {
                    '200': {
                        'description': 'A list of pets',
                        'schema': {
                            'type': 'array',
                            'items': {'$ref': '#/definitions/Pet'},
                        },
                    },
                    'default': {
                        'description': 'Unexpected error',
                        'schema': {'$ref': '#/definitions/Error'},
                    },
                },
            },
            'post': {
                'operationId': 'createPet',
                'summary': 'Create a pet',
                'tags': ['pets'],
                'parameters': [
                    {
                        'name': 'body',
                        'in': 'body',
                        'required': True,
                        'schema': {'$ref': '#/definitions/Pet'},
                    },
                ],
                'responses': {
                    '201': {'description': 'Pet created'},
                    '404': {'$ref': '#/responses/NotFound'},
                },
                'security': [{'petstore_auth': ['write:pets']}],
            },
        },
        '/pets/{petId}': {
            'parameters': [{'$ref': '#/parameters/PetId'}],
            'get': {
                'operationId': 'getPet',
                'responses': {
                    '200': {
                        'description': 'The pet',
                        'schema': {'$ref': '#/definitions/Pet'},
                        'headers': {
                            'X-Rate-Limit': {'type': 'integer', 'format': 'int32'},
                        },
                    },
                    '404': {'$ref': '#/responses/NotFound'},
                },
                'security': [],
            },
        },
        '/pets/{petId}/photo': {
            'post': {
                'operationId': 'uploadPhoto',
                'consumes': ['multipart/form-data'],
                'parameters': [
                    {'$ref': '#/parameters/PetId'},
                    {
                        'name': 'file',
                        'in': 'formData',
                        'type': 'file',
                        'required': True,
                    },
                    {'name': 'caption', 'in': 'formData', 'type': 'string'},
                ],
                'responses': {'200': {'description': 'Uploaded'}},
            },
        },
        'x-internal': {'owner': 'pets-team'},
    },
    'definitions': {
        'Pet': {
            'type': 'object',
            'required': ['name', 'id'],
            'properties': {
                'id': {'type': 'integer', 'format': 'int64'},
                'name': {'type': 'string'},
                'status': {'type': 'string', 'enum': ['available', 'sold']},
                'owner': {'$ref': '#/definitions/Owner'},
            },
        },
        'Owner': {
            'type': 'object',
            'properties': {'name': {'type': 'string'}},
            'x-priority': 2,
        },
        'Error': {
            'type': 'object',
            'properties': {
                'code': {'type': 'integer', 'format': 'int32'},
                'message': {'type': 'string'},
            },
        },
    },
    'parameters': {
        'PetId': {
            'name': 'petId',
            'in': 'path',
            'required': True,
            'type': 'string',
        },
    },
    'responses': {
        'NotFound': {
            'description': 'Not found',
            'schema': {'$ref': '#/definitions/Error'},
        },
    },
    'securityDefinitions': {
        'petstore_auth': {
            'type': 'oauth2',
            'flow': 'implicit',
            'authorizationUrl': 'https://petstore.example.com/oauth/authorize',
            'scopes': {'write:pets': 'modify pets', 'read:pets': 'read pets'},
        },
        'api_key': {'type': 'apiKey', 'name': 'api_key', 'in': 'header'},
        'basic': {'type': 'basic'},
    },
    'security': [{'api_key': []}],
    'tags': [{'name': 'pets', 'description': 'Everything about pets'}],
}

# All four Swagger 2.0 OAuth2 flows
OAUTH2_FLOWS_SWAGGER = {
    'swagger': '2.0',
    'info': {'title': 'OAuth2 API', 'version': '1.0.0'},
    'paths': {},
    'securityDefinitions': {
        'implicit': {
            'type': 'oauth2',
            'flow': 'implicit',
            'authorizationUrl': 'https://auth.example.com/authorize',
            'scopes': {'read': 'read access'},
        },
        'password': {
            'type': 'oauth2',
            'flow': 'password',
            'tokenUrl': 'https://auth.example.com/token',
            'scopes': {},
        },
        'application': {
            'type': 'oauth2',
            'flow': 'application',
            'tokenUrl': 'https://auth.example.com/token',
            'scopes': {'admin': 'admin access'},
        },
        'accessCode': {
            'type': 'oauth2',
            'flow': 'accessCode',
            'authorizationUrl': 'https://auth.example.com/authorize',
            'tokenUrl': 'https://auth.example.com/token',
            'scopes': {'write': 'write access'},
        },
    },
}


def swagger_with_operation(operation: dict, **document) -> dict:
    """Wrap a single ``POST /items`` operation in a minimal Swagger document."""
    return {
        'swagger': '2.0',
        'info': {'title': 'Test API', 'version': '1.0.0'},
        'host': 'api.example.com',
        'paths': {'/items': {'post': operation}},
        **document,
    }
