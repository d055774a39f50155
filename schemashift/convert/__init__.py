"""Swagger 2.0 to OpenAPI 3.0 document conversion."""

from schemashift.convert.converter import DocumentConverter, parse_status_code
from schemashift.convert.parameters import BucketResult, ParameterBucketer
from schemashift.convert.schemas import CONVERSION_ERROR_KEY, SchemaTranslator
from schemashift.convert.security import (
    convert_security_requirements,
    convert_security_scheme,
)

__all__ = [
    'DocumentConverter',
    'ParameterBucketer',
    'BucketResult',
    'SchemaTranslator',
    'CONVERSION_ERROR_KEY',
    'convert_security_scheme',
    'convert_security_requirements',
    'parse_status_code',
]
