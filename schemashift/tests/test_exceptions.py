"""Test exception hierarchy for schemashift."""

import pytest

from schemashift.exceptions import (
    ConfigurationError,
    DescriptorError,
    DocumentError,
    DocumentLoadError,
    DocumentValidationError,
    OutputError,
    SchemaShiftError,
    SecuritySchemeError,
)


class TestHierarchy:
    """Test the exception class hierarchy."""

    @pytest.mark.parametrize(
        'error',
        [
            DescriptorError('Pet', 'broken'),
            SecuritySchemeError('oauth', 'broken'),
            DocumentLoadError('api.yaml'),
            DocumentValidationError('api.yaml'),
            ConfigurationError('bad'),
            OutputError('out.json'),
        ],
    )
    def test_all_errors_are_schemashift_errors(self, error):
        """Test that every error can be caught as SchemaShiftError."""
        assert isinstance(error, SchemaShiftError)
        assert error.message == str(error)

    def test_security_scheme_error_is_descriptor_error(self):
        """Test that security scheme errors are descriptor errors."""
        assert issubclass(SecuritySchemeError, DescriptorError)

    def test_document_errors(self):
        """Test that load and validation errors share a base class."""
        assert issubclass(DocumentLoadError, DocumentError)
        assert issubclass(DocumentValidationError, DocumentError)


class TestMessages:
    """Test exception messages and attributes."""

    def test_descriptor_error(self):
        """Test DescriptorError message and attributes."""
        error = DescriptorError('Pet', 'array without an item type')

        assert error.descriptor == 'Pet'
        assert error.reason == 'array without an item type'
        assert str(error) == "Invalid descriptor 'Pet': array without an item type"

    def test_anonymous_descriptor_error(self):
        """Test DescriptorError for a descriptor without a name."""
        assert "'<anonymous>'" in str(DescriptorError(None, 'broken'))

    def test_document_load_error_with_cause(self):
        """Test that the cause is included in the message."""
        cause = FileNotFoundError('no such file')
        error = DocumentLoadError('api.yaml', cause=cause)

        assert error.source == 'api.yaml'
        assert error.cause is cause
        assert str(error) == "Failed to load document from 'api.yaml': no such file"

    def test_document_validation_error(self):
        """Test that validation errors are listed in the message."""
        error = DocumentValidationError('api.yaml', ['info: Field required', 'paths: Invalid'])

        assert error.errors == ['info: Field required', 'paths: Invalid']
        assert str(error).endswith('info: Field required; paths: Invalid')

    def test_configuration_error(self):
        """Test ConfigurationError message with path and field."""
        error = ConfigurationError('Invalid configuration', 'schemashift.yaml', 'openapi_version')

        assert str(error) == (
            "Invalid configuration in 'schemashift.yaml' (field: openapi_version)"
        )

    def test_output_error(self):
        """Test OutputError message with a cause."""
        error = OutputError('out.json', cause=PermissionError('denied'))

        assert error.output_path == 'out.json'
        assert str(error) == "Failed to write output to 'out.json': denied"
