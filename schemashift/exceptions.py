"""Custom exceptions for schemashift.

This module defines a hierarchy of exceptions used at the boundaries of the
library: building schemas from descriptors, loading documents and writing
output. The build and conversion passes themselves never raise for degraded
input; they fall back to documented defaults and report warnings instead.
"""


class SchemaShiftError(Exception):
    """Base exception for all schemashift errors.

    All exceptions raised by schemashift inherit from this class, making it
    easy to catch all schemashift-related errors with a single except clause.

    Example:
        try:
            builder.build(descriptor)
        except SchemaShiftError as e:
            print(f"schemashift error: {e}")
    """

    def __init__(self, message: str, *args, **kwargs):
        self.message = message
        super().__init__(message, *args, **kwargs)


class DescriptorError(SchemaShiftError):
    """A type descriptor cannot be turned into a schema.

    Attributes:
        descriptor: Name of the offending descriptor, if it has one.
        reason: Explanation of what is wrong with it.
    """

    def __init__(self, descriptor: str | None, reason: str):
        self.descriptor = descriptor
        self.reason = reason
        message = f"Invalid descriptor '{descriptor or '<anonymous>'}': {reason}"
        super().__init__(message)


class SecuritySchemeError(DescriptorError):
    """A security scheme descriptor is inconsistent.

    Raised when a descriptor declares both a scheme type and a parent scheme,
    or neither of them.
    """

    pass


class DocumentError(SchemaShiftError):
    """Base exception for document loading errors."""

    pass


class DocumentLoadError(DocumentError):
    """Failed to read an API document from a source.

    Attributes:
        source: The path that failed to load.
        cause: The underlying exception that caused the failure.
    """

    def __init__(self, source: str, cause: Exception | None = None):
        self.source = source
        self.cause = cause
        message = f"Failed to load document from '{source}'"
        if cause:
            message += f': {cause}'
        super().__init__(message)


class DocumentValidationError(DocumentError):
    """A document does not match the Swagger 2.0 or OpenAPI 3.0 models.

    Attributes:
        source: The source path of the invalid document.
        errors: List of validation error messages.
    """

    def __init__(self, source: str, errors: list[str] | None = None):
        self.source = source
        self.errors = errors or []
        message = f"Document validation failed for '{source}'"
        if errors:
            message += f': {"; ".join(errors)}'
        super().__init__(message)


class ConfigurationError(SchemaShiftError):
    """Error in configuration.

    Attributes:
        config_path: The path to the configuration file, if applicable.
        field: The specific configuration field that is invalid.
    """

    def __init__(
        self, message: str, config_path: str | None = None, field: str | None = None
    ):
        self.config_path = config_path
        self.field = field
        full_message = message
        if config_path:
            full_message = f"{message} in '{config_path}'"
        if field:
            full_message += f' (field: {field})'
        super().__init__(full_message)


class OutputError(SchemaShiftError):
    """Error writing a converted document.

    Attributes:
        output_path: The path where output was being written.
        cause: The underlying exception that caused the failure.
    """

    def __init__(self, output_path: str, cause: Exception | None = None):
        self.output_path = output_path
        self.cause = cause
        message = f"Failed to write output to '{output_path}'"
        if cause:
            message += f': {cause}'
        super().__init__(message)
