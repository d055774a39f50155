import os
from pathlib import Path

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from schemashift.exceptions import ConfigurationError

DEFAULT_FILENAMES = ['schemashift.yaml', 'schemashift.yml']


class ConversionConfig(BaseSettings):
    """Options of the Swagger 2.0 to OpenAPI 3.0 conversion.

    Values can also be set through ``SCHEMASHIFT_``-prefixed environment
    variables, e.g. ``SCHEMASHIFT_KEEP_DEFAULT_RESPONSE=true``.
    """

    model_config = SettingsConfigDict(env_prefix='SCHEMASHIFT_', extra='forbid')

    openapi_version: str = Field(
        '3.0.3',
        pattern=r'^3\.0\.\d(-.+)?$',
        description='Version written to the openapi field of converted documents.',
    )

    default_media_type: str = Field(
        'application/json',
        description='Media type used for bodies and responses when neither the operation nor the document declares one.',
    )

    keep_default_response: bool = Field(
        False,
        description="Keep the 'default' response in the converted responses instead of dropping it.",
    )


def load_yaml(path: str | Path) -> dict:
    import yaml

    return yaml.load(Path(path).read_text(), Loader=yaml.FullLoader) or {}


def _validate(data: dict, source: str) -> ConversionConfig:
    try:
        return ConversionConfig(**data)
    except ValidationError as e:
        field = '.'.join(str(p) for p in e.errors()[0]['loc']) if e.errors() else None
        raise ConfigurationError('Invalid configuration', source, field) from e


def get_config(path: str | None = None) -> ConversionConfig:
    """Load configuration from a file, or return the default config.

    Without an explicit path, ``schemashift.yaml``/``schemashift.yml`` and
    then the ``[tool.schemashift]`` table of ``pyproject.toml`` in the
    current directory are tried.
    """
    if path:
        if not Path(path).exists():
            raise ConfigurationError('Configuration file not found', str(path))
        return _validate(load_yaml(path), str(path))

    cwd = os.getcwd()

    for filename in DEFAULT_FILENAMES:
        candidate = Path(cwd) / filename
        if candidate.exists():
            return _validate(load_yaml(candidate), str(candidate))

    candidate = Path(cwd) / 'pyproject.toml'

    if candidate.exists():
        import tomllib

        pyproject = tomllib.loads(candidate.read_text())
        tools = pyproject.get('tool', {})

        if 'schemashift' in tools:
            return _validate(tools['schemashift'], str(candidate))

    return ConversionConfig()
