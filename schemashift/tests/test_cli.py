"""Test CLI functionality."""

import json

import pytest
import yaml
from typer.testing import CliRunner

from schemashift import __version__
from schemashift.cli import app
from schemashift.tests.fixtures import (
    MINIMAL_OPENAPI,
    PETSTORE_SWAGGER,
    swagger_with_operation,
)


@pytest.fixture
def runner():
    """Fixture providing CLI test runner."""
    return CliRunner()


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    """Run the command inside an empty directory so no config file is picked up."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def petstore_yaml(workdir):
    path = workdir / 'petstore.yaml'
    path.write_text(yaml.safe_dump(PETSTORE_SWAGGER))
    return path


class TestConvertCommand:
    """Test the convert command."""

    def test_yaml_to_json_file(self, runner, workdir, petstore_yaml):
        """Test converting a YAML Swagger document into a JSON file."""
        output = workdir / 'openapi.json'

        result = runner.invoke(app, ['convert', str(petstore_yaml), '-o', str(output)])

        assert result.exit_code == 0
        document = json.loads(output.read_text())
        assert document['openapi'] == '3.0.3'
        assert document['components']['schemas']['Pet']['required'] == ['id', 'name']
        assert list(document['paths']['/pets']['get']['responses']) == ['200']

    def test_yaml_output(self, runner, workdir, petstore_yaml):
        """Test writing the converted document as YAML."""
        output = workdir / 'openapi.yaml'

        result = runner.invoke(
            app, ['convert', str(petstore_yaml), '-o', str(output), '--format', 'yaml']
        )

        assert result.exit_code == 0
        document = yaml.safe_load(output.read_text())
        assert document['servers'] == [{'url': 'https://petstore.example.com/v1'}]

    def test_stdout(self, runner, workdir):
        """Test that the document is printed when no output file is given."""
        source = workdir / 'items.json'
        source.write_text(json.dumps(swagger_with_operation({'responses': {'200': {'description': 'OK'}}})))

        result = runner.invoke(app, ['convert', str(source)])

        assert result.exit_code == 0
        document = json.loads(result.stdout)
        assert document['paths']['/items']['post']['responses'] == {'200': {'description': 'OK'}}

    def test_warnings_are_reported(self, runner, workdir, petstore_yaml):
        """Test that conversion warnings are printed."""
        result = runner.invoke(
            app, ['convert', str(petstore_yaml), '-o', str(workdir / 'out.json')]
        )

        assert result.exit_code == 0
        assert 'Warning:' in result.output

    def test_config_file(self, runner, workdir, petstore_yaml):
        """Test that an explicit config file is applied."""
        config = workdir / 'custom.yaml'
        config.write_text('keep_default_response: true\nopenapi_version: 3.0.0\n')
        output = workdir / 'openapi.json'

        result = runner.invoke(
            app, ['convert', str(petstore_yaml), '-o', str(output), '-c', str(config)]
        )

        assert result.exit_code == 0
        document = json.loads(output.read_text())
        assert document['openapi'] == '3.0.0'
        assert 'default' in document['paths']['/pets']['get']['responses']

    def test_openapi_document_passes_through(self, runner, workdir):
        """Test that an OpenAPI 3.0 document is written back unchanged."""
        source = workdir / 'openapi.json'
        source.write_text(json.dumps(MINIMAL_OPENAPI))
        output = workdir / 'out.json'

        result = runner.invoke(app, ['convert', str(source), '-o', str(output)])

        assert result.exit_code == 0
        assert json.loads(output.read_text()) == MINIMAL_OPENAPI

    def test_missing_source(self, runner, workdir):
        """Test that a missing source file fails."""
        result = runner.invoke(app, ['convert', str(workdir / 'missing.yaml')])

        assert result.exit_code == 1
        assert 'Error:' in result.output

    def test_invalid_document(self, runner, workdir):
        """Test that a document that is not valid Swagger fails."""
        source = workdir / 'broken.yaml'
        source.write_text(yaml.safe_dump({'swagger': '2.0', 'paths': {}}))

        result = runner.invoke(app, ['convert', str(source)])

        assert result.exit_code == 1
        assert 'Error:' in result.output

    def test_non_mapping_document(self, runner, workdir):
        """Test that a document that is not a mapping fails."""
        source = workdir / 'list.yaml'
        source.write_text('- a\n- b\n')

        result = runner.invoke(app, ['convert', str(source)])

        assert result.exit_code == 1

    def test_invalid_config(self, runner, workdir, petstore_yaml):
        """Test that an invalid config file fails."""
        config = workdir / 'custom.yaml'
        config.write_text('unknown_option: 1\n')

        result = runner.invoke(app, ['convert', str(petstore_yaml), '-c', str(config)])

        assert result.exit_code == 1


class TestVersionCommand:
    """Test the version command."""

    def test_version(self, runner):
        """Test that the version is printed."""
        result = runner.invoke(app, ['version'])

        assert result.exit_code == 0
        assert __version__ in result.output
