"""Unit tests for upm.manifests.services module."""
import pytest

from upm.manifests.services import (
    DeploymentConfig,
    ServiceDefinition,
    default_services,
    load_deployment_config,
)
from upm.utils.exceptions import ManifestError


class TestServiceDefinition:
    """Tests for ServiceDefinition parsing."""

    def test_from_dict_defaults(self):
        """Only name and port are required."""
        service = ServiceDefinition.from_dict({'name': 'api', 'port': '8080'})
        assert service.port == 8080
        assert service.replicas == 1
        assert service.health_path == '/health'

    @pytest.mark.parametrize('data', [
        {'port': 80},
        {'name': 'api'},
        {'name': 'api', 'port': 'http'},
        {'name': 'api', 'port': 80, 'colour': 'red'},
        ['not', 'a', 'mapping'],
    ])
    def test_invalid_entries(self, data):
        """Bad entries raise ManifestError."""
        with pytest.raises(ManifestError):
            ServiceDefinition.from_dict(data)

    @pytest.mark.parametrize('field, value', [
        ('depends_on', 'postgres'),
        ('volumes', 'data:/x'),
        ('health_command', {'cmd': 'ping'}),
        ('environment', ['A=1']),
    ])
    def test_wrong_field_types(self, field, value):
        """List and mapping fields given as scalars are rejected up front."""
        with pytest.raises(ManifestError, match=f"'{field}' must be a"):
            ServiceDefinition.from_dict({'name': 'db', 'port': 5432, field: value})

    def test_string_health_command_is_shell(self):
        """A bare health_command string runs through the shell."""
        service = ServiceDefinition.from_dict({'name': 'db', 'port': 5432, 'health_command': 'pg_isready -U upm'})
        assert service.health_command == ['CMD-SHELL', 'pg_isready -U upm']

    def test_scalar_environment_values(self):
        """Booleans render as true/false and numbers as text."""
        service = ServiceDefinition.from_dict({
            'name': 'api', 'port': 80,
            'environment': {'DEBUG': True, 'CACHE': False, 'WORKERS': 4, 'EMPTY': None},
        })
        assert service.environment == {'DEBUG': 'true', 'CACHE': 'false', 'WORKERS': '4', 'EMPTY': ''}

    def test_volume_mounts(self):
        """Volumes split into name and path."""
        service = ServiceDefinition(name='db', port=5432, volumes=['data:/var/lib/data'])
        assert service.volume_mounts() == [{'name': 'data', 'path': '/var/lib/data'}]

    def test_invalid_volume(self):
        """Volumes without a path are rejected."""
        with pytest.raises(ManifestError):
            ServiceDefinition(name='db', port=5432, volumes=['data']).volume_mounts()


class TestDeploymentConfig:
    """Tests for DeploymentConfig."""

    def test_image_for(self):
        """Explicit images win, otherwise registry/name:version."""
        deploy = DeploymentConfig(registry='reg.io/team', version='2.0.0')
        assert deploy.image_for(ServiceDefinition(name='api', port=80)) == 'reg.io/team/api:2.0.0'
        assert deploy.image_for(ServiceDefinition(name='db', port=5432, image='postgres:15')) == 'postgres:15'

    def test_default_services_validate(self):
        """The reference stack is valid."""
        deploy = DeploymentConfig(services=default_services())
        deploy.validate()
        assert [s.name for s in deploy.services] == ['api-gateway', 'project-manager', 'ai-planner', 'postgres', 'redis']

    @pytest.mark.parametrize('services, message', [
        ([], 'No services'),
        ([ServiceDefinition(name='API', port=80)], 'Invalid service name'),
        ([ServiceDefinition(name='a', port=80), ServiceDefinition(name='a', port=81)], 'Duplicate'),
        ([ServiceDefinition(name='a', port=70000)], 'out of range'),
        ([ServiceDefinition(name='a', port=80, depends_on=['b'])], 'unknown service'),
    ])
    def test_validate_errors(self, services, message):
        """Invalid stacks raise ManifestError."""
        with pytest.raises(ManifestError, match=message):
            DeploymentConfig(services=services).validate()


class TestLoadDeploymentConfig:
    """Tests for load_deployment_config."""

    def test_defaults_from_settings(self, config):
        """Without a file, settings plus the reference stack are used."""
        config.set('deployment.namespace', 'shop')
        deploy = load_deployment_config(None, config)
        assert deploy.namespace == 'shop'
        assert len(deploy.services) == 5
        assert deploy.scaling.max_replicas == 10

    def test_file_overrides_settings(self, config, tmp_path):
        """Keys in the services file win over settings."""
        path = tmp_path / 'services.yaml'
        path.write_text(
            "project_name: shop\n"
            "version: '2.1.0'\n"
            "scaling:\n"
            "  max_replicas: 3\n"
            "services:\n"
            "  - name: web\n"
            "    port: 8000\n",
            encoding='utf-8',
        )
        deploy = load_deployment_config(path, config)
        assert deploy.project_name == 'shop'
        assert deploy.version == '2.1.0'
        assert deploy.scaling.max_replicas == 3
        assert deploy.scaling.min_replicas == 1
        assert [s.name for s in deploy.services] == ['web']

    def test_missing_file(self, tmp_path):
        """A missing file raises ManifestError."""
        with pytest.raises(ManifestError, match='not found'):
            load_deployment_config(tmp_path / 'nope.yaml')

    def test_bad_yaml(self, tmp_path):
        """Unparseable or non-mapping content raises ManifestError."""
        path = tmp_path / 'services.yaml'
        path.write_text('services: [', encoding='utf-8')
        with pytest.raises(ManifestError):
            load_deployment_config(path)
        path.write_text('- a\n', encoding='utf-8')
        with pytest.raises(ManifestError):
            load_deployment_config(path)
