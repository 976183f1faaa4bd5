"""Unit tests for upm.manifests.compose module."""
import yaml

from upm.manifests.compose import compose_document, generate_docker_compose
from upm.manifests.services import DeploymentConfig, ServiceDefinition, default_services


class TestComposeDocument:
    """Tests for docker-compose generation."""

    def test_default_stack(self):
        """Services, named volumes and the namespace network are present."""
        deploy = DeploymentConfig(namespace='shop', services=default_services())
        doc = compose_document(deploy)
        assert list(doc['services']) == ['api-gateway', 'project-manager', 'ai-planner', 'postgres', 'redis']
        assert doc['volumes'] == {'postgres-data': {}, 'redis-data': {}}
        assert doc['networks'] == {'shop': {'driver': 'bridge'}}

    def test_service_entry(self):
        """Ports, environment, healthcheck and depends_on are rendered."""
        deploy = DeploymentConfig(registry='reg', version='1.0.0', services=default_services())
        gateway = compose_document(deploy)['services']['api-gateway']
        assert gateway['image'] == 'reg/api-gateway:1.0.0'
        assert gateway['ports'] == ['3000:3000']
        assert gateway['environment'] == ['ENVIRONMENT=production', 'LOG_LEVEL=info']
        assert gateway['healthcheck']['test'] == ['CMD', 'curl', '-f', 'http://localhost:3000/health']
        assert gateway['depends_on'] == {
            'project-manager': {'condition': 'service_healthy'},
            'ai-planner': {'condition': 'service_healthy'},
        }

    def test_depends_on_without_healthcheck(self):
        """Dependencies with no healthcheck only need to have started."""
        deploy = DeploymentConfig(services=[
            ServiceDefinition(name='web', port=80, depends_on=['worker']),
            ServiceDefinition(name='worker', port=9000, health_path=None),
        ])
        web = compose_document(deploy)['services']['web']
        assert web['depends_on'] == {'worker': {'condition': 'service_started'}}

    def test_shell_health_command_from_file(self):
        """A string health_command from a services file stays one shell command."""
        db = ServiceDefinition.from_dict({'name': 'db', 'port': 5432, 'health_path': None,
                                          'health_command': 'pg_isready -U upm'})
        doc = compose_document(DeploymentConfig(services=[db]))
        assert doc['services']['db']['healthcheck']['test'] == ['CMD-SHELL', 'pg_isready -U upm']

    def test_secrets_use_variable_defaults(self):
        """Secrets read from the environment with the declared fallback."""
        postgres = compose_document(DeploymentConfig(services=default_services()))['services']['postgres']
        assert 'POSTGRES_PASSWORD=${POSTGRES_PASSWORD:-change-me}' in postgres['environment']
        assert postgres['healthcheck']['test'] == ['CMD-SHELL', 'pg_isready -U upm -d upm']

    def test_no_healthcheck(self):
        """No health path and no command means no healthcheck."""
        deploy = DeploymentConfig(services=[ServiceDefinition(name='worker', port=9000, health_path=None)])
        assert 'healthcheck' not in compose_document(deploy)['services']['worker']

    def test_rendered_file(self):
        """The file is valid YAML with a header comment."""
        manifest = generate_docker_compose(DeploymentConfig(project_name='shop', services=default_services()))
        assert manifest.filename == 'docker-compose.yml'
        assert manifest.content.startswith('# shop 1.0.0 (production)\n')
        assert 'redis' in yaml.safe_load(manifest.content)['services']
