"""Docker Compose file generation."""

from typing import Any, Dict, List

from ..utils.helpers import dump_yaml
from .services import DeploymentConfig, ServiceDefinition
from .writer import Manifest

COMPOSE_FILENAME = 'docker-compose.yml'


def _healthcheck(service: ServiceDefinition) -> Dict[str, Any]:
    if service.health_command:
        test = list(service.health_command)
    elif service.health_path:
        test = ['CMD', 'curl', '-f', f'http://localhost:{service.port}{service.health_path}']
    else:
        return {}
    return {
        'test': test,
        'interval': f'{service.health_interval}s',
        'timeout': f'{service.health_timeout}s',
        'retries': 3,
    }


def _start_condition(deploy: DeploymentConfig, name: str) -> str:
    """Wait for a dependency to be healthy when it has a healthcheck."""
    dependency = deploy.get_service(name)
    if dependency is not None and _healthcheck(dependency):
        return 'service_healthy'
    return 'service_started'


def _environment(deploy: DeploymentConfig, service: ServiceDefinition) -> List[str]:
    env = [f'ENVIRONMENT={deploy.environment}']
    env.extend(f'{key}={value}' for key, value in service.environment.items())
    # secrets come from the shell or an .env file, falling back to the declared value
    env.extend(f'{key}=${{{key}:-{value}}}' for key, value in service.secrets.items())
    return env


def compose_service(deploy: DeploymentConfig, service: ServiceDefinition) -> Dict[str, Any]:
    entry: Dict[str, Any] = {
        'image': deploy.image_for(service),
        'ports': [f'{service.port}:{service.port}'],
        'environment': _environment(deploy, service),
    }
    if service.command:
        entry['command'] = service.command
    if service.volumes:
        entry['volumes'] = list(service.volumes)

    healthcheck = _healthcheck(service)
    if healthcheck:
        entry['healthcheck'] = healthcheck

    if service.depends_on:
        entry['depends_on'] = {name: {'condition': _start_condition(deploy, name)} for name in service.depends_on}

    entry['networks'] = [deploy.namespace]
    return entry


def compose_document(deploy: DeploymentConfig) -> Dict[str, Any]:
    document: Dict[str, Any] = {
        'services': {s.name: compose_service(deploy, s) for s in deploy.services},
    }

    volumes = {m['name']: {} for s in deploy.services for m in s.volume_mounts()}
    if volumes:
        document['volumes'] = volumes

    document['networks'] = {deploy.namespace: {'driver': 'bridge'}}
    return document


def generate_docker_compose(deploy: DeploymentConfig) -> Manifest:
    header = f"# {deploy.project_name} {deploy.version} ({deploy.environment})\n"
    return Manifest(COMPOSE_FILENAME, header + dump_yaml(compose_document(deploy)))
