"""Service definitions and deployment settings shared by all manifest generators."""

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from ..core.config import Config
from ..utils.exceptions import ManifestError
from ..utils.helpers import load_yaml
from ..utils.logger import get_logger

logger = get_logger(__name__)

# RFC 1123 label, as Kubernetes requires for names
_DNS_LABEL = re.compile(r'^[a-z0-9]([-a-z0-9]*[a-z0-9])?$')


def env_value(value: Any) -> str:
    """Environment variable text for a YAML scalar (booleans as true/false)."""
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if value is None:
        return ''
    return str(value)


def _mapping(data: Dict[str, Any], key: str) -> Dict[Any, Any]:
    value = data.get(key) or {}
    if not isinstance(value, dict):
        raise ManifestError(f"Service '{data['name']}' field '{key}' must be a mapping")
    return value


def _sequence(data: Dict[str, Any], key: str, value: Any) -> List[Any]:
    if not isinstance(value, list):
        raise ManifestError(
            f"Service '{data['name']}' field '{key}' must be a list, got {type(value).__name__}"
        )
    return value


@dataclass
class ServiceDefinition:
    """One deployable container."""

    name: str
    port: int
    replicas: int = 1
    cpu: str = '250m'
    memory: str = '256Mi'
    health_path: Optional[str] = '/health'
    health_interval: int = 30
    health_timeout: int = 5
    environment: Dict[str, str] = field(default_factory=dict)
    secrets: Dict[str, str] = field(default_factory=dict)
    depends_on: List[str] = field(default_factory=list)
    image: Optional[str] = None
    command: Optional[str] = None
    volumes: List[str] = field(default_factory=list)
    health_command: Optional[List[str]] = None
    autoscale: bool = True

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ServiceDefinition':
        if not isinstance(data, dict):
            raise ManifestError(f"Service entry must be a mapping, got {type(data).__name__}")
        if not data.get('name'):
            raise ManifestError("Service entry is missing 'name'")
        if 'port' not in data:
            raise ManifestError(f"Service '{data['name']}' is missing 'port'")

        known = set(cls.__dataclass_fields__)
        unknown = set(data) - known
        if unknown:
            raise ManifestError(
                f"Service '{data['name']}' has unknown field(s): {', '.join(sorted(unknown))}"
            )

        values = dict(data)
        try:
            values['port'] = int(values['port'])
            values['replicas'] = int(values.get('replicas', 1))
        except (TypeError, ValueError):
            raise ManifestError(f"Service '{data['name']}' port and replicas must be integers")
        values['environment'] = {str(k): env_value(v) for k, v in _mapping(data, 'environment').items()}
        values['secrets'] = {str(k): env_value(v) for k, v in _mapping(data, 'secrets').items()}

        # a bare string is a shell healthcheck
        if isinstance(values.get('health_command'), str):
            values['health_command'] = ['CMD-SHELL', values['health_command']]
        for name in ('depends_on', 'volumes', 'health_command'):
            if values.get(name) is not None:
                values[name] = [str(item) for item in _sequence(data, name, values[name])]
        return cls(**values)

    def volume_mounts(self) -> List[Dict[str, str]]:
        """Split 'name:/path' volume specs into name/path pairs."""
        mounts = []
        for spec in self.volumes:
            name, sep, path = spec.partition(':')
            if not sep or not name or not path:
                raise ManifestError(f"Service '{self.name}' has invalid volume '{spec}' (expected name:/path)")
            mounts.append({'name': name, 'path': path})
        return mounts


@dataclass
class ScalingConfig:
    """Horizontal autoscaling bounds."""

    enabled: bool = True
    min_replicas: int = 1
    max_replicas: int = 10
    target_cpu: int = 70
    target_memory: int = 80

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ScalingConfig':
        return cls(
            enabled=bool(data.get('enabled', True)),
            min_replicas=int(data.get('min_replicas', 1)),
            max_replicas=int(data.get('max_replicas', 10)),
            target_cpu=int(data.get('target_cpu', 70)),
            target_memory=int(data.get('target_memory', 80)),
        )


@dataclass
class DeploymentConfig:
    """Everything the generators need: naming, registry, scaling and services."""

    project_name: str = 'upm'
    namespace: str = 'upm'
    version: str = '1.0.0'
    registry: str = 'upm'
    environment: str = 'production'
    scaling: ScalingConfig = field(default_factory=ScalingConfig)
    services: List[ServiceDefinition] = field(default_factory=list)

    def image_for(self, service: ServiceDefinition) -> str:
        """Explicit image, or `<registry>/<name>:<version>`."""
        if service.image:
            return service.image
        return f"{self.registry}/{service.name}:{self.version}"

    def get_service(self, name: str) -> Optional[ServiceDefinition]:
        return next((s for s in self.services if s.name == name), None)

    def validate(self) -> None:
        """Raise ManifestError on names or references generators cannot render."""
        if not _DNS_LABEL.match(self.namespace):
            raise ManifestError(f"Invalid namespace '{self.namespace}': must be a lowercase DNS label")
        if not self.services:
            raise ManifestError("No services defined")

        seen = set()
        for service in self.services:
            if not _DNS_LABEL.match(service.name):
                raise ManifestError(f"Invalid service name '{service.name}': must be a lowercase DNS label")
            if service.name in seen:
                raise ManifestError(f"Duplicate service name '{service.name}'")
            seen.add(service.name)
            if not 0 < service.port < 65536:
                raise ManifestError(f"Service '{service.name}' port {service.port} is out of range")
            if service.replicas < 0:
                raise ManifestError(f"Service '{service.name}' replicas must not be negative")
            service.volume_mounts()

        for service in self.services:
            for dep in service.depends_on:
                if dep not in seen:
                    raise ManifestError(f"Service '{service.name}' depends on unknown service '{dep}'")

        if self.scaling.min_replicas > self.scaling.max_replicas:
            raise ManifestError("scaling.min_replicas must not exceed scaling.max_replicas")


def default_services() -> List[ServiceDefinition]:
    """Reference stack: gateway, two application services, PostgreSQL and Redis."""
    return [
        ServiceDefinition(
            name='api-gateway',
            port=3000,
            replicas=2,
            cpu='500m',
            memory='512Mi',
            environment={'LOG_LEVEL': 'info'},
            depends_on=['project-manager', 'ai-planner'],
        ),
        ServiceDefinition(
            name='project-manager',
            port=3001,
            replicas=3,
            cpu='1000m',
            memory='1Gi',
            environment={'LOG_LEVEL': 'info', 'DB_HOST': 'postgres', 'REDIS_HOST': 'redis'},
            depends_on=['postgres', 'redis'],
        ),
        ServiceDefinition(
            name='ai-planner',
            port=3002,
            replicas=2,
            cpu='2000m',
            memory='2Gi',
            health_timeout=10,
            environment={'LOG_LEVEL': 'info', 'DB_HOST': 'postgres', 'REDIS_HOST': 'redis'},
            depends_on=['postgres', 'redis'],
        ),
        ServiceDefinition(
            name='postgres',
            port=5432,
            image='postgres:15-alpine',
            cpu='500m',
            memory='512Mi',
            health_path=None,
            environment={'POSTGRES_DB': 'upm', 'POSTGRES_USER': 'upm'},
            secrets={'POSTGRES_PASSWORD': 'change-me'},
            volumes=['postgres-data:/var/lib/postgresql/data'],
            health_command=['CMD-SHELL', 'pg_isready -U upm -d upm'],
            autoscale=False,
        ),
        ServiceDefinition(
            name='redis',
            port=6379,
            image='redis:7-alpine',
            health_path=None,
            volumes=['redis-data:/data'],
            health_command=['CMD', 'redis-cli', 'ping'],
            autoscale=False,
        ),
    ]


def load_deployment_config(
    services_file: Optional[Union[str, Path]] = None,
    config: Optional[Config] = None,
) -> DeploymentConfig:
    """
    Build a DeploymentConfig from workspace settings and an optional services file.

    The services file is YAML with optional top-level project_name, namespace,
    version, registry, environment and scaling keys plus a `services` list.
    Without a file the reference stack from default_services() is used.
    """
    settings: Dict[str, Any] = dict(config.get('deployment', {}) or {}) if config else {}

    data: Dict[str, Any] = {}
    if services_file is not None:
        try:
            loaded = load_yaml(services_file)
        except FileNotFoundError:
            raise ManifestError(f"Services file not found: {services_file}")
        except yaml.YAMLError as e:
            raise ManifestError(f"Could not parse {services_file}: {e}") from e
        if not isinstance(loaded, dict):
            raise ManifestError(f"{services_file} must contain a mapping with a 'services' list")
        data = loaded

    def pick(key: str, default: Any) -> Any:
        return data.get(key, settings.get(key, default))

    scaling = dict(settings.get('scaling') or {})
    scaling.update(data.get('scaling') or {})

    if 'services' in data:
        if not isinstance(data['services'], list):
            raise ManifestError("'services' must be a list")
        services = [ServiceDefinition.from_dict(s) for s in data['services']]
    else:
        services = default_services()

    deployment = DeploymentConfig(
        project_name=str(pick('project_name', 'upm')),
        namespace=str(pick('namespace', 'upm')),
        version=str(pick('version', '1.0.0')),
        registry=str(pick('registry', 'upm')),
        environment=str(pick('environment', 'production')),
        scaling=ScalingConfig.from_dict(scaling),
        services=services,
    )
    deployment.validate()
    logger.debug(f"Loaded deployment config with {len(services)} services")
    return deployment
