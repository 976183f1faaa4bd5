"""Deployment manifest and CI pipeline generators."""

from .services import (
    ServiceDefinition,
    ScalingConfig,
    DeploymentConfig,
    default_services,
    load_deployment_config,
)
from .writer import Manifest, write_manifests
from .kubernetes import generate_kubernetes_manifests
from .compose import generate_docker_compose
from .dockerfile import generate_dockerfile, generate_dockerignore, RUNTIMES
from .cloudformation import generate_cloudformation
from .ci import PipelineOptions, generate_ci_pipeline, PLATFORMS, LANGUAGES

__all__ = [
    'ServiceDefinition',
    'ScalingConfig',
    'DeploymentConfig',
    'default_services',
    'load_deployment_config',
    'Manifest',
    'write_manifests',
    'generate_kubernetes_manifests',
    'generate_docker_compose',
    'generate_dockerfile',
    'generate_dockerignore',
    'RUNTIMES',
    'generate_cloudformation',
    'PipelineOptions',
    'generate_ci_pipeline',
    'PLATFORMS',
    'LANGUAGES',
]
