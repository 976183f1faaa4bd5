"""Kubernetes manifest generation."""

import base64
from typing import Any, Dict, List, Tuple

from ..utils.helpers import dump_yaml, dump_yaml_documents
from .services import DeploymentConfig, ServiceDefinition
from .writer import Manifest

PVC_SIZE = '1Gi'


def _labels(deploy: DeploymentConfig, service: ServiceDefinition) -> Dict[str, str]:
    return {
        'app': service.name,
        'app.kubernetes.io/name': service.name,
        'app.kubernetes.io/part-of': deploy.project_name,
        'app.kubernetes.io/version': deploy.version,
    }


def namespace(deploy: DeploymentConfig) -> Dict[str, Any]:
    return {
        'apiVersion': 'v1',
        'kind': 'Namespace',
        'metadata': {
            'name': deploy.namespace,
            'labels': {'name': deploy.namespace, 'version': deploy.version},
        },
    }


def config_map(deploy: DeploymentConfig, service: ServiceDefinition) -> Dict[str, Any]:
    data = {'ENVIRONMENT': deploy.environment}
    data.update(service.environment)
    return {
        'apiVersion': 'v1',
        'kind': 'ConfigMap',
        'metadata': {'name': f'{service.name}-config', 'namespace': deploy.namespace},
        'data': data,
    }


def secret(deploy: DeploymentConfig, service: ServiceDefinition) -> Dict[str, Any]:
    return {
        'apiVersion': 'v1',
        'kind': 'Secret',
        'metadata': {'name': f'{service.name}-secrets', 'namespace': deploy.namespace},
        'type': 'Opaque',
        'data': {
            key: base64.b64encode(value.encode('utf-8')).decode('ascii')
            for key, value in service.secrets.items()
        },
    }


def service_object(deploy: DeploymentConfig, service: ServiceDefinition) -> Dict[str, Any]:
    return {
        'apiVersion': 'v1',
        'kind': 'Service',
        'metadata': {'name': service.name, 'namespace': deploy.namespace},
        'spec': {
            'selector': {'app': service.name},
            'ports': [{'protocol': 'TCP', 'port': service.port, 'targetPort': service.port}],
            'type': 'ClusterIP',
        },
    }


def _probe(service: ServiceDefinition, initial_delay: int, period: int) -> Dict[str, Any]:
    if service.health_path:
        check: Dict[str, Any] = {'httpGet': {'path': service.health_path, 'port': service.port}}
    else:
        check = {'tcpSocket': {'port': service.port}}
    check.update({
        'initialDelaySeconds': initial_delay,
        'periodSeconds': period,
        'timeoutSeconds': service.health_timeout,
    })
    return check


def persistent_volume_claim(deploy: DeploymentConfig, service: ServiceDefinition, volume: str) -> Dict[str, Any]:
    return {
        'apiVersion': 'v1',
        'kind': 'PersistentVolumeClaim',
        'metadata': {'name': volume, 'namespace': deploy.namespace, 'labels': {'app': service.name}},
        'spec': {
            'accessModes': ['ReadWriteOnce'],
            'resources': {'requests': {'storage': PVC_SIZE}},
        },
    }


def deployment(deploy: DeploymentConfig, service: ServiceDefinition) -> Dict[str, Any]:
    container: Dict[str, Any] = {
        'name': service.name,
        'image': deploy.image_for(service),
        'ports': [{'containerPort': service.port}],
        'envFrom': [{'configMapRef': {'name': f'{service.name}-config'}}],
    }
    if service.secrets:
        container['envFrom'].append({'secretRef': {'name': f'{service.name}-secrets'}})
    if service.command:
        container['command'] = ['/bin/sh', '-c', service.command]

    container['resources'] = {
        'requests': {'cpu': service.cpu, 'memory': service.memory},
        'limits': {'cpu': service.cpu, 'memory': service.memory},
    }
    container['livenessProbe'] = _probe(service, initial_delay=30, period=service.health_interval)
    container['readinessProbe'] = _probe(service, initial_delay=5, period=10)

    pod_spec: Dict[str, Any] = {'containers': [container]}

    mounts = service.volume_mounts()
    if mounts:
        container['volumeMounts'] = [{'name': m['name'], 'mountPath': m['path']} for m in mounts]
        pod_spec['volumes'] = [
            {'name': m['name'], 'persistentVolumeClaim': {'claimName': m['name']}} for m in mounts
        ]

    return {
        'apiVersion': 'apps/v1',
        'kind': 'Deployment',
        'metadata': {
            'name': service.name,
            'namespace': deploy.namespace,
            'labels': _labels(deploy, service),
        },
        'spec': {
            'replicas': service.replicas,
            'selector': {'matchLabels': {'app': service.name}},
            'template': {
                'metadata': {'labels': _labels(deploy, service)},
                'spec': pod_spec,
            },
        },
    }


def horizontal_pod_autoscaler(deploy: DeploymentConfig, service: ServiceDefinition) -> Dict[str, Any]:
    scaling = deploy.scaling
    return {
        'apiVersion': 'autoscaling/v2',
        'kind': 'HorizontalPodAutoscaler',
        'metadata': {'name': f'{service.name}-hpa', 'namespace': deploy.namespace},
        'spec': {
            'scaleTargetRef': {'apiVersion': 'apps/v1', 'kind': 'Deployment', 'name': service.name},
            'minReplicas': max(scaling.min_replicas, 1),
            'maxReplicas': max(scaling.max_replicas, service.replicas, 1),
            'metrics': [
                {
                    'type': 'Resource',
                    'resource': {
                        'name': 'cpu',
                        'target': {'type': 'Utilization', 'averageUtilization': scaling.target_cpu},
                    },
                },
                {
                    'type': 'Resource',
                    'resource': {
                        'name': 'memory',
                        'target': {'type': 'Utilization', 'averageUtilization': scaling.target_memory},
                    },
                },
            ],
        },
    }


def kubernetes_documents(deploy: DeploymentConfig) -> List[Tuple[str, Dict[str, Any]]]:
    """(file stem, object) pairs in apply order."""
    documents = [('namespace', namespace(deploy))]

    for service in deploy.services:
        documents.append((f'{service.name}-configmap', config_map(deploy, service)))
        if service.secrets:
            documents.append((f'{service.name}-secret', secret(deploy, service)))
        for mount in service.volume_mounts():
            documents.append((f"{mount['name']}-pvc", persistent_volume_claim(deploy, service, mount['name'])))
        documents.append((f'{service.name}-service', service_object(deploy, service)))
        documents.append((f'{service.name}-deployment', deployment(deploy, service)))
        if deploy.scaling.enabled and service.autoscale:
            documents.append((f'{service.name}-hpa', horizontal_pod_autoscaler(deploy, service)))

    return documents


def generate_kubernetes_manifests(deploy: DeploymentConfig, single_file: bool = False) -> List[Manifest]:
    """
    Render Kubernetes objects.

    Args:
        deploy: Deployment settings and services
        single_file: Emit one multi-document `kubernetes/all.yaml` instead of one file per object
    """
    documents = kubernetes_documents(deploy)
    if single_file:
        return [Manifest('kubernetes/all.yaml', dump_yaml_documents([doc for _, doc in documents]))]
    return [Manifest(f'kubernetes/{stem}.yaml', dump_yaml(doc)) for stem, doc in documents]
