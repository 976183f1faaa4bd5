"""Unit tests for upm.manifests.kubernetes module."""
import base64

import pytest
import yaml

from upm.manifests.kubernetes import generate_kubernetes_manifests, kubernetes_documents
from upm.manifests.services import DeploymentConfig, ScalingConfig, default_services


@pytest.fixture
def deploy() -> DeploymentConfig:
    return DeploymentConfig(
        project_name='shop', namespace='shop', version='1.2.0', registry='reg.io',
        services=default_services(),
    )


def by_stem(deploy):
    return dict(kubernetes_documents(deploy))


class TestKubernetesDocuments:
    """Tests for the generated Kubernetes objects."""

    def test_order_and_count(self, deploy):
        """Namespace first, then each service's objects."""
        stems = [stem for stem, _ in kubernetes_documents(deploy)]
        assert stems[0] == 'namespace'
        assert stems[1:5] == [
            'api-gateway-configmap', 'api-gateway-service', 'api-gateway-deployment', 'api-gateway-hpa',
        ]
        assert 'postgres-secret' in stems
        assert 'postgres-data-pvc' in stems
        assert 'postgres-hpa' not in stems
        assert len(stems) == 22

    def test_config_map_and_secret(self, deploy):
        """Environment goes to a ConfigMap, secrets are base64 encoded."""
        docs = by_stem(deploy)
        assert docs['project-manager-configmap']['data'] == {
            'ENVIRONMENT': 'production', 'LOG_LEVEL': 'info', 'DB_HOST': 'postgres', 'REDIS_HOST': 'redis',
        }
        encoded = docs['postgres-secret']['data']['POSTGRES_PASSWORD']
        assert base64.b64decode(encoded).decode() == 'change-me'

    def test_deployment(self, deploy):
        """Deployments carry image, resources, probes and env sources."""
        spec = by_stem(deploy)['api-gateway-deployment']['spec']
        container = spec['template']['spec']['containers'][0]
        assert spec['replicas'] == 2
        assert container['image'] == 'reg.io/api-gateway:1.2.0'
        assert container['resources']['limits'] == {'cpu': '500m', 'memory': '512Mi'}
        assert container['livenessProbe']['httpGet'] == {'path': '/health', 'port': 3000}
        assert container['envFrom'] == [{'configMapRef': {'name': 'api-gateway-config'}}]

    def test_tcp_probe_and_volumes(self, deploy):
        """Services without a health path use TCP probes; volumes mount PVCs."""
        pod = by_stem(deploy)['postgres-deployment']['spec']['template']['spec']
        container = pod['containers'][0]
        assert container['readinessProbe']['tcpSocket'] == {'port': 5432}
        assert container['volumeMounts'] == [{'name': 'postgres-data', 'mountPath': '/var/lib/postgresql/data'}]
        assert pod['volumes'][0]['persistentVolumeClaim'] == {'claimName': 'postgres-data'}
        assert {'secretRef': {'name': 'postgres-secrets'}} in container['envFrom']

    def test_hpa(self, deploy):
        """Autoscalers target the deployment with cpu and memory metrics."""
        hpa = by_stem(deploy)['ai-planner-hpa']
        assert hpa['apiVersion'] == 'autoscaling/v2'
        assert hpa['spec']['scaleTargetRef']['name'] == 'ai-planner'
        assert hpa['spec']['maxReplicas'] == 10
        metrics = {m['resource']['name']: m['resource']['target']['averageUtilization'] for m in hpa['spec']['metrics']}
        assert metrics == {'cpu': 70, 'memory': 80}

    def test_scaling_disabled(self, deploy):
        """No autoscalers when scaling is disabled."""
        deploy.scaling = ScalingConfig(enabled=False)
        assert not any(stem.endswith('-hpa') for stem, _ in kubernetes_documents(deploy))


class TestGenerateKubernetesManifests:
    """Tests for file rendering."""

    def test_one_file_per_object(self, deploy):
        """Each object is its own YAML file under kubernetes/."""
        manifests = generate_kubernetes_manifests(deploy)
        assert manifests[0].filename == 'kubernetes/namespace.yaml'
        assert yaml.safe_load(manifests[0].content)['metadata']['name'] == 'shop'

    def test_single_file(self, deploy):
        """single_file joins every object into all.yaml."""
        (manifest,) = generate_kubernetes_manifests(deploy, single_file=True)
        assert manifest.filename == 'kubernetes/all.yaml'
        kinds = [doc['kind'] for doc in yaml.safe_load_all(manifest.content)]
        assert kinds[0] == 'Namespace'
        assert kinds.count('Deployment') == 5
