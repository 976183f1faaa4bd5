"""Unit tests for upm.manifests.dockerfile module."""
import pytest

from upm.manifests.dockerfile import generate_dockerfile, generate_dockerignore
from upm.utils.exceptions import ManifestError


class TestGenerateDockerfile:
    """Tests for Dockerfile rendering."""

    def test_node(self):
        """Node images are multi-stage with a healthcheck."""
        manifest = generate_dockerfile('node', port=3000)
        assert manifest.filename == 'Dockerfile'
        assert manifest.content.startswith('FROM node:20-alpine AS build\n')
        assert 'EXPOSE 3000' in manifest.content
        assert 'http://localhost:3000/health' in manifest.content

    def test_python_module_name(self):
        """Python images run the project as a module."""
        content = generate_dockerfile('python', project_name='ai-planner', version='3.12').content
        assert 'FROM python:3.12-slim' in content
        assert 'CMD ["python", "-m", "ai_planner"]' in content

    def test_go_binary(self):
        """Go images copy the built binary into distroless."""
        content = generate_dockerfile('go', project_name='gateway').content
        assert 'FROM golang:1.22-alpine AS build' in content
        assert 'ENTRYPOINT ["/gateway"]' in content

    def test_unknown_runtime(self):
        """Unsupported runtimes raise ManifestError."""
        with pytest.raises(ManifestError, match='ruby'):
            generate_dockerfile('ruby')

    def test_dockerignore(self):
        """Ignore lists include runtime-specific entries."""
        content = generate_dockerignore('node').content
        assert 'node_modules' in content.splitlines()
        assert '.git' in content.splitlines()
