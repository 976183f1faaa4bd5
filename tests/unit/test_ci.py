"""Unit tests for upm.manifests.ci module."""
import pytest
import yaml

from upm.manifests.ci import PLATFORMS, PipelineOptions, generate_ci_pipeline
from upm.utils.exceptions import ManifestError


def load(platform, **options):
    manifest = generate_ci_pipeline(platform, PipelineOptions(project_name='shop', **options))
    return manifest.filename, yaml.safe_load(manifest.content)


class TestPipelineOptions:
    """Tests for PipelineOptions."""

    def test_default_versions(self):
        """Each language gets a default toolchain version."""
        assert PipelineOptions('x').version == '20.11'
        assert PipelineOptions('x', language='python').version == '3.11'
        assert PipelineOptions('x', language='go').version == '1.22'

    def test_unknown_language(self):
        """Unsupported languages raise ManifestError."""
        with pytest.raises(ManifestError):
            PipelineOptions('x', language='cobol')

    def test_image(self):
        """The image defaults to registry/project."""
        assert PipelineOptions('shop', registry='reg.io').image == 'reg.io/shop'
        assert PipelineOptions('shop').image == 'shop'
        assert PipelineOptions('shop', docker_image='custom/img').image == 'custom/img'


class TestGenerators:
    """Tests for each CI platform."""

    def test_platforms(self):
        """All six platforms are available."""
        assert set(PLATFORMS) == {'github', 'azure', 'gitlab', 'circleci', 'travis', 'jenkins'}

    def test_github(self):
        """GitHub Actions runs on pushes and pull requests to the branch."""
        filename, data = load('github', branch='develop')
        assert filename == '.github/workflows/ci.yml'
        assert data['on']['push']['branches'] == ['develop']
        steps = data['jobs']['test']['steps']
        assert steps[1] == {'uses': 'actions/setup-node@v4', 'with': {'node-version': '20.11', 'cache': 'npm'}}
        assert steps[-1]['run'] == 'npm test'
        assert 'docker' not in data['jobs']

    def test_github_deploy(self):
        """Deploy adds a docker job gated on the branch."""
        _, data = load('github', deploy=True, registry='reg.io')
        job = data['jobs']['docker']
        assert job['needs'] == 'test'
        assert 'docker build -t reg.io/shop:$TAG .' in job['steps'][1]['run']

    def test_azure(self):
        """Azure Pipelines has a Test stage using the language tool task."""
        filename, data = load('azure', language='python')
        assert filename == 'azure-pipelines.yml'
        assert data['trigger']['branches']['include'] == ['main']
        steps = data['stages'][0]['jobs'][0]['steps']
        assert steps[0]['task'] == 'UsePythonVersion@0'
        assert steps[-1]['script'] == 'python -m pytest'

    def test_gitlab(self):
        """GitLab CI uses the language image and adds a docker stage on deploy."""
        filename, data = load('gitlab', language='go', deploy=True)
        assert filename == '.gitlab-ci.yml'
        assert data['stages'] == ['test', 'docker']
        assert data['test']['image'] == 'golang:1.22'
        assert data['docker']['rules'] == [{'if': '$CI_COMMIT_BRANCH == "main"'}]

    def test_circleci(self):
        """CircleCI uses cimg images and a build workflow."""
        filename, data = load('circleci')
        assert filename == '.circleci/config.yml'
        assert data['version'] == 2.1
        assert data['jobs']['test']['docker'] == [{'image': 'cimg/node:20.11'}]
        assert data['workflows']['build']['jobs'] == ['test']

    def test_travis(self):
        """Travis keys the version list by its language name."""
        filename, data = load('travis')
        assert filename == '.travis.yml'
        assert data['language'] == 'node_js'
        assert data['node_js'] == ['20.11']
        assert data['script'] == ['npm run lint --if-present', 'npm test']

    def test_jenkins(self):
        """Jenkinsfile is a declarative pipeline."""
        manifest = generate_ci_pipeline('jenkins', PipelineOptions('shop', deploy=True, branch='release'))
        assert manifest.filename == 'Jenkinsfile'
        assert manifest.content.startswith('pipeline {\n')
        assert "stage('Test') {" in manifest.content
        assert "when { branch 'release' }" in manifest.content
        assert manifest.content.count('{') == manifest.content.count('}')

    def test_unknown_platform(self):
        """Unsupported platforms raise ManifestError."""
        with pytest.raises(ManifestError, match='bamboo'):
            generate_ci_pipeline('bamboo', PipelineOptions('shop'))
