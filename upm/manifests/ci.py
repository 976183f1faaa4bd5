"""CI pipeline generation for GitHub Actions, Azure Pipelines, GitLab, CircleCI, Travis and Jenkins."""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from ..utils.exceptions import ManifestError
from ..utils.helpers import dump_yaml
from .writer import Manifest

LANGUAGES = ('node', 'python', 'go')

DEFAULT_LANGUAGE_VERSIONS: Dict[str, str] = {
    'node': '20.11',
    'python': '3.11',
    'go': '1.22',
}

# (install, lint, test) shell steps per language
_STEPS: Dict[str, Dict[str, str]] = {
    'node': {
        'install': 'npm ci',
        'lint': 'npm run lint --if-present',
        'test': 'npm test',
    },
    'python': {
        'install': 'pip install -r requirements.txt',
        'lint': 'python -m pip install ruff && ruff check .',
        'test': 'python -m pytest',
    },
    'go': {
        'install': 'go mod download',
        'lint': 'go vet ./...',
        'test': 'go test ./...',
    },
}


@dataclass
class PipelineOptions:
    """Inputs shared by all pipeline generators."""

    project_name: str
    language: str = 'node'
    version: str = ''
    branch: str = 'main'
    docker_image: Optional[str] = None
    deploy: bool = False
    registry: str = ''

    def __post_init__(self):
        if self.language not in LANGUAGES:
            raise ManifestError(
                f"Unsupported language '{self.language}' (choose from {', '.join(LANGUAGES)})"
            )
        if not self.version:
            self.version = DEFAULT_LANGUAGE_VERSIONS[self.language]

    @property
    def image(self) -> str:
        """Image tag built by the docker stage."""
        if self.docker_image:
            return self.docker_image
        prefix = f"{self.registry}/" if self.registry else ''
        return f"{prefix}{self.project_name}"

    @property
    def steps(self) -> Dict[str, str]:
        return _STEPS[self.language]


def _build_commands(options: PipelineOptions) -> List[str]:
    return [
        f"docker build -t {options.image}:$TAG .",
        f"docker push {options.image}:$TAG",
    ]


def github_actions(options: PipelineOptions) -> Manifest:
    setup = {
        'node': {'uses': 'actions/setup-node@v4', 'with': {'node-version': options.version, 'cache': 'npm'}},
        'python': {'uses': 'actions/setup-python@v5', 'with': {'python-version': options.version, 'cache': 'pip'}},
        'go': {'uses': 'actions/setup-go@v5', 'with': {'go-version': options.version}},
    }[options.language]

    jobs: Dict[str, Any] = {
        'test': {
            'runs-on': 'ubuntu-latest',
            'steps': [
                {'uses': 'actions/checkout@v4'},
                setup,
                {'name': 'Install', 'run': options.steps['install']},
                {'name': 'Lint', 'run': options.steps['lint']},
                {'name': 'Test', 'run': options.steps['test']},
            ],
        },
    }

    if options.deploy:
        jobs['docker'] = {
            'needs': 'test',
            'if': f"github.ref == 'refs/heads/{options.branch}'",
            'runs-on': 'ubuntu-latest',
            'env': {'TAG': '${{ github.sha }}'},
            'steps': [
                {'uses': 'actions/checkout@v4'},
                {'name': 'Build and push', 'run': '\n'.join(_build_commands(options))},
            ],
        }

    workflow = {
        'name': f"{options.project_name} CI",
        'on': {
            'push': {'branches': [options.branch]},
            'pull_request': {'branches': [options.branch]},
        },
        'jobs': jobs,
    }
    return Manifest('.github/workflows/ci.yml', dump_yaml(workflow))


def azure_pipelines(options: PipelineOptions) -> Manifest:
    tool = {
        'node': {'task': 'NodeTool@0', 'inputs': {'versionSpec': options.version}},
        'python': {'task': 'UsePythonVersion@0', 'inputs': {'versionSpec': options.version}},
        'go': {'task': 'GoTool@0', 'inputs': {'version': options.version}},
    }[options.language]

    stages: List[Dict[str, Any]] = [{
        'stage': 'Test',
        'jobs': [{
            'job': 'test',
            'steps': [
                tool,
                {'script': options.steps['install'], 'displayName': 'Install'},
                {'script': options.steps['lint'], 'displayName': 'Lint'},
                {'script': options.steps['test'], 'displayName': 'Test'},
            ],
        }],
    }]

    if options.deploy:
        stages.append({
            'stage': 'Docker',
            'dependsOn': 'Test',
            'condition': f"and(succeeded(), eq(variables['Build.SourceBranch'], 'refs/heads/{options.branch}'))",
            'jobs': [{
                'job': 'docker',
                'variables': {'TAG': '$(Build.SourceVersion)'},
                'steps': [{'script': '\n'.join(_build_commands(options)), 'displayName': 'Build and push'}],
            }],
        })

    pipeline = {
        'trigger': {'branches': {'include': [options.branch]}},
        'pool': {'vmImage': 'ubuntu-latest'},
        'stages': stages,
    }
    return Manifest('azure-pipelines.yml', dump_yaml(pipeline))


def gitlab_ci(options: PipelineOptions) -> Manifest:
    image = {
        'node': f"node:{options.version}",
        'python': f"python:{options.version}",
        'go': f"golang:{options.version}",
    }[options.language]

    pipeline: Dict[str, Any] = {
        'stages': ['test'] + (['docker'] if options.deploy else []),
        'test': {
            'stage': 'test',
            'image': image,
            'script': [options.steps['install'], options.steps['lint'], options.steps['test']],
        },
    }

    if options.deploy:
        pipeline['docker'] = {
            'stage': 'docker',
            'image': 'docker:24',
            'services': ['docker:24-dind'],
            'variables': {'TAG': '$CI_COMMIT_SHA'},
            'script': _build_commands(options),
            'rules': [{'if': f'$CI_COMMIT_BRANCH == "{options.branch}"'}],
        }
    return Manifest('.gitlab-ci.yml', dump_yaml(pipeline))


def circleci(options: PipelineOptions) -> Manifest:
    image = {
        'node': f"cimg/node:{options.version}",
        'python': f"cimg/python:{options.version}",
        'go': f"cimg/go:{options.version}",
    }[options.language]

    jobs: Dict[str, Any] = {
        'test': {
            'docker': [{'image': image}],
            'steps': [
                'checkout',
                {'run': {'name': 'Install', 'command': options.steps['install']}},
                {'run': {'name': 'Lint', 'command': options.steps['lint']}},
                {'run': {'name': 'Test', 'command': options.steps['test']}},
            ],
        },
    }
    workflow_jobs: List[Any] = ['test']

    if options.deploy:
        jobs['docker'] = {
            'docker': [{'image': 'cimg/base:stable'}],
            'environment': {'TAG': '<< pipeline.git.revision >>'},
            'steps': [
                'checkout',
                'setup_remote_docker',
                {'run': {'name': 'Build and push', 'command': '\n'.join(_build_commands(options))}},
            ],
        }
        workflow_jobs.append({
            'docker': {'requires': ['test'], 'filters': {'branches': {'only': [options.branch]}}},
        })

    config = {
        'version': 2.1,
        'jobs': jobs,
        'workflows': {'build': {'jobs': workflow_jobs}},
    }
    return Manifest('.circleci/config.yml', dump_yaml(config))


def travis(options: PipelineOptions) -> Manifest:
    language = {'node': 'node_js', 'python': 'python', 'go': 'go'}[options.language]

    config: Dict[str, Any] = {
        'language': language,
        language: [options.version],
        'branches': {'only': [options.branch]},
        'install': [options.steps['install']],
        'script': [options.steps['lint'], options.steps['test']],
    }

    if options.deploy:
        config['services'] = ['docker']
        config['env'] = {'global': ['TAG=$TRAVIS_COMMIT']}
        config['deploy'] = {
            'provider': 'script',
            'script': ' && '.join(_build_commands(options)),
            'on': {'branch': options.branch},
        }
    return Manifest('.travis.yml', dump_yaml(config))


def jenkins(options: PipelineOptions) -> Manifest:
    tool_image = {
        'node': f"node:{options.version}",
        'python': f"python:{options.version}",
        'go': f"golang:{options.version}",
    }[options.language]

    lines = [
        'pipeline {',
        '    agent any',
        '    environment {',
        '        TAG = "${env.GIT_COMMIT}"',
        '    }',
        '    stages {',
    ]
    for stage in ('install', 'lint', 'test'):
        lines += [
            f"        stage('{stage.capitalize()}') {{",
            f"            agent {{ docker {{ image '{tool_image}' }} }}",
            '            steps {',
            f"                sh '{options.steps[stage]}'",
            '            }',
            '        }',
        ]
    if options.deploy:
        lines += [
            "        stage('Docker') {",
            f"            when {{ branch '{options.branch}' }}",
            '            steps {',
        ]
        lines += [f'                sh "{cmd}"' for cmd in _build_commands(options)]
        lines += [
            '            }',
            '        }',
        ]
    lines += [
        '    }',
        '}',
    ]
    return Manifest('Jenkinsfile', '\n'.join(lines) + '\n')


GENERATORS: Dict[str, Callable[[PipelineOptions], Manifest]] = {
    'github': github_actions,
    'azure': azure_pipelines,
    'gitlab': gitlab_ci,
    'circleci': circleci,
    'travis': travis,
    'jenkins': jenkins,
}

PLATFORMS = tuple(GENERATORS)


def generate_ci_pipeline(platform: str, options: PipelineOptions) -> Manifest:
    """Render the pipeline file for one CI platform."""
    generator = GENERATORS.get(platform)
    if generator is None:
        raise ManifestError(f"Unsupported CI platform '{platform}' (choose from {', '.join(PLATFORMS)})")
    return generator(options)
