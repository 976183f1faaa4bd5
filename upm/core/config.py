"""Configuration management for the project manager."""

import copy
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from ..utils.exceptions import ConfigError
from ..utils.helpers import load_yaml, save_yaml, ensure_dir

WORKSPACE_ENV_VAR = 'UPM_WORKSPACE'

DEFAULT_SETTINGS: Dict[str, Any] = {
    'version': '1.0.0',
    'settings': {
        'default_priority': 'medium',
        'default_complexity': 'medium',
        'default_category': 'general',
    },
    'deployment': {
        'project_name': 'upm',
        'namespace': 'upm',
        'version': '1.0.0',
        'registry': 'upm',
        'environment': 'production',
        'scaling': {
            'enabled': True,
            'min_replicas': 1,
            'max_replicas': 10,
            'target_cpu': 70,
            'target_memory': 80,
        },
    },
}


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Deep merge two dictionaries, override takes precedence."""
    result = copy.deepcopy(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


@dataclass
class Config:
    """
    Global configuration for the project manager.

    Manages workspace paths and the settings stored in config.yaml.
    """

    workspace_dir: str = '.upm'
    tasks_dir: str = 'tasks'
    plans_dir: str = 'plans'
    logs_dir: str = 'logs'
    output_dir: str = 'output'
    config_file: str = 'config.yaml'

    # Runtime settings
    verbose: bool = False
    quiet: bool = False
    no_color: bool = False

    def __post_init__(self):
        """Resolve workspace paths."""
        self._workspace_path = Path(self.workspace_dir)
        self._tasks_path = self._workspace_path / self.tasks_dir
        self._plans_path = self._workspace_path / self.plans_dir
        self._logs_path = self._workspace_path / self.logs_dir
        self._output_path = self._workspace_path / self.output_dir
        self._config_path = self._workspace_path / self.config_file
        self._settings: Optional[Dict[str, Any]] = None

    @property
    def workspace_path(self) -> Path:
        """Get workspace path."""
        return self._workspace_path

    @property
    def tasks_path(self) -> Path:
        """Get tasks directory path."""
        return self._tasks_path

    @property
    def plans_path(self) -> Path:
        """Get plans directory path."""
        return self._plans_path

    @property
    def logs_path(self) -> Path:
        """Get logs directory path."""
        return self._logs_path

    @property
    def output_path(self) -> Path:
        """Get default directory for generated manifests."""
        return self._output_path

    @property
    def config_path(self) -> Path:
        """Get config file path."""
        return self._config_path

    def get_task_file(self, task_id: str) -> Path:
        """Get JSON file path for a task."""
        return self._tasks_path / f'{task_id}.json'

    def get_plan_file(self, plan_id: str) -> Path:
        """Get JSON file path for a plan."""
        return self._plans_path / f'{plan_id}.json'

    def init_workspace(self) -> None:
        """Initialize workspace structure."""
        ensure_dir(self._workspace_path)
        ensure_dir(self._tasks_path)
        ensure_dir(self._plans_path)
        ensure_dir(self._logs_path)

        if not self._config_path.exists():
            save_yaml(DEFAULT_SETTINGS, self._config_path)

        gitignore_path = self._workspace_path / '.gitignore'
        if not gitignore_path.exists():
            gitignore_content = """# Universal Project Manager - Ignore logs
logs/
*.log
"""
            gitignore_path.write_text(gitignore_content, encoding='utf-8')

        self._settings = None

    def workspace_exists(self) -> bool:
        """Check if workspace is initialized."""
        return self._workspace_path.exists() and self._config_path.exists()

    def load_config_file(self) -> dict:
        """Load configuration from file."""
        if not self._config_path.exists():
            return {}
        try:
            data = load_yaml(self._config_path)
        except yaml.YAMLError as e:
            raise ConfigError(f"Could not parse {self._config_path}: {e}") from e
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(f"{self._config_path} must contain a mapping")
        return data

    def save_config_file(self, config_data: dict) -> None:
        """Save configuration to file."""
        ensure_dir(self._workspace_path)
        save_yaml(config_data, self._config_path)
        self._settings = None

    @property
    def settings(self) -> Dict[str, Any]:
        """Settings from config.yaml merged over the defaults."""
        if self._settings is None:
            self._settings = _deep_merge(DEFAULT_SETTINGS, self.load_config_file())
        return self._settings

    def get(self, path: str, default: Any = None) -> Any:
        """
        Get setting by dot-notation path.

        Example: config.get('deployment.namespace', 'upm')
        """
        value: Any = self.settings
        for key in path.split('.'):
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default
        return value

    def set(self, path: str, value: Any) -> None:
        """Set a setting by dot-notation path and persist it to config.yaml."""
        data = self.load_config_file()
        keys = path.split('.')
        node = data
        for key in keys[:-1]:
            child = node.get(key)
            if not isinstance(child, dict):
                child = {}
                node[key] = child
            node = child
        node[keys[-1]] = value
        self.save_config_file(data)

    @classmethod
    def from_args(cls, **kwargs) -> 'Config':
        """Create config from command-line arguments.

        The workspace falls back to the UPM_WORKSPACE environment variable.
        """
        values = {k: v for k, v in kwargs.items() if v is not None}
        if 'workspace_dir' not in values and os.environ.get(WORKSPACE_ENV_VAR):
            values['workspace_dir'] = os.environ[WORKSPACE_ENV_VAR]
        return cls(**values)
