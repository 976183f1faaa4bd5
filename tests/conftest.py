"""Pytest configuration and fixtures for upm tests."""
import datetime as dt
import logging
import sys
from pathlib import Path

import pytest

# Add the repository root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from upm.core.config import Config  # noqa: E402
from upm.core.task import Task  # noqa: E402
from upm.planner.planner import Planner  # noqa: E402


@pytest.fixture(autouse=True)
def reset_logger():
    """Drop handlers a CLI run attached to the 'upm' logger."""
    yield
    logger = logging.getLogger('upm')
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


@pytest.fixture(autouse=True)
def no_workspace_env(monkeypatch):
    """Keep UPM_WORKSPACE from leaking into tests."""
    monkeypatch.delenv('UPM_WORKSPACE', raising=False)


@pytest.fixture
def now() -> dt.datetime:
    """Fixed clock used by scoring and recommendation tests."""
    return dt.datetime(2024, 6, 1, 12, 0, 0)


@pytest.fixture
def config(tmp_path: Path) -> Config:
    """Initialized workspace under a temporary directory."""
    cfg = Config(workspace_dir=str(tmp_path / '.upm'))
    cfg.init_workspace()
    return cfg


@pytest.fixture
def planner(config: Config) -> Planner:
    return Planner(config)


@pytest.fixture
def sample_tasks() -> list:
    """Three tasks: a finished setup step, a ready feature and a blocked deploy."""
    setup = Task(title='Set up environment', id='setup', priority='high', status='completed', progress=100)
    feature = Task(title='Build feature', id='feature', priority='medium', dependencies=['setup'])
    deploy = Task(title='Deploy', id='deploy', priority='critical', dependencies=['feature'])
    return [setup, feature, deploy]
