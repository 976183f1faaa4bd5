"""Dockerfile generation for common runtimes."""

from typing import Dict

from ..utils.exceptions import ManifestError
from .writer import Manifest

RUNTIMES = ('node', 'python', 'go')

DEFAULT_RUNTIME_VERSIONS: Dict[str, str] = {
    'node': '20',
    'python': '3.11',
    'go': '1.22',
}

_NODE = """\
FROM node:{version}-alpine AS build
WORKDIR /app
COPY package*.json ./
RUN npm ci
COPY . .
RUN npm run build --if-present

FROM node:{version}-alpine
ENV NODE_ENV=production
WORKDIR /app
COPY package*.json ./
RUN npm ci --omit=dev
COPY --from=build /app .
USER node
EXPOSE {port}
HEALTHCHECK --interval=30s --timeout=5s --retries=3 \\
  CMD wget -qO- http://localhost:{port}{health_path} || exit 1
CMD ["npm", "start"]
"""

_PYTHON = """\
FROM python:{version}-slim
ENV PYTHONDONTWRITEBYTECODE=1 \\
    PYTHONUNBUFFERED=1
WORKDIR /app
COPY requirements.txt ./
RUN pip install --no-cache-dir -r requirements.txt
COPY . .
RUN useradd --create-home appuser
USER appuser
EXPOSE {port}
HEALTHCHECK --interval=30s --timeout=5s --retries=3 \\
  CMD python -c "import urllib.request; urllib.request.urlopen('http://localhost:{port}{health_path}')" || exit 1
CMD ["python", "-m", "{module}"]
"""

_GO = """\
FROM golang:{version}-alpine AS build
WORKDIR /src
COPY go.mod go.sum* ./
RUN go mod download
COPY . .
RUN CGO_ENABLED=0 go build -o /out/{binary} .

FROM gcr.io/distroless/static-debian12
COPY --from=build /out/{binary} /{binary}
USER nonroot:nonroot
EXPOSE {port}
ENTRYPOINT ["/{binary}"]
"""

_TEMPLATES = {'node': _NODE, 'python': _PYTHON, 'go': _GO}


def generate_dockerfile(
    runtime: str,
    port: int = 8080,
    project_name: str = 'app',
    version: str = '',
    health_path: str = '/health',
) -> Manifest:
    """
    Render a Dockerfile for a runtime.

    Args:
        runtime: One of RUNTIMES
        port: Port exposed by the container
        project_name: Used for the Python module and Go binary names
        version: Base image version, defaults per runtime
        health_path: HTTP path probed by HEALTHCHECK (node/python)
    """
    template = _TEMPLATES.get(runtime)
    if template is None:
        raise ManifestError(f"Unsupported runtime '{runtime}' (choose from {', '.join(RUNTIMES)})")

    name = project_name.replace('-', '_')
    content = template.format(
        version=version or DEFAULT_RUNTIME_VERSIONS[runtime],
        port=port,
        health_path=health_path,
        module=name,
        binary=project_name,
    )
    return Manifest('Dockerfile', content)


def generate_dockerignore(runtime: str) -> Manifest:
    entries = ['.git', '.upm', '*.log', 'Dockerfile', 'docker-compose.yml']
    entries += {
        'node': ['node_modules', 'dist', 'coverage'],
        'python': ['__pycache__', '*.pyc', '.venv', '.pytest_cache'],
        'go': ['bin', 'vendor'],
    }.get(runtime, [])
    return Manifest('.dockerignore', '\n'.join(entries) + '\n')
