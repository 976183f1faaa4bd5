"""Writing generated manifests to disk."""

from dataclasses import dataclass
from pathlib import Path
from typing import List, Sequence, Union

from ..utils.exceptions import FileOperationError, ManifestError
from ..utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class Manifest:
    """A generated file: path relative to the output directory plus its text."""
    filename: str
    content: str


def write_manifests(
    manifests: Sequence[Manifest],
    out_dir: Union[str, Path],
    overwrite: bool = False,
) -> List[Path]:
    """
    Write manifests under `out_dir`.

    Nothing is written if any target already exists and `overwrite` is False.

    Returns:
        Paths written, in input order
    """
    root = Path(out_dir)
    targets = [root / m.filename for m in manifests]

    if not overwrite:
        existing = [str(t) for t in targets if t.exists()]
        if existing:
            raise ManifestError(
                f"Refusing to overwrite existing file(s): {', '.join(existing)} (use --force)"
            )

    written = []
    for manifest, target in zip(manifests, targets):
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            content = manifest.content if manifest.content.endswith('\n') else manifest.content + '\n'
            target.write_text(content, encoding='utf-8')
        except OSError as e:
            raise FileOperationError(f"Could not write {target}: {e}") from e
        logger.info(f"Wrote {target}")
        written.append(target)

    return written
