"""Loader utilities bridging OmegaConf JSON/YAML files and the descriptor schemas."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, TypeVar

from omegaconf import OmegaConf
from pydantic import ValidationError

from ._constants import BATCH_COMMENT_PREFIX
from ._errors import ConfigFormatError
from ._schemas import Descriptor

logger = logging.getLogger(__name__)

DescriptorT = TypeVar("DescriptorT", bound=Descriptor)


def load_document(path: str | Path) -> Any:
    """Load and resolve a JSON or YAML document into plain containers.

    JSON is read through the YAML parser, so the format never needs to be
    declared up front.
    """
    resolved = Path(path).expanduser()
    if not resolved.exists():
        raise FileNotFoundError(f"File not found: {resolved}")
    try:
        cfg = OmegaConf.load(resolved)
        return OmegaConf.to_container(cfg, resolve=True)
    except Exception as exc:  # pragma: no cover - OmegaConf/YAML error types vary
        raise ConfigFormatError(f"Failed to read {resolved} as JSON or YAML: {exc}") from exc


def decode_document(data: Any, shape: type[DescriptorT]) -> DescriptorT:
    """Validate ``data`` against ``shape``, returning the shape's empty value on mismatch."""
    if not isinstance(data, dict):
        logger.debug("Document root is %s, not a %s mapping.", type(data).__name__, shape.__name__)
        return shape()
    try:
        return shape.model_validate(data)
    except ValidationError as exc:
        logger.debug("Document does not match %s: %s", shape.__name__, exc.errors(include_url=False))
        return shape()


def decode_descriptor(path: str | Path, shape: type[DescriptorT]) -> DescriptorT:
    """Read ``path`` and decode it as ``shape``."""
    return decode_document(load_document(path), shape)


def read_paths_from_batch_file(path: str | Path) -> list[Path]:
    """Read one path per line, skipping blank lines and ``#`` comments."""
    batch_file = Path(path).expanduser()
    logger.info("Processing batch file %s", batch_file)
    if not batch_file.exists():
        raise FileNotFoundError(f"Batch file not found: {batch_file}")
    try:
        lines = batch_file.read_text(encoding="utf-8").splitlines()
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigFormatError(f"Failed to read batch file {batch_file}: {exc}") from exc
    paths: list[Path] = []
    for line in lines:
        entry = line.strip()
        if not entry or entry.startswith(BATCH_COMMENT_PREFIX):
            continue
        paths.append(Path(entry))
    return paths


__all__ = [
    "decode_descriptor",
    "decode_document",
    "load_document",
    "read_paths_from_batch_file",
]
