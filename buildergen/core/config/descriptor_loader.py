"""
Descriptor loader — read class descriptors from YAML or JSON files.

This is the stand-in for the upstream descriptor producer.  It is also
where ignore-marked fields are dropped, so the generator never sees
them.

Accepted shapes::

    classes:
      - qualified_name: a.b.Person
        kind: class              # optional, default "class"
        fields:
          - name: firstName
            type: String
          - name: password
            type: String
            ignore: true

A file may also hold a single class mapping, or a bare list of them.
``fields`` may be written as a ``name: type`` mapping when no field
needs an ignore marker; mapping order is declaration order.

Files ending in ``.json`` are parsed as JSON, everything else as YAML.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from buildergen.core.models.descriptor import ClassDescriptor

logger = logging.getLogger(__name__)


class DescriptorError(Exception):
    """Raised when a descriptor file is unreadable or invalid."""


def _normalise_fields(raw_fields: Any, where: str) -> list[dict[str, Any]]:
    """Turn either accepted ``fields`` shape into a list of mappings."""
    if raw_fields is None:
        return []
    if isinstance(raw_fields, dict):
        return [{"name": k, "type": v} for k, v in raw_fields.items()]
    if isinstance(raw_fields, list):
        out = []
        for item in raw_fields:
            if not isinstance(item, dict):
                raise DescriptorError(f"{where}: field entries must be mappings, got {item!r}")
            out.append(item)
        return out
    raise DescriptorError(f"{where}: 'fields' must be a list or mapping")


def descriptor_from_mapping(data: dict[str, Any], where: str = "<mapping>") -> ClassDescriptor:
    """Build a ClassDescriptor from one class mapping, dropping ignored fields.

    Raises:
        DescriptorError: The mapping does not describe a valid class.
    """
    fields = []
    for entry in _normalise_fields(data.get("fields"), where):
        if entry.get("ignore", False):
            logger.debug("%s: ignoring field %s", where, entry.get("name"))
            continue
        fields.append({k: v for k, v in entry.items() if k != "ignore"})

    payload = {k: v for k, v in data.items() if k != "fields"}
    payload["fields"] = fields

    try:
        return ClassDescriptor.model_validate(payload)
    except ValidationError as e:
        raise DescriptorError(f"{where}: invalid class descriptor: {e}") from e


def _class_mappings(data: Any, where: str) -> list[dict[str, Any]]:
    if isinstance(data, list):
        entries = data
    elif isinstance(data, dict) and "classes" in data:
        entries = data["classes"] or []
    elif isinstance(data, dict):
        entries = [data]
    else:
        raise DescriptorError(f"{where}: expected a mapping or list, got {type(data).__name__}")

    if not isinstance(entries, list):
        raise DescriptorError(f"{where}: 'classes' must be a list")
    for entry in entries:
        if not isinstance(entry, dict):
            raise DescriptorError(f"{where}: class entries must be mappings, got {entry!r}")
    return entries


def load_descriptor_file(path: Path) -> list[ClassDescriptor]:
    """Load every class descriptor from a YAML or JSON file.

    Raises:
        DescriptorError: The file is unreadable, not YAML/JSON, or holds
            an invalid descriptor.
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise DescriptorError(f"Cannot read {path}: {e}") from e

    if not raw.strip():
        logger.warning("Descriptor file %s is empty", path)
        return []

    if path.suffix.lower() == ".json":
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise DescriptorError(f"Invalid JSON in {path}: {e}") from e
    else:
        try:
            data = yaml.safe_load(raw)
        except yaml.YAMLError as e:
            raise DescriptorError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        logger.warning("Descriptor file %s is empty", path)
        return []

    descriptors = [
        descriptor_from_mapping(entry, where=f"{path}[{i}]")
        for i, entry in enumerate(_class_mappings(data, str(path)))
    ]
    logger.debug("Loaded %d descriptor(s) from %s", len(descriptors), path)
    return descriptors


def load_descriptors(paths: Iterable[Path]) -> list[ClassDescriptor]:
    """Load descriptors from several files, preserving file then entry order."""
    descriptors: list[ClassDescriptor] = []
    for path in paths:
        descriptors.extend(load_descriptor_file(path))
    return descriptors
