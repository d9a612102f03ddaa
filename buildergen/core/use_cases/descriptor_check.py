"""
Descriptor check use case — validate descriptors without generating anything.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from buildergen.core.config.descriptor_loader import DescriptorError
from buildergen.core.config.loader import ConfigError
from buildergen.core.use_cases.generate import resolve_inputs


@dataclass
class DescriptorCheckResult:
    """Result of descriptor validation."""

    valid: bool = False
    descriptor_files: list[Path] = field(default_factory=list)
    would_generate: list[str] = field(default_factory=list)
    would_skip: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "descriptor_files": [str(p) for p in self.descriptor_files],
            "would_generate": self.would_generate,
            "would_skip": self.would_skip,
            "errors": self.errors,
            "warnings": self.warnings,
        }


def check_descriptors(
    descriptor_files: list[Path] | None = None,
    config_path: Path | None = None,
) -> DescriptorCheckResult:
    """Load descriptors and report what a generation pass would do.

    Args:
        descriptor_files: Descriptor files; defaults to the config's patterns.
        config_path: Optional explicit path to buildergen.yml.

    Returns:
        DescriptorCheckResult with planned output and any issues.
    """
    result = DescriptorCheckResult()

    try:
        inputs = resolve_inputs(descriptor_files, config_path)
    except (ConfigError, DescriptorError) as e:
        result.errors.append(str(e))
        return result

    result.descriptor_files = inputs.descriptor_files

    seen: set[str] = set()
    for descriptor in inputs.descriptors:
        if not descriptor.is_class:
            result.would_skip.append(descriptor.qualified_name)
            result.warnings.append(
                f"{descriptor.qualified_name} is a {descriptor.kind.value}, not a class; "
                "no builder will be generated."
            )
            continue

        name = descriptor.builder_qualified_name
        if name in seen:
            result.errors.append(f"Duplicate builder destination: {name}")
        seen.add(name)
        result.would_generate.append(name)

        if "." not in descriptor.qualified_name:
            result.warnings.append(
                f"{descriptor.qualified_name} has no package; its builder goes in the default package."
            )
        if not descriptor.fields:
            result.warnings.append(f"{descriptor.qualified_name} has no fields.")

    if not inputs.descriptors:
        result.warnings.append("Descriptor files contain no classes.")

    result.valid = len(result.errors) == 0
    return result
