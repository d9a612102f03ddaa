"""
Generate use case — one generation pass driven by config and descriptor files.

Ties together config loading, descriptor loading, sink selection and
the generation service.  Errors are captured on the result object, not
raised, so the CLI decides how to present them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from buildergen.core.config.descriptor_loader import DescriptorError, load_descriptors
from buildergen.core.config.loader import (
    ConfigError,
    GeneratorConfig,
    config_root,
    find_config_file,
    load_config,
)
from buildergen.core.models.descriptor import ClassDescriptor
from buildergen.core.observability.diagnostics import Diagnostics
from buildergen.core.services.generation import GenerationPassResult, run_generation_pass
from buildergen.core.services.generators.builder import Clock
from buildergen.core.services.sink import FileSystemSink, GenerationError, MemorySink, SourceSink

logger = logging.getLogger(__name__)


@dataclass
class GenerationInputs:
    """Resolved config and descriptors for a run."""

    config: GeneratorConfig
    base_dir: Path
    descriptor_files: list[Path] = field(default_factory=list)
    descriptors: list[ClassDescriptor] = field(default_factory=list)


def resolve_inputs(
    descriptor_files: list[Path] | None = None,
    config_path: Path | None = None,
) -> GenerationInputs:
    """Load config and descriptors.

    Explicit descriptor files win over the config's glob patterns.

    Raises:
        ConfigError: Config is invalid, or there is nothing to load.
        DescriptorError: A descriptor file is invalid.
    """
    if config_path is None:
        config_path = find_config_file()
    config = load_config(config_path) if config_path else GeneratorConfig()
    base_dir = config_root(config_path)

    if descriptor_files:
        files = [p.resolve() for p in descriptor_files]
    else:
        files = config.resolve_descriptor_files(base_dir)

    if not files:
        raise ConfigError(
            "No descriptor files given. Pass them as arguments or list "
            "patterns under 'descriptors' in buildergen.yml."
        )

    return GenerationInputs(
        config=config,
        base_dir=base_dir,
        descriptor_files=files,
        descriptors=load_descriptors(files),
    )


@dataclass
class GenerateResult:
    """Result of the generate use case."""

    pass_result: GenerationPassResult | None = None
    descriptor_files: list[Path] = field(default_factory=list)
    output_dir: Path | None = None
    written: list[Path] = field(default_factory=list)
    previews: dict[str, str] = field(default_factory=dict)
    error: str | None = None

    def to_dict(self) -> dict:
        result: dict = {}
        if self.error:
            result["error"] = self.error
            return result

        result["descriptor_files"] = [str(p) for p in self.descriptor_files]
        result["output_dir"] = str(self.output_dir) if self.output_dir else None
        result["written"] = [str(p) for p in self.written]
        if self.pass_result:
            result.update(self.pass_result.to_dict())
        if self.previews:
            result["sources"] = self.previews
        return result


def run_generate(
    descriptor_files: list[Path] | None = None,
    config_path: Path | None = None,
    output_dir: Path | None = None,
    write: bool = False,
    clock: Clock | None = None,
) -> GenerateResult:
    """Run one generation pass.

    Args:
        descriptor_files: Descriptor files; defaults to the config's patterns.
        config_path: Optional explicit path to buildergen.yml.
        output_dir: Override for the config's ``output_dir``.
        write: Write files to disk; otherwise keep sources in memory.
        clock: Timestamp source for the ``@Generated`` marker.

    Returns:
        GenerateResult with generated names, written paths or previews.
    """
    result = GenerateResult()

    try:
        inputs = resolve_inputs(descriptor_files, config_path)
    except (ConfigError, DescriptorError) as e:
        result.error = str(e)
        return result

    result.descriptor_files = inputs.descriptor_files
    config = inputs.config

    sink: SourceSink
    if write:
        result.output_dir = output_dir.resolve() if output_dir else config.resolve_output_dir(inputs.base_dir)
        sink = FileSystemSink(result.output_dir, overwrite=config.overwrite)
    else:
        sink = MemorySink()

    try:
        result.pass_result = run_generation_pass(
            inputs.descriptors,
            sink,
            diagnostics=Diagnostics(),
            clock=clock,
            indent=config.indent,
        )
    except GenerationError as e:
        result.error = f"Generation aborted: {e}"
        return result

    if isinstance(sink, FileSystemSink):
        result.written = list(sink.written)
    elif isinstance(sink, MemorySink):
        result.previews = dict(sink.sources)

    return result
