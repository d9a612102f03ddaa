"""
Generation service — emit builder units to a sink.

``generate()`` handles one descriptor: render, then write through the
sink in a single scoped block.  ``run_generation_pass()`` handles a
batch the way a build driver would call it: descriptors that are not
classes are skipped with a warning, everything else is generated, and
a sink failure aborts the whole pass.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from buildergen.core.models.descriptor import ClassDescriptor
from buildergen.core.models.template import GeneratedUnit
from buildergen.core.observability.diagnostics import Diagnostics
from buildergen.core.services.generators.builder import (
    DEFAULT_INDENT,
    Clock,
    render_builder,
    utc_now,
)
from buildergen.core.services.sink import GenerationError, SourceSink

logger = logging.getLogger(__name__)


@dataclass
class GenerationPassResult:
    """Outcome of one generation pass."""

    units: list[GeneratedUnit] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    diagnostics: Diagnostics = field(default_factory=Diagnostics)

    @property
    def generated(self) -> list[str]:
        return [u.output_qualified_name for u in self.units]

    def to_dict(self) -> dict[str, Any]:
        return {
            "generated": self.generated,
            "skipped": self.skipped,
            "diagnostics": self.diagnostics.to_dict(),
        }


def generate(
    descriptor: ClassDescriptor,
    sink: SourceSink,
    *,
    clock: Clock | None = None,
    indent: int = DEFAULT_INDENT,
) -> GeneratedUnit:
    """Generate the builder for one class and write it to the sink.

    The clock is read exactly once.  Nothing is returned unless the
    sink accepted the full text.

    Raises:
        GenerationError: The sink could not open or write the destination.
    """
    unit = render_builder(
        descriptor,
        generated_at=(clock or utc_now)(),
        indent=indent,
    )

    try:
        with sink.open(unit.output_qualified_name) as out:
            out.write(unit.source_text)
    except GenerationError:
        raise
    except OSError as e:
        raise GenerationError(
            f"Cannot write {unit.output_qualified_name}: {e}"
        ) from e

    return unit


def run_generation_pass(
    descriptors: Iterable[ClassDescriptor],
    sink: SourceSink,
    *,
    diagnostics: Diagnostics | None = None,
    clock: Clock | None = None,
    indent: int = DEFAULT_INDENT,
) -> GenerationPassResult:
    """Generate builders for a batch of descriptors.

    Args:
        descriptors: Descriptors in discovery order.
        sink: Destination for generated units, scoped to this pass.
        diagnostics: Pass-scoped diagnostics sink (a fresh one if None).
        clock: Timestamp source for the ``@Generated`` marker.
        indent: Spaces per indentation level in generated sources.

    Returns:
        GenerationPassResult listing generated units and skipped names.

    Raises:
        GenerationError: A destination could not be written.  Units
            emitted before the failure stay in the sink.
    """
    result = GenerationPassResult(diagnostics=diagnostics or Diagnostics())

    for descriptor in descriptors:
        if not descriptor.is_class:
            result.diagnostics.warning(
                f"Builder requested on {descriptor.qualified_name} which is "
                f"a {descriptor.kind.value}, not a class. Ignoring it.",
                subject=descriptor.qualified_name,
            )
            result.skipped.append(descriptor.qualified_name)
            continue

        try:
            unit = generate(descriptor, sink, clock=clock, indent=indent)
        except GenerationError as e:
            result.diagnostics.error(str(e), subject=descriptor.qualified_name)
            raise

        result.units.append(unit)
        result.diagnostics.info(
            f"Generated {unit.output_qualified_name}",
            subject=descriptor.qualified_name,
        )

    logger.info(
        "Generation pass: %d generated, %d skipped",
        len(result.units), len(result.skipped),
    )
    return result
