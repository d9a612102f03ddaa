"""
Builder generator — render a Java builder type from a ClassDescriptor.

For a class ``a.b.Person`` the generated unit is ``a.b.PersonBuilder``:
one private storage field and one ``withX(...)`` fluent setter per
descriptor field, plus a ``build()`` method that default-constructs the
target and copies every stored value into it by reflection.

Rendering is a pure function of the descriptor and a timestamp.  With
the timestamp fixed the output is byte-identical between runs.

Generated ``build()`` behaviour worth knowing about: a field that cannot
be found or made accessible on the target at runtime is skipped without
any error, so the returned instance may be only partially populated.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, datetime

from buildergen.core.models.descriptor import ClassDescriptor, FieldSpec
from buildergen.core.models.template import GeneratedUnit

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]

GENERATOR_ID = "buildergen.core.services.generators.builder"

DEFAULT_INDENT = 4

# Failures swallowed by the generated field-assignment helper
_SWALLOWED_EXCEPTIONS = (
    "NoSuchFieldException",
    "IllegalAccessException",
    "SecurityException",
    "java.lang.reflect.InaccessibleObjectException",
)


def utc_now() -> datetime:
    """Default clock: current UTC instant."""
    return datetime.now(UTC)


def format_instant(moment: datetime) -> str:
    """ISO-8601 UTC timestamp with a ``Z`` suffix.

    Naive datetimes are taken to already be in UTC.
    """
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    return moment.astimezone(UTC).isoformat().replace("+00:00", "Z")


def split_qualified_name(qualified_name: str) -> tuple[str, str]:
    """Split ``a.b.PersonBuilder`` into ``("a.b", "PersonBuilder")``.

    A name without a separator belongs to the default package and
    yields an empty package.
    """
    package, _, simple = qualified_name.rpartition(".")
    return package, simple


# ── Sections ────────────────────────────────────────────────────


def _render_header(package: str, meta_class_name: str, generated_at: str) -> list[str]:
    lines: list[str] = []
    if package:
        lines += [f"package {package};", ""]
    lines += [
        "import javax.annotation.processing.Generated;",
        "import java.lang.reflect.Field;",
        "",
        f'@Generated(value = "{GENERATOR_ID}", date = "{generated_at}")',
        f"public class {meta_class_name} {{",
    ]
    return lines


def _render_properties(fields: tuple[FieldSpec, ...], pad: str) -> list[str]:
    return [f"{pad}private {f.type} {f.name};" for f in fields]


def _render_with_methods(
    meta_class_name: str,
    fields: tuple[FieldSpec, ...],
    pad: str,
) -> list[str]:
    lines: list[str] = []
    for f in fields:
        lines += [
            "",
            f"{pad}public {meta_class_name} {f.setter_name}({f.type} {f.name}) {{",
            f"{pad * 2}this.{f.name} = {f.name};",
            f"{pad * 2}return this;",
            f"{pad}}}",
        ]
    return lines


def _render_build_method(
    class_name: str,
    fields: tuple[FieldSpec, ...],
    pad: str,
) -> list[str]:
    lines = [
        "",
        f"{pad}public {class_name} build() {{",
        f"{pad * 2}final {class_name} model = new {class_name}();",
    ]
    if fields:
        lines.append("")
        lines += [f'{pad * 2}assignField(model, "{f.name}", this.{f.name});' for f in fields]
    lines += [
        "",
        f"{pad * 2}return model;",
        f"{pad}}}",
    ]
    return lines


def _render_assign_helper(pad: str) -> list[str]:
    caught = " | ".join(_SWALLOWED_EXCEPTIONS)
    return [
        "",
        f"{pad}private static boolean assignField(final Object target, final String name, final Object value) {{",
        f"{pad * 2}try {{",
        f"{pad * 3}final Field field = target.getClass().getDeclaredField(name);",
        f"{pad * 3}field.setAccessible(true);",
        f"{pad * 3}field.set(target, value);",
        f"{pad * 3}return true;",
        f"{pad * 2}}} catch ({caught} e) {{",
        f"{pad * 3}return false;",
        f"{pad * 2}}}",
        f"{pad}}}",
    ]


# ── Public API ──────────────────────────────────────────────────


def render_builder(
    descriptor: ClassDescriptor,
    *,
    generated_at: datetime | None = None,
    indent: int = DEFAULT_INDENT,
) -> GeneratedUnit:
    """Render the builder source for a class descriptor.

    Args:
        descriptor: The class to generate a builder for.
        generated_at: Timestamp recorded in the ``@Generated`` marker.
            Defaults to the current UTC instant.
        indent: Spaces per indentation level in the emitted source.

    Returns:
        GeneratedUnit named ``<qualified_name>Builder``.
    """
    if generated_at is None:
        generated_at = utc_now()

    file_name = descriptor.builder_qualified_name
    package, meta_class_name = split_qualified_name(file_name)
    pad = " " * indent
    fields = descriptor.fields

    lines: list[str] = []
    lines += _render_header(package, meta_class_name, format_instant(generated_at))
    lines += _render_properties(fields, pad)
    lines += _render_with_methods(meta_class_name, fields, pad)
    lines += _render_build_method(descriptor.qualified_name, fields, pad)
    lines += _render_assign_helper(pad)
    lines.append("}")

    logger.debug(
        "Rendered %s (%d field(s))", file_name, len(fields),
    )

    return GeneratedUnit(
        output_qualified_name=file_name,
        source_text="\n".join(lines) + "\n",
        reason=f"Builder for {descriptor.qualified_name} ({len(fields)} field(s))",
    )
