"""
Descriptor models — the already-extracted shape of a class.

A ClassDescriptor is what the upstream producer hands to the builder
generator: the class's qualified name and its fields in source
declaration order.  Ignored fields never make it in here.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class ElementKind(str, Enum):
    """Shape of the source element a descriptor was taken from."""

    CLASS = "class"
    INTERFACE = "interface"
    ENUM = "enum"
    RECORD = "record"
    ANNOTATION = "annotation"


# Reserved words and literals that can never name a field or package segment
JAVA_RESERVED_WORDS = frozenset({
    "abstract", "assert", "boolean", "break", "byte", "case", "catch", "char",
    "class", "const", "continue", "default", "do", "double", "else", "enum",
    "extends", "final", "finally", "float", "for", "goto", "if", "implements",
    "import", "instanceof", "int", "interface", "long", "native", "new",
    "package", "private", "protected", "public", "return", "short", "static",
    "strictfp", "super", "switch", "synchronized", "this", "throw", "throws",
    "transient", "try", "void", "volatile", "while",
    "true", "false", "null", "_",
})


def _is_identifier(name: str) -> bool:
    # Java allows '$' anywhere Python allows '_'
    return name.replace("$", "_").isidentifier() and name not in JAVA_RESERVED_WORDS


def pascal_case(name: str) -> str:
    """Upper-case the first character only; the rest is left untouched.

    A first character whose upper case is more than one character
    (``ß`` → ``SS``) is kept as it is.

    >>> pascal_case("userId")
    'UserId'
    >>> pascal_case("_id")
    '_id'
    """
    first = name[:1].upper()
    if len(first) != 1:
        first = name[:1]
    return first + name[1:]


class FieldSpec(BaseModel):
    """A single field of the described class."""

    model_config = ConfigDict(frozen=True)

    name: str
    type: str = Field(..., min_length=1)  # raw textual spelling, e.g. "java.util.List<String>"

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not _is_identifier(v):
            raise ValueError(f"'{v}' is not a valid field identifier")
        return v

    @field_validator("type")
    @classmethod
    def validate_type(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("field type must not be blank")
        return v

    @property
    def setter_name(self) -> str:
        """Name of the fluent setter generated for this field."""
        return "with" + pascal_case(self.name)


class ClassDescriptor(BaseModel):
    """Qualified name plus ordered fields of a class requesting a builder.

    Field order is source declaration order and is preserved through
    generation.  Instances are immutable and are meant to be used for
    a single generation call.
    """

    model_config = ConfigDict(frozen=True)

    qualified_name: str
    fields: tuple[FieldSpec, ...] = ()
    kind: ElementKind = ElementKind.CLASS

    @field_validator("qualified_name")
    @classmethod
    def validate_qualified_name(cls, v: str) -> str:
        parts = v.split(".")
        if not all(_is_identifier(p) for p in parts):
            raise ValueError(f"'{v}' is not a valid qualified class name")
        return v

    @model_validator(mode="after")
    def validate_fields(self) -> ClassDescriptor:
        names: set[str] = set()
        signatures: set[tuple[str, str]] = set()
        for f in self.fields:
            if f.name in names:
                raise ValueError(f"duplicate field '{f.name}' in {self.qualified_name}")
            names.add(f.name)

            # userId / UserId both map to withUserId
            signature = (f.setter_name, f.type)
            if signature in signatures:
                raise ValueError(
                    f"field '{f.name}' in {self.qualified_name} collides with another "
                    f"field on setter {f.setter_name}({f.type})"
                )
            signatures.add(signature)
        return self

    @property
    def is_class(self) -> bool:
        return self.kind == ElementKind.CLASS

    @property
    def simple_name(self) -> str:
        return self.qualified_name.rsplit(".", 1)[-1]

    @property
    def builder_qualified_name(self) -> str:
        """Qualified name of the generated builder type."""
        return self.qualified_name + "Builder"

    def field_names(self) -> list[str]:
        return [f.name for f in self.fields]
