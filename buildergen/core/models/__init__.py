"""
Domain models — Pydantic types for the builder generator.

All models are re-exported here for convenient access:

    from buildergen.core.models import ClassDescriptor, FieldSpec, GeneratedUnit
"""

from buildergen.core.models.descriptor import (
    ClassDescriptor,
    ElementKind,
    FieldSpec,
    pascal_case,
)
from buildergen.core.models.template import GeneratedUnit

__all__ = [
    # descriptor.py
    "ClassDescriptor",
    "ElementKind",
    "FieldSpec",
    # template.py
    "GeneratedUnit",
    "pascal_case",
]
