"""
Shared test fixtures and configuration.
"""

import textwrap
from datetime import UTC, datetime
from pathlib import Path

import pytest

from buildergen.core.models import ClassDescriptor, FieldSpec

FIXED_INSTANT = datetime(2024, 3, 1, 12, 30, 45, tzinfo=UTC)


@pytest.fixture
def fixed_clock():
    """Clock that always returns the same instant."""
    return lambda: FIXED_INSTANT


@pytest.fixture
def person() -> ClassDescriptor:
    """The a.b.Person example: firstName: String, age: int."""
    return ClassDescriptor(
        qualified_name="a.b.Person",
        fields=[
            FieldSpec(name="firstName", type="String"),
            FieldSpec(name="age", type="int"),
        ],
    )


@pytest.fixture
def person_yml(tmp_path: Path) -> Path:
    """Descriptor file with one class, one ignored field and one interface."""
    content = textwrap.dedent("""\
        classes:
          - qualified_name: a.b.Person
            fields:
              - name: firstName
                type: String
              - name: password
                type: String
                ignore: true
              - name: age
                type: int
          - qualified_name: a.b.Named
            kind: interface
            fields:
              - name: name
                type: String
    """)
    path = tmp_path / "person.yml"
    path.write_text(content)
    return path
