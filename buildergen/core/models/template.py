"""
Generated unit model — what the builder generator hands to a sink.
"""

from __future__ import annotations

from pydantic import BaseModel


class GeneratedUnit(BaseModel):
    """A generated source file, keyed by its qualified type name.

    Attributes:
        output_qualified_name: Qualified name of the generated type
                               (target class name + ``Builder``).
        source_text:           Full Java source of the unit.
        reason:                Why this unit was generated.
    """

    output_qualified_name: str
    source_text: str
    reason: str = ""

    @property
    def package(self) -> str:
        """Package of the generated type, empty for the default package."""
        head, _, _ = self.output_qualified_name.rpartition(".")
        return head

    @property
    def type_name(self) -> str:
        return self.output_qualified_name.rpartition(".")[2]

    @property
    def path(self) -> str:
        """Relative source path, e.g. ``a/b/PersonBuilder.java``."""
        return self.output_qualified_name.replace(".", "/") + ".java"
