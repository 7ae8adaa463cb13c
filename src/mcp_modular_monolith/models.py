"""Catalog record models.

Rules, anti-patterns and decision trees are loaded once from the packaged
YAML data and never change afterwards, so every model here is frozen.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .helpers.categories import RuleCategory

# Decision tree edges pointing at a final answer carry this prefix in the data files
ANSWER_PREFIX = "ANSWER:"


class CatalogError(Exception):
    """Raised when the catalog data cannot be loaded or violates its invariants."""


class FrozenModel(BaseModel):
    """Immutable base for catalog records."""

    model_config = ConfigDict(frozen=True, extra="forbid")


class CodeExample(FrozenModel):
    """Labelled code snippet illustrating a rule."""

    label: Literal["Good", "Bad"] = Field(description="Whether the snippet shows good or bad practice")
    language: str = Field(description="Fence language for markdown rendering")
    code: str


class CleanCodeReference(FrozenModel):
    """Cross-reference from an architecture rule to a clean code principle."""

    principle_id: str = Field(description="Principle id in the clean code catalog")
    relationship: Literal["reinforces", "implements", "extends", "complements"]
    note: str


class CatalogEntry(FrozenModel):
    """Fields shared by rules and anti-patterns."""

    id: str = Field(min_length=1, description="Unique kebab-case key")
    name: str
    category: RuleCategory
    description: str
    examples: tuple[CodeExample, ...] = ()
    tags: tuple[str, ...] = ()
    clean_code_refs: tuple[CleanCodeReference, ...] = ()


class Rule(CatalogEntry):
    """Architecture rule with its rationale."""

    rationale: str
    source: str | None = Field(default=None, description="Optional attribution")


class AntiPattern(CatalogEntry):
    """Architecture anti-pattern."""


class GoTo(FrozenModel):
    """Edge leading to another question node."""

    kind: Literal["goto"] = "goto"
    node_id: str


class Terminal(FrozenModel):
    """Edge ending the walk with a literal answer."""

    kind: Literal["answer"] = "answer"
    answer: str


Edge = Annotated[GoTo | Terminal, Field(discriminator="kind")]


def parse_edge(value: Any) -> Any:
    """Convert the data file string form of an edge to its tagged form.

    Strings starting with ``ANSWER:`` are terminal answers, any other string
    is a node id. Mappings are passed through for pydantic to validate.
    """
    if isinstance(value, str):
        if value.startswith(ANSWER_PREFIX):
            return {"kind": "answer", "answer": value[len(ANSWER_PREFIX) :].strip()}
        return {"kind": "goto", "node_id": value}
    return value


class DecisionNode(FrozenModel):
    """Yes/no question with an outgoing edge for each answer."""

    id: str
    question: str
    yes: Edge
    no: Edge

    @field_validator("yes", "no", mode="before")
    @classmethod
    def _coerce_edge(cls, value: Any) -> Any:
        return parse_edge(value)


class DecisionTree(FrozenModel):
    """Yes/no question graph rooted at the node with id ``start``."""

    id: str = Field(min_length=1)
    name: str
    description: str
    nodes: tuple[DecisionNode, ...]

    def node(self, node_id: str) -> DecisionNode | None:
        """Look up a node by id."""
        for candidate in self.nodes:
            if candidate.id == node_id:
                return candidate
        return None
