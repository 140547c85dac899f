"""Builder for aliased multi-operation productCreate documents."""
from __future__ import annotations

from dataclasses import dataclass

from .graphql_strings import PRODUCT_CREATE_SELECTION


ALIAS_PREFIX = "product"
VARIABLE_PREFIX = "input"


@dataclass(frozen=True)
class AliasedOperation:
    """One aliased productCreate bound to its own variable slot."""

    alias: str
    variable: str
    field: str = "productCreate"
    argument: str = "input"

    def render(self) -> str:
        return (
            f"  {self.alias}: {self.field}({self.argument}: ${self.variable}) {{"
            f"{PRODUCT_CREATE_SELECTION}"
            "  }"
        )


@dataclass(frozen=True)
class VariableDeclaration:
    name: str
    type_name: str = "ProductInput!"

    def render(self) -> str:
        return f"${self.name}: {self.type_name}"


@dataclass(frozen=True)
class BatchDocument:
    """Structured description of a batched mutation document."""

    operation_name: str
    variables: tuple[VariableDeclaration, ...]
    operations: tuple[AliasedOperation, ...]

    @property
    def width(self) -> int:
        return len(self.operations)

    @property
    def aliases(self) -> list[str]:
        return [operation.alias for operation in self.operations]

    def render(self) -> str:
        """Serialize to a GraphQL mutation string."""
        declarations = ",\n  ".join(v.render() for v in self.variables)
        body = "\n".join(operation.render() for operation in self.operations)
        return (
            f"mutation {self.operation_name}(\n  {declarations}\n) {{\n"
            f"{body}\n"
            "}\n"
        )

    def bind(self, inputs: list[dict]) -> dict:
        """Map ProductInput dicts onto this document's variable slots."""
        if len(inputs) != self.width:
            raise ValueError(
                f"Expected {self.width} inputs for {self.operation_name}, got {len(inputs)}"
            )
        return {
            declaration.name: product_input
            for declaration, product_input in zip(self.variables, inputs)
        }


def build_product_create_document(width: int) -> BatchDocument:
    """Build a document with ``width`` aliased productCreate operations.

    Aliases are ``product0..product{width-1}``, each bound to
    ``$input0..$input{width-1}``.
    """
    if width < 1:
        raise ValueError(f"Document width must be at least 1, got {width}")

    variables = tuple(
        VariableDeclaration(name=f"{VARIABLE_PREFIX}{i}") for i in range(width)
    )
    operations = tuple(
        AliasedOperation(alias=f"{ALIAS_PREFIX}{i}", variable=f"{VARIABLE_PREFIX}{i}")
        for i in range(width)
    )
    return BatchDocument(
        operation_name="batchProductCreate",
        variables=variables,
        operations=operations,
    )
