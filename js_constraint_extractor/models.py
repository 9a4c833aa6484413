"""Data models for extraction output."""

import json
from dataclasses import dataclass, field

# Constraint kinds: hints telling the consumer how to stage and render a value
FILE_WITH_CONTENT = "fileWithContent"
FILE_EXISTS = "fileExists"
INTEGER = "integer"
STRING = "string"
PHONE_NUMBER = "phoneNumber"

CONSTRAINT_KINDS = frozenset(
    {FILE_WITH_CONTENT, FILE_EXISTS, INTEGER, STRING, PHONE_NUMBER}
)


@dataclass(frozen=True)
class Constraint:
    """A boundary-relevant fact about one function parameter.

    ``value`` is a literal expression ready to be spliced into generated
    code (``"'emptyDir'"``, ``"31"``, ``"false"``), not a parsed value. The
    kind is a rendering hint only; an "integer" constraint may well carry a
    quoted string.
    """

    ident: str
    expression: str
    operator: str
    value: str
    func_name: str
    kind: str  # one of CONSTRAINT_KINDS
    altvalue: str | None = None

    def to_dict(self) -> dict:
        return {
            "ident": self.ident,
            "expression": self.expression,
            "operator": self.operator,
            "value": self.value,
            "altvalue": self.altvalue,
            "funcName": self.func_name,
            "kind": self.kind,
        }


@dataclass
class FunctionRecord:
    """Parameters and discovered constraints of one function."""

    params: list[str]
    constraints: dict[str, list[Constraint]] = field(default_factory=dict)

    @classmethod
    def for_params(cls, params: list[str]) -> "FunctionRecord":
        """Create a record with an empty constraint list per parameter."""
        return cls(params=list(params), constraints={p: [] for p in params})

    def add(self, constraint: Constraint) -> None:
        self.constraints.setdefault(constraint.ident, []).append(constraint)

    def constraint_count(self) -> int:
        return sum(len(c) for c in self.constraints.values())

    def to_dict(self) -> dict:
        return {
            "params": list(self.params),
            "constraints": {
                ident: [c.to_dict() for c in constraints]
                for ident, constraints in self.constraints.items()
            },
        }


def result_to_dict(result: dict[str, FunctionRecord]) -> dict:
    """Convert an extraction result to a dictionary for JSON serialization."""
    return {name: record.to_dict() for name, record in result.items()}


def result_to_json(result: dict[str, FunctionRecord], indent: int = 2) -> str:
    """Serialize an extraction result to a JSON string."""
    return json.dumps(result_to_dict(result), indent=indent)
