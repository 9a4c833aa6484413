"""Extract parameter constraints from every function declaration in a file."""

import logging
from pathlib import Path

from js_constraint_extractor.generators import ValueGenerator
from js_constraint_extractor.models import FunctionRecord
from js_constraint_extractor.recognizers import FunctionContext, apply_recognizers
from js_constraint_extractor.source_loader import SourceLoader
from js_constraint_extractor.syntax import (
    FunctionDeclaration,
    Identifier,
    Node,
    ParsedSource,
    walk,
)

logger = logging.getLogger(__name__)


class ConstraintExtractor:
    """Walk a syntax tree and collect constraints per function parameter.

    Every function declaration found anywhere in the tree gets its own
    record, including declarations nested in other functions. A nested
    function's body is also part of its enclosing function's body, so it is
    scanned for both. Functions sharing a name overwrite each other, the one
    found last winning.

    Args:
        seed: Seed for generated values, or None for a fresh random seed
        tolerant: Extract from sources with recoverable syntax errors
        generator: Value generator to use instead of one built from ``seed``
    """

    def __init__(
        self,
        seed: int | None = None,
        tolerant: bool = False,
        generator: ValueGenerator | None = None,
    ):
        self.generator = generator or ValueGenerator(seed)
        self.loader = SourceLoader(tolerant=tolerant)

    def extract(self, file_path: str | Path) -> dict[str, FunctionRecord]:
        """Extract constraints from a JavaScript file.

        Raises:
            SourceLoadError: If the file cannot be read or parsed
        """
        parsed = self.loader.load(file_path)
        return self.extract_parsed(parsed)

    def extract_source(self, source: str) -> dict[str, FunctionRecord]:
        """Extract constraints from JavaScript source text.

        Raises:
            SourceLoadError: If the source does not parse
        """
        parsed = self.loader.parse(source)
        return self.extract_parsed(parsed)

    def extract_parsed(self, parsed: ParsedSource) -> dict[str, FunctionRecord]:
        """Extract constraints from an already parsed source."""
        result: dict[str, FunctionRecord] = {}

        def visit(node: Node) -> None:
            if isinstance(node, FunctionDeclaration):
                context, record = self._scan_function(node, parsed)
                if context.name in result:
                    logger.info(f"Function '{context.name}' redeclared, replacing")
                result[context.name] = record

        walk(parsed.root, visit)

        total = sum(record.constraint_count() for record in result.values())
        logger.info(
            f"Extraction complete: {len(result)} functions, {total} constraints"
        )
        return result

    def _scan_function(
        self, node: FunctionDeclaration, parsed: ParsedSource
    ) -> tuple[FunctionContext, FunctionRecord]:
        params = [p.name for p in node.params if isinstance(p, Identifier)]
        context = FunctionContext(
            name=function_name(node),
            params=params,
            arity=len(node.params),
            source=parsed,
            generator=self.generator,
        )
        record = FunctionRecord.for_params(params)

        skipped = len(node.params) - len(params)
        if skipped:
            logger.info(
                f"Function '{context.name}': ignoring {skipped} non-identifier parameter(s)"
            )

        def visit(child: Node) -> None:
            for constraint in apply_recognizers(child, context):
                record.add(constraint)

        if node.body is not None:
            walk(node.body, visit)

        logger.info(
            f"Function '{context.name}'({', '.join(params)}): "
            f"{record.constraint_count()} constraints"
        )
        return context, record


def function_name(node: FunctionDeclaration) -> str:
    """Name of a function declaration, "" when anonymous."""
    return node.id.name if node.id else ""


def extract_constraints(
    file_path: str | Path,
    seed: int | None = None,
    tolerant: bool = False,
) -> dict[str, FunctionRecord]:
    """Derive boundary-value constraints for the functions in a JavaScript file.

    This is the main entry point for constraint extraction.

    Args:
        file_path: Path to the subject file
        seed: Seed for generated values
        tolerant: Accept recoverable syntax errors

    Returns:
        Mapping from function name to its parameters and constraints

    Raises:
        SourceLoadError: If the file cannot be read or parsed
    """
    return ConstraintExtractor(seed=seed, tolerant=tolerant).extract(file_path)


def extract_constraints_from_source(
    source: str,
    seed: int | None = None,
    tolerant: bool = False,
) -> dict[str, FunctionRecord]:
    """Same as ``extract_constraints`` for source text already in memory."""
    return ConstraintExtractor(seed=seed, tolerant=tolerant).extract_source(source)
