"""Load JavaScript subject files into syntax trees."""

import logging
from pathlib import Path

from js_constraint_extractor.syntax import JavaScriptParser, ParsedSource

logger = logging.getLogger(__name__)


class SourceLoadError(Exception):
    """Error reading or parsing a subject file."""

    def __init__(self, message: str, phase: str = "reading"):
        super().__init__(message)
        self.phase = phase


class SourceLoader:
    """Read subject files and parse them with tree-sitter.

    Args:
        tolerant: Accept sources with recoverable syntax errors instead of
            raising SourceLoadError
    """

    def __init__(self, tolerant: bool = False):
        self.tolerant = tolerant
        self._parser = JavaScriptParser()

    def load(self, path: str | Path) -> ParsedSource:
        """Read and parse a JavaScript file.

        Args:
            path: Path to the subject file

        Returns:
            The parsed source

        Raises:
            SourceLoadError: If the file cannot be read or does not parse
        """
        path = Path(path)
        logger.info(f"Loading subject file: {path}")

        try:
            source = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Failed to read {path}: {e}")
            raise SourceLoadError(f"Cannot read {path}: {e}", phase="reading") from e

        return self.parse(source, origin=str(path))

    def parse(self, source: str, origin: str = "<source>") -> ParsedSource:
        """Parse already-loaded source text.

        Raises:
            SourceLoadError: If the source has syntax errors and the loader
                is not tolerant
        """
        parsed = self._parser.parse(source)

        if parsed.has_errors:
            line, column = parsed.first_error
            message = f"Syntax error in {origin} at line {line}, column {column}"
            if not self.tolerant:
                logger.error(message)
                raise SourceLoadError(message, phase="parsing")
            logger.warning(f"{message} (continuing in tolerant mode)")

        logger.info(f"Parsed {origin}: {len(parsed.root.body)} top-level statements")
        return parsed
