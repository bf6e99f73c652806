"""
Append-only Turtle statement writer.

Every call writes exactly one complete line and flushes it, so the output
is valid Turtle up to the last line written no matter when a run stops.
Nothing is buffered across calls and nothing already written is revisited.

Usage:
    with TripleSink.open("out.ttl") as sink:
        sink.write_prefix("ec", "http://www.example.org/ec#")
        sink.write_triple("ec:EntityClass", "rdfs:subClassOf", "ec:Class")
"""

import json
import logging
from enum import Enum
from pathlib import Path
from typing import Any, Optional, TextIO, Union

from .errors import IOFailure

logger = logging.getLogger(__name__)


def quote_literal(value: Any) -> str:
    """
    Quote a value as a Turtle string literal.

    JSON string escaping is used, so the literal decodes with any JSON
    decoder and every escape it produces is a valid Turtle escape.
    """
    return json.dumps(value if isinstance(value, str) else str(value), ensure_ascii=False)


def quote_json(structure: Any) -> str:
    """
    Quote a structured value as a string literal holding its JSON encoding.

    The structure is JSON-encoded once to get its text, then quoted again,
    so decoding the literal yields a string that itself decodes to the
    original structure.
    """
    inner = json.dumps(structure, separators=(",", ":"), ensure_ascii=False)
    return json.dumps(inner, ensure_ascii=False)


def _text(term: Any) -> str:
    if isinstance(term, Enum):
        return str(term.value)
    return term if isinstance(term, str) else str(term)


class TripleSink:
    """
    Line-oriented Turtle writer over a text stream.

    The sink is used from one thread of control for the whole run.

    Attributes:
        name: Display name of the output (file path or "<stream>").
        triples_written: Number of statement lines written.
        prefixes_written: Number of @prefix lines written.
    """

    def __init__(self, stream: TextIO, name: str = "<stream>", owns_stream: bool = False) -> None:
        self._stream = stream
        self._owns_stream = owns_stream
        self.name = name
        self.triples_written = 0
        self.prefixes_written = 0

    @classmethod
    def open(cls, path: Union[str, Path]) -> "TripleSink":
        """
        Create (or truncate) the output file and return a sink writing to it.

        Raises:
            IOFailure: If the file cannot be created.
        """
        path = Path(path)
        try:
            if path.parent and not path.parent.exists():
                path.parent.mkdir(parents=True, exist_ok=True)
            stream = open(path, "w", encoding="utf-8", newline="\n")
        except OSError as e:
            raise IOFailure(str(path), e) from e
        logger.debug(f"Opened Turtle output {path}")
        return cls(stream, name=str(path), owns_stream=True)

    def _write_line(self, line: str) -> None:
        try:
            self._stream.write(line)
            self._stream.flush()
        except OSError as e:
            raise IOFailure(self.name, e) from e
        except ValueError as e:
            # Writing to a closed stream
            raise IOFailure(self.name, e) from e

    def write_triple(self, subject: Any, predicate: Any, obj: Any) -> None:
        """Append one "<subject> <predicate> <object> ." statement."""
        self._write_line(f"{_text(subject)} {_text(predicate)} {_text(obj)} .\n")
        self.triples_written += 1

    def write_prefix(self, prefix: str, iri: str) -> None:
        """Append one "@prefix <prefix>: <<iri>> ." declaration."""
        self._write_line(f"@prefix {prefix}: <{iri}> .\n")
        self.prefixes_written += 1

    def close(self) -> None:
        if self._owns_stream and not self._stream.closed:
            self._stream.close()
            logger.debug(
                f"Closed {self.name}: {self.prefixes_written} prefixes, {self.triples_written} triples"
            )

    def __enter__(self) -> "TripleSink":
        return self

    def __exit__(self, exc_type: Optional[type], exc: Optional[BaseException], tb: Any) -> None:
        self.close()
