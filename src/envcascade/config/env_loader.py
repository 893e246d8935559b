"""Env cascade loader.

Reads an ordered list of env files and folds them into an EnvStore:

1) inherited environment (the store's initial contents, lowest precedence)
2) each source in ascending tier order, later tiers overwriting earlier ones

Alongside the final values it records, per tier, which variable names each
file defined. That provenance is what the services report over HTTP.

File format: UTF-8, one ``NAME=VALUE`` per line, split on the first ``=``.
The name is trimmed and the raw value is kept exactly as written. By default
the value applied to the store is python-dotenv's decoding of it. Blank lines,
``#`` comments and lines without ``=`` are skipped without error.
"""

from __future__ import annotations

import io
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

from dotenv import dotenv_values

from envcascade.config.sources import EnvFileSource
from envcascade.config.store import EnvStore
from envcascade.exceptions import ConfigurationError, SourceUnreadableError
from envcascade.logger import Logger, get_logger

COMMENT_MARKER = "#"
SEPARATOR = "="

# Only CR, LF and CRLF end a line. str.splitlines would also break on \x0c or \u2028 inside a value.
LINE_BREAK = re.compile(r"\r\n|\r|\n")


@dataclass
class ParsedEnvFile:
    """Result of reading one source.

    Attributes:
        path: File the record describes
        tier: Tier of the source
        label: Provenance label of the source
        existed: Whether the file was present at read time
        variable_names: Names in file order, duplicates kept
        raw_pairs: Name to literal value, last assignment wins
    """

    path: Path
    tier: int
    label: str
    existed: bool = False
    variable_names: List[str] = field(default_factory=list)
    raw_pairs: Dict[str, str] = field(default_factory=dict)


def parse_env_text(text: str) -> Tuple[List[str], Dict[str, str], List[int]]:
    """Parse env file content.

    Returns:
        (variable_names, raw_pairs, skipped_line_numbers). Skipped line
        numbers are 1-based and only cover non-blank, non-comment lines
        that could not be parsed.
    """
    names: List[str] = []
    pairs: Dict[str, str] = {}
    skipped: List[int] = []

    for lineno, line in enumerate(LINE_BREAK.split(text), start=1):
        stripped = line.strip()
        if not stripped or stripped.startswith(COMMENT_MARKER):
            continue
        if SEPARATOR not in line:
            skipped.append(lineno)
            continue

        name, value = line.split(SEPARATOR, 1)
        name = name.strip()
        if not name:
            skipped.append(lineno)
            continue

        names.append(name)
        pairs[name] = value

    return names, pairs, skipped


def decode_values(text: str, raw_pairs: Dict[str, str]) -> Dict[str, str]:
    """Decode values with python-dotenv quoting rules.

    Names python-dotenv does not produce (or produces without a value) keep
    their raw value. Variable interpolation is disabled.
    """
    decoded = dotenv_values(stream=io.StringIO(text), interpolate=False)
    result: Dict[str, str] = {}
    for name, raw in raw_pairs.items():
        value = decoded.get(name)
        result[name] = raw if value is None else value
    return result


@dataclass
class CascadeResult:
    """Effective environment plus per-tier provenance."""

    store: EnvStore
    files: Dict[int, ParsedEnvFile]

    def get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Final resolved value for ``name``, or ``default`` when undefined."""
        return self.store.get(name, default)

    def names_by_tier(self) -> Dict[int, List[str]]:
        return {tier: list(parsed.variable_names) for tier, parsed in self.files.items()}

    def provenance(self) -> Dict[str, List[str]]:
        """Provenance keyed by source label, e.g. ``{"base": [...], "service": [...]}``."""
        return {parsed.label: list(parsed.variable_names) for parsed in self.files.values()}

    def describe_sources(self) -> Dict[str, Dict[str, Any]]:
        """JSON-ready description of every source, keyed by label."""
        return {
            parsed.label: {
                "path": str(parsed.path),
                "exists": parsed.existed,
                "variables": list(parsed.variable_names),
            }
            for parsed in self.files.values()
        }


class EnvCascadeLoader:
    """Apply a cascade of env files onto an EnvStore.

    Runs once at startup, before any request handler reads the store.

    Example:
        store = EnvStore.from_environ()
        result = EnvCascadeLoader(store).load(default_sources(root, "api"))
        result.get("DATABASE_URL")
        result.provenance()  # {"base": [...], "service": [...]}
    """

    def __init__(
        self,
        store: Optional[EnvStore] = None,
        decode: bool = True,
        logger: Optional[Logger] = None,
    ) -> None:
        """Initialize the loader.

        Args:
            store: Store to mutate (default: snapshot of os.environ)
            decode: Apply python-dotenv decoded values (quotes stripped);
                False applies the literal text after "="
            logger: Logger for per-file diagnostics
        """
        self.store = store if store is not None else EnvStore.from_environ()
        self.decode = decode
        self.logger = logger or get_logger("envcascade")

    def read_source(self, source: EnvFileSource) -> Tuple[ParsedEnvFile, Dict[str, str]]:
        """Read one source.

        Returns:
            The provenance record and the values to apply for it.

        Raises:
            SourceUnreadableError: If the file exists but cannot be read
        """
        parsed = ParsedEnvFile(path=source.path, tier=source.tier, label=source.label)

        try:
            if not source.path.exists():
                self.logger.debug("Env file not found", path=str(source.path), tier=source.tier)
                return parsed, {}
            # utf-8-sig drops a leading byte order mark
            text = source.path.read_text(encoding="utf-8-sig")
        except (OSError, UnicodeDecodeError) as exc:
            raise SourceUnreadableError(str(source.path), source.tier, str(exc)) from exc

        names, pairs, skipped = parse_env_text(text)
        for lineno in skipped:
            self.logger.debug("Skipped malformed line", path=str(source.path), line=lineno)

        parsed.existed = True
        parsed.variable_names = names
        parsed.raw_pairs = pairs

        values = decode_values(text, pairs) if self.decode else dict(pairs)
        return parsed, values

    def load(self, sources: Sequence[EnvFileSource]) -> CascadeResult:
        """Fold ``sources`` onto the store in ascending tier order.

        Raises:
            ConfigurationError: If sources are not strictly ascending by tier
            SourceUnreadableError: If an existing file cannot be read
        """
        tiers = [source.tier for source in sources]
        if any(later <= earlier for earlier, later in zip(tiers, tiers[1:])):
            raise ConfigurationError(
                "Env sources must be ordered by strictly ascending tier",
                code="SOURCE_ORDER",
                details={"tiers": tiers},
            )

        files: Dict[int, ParsedEnvFile] = {}
        for source in sources:
            parsed, values = self.read_source(source)
            self.store.update(values)
            files[source.tier] = parsed

            if parsed.existed:
                self.logger.info(
                    "Loaded env file",
                    source=source.label,
                    path=str(source.path),
                    tier=source.tier,
                    variables=len(parsed.variable_names),
                )

        return CascadeResult(store=self.store, files=files)


__all__ = [
    "CascadeResult",
    "EnvCascadeLoader",
    "ParsedEnvFile",
    "decode_values",
    "parse_env_text",
]
