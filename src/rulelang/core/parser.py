"""
File-level parsing entry points.
"""

import logging
from pathlib import Path

from .config import ParserConfig
from .errors import ParseError, make_parse_error
from .parser_impl import ParseResult, parse_drl

logger = logging.getLogger(__name__)


def parse_file(path: Path, config: ParserConfig | None = None) -> ParseResult:
    """
    Parse one rule file.

    Args:
        path: Rule file to read
        config: Parser configuration (encoding, comment style, error cap)

    Returns:
        ParseResult for the file

    Raises:
        ParseError: If the file cannot be decoded with the configured encoding
    """
    config = config or ParserConfig()
    try:
        text = path.read_text(encoding=config.encoding)
    except UnicodeDecodeError as e:
        raise make_parse_error(
            f"Cannot decode file as {config.encoding}: {e.reason}",
            str(path),
            line=1,
            column=0,
        ) from e

    result = parse_drl(text, str(path), config)
    if result.has_errors:
        logger.info(f"{path}: {len(result.errors)} parse error(s)")
    return result


def parse_files(paths: list[Path], config: ParserConfig | None = None) -> list[ParseResult]:
    """
    Parse rule files independently, in order.

    Directories are expanded using the configured file patterns.

    Args:
        paths: Rule files or directories
        config: Parser configuration

    Returns:
        One ParseResult per file
    """
    config = config or ParserConfig()
    results: list[ParseResult] = []

    for path in collect_rule_files(paths, config):
        try:
            results.append(parse_file(path, config))
        except ParseError as e:
            logger.warning(f"Skipping {path}: {e.message}")

    return results


def collect_rule_files(paths: list[Path], config: ParserConfig | None = None) -> list[Path]:
    """Expand directories into the rule files they contain, sorted by path."""
    config = config or ParserConfig()
    files: list[Path] = []
    for path in paths:
        if path.is_dir():
            found = {f for pattern in config.file_patterns for f in path.rglob(pattern)}
            files.extend(sorted(found))
        else:
            files.append(path)
    return files
