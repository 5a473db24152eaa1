"""
Reading sequence JSON files and writing EDL files.

Path handling is hardened the same way for every entry point: null bytes
are rejected, paths are resolved, extensions are whitelisted and input
files are size-checked before they are read.
"""

import json
import logging
from pathlib import Path
from typing import Optional, Tuple

from .composer import EDLComposer
from .models import Sequence
from .validation import ensure_valid

logger = logging.getLogger(__name__)

SEQUENCE_EXTENSIONS = ('.json',)
EDL_EXTENSION = '.edl'

# Maximum size for a sequence JSON file (10 MB)
MB = 1024 * 1024
MAX_FILE_SIZE = 10 * MB


def _resolve(path: str, what: str) -> Path:
    if '\x00' in path:
        raise ValueError(f"Invalid {what} path: null byte detected")
    return Path(path).resolve()


def validate_filepath(filepath: str, allowed_extensions: Optional[Tuple[str, ...]] = None) -> str:
    """Check a sequence file path before it is read and return it resolved.

    Raises:
        ValueError: Null byte in the path, not a regular file, wrong
            extension, or larger than MAX_FILE_SIZE.
        FileNotFoundError: When the sequence file does not exist.
    """
    resolved = _resolve(filepath, "sequence file")
    if not resolved.exists():
        raise FileNotFoundError(f"Sequence file not found: {filepath}")
    if not resolved.is_file():
        raise ValueError(f"Sequence path is not a regular file: {filepath}")

    if allowed_extensions and resolved.suffix.lower() not in allowed_extensions:
        raise ValueError(
            f"Unsupported sequence file type '{resolved.suffix}', "
            f"expected {' or '.join(allowed_extensions)}"
        )

    size = resolved.stat().st_size
    if size > MAX_FILE_SIZE:
        raise ValueError(f"Sequence file too large ({size / MB:.1f} MB, limit {MAX_FILE_SIZE // MB} MB)")
    return str(resolved)


def validate_output_path(output_path: str) -> str:
    """Resolve where an EDL will be written; its directory must already exist."""
    resolved = _resolve(output_path, "EDL output")
    if not resolved.parent.is_dir():
        raise ValueError(f"EDL output directory does not exist: {resolved.parent}")
    return str(resolved)


def validate_directory(directory: str) -> str:
    """Resolve a directory to search for sequence files."""
    resolved = _resolve(directory, "sequence directory")
    if not resolved.is_dir():
        raise ValueError(f"Sequence directory not found: {directory}")
    return str(resolved)


def find_sequence_files(directory: str) -> list:
    """Find all sequence JSON files in a directory tree."""
    path = Path(directory)
    files = []
    for ext in SEQUENCE_EXTENSIONS:
        files.extend(str(f) for f in path.rglob(f"*{ext}"))
    return sorted(files)


def default_output_path(input_path: str) -> str:
    """Place the EDL next to its sequence file: demo.json -> demo.edl."""
    return str(Path(input_path).with_suffix(EDL_EXTENSION))


def parse_sequence(text: str, strict: bool = False) -> Sequence:
    """Parse a sequence from JSON text.

    Args:
        text: JSON document with ``title`` and ``events``
        strict: Validate the events and raise on the first error

    Raises:
        ValueError: For malformed JSON or a payload that is not a sequence.
        SequenceValidationError: In strict mode, for invalid events.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid sequence JSON: {e}") from e
    sequence = Sequence.from_dict(data)
    if strict:
        ensure_valid(sequence)
    return sequence


def load_sequence(filepath: str, strict: bool = False) -> Sequence:
    """Load a sequence JSON file."""
    filepath = validate_filepath(filepath, SEQUENCE_EXTENSIONS)
    text = Path(filepath).read_text(encoding='utf-8')
    sequence = parse_sequence(text, strict=strict)
    logger.debug("loaded %s: %d event(s)", filepath, len(sequence.events))
    return sequence


def write_edl(text: str, output_path: str) -> str:
    """Write EDL text to a file and return the resolved path."""
    output_path = validate_output_path(output_path)
    with open(output_path, 'w', encoding='utf-8') as f:
        f.write(text)
    logger.debug("wrote %d bytes to %s", len(text), output_path)
    return output_path


def export_edl(sequence: Sequence, output_path: str, strict: bool = False) -> str:
    """Compose a sequence and write the EDL file in one step."""
    if strict:
        ensure_valid(sequence)
    return write_edl(EDLComposer(sequence).compose(), output_path)
