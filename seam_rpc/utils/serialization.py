"""
JSON serialization/deserialization tools

Provides functionality for converting between JSON-RPC documents and the bytes
written to or read from the wire.
"""

import json
from typing import Any, Union


def encode_message(message: Any, newline: bool = False) -> bytes:
    """Convert a JSON-RPC document to UTF-8 encoded JSON

    Args:
        message: JSON-serializable object
        newline: Whether to terminate the document with a newline

    Returns:
        bytes: Encoded document
    """
    text = json.dumps(message, separators=(",", ":"))
    if newline:
        text += "\n"
    return text.encode("utf-8")


def decode_message(data: Union[bytes, str]) -> Any:
    """Convert JSON bytes or text to a Python object

    Args:
        data: Encoded JSON document

    Returns:
        Any: Decoded object

    Raises:
        ValueError: The data is not valid JSON
    """
    if isinstance(data, bytes):
        try:
            data = data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ValueError(f"Response is not valid UTF-8: {e}") from e

    try:
        return json.loads(data)
    except json.JSONDecodeError as e:
        raise ValueError(f"Response is not valid JSON: {e}") from e
