"""
TCP stream utility functions

Provides the delimiter-based record splitter used to cut the response stream
into JSON documents.
"""

from typing import Any, List

from seam_rpc.utils.serialization import decode_message

RECORD_DELIMITER = b"\n"


class RecordSplitter:
    """Splits a byte stream on a delimiter and decodes each record as JSON.

    Bytes after the last delimiter are buffered until more data arrives or
    ``flush()`` is called at end of stream. A trailing carriage return is
    stripped and blank records are skipped.
    """

    def __init__(self, delimiter: bytes = RECORD_DELIMITER):
        self.delimiter = delimiter
        self._buffer = b""

    def feed(self, data: bytes) -> List[Any]:
        """Add data and return the records it completes

        Raises:
            ValueError: A completed record is not valid JSON
        """
        self._buffer += data
        *pieces, self._buffer = self._buffer.split(self.delimiter)
        return self._decode(pieces)

    def flush(self) -> List[Any]:
        """Return the final unterminated record, if any"""
        pieces, self._buffer = [self._buffer], b""
        return self._decode(pieces)

    @staticmethod
    def _decode(pieces: List[bytes]) -> List[Any]:
        records = []
        for piece in pieces:
            piece = piece.rstrip(b"\r")
            if not piece.strip():
                continue
            records.append(decode_message(piece))
        return records
