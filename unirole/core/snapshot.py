"""
Binary snapshot of a universal role counter.

Layout (big-endian):

    int32       genome count
    int32       role count
    per role:
        utf     role ID
        utf     role name
        int32   good count
        int32   bad count

A "utf" value is an unsigned 16-bit byte length followed by modified UTF-8
text, the same encoding Java's DataOutputStream.writeUTF produces.
"""

import io
import struct
from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO, List, Union

from loguru import logger

_INT = struct.Struct(">i")
_USHORT = struct.Struct(">H")
_MAX_UTF_BYTES = 0xFFFF


class SnapshotError(ValueError):
    """Raised when a snapshot cannot be encoded or is malformed."""


@dataclass(frozen=True)
class RoleCounts:
    role_id: str
    role_name: str
    good: int
    bad: int


@dataclass
class CounterSnapshot:
    """Persisted state of a universal role counter."""

    genome_count: int = 0
    roles: List[RoleCounts] = field(default_factory=list)


def encode_modified_utf8(text: str) -> bytes:
    """Encode text as modified UTF-8 (NUL as C0 80, astral characters as surrogate pairs)."""
    out = bytearray()
    for char in text:
        code = ord(char)
        if code == 0:
            out += b"\xc0\x80"
        elif code > 0xFFFF:
            code -= 0x10000
            for surrogate in (0xD800 + (code >> 10), 0xDC00 + (code & 0x3FF)):
                out += chr(surrogate).encode("utf-8", "surrogatepass")
        else:
            out += char.encode("utf-8", "surrogatepass")
    return bytes(out)


def decode_modified_utf8(data: bytes) -> str:
    """Decode modified UTF-8 bytes back to text."""
    try:
        text = data.replace(b"\xc0\x80", b"\x00").decode("utf-8", "surrogatepass")
        # recombine surrogate pairs into astral characters
        return text.encode("utf-16-be", "surrogatepass").decode("utf-16-be")
    except UnicodeError as e:
        raise SnapshotError(f"Invalid string data in snapshot: {e}") from e


def _write_int(stream: BinaryIO, value: int) -> None:
    try:
        stream.write(_INT.pack(value))
    except struct.error as e:
        raise SnapshotError(f"Value {value} does not fit in a 32-bit integer") from e


def _write_utf(stream: BinaryIO, text: str) -> None:
    data = encode_modified_utf8(text)
    if len(data) > _MAX_UTF_BYTES:
        raise SnapshotError(f"String too long for snapshot ({len(data)} encoded bytes)")
    stream.write(_USHORT.pack(len(data)))
    stream.write(data)


def _read_exact(stream: BinaryIO, size: int, what: str) -> bytes:
    data = stream.read(size)
    if len(data) != size:
        raise SnapshotError(f"Snapshot truncated while reading {what}")
    return data


def _read_int(stream: BinaryIO, what: str) -> int:
    return _INT.unpack(_read_exact(stream, _INT.size, what))[0]


def _read_count(stream: BinaryIO, what: str) -> int:
    value = _read_int(stream, what)
    if value < 0:
        raise SnapshotError(f"Negative {what} in snapshot: {value}")
    return value


def _read_utf(stream: BinaryIO, what: str) -> str:
    (length,) = _USHORT.unpack(_read_exact(stream, _USHORT.size, what))
    return decode_modified_utf8(_read_exact(stream, length, what))


def dump_snapshot(snapshot: CounterSnapshot, stream: BinaryIO) -> None:
    """Write a snapshot to an open binary stream."""
    _write_int(stream, snapshot.genome_count)
    _write_int(stream, len(snapshot.roles))
    for entry in snapshot.roles:
        _write_utf(stream, entry.role_id)
        _write_utf(stream, entry.role_name)
        _write_int(stream, entry.good)
        _write_int(stream, entry.bad)


def parse_snapshot(stream: BinaryIO) -> CounterSnapshot:
    """Read a snapshot from an open binary stream."""
    genome_count = _read_count(stream, "genome count")
    role_count = _read_count(stream, "role count")
    roles = []
    for i in range(role_count):
        role_id = _read_utf(stream, f"ID of role {i + 1}")
        role_name = _read_utf(stream, f"name of role {i + 1}")
        good = _read_count(stream, f"good count of role {i + 1}")
        bad = _read_count(stream, f"bad count of role {i + 1}")
        roles.append(RoleCounts(role_id, role_name, good, bad))
    return CounterSnapshot(genome_count, roles)


def write_snapshot(snapshot: CounterSnapshot, path: Union[str, Path]) -> None:
    """
    Save a snapshot to a file.

    Args:
        snapshot: Snapshot to save
        path: Destination file
    """
    path = Path(path)
    # encode fully first so a failed save leaves any existing file untouched
    buffer = io.BytesIO()
    dump_snapshot(snapshot, buffer)
    with open(path, "wb") as f:
        f.write(buffer.getvalue())
    logger.debug(f"Wrote snapshot of {len(snapshot.roles)} roles to {path}")


def read_snapshot(path: Union[str, Path]) -> CounterSnapshot:
    """
    Load a snapshot from a file.

    Args:
        path: Snapshot file

    Returns:
        The complete snapshot record
    """
    path = Path(path)
    with open(path, "rb") as f:
        snapshot = parse_snapshot(f)
        if f.read(1):
            logger.warning(f"Ignoring trailing data in snapshot {path}")
    logger.debug(f"Read snapshot of {len(snapshot.roles)} roles from {path}")
    return snapshot
