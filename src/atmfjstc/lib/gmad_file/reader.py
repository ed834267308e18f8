"""
Functions for decoding the metadata of a GMAD package and extracting the content of the files it contains.

All functions here are stateless and operate on a stream provided by the caller. The stream can be given as a binary
file object, or as a `BinaryReader` wrapping one. `read_header` and `read_file` also accept the package data
as a `bytes` object.

The stream is borrowed only for the duration of a call: no function here retains a reference to it afterwards.
Performing calls on the same stream from multiple threads at once is not supported, as they would all be moving the
same cursor.
"""

import logging

from os import SEEK_SET
from typing import Union, BinaryIO, Optional, Iterator, Tuple, List, NamedTuple

from atmfjstc.lib.binary_utils.BinaryReader import BinaryReader, BinaryReaderFormatError, \
    BinaryReaderMissingDataError, BinaryReaderNullStrReadPastEndError, BinaryReaderNullStrTooLongError

from atmfjstc.lib.gmad_file.header import GmadAuthor, GmadFileEntry, GmadHeader
from atmfjstc.lib.gmad_file.errors import NotAGmadFileError, GmadUnsupportedVersionError, GmadTruncatedError, \
    GmadUnterminatedStringError, GmadStringTooLongError, GmadBadEntryError, GmadShortReadError, GmadNotSeekableError


LOG = logging.getLogger(__name__)


GMAD_MAGIC = b'GMAD'

MAX_SUPPORTED_FORMAT_VERSION = 3

DEFAULT_STRING_SAFETY_LIMIT = 1 << 20
"""Default maximum length for any string in the header. Used to catch corrupt data early."""


StreamOrReader = Union[BinaryIO, BinaryReader]


def has_valid_signature(data_or_stream: Union[bytes, bytearray, memoryview, StreamOrReader]) -> bool:
    """
    Checks whether some data starts a GMAD package.

    Args:
        data_or_stream: Either a bytes-like object, which will be compared in its entirety against the GMAD magic, or
            a stream from which the signature will be read.

    Returns:
        True only if the data is exactly equal to the 4-byte GMAD magic.

    Note that if a stream is passed, up to 4 bytes will be consumed from it regardless of the result. If fewer than 4
    bytes are available, the result is simply False.
    """

    if isinstance(data_or_stream, (bytes, bytearray, memoryview)):
        return bytes(data_or_stream) == GMAD_MAGIC

    return _read_signature(_as_reader(data_or_stream)) == GMAD_MAGIC


def read_header(
    data_or_stream: Union[bytes, StreamOrReader], string_safety_limit: Optional[int] = DEFAULT_STRING_SAFETY_LIMIT
) -> GmadHeader:
    """
    Decodes the metadata of a GMAD package, starting from the current position in the stream.

    On success, the stream is left positioned right at the start of the file content region (i.e. at
    `files_offset`), so one can follow up with `read_file_as_next` or `iter_file_contents` even on a non-seekable
    stream.

    Args:
        data_or_stream: The package data, or a stream containing it.
        string_safety_limit: The maximum length, in bytes, of any string in the header. The format itself sets no
            limit, so by default a package whose name, description, author or a path is longer than 1 MiB is
            deliberately rejected as likely corrupt. Use None to disable the check and accept any length.

    Returns:
        A `GmadHeader` object. The offsets of the file entries are absolute positions in the file object (for a
        non-seekable stream, they are counted from where decoding started).

    Raises:
        NotAGmadFileError: If the data does not start with the GMAD signature.
        GmadUnsupportedVersionError: If the format version is newer than we know how to parse. No data is consumed
            after the version byte in this case.
        GmadTruncatedError: If the data ends in the middle of a fixed-size field.
        GmadUnterminatedStringError: If the data ends in the middle of a string.
        GmadStringTooLongError: If a string exceeds `string_safety_limit`.
        GmadBadEntryError: If a file table entry has a negative size.
    """

    reader = _as_reader(data_or_stream)

    signature = _read_signature(reader)
    if signature != GMAD_MAGIC:
        raise NotAGmadFileError(signature)

    format_version = _read_int(reader, 1, 'format version')
    if format_version > MAX_SUPPORTED_FORMAT_VERSION:
        raise GmadUnsupportedVersionError(format_version, MAX_SUPPORTED_FORMAT_VERSION)

    author_steam_id64 = _read_int(reader, 8, 'author SteamID64')
    timestamp = _read_int(reader, 8, 'timestamp')

    if format_version > 1:
        _skip_required_content(reader, string_safety_limit)

    name = _read_string(reader, 'addon name', string_safety_limit)
    description = _read_string(reader, 'addon description', string_safety_limit)
    author_name = _read_string(reader, 'author name', string_safety_limit)
    addon_version = _read_int(reader, 4, 'addon version', signed=True)

    partial_entries = _read_file_table(reader, string_safety_limit)

    files_offset = reader.tell()

    header = GmadHeader(
        author=GmadAuthor(name=author_name, steam_id64=author_steam_id64),
        description=description,
        files=_resolve_offsets(partial_entries, files_offset),
        format_version=format_version,
        name=name,
        timestamp=timestamp,
        version=addon_version,
        files_offset=files_offset,
    )

    LOG.debug(
        "Decoded GMAD v%d header for %r: %d files, content starts at %d",
        format_version, name, len(header.files), files_offset
    )

    return header


def read_file(entry: GmadFileEntry, stream: Union[bytes, StreamOrReader]) -> bytes:
    """
    Reads the content of a file in a GMAD package, by seeking to its offset.

    Args:
        entry: The file entry, as obtained from `read_header`.
        stream: The package stream. It must be seekable.

    Returns:
        The file content, exactly `entry.size` bytes in length.

    Raises:
        GmadNotSeekableError: If the stream is not seekable. Use `read_file_as_next` for such streams.
        GmadShortReadError: If the data ends before the full content could be read.
    """

    reader = _as_reader(stream)

    if not reader.seekable():
        raise GmadNotSeekableError(f"seek to the content of '{entry.path}'")

    reader.seek(entry.offset, SEEK_SET)

    return read_file_as_next(entry, reader)


def read_file_as_next(entry: GmadFileEntry, stream: StreamOrReader) -> bytes:
    """
    Reads the content of a file in a GMAD package from the current position in the stream, WITHOUT seeking.

    This is the only way to extract content from a non-seekable stream (e.g. a pipe). It is the responsibility of the
    caller to ensure that the stream is actually positioned at the start of the file, i.e. that the content of all
    preceding entries has been consumed in table order and no other reads were interleaved. If this is not the case,
    the data of a different file will be silently returned.

    Returns:
        The file content, exactly `entry.size` bytes in length.

    Raises:
        GmadShortReadError: If the data ends before the full content could be read.
    """

    data = _as_reader(stream).read_at_most(entry.size)

    if len(data) < entry.size:
        raise GmadShortReadError(entry.path, entry.size, len(data))

    return data


def iter_file_contents(header: GmadHeader, stream: StreamOrReader) -> Iterator[Tuple[GmadFileEntry, bytes]]:
    """
    Reads the content of all the files in a package, in table order, without seeking.

    The stream must be positioned at `header.files_offset`, which it will be right after a call to `read_header`.

    Returns:
        An iterator over ``(entry, content)`` pairs.
    """

    reader = _as_reader(stream)

    for entry in header.files:
        LOG.debug("Reading %d bytes for %r at position %d", entry.size, entry.path, reader.tell())

        yield entry, read_file_as_next(entry, reader)


class _PartialEntry(NamedTuple):
    path: str
    size: int
    crc: int

    def with_offset(self, offset: int) -> GmadFileEntry:
        return GmadFileEntry(path=self.path, crc=self.crc, offset=offset, size=self.size)


def _read_file_table(reader: BinaryReader, string_safety_limit: Optional[int]) -> List[_PartialEntry]:
    partial_entries = []

    while True:
        marker_position = reader.tell()

        if _read_int(reader, 4, 'file table entry marker') == 0:
            break

        path = _read_string(reader, 'file path', string_safety_limit)
        size = _read_int(reader, 8, f"size of '{path}'", signed=True)
        crc = _read_int(reader, 4, f"CRC of '{path}'")

        if size < 0:
            raise GmadBadEntryError(marker_position, path, f"size is negative ({size})")

        partial_entries.append(_PartialEntry(path=path, size=size, crc=crc))

    return partial_entries


def _resolve_offsets(partial_entries: List[_PartialEntry], files_offset: int) -> List[GmadFileEntry]:
    # All sizes must be known before offsets can be assigned, as each offset is the sum of all preceding sizes
    entries = []
    running_offset = files_offset

    for partial_entry in partial_entries:
        entries.append(partial_entry.with_offset(running_offset))
        running_offset += partial_entry.size

    return entries


def _skip_required_content(reader: BinaryReader, string_safety_limit: Optional[int]):
    # Format v2+ stores a list of required content names here, terminated by an empty string. We don't use it.
    while _read_string(reader, 'required content', string_safety_limit) != '':
        pass


def _read_signature(reader: BinaryReader) -> bytes:
    return reader.read_at_most(len(GMAD_MAGIC))


def _read_int(reader: BinaryReader, n_bytes: int, meaning: str, signed: bool = False) -> int:
    position = reader.tell()

    try:
        return reader.read_fixed_size_int(n_bytes, meaning, signed=signed)
    except BinaryReaderFormatError as e:
        raise GmadTruncatedError(position, meaning) from e


def _read_string(reader: BinaryReader, meaning: str, safety_limit: Optional[int]) -> str:
    position = reader.tell()

    try:
        raw_str = reader.read_null_terminated_bytes(meaning, safety_limit=safety_limit)
    except (BinaryReaderMissingDataError, BinaryReaderNullStrReadPastEndError) as e:
        raise GmadUnterminatedStringError(position, meaning) from e
    except BinaryReaderNullStrTooLongError as e:
        raise GmadStringTooLongError(position, safety_limit, meaning) from e

    # Buffered reads on seekable streams only enforce the limit for chunks that lack the terminator
    if (safety_limit is not None) and (len(raw_str) > safety_limit):
        raise GmadStringTooLongError(position, safety_limit, meaning)

    return raw_str.decode('utf-8', errors='replace')


def _as_reader(data_or_stream: Union[bytes, StreamOrReader]) -> BinaryReader:
    if isinstance(data_or_stream, BinaryReader):
        return data_or_stream

    return BinaryReader(data_or_stream, big_endian=False)
