"""
Value types describing a decoded GMAD package.

Objects of these types are inert data containers. They do not hold any reference to the stream they were decoded
from, so they can be kept, compared and hashed freely after the stream is closed.
"""

from dataclasses import dataclass
from typing import Tuple, Iterable, Optional


@dataclass(frozen=True)
class GmadAuthor:
    """
    The author of a GMAD package.

    Attributes:
        name: The author name, as stored. May be empty.
        steam_id64: The SteamID64 of the author. Packing tools very often leave this at 0 or fill in garbage, so it
            must never be relied upon for authorization purposes.
    """

    name: str
    steam_id64: int

    def __post_init__(self):
        _check_str(self.name, 'name')


@dataclass(frozen=True)
class GmadFileEntry:
    """
    Location and metadata for one file stored in a GMAD package.

    Attributes:
        path: The relative path of the file, exactly as stored (no normalization is performed).
        crc: The CRC-32 of the file's content. Note that this is merely informative, it is not checked against the
            content.
        offset: The absolute position of the file's content in the package stream.
        size: The size of the file's content, in bytes.
    """

    path: str
    crc: int
    offset: int
    size: int

    def __post_init__(self):
        _check_str(self.path, 'path')

        if self.offset < 0:
            raise ValueError(f"File offset must be non-negative, is {self.offset}")
        if self.size < 0:
            raise ValueError(f"File size must be non-negative, is {self.size}")

    @property
    def end_offset(self) -> int:
        return self.offset + self.size


@dataclass(frozen=True)
class GmadHeader:
    """
    The full metadata of a GMAD package, i.e. everything that precedes the file content.

    Attributes:
        author: A `GmadAuthor` object.
        description: The addon description. This is opaque text, though packing tools usually store a JSON object
            here (see `parse_description`).
        files: A tuple of `GmadFileEntry` objects, in the order they appear in the package file table.
        format_version: The version of the GMAD format (1-3).
        name: The addon title.
        timestamp: The creation timestamp, as stored.
        version: The addon revision number.
        files_offset: The absolute position in the stream at which the content of the files begins.
    """

    author: GmadAuthor
    description: str
    files: Tuple[GmadFileEntry, ...]
    format_version: int
    name: str
    timestamp: int
    version: int
    files_offset: int

    def __init__(
        self, author: GmadAuthor, description: str, files: Iterable[GmadFileEntry], format_version: int, name: str,
        timestamp: int, version: int, files_offset: int
    ):
        if files is None:
            raise TypeError("files must be an iterable of GmadFileEntry, not None")

        _check_str(description, 'description')
        _check_str(name, 'name')

        object.__setattr__(self, 'author', author)
        object.__setattr__(self, 'description', description)
        object.__setattr__(self, 'files', tuple(files))
        object.__setattr__(self, 'format_version', format_version)
        object.__setattr__(self, 'name', name)
        object.__setattr__(self, 'timestamp', timestamp)
        object.__setattr__(self, 'version', version)
        object.__setattr__(self, 'files_offset', files_offset)

    @property
    def total_size(self) -> int:
        """
        The position at which the package is expected to end, i.e. after the content of the last file.
        """
        return self.files_offset + sum(entry.size for entry in self.files)

    def find_file(self, path: str) -> Optional[GmadFileEntry]:
        """
        Returns the first entry whose path is exactly `path`, or None if there is no such entry.
        """
        for entry in self.files:
            if entry.path == path:
                return entry

        return None


def _check_str(value, field_name: str):
    if not isinstance(value, str):
        raise TypeError(f"{field_name} must be a str, got {type(value).__name__}")
