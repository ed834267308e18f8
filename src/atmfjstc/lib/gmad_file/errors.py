"""
Exceptions raised while decoding GMAD packages and extracting their content.
"""

from typing import Optional


class GmadError(Exception):
    """
    Base class for all errors raised by this package.
    """


class BadGmadFileError(GmadError):
    """
    The data does not match the structure of a GMAD package, or it is corrupt.
    """


class NotAGmadFileError(BadGmadFileError):
    found_magic: bytes

    def __init__(self, found_magic: bytes):
        self.found_magic = found_magic

        super().__init__(f"Data is not a GMAD package (expected magic 0x474d4144, found 0x{found_magic.hex()})")


class GmadUnsupportedVersionError(BadGmadFileError):
    format_version: int
    max_supported: int

    def __init__(self, format_version: int, max_supported: int):
        self.format_version = format_version
        self.max_supported = max_supported

        super().__init__(
            f"GMAD format version {format_version} is not supported (maximum supported: {max_supported})"
        )


class GmadTruncatedError(BadGmadFileError):
    position: int
    meaning: Optional[str]

    def __init__(self, position: int, meaning: Optional[str]):
        self.position = position
        self.meaning = meaning

        super().__init__(
            f"GMAD package ends prematurely at position {position}"
            f"{f' while reading {meaning}' if meaning is not None else ''}"
        )


class GmadUnterminatedStringError(BadGmadFileError):
    position: int
    meaning: Optional[str]

    def __init__(self, position: int, meaning: Optional[str]):
        self.position = position
        self.meaning = meaning

        super().__init__(
            f"At position {position}, string{f' for {meaning}' if meaning is not None else ''} is not terminated "
            f"before the end of the data"
        )


class GmadStringTooLongError(BadGmadFileError):
    position: int
    max_length: int
    meaning: Optional[str]

    def __init__(self, position: int, max_length: int, meaning: Optional[str]):
        self.position = position
        self.max_length = max_length
        self.meaning = meaning

        super().__init__(
            f"At position {position}, string{f' for {meaning}' if meaning is not None else ''} exceeds the maximum "
            f"length of {max_length}, possibly due to corrupt data"
        )


class GmadBadEntryError(BadGmadFileError):
    position: int
    path: str

    def __init__(self, position: int, path: str, reason: str):
        self.position = position
        self.path = path

        super().__init__(f"File table entry for '{path}' at position {position} is invalid: {reason}")


class GmadShortReadError(BadGmadFileError):
    path: str
    expected_length: int
    actual_length: int

    def __init__(self, path: str, expected_length: int, actual_length: int):
        self.path = path
        self.expected_length = expected_length
        self.actual_length = actual_length

        super().__init__(
            f"Expected {expected_length} bytes for the content of '{path}', but only {actual_length} were available"
        )


class GmadNotSeekableError(GmadError, ValueError):
    def __init__(self, operation: str):
        super().__init__(f"Cannot {operation}: the stream is not seekable")
