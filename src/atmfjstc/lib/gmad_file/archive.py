from typing import ContextManager, BinaryIO, AnyStr, Union, Optional, Tuple
from os import PathLike
from io import IOBase, BufferedIOBase

from atmfjstc.lib.file_utils.fileobj import FileObjSliceReader, get_fileobj_size

from atmfjstc.lib.gmad_file.header import GmadHeader, GmadFileEntry, GmadAuthor
from atmfjstc.lib.gmad_file.reader import read_header, read_file, DEFAULT_STRING_SAFETY_LIMIT
from atmfjstc.lib.gmad_file.errors import GmadNotSeekableError, GmadShortReadError


class GmadFile(ContextManager['GmadFile']):
    """
    This class provides access to a GMAD package stored in a file or file object.

    The package header is decoded as soon as the object is constructed. Afterwards, the metadata is available through
    the `header` attribute (and the `entries`, `name`, `description` and `author` shortcuts), and the content of the
    entries can be obtained through `read` or `open`.

    A `GmadFile` can be either opened and closed manually::

        gmad = GmadFile("addon.gma")
        print(gmad.entries)
        gmad.close()

    or used as a context manager::

        with GmadFile("addon.gma") as gmad:
            data = gmad.read('lua/autorun/init.lua')

    This class does not offer functionality for writing GMAD packages.
    """

    _fileobj: Optional[BinaryIO] = None
    _fileobj_owned: bool = False

    _header: GmadHeader

    def __init__(
        self, path_or_fileobj: Union[PathLike, AnyStr, BinaryIO],
        string_safety_limit: Optional[int] = DEFAULT_STRING_SAFETY_LIMIT
    ):
        """
        Opens a GMAD package for reading.

        Args:
            path_or_fileobj: Either a filename, or an open file object containing the package.
            string_safety_limit: See `read_header`. By default, packages containing a string longer than 1 MiB are
                rejected even though the format allows them; pass None to lift the limit.

        Raises:
            GmadNotSeekableError: If the file object passed is not seekable. Use the functions in the `reader` module
                to process non-seekable streams.
            BadGmadFileError: If the data is not a valid GMAD package (see `read_header` for specific subclasses).

        If a file object is passed, the package is read starting from its current position (it is not rewound), and
        the file object must be kept open for as long as entry content needs to be read. The `GmadFile` will not close
        such a file object when the context ends.
        """

        if isinstance(path_or_fileobj, IOBase):
            if not path_or_fileobj.seekable():
                raise GmadNotSeekableError("open a GmadFile")

            self._fileobj = path_or_fileobj
        else:
            self._fileobj = open(path_or_fileobj, 'rb')
            self._fileobj_owned = True

        try:
            self._header = read_header(self._fileobj, string_safety_limit=string_safety_limit)
        except BaseException:
            if self._fileobj_owned:
                self._fileobj.close()
            raise

    @property
    def header(self) -> GmadHeader:
        return self._header

    @property
    def entries(self) -> Tuple[GmadFileEntry, ...]:
        """
        The file entries in the package, in table order.
        """
        return self._header.files

    @property
    def name(self) -> str:
        return self._header.name

    @property
    def description(self) -> str:
        return self._header.description

    @property
    def author(self) -> GmadAuthor:
        return self._header.author

    def read(self, entry_or_path: Union[GmadFileEntry, str]) -> bytes:
        """
        Reads the full content of an entry.

        Args:
            entry_or_path: Either an entry from `entries`, or the exact path of a file in the package.

        Returns:
            The content, as a `bytes` object.

        Raises:
            KeyError: If no file with the given path exists in the package.
            ValueError: If the entry does not belong to this package, or the package has been closed.
            GmadShortReadError: If the package data ends before the full content could be read.
        """

        entry = self._resolve_entry(entry_or_path)
        self._require_open()

        return read_file(entry, self._fileobj)

    def open(self, entry_or_path: Union[GmadFileEntry, str]) -> BufferedIOBase:
        """
        Opens the content of an entry for reading.

        Returns:
            A read-only, seekable file object in binary mode, covering exactly the entry's content. If you need text
            access, wrap it in a `TextIOWrapper`.

        The package must be kept open while the returned file object is in use. Do not manipulate entry file objects
        from multiple threads simultaneously, as they all share the package's file object.
        """

        entry = self._resolve_entry(entry_or_path)
        self._require_open()

        total_size = get_fileobj_size(self._fileobj)
        if entry.end_offset > total_size:
            raise GmadShortReadError(entry.path, entry.size, max(0, total_size - entry.offset))

        return FileObjSliceReader(self._fileobj, entry.offset, entry.size)

    def close(self):
        """
        Closes the package stream, including one that was passed in by the caller.

        The header, entry table and author info stay usable afterwards. Only `read` and `open` stop working, since they
        need the stream to reach the content region.
        """

        if self._fileobj is not None:
            self._fileobj.close()

    def __enter__(self) -> 'GmadFile':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        # Streams handed in by the caller stay open; only a file we opened from a path is closed here
        if self._fileobj_owned and not self._fileobj.closed:
            self._fileobj.close()

    def _require_open(self):
        if self._fileobj.closed:
            raise ValueError("Cannot read entries because the underlying file object has been closed")

    def _resolve_entry(self, entry_or_path: Union[GmadFileEntry, str]) -> GmadFileEntry:
        if isinstance(entry_or_path, str):
            entry = self._header.find_file(entry_or_path)
            if entry is None:
                raise KeyError(entry_or_path)

            return entry

        if entry_or_path not in self._header.files:
            raise ValueError("Entry does not belong to this GMAD package!")

        return entry_or_path
