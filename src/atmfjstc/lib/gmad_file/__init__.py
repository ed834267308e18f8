"""
This package provides an interface for reading GMAD packages (the ``.gma`` addon format used by Garry's Mod).

A GMAD package consists of a metadata header (addon name, description, author, and a table of files) followed by the
raw, uncompressed content of each file, in table order.

The simplest way to access a package is through the `GmadFile` class::

    with GmadFile('path/to/addon.gma') as gmad:
        for entry in gmad.entries:
            print(entry.path, entry.size)

        data = gmad.read('lua/autorun/init.lua')

For more control, or for non-seekable streams (e.g. data piped through stdin), use the lower-level functions directly::

    header = read_header(sys.stdin.buffer)

    for entry, content in iter_file_contents(header, sys.stdin.buffer):
        ...

More details are available in the `GmadFile`, `GmadHeader` and `read_header` docs.
"""

from atmfjstc.lib.gmad_file.header import GmadAuthor, GmadFileEntry, GmadHeader
from atmfjstc.lib.gmad_file.reader import GMAD_MAGIC, MAX_SUPPORTED_FORMAT_VERSION, DEFAULT_STRING_SAFETY_LIMIT, \
    has_valid_signature, read_header, read_file, read_file_as_next, iter_file_contents
from atmfjstc.lib.gmad_file.description import GmadDescriptionInfo, parse_description
from atmfjstc.lib.gmad_file.archive import GmadFile
from atmfjstc.lib.gmad_file.errors import GmadError, BadGmadFileError, NotAGmadFileError, \
    GmadUnsupportedVersionError, GmadTruncatedError, GmadUnterminatedStringError, GmadStringTooLongError, \
    GmadBadEntryError, GmadShortReadError, GmadNotSeekableError


__version__ = '1.0.0'
