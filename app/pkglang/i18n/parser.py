"""Binary message catalog (.mo) parser.

Decodes a compiled gettext catalog into an immutable Catalog. The hash table
stored in the file is ignored; entries are always indexed into a mapping.

File layout (all fields 32-bit, byte order selected by the magic number)::

    magic, revision, string_count, original_table_offset,
    translation_table_offset, hash_table_size, hash_table_offset

followed by two tables of ``string_count`` (length, offset) descriptors.
"""

import codecs
import re
import struct
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from pkglang.i18n.exceptions import CatalogFormatError, CatalogFormatErrorReason
from pkglang.i18n.models import (
    DEFAULT_CHARSET,
    DEFAULT_PLURAL_FORMS,
    Catalog,
    MessageKey,
)

LE_MAGIC = 0x950412DE
BE_MAGIC = 0xDE120495
SUPPORTED_REVISION = 0

HEADER_SIZE = 28
DESCRIPTOR_SIZE = 8

CONTEXT_SEPARATOR = b"\x04"
PLURAL_SEPARATOR = b"\x00"

_CHARSET_PATTERN = re.compile(r"charset\s*=\s*([^\s;]+)", re.IGNORECASE)
_NPLURALS_PATTERN = re.compile(r"nplurals\s*=\s*(\d+)")


def _parse_metadata(text: str) -> Dict[str, str]:
    """Parse ``Key: Value`` lines; indented or key-less lines continue the previous value."""
    metadata: Dict[str, str] = {}
    last_key = None
    for line in text.split("\n"):
        item = line.strip()
        if not item:
            continue
        if ":" in item:
            key, value = item.split(":", 1)
            last_key = key.strip()
            metadata[last_key] = value.strip()
        elif last_key:
            metadata[last_key] += "\n" + item
    return metadata


def _header_value(metadata: Dict[str, str], name: str) -> Optional[str]:
    name = name.lower()
    for key, value in metadata.items():
        if key.lower() == name:
            return value
    return None


def _resolve_charset(content_type: Optional[str]) -> str:
    if not content_type:
        return DEFAULT_CHARSET
    match = _CHARSET_PATTERN.search(content_type)
    if match is None:
        return DEFAULT_CHARSET
    try:
        return codecs.lookup(match.group(1)).name
    except LookupError:
        # Includes the literal "CHARSET" placeholder left by msginit.
        return DEFAULT_CHARSET


def _resolve_plural_forms(value: Optional[str]) -> Tuple[str, int]:
    if value:
        match = _NPLURALS_PATTERN.search(value)
        if match is not None and int(match.group(1)) >= 1:
            return value, int(match.group(1))
    return DEFAULT_PLURAL_FORMS, 2


class CatalogParser:
    """Decodes binary message catalogs.

    Parsing is a pure function of the input bytes; ``parse_file`` only adds
    reading the file and recording its path as the catalog source.
    """

    def parse(self, data: bytes, source: Optional[str] = None) -> Catalog:
        """Decode catalog bytes.

        Args:
            data: Complete contents of a .mo file.
            source: Optional description of where the bytes came from.

        Returns:
            Catalog with all entries of the file.

        Raises:
            CatalogFormatError: If the data is not a valid revision 0 catalog.
        """
        data = bytes(data)
        if len(data) < HEADER_SIZE:
            raise CatalogFormatError(
                CatalogFormatErrorReason.TRUNCATED_TABLE,
                f"catalog header needs {HEADER_SIZE} bytes, got {len(data)}",
            )

        magic = struct.unpack("<I", data[:4])[0]
        if magic == LE_MAGIC:
            byte_order = "<"
        elif magic == BE_MAGIC:
            byte_order = ">"
        else:
            raise CatalogFormatError(
                CatalogFormatErrorReason.BAD_MAGIC,
                f"bad magic number 0x{magic:08x}",
            )

        revision, count, original_offset, translation_offset = struct.unpack(
            f"{byte_order}4I", data[4:20]
        )
        if revision != SUPPORTED_REVISION:
            raise CatalogFormatError(
                CatalogFormatErrorReason.UNSUPPORTED_REVISION,
                f"unsupported catalog revision {revision}",
            )

        originals = self._read_table(data, byte_order, original_offset, count, "original")
        translations = self._read_table(
            data, byte_order, translation_offset, count, "translation"
        )

        metadata: Dict[str, str] = {}
        first_entry = 0
        if count > 0 and originals[0] == b"":
            first_entry = 1
            # Field names are ASCII; find the charset before decoding for real.
            latin1_metadata = _parse_metadata(translations[0].decode("latin-1"))
            charset = _resolve_charset(_header_value(latin1_metadata, "Content-Type"))
            metadata = _parse_metadata(self._decode(translations[0], charset, 0))
        else:
            charset = DEFAULT_CHARSET

        plural_forms, plural_count = _resolve_plural_forms(
            _header_value(metadata, "Plural-Forms")
        )

        entries: Dict[MessageKey, Tuple[str, ...]] = {}
        for index in range(first_entry, count):
            original = originals[index]
            if CONTEXT_SEPARATOR in original:
                context, message_id = original.split(CONTEXT_SEPARATOR, 1)
            else:
                context, message_id = b"", original
            # Plural-capable entries carry "singular\0plural"; keep the singular.
            message_id = message_id.split(PLURAL_SEPARATOR, 1)[0]

            forms = tuple(
                self._decode(form, charset, index)
                for form in translations[index].split(PLURAL_SEPARATOR)
            )
            if len(forms) != 1 and len(forms) != plural_count:
                forms = forms[:1]

            key = MessageKey(
                self._decode(context, charset, index),
                self._decode(message_id, charset, index),
            )
            entries[key] = forms

        return Catalog(
            plural_forms=plural_forms,
            plural_count=plural_count,
            entries=entries,
            charset=charset,
            metadata=metadata,
            sources=(source,) if source else (),
        )

    def parse_file(self, path: Union[str, Path]) -> Catalog:
        """Read and decode a catalog file.

        Raises:
            OSError: If the file cannot be read.
            CatalogFormatError: If the file is not a valid catalog.
        """
        path = Path(path)
        return self.parse(path.read_bytes(), source=str(path))

    @staticmethod
    def _read_table(
        data: bytes, byte_order: str, offset: int, count: int, name: str
    ) -> List[bytes]:
        end = offset + count * DESCRIPTOR_SIZE
        if end > len(data):
            raise CatalogFormatError(
                CatalogFormatErrorReason.TRUNCATED_TABLE,
                f"{name} table at {offset} with {count} entries exceeds file size {len(data)}",
            )

        strings = []
        for index, (length, string_offset) in enumerate(
            struct.iter_unpack(f"{byte_order}II", data[offset:end])
        ):
            if string_offset + length > len(data):
                raise CatalogFormatError(
                    CatalogFormatErrorReason.TRUNCATED_TABLE,
                    f"{name} string {index} exceeds file size {len(data)}",
                    pair_index=index,
                )
            strings.append(data[string_offset:string_offset + length])
        return strings

    @staticmethod
    def _decode(raw: bytes, charset: str, index: int) -> str:
        try:
            return raw.decode(charset)
        except UnicodeDecodeError as e:
            raise CatalogFormatError(
                CatalogFormatErrorReason.BAD_ENCODING,
                f"string pair {index} is not valid {charset}: {e.reason}",
                pair_index=index,
            ) from e


def parse_catalog(data: bytes) -> Catalog:
    """Decode catalog bytes with a default CatalogParser."""
    return CatalogParser().parse(data)
