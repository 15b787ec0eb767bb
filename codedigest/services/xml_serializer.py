"""
XML artifact assembly.

Layout::

    <?xml version="1.0" encoding="UTF-8"?>
    <codebase>
      <file_summary>...</file_summary>
      <directory_structure>...</directory_structure>
      <files>
        <file path="src/a.ts" language="typescript" lines="3">...</file>
      </files>
    </codebase>

Summary and tree text are indented for reading. File content is written with
no added whitespace so that a parser returns it unchanged.
"""

import re
from typing import List, Sequence

from codedigest.core.models import FileRecord


XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'
TEXT_INDENT = "    "

# Order matters: "&" first so later entities are not escaped twice.
_ESCAPES = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&apos;"),
)

# Parsers fold CR and CRLF into LF unless CR is a character reference.
_CARRIAGE_RETURN = ("\r", "&#13;")

# Code points XML 1.0 does not allow anywhere in a document, plus lone
# surrogates, which cannot be encoded as UTF-8.
_INVALID_XML_CHARS = re.compile("[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")


def escape_xml(text: str) -> str:
    """Escape the five XML special characters and replace characters XML cannot carry."""
    for char, entity in _ESCAPES:
        text = text.replace(char, entity)
    text = text.replace(*_CARRIAGE_RETURN)
    return _INVALID_XML_CHARS.sub("\ufffd", text)


def _indent_block(text: str) -> str:
    lines = escape_xml(text).rstrip("\n").split("\n")
    return "\n".join(f"{TEXT_INDENT}{line}" if line else "" for line in lines)


# ============================================================================
# XML Serializer
# ============================================================================


class XmlSerializer:
    """Serializes summary, tree and file records into one XML document."""

    def _section(self, tag: str, text: str) -> List[str]:
        if not text.strip():
            return [f"  <{tag}>", f"  </{tag}>", ""]
        return [f"  <{tag}>", _indent_block(text), f"  </{tag}>", ""]

    def file_element(self, record: FileRecord) -> str:
        return (
            f'    <file path="{escape_xml(record.path)}" language="{escape_xml(record.language)}"'
            f' lines="{record.line_count}">{escape_xml(record.content)}</file>'
        )

    def serialize(self, summary: str, tree: str, records: Sequence[FileRecord]) -> str:
        """
        Build the XML document.

        Args:
            summary: Rendered summary text
            tree: Rendered directory tree text
            records: Files in output order

        Returns:
            Complete XML text ending with a newline
        """
        parts = [XML_DECLARATION, "<codebase>", ""]
        parts.extend(self._section("file_summary", summary))
        parts.extend(self._section("directory_structure", tree))
        parts.append("  <files>")
        for record in records:
            parts.append(self.file_element(record))
            parts.append("")
        parts.append("  </files>")
        parts.append("</codebase>")
        return "\n".join(parts) + "\n"
