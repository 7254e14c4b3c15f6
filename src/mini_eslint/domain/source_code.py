"""Read-only access to the raw text of an analyzed unit."""

_ENCODING = "utf-8"


class SourceCode:
    """Source text of one unit, addressable by the byte offsets stored on nodes."""

    def __init__(self, text: str) -> None:
        self._text = text
        self._data = text.encode(_ENCODING)

    @property
    def text(self) -> str:
        return self._text

    def __len__(self) -> int:
        return len(self._data)

    def slice(self, start: int, end: int) -> str:
        """Decode the text between two byte offsets."""
        return self._data[start:end].decode(_ENCODING, errors="replace")

    def char_before(self, offset: int) -> str:
        """
        Return the character that ends immediately before `offset`.

        Returns an empty string at the start of the source or when the
        offset lies outside it.
        """
        if offset <= 0 or offset > len(self._data):
            return ""
        start = offset - 1
        # Step back over UTF-8 continuation bytes.
        while start > 0 and (self._data[start] & 0xC0) == 0x80:
            start -= 1
        return self._data[start:offset].decode(_ENCODING, errors="replace")
