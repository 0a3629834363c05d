import logging
from typing import Iterable

from bitops import frame_span, read_frame, to_binary_string, write_frame
from errors import ArgumentError, IndexOutOfBounds, ValueOutOfRange
from header import encode_header

DEFAULT_VERSION = 1  #: Format version used when none is given
DEFAULT_HEADER_BYTE_SIZE = 1  #: One-byte "poor man" header
DEFAULT_DATA_BIT_WIDTH = 8  #: Bits per element
MIN_CAPACITY = 2  #: Elements always preallocated

logger = logging.getLogger(__name__)


class PackedArrayStore:
    """Array of fixed-width unsigned integers packed into one byte buffer.

    The buffer is laid out as ``[header][data]``. The header is written once
    at construction (see :func:`header.encode_header`); element ``i`` lives
    at bits ``[i * width, (i + 1) * width)`` of the data region regardless of
    byte alignment. Writes past the end double the data region.

    Instances are not thread-safe. Views returned by :attr:`header` and
    :attr:`data` go stale once a write grows the buffer.

    :ivar _buffer: Backing allocation, header followed by packed data.
    :type _buffer: bytearray
    :ivar _header: Window over the header region of ``_buffer``.
    :type _header: memoryview
    :ivar _data: Window over the data region of ``_buffer``.
    :type _data: memoryview
    """

    def __init__(
        self,
        version: int = DEFAULT_VERSION,
        header_byte_size: int = DEFAULT_HEADER_BYTE_SIZE,
        data_bit_width: int = DEFAULT_DATA_BIT_WIDTH,
        values: Iterable[int] = (),
    ):
        """Create a store and fill it with ``values`` from index 0.

        :param version: Format version recorded in the header.
        :type version: int
        :param header_byte_size: Header length in bytes.
        :type header_byte_size: int
        :param data_bit_width: Bits per element.
        :type data_bit_width: int
        :param values: Initial elements.
        :type values: Iterable[int]
        :raises ArgumentError: If a numeric parameter is negative or the
            header size is zero.
        :raises ValueOutOfRange: If an initial value does not fit.
        """
        if version < 0 or header_byte_size < 0 or data_bit_width < 0:
            raise ArgumentError("PackedArrayStore: arguments cannot be negative")

        self._version = version
        self._header_byte_size = header_byte_size
        self._data_bit_width = data_bit_width
        self._max_value = (1 << data_bit_width) - 1

        values = list(values)
        capacity = max(MIN_CAPACITY, len(values))
        data_size = -(-capacity * data_bit_width // 8)
        self._set_buffer(bytearray(header_byte_size + data_size))
        self._header[:] = encode_header(
            version, header_byte_size, data_bit_width
        )

        for index, value in enumerate(values):
            self.write(index, value)
        logger.debug(
            "Created store v%d: %d header bytes, %d-bit elements, %d data bytes",
            version, header_byte_size, data_bit_width, len(self._data),
        )

    def _set_buffer(self, buffer: bytearray) -> None:
        """Adopt ``buffer`` and re-derive both region views over it."""
        self._buffer = buffer
        view = memoryview(buffer)
        self._header = view[:self._header_byte_size]
        self._data = view[self._header_byte_size:]

    def _grow(self, end_byte: int) -> None:
        """Double the data region until it holds ``end_byte`` bytes.

        The header and existing data are copied verbatim; the new tail is
        zero-filled.

        :param end_byte: Data region length that must become addressable.
        :type end_byte: int
        :returns: None
        :rtype: None
        """
        old_size = len(self._data)
        new_size = max(old_size, 1)
        while new_size < end_byte:
            new_size *= 2
        buffer = bytearray(self._header_byte_size + new_size)
        buffer[:len(self._buffer)] = self._buffer
        self._set_buffer(buffer)
        logger.debug("Grew data region from %d to %d bytes", old_size, new_size)

    @property
    def version(self) -> int:
        return self._version

    @property
    def header_byte_size(self) -> int:
        return self._header_byte_size

    @property
    def data_bit_width(self) -> int:
        return self._data_bit_width

    @property
    def max_value(self) -> int:
        return self._max_value

    @property
    def header(self) -> memoryview:
        """Read-only view of the header bytes."""
        return self._header.toreadonly()

    @property
    def data(self) -> memoryview:
        """Read-only view of the packed data bytes, padding included."""
        return self._data.toreadonly()

    def read(self, index: int) -> int:
        """Return element ``index``.

        :param index: Element index.
        :type index: int
        :returns: Stored value, ``0`` for never written slots.
        :rtype: int
        :raises IndexOutOfBounds: If the element lies beyond the allocated
            data region.
        """
        return read_frame(self._data, index, self._data_bit_width)

    def write(self, index: int, value: int) -> None:
        """Store ``value`` as element ``index``, growing the buffer if needed.

        :param index: Element index.
        :type index: int
        :param value: Value in ``[0, max_value]``.
        :type value: int
        :returns: None
        :rtype: None
        :raises ValueOutOfRange: If ``value`` does not fit; nothing is
            modified.
        :raises IndexOutOfBounds: If ``index`` is negative.
        """
        if value > self._max_value:
            raise ValueOutOfRange(f"value is bigger than {self._max_value}")
        if value < 0:
            raise ValueOutOfRange("value cannot be negative")
        if index < 0:
            raise IndexOutOfBounds(
                "Offset is outside the bounds of the data region"
            )

        _, end_byte, _ = frame_span(index, self._data_bit_width)
        if end_byte > len(self._data):
            self._grow(end_byte)
        write_frame(self._data, index, self._data_bit_width, value)

    def render(self) -> str:
        """Render the buffer as binary text, e.g. ``"00101000 : 00000000 00000000 "``.

        Header bytes are shown in 8-bit groups, data bytes in groups of
        :attr:`data_bit_width` bits; trailing padding bits that do not fill a
        group are shown without a trailing space.
        """
        head = to_binary_string(self._header)
        tail = to_binary_string(self._data, self._data_bit_width)
        return head + ": " + tail

    def __str__(self) -> str:
        return self.render()

    def __bytes__(self) -> bytes:
        return bytes(self._buffer)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(version={self._version}, "
            f"header_byte_size={self._header_byte_size}, "
            f"data_bit_width={self._data_bit_width})"
        )
