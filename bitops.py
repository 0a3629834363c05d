from typing import Tuple

from errors import IndexOutOfBounds


def frame_span(index: int, width: int) -> Tuple[int, int, int]:
    """Locate the frame holding element ``index`` of a ``width``-bit array.

    The element occupies bits ``[index * width, (index + 1) * width)``; its
    frame is the smallest run of whole bytes covering that range.

    :param index: Element index (>= 0).
    :type index: int
    :param width: Bits per element.
    :type width: int
    :returns: ``(start_byte, end_byte, shift)`` where ``shift`` is the number
        of bits below the element inside the big-endian frame.
    :rtype: Tuple[int, int, int]
    """
    start_bit = index * width
    end_bit = start_bit + width
    start_byte = start_bit // 8
    end_byte = -(-end_bit // 8)
    return start_byte, end_byte, end_byte * 8 - end_bit


def _check_span(data, index: int, end_byte: int) -> None:
    if index < 0 or end_byte > len(data):
        raise IndexOutOfBounds("Offset is outside the bounds of the data region")


def read_frame(data, index: int, width: int) -> int:
    """Read element ``index`` from the packed bytes ``data``.

    :param data: Packed data region.
    :type data: bytes | bytearray | memoryview
    :param index: Element index.
    :type index: int
    :param width: Bits per element.
    :type width: int
    :returns: The element value, ``0 <= value < 2 ** width``.
    :rtype: int
    :raises IndexOutOfBounds: If the element's frame does not lie inside
        ``data``.
    """
    start_byte, end_byte, shift = frame_span(index, width)
    _check_span(data, index, end_byte)
    frame = int.from_bytes(data[start_byte:end_byte], "big")
    return (frame >> shift) & ((1 << width) - 1)


def write_frame(data, index: int, width: int, value: int) -> None:
    """Store ``value`` as element ``index`` of the packed bytes ``data``.

    Bits of neighbouring elements sharing the frame are preserved. The
    caller is responsible for ``value`` fitting into ``width`` bits.

    :param data: Writable packed data region.
    :type data: bytearray | memoryview
    :param index: Element index.
    :type index: int
    :param width: Bits per element.
    :type width: int
    :param value: Value to store.
    :type value: int
    :returns: None
    :rtype: None
    :raises IndexOutOfBounds: If the element's frame does not lie inside
        ``data``.
    """
    start_byte, end_byte, shift = frame_span(index, width)
    _check_span(data, index, end_byte)
    mask = (1 << width) - 1
    frame = int.from_bytes(data[start_byte:end_byte], "big")
    frame = (frame & ~(mask << shift)) | (value << shift)
    data[start_byte:end_byte] = frame.to_bytes(end_byte - start_byte, "big")


def to_binary_string(data, width: int = 8) -> str:
    """Render ``data`` as a string of bits split into ``width``-bit groups.

    Each complete group is followed by a single space. Leftover bits that do
    not fill a group are appended without a trailing space.

    >>> to_binary_string(b"\\x0f\\xf0", 4)
    '0000 1111 1111 0000 '
    >>> to_binary_string(b"\\xff", 3)
    '111 111 11'
    """
    bits = "".join(f"{byte:08b}" for byte in data)
    if width <= 0:
        return bits
    full = len(bits) - len(bits) % width
    groups = "".join(bits[i:i + width] + " " for i in range(0, full, width))
    return groups + bits[full:]
