from errors import ArgumentError


def _truncate(value: int, nbits: int) -> int:
    """Keep only the lowest ``nbits`` of ``value``."""
    return value & ((1 << nbits) - 1)


def encode_header(version: int, header_byte_size: int, data_bit_width: int) -> bytes:
    """Encode the store header for the given configuration.

    The layout depends only on ``header_byte_size``:

    - 1 byte: ``version`` (3 bits) over ``data_bit_width`` (5 bits). Fields
      that do not fit overlap each other, this is kept as-is.
    - 2 bytes: ``version`` byte, then ``data_bit_width`` byte.
    - 3 bytes: ``version`` as uint16 big-endian, then ``data_bit_width`` byte.
    - 4 bytes: one uint32 big-endian, ``version`` (24 bits) over
      ``data_bit_width`` (8 bits).
    - 5 bytes: ``version`` as uint32 big-endian, then ``data_bit_width`` byte.
    - 6+ bytes: ``version`` big-endian over ``header_byte_size - 1`` bytes,
      then ``data_bit_width`` byte.

    Every field is truncated to its bit budget.

    :param version: Format version, arbitrary precision.
    :type version: int
    :param header_byte_size: Header length in bytes (>= 1).
    :type header_byte_size: int
    :param data_bit_width: Bits per packed element.
    :type data_bit_width: int
    :returns: Exactly ``header_byte_size`` bytes.
    :rtype: bytes
    :raises ArgumentError: If ``header_byte_size`` is less than 1.
    """
    if header_byte_size < 1:
        raise ArgumentError(
            f"Header size must be at least 1 byte, got {header_byte_size}"
        )
    width = _truncate(data_bit_width, 8)

    if header_byte_size == 1:
        return bytes([_truncate(version << 5 | data_bit_width, 8)])
    if header_byte_size == 2:
        return bytes([_truncate(version, 8), width])
    if header_byte_size == 3:
        return _truncate(version, 16).to_bytes(2, "big") + bytes([width])
    if header_byte_size == 4:
        word = _truncate(version, 24) << 8 | width
        return word.to_bytes(4, "big")

    nbytes = 4 if header_byte_size == 5 else header_byte_size - 1
    return _truncate(version, nbytes * 8).to_bytes(nbytes, "big") + bytes([width])
