"""
ILP v1 payment packet codec.

Binary layout (Octet Encoding Rules), compatible with ilp-packet@2.2.0:

    envelope := type (uint8 = 1) || var-octet-string(contents)
    contents := amount (uint64, big-endian)
             || var-octet-string(account, ASCII)
             || var-octet-string(data)
             || extensibility (uint8 = 0)

A var-octet-string is prefixed by its length: one byte when the length is
at most 127, otherwise ``0x80 | n`` followed by the length in ``n``
big-endian bytes.
"""

import logging
from typing import Protocol

from ilpquote.domain.amounts import MAX_ILP_AMOUNT
from ilpquote.domain.errors import InvalidAmount, InvalidPacket
from ilpquote.domain.models import PacketInput

logger = logging.getLogger(__name__)


TYPE_ILP_PAYMENT = 1


class PacketCodec(Protocol):
    """Anything that turns a PacketInput into ILP packet bytes."""

    def serialize(self, packet: PacketInput) -> bytes:
        ...


def _length_prefix(length: int) -> bytes:
    if length <= 127:
        return bytes([length])
    length_of_length = (length.bit_length() + 7) // 8
    return bytes([0x80 | length_of_length]) + length.to_bytes(length_of_length, "big")


def _var_octet_string(value: bytes) -> bytes:
    return _length_prefix(len(value)) + value


class _Reader:
    """Sequential reader over packet bytes."""

    def __init__(self, buffer: bytes) -> None:
        self.buffer = buffer
        self.cursor = 0

    def read(self, size: int) -> bytes:
        end = self.cursor + size
        if end > len(self.buffer):
            raise InvalidPacket(
                f"Unexpected end of packet: wanted {size} bytes at offset {self.cursor}"
            )
        chunk = self.buffer[self.cursor:end]
        self.cursor = end
        return chunk

    def read_uint8(self) -> int:
        return self.read(1)[0]

    def read_length_prefix(self) -> int:
        first = self.read_uint8()
        if first & 0x80 == 0:
            return first
        length_of_length = first & 0x7F
        if length_of_length == 0:
            raise InvalidPacket("Length prefix of length zero is not allowed")
        return int.from_bytes(self.read(length_of_length), "big")

    def read_var_octet_string(self) -> bytes:
        return self.read(self.read_length_prefix())

    @property
    def exhausted(self) -> bool:
        return self.cursor == len(self.buffer)


class IlpV1PacketCodec:
    """Serializer and parser for ILP v1 payment packets."""

    def serialize(self, packet: PacketInput) -> bytes:
        """
        Serialize a payment packet.

        Raises:
            InvalidAmount: If the amount is not a uint64 decimal string
            InvalidPacket: If the address is not ASCII
        """
        if not isinstance(packet.amount, str) or not (packet.amount.isascii() and packet.amount.isdigit()):
            raise InvalidAmount(f"ILP amount must be an unsigned integer string, got {packet.amount!r}")
        amount = int(packet.amount)
        if amount > MAX_ILP_AMOUNT:
            raise InvalidAmount(f"ILP amount {packet.amount} exceeds 64 bits")

        try:
            account = packet.address.encode("ascii")
        except UnicodeEncodeError as e:
            raise InvalidPacket(f"ILP address must be ASCII: {packet.address!r}") from e

        contents = b"".join((
            amount.to_bytes(8, "big"),
            _var_octet_string(account),
            _var_octet_string(packet.data),
            b"\x00",  # extensibility
        ))
        return bytes([TYPE_ILP_PAYMENT]) + _var_octet_string(contents)

    def deserialize(self, buffer: bytes) -> PacketInput:
        """
        Parse a payment packet.

        Raises:
            InvalidPacket: If the bytes are not an ILP v1 payment packet
        """
        envelope = _Reader(buffer)
        packet_type = envelope.read_uint8()
        if packet_type != TYPE_ILP_PAYMENT:
            raise InvalidPacket(f"Unsupported ILP packet type {packet_type}")
        contents = envelope.read_var_octet_string()
        if not envelope.exhausted:
            logger.warning(f"Ignoring {len(buffer) - envelope.cursor} trailing bytes after ILP packet")

        reader = _Reader(contents)
        amount = int.from_bytes(reader.read(8), "big")
        account = reader.read_var_octet_string()
        data = reader.read_var_octet_string()
        reader.read_uint8()  # extensibility

        try:
            address = account.decode("ascii")
        except UnicodeDecodeError as e:
            raise InvalidPacket("ILP address is not ASCII") from e

        return PacketInput(amount=str(amount), address=address, data=data)
