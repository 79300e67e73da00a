"""Data units exchanged between the application, transport and network layers."""

from __future__ import annotations

import enum
from dataclasses import dataclass

PAYLOAD_SIZE = 20
NOT_IN_USE = -1


class Entity(enum.IntEnum):
    """The two protocol entities: A is the sender, B the receiver."""

    A = 0
    B = 1

    def peer(self) -> Entity:
        """Return the entity at the other end of the link."""
        return Entity((self + 1) % 2)


def _check_payload(text: str) -> None:
    if len(text) != PAYLOAD_SIZE:
        raise ValueError(
            f"payload must be exactly {PAYLOAD_SIZE} characters, got {len(text)}"
        )


@dataclass(frozen=True)
class Message:
    """Data handed from the application layer to the transport layer."""

    data: str

    def __post_init__(self) -> None:
        _check_payload(self.data)

    @classmethod
    def for_index(cls, index: int) -> Message:
        """Build the message the simulator generates as its index-th message."""
        letter = chr(ord("a") + index % 26)
        return cls(letter * PAYLOAD_SIZE)


def _checksum(seqnum: int, acknum: int, payload: str) -> int:
    return seqnum + acknum + sum(ord(char) for char in payload)


@dataclass(frozen=True)
class Packet:
    """Data unit handed from the transport layer to the network layer."""

    seqnum: int
    acknum: int
    checksum: int
    payload: str

    def __post_init__(self) -> None:
        _check_payload(self.payload)

    @classmethod
    def build(cls, seqnum: int, acknum: int, payload: str) -> Packet:
        """Create a packet with its checksum filled in."""
        return cls(seqnum, acknum, _checksum(seqnum, acknum, payload), payload)


def compute_checksum(packet: Packet) -> int:
    """Sum of the sequence number, acknowledgement number and payload bytes."""
    return _checksum(packet.seqnum, packet.acknum, packet.payload)


def is_corrupted(packet: Packet) -> bool:
    """True when the stored checksum does not match the packet's contents."""
    return packet.checksum != compute_checksum(packet)