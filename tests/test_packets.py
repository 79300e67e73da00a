from dataclasses import replace

import pytest

from netarq.packets import (
    NOT_IN_USE,
    PAYLOAD_SIZE,
    Entity,
    Message,
    Packet,
    compute_checksum,
    is_corrupted,
)


def test_entity_peer_swaps_sides():
    assert Entity.A.peer() is Entity.B
    assert Entity.B.peer() is Entity.A
    assert Entity.A.peer().peer() is Entity.A


def test_message_for_first_index_is_all_a():
    assert Message.for_index(0).data == "a" * PAYLOAD_SIZE


def test_message_for_last_letter_and_wraparound():
    assert Message.for_index(25).data == "z" * PAYLOAD_SIZE
    assert Message.for_index(26) == Message.for_index(0)
    assert Message.for_index(27) == Message.for_index(1)


def test_message_rejects_wrong_length():
    with pytest.raises(ValueError):
        Message("short")


def test_packet_rejects_wrong_length():
    with pytest.raises(ValueError):
        Packet(0, 0, 0, "x" * (PAYLOAD_SIZE + 1))


def test_built_packet_checksum_matches_contents():
    packet = Packet.build(3, NOT_IN_USE, "c" * PAYLOAD_SIZE)
    assert packet.checksum == compute_checksum(packet)
    assert not is_corrupted(packet)


def test_checksum_for_zero_payload_ack():
    packet = Packet.build(1, 0, "0" * PAYLOAD_SIZE)
    assert compute_checksum(packet) == 1 + 0 + ord("0") * PAYLOAD_SIZE


@pytest.mark.parametrize(
    "changes",
    [
        {"payload": "Z" + "a" * (PAYLOAD_SIZE - 1)},
        {"seqnum": 999999},
        {"acknum": 999999},
    ],
)
def test_corruptions_are_detected(changes):
    packet = Packet.build(0, NOT_IN_USE, "a" * PAYLOAD_SIZE)
    assert is_corrupted(replace(packet, **changes))


def test_checksum_changes_with_sequence_number():
    first = Packet.build(0, NOT_IN_USE, "a" * PAYLOAD_SIZE)
    second = Packet.build(1, NOT_IN_USE, "a" * PAYLOAD_SIZE)
    assert second.checksum - first.checksum == 1