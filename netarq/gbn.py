"""Go-Back-N transport protocol: a windowed sender and an in-order receiver."""

from __future__ import annotations

from collections import deque
from typing import Protocol, TextIO

from .emulator import Statistics
from .packets import NOT_IN_USE, PAYLOAD_SIZE, Entity, Message, Packet, is_corrupted

RTT = 16.0
WINDOW_SIZE = 6
SEQ_SPACE = 7


class _Network(Protocol):
    trace: int
    out: TextIO
    stats: Statistics

    def to_layer3(self, entity: Entity, packet: Packet) -> None: ...

    def to_layer5(self, entity: Entity, data: str) -> None: ...

    def start_timer(self, entity: Entity, increment: float) -> None: ...

    def stop_timer(self, entity: Entity) -> None: ...


def _trace(network: _Network, level: int, text: str) -> None:
    if network.trace > level:
        print(text, file=network.out)


def _in_window(ack: int, first: int, last: int) -> bool:
    if first <= last:
        return first <= ack <= last
    return ack >= first or ack <= last


class GoBackNSender:
    """Entity A: keeps up to WINDOW_SIZE unacknowledged packets in flight."""

    def __init__(self, network: _Network) -> None:
        self.network = network
        self.next_seqnum = 0
        self.window: deque[Packet] = deque()

    def output(self, message: Message) -> None:
        """Send a message from the application if the window has room."""
        net = self.network
        if len(self.window) >= WINDOW_SIZE:
            _trace(net, 0, "----A: New message arrives, send window is full")
            net.stats.window_full += 1
            return

        _trace(
            net,
            1,
            "----A: New message arrives, send window is not full, "
            "send new messge to layer3!",
        )
        packet = Packet.build(self.next_seqnum, NOT_IN_USE, message.data)
        self.window.append(packet)

        _trace(net, 0, f"Sending packet {packet.seqnum} to layer 3")
        net.to_layer3(Entity.A, packet)

        if len(self.window) == 1:
            net.start_timer(Entity.A, RTT)

        self.next_seqnum = (self.next_seqnum + 1) % SEQ_SPACE

    def input(self, packet: Packet) -> None:
        """Handle a cumulative acknowledgement from the receiver."""
        net = self.network
        if is_corrupted(packet):
            _trace(net, 0, "----A: corrupted ACK is received, do nothing!")
            return

        _trace(net, 0, f"----A: uncorrupted ACK {packet.acknum} is received")
        net.stats.total_acks_received += 1

        if not self.window:
            _trace(net, 0, "----A: duplicate ACK received, do nothing!")
            return

        ack = packet.acknum
        first = self.window[0].seqnum
        last = self.window[-1].seqnum
        if not _in_window(ack, first, last):
            return

        _trace(net, 0, f"----A: ACK {ack} is not a duplicate")
        net.stats.new_acks += 1

        if ack >= first:
            acked = ack + 1 - first
        else:
            acked = SEQ_SPACE - first + ack
        for _ in range(acked):
            self.window.popleft()

        net.stop_timer(Entity.A)
        if self.window:
            net.start_timer(Entity.A, RTT)

    def timer_interrupt(self) -> None:
        """Resend every packet still awaiting acknowledgement."""
        net = self.network
        _trace(net, 0, "----A: time out,resend packets!")
        for position, packet in enumerate(list(self.window)):
            _trace(net, 0, f"---A: resending packet {packet.seqnum}")
            net.to_layer3(Entity.A, packet)
            net.stats.packets_resent += 1
            if position == 0:
                net.start_timer(Entity.A, RTT)


class GoBackNReceiver:
    """Entity B: accepts packets strictly in order and acknowledges cumulatively."""

    def __init__(self, network: _Network) -> None:
        self.network = network
        self.expected_seqnum = 0
        self.next_seqnum = 1

    def output(self, message: Message) -> None:
        """Transfer is one-way from A to B, so messages offered to B are dropped."""

    def input(self, packet: Packet) -> None:
        """Deliver an in-order packet and acknowledge the last one received in order."""
        net = self.network
        if not is_corrupted(packet) and packet.seqnum == self.expected_seqnum:
            _trace(
                net, 0, f"----B: packet {packet.seqnum} is correctly received, send ACK!"
            )
            net.stats.packets_received += 1
            net.to_layer5(Entity.B, packet.payload)
            acknum = self.expected_seqnum
            self.expected_seqnum = (self.expected_seqnum + 1) % SEQ_SPACE
        else:
            _trace(
                net,
                0,
                "----B: packet corrupted or not expected sequence number, resend ACK!",
            )
            acknum = (self.expected_seqnum - 1) % SEQ_SPACE

        seqnum = self.next_seqnum
        self.next_seqnum = (self.next_seqnum + 1) % 2
        net.to_layer3(Entity.B, Packet.build(seqnum, acknum, "0" * PAYLOAD_SIZE))

    def timer_interrupt(self) -> None:
        """B never starts a timer in one-way transfer, so there is nothing to do."""