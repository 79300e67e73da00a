"""Discrete-event emulation of an unreliable network beneath a transport protocol."""

from __future__ import annotations

import bisect
import enum
import random as _random
import sys
from dataclasses import dataclass, replace
from typing import Iterator, Optional, Protocol, TextIO

from .packets import PAYLOAD_SIZE, Entity, Message, Packet


class EventType(enum.IntEnum):
    """Kinds of events the emulator schedules."""

    TIMER_INTERRUPT = 0
    FROM_LAYER5 = 1
    FROM_LAYER3 = 2


_EVENT_LABELS = {
    EventType.TIMER_INTERRUPT: ", timerinterrupt  ",
    EventType.FROM_LAYER5: ", fromlayer5 ",
    EventType.FROM_LAYER3: ", fromlayer3 ",
}


@dataclass(eq=False)
class Event:
    """A scheduled event; packet is set only for arrivals from layer 3."""

    time: float
    type: EventType
    entity: Entity
    packet: Optional[Packet] = None


def _event_time(event: Event) -> float:
    return event.time


class EventList:
    """Events ordered by time; a new event goes before existing ones at the same time."""

    def __init__(self) -> None:
        self._events: list[Event] = []

    def insert(self, event: Event) -> None:
        index = bisect.bisect_left(self._events, event.time, key=_event_time)
        self._events.insert(index, event)

    def pop(self) -> Event:
        if not self._events:
            raise IndexError("pop from an empty event list")
        return self._events.pop(0)

    def find_timer(self, entity: Entity) -> Optional[Event]:
        """Return the pending timer event of an entity, if any."""
        return next(
            (
                event
                for event in self._events
                if event.type is EventType.TIMER_INTERRUPT and event.entity == entity
            ),
            None,
        )

    def remove(self, event: Event) -> None:
        self._events.remove(event)

    def last_arrival(self, entity: Entity) -> Optional[float]:
        """Time of the latest packet still in flight towards an entity."""
        return next(
            (
                event.time
                for event in reversed(self._events)
                if event.type is EventType.FROM_LAYER3 and event.entity == entity
            ),
            None,
        )

    def __iter__(self) -> Iterator[Event]:
        return iter(list(self._events))

    def __len__(self) -> int:
        return len(self._events)


class CorruptDirection(enum.IntEnum):
    """Which direction of traffic loss and corruption apply to."""

    A_TO_B = 0
    B_TO_A = 1
    BOTH = 2

    def affects(self, sender: Entity) -> bool:
        """True when packets sent by the given entity may be lost or corrupted."""
        if self is CorruptDirection.A_TO_B:
            return sender == Entity.A
        if self is CorruptDirection.B_TO_A:
            return sender == Entity.B
        return True


@dataclass(frozen=True)
class SimulationConfig:
    """Parameters of one simulation run."""

    messages: int
    mean_interarrival: float
    loss_prob: float = 0.0
    corrupt_prob: float = 0.0
    corrupt_direction: CorruptDirection = CorruptDirection.BOTH
    trace: int = 0
    seed: int = 9999


@dataclass
class Statistics:
    """Counters kept by the emulator and by the protocol entities."""

    window_full: int = 0
    total_acks_received: int = 0
    packets_resent: int = 0
    new_acks: int = 0
    packets_received: int = 0
    messages_delivered: int = 0
    to_layer3: int = 0
    lost: int = 0
    corrupted: int = 0


class Endpoint(Protocol):
    """A transport-layer entity driven by the emulator."""

    def output(self, message: Message) -> None:
        """Accept a message from the application layer."""

    def input(self, packet: Packet) -> None:
        """Accept a packet arriving from the network layer."""

    def timer_interrupt(self) -> None:
        """React to the entity's timer expiring."""


class Emulator:
    """Simulated layers 3 and 5 with timers, loss, corruption and in-order delivery."""

    def __init__(self, config: SimulationConfig, out: Optional[TextIO] = None) -> None:
        self.config = config
        self.out = out if out is not None else sys.stdout
        self.trace = config.trace
        self._rng = _random.Random(config.seed)

        average = sum(self.random() for _ in range(1000)) / 1000.0
        if not 0.25 <= average <= 0.75:
            raise RuntimeError(
                "random number generation is not uniform on [0, 1] as expected"
            )

        self.stats = Statistics()
        self.events = EventList()
        self.time = 0.0
        self.messages_sent = 0
        self._schedule_next_arrival()

    def _say(self, text: str) -> None:
        print(text, file=self.out)

    def random(self) -> float:
        """Draw a uniform number in [0, 1]."""
        value = self._rng.random()
        if self.trace > 3:
            self._say(f"RANDOM NUMBER GENERAION CALLED: {value:.6f}")
        return value

    def _insert(self, event: Event) -> None:
        if self.trace > 2:
            self._say(f"            INSERTEVENT: time is {self.time:.6f}")
            self._say(f"            INSERTEVENT: future time will be {event.time:.6f}")
        self.events.insert(event)

    def _schedule_next_arrival(self) -> None:
        if self.trace > 2:
            self._say("          GENERATE NEXT ARRIVAL: creating new arrival")
        delay = self.config.mean_interarrival * self.random() * 2
        self._insert(Event(self.time + delay, EventType.FROM_LAYER5, Entity.A))

    def start_timer(self, entity: Entity, increment: float) -> None:
        """Schedule a timer interrupt; warns if the entity's timer is running."""
        if self.trace > 1:
            self._say(f"          START TIMER: starting timer at {self.time:.6f}")
        entity = Entity(entity)
        if self.events.find_timer(entity) is not None:
            self._say("Warning: attempt to start a timer that is already started")
            return
        self._insert(Event(self.time + increment, EventType.TIMER_INTERRUPT, entity))

    def stop_timer(self, entity: Entity) -> None:
        """Cancel the entity's running timer; warns if there is none."""
        if self.trace > 1:
            self._say(f"          STOP TIMER: stopping timer at {self.time:.6f}")
        timer = self.events.find_timer(Entity(entity))
        if timer is None:
            self._say("Warning: unable to cancel your timer. It wasn't running.")
            return
        self.events.remove(timer)

    def to_layer3(self, entity: Entity, packet: Packet) -> None:
        """Send a packet into the network towards the other entity."""
        sender = Entity(entity)
        self.stats.to_layer3 += 1
        applies = self.config.corrupt_direction.affects(sender)

        if self.random() < self.config.loss_prob and applies:
            self.stats.lost += 1
            if self.trace > 0:
                self._say("          TOLAYER3: packet being lost")
            return

        if self.trace > 2:
            self._say(
                f"          TOLAYER3: seq: {packet.seqnum}, ack {packet.acknum}, "
                f"check: {packet.checksum} {packet.payload}"
            )

        receiver = sender.peer()
        last = self.events.last_arrival(receiver)
        base = self.time if last is None else last
        arrival = base + 1 + 9 * self.random()

        delivered = packet
        if self.random() < self.config.corrupt_prob and applies:
            self.stats.corrupted += 1
            choice = self.random()
            if choice < 0.75:
                delivered = replace(delivered, payload="Z" + delivered.payload[1:])
            elif choice < 0.875:
                delivered = replace(delivered, seqnum=999999)
            else:
                delivered = replace(delivered, acknum=999999)
            if self.trace > 0:
                self._say("          TOLAYER3: packet being corrupted")

        if self.trace > 2:
            self._say("          TOLAYER3: scheduling arrival on other side")
        self._insert(Event(arrival, EventType.FROM_LAYER3, receiver, delivered))

    def to_layer5(self, entity: Entity, data: str) -> None:
        """Deliver data to the application layer of an entity."""
        if self.trace > 2:
            side = "A" if Entity(entity) == Entity.A else "B"
            self._say(
                f"          TOLAYER5: data received by application at {side}: "
                f"{data[:PAYLOAD_SIZE]}"
            )
        self.stats.messages_delivered += 1

    def run(self, sender: Endpoint, receiver: Endpoint) -> Statistics:
        """Process events until none are left and return the statistics."""
        endpoints = {Entity.A: sender, Entity.B: receiver}
        while self.events:
            event = self.events.pop()
            if self.trace >= 2:
                self._say(
                    f"\nEVENT time: {event.time:.6f},  type: {int(event.type)}"
                    f"{_EVENT_LABELS[event.type]} entity: {int(event.entity)}"
                )
            self.time = event.time
            endpoint = endpoints[event.entity]

            if event.type is EventType.FROM_LAYER5:
                if self.messages_sent < self.config.messages:
                    self._schedule_next_arrival()
                    message = Message.for_index(self.messages_sent)
                    if self.trace > 2:
                        self._say(
                            f"          MAINLOOP: data given to student: {message.data}"
                        )
                    self.messages_sent += 1
                    endpoint.output(message)
                elif self.trace > 2:
                    self._say("          FROM_LAYER5: no more messages to send: ")
            elif event.type is EventType.FROM_LAYER3:
                endpoint.input(event.packet)
            else:
                endpoint.timer_interrupt()
        return self.stats

    def report(self) -> str:
        """Summary printed at the end of a simulation."""
        stats = self.stats
        lines = [
            f" Simulator terminated at time {self.time:.6f}",
            f" after attempting to send {self.messages_sent} msgs from layer5",
            f"number of messages dropped due to full window:  {stats.window_full} ",
            "number of valid (not corrupt or duplicate) acknowledgements received "
            f"at A:  {stats.new_acks} ",
            "(note: a single acknowledgement may have acknowledged more than one "
            "packet - if cumulative acknowledgements are used)",
            f"number of packet resends by A:  {stats.packets_resent} ",
            f"number of correct packets received at B:  {stats.packets_received} ",
            "number of messages delivered to application:  "
            f"{stats.messages_delivered} ",
        ]
        return "\n".join(lines)