# netarq

netarq is a discrete-event emulator of an unreliable network channel. It comes
with a Go-Back-N reliable transport protocol that runs over the channel.

- `netarq.packets` holds the data units. `Message` is 20 characters of
  application data. `Packet` carries a sequence number, an acknowledgement
  number, a checksum and a 20-character payload. `Entity` names the two ends,
  `A` (the sender) and `B` (the receiver). `compute_checksum` and
  `is_corrupted` implement the additive checksum.
- `netarq.emulator` holds the `Emulator`. It schedules events, runs the
  timers and moves packets between the two ends.
- `netarq.gbn` holds `GoBackNSender` and `GoBackNReceiver`. The sender uses a
  send window of 6, a sequence space of 7 and a retransmission timeout of 16
  time units. The receiver sends cumulative acknowledgements.

## The channel

- Each packet arrives 1 to 10 time units after the latest packet already in
  flight towards the same end, so packets are never reordered.
- A packet can be lost or corrupted, each with its own configurable
  probability.
- `CorruptDirection` limits loss and corruption to `A_TO_B` traffic, to
  `B_TO_A` traffic, or applies them to `BOTH` directions.
- A corrupted packet has one of these changes:
  - its first payload character is replaced by `Z`,
  - its sequence number is set to `999999`,
  - its acknowledgement number is set to `999999`.
- The application at A produces a new message at random intervals, with the
  mean interval you configure. Message *n* is 20 copies of the letter
  `a` + *n* mod 26.
- Random numbers come from a generator seeded with `SimulationConfig.seed`
  (default `9999`). A given configuration therefore always produces the same
  run.

## Installation

```
pip install .
```

## Running a simulation

```python
import sys

from netarq.emulator import CorruptDirection, Emulator, SimulationConfig
from netarq.gbn import GoBackNReceiver, GoBackNSender

config = SimulationConfig(
    messages=100,
    mean_interarrival=20.0,
    loss_prob=0.1,
    corrupt_prob=0.1,
    corrupt_direction=CorruptDirection.BOTH,
    trace=0,
)
emulator = Emulator(config, sys.stdout)
stats = emulator.run(GoBackNSender(emulator), GoBackNReceiver(emulator))
print(emulator.report())
```

### Trace output

`trace` sets how much the emulator writes to `out`. The default for `out` is
standard output.

| `trace` | What is written |
|---|---|
| `0` | Only warnings about timers. |
| `1` | Protocol events and lost or corrupted packets as well. |
| `2` | Every event and every timer start and stop as well. |
| `3` | Event-list insertions and packet contents as well. |
| above `3` | Every random number drawn as well. |

### Results

`run` processes events until none are left. It returns a `Statistics` object
with these counters:

- `window_full`
- `total_acks_received`
- `new_acks`
- `packets_resent`
- `packets_received`
- `messages_delivered`
- `to_layer3`
- `lost`
- `corrupted`

`report()` returns the end-of-run summary as text.

### Errors

`Emulator` raises `RuntimeError` if the first 1000 numbers from its random
generator do not average between 0.25 and 0.75.

## Writing another protocol

The emulator drives any pair of objects that follow the `Endpoint` protocol.
Each object needs three methods:

- `output(message)`
- `input(packet)`
- `timer_interrupt()`

The objects can call these emulator methods:

- `to_layer3(entity, packet)`
- `to_layer5(entity, data)`
- `start_timer(entity, increment)`
- `stop_timer(entity)`

## What this package does not do

- There is no command-line program. Simulations are set up in Python through
  `SimulationConfig` and run with `Emulator.run`.
- Go-Back-N is the only transport protocol included.