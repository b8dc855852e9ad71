from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Literal, Protocol, Sequence

import structlog

log = structlog.get_logger()

ElementState = Literal["default", "comparing", "swapping", "sorted", "pivot", "min", "max"]
FrameOp = Literal["initialize", "state", "write", "swap", "reset"]


class RenderSink(Protocol):
    """
    Drawing backend the step primitives report to.

    Implementations live outside the engine (canvas, terminal, websocket).
    """

    def set_element_state(self, index: int, tag: str) -> None:
        ...

    def write_element(self, index: int, value: float) -> None:
        ...

    def swap_elements(self, i: int, j: int) -> None:
        ...

    def initialize(self, values: Sequence[float]) -> None:
        ...

    def reset(self) -> None:
        ...


class NullSink:
    """
    Sink used when no display is attached.
    """

    def set_element_state(self, index: int, tag: str) -> None:
        pass

    def write_element(self, index: int, value: float) -> None:
        pass

    def swap_elements(self, i: int, j: int) -> None:
        pass

    def initialize(self, values: Sequence[float]) -> None:
        pass

    def reset(self) -> None:
        pass


@dataclass(frozen=True, slots=True)
class RenderFrame:
    """
    One recorded sink call. seq is monotonic across the sink's lifetime.
    """

    seq: int
    op: FrameOp
    index: int | None = None
    other: int | None = None
    value: float | None = None
    tag: str | None = None
    values: tuple[float, ...] | None = None


class RecordingSink:
    """
    In-memory sink that keeps the last `max_frames` calls as a diff stream.

    Remote displays poll frames_since(seq) and replay them.
    """

    def __init__(self, *, max_frames: int = 10_000) -> None:
        self._frames: deque[RenderFrame] = deque(maxlen=max_frames)
        self._seq = 0
        self.values: list[float] = []
        self.states: list[str] = []

    def _push(self, op: FrameOp, **fields) -> None:
        self._seq += 1
        self._frames.append(RenderFrame(seq=self._seq, op=op, **fields))

    @property
    def last_seq(self) -> int:
        return self._seq

    def frames_since(self, seq: int = 0) -> list[RenderFrame]:
        return [f for f in self._frames if f.seq > seq]

    def set_element_state(self, index: int, tag: str) -> None:
        self.states[index] = tag
        self._push("state", index=index, tag=tag)

    def write_element(self, index: int, value: float) -> None:
        self.values[index] = value
        self._push("write", index=index, value=value)

    def swap_elements(self, i: int, j: int) -> None:
        self.values[i], self.values[j] = self.values[j], self.values[i]
        self._push("swap", index=i, other=j)

    def initialize(self, values: Sequence[float]) -> None:
        self.values = list(values)
        self.states = ["default"] * len(self.values)
        self._push("initialize", values=tuple(self.values))

    def reset(self) -> None:
        self.values = []
        self.states = []
        self._push("reset")


class GuardedSink:
    """
    Wraps a RenderSink so that display failures never reach the engine.

    A torn-down display must not abort a run: every call is attempted,
    failures are logged at debug level and dropped.
    """

    def __init__(self, sink: RenderSink | None) -> None:
        self._sink: RenderSink = sink if sink is not None else NullSink()
        self.failures = 0

    @property
    def inner(self) -> RenderSink:
        return self._sink

    def _call(self, op: str, *args) -> None:
        try:
            getattr(self._sink, op)(*args)
        except Exception as exc:
            self.failures += 1
            log.debug("render.sink_failed", op=op, error_type=type(exc).__name__, error_message=str(exc))

    def set_element_state(self, index: int, tag: str) -> None:
        self._call("set_element_state", index, tag)

    def set_elements_state(self, indices: Sequence[int], tag: str) -> None:
        for idx in indices:
            self._call("set_element_state", idx, tag)

    def write_element(self, index: int, value: float) -> None:
        self._call("write_element", index, value)

    def swap_elements(self, i: int, j: int) -> None:
        self._call("swap_elements", i, j)

    def initialize(self, values: Sequence[float]) -> None:
        self._call("initialize", list(values))

    def reset(self) -> None:
        self._call("reset")
