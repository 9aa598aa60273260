"""
Swipe gesture recognizer for a book card.

Explicit state machine:

    IDLE --pointer_down--> DRAGGING --pointer_up--> SNAPPING_BACK --timer--> IDLE
                                    +-pointer_up--> FLYING_AWAY --timer--> (callback) --timer--> IDLE

A release becomes a swipe when the horizontal displacement exceeds the
distance threshold or the average horizontal velocity exceeds the velocity
threshold. The like/dislike callback runs once per swipe, after the fly-away
animation has finished. Input that does not match a transition is ignored.

Timers go through a scheduler with the asyncio loop API
(call_later(delay_seconds, callback) -> handle.cancel()). ManualScheduler
provides virtual time for headless front ends and tests.
"""

import heapq
import itertools
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, List, Optional, Protocol

logger = logging.getLogger(__name__)


class GestureState(str, Enum):
    IDLE = "idle"
    DRAGGING = "dragging"
    SNAPPING_BACK = "snapping_back"
    FLYING_AWAY = "flying_away"


class SwipeDirection(str, Enum):
    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True)
class GestureSettings:
    """Thresholds and animation constants. Distances in px, times in ms."""

    distance_threshold: float = 140.0
    velocity_threshold: float = 0.6  # px/ms
    flyaway_distance: float = 900.0
    animation_ms: float = 340.0
    reset_delay_ms: float = 60.0
    rotation_per_px: float = 0.08  # deg/px while dragging
    flyaway_rotation: float = 30.0  # deg
    # extra fly-away distance = min(flyaway_extra_cap, |velocity| * flyaway_velocity_scale)
    flyaway_velocity_scale: float = 600.0
    flyaway_extra_cap: float = 1.6
    # Horizontal offset at which a like/dislike overlay is fully opaque
    overlay_full_at: float = 200.0


DEFAULT_SETTINGS = GestureSettings()


@dataclass(frozen=True)
class PointerEvent:
    pointer_id: int
    x: float
    y: float
    time_ms: float


@dataclass(frozen=True)
class CardOffset:
    """Visual transform of the card: translation in px, rotation in degrees."""

    x: float = 0.0
    y: float = 0.0
    rotation: float = 0.0

    def like_opacity(self, full_at: float = DEFAULT_SETTINGS.overlay_full_at) -> float:
        return max(0.0, min(1.0, self.x / full_at))

    def dislike_opacity(self, full_at: float = DEFAULT_SETTINGS.overlay_full_at) -> float:
        return max(0.0, min(1.0, -self.x / full_at))


REST = CardOffset()


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Subset of asyncio.AbstractEventLoop used for animation timers."""

    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> TimerHandle: ...


class CardSurface(Protocol):
    """The on-screen element receiving pointer input."""

    def set_pointer_capture(self, pointer_id: int) -> None: ...

    def release_pointer_capture(self, pointer_id: int) -> None: ...


@dataclass(order=True)
class ManualTimer:
    when: float
    seq: int
    callback: Callable[..., Any] = field(compare=False)
    args: tuple = field(compare=False, default=())
    cancelled: bool = field(compare=False, default=False)

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Virtual-time scheduler: timers run only when advance()/run_all() is called."""

    def __init__(self):
        self._now = 0.0
        self._timers: List[ManualTimer] = []
        self._seq = itertools.count()

    def time(self) -> float:
        return self._now

    @property
    def pending(self) -> int:
        return sum(1 for t in self._timers if not t.cancelled)

    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> ManualTimer:
        timer = ManualTimer(self._now + max(0.0, delay), next(self._seq), callback, args)
        heapq.heappush(self._timers, timer)
        return timer

    def advance(self, seconds: float) -> None:
        """Move virtual time forward, running every timer that falls due."""
        target = self._now + seconds
        while self._timers and self._timers[0].when <= target:
            timer = heapq.heappop(self._timers)
            self._now = timer.when
            if not timer.cancelled:
                timer.callback(*timer.args)
        self._now = target

    def run_all(self) -> None:
        """Run timers until none are left, including ones scheduled along the way."""
        while self._timers:
            timer = heapq.heappop(self._timers)
            self._now = max(self._now, timer.when)
            if not timer.cancelled:
                timer.callback(*timer.args)


RenderCallback = Callable[[CardOffset, bool], None]


class GestureRecognizer:
    """
    Turns pointer drags on a card into left/right swipe decisions.

    on_swipe_right / on_swipe_left fire exactly once per completed swipe,
    after the fly-away animation. on_render(offset, animated) receives every
    visual update; animated=True means the front end should tween to the
    offset over settings.animation_ms.
    """

    def __init__(
        self,
        on_swipe_right: Callable[[], Any],
        on_swipe_left: Callable[[], Any],
        scheduler: Scheduler,
        surface: Optional[CardSurface] = None,
        on_render: Optional[RenderCallback] = None,
        settings: GestureSettings = DEFAULT_SETTINGS,
    ):
        self._on_swipe_right = on_swipe_right
        self._on_swipe_left = on_swipe_left
        self._scheduler = scheduler
        self._surface = surface
        self._on_render = on_render
        self.settings = settings

        self._state = GestureState.IDLE
        self._offset = REST
        self._pointer_id: Optional[int] = None
        self._start: Optional[PointerEvent] = None
        self._pending_swipe: Optional[SwipeDirection] = None
        self._timers: List[TimerHandle] = []
        self._disposed = False

    @property
    def state(self) -> GestureState:
        return self._state

    @property
    def offset(self) -> CardOffset:
        return self._offset

    @property
    def is_animating(self) -> bool:
        return self._state in (GestureState.SNAPPING_BACK, GestureState.FLYING_AWAY)

    # ------------------------------------------------------------------
    # Pointer input
    # ------------------------------------------------------------------

    def pointer_down(self, event: PointerEvent) -> bool:
        """Start a drag. Ignored unless idle."""
        if self._disposed or self._state != GestureState.IDLE:
            return False
        if self._surface is not None:
            self._surface.set_pointer_capture(event.pointer_id)
        self._pointer_id = event.pointer_id
        self._start = event
        self._state = GestureState.DRAGGING
        return True

    def pointer_move(self, event: PointerEvent) -> bool:
        """Follow the pointer. Ignored unless dragging with the captured pointer."""
        if not self._is_captured(event):
            return False
        dx = event.x - self._start.x
        dy = event.y - self._start.y
        self._set_offset(CardOffset(dx, dy, dx * self.settings.rotation_per_px), animated=False)
        return True

    def pointer_up(self, event: PointerEvent) -> Optional[SwipeDirection]:
        """
        End the drag and resolve it.

        Returns the swipe direction when the card flies away, None when it
        snaps back or the event was ignored.
        """
        if not self._is_captured(event):
            return None
        start = self._start
        self._release_capture()

        dx = event.x - start.x
        dt = max(1.0, event.time_ms - start.time_ms)
        velocity = dx / dt

        is_distance_swipe = abs(dx) > self.settings.distance_threshold
        is_flick = abs(velocity) > self.settings.velocity_threshold
        if not (is_distance_swipe or is_flick):
            self._snap_back()
            return None

        if dx != 0:
            direction = SwipeDirection.RIGHT if dx > 0 else SwipeDirection.LEFT
        else:
            direction = SwipeDirection.RIGHT if velocity > 0 else SwipeDirection.LEFT
        logger.debug("[gesture] swipe %s dx=%.1f v=%.3f", direction.value, dx, velocity)
        self._fly_away(direction, velocity)
        return direction

    def dispose(self) -> None:
        """Tear down: release a held pointer and drop pending timers."""
        self._release_capture()
        for handle in self._timers:
            handle.cancel()
        self._timers.clear()
        self._pending_swipe = None
        self._disposed = True

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def _is_captured(self, event: PointerEvent) -> bool:
        return (
            self._state == GestureState.DRAGGING
            and self._pointer_id is not None
            and event.pointer_id == self._pointer_id
        )

    def _release_capture(self) -> None:
        pointer_id, self._pointer_id = self._pointer_id, None
        if pointer_id is not None and self._surface is not None:
            try:
                self._surface.release_pointer_capture(pointer_id)
            except Exception as e:
                logger.debug("[gesture] release_pointer_capture(%s) failed: %s", pointer_id, e)

    def _set_offset(self, offset: CardOffset, animated: bool) -> None:
        self._offset = offset
        if self._on_render is not None:
            self._on_render(offset, animated)

    def _later(self, delay_ms: float, callback: Callable[[], Any]) -> None:
        self._timers.append(self._scheduler.call_later(delay_ms / 1000.0, callback))

    def _snap_back(self) -> None:
        self._state = GestureState.SNAPPING_BACK
        self._set_offset(REST, animated=True)
        self._later(self.settings.animation_ms, self._finish_snap_back)

    def _finish_snap_back(self) -> None:
        if self._state == GestureState.SNAPPING_BACK:
            self._state = GestureState.IDLE
            self._timers.clear()

    def _fly_away(self, direction: SwipeDirection, velocity: float) -> None:
        s = self.settings
        sign = 1 if direction == SwipeDirection.RIGHT else -1
        extra = min(s.flyaway_extra_cap, abs(velocity) * s.flyaway_velocity_scale)
        self._state = GestureState.FLYING_AWAY
        self._pending_swipe = direction
        self._set_offset(
            CardOffset(sign * (s.flyaway_distance + extra), self._offset.y, sign * s.flyaway_rotation),
            animated=True,
        )
        self._later(s.animation_ms, self._finish_fly_away)

    def _finish_fly_away(self) -> None:
        direction, self._pending_swipe = self._pending_swipe, None
        if direction is None or self._state != GestureState.FLYING_AWAY:
            return
        # Reset is queued before the callback runs
        self._later(self.settings.reset_delay_ms, self._reset)
        if direction == SwipeDirection.RIGHT:
            self._on_swipe_right()
        else:
            self._on_swipe_left()

    def _reset(self) -> None:
        self._set_offset(REST, animated=False)
        self._state = GestureState.IDLE
        self._timers.clear()
