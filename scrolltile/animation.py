"""
Animation Helpers

Easer wraps the host Animator so that replacing a running transition never
lets the old transition's callbacks fire against state that has since moved
on. Every ease gets a token; a completion whose token is no longer registered
is dropped.

Transitions are per property: easing "x" on an actor supersedes only the part
of a running ease that also touched "x". An ease left with no properties is
dropped without running its callbacks.
"""

from __future__ import annotations
import itertools
import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, TYPE_CHECKING

from .host import Animator

if TYPE_CHECKING:
    from .host import Actor

logger = logging.getLogger(__name__)


@dataclass
class _Ease:
    token: int
    props: Dict[str, float]
    duration_ms: int
    on_complete: Optional[Callable[[], None]] = None
    on_stopped: Optional[Callable[[], None]] = None


class Easer:
    """Token-guarded eased transitions."""

    def __init__(self, animator: Animator, duration_ms: int = 250):
        self.animator = animator
        self.duration_ms = duration_ms
        self._running: Dict[int, List[_Ease]] = {}
        self._tokens = itertools.count(1)

    def add_ease(
        self,
        actor: "Actor",
        props: Dict[str, float],
        duration_ms: Optional[int] = None,
        on_complete: Optional[Callable[[], None]] = None,
        on_stopped: Optional[Callable[[], None]] = None,
    ):
        """Ease actor properties to their targets.

        on_complete runs only when the transition finishes; on_stopped runs when
        it finishes or is interrupted by anything other than a newer ease of the
        same properties.
        """
        eases = self._running.setdefault(id(actor), [])
        for older in list(eases):
            for name in props:
                older.props.pop(name, None)
            if not older.props:
                eases.remove(older)

        ease = _Ease(
            token=next(self._tokens),
            props=dict(props),
            duration_ms=self.duration_ms if duration_ms is None else duration_ms,
            on_complete=on_complete,
            on_stopped=on_stopped,
        )
        eases.append(ease)
        self.animator.animate(
            actor,
            dict(ease.props),
            ease.duration_ms,
            lambda finished, token=ease.token: self._done(actor, token, finished),
        )

    def _done(self, actor: "Actor", token: int, finished: bool):
        eases = self._running.get(id(actor), [])
        ease = next((e for e in eases if e.token == token), None)
        if ease is None:
            logger.debug("Dropping stale completion for actor %x", id(actor))
            return
        eases.remove(ease)
        if not eases:
            self._running.pop(id(actor), None)
        if finished and ease.on_complete:
            ease.on_complete()
        if ease.on_stopped:
            ease.on_stopped()

    def remove_ease(self, actor: "Actor"):
        """Stop every ease on actor; none of their callbacks will run."""
        self._running.pop(id(actor), None)
        self.animator.cancel(actor)

    def is_easing(self, actor: "Actor", prop: Optional[str] = None) -> bool:
        for ease in self._running.get(id(actor), []):
            if prop is None or prop in ease.props:
                return True
        return False

    def retarget(self, actor: "Actor", **props) -> bool:
        """Point the running ease of these properties at new values.

        The ease keeps its callbacks. Returns False (and changes nothing) when
        none of the properties is easing.
        """
        for ease in self._running.get(id(actor), []):
            if any(name in ease.props for name in props):
                merged = dict(ease.props)
                merged.update(props)
                self.add_ease(
                    actor,
                    merged,
                    ease.duration_ms,
                    on_complete=ease.on_complete,
                    on_stopped=ease.on_stopped,
                )
                return True
        return False


class InstantAnimator(Animator):
    """Animator that applies targets immediately.

    Useful for hosts running with animations disabled and for headless use.
    """

    def animate(self, target, props, duration_ms, on_complete=None):
        for name, value in props.items():
            setattr(target, name, value)
        if on_complete:
            on_complete(True)

    def cancel(self, target):
        pass
