"""Adam optimiser with an optional per-element learning-rate scaling."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class MomentumState:
    """First and second moment estimates and the step count."""

    time: int
    moment_1: np.ndarray
    moment_2: np.ndarray


@dataclass(frozen=True)
class AdamState:
    """Optimizer state of a single parameter tensor."""

    momentum: MomentumState | None = None
    scaling: np.ndarray | None = None


@dataclass(frozen=True)
class AdaptiveMomentum:
    """The bias-corrected moment update at the heart of Adam."""

    beta_1: float
    beta_2: float
    epsilon: float

    def transform(
        self, grad: np.ndarray, state: MomentumState | None = None
    ) -> tuple[np.ndarray, MomentumState]:
        """Update the moments with ``grad`` and return the step direction."""
        grad = np.asarray(grad, dtype=float)
        if state is None:
            state = MomentumState(
                time=1,
                moment_1=grad * (1.0 - self.beta_1),
                moment_2=grad**2 * (1.0 - self.beta_2),
            )
        else:
            state = MomentumState(
                time=state.time + 1,
                moment_1=state.moment_1 * self.beta_1 + grad * (1.0 - self.beta_1),
                moment_2=state.moment_2 * self.beta_2 + grad**2 * (1.0 - self.beta_2),
            )
        m1 = state.moment_1 / (1.0 - self.beta_1**state.time)
        m2 = state.moment_2 / (1.0 - self.beta_2**state.time)
        return m1 / (np.sqrt(m2) + self.epsilon), state


@dataclass(frozen=True)
class AdamScaled:
    """Adam whose learning rate may be multiplied by a state-held scaling tensor."""

    momentum: AdaptiveMomentum
    weight_decay: float | None = None
    clip_value: float | None = None
    clip_norm: float | None = None

    def _clip(self, grad: np.ndarray) -> np.ndarray:
        if self.clip_value is not None:
            return np.clip(grad, -self.clip_value, self.clip_value)
        if self.clip_norm is not None:
            norm = float(np.sqrt(np.sum(grad**2)))
            coef = min(self.clip_norm / (norm + 1e-6), 1.0)
            return grad * coef
        return grad

    def step(
        self,
        lr: float,
        tensor: np.ndarray,
        grad: np.ndarray,
        state: AdamState | None = None,
    ) -> tuple[np.ndarray, AdamState]:
        """Apply one update and return the new tensor with the new state."""
        tensor = np.asarray(tensor, dtype=float)
        grad = self._clip(np.asarray(grad, dtype=float))
        momentum = state.momentum if state is not None else None
        scaling = state.scaling if state is not None else None

        if self.weight_decay is not None:
            grad = tensor * self.weight_decay + grad

        direction, momentum = self.momentum.transform(grad, momentum)
        if scaling is not None:
            delta = direction * (np.asarray(scaling, dtype=float) * lr)
        else:
            delta = direction * lr
        return tensor - delta, AdamState(momentum=momentum, scaling=scaling)


@dataclass(frozen=True)
class AdamScaledConfig:
    """Configuration for :class:`AdamScaled`."""

    beta_1: float = 0.9
    beta_2: float = 0.999
    epsilon: float = 1e-5
    weight_decay: float | None = None
    clip_value: float | None = None
    clip_norm: float | None = None

    def __post_init__(self) -> None:
        if self.clip_value is not None and self.clip_norm is not None:
            raise ValueError("choose gradient clipping by value or by norm, not both")

    def init(self) -> AdamScaled:
        """Create the optimizer."""
        return AdamScaled(
            momentum=AdaptiveMomentum(self.beta_1, self.beta_2, self.epsilon),
            weight_decay=self.weight_decay,
            clip_value=self.clip_value,
            clip_norm=self.clip_norm,
        )