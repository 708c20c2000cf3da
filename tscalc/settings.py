"""
Numerical settings for derivatives and integrals.

Constants:
- MACHINE_EPSILON: double precision machine epsilon
- DIFF_STEP: step of the symmetric difference quotient, EPSILON^(1/3)
- MIN_QUADRATURE_STEPS / MAX_QUADRATURE_STEPS: clamp on quadrature sub-steps
- MAX_WALK_STEPS: step budget of the delta integral walk
- MEMBERSHIP_TOL: tolerance on log_q(t) when testing geometric lattice membership
- JUMP_TOL: relative distance within which a forward jump is taken to land on the walk's bound
"""

from dataclasses import dataclass

MACHINE_EPSILON = 2.2e-16

# Optimal step for central differences: total error ~ h^2 f''' / 6 + eps f / h
DIFF_STEP = MACHINE_EPSILON ** (1 / 3.0)

MIN_QUADRATURE_STEPS = 7500
MAX_QUADRATURE_STEPS = 12500

MAX_WALK_STEPS = 1_000_000

MEMBERSHIP_TOL = 1e-9

JUMP_TOL = 1e-9


@dataclass
class CalculusSettings:
    """Tunable parameters of the derived operations.

    Attributes:
        diff_step: Step h of the symmetric difference (f(t+h) - f(t-h)) / 2h
        min_steps: Lower clamp on quadrature sub-steps
        max_steps: Upper clamp on quadrature sub-steps
        max_walk_steps: Maximum number of walk iterations in a delta integral
        jump_tol: Relative tolerance for a jump landing on the upper bound
    """
    diff_step: float = DIFF_STEP
    min_steps: int = MIN_QUADRATURE_STEPS
    max_steps: int = MAX_QUADRATURE_STEPS
    max_walk_steps: int = MAX_WALK_STEPS
    jump_tol: float = JUMP_TOL

    def __post_init__(self) -> None:
        """Validate parameters after initialization."""
        if self.diff_step <= 0:
            raise ValueError(f"diff_step must be > 0, got {self.diff_step}")
        if self.min_steps < 4:
            raise ValueError(f"min_steps must be >= 4, got {self.min_steps}")
        if self.max_steps < self.min_steps:
            raise ValueError(
                f"max_steps ({self.max_steps}) must be >= min_steps ({self.min_steps})"
            )
        if self.max_walk_steps < 1:
            raise ValueError(f"max_walk_steps must be >= 1, got {self.max_walk_steps}")
        if self.jump_tol < 0:
            raise ValueError(f"jump_tol must be >= 0, got {self.jump_tol}")


DEFAULT_SETTINGS = CalculusSettings()
