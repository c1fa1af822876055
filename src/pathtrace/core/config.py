"""Integrator configuration.

Two behaviours of the integrator are deliberately left open by the light
transport model and are exposed here as explicit settings:

- ``shadow_epsilon``: the distance a shadow ray's origin is pushed along its
  direction before testing for occluders, so the surface it starts on does
  not shadow itself.
- ``zero_light_policy``: what happens when a scene has no lights and direct
  lighting would otherwise divide by zero.

Example:
    >>> from pathtrace.core.config import IntegratorConfig, ZeroLightPolicy
    >>> config = IntegratorConfig(zero_light_policy=ZeroLightPolicy.REJECT)
"""

from dataclasses import dataclass
from enum import Enum

# Default shadow ray origin offset
DEFAULT_SHADOW_EPSILON = 1e-4


class ZeroLightPolicy(Enum):
    """How a scene without lights is treated.

    BLACK: Direct lighting is defined as black when there are no lights.
    REJECT: ``SceneBuilder.compile()`` raises ``NoLightsError``.
    """

    BLACK = "black"
    REJECT = "reject"


@dataclass(frozen=True)
class IntegratorConfig:
    """Tunable settings for a compiled scene.

    Attributes:
        shadow_epsilon: Offset applied to shadow ray origins (must be > 0).
        zero_light_policy: Behaviour for scenes without lights.
    """

    shadow_epsilon: float = DEFAULT_SHADOW_EPSILON
    zero_light_policy: ZeroLightPolicy = ZeroLightPolicy.BLACK

    def __post_init__(self) -> None:
        if not self.shadow_epsilon > 0.0:
            raise ValueError(f"shadow_epsilon must be positive, got {self.shadow_epsilon}")
        if not isinstance(self.zero_light_policy, ZeroLightPolicy):
            raise ValueError(f"Unknown zero light policy: {self.zero_light_policy!r}")
