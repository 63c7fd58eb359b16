"""Configuration dataclasses for composable perturbation models.

Provides :class:`SpacecraftParams` for physical spacecraft properties and
:class:`PerturbationConfig` for selecting which perturbing accelerations
to include.  Configuration is static: Python ``if`` branches on the
toggles are resolved at JAX trace time, producing a single computation
graph with no runtime branching.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from orbitkit.constants import CR_DEFAULT
from orbitkit.orbit_dynamics.gravity import MAX_ZONAL_DEGREE, MIN_ZONAL_DEGREE


@dataclass(frozen=True)
class SpacecraftParams:
    """Physical properties of the spacecraft.

    Defaults represent a generic small satellite.

    Args:
        mass: Spacecraft mass [kg].
        drag_area: Wind-facing cross-sectional area [m^2].
        srp_area: Sun-facing cross-sectional area [m^2].
        cd: Coefficient of drag [dimensionless].
        cr: Radiation pressure coefficient [dimensionless].
    """

    mass: float = 1000.0
    drag_area: float = 10.0
    srp_area: float = 10.0
    cd: float = 2.2
    cr: float = CR_DEFAULT


@dataclass(frozen=True)
class PerturbationConfig:
    """Selection of perturbing accelerations.

    Args:
        drag: Enable atmospheric drag.
        zonal_degree: Highest zonal harmonic degree (2..6), or ``None`` to
            disable the zonal perturbation.
        srp: Enable solar radiation pressure.
        spacecraft: Spacecraft physical properties.

    Examples:
        ```python
        from orbitkit.orbit_dynamics import PerturbationConfig
        config = PerturbationConfig(zonal_degree=4)
        config.drag
        ```
    """

    drag: bool = False
    zonal_degree: int | None = None
    srp: bool = False
    spacecraft: SpacecraftParams = field(default_factory=SpacecraftParams)

    def __post_init__(self) -> None:
        if self.zonal_degree is not None and not (
            MIN_ZONAL_DEGREE <= self.zonal_degree <= MAX_ZONAL_DEGREE
        ):
            raise ValueError(
                f"zonal_degree must be None or between {MIN_ZONAL_DEGREE} and "
                f"{MAX_ZONAL_DEGREE}, got {self.zonal_degree}"
            )
        if self.spacecraft.mass <= 0.0:
            raise ValueError(f"spacecraft mass must be positive, got {self.spacecraft.mass}")

    @staticmethod
    def none() -> PerturbationConfig:
        """Preset: no perturbations (Keplerian motion).

        Returns:
            PerturbationConfig: Configuration with every force disabled.
        """
        return PerturbationConfig()

    @staticmethod
    def leo_default(spacecraft: SpacecraftParams | None = None) -> PerturbationConfig:
        """Preset: typical LEO perturbations.

        Atmospheric drag, J2..J6 zonal harmonics and solar radiation
        pressure.

        Args:
            spacecraft: Optional spacecraft properties.

        Returns:
            PerturbationConfig: LEO-appropriate configuration.
        """
        return PerturbationConfig(
            drag=True,
            zonal_degree=MAX_ZONAL_DEGREE,
            srp=True,
            spacecraft=spacecraft if spacecraft is not None else SpacecraftParams(),
        )
