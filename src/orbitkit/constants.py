"""
The `constants` module defines the physical constants used as defaults by the orbitkit models.

Unlike SI-based libraries, orbitkit works in kilometres and kilometres per
second for positions and velocities, which is reflected in the units below.
"""

from jax.numpy import pi as PI

# Mathematical Constants
"""
Constant to convert degrees to radians. Equal to 2pi/360. Units: *rad/deg*
"""
DEG2RAD = 2.0 * PI / 360.0

"""
Constant to convert radians to degrees. Equal to 360/2pi. Units: *deg/rad*
"""
RAD2DEG = 360.0 / (PI * 2.0)

# Earth Constants
"""
Earth's gravitational parameter. Units: *km^3/s^2*

References:

1. EGM96 gravity model
"""
MU_EARTH = 398600.436

"""
Earth's equatorial radius. Units: *km*

References:

1. IERS Conventions 2003
"""
REQ_EARTH = 6378.1366

"""
Zonal harmonic coefficients of the Earth's gravity field. Dimensionless.
"""
J2_EARTH = 1082.616e-6
J3_EARTH = -2.53881e-6
J4_EARTH = -1.65597e-6
J5_EARTH = -0.15e-6
J6_EARTH = 0.57e-6

"""
Earth zonal coefficients ``(J2, J3, J4, J5, J6)`` in degree order.
"""
J_EARTH = (J2_EARTH, J3_EARTH, J4_EARTH, J5_EARTH, J6_EARTH)

# Solar Radiation Constants
"""
Solar radiation flux at 1 AU. Units: *W/m^2*

References:

1. Earth Planets Space, Vol. 51, 1999, pp. 979-986
"""
SOLAR_FLUX = 1372.5398

"""
Speed of light as used by the solar radiation pressure model. Units: *m/s*
"""
C_LIGHT = 2.997e8

"""
Default radiation pressure coefficient. Dimensionless.
"""
CR_DEFAULT = 1.3
