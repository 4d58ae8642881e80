"""Fixed constants: epochs, angle units, light-time and aberration constants.

Values follow Meeus, Astronomical Algorithms (2nd ed.), cited as AA below.
"""

# Epochs (Julian Day)
J2000 = 2451545.0
DAYS_PER_JULIAN_CENTURY = 36525.0
DAYS_PER_JULIAN_MILLENNIUM = 365250.0

# Time: seconds per unit
SECONDS_PER_MINUTE = 60.0
SECONDS_PER_HOUR = 3600.0
SECONDS_PER_DAY = 86400.0

# Angle: degrees per circle and sexagesimal
DEGREES_PER_CIRCLE = 360.0
HALF_CIRCLE_DEGREES = 180.0
QUARTER_CIRCLE_DEGREES = 90.0
HOURS_PER_CIRCLE = 24.0
ARCSEC_PER_DEGREE = 3600.0
DEGREES_PER_HOUR_RA = 15.0  # right ascension: 360° / 24 h

# Light-time for one astronomical unit, in days (AA eq. 33.3)
LIGHT_TIME_DAYS_PER_AU = 0.0057755183

# Constant of aberration, arcseconds (AA p. 151)
CONSTANT_OF_ABERRATION = 20.49552

# FK5 frame correction terms, arcseconds (AA eq. 32.3)
FK5_LONGITUDE_OFFSET = -0.09033
FK5_COUPLING = 0.03916

# Light-time iteration: convergence thresholds against the previous round
LONGITUDE_TOLERANCE_DEGREES = 1e-5
LATITUDE_TOLERANCE_DEGREES = 1e-5
RADIUS_TOLERANCE_AU = 1e-6

# Defaults (configuration)
DEFAULT_MAX_ITERATIONS = 20
MIN_ITERATIONS = 2  # the first round never has a predecessor to compare against
DEFAULT_POLE_TOLERANCE = 1e-9  # |cos(latitude)| below this is a pole
DEFAULT_INTERVAL = 1.0
DEFAULT_MIN_INTERVAL_SECONDS = 1.0
MAX_TABLE_STEPS = 100000

# VSOP87 series are scaled by 1e8 (AA Appendix III)
VSOP87_SCALE = 1e8
