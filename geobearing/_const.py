"""
Constants declarations for geobearing
"""

# Mean Earth Radius (approximate for Haversine)
EARTH_RADIUS_METERS = 6_371_000.0

# Engine defaults
DEFAULT_SMOOTHING_FACTOR = 0.2
DEFAULT_POSITION_SMOOTHING_FACTOR = 0.3
DEFAULT_MAX_ELEVATION = 0.7853981633974483  # pi / 4
DEFAULT_RENDER_RADIUS = 4.0

# Below this horizontal distance (meters) the bearing to target is undefined
DEFAULT_MIN_BEARING_DISTANCE = 0.01
