import math

def calculate_bearing(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Initial great-circle bearing from point 1 to point 2.

    Args:
        lat1, lon1: Start point in degrees
        lat2, lon2: End point in degrees

    Returns:
        float: Compass bearing in degrees, clockwise from true N, in [0, 360).
        Identical points give 0.0.
    """
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    delta_lon = math.radians(lon2 - lon1)

    y = math.sin(delta_lon) * math.cos(phi2)
    x = math.cos(phi1) * math.sin(phi2) - math.sin(phi1) * math.cos(phi2) * math.cos(delta_lon)

    # atan2(0, 0) is 0, so identical points fall back to due north
    return (math.degrees(math.atan2(y, x)) + 360) % 360
