import math

def calculate_wind_impact(route_bearing: float, wind_direction: float, wind_speed: float) -> float:
    """Project the wind vector onto the direction of travel.

    Args:
        route_bearing: Travel bearing in degrees clockwise from true N
        wind_direction: Direction the wind blows from, degrees clockwise from true N
        wind_speed: Wind speed as reported by the forecast provider

    Returns:
        float: Signed impact in [-wind_speed, wind_speed]. The sign follows the
        angular difference between travel bearing and wind direction: a
        difference of 0 gives +wind_speed, 180 gives -wind_speed, 90 gives 0.
    """
    angle_diff = abs(route_bearing % 360 - wind_direction % 360)
    relative = min(angle_diff, 360 - angle_diff)
    return wind_speed * math.cos(math.radians(relative))
