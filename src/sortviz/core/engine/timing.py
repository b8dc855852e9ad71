from __future__ import annotations

MIN_SPEED = 1
MAX_SPEED = 10

# Speed level -> milliseconds per primitive
SPEED_DELAYS_MS: dict[int, int] = {
    1: 1000,
    2: 800,
    3: 600,
    4: 400,
    5: 250,
    6: 150,
    7: 100,
    8: 50,
    9: 25,
    10: 10,
}


def clamp_speed(speed: int) -> int:
    return max(MIN_SPEED, min(MAX_SPEED, int(speed)))


def delay_for_speed(speed: int) -> float:
    """
    Seconds a compare/swap suspends for at the given speed level.
    """
    return SPEED_DELAYS_MS[clamp_speed(speed)] / 1000.0
