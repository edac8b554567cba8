"""
Threshold evaluation.

Compares one reading against a user's thresholds and returns the alerts that
should be created. Pure: no I/O, no state, same input gives the same output.
"""

import math
from decimal import Decimal
from typing import Any, Iterable, List, Mapping, Optional

from .models import AlertRequest, AlertSeverity, SensorType


def format_value(value: float) -> str:
    """
    Render numbers the way the dashboard (JavaScript) shows them:
    5.0 -> '5', 6.5 -> '6.5', 1e21 -> '1e+21', 1e-7 -> '1e-7'.

    Shortest round-trip digits, plain notation for 1e-6 <= |x| < 1e21,
    exponent notation outside that range.
    """
    value = float(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"

    sign = "-" if value < 0 else ""
    _, digit_tuple, exponent = Decimal(repr(abs(value))).normalize().as_tuple()
    digits = "".join(str(d) for d in digit_tuple)
    k = len(digits)
    n = exponent + k  # position of the decimal point

    if k <= n <= 21:
        text = digits + "0" * (n - k)
    elif 0 < n <= 21:
        text = digits[:n] + "." + digits[n:]
    elif -6 < n <= 0:
        text = "0." + "0" * (-n) + digits
    else:
        e = n - 1
        mantissa = digits if k == 1 else digits[0] + "." + digits[1:]
        text = f"{mantissa}e{'+' if e >= 0 else '-'}{abs(e)}"
    return sign + text


def find_threshold(thresholds: Iterable[Any], sensor_type: str) -> Optional[Any]:
    # First enabled match wins; duplicates after it are ignored
    for threshold in thresholds:
        if threshold.sensor_type == sensor_type and threshold.alert_enabled:
            return threshold
    return None


def check_value(user_id: str, sensor_type: str, value: float, threshold: Any) -> Optional[AlertRequest]:
    """Min bound first, max bound only if min did not fire. Bounds are exclusive."""
    if threshold.min_value is not None and value < threshold.min_value:
        return AlertRequest(
            user_id=user_id,
            sensor_type=sensor_type,
            message=(
                f"{sensor_type} level ({format_value(value)}) is below minimum "
                f"threshold ({format_value(threshold.min_value)})"
            ),
            severity=AlertSeverity.CRITICAL,
            value=value,
            threshold=threshold.min_value,
        )
    if threshold.max_value is not None and value > threshold.max_value:
        return AlertRequest(
            user_id=user_id,
            sensor_type=sensor_type,
            message=(
                f"{sensor_type} level ({format_value(value)}) is above maximum "
                f"threshold ({format_value(threshold.max_value)})"
            ),
            severity=AlertSeverity.CRITICAL,
            value=value,
            threshold=threshold.max_value,
        )
    return None


def evaluate_reading(
    user_id: str,
    values: Mapping[str, Optional[float]],
    thresholds: Iterable[Any],
) -> List[AlertRequest]:
    """
    Evaluate one reading.

    Args:
        user_id: owner of the reading, copied onto every alert
        values: sensor type (e.g. "waterLevel") -> value, None when not sampled
        thresholds: the owner's thresholds in store order

    Returns:
        Alert requests in sensor order: ph, waterLevel, temperature, nh3, turbidity
    """
    thresholds = list(thresholds)
    requests: List[AlertRequest] = []

    for sensor_type in SensorType:
        value = values.get(sensor_type.value)
        if value is None:
            continue

        threshold = find_threshold(thresholds, sensor_type.value)
        if threshold is None:
            continue

        request = check_value(user_id, sensor_type.value, value, threshold)
        if request is not None:
            requests.append(request)

    return requests
