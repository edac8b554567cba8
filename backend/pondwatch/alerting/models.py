"""
Alert Models
Sensor types, severities and the alert-creation request emitted by the evaluator.
"""

from dataclasses import dataclass, asdict
from enum import Enum
from typing import Any, Dict, Optional


class SensorType(str, Enum):
    """Monitored pond sensors, in evaluation order"""
    PH = "ph"
    WATER_LEVEL = "waterLevel"
    TEMPERATURE = "temperature"
    NH3 = "nh3"
    TURBIDITY = "turbidity"


class AlertSeverity(str, Enum):
    """Alert severity levels. Threshold evaluation only produces CRITICAL."""
    INFO = "info"
    WARNING = "warning"
    CRITICAL = "critical"


# Sensor type -> column name on SensorReading
SENSOR_FIELDS: Dict[SensorType, str] = {
    SensorType.PH: "ph",
    SensorType.WATER_LEVEL: "water_level",
    SensorType.TEMPERATURE: "temperature",
    SensorType.NH3: "nh3",
    SensorType.TURBIDITY: "turbidity",
}


@dataclass
class ThresholdRule:
    """
    Plain threshold record. Anything exposing the same attributes
    (e.g. the ORM Threshold row) can be evaluated.
    """
    sensor_type: str
    min_value: Optional[float] = None
    max_value: Optional[float] = None
    alert_enabled: bool = True


@dataclass
class AlertRequest:
    """
    A violation found during evaluation, ready to be persisted.
    """
    user_id: str
    sensor_type: str
    message: str
    severity: AlertSeverity
    value: float
    threshold: float
    acknowledged: bool = False

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["severity"] = self.severity.value
        return data


def reading_values(reading: Any) -> Dict[str, Optional[float]]:
    """Map a SensorReading row to {sensor type: value}."""
    return {
        sensor_type.value: getattr(reading, field, None)
        for sensor_type, field in SENSOR_FIELDS.items()
    }
