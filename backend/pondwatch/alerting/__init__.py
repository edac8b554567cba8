"""
Threshold alerting for pond readings.

Structure:
    alerting/
    ├── models.py     → SensorType, AlertSeverity, ThresholdRule, AlertRequest
    ├── evaluator.py  → evaluate_reading (pure)
    └── ingestion.py  → AlertIngestionPipeline (evaluate + persist)

ThresholdRule is a plain stand-in for the ORM Threshold row, for evaluating
without a database (scripts, tests). AlertRequest.to_dict() gives the column
values PondStorage.create_alert persists.

Usage:
    from pondwatch.alerting import AlertIngestionPipeline

    pipeline = AlertIngestionPipeline(threshold_store=storage, alert_store=storage)
    result = await pipeline.ingest(reading)
"""

from .models import (
    SensorType,
    AlertSeverity,
    ThresholdRule,
    AlertRequest,
    SENSOR_FIELDS,
    reading_values,
)

from .evaluator import (
    evaluate_reading,
    format_value,
)

from .ingestion import (
    AlertIngestionPipeline,
    IngestionResult,
)

__all__ = [
    # Models
    "SensorType",
    "AlertSeverity",
    "ThresholdRule",
    "AlertRequest",
    "SENSOR_FIELDS",
    "reading_values",
    # Evaluation
    "evaluate_reading",
    "format_value",
    # Ingestion
    "AlertIngestionPipeline",
    "IngestionResult",
]
