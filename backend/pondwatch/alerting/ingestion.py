"""
Alert ingestion: new reading -> evaluate -> persist alerts.

Runs inline in the create-reading request. Alerting is best effort: the
reading is already committed and is never rolled back from here.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, List, Tuple

from .evaluator import evaluate_reading
from .models import AlertRequest, reading_values

logger = logging.getLogger(__name__)


@dataclass
class IngestionResult:
    reading_id: Any
    requested: List[AlertRequest] = field(default_factory=list)
    created: List[Any] = field(default_factory=list)
    failed: List[Tuple[AlertRequest, Exception]] = field(default_factory=list)
    thresholds_loaded: bool = True

    @property
    def degraded(self) -> bool:
        return bool(self.failed) or not self.thresholds_loaded


class AlertIngestionPipeline:
    """
    threshold_store must provide `async get_thresholds(user_id)`,
    alert_store must provide `async create_alert(request)`.
    Both are usually the same PondStorage instance.
    """

    def __init__(self, threshold_store, alert_store):
        self.threshold_store = threshold_store
        self.alert_store = alert_store

    async def ingest(self, reading) -> IngestionResult:
        result = IngestionResult(reading_id=getattr(reading, "id", None))

        try:
            thresholds = await self.threshold_store.get_thresholds(reading.user_id)
        except Exception as e:
            logger.error(f"Could not load thresholds for user {reading.user_id}: {e}", exc_info=True)
            result.thresholds_loaded = False
            return result

        result.requested = evaluate_reading(reading.user_id, reading_values(reading), thresholds)

        # One write per alert, in order; a failure does not stop the rest
        for request in result.requested:
            try:
                alert = await self.alert_store.create_alert(request)
            except Exception as e:
                logger.error(
                    f"Failed to persist {request.sensor_type} alert for reading {result.reading_id}: {e}",
                    exc_info=True,
                )
                result.failed.append((request, e))
                continue

            result.created.append(alert)
            logger.warning(f"🚨 [{request.severity.value.upper()}] user={request.user_id} {request.message}")

        if result.failed:
            logger.warning(
                f"Alerting degraded for reading {result.reading_id}: "
                f"{len(result.created)}/{len(result.requested)} alerts persisted"
            )
        return result
