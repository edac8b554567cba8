from types import SimpleNamespace

from pondwatch.alerting import AlertIngestionPipeline, ThresholdRule


class FakeStore:
    def __init__(self, thresholds=(), fail_sensors=(), fail_load=False):
        self.thresholds = list(thresholds)
        self.fail_sensors = set(fail_sensors)
        self.fail_load = fail_load
        self.alerts = []
        self.attempts = []

    async def get_thresholds(self, user_id):
        if self.fail_load:
            raise ConnectionError("store unavailable")
        return self.thresholds

    async def create_alert(self, request):
        self.attempts.append(request.sensor_type)
        if request.sensor_type in self.fail_sensors:
            raise RuntimeError("write failed")
        alert = SimpleNamespace(id=len(self.alerts) + 1, **request.to_dict())
        self.alerts.append(alert)
        return alert


def make_reading(**values):
    return SimpleNamespace(id=7, user_id="u1", **values)


THRESHOLDS = [
    ThresholdRule(sensor_type="ph", min_value=6.5, max_value=8.5),
    ThresholdRule(sensor_type="temperature", min_value=20, max_value=30),
    ThresholdRule(sensor_type="turbidity", max_value=25),
]


async def test_persists_every_violation_in_order():
    store = FakeStore(THRESHOLDS)
    pipeline = AlertIngestionPipeline(threshold_store=store, alert_store=store)

    result = await pipeline.ingest(make_reading(ph=5.0, temperature=35, turbidity=40, water_level=70))

    assert [a.sensor_type for a in store.alerts] == ["ph", "temperature", "turbidity"]
    assert len(result.created) == 3
    assert result.failed == []
    assert not result.degraded
    assert result.reading_id == 7


async def test_no_alerts_when_in_range():
    store = FakeStore(THRESHOLDS)
    result = await AlertIngestionPipeline(store, store).ingest(make_reading(ph=7.0, temperature=25))

    assert result.requested == []
    assert store.attempts == []


async def test_failed_write_does_not_block_others():
    store = FakeStore(THRESHOLDS, fail_sensors={"temperature"})

    result = await AlertIngestionPipeline(store, store).ingest(make_reading(ph=5.0, temperature=35, turbidity=40))

    assert store.attempts == ["ph", "temperature", "turbidity"]
    assert [a.sensor_type for a in store.alerts] == ["ph", "turbidity"]
    assert len(result.failed) == 1
    assert result.failed[0][0].sensor_type == "temperature"
    assert result.degraded


async def test_threshold_load_failure_is_degraded_not_raised():
    store = FakeStore(THRESHOLDS, fail_load=True)

    result = await AlertIngestionPipeline(store, store).ingest(make_reading(ph=1.0))

    assert result.thresholds_loaded is False
    assert result.degraded
    assert store.attempts == []


async def test_repeated_ingestion_creates_duplicates():
    store = FakeStore(THRESHOLDS)
    pipeline = AlertIngestionPipeline(store, store)

    await pipeline.ingest(make_reading(ph=5.0))
    await pipeline.ingest(make_reading(ph=5.0))

    assert [a.message for a in store.alerts] == [
        "ph level (5) is below minimum threshold (6.5)",
        "ph level (5) is below minimum threshold (6.5)",
    ]


async def test_separate_stores_are_used():
    thresholds = FakeStore(THRESHOLDS)
    alerts = FakeStore()

    await AlertIngestionPipeline(threshold_store=thresholds, alert_store=alerts).ingest(make_reading(ph=9.0))

    assert thresholds.alerts == []
    assert alerts.alerts[0].message == "ph level (9) is above maximum threshold (8.5)"
