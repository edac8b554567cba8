from datetime import timedelta

from pondwatch.alerting import AlertIngestionPipeline, AlertRequest, AlertSeverity
from pondwatch.models.data import utcnow


async def make_user(storage, email="pond@example.com"):
    return await storage.create_user(email, "secret123", "Pond Owner")


def ph_alert(user_id, value=5.0):
    return AlertRequest(
        user_id=user_id,
        sensor_type="ph",
        message=f"ph level ({value}) is below minimum threshold (6.5)",
        severity=AlertSeverity.CRITICAL,
        value=value,
        threshold=6.5,
    )


async def test_verify_user(storage):
    user = await make_user(storage)

    assert user.password != "secret123"
    assert (await storage.verify_user("pond@example.com", "secret123")).id == user.id
    assert await storage.verify_user("pond@example.com", "wrong") is None
    assert await storage.verify_user("nobody@example.com", "secret123") is None


async def test_reading_defaults(storage):
    user = await make_user(storage)

    reading = await storage.create_reading(user.id, {"ph": 7.1, "water_level": 80.0})

    assert reading.id is not None
    assert reading.timestamp is not None
    assert reading.temperature is None


async def test_readings_newest_first_and_limited(storage):
    user = await make_user(storage)
    for ph in (7.0, 7.1, 7.2):
        await storage.create_reading(user.id, {"ph": ph})

    readings = await storage.get_readings(user.id, limit=2)

    assert [r.ph for r in readings] == [7.2, 7.1]


async def test_readings_by_range(storage):
    user = await make_user(storage)
    await storage.create_reading(user.id, {"ph": 7.0})
    now = utcnow()

    inside = await storage.get_readings_by_range(user.id, now - timedelta(hours=1), now + timedelta(hours=1))
    outside = await storage.get_readings_by_range(user.id, now + timedelta(hours=1), now + timedelta(hours=2))

    assert len(inside) == 1
    assert outside == []


async def test_thresholds_scoped_to_owner(storage):
    owner = await make_user(storage)
    other = await make_user(storage, "other@example.com")
    threshold = await storage.create_threshold(owner.id, {"sensor_type": "ph", "min_value": 6.5})

    assert await storage.update_threshold(threshold.id, other.id, {"min_value": 1}) is None
    assert await storage.delete_threshold(threshold.id, other.id) is False

    updated = await storage.update_threshold(threshold.id, owner.id, {"max_value": 8.5})
    assert (updated.min_value, updated.max_value) == (6.5, 8.5)
    assert await storage.delete_threshold(threshold.id, owner.id) is True
    assert await storage.get_thresholds(owner.id) == []


async def test_acknowledge_is_idempotent(storage):
    user = await make_user(storage)
    alert = await storage.create_alert(ph_alert(user.id))

    assert alert.acknowledged is False
    assert await storage.acknowledge_alert(alert.id) is True
    assert await storage.acknowledge_alert(alert.id) is True
    assert await storage.get_unacknowledged_alerts(user.id) == []


async def test_acknowledge_unknown_alert(storage):
    assert await storage.acknowledge_alert(4242) is False


async def test_unacknowledged_newest_first(storage):
    user = await make_user(storage)
    first = await storage.create_alert(ph_alert(user.id, 5.0))
    second = await storage.create_alert(ph_alert(user.id, 4.0))
    third = await storage.create_alert(ph_alert(user.id, 3.0))
    await storage.acknowledge_alert(second.id)

    pending = await storage.get_unacknowledged_alerts(user.id)

    assert [a.id for a in pending] == [third.id, first.id]


async def test_pipeline_against_storage(storage):
    user = await make_user(storage)
    await storage.create_threshold(user.id, {"sensor_type": "temperature", "min_value": 20, "max_value": 30})
    await storage.create_threshold(user.id, {"sensor_type": "ph", "min_value": 6.5, "max_value": 8.5})
    reading = await storage.create_reading(user.id, {"temperature": 35.0, "ph": 7.0})

    result = await AlertIngestionPipeline(storage, storage).ingest(reading)

    alerts = await storage.get_alerts(user.id)
    assert len(result.created) == 1
    assert len(alerts) == 1
    assert alerts[0].sensor_type == "temperature"
    assert alerts[0].severity == "critical"
    assert alerts[0].threshold == 30
    assert alerts[0].message == "temperature level (35) is above maximum threshold (30)"
