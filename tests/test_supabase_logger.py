import pytest

from fatigue_engine.data_structures import AlertLevel, DetectionResult, EyeState
from fatigue_engine.supabase_logger import SupabaseLogger, derive_alert_event


class FakeQuery:
    def __init__(self, table, op, payload):
        self.table = table
        self.op = op
        self.payload = payload
        self.filters = []

    def eq(self, column, value):
        self.filters.append((column, value))
        return self

    def execute(self):
        self.table.client.calls.append((self.table.name, self.op, self.payload, self.filters))
        return self


class FakeTable:
    def __init__(self, client, name):
        self.client = client
        self.name = name

    def insert(self, payload):
        return FakeQuery(self, "insert", payload)

    def update(self, payload):
        return FakeQuery(self, "update", payload)


class FakeClient:
    def __init__(self):
        self.calls = []

    def table(self, name):
        return FakeTable(self, name)

    def rows(self, table, op="insert"):
        return [payload for name, o, payload, _ in self.calls if name == table and o == op]


class BrokenClient:
    def table(self, name):
        raise ConnectionError("offline")


def make_result(score=10.0, alert=AlertLevel.SAFE, ts=0.0):
    return DetectionResult(
        face_detected=True,
        eye_state=EyeState.OPEN,
        blink_rate=12,
        drowsiness_score=score,
        alert_level=alert,
        timestamp=ts,
    )


def test_derive_alert_event_critical():
    event = derive_alert_event(make_result(66.0, AlertLevel.CRITICAL), "drv")
    assert event["alert_type"] == "critical_drowsiness"
    assert event["severity"] == "critical"
    assert event["message"] == "Drowsiness detected: 66.0% drowsiness level"
    assert event["driver_id"] == "drv"


def test_derive_alert_event_high_score():
    # cannot happen from the classifier, but the rule stands alone
    event = derive_alert_event(make_result(70.1, AlertLevel.WARNING))
    assert event["alert_type"] == "drowsiness"
    assert event["severity"] == "high"


@pytest.mark.parametrize("score, alert", [(70.0, AlertLevel.WARNING), (10.0, AlertLevel.SAFE)])
def test_no_alert_event(score, alert):
    assert derive_alert_event(make_result(score, alert)) is None


def test_disabled_logger_is_noop():
    cloud = SupabaseLogger(enabled=False)
    assert not cloud.is_initialized()
    assert cloud.start_session("drv") is None
    assert cloud.log_detection(make_result(90.0, AlertLevel.CRITICAL)) is None
    cloud.end_session()


def test_session_flow():
    client = FakeClient()
    cloud = SupabaseLogger(client=client, snapshot_interval=0)
    session_id = cloud.start_session("drv-1")
    assert session_id

    cloud.log_detection(make_result(10.0))
    event = cloud.log_detection(make_result(80.0, AlertLevel.CRITICAL, ts=0.1))
    assert event["severity"] == "critical"
    cloud.end_session()

    logs = client.rows("detection_logs")
    assert len(logs) == 2
    assert logs[0]["eye_state"] == "open"
    assert logs[0]["driver_id"] == "drv-1"
    assert logs[1]["alert_level"] == "critical"

    alerts = client.rows("alert_events")
    assert len(alerts) == 1
    assert alerts[0]["session_id"] == session_id

    summary = client.rows("driver_sessions", "update")[0]
    assert summary["total_alerts"] == 1
    assert summary["max_drowsiness_score"] == 80.0
    assert cloud.current_session_id is None


def test_snapshots_are_throttled_but_alerts_are_not():
    client = FakeClient()
    cloud = SupabaseLogger(client=client, snapshot_interval=5)
    cloud.start_session("drv")

    cloud.log_detection(make_result(ts=0.0))
    cloud.log_detection(make_result(ts=1.0))
    cloud.log_detection(make_result(90.0, AlertLevel.CRITICAL, ts=2.0))
    cloud.log_detection(make_result(ts=5.0))

    assert len(client.rows("detection_logs")) == 2
    assert len(client.rows("alert_events")) == 1


def test_client_errors_are_logged_not_raised(caplog):
    cloud = SupabaseLogger(client=BrokenClient())
    cloud.start_session("drv")
    cloud.log_detection(make_result(90.0, AlertLevel.CRITICAL))
    cloud.end_session()
    assert "Error logging detection" in caplog.text
