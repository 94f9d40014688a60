"""Tests for domain value objects."""

import pytest

from hearth.domain.value_objects.deadline import Deadline
from hearth.domain.value_objects.readiness import ReadinessOutcome, ReadinessState
from hearth.domain.value_objects.server_status import (
    MetricsSnapshot,
    PlayerList,
    ServerStatus,
)
from hearth.domain.value_objects.server_target import ServerTarget
from hearth.domain.value_objects.session_id import SessionId
from hearth.domain.value_objects.timings import LifecycleTimings


class TestSessionId:
    def test_str(self):
        assert str(SessionId("mons")) == "mons"

    def test_empty_rejected(self):
        with pytest.raises(ValueError, match="cannot be empty"):
            SessionId("")

    @pytest.mark.parametrize("name", ["mc.1", "mc:1"])
    def test_tmux_separators_rejected(self, name):
        with pytest.raises(ValueError, match="cannot contain"):
            SessionId(name)


class TestDeadline:
    def test_elapsed(self):
        d = Deadline(started_at=100.0, timeout=90.0, interval=3.0)
        assert d.elapsed(130.0) == 30.0

    def test_expired_at_exact_timeout(self):
        d = Deadline(started_at=0.0, timeout=10.0, interval=1.0)
        assert not d.expired(9.99)
        assert d.expired(10.0)

    def test_interval_must_not_exceed_timeout(self):
        with pytest.raises(ValueError, match="must not exceed"):
            Deadline(started_at=0.0, timeout=1.0, interval=5.0)

    def test_non_positive_values_rejected(self):
        with pytest.raises(ValueError, match="timeout must be positive"):
            Deadline(started_at=0.0, timeout=0.0, interval=1.0)
        with pytest.raises(ValueError, match="interval must be positive"):
            Deadline(started_at=0.0, timeout=1.0, interval=0.0)


class TestServerTarget:
    def test_defaults(self):
        t = ServerTarget()
        assert t.tmux_session == "mons"
        assert t.ssh_user == "root"
        assert t.log_path == "~/mons/logs/latest.log"
        assert t.ready_marker == "]: Done ("

    def test_node_unset_host(self):
        assert ServerTarget().node() is None

    def test_node(self):
        node = ServerTarget(ssh_host="10.0.0.5", ssh_user="mc", ssh_port=2222).node()
        assert str(node) == "mc@10.0.0.5:2222"

    def test_start_log_and_command(self):
        t = ServerTarget(tmux_session="pack", start_script="./run.sh")
        assert t.start_log_path == "/tmp/mc-start-pack.log"
        assert t.start_command == "bash ./run.sh 2>&1 | tee /tmp/mc-start-pack.log"

    def test_lock_key_distinguishes_hosts(self):
        a = ServerTarget(ssh_host="10.0.0.5")
        b = ServerTarget(ssh_host="10.0.0.6")
        assert a.lock_key != b.lock_key


class TestServerStatus:
    def test_not_running(self):
        s = ServerStatus.not_running()
        assert s.running is False
        assert s.online is None

    def test_undetermined_is_distinct_from_zero(self):
        unknown = ServerStatus.undetermined()
        empty = ServerStatus.from_player_list(PlayerList(0, 20, ()))
        assert unknown.online is None and not unknown.determined
        assert empty.online == 0 and empty.determined
        assert unknown != empty

    def test_to_dict(self):
        s = ServerStatus.from_player_list(PlayerList(1, 10, ("Steve",)))
        assert s.to_dict() == {
            "server_running": True, "online": 1, "max": 10, "players": ["Steve"],
        }


class TestMetricsSnapshot:
    def test_unknown_collapses_to_zero(self):
        snap = MetricsSnapshot.from_status(ServerStatus.undetermined())
        assert snap.online == 0
        assert snap.max_players is None
        assert snap.running is True


class TestReadinessOutcome:
    def test_waiting_is_not_terminal(self):
        with pytest.raises(ValueError, match="terminal"):
            ReadinessOutcome(ReadinessState.WAITING, 0.0)

    def test_ready(self):
        assert ReadinessOutcome(ReadinessState.READY, 12.0).ready
        assert not ReadinessOutcome(ReadinessState.DEAD, 3.0, "boom").ready


class TestLifecycleTimings:
    def test_defaults(self):
        t = LifecycleTimings()
        assert t.ready_timeout == 900.0
        assert t.stop_timeout == 90.0
        assert t.stop_interval == 3.0
        assert t.warn_count == 3

    def test_interval_bounds(self):
        with pytest.raises(ValueError, match="stop_interval"):
            LifecycleTimings(stop_timeout=2.0, stop_interval=3.0)
        with pytest.raises(ValueError, match="ready_interval must be positive"):
            LifecycleTimings(ready_interval=0)

    def test_status_retry_interval_required_with_window(self):
        with pytest.raises(ValueError, match="status_retry_interval must be positive"):
            LifecycleTimings(status_retry_window=5.0, status_retry_interval=0)
        # interval is unused while the retry window is off
        assert LifecycleTimings(status_retry_interval=0).status_retry_window == 0.0

    @pytest.mark.parametrize("name", ["settle", "status_retry_window"])
    def test_negative_waits_rejected(self, name):
        with pytest.raises(ValueError, match=f"{name} cannot be negative"):
            LifecycleTimings(**{name: -1.0})
