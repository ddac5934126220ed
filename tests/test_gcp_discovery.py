"""Tests for GCPDiscovery: end-to-end runs over mocked Cloud SQL and Monitoring clients."""

from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest
from google.api_core.exceptions import ServiceUnavailable
from google.auth.exceptions import DefaultCredentialsError

from gcp_discovery.collectors import (
    DEFAULT_FAMILIES,
    CloudSQLCollector,
    NotificationChannelCollector,
    UptimeCheckCollector,
    build_collectors,
)
from gcp_discovery.config import GCPConfig, get_gcp_credential
from gcp_discovery.gcp_discovery import GCPDiscovery
from gcp_discovery.policies import (
    GCP_KIND_POLICIES,
    NOTIFICATION_CHANNEL,
    SQL_DATABASE,
    SQL_INSTANCE,
    UPTIME_CHECK,
)
from shared.exceptions import ConfigurationError, CredentialsError, DiscoveryAbortedError


class _Pager:
    def __init__(self, entries):
        self.entries = list(entries)

    def __iter__(self):
        return self

    def __next__(self):
        if not self.entries:
            raise StopIteration
        entry = self.entries.pop(0)
        if isinstance(entry, Exception):
            raise entry
        return entry


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
@pytest.fixture
def shared_clients():
    """Mocked API clients for a project with one instance and two databases."""
    sqladmin = MagicMock()
    sqladmin.instances.return_value.list.return_value.execute.return_value = {
        "items": [{"name": "db1", "databaseVersion": "POSTGRES_15"}]
    }
    sqladmin.databases.return_value.list.return_value.execute.return_value = {
        "items": [{"name": "users"}, {"name": "orders"}]
    }

    channels = MagicMock()
    channels.list_notification_channels.return_value = [
        SimpleNamespace(name="projects/test-project/notificationChannels/11")
    ]

    uptime = MagicMock()
    uptime.list_uptime_check_configs.return_value = [
        SimpleNamespace(name="projects/test-project/uptimeCheckConfigs/web")
    ]

    return {
        "sqladmin": sqladmin,
        "notification_channels": channels,
        "uptime_checks": uptime,
    }


def _discovery(shared_clients, **config_kwargs):
    config_kwargs.setdefault("project_id", "test-project")
    config = GCPConfig(**config_kwargs)
    with patch(
        "gcp_discovery.gcp_discovery.get_gcp_credential",
        return_value=(MagicMock(), "credential-project"),
    ):
        return GCPDiscovery(config, shared_clients=shared_clients)


# ---------------------------------------------------------------------------
# End-to-end discovery
# ---------------------------------------------------------------------------
class TestGCPDiscovery:
    def test_full_project(self, shared_clients):
        result = _discovery(shared_clients).discover()

        assert [(r.durable_id, r.display_name, r.kind) for r in result.records] == [
            ("db1", "db1", SQL_INSTANCE),
            ("db1:users", "db1-users", SQL_DATABASE),
            ("db1:orders", "db1-orders", SQL_DATABASE),
            (
                "projects/test-project/notificationChannels/11",
                "projects/test-project/notificationChannels/11",
                NOTIFICATION_CHANNEL,
            ),
            (
                "projects/test-project/uptimeCheckConfigs/web",
                "projects/test-project/uptimeCheckConfigs/web",
                UPTIME_CHECK,
            ),
        ]
        assert {r.provider for r in result.records} == {"google"}

    def test_sql_records_have_no_attributes(self, shared_clients):
        result = _discovery(shared_clients, families=["cloudsql"]).discover()
        assert all(dict(r.attributes) == {} for r in result.records)

    def test_monitoring_records_carry_name(self, shared_clients):
        result = _discovery(shared_clients, families=["notification_channels"]).discover()
        record = result.records[0]
        assert dict(record.attributes) == {"name": record.durable_id}

    def test_ignore_key_strips_name(self, shared_clients):
        result = _discovery(
            shared_clients, families=["uptime_checks"], ignore_keys=["name"]
        ).discover()
        assert dict(result.records[0].attributes) == {}

    def test_cloudsql_failure_aborts(self, shared_clients):
        instances = shared_clients["sqladmin"].instances.return_value
        instances.list.return_value.execute.side_effect = RuntimeError("sqladmin API disabled")

        with pytest.raises(DiscoveryAbortedError) as excinfo:
            _discovery(shared_clients).discover()
        assert excinfo.value.family == "cloudsql"

    def test_monitoring_page_error_is_soft(self, shared_clients):
        shared_clients["notification_channels"].list_notification_channels.return_value = _Pager(
            [
                SimpleNamespace(name="projects/test-project/notificationChannels/1"),
                ServiceUnavailable("backend error"),
                SimpleNamespace(name="projects/test-project/notificationChannels/3"),
            ]
        )
        result = _discovery(shared_clients, families=["notification_channels"]).discover()

        assert result.durable_ids() == {
            "projects/test-project/notificationChannels/1",
            "projects/test-project/notificationChannels/3",
        }
        assert len(result.skipped) == 1

    def test_parallel_matches_sequential(self, shared_clients):
        sequential = _discovery(shared_clients).discover()
        parallel = _discovery(shared_clients, max_workers=3).discover()

        assert [r.durable_id for r in sequential.records] == [
            r.durable_id for r in parallel.records
        ]

    def test_credential_project_used_when_none_configured(self, shared_clients, monkeypatch):
        monkeypatch.setattr(GCPConfig, "_get_default_project_id", lambda self: None)
        discovery = _discovery(shared_clients, project_id=None)

        assert discovery.project_id == "credential-project"
        assert discovery.get_scanned_project_ids() == ["credential-project"]

    def test_caller_config_left_unchanged(self, shared_clients, monkeypatch):
        monkeypatch.setattr(GCPConfig, "_get_default_project_id", lambda self: None)
        config = GCPConfig()
        with patch(
            "gcp_discovery.gcp_discovery.get_gcp_credential",
            return_value=(MagicMock(), "credential-project"),
        ):
            discovery = GCPDiscovery(config, shared_clients=shared_clients)

        assert config.project_id is None
        assert discovery.config.scope == "credential-project"

    def test_no_project_at_all(self, shared_clients, monkeypatch):
        monkeypatch.setattr(GCPConfig, "_get_default_project_id", lambda self: None)
        config = GCPConfig()
        with patch(
            "gcp_discovery.gcp_discovery.get_gcp_credential",
            return_value=(MagicMock(), None),
        ):
            with pytest.raises(ConfigurationError):
                GCPDiscovery(config, shared_clients=shared_clients)


# ---------------------------------------------------------------------------
# Families and policies
# ---------------------------------------------------------------------------
class TestFamilies:
    def test_default_family_order(self):
        assert DEFAULT_FAMILIES == ("cloudsql", "notification_channels", "uptime_checks")

    def test_build_collectors_in_requested_order(self):
        collectors = build_collectors(["uptime_checks", "cloudsql"])
        assert [type(c) for c in collectors] == [UptimeCheckCollector, CloudSQLCollector]

    def test_unknown_family(self):
        with pytest.raises(KeyError):
            build_collectors(["pubsub"])

    def test_collector_kinds(self):
        assert CloudSQLCollector().kinds == (SQL_INSTANCE, SQL_DATABASE)
        assert NotificationChannelCollector().kinds == (NOTIFICATION_CHANNEL,)

    def test_every_kind_has_policy(self):
        for collector in build_collectors(DEFAULT_FAMILIES):
            for kind in collector.kinds:
                assert GCP_KIND_POLICIES[kind].kind == kind


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------
class TestGCPConfig:
    def test_project_from_environment(self, monkeypatch):
        monkeypatch.setenv("GOOGLE_CLOUD_PROJECT", "env-project")
        assert GCPConfig().project_id == "env-project"

    def test_explicit_project_wins(self, monkeypatch):
        monkeypatch.setenv("GOOGLE_CLOUD_PROJECT", "env-project")
        assert GCPConfig(project_id="explicit").project_id == "explicit"

    def test_gcloud_missing(self, monkeypatch):
        monkeypatch.delenv("GOOGLE_CLOUD_PROJECT", raising=False)
        with patch("gcp_discovery.config.subprocess.run", side_effect=FileNotFoundError):
            assert GCPConfig().project_id is None

    def test_gcloud_unset(self, monkeypatch):
        monkeypatch.delenv("GOOGLE_CLOUD_PROJECT", raising=False)
        with patch(
            "gcp_discovery.config.subprocess.run",
            return_value=MagicMock(stdout="(unset)\n"),
        ):
            assert GCPConfig().project_id is None

    def test_unknown_family_rejected(self):
        config = GCPConfig(project_id="p", families=["cloudsql", "pubsub"])
        with pytest.raises(ConfigurationError, match="pubsub"):
            config.to_discovery_config()

    def test_invalid_workers_rejected(self):
        with pytest.raises(ConfigurationError):
            GCPConfig(project_id="p", max_workers=0).to_discovery_config()

    def test_invalid_format_rejected(self):
        with pytest.raises(ValueError):
            GCPConfig(project_id="p", output_format="xml")

    def test_discovery_config(self):
        config = GCPConfig(
            project_id="p", families=["Uptime_Checks", "cloudsql"], ignore_keys=["etag"]
        ).to_discovery_config()

        assert config.scope == "p"
        assert config.provider == "google"
        assert config.families == ("uptime_checks", "cloudsql")
        assert config.ignore_keys == frozenset(["etag"])


class TestCredentials:
    def test_missing_credentials(self):
        with patch(
            "gcp_discovery.config.default",
            side_effect=DefaultCredentialsError("no ADC"),
        ):
            with pytest.raises(CredentialsError, match="application-default login"):
                get_gcp_credential()

    def test_credentials_returned(self):
        creds = MagicMock()
        with patch("gcp_discovery.config.default", return_value=(creds, "proj")):
            assert get_gcp_credential() == (creds, "proj")
