"""Unit tests for base display models."""

from __future__ import annotations

import json
from datetime import UTC, datetime, timedelta

import pytest
import yaml

from kubectl_lite.integrations.kubernetes.models.base import (
    Displayable,
    K8sEntityBase,
    OutputFormat,
    ResourceList,
    _dict_get,
    _get_timestamp,
    _safe_get,
)
from kubectl_lite.integrations.kubernetes.models.resources import ConfigMapSummary, NodeSummary


def _ago(**delta: int) -> str:
    return (datetime.now(UTC) - timedelta(**delta)).isoformat()


@pytest.mark.unit
@pytest.mark.kubernetes
class TestAge:
    """Tests for the age property."""

    @pytest.mark.parametrize(
        ("delta", "expected"),
        [
            ({"days": 3, "hours": 2}, "3d"),
            ({"hours": 5, "minutes": 10}, "5h"),
            ({"minutes": 7}, "7m"),
        ],
    )
    def test_age_units(self, delta: dict[str, int], expected: str) -> None:
        """Age should use the largest whole unit."""
        entity = K8sEntityBase(name="x", creation_timestamp=_ago(**delta))
        assert entity.age == expected

    def test_age_accepts_z_suffix(self) -> None:
        """RFC 3339 timestamps with Z should parse."""
        stamp = (datetime.now(UTC) - timedelta(days=2)).strftime("%Y-%m-%dT%H:%M:%SZ")
        assert K8sEntityBase(name="x", creation_timestamp=stamp).age == "2d"

    def test_age_unknown(self) -> None:
        """Missing or invalid timestamps render as Unknown."""
        assert K8sEntityBase(name="x").age == "Unknown"
        assert K8sEntityBase(name="x", creation_timestamp="yesterday").age == "Unknown"


@pytest.mark.unit
@pytest.mark.kubernetes
class TestDisplayRows:
    """Tests for header and rows."""

    @pytest.fixture
    def config_map(self) -> ConfigMapSummary:
        return ConfigMapSummary(
            name="settings",
            namespace="team-a",
            creation_timestamp=_ago(days=1),
            data_count=2,
        )

    def test_table(self, config_map: ConfigMapSummary) -> None:
        """Plain table output shows the kind's columns."""
        assert config_map.header(OutputFormat.TABLE) == ["NAME", "DATA", "AGE"]
        assert config_map.rows(OutputFormat.TABLE) == [["settings", "2", "1d"]]

    def test_namespace_column(self, config_map: ConfigMapSummary) -> None:
        """NAMESPACE is prepended for namespaced kinds when requested."""
        assert config_map.header(OutputFormat.TABLE, show_namespace=True)[0] == "NAMESPACE"
        assert config_map.rows(OutputFormat.TABLE, show_namespace=True)[0][0] == "team-a"

    def test_namespace_column_skipped_for_cluster_kinds(self) -> None:
        """Cluster-scoped kinds never get a NAMESPACE column."""
        node = NodeSummary(name="worker-1")
        assert "NAMESPACE" not in node.header(OutputFormat.TABLE, show_namespace=True)
        assert node.rows(OutputFormat.TABLE, show_namespace=True)[0][0] == "worker-1"

    def test_show_kind_prefixes_name(self, config_map: ConfigMapSummary) -> None:
        """With several resource types the name carries its kind."""
        rows = config_map.rows(OutputFormat.TABLE, show_kind=True)
        assert rows[0][0] == "configmap/settings"

    def test_name_output(self, config_map: ConfigMapSummary) -> None:
        """-o name prints kind/name with no header."""
        assert config_map.header(OutputFormat.NAME) == []
        assert config_map.rows(OutputFormat.NAME) == [["configmap/settings"]]


@pytest.mark.unit
@pytest.mark.kubernetes
class TestSerialization:
    """Tests for to_dict, to_json and to_yaml."""

    def test_raw_payload_preferred(self) -> None:
        """Attached API payloads are serialized with apiVersion and kind."""
        model = ConfigMapSummary(name="settings").attach_raw(
            {"metadata": {"name": "settings"}, "data": {"a": "1"}}
        )
        data = model.to_dict()
        assert data["apiVersion"] == "v1"
        assert data["kind"] == "ConfigMap"
        assert data["data"] == {"a": "1"}
        assert list(data)[:2] == ["apiVersion", "kind"]

    def test_model_dump_without_payload(self) -> None:
        """Without a payload the model fields are dumped."""
        assert ConfigMapSummary(name="settings").to_dict()["name"] == "settings"

    def test_json_and_yaml(self) -> None:
        """JSON and YAML should round-trip the dict form."""
        model = ConfigMapSummary(name="settings").attach_raw({"metadata": {"name": "settings"}})
        assert json.loads(model.to_json()) == model.to_dict()
        assert yaml.safe_load(model.to_yaml()) == model.to_dict()


@pytest.mark.unit
@pytest.mark.kubernetes
class TestResourceList:
    """Tests for ResourceList."""

    def test_rows_from_every_item(self) -> None:
        """Rows are concatenated under the first item's header."""
        items = ResourceList(
            [ConfigMapSummary(name="a", data_count=1), ConfigMapSummary(name="b", data_count=0)]
        )
        assert len(items) == 2
        assert items.header(OutputFormat.TABLE) == ["NAME", "DATA", "AGE"]
        assert [r[0] for r in items.rows(OutputFormat.TABLE)] == ["a", "b"]

    def test_empty_list(self) -> None:
        """An empty list has no header and no rows."""
        items = ResourceList([])
        assert not items
        assert items.header(OutputFormat.TABLE) == []
        assert items.rows(OutputFormat.TABLE) == []

    def test_to_dict_is_a_list_document(self) -> None:
        """Lists serialize as kind: List with items."""
        data = ResourceList([ConfigMapSummary(name="a")]).to_dict()
        assert data["kind"] == "List"
        assert data["items"][0]["name"] == "a"

    def test_is_displayable(self) -> None:
        """Both lists and single models satisfy Displayable."""
        assert isinstance(ResourceList([]), Displayable)
        assert isinstance(ConfigMapSummary(name="a"), Displayable)


@pytest.mark.unit
@pytest.mark.kubernetes
class TestHelpers:
    """Tests for attribute and key helpers."""

    def test_safe_get_nested(self) -> None:
        """_safe_get should stop at None and return the default."""

        class Obj:
            metadata = None

        assert _safe_get(Obj(), "metadata", "name", default="") == ""

    def test_dict_get_nested(self) -> None:
        """_dict_get should walk decoded JSON."""
        data = {"metadata": {"name": "x"}}
        assert _dict_get(data, "metadata", "name") == "x"
        assert _dict_get(data, "spec", "replicas", default=0) == 0

    def test_get_timestamp(self) -> None:
        """Datetimes become ISO strings; strings pass through."""
        stamp = datetime(2024, 1, 2, tzinfo=UTC)
        assert _get_timestamp(stamp) == stamp.isoformat()
        assert _get_timestamp("2024-01-02T00:00:00Z") == "2024-01-02T00:00:00Z"
        assert _get_timestamp(None) is None
