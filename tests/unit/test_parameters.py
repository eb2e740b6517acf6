"""Testes para leitura de parâmetros (ParameterBag / HostParameters)."""

from __future__ import annotations

from typing import Any

from evolution_node.node.description import PARAMETER_DEFAULTS, get_parameter_default
from evolution_node.node.parameters import HostParameters, ParameterBag


class CountingHost:
    """Host falso que conta leituras por nome."""

    def __init__(self, values: dict[str, Any]) -> None:
        self.values = values
        self.reads: list[tuple[str, int]] = []

    def get_node_parameter(self, name: str, item_index: int, default: Any = None) -> Any:
        self.reads.append((name, item_index))
        return self.values.get(name, default)


class TestParameterBag:
    def test_returns_given_value(self) -> None:
        assert ParameterBag({"instanceName": "bot1"}).get("instanceName") == "bot1"

    def test_falls_back_to_declared_default(self) -> None:
        bag = ParameterBag({})

        assert bag.get("mentionsEveryOne") is False
        assert bag.get("token") == ""
        assert bag.get("font") == 1

    def test_falls_back_to_caller_default_for_undeclared(self) -> None:
        assert ParameterBag({}).get("unknown", "x") == "x"

    def test_dotted_names_walk_nested_mappings(self) -> None:
        bag = ParameterBag({"listRows": {"rowValues": [{"rowId": "1"}]}})

        assert bag.get("listRows.rowValues") == [{"rowId": "1"}]
        assert "listRows.rowValues" in bag
        assert "listRows.other" not in bag

    def test_explicit_falsy_values_are_kept(self) -> None:
        bag = ParameterBag({"rejectCall": False, "msgCall": "", "font": 0})

        assert bag.get("rejectCall") is False
        assert bag.get("msgCall") == ""
        assert bag.get("font") == 0

    def test_host_contract_ignores_index(self) -> None:
        assert ParameterBag({"a": 1}).get_node_parameter("a", 3) == 1


class TestHostParameters:
    def test_reads_item_zero_once_per_name(self) -> None:
        host = CountingHost({"instanceName": "bot1"})
        params = HostParameters(host)

        assert params.get("instanceName") == "bot1"
        assert params.get("instanceName") == "bot1"

        assert host.reads == [("instanceName", 0)]

    def test_passes_declared_default_to_host(self) -> None:
        host = CountingHost({})

        assert HostParameters(host).get("statusType") == "text"


def test_defaults_table_covers_resource_and_operation() -> None:
    assert PARAMETER_DEFAULTS["resource"] == "instances-api"
    assert PARAMETER_DEFAULTS["operation"] == "instance-basic"
    assert get_parameter_default("pollOptions.metadataValues") is None
