import pytest

from must_gather_mcp.capabilities import CapabilityRegistry
from must_gather_mcp.discovery import AnalysisDiscovery, InvalidInputError, TypeNotFoundError
from must_gather_mcp.typedefs import TypeGraph


@pytest.fixture(scope="module")
def discovery() -> AnalysisDiscovery:
    return AnalysisDiscovery(CapabilityRegistry(), TypeGraph(), usage_hint="use the analyzer")


def _method_names(result) -> list[str]:
    return [method.name for method in result.methods]


def _type_names(result) -> list[str]:
    return [descriptor.name for descriptor in result.types]


def test_search_analysis_returns_public_fields_count_and_usage(discovery: AnalysisDiscovery) -> None:
    result = discovery.search_analysis({"severity": "critical", "scope": "cluster", "unexpected": "ignored"})

    assert _method_names(result) == ["getDegradedOperators", "getEtcdHealth"]
    assert result.total_methods == 2
    assert result.summary == "Found 2 matching analysis methods"
    assert result.usage == "use the analyzer"
    assert "keywords" not in result.methods[0].model_dump()


def test_search_analysis_without_arguments_matches_all(discovery: AnalysisDiscovery) -> None:
    result = discovery.search_analysis()

    assert result.total_methods == 10
    assert result.suggested_method is None


def test_search_analysis_singular_summary(discovery: AnalysisDiscovery) -> None:
    result = discovery.search_analysis({"keyword": "failing", "limit": 1})

    assert result.summary == "Found 1 matching analysis method"


def test_search_analysis_no_matches_is_not_an_error(discovery: AnalysisDiscovery) -> None:
    result = discovery.search_analysis({"component": "kube-scheduler"})

    assert result.methods == []
    assert result.total_methods == 0


def test_search_analysis_adds_suggested_method_for_intent_keyword(discovery: AnalysisDiscovery) -> None:
    result = discovery.search_analysis({"keyword": "failing pods"})

    assert result.suggested_method == "getFailingPods"
    assert "getFailingPods" in _method_names(result)


def test_search_analysis_rejects_malformed_limit(discovery: AnalysisDiscovery) -> None:
    with pytest.raises(InvalidInputError, match="limit"):
        discovery.search_analysis({"limit": "lots"})


def test_get_type_definition_defaults_to_depth_one(discovery: AnalysisDiscovery) -> None:
    result = discovery.get_type_definition({"typeNames": ["Pod"]})

    assert _type_names(result) == ["Pod", "Container", "Condition"]
    assert len(result.available_types) == 9
    assert all(descriptor.example_value is None for descriptor in result.types)


def test_get_type_definition_accepts_snake_case_arguments(discovery: AnalysisDiscovery) -> None:
    result = discovery.get_type_definition({"type_names": ["Node"], "include_examples": True})

    assert _type_names(result) == ["Node", "Condition"]
    assert result.types[0].example_value["status"] == "Ready"


@pytest.mark.parametrize(("depth", "expected_count"), [(0, 7), (-4, 7), (3, 9), (10, 9)])
def test_get_type_definition_clamps_depth(discovery: AnalysisDiscovery, depth: int, expected_count: int) -> None:
    result = discovery.get_type_definition({"typeNames": ["MustGatherAnalyzer"], "depth": depth})

    assert len(result.types) == expected_count


@pytest.mark.parametrize("args", [{}, {"typeNames": []}, {"typeNames": None}])
def test_get_type_definition_requires_type_names(discovery: AnalysisDiscovery, args: dict) -> None:
    with pytest.raises(InvalidInputError, match="typeNames array is required. Available types: MustGatherAnalyzer"):
        discovery.get_type_definition(args)


def test_get_type_definition_rejects_non_list_type_names(discovery: AnalysisDiscovery) -> None:
    with pytest.raises(InvalidInputError, match="Available types"):
        discovery.get_type_definition({"typeNames": "Pod"})


def test_get_type_definition_reports_unknown_types(discovery: AnalysisDiscovery) -> None:
    with pytest.raises(TypeNotFoundError, match="No types found. Available types: MustGatherAnalyzer, MustGatherConfig") as exc_info:
        discovery.get_type_definition({"typeNames": ["NoSuchType"]})

    assert exc_info.value.available_types[-1] == "Condition"


def test_get_type_definition_drops_unknown_names_in_mixed_request(discovery: AnalysisDiscovery) -> None:
    result = discovery.get_type_definition({"typeNames": ["NoSuchType", "EtcdHealth"]})

    assert _type_names(result) == ["EtcdHealth"]


def test_editing_returned_examples_leaves_type_map_unchanged(discovery: AnalysisDiscovery) -> None:
    first = discovery.get_type_definition({"typeNames": ["Node"], "includeExamples": True})
    first.types[0].example_value["name"] = "tampered"
    first.types[0].example_value["roles"].append("infra")

    second = discovery.get_type_definition({"typeNames": ["Node"], "includeExamples": True})

    assert second.types[0].example_value["name"] == "master-0"
    assert second.types[0].example_value["roles"] == ["master"]
    assert discovery.type_graph.types["Node"].example_value["name"] == "master-0"
