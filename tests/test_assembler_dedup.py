from __future__ import annotations

from typing import TYPE_CHECKING

from graph.dependencies import Dependency
from graph.hierarchy import HierarchyEntry
from uml.assembler import INVALID_LINE_COLOR, View
from uml.cache import EdgeKey, ViewCache
from uml.model import DiagramDocument, DiagramKind, EdgeKind, NodeKind

if TYPE_CHECKING:
    from analysis.engine import AnalysisResult
    from uml.model import Diagram

A = "/sitecore/templates/Foundation/ModFoo/A"
B = "/sitecore/templates/Feature/ModBar/B"
B2 = "/sitecore/templates/Feature/ModBar/B2"
C = "/sitecore/templates/Project/ModBaz/C"
D = "/sitecore/templates/Feature/ModQux/D"
S = "/sitecore/templates/Foundation/ModShared/S"


def _diagram(result: AnalysisResult, name: str) -> Diagram:
    document = result.document
    assert isinstance(document, DiagramDocument)
    diagram = document.find_diagram(name)
    assert diagram is not None, name
    return diagram


def _labels(diagram: Diagram) -> dict[tuple[str, str], str | None]:
    return {
        (diagram.nodes[edge.source].item_id, diagram.nodes[edge.target].item_id): edge.label
        for edge in diagram.edges_of_kind(EdgeKind.DEPENDENCY)
    }


def test_six_views_per_module_and_layer(mini_result: AnalysisResult) -> None:
    document = mini_result.document
    assert isinstance(document, DiagramDocument)

    names = [diagram.name for diagram in document.diagrams]
    assert names[:2] == ["Templates Diagram", "Template Folders Diagram"]
    assert names[2:8] == [
        "ModFoo Dependencies Diagram",
        "ModFoo Dependents Diagram",
        "ModFoo Templates Dependencies Diagram",
        "ModFoo Templates Dependents Diagram",
        "ModShared Dependencies Diagram",
        "ModShared Dependents Diagram",
    ]
    assert "Foundation Layer Dependencies Diagram" in names
    assert "Project Layer Dependents Diagram" in names
    # 5 modules x 4 views + 3 layers x 2 views + 2 catalog views
    assert len(names) == 5 * 4 + 3 * 2 + 2


def test_module_view_merges_contributors_into_one_edge(
    mini_result: AnalysisResult,
) -> None:
    diagram = _diagram(mini_result, "ModBar Dependencies Diagram")

    assert _labels(diagram) == {
        ("mod-bar", "mod-foo"): f"`{B}` -> `{A}`  \n`{B2}` -> `{A}`",
    }
    assert sorted(diagram.item_edges(EdgeKind.CONTAINMENT)) == [
        ("mod-bar", "feature"),
        ("mod-foo", "foundation"),
    ]
    assert diagram.layout_direction == "TB"


def test_module_dependents_view(mini_result: AnalysisResult) -> None:
    diagram = _diagram(mini_result, "ModFoo Dependents Diagram")

    assert _labels(diagram) == {
        ("mod-shared", "mod-foo"): f"`{S}` -> `{A}`",
        ("mod-bar", "mod-foo"): f"`{B}` -> `{A}`  \n`{B2}` -> `{A}`",
    }
    # ModShared shares the Foundation layer node with ModFoo.
    assert sorted(diagram.item_edges(EdgeKind.CONTAINMENT)) == [
        ("mod-bar", "feature"),
        ("mod-foo", "foundation"),
        ("mod-shared", "foundation"),
    ]


def test_k_edges_for_n_dependencies(mini_result: AnalysisResult) -> None:
    diagram = _diagram(mini_result, "Feature Layer Dependencies Diagram")

    labels = _labels(diagram)
    assert set(labels) == {("feature", "foundation"), ("feature", "project")}
    assert labels[("feature", "foundation")] == f"`{B}` -> `{A}`  \n`{B2}` -> `{A}`"
    assert labels[("feature", "project")] == f"`{D}` -> `{C}`"


def test_invalid_edges_are_styled(mini_result: AnalysisResult) -> None:
    diagram = _diagram(mini_result, "Project Layer Dependents Diagram")

    (edge,) = diagram.edges_of_kind(EdgeKind.DEPENDENCY)
    assert edge.style == {"valid": False, "line_color": INVALID_LINE_COLOR}


def test_same_layer_dependencies_stay_out_of_layer_views(
    mini_result: AnalysisResult,
) -> None:
    diagram = _diagram(mini_result, "Foundation Layer Dependencies Diagram")

    assert diagram.edges_of_kind(EdgeKind.DEPENDENCY) == []
    assert [node.item_id for node in diagram.nodes.values()] == ["foundation"]


def test_template_view_hides_far_stereotypes(mini_result: AnalysisResult) -> None:
    diagram = _diagram(mini_result, "ModBar Templates Dependencies Diagram")

    assert set(_labels(diagram)) == {("tpl-b", "tpl-a"), ("tpl-b2", "tpl-a")}
    far = diagram.node_for("tpl-a")
    near = diagram.node_for("tpl-b")
    assert far is not None
    assert near is not None
    assert far.style == {"stereotype_display": "none"}
    assert near.style == {}
    assert sorted(diagram.item_edges(EdgeKind.CONTAINMENT)) == [
        ("mod-bar", "feature"),
        ("mod-foo", "foundation"),
        ("tpl-a", "mod-foo"),
        ("tpl-b", "mod-bar"),
        ("tpl-b2", "mod-bar"),
    ]


def test_template_dependents_view_hides_anchor_stereotypes(
    mini_result: AnalysisResult,
) -> None:
    diagram = _diagram(mini_result, "ModBaz Templates Dependents Diagram")

    assert _labels(diagram) == {("tpl-d", "tpl-c"): f"`{D}` -> `{C}`"}
    anchor = diagram.node_for("tpl-c")
    assert anchor is not None
    assert anchor.style == {"stereotype_display": "none"}


def test_views_do_not_share_caches(mini_result: AnalysisResult) -> None:
    first = _diagram(mini_result, "ModBar Dependencies Diagram")
    second = _diagram(mini_result, "ModBar Dependents Diagram")

    assert first.node_for("mod-bar") is not None
    assert second.node_for("mod-bar") is not None
    assert first.id != second.id


def _dependency(source: str, target: str, *, is_valid: bool) -> Dependency:
    return Dependency(
        source=HierarchyEntry(source, "m1", "l1"),
        target=HierarchyEntry(target, "m2", "l2"),
        source_path=f"/{source}",
        target_path=f"/{target}",
        is_valid=is_valid,
        message=None if is_valid else "nope",
    )


def test_later_invalid_contributor_downgrades_edge() -> None:
    document = DiagramDocument()
    diagram = document.create_diagram(DiagramKind.CLASS, "Test", None)
    view = View(model=document, diagram=diagram, cache=ViewCache())
    source = view.ensure_node(NodeKind.MODULE, "m1", name="M1", path="/m1")
    target = view.ensure_node(NodeKind.MODULE, "m2", name="M2", path="/m2")
    key = EdgeKey("m1", "m2")

    view.add_dependency(key, source, target, _dependency("x", "y", is_valid=True))
    state = view.add_dependency(
        key, source, target, _dependency("x2", "y2", is_valid=False)
    )
    view.add_dependency(key, source, target, _dependency("x3", "y3", is_valid=True))

    (edge,) = document.diagrams[0].edges_of_kind(EdgeKind.DEPENDENCY)
    assert state.is_valid is False
    assert edge.style == {"valid": False, "line_color": INVALID_LINE_COLOR}
    assert edge.label == "`/x` -> `/y`  \n`/x2` -> `/y2`  \n`/x3` -> `/y3`"
    assert state.descriptions == ["`/x` -> `/y`", "`/x2` -> `/y2`", "`/x3` -> `/y3`"]


def test_ensure_node_creates_containment_once() -> None:
    document = DiagramDocument()
    diagram = document.create_diagram(DiagramKind.CLASS, "Test", None)
    view = View(model=document, diagram=diagram, cache=ViewCache())

    layer = view.ensure_node(NodeKind.LAYER, "l", name="L", path="/l")
    first = view.ensure_node(NodeKind.MODULE, "m", name="M", path="/l/m", parent_id="l")
    again = view.ensure_node(NodeKind.MODULE, "m", name="M", path="/l/m", parent_id="l")

    assert first == again
    assert layer != first
    assert document.diagrams[0].item_edges(EdgeKind.CONTAINMENT) == [("m", "l")]
