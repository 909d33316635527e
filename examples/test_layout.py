from typing import Any

import pytest

from sortnets.circuits import *
from sortnets.layout import *
from sortnets.lib.diagram import NodeData
from sortnets.lib.networks import bitonic_sort, insertion_sort


def geometry(label: Any, geom: Layout) -> Layout:
    return geom


def flat(points: tuple[Point, ...]) -> list[float]:
    return [coord for point in points for coord in point]


def test_primitive_layout() -> None:
    laid_out = layout(geometry, compare_swap(2, 0, 1))
    geom = get_layout(laid_out)
    assert geom.id == 0
    assert geom.unit == 1.0
    assert geom.position == (0.0, 0.0)
    assert geom.size == pytest.approx((0.3, 2.0))
    assert geom.terminals_in == ((0.0, 0.5), (0.0, 1.5))
    assert flat(geom.terminals_out) == pytest.approx(flat(((0.3, 0.5), (0.3, 1.5))))


def test_gate_widths() -> None:
    assert width(layout(geometry, identity(3))) == pytest.approx(0.2)
    assert width(layout(geometry, const(1))) == pytest.approx(0.1)
    assert width(layout(geometry, add())) == pytest.approx(1.6)
    assert height(layout(geometry, add())) == 2.0
    assert height(layout(geometry, const(1))) == 1.0
    assert height(layout(geometry, identity(0))) == 0.0


def test_par_layout() -> None:
    laid_out = layout(geometry, par(add(), const(1)))
    geom = get_layout(laid_out)
    assert geom.size == pytest.approx((1.8, 3.0))
    assert flat(geom.terminals_in) == pytest.approx(flat(((0.1, 0.5), (0.1, 1.5))))
    assert flat(geom.terminals_out) == pytest.approx(flat(((1.7, 1.0), (0.95, 2.5))))
    assert isinstance(laid_out, Par)
    assert get_layout(laid_out.left).position == pytest.approx((0.1, 0.0))
    assert get_layout(laid_out.right).position == pytest.approx((0.85, 2.0))


def test_seq_layout() -> None:
    laid_out = layout(geometry, seq(add(), identity(1)))
    geom = get_layout(laid_out)
    assert geom.size == pytest.approx((2.25, 2.0))
    assert flat(geom.terminals_in) == pytest.approx(flat(((0.15, 0.5), (0.15, 1.5))))
    assert flat(geom.terminals_out) == pytest.approx(flat(((2.1, 1.0),)))
    assert isinstance(laid_out, Seq)
    assert get_layout(laid_out.right).position == pytest.approx((1.9, 0.5))


def test_terminal_counts() -> None:
    circuit = bitonic_sort(8)
    laid_out = layout(geometry, circuit)
    for node, laid_out_node in zip(circuit.nodes(), laid_out.nodes()):
        geom = get_layout(laid_out_node)
        assert len(geom.terminals_in) == node.fan_in
        assert len(geom.terminals_out) == node.fan_out


def test_ids_pre_order() -> None:
    laid_out = layout(geometry, seq(par(add(), add()), add()))
    assert [get_layout(node).id for node in laid_out.nodes()] == [0, 1, 2, 3, 4]


@pytest.mark.parametrize("circuit", [bitonic_sort(8), insertion_sort(5), add()])
def test_get_circuit_by_id(circuit: Circuit[str]) -> None:
    laid_out = layout(geometry, circuit)
    nodes = list(laid_out.nodes())
    for idx, node in enumerate(nodes):
        assert get_circuit_by_id(laid_out, idx) is node
    assert get_circuit_by_id(laid_out, len(nodes)) is None
    assert get_circuit_by_id(laid_out, -1) is None


def test_layout_helper_start() -> None:
    laid_out, next_id = layout.layout_helper(
        (1.0, 2.0), 10, geometry, seq(add(), identity(1))
    )
    assert next_id == 13
    assert get_layout(laid_out).id == 10
    assert get_layout(laid_out).position == (1.0, 2.0)
    assert get_circuit_by_id(laid_out, 12) is laid_out.children[1]
    assert get_circuit_by_id(laid_out, 9) is None


def test_layout_keeps_data() -> None:
    c = seq(add().amend("x"), identity(1)).amend("root")
    laid_out = layout(lambda label, geom: (label, geom.id), c)
    assert [node.data for node in laid_out.nodes()] == [
        ("root", 0),
        ("x", 1),
        ("", 2),
    ]


def test_translate_and_scale() -> None:
    laid_out = layout(geometry, bitonic_sort(4))
    assert scale(1.0, laid_out) == laid_out
    moved = translate((1.0, 2.0), translate((3.0, 4.0), laid_out))
    assert get_layout(moved).position == (4.0, 6.0)
    assert get_layout(moved).size == get_layout(laid_out).size
    scaled = scale(2.0, laid_out)
    assert get_layout(scaled).unit == 2.0
    assert get_layout(scaled).size == pytest.approx(
        tuple(2 * x for x in get_layout(laid_out).size)
    )
    assert [get_layout(node).id for node in scaled.nodes()] == [
        get_layout(node).id for node in laid_out.nodes()
    ]


@pytest.mark.parametrize(
    "first, second", [((0.1, 0.7), (0.2, 0.3)), ((-1.3, 2.9), (10.01, -0.33))]
)
def test_translate_composes(first: Point, second: Point) -> None:
    laid_out = layout(geometry, insertion_sort(4))
    twice = translate(second, translate(first, laid_out))
    once = translate(point_add(first, second), laid_out)
    for node, expected in zip(twice.nodes(), once.nodes()):
        geom, expected_geom = get_layout(node), get_layout(expected)
        assert geom.id == expected_geom.id
        assert geom.position == pytest.approx(expected_geom.position)
        assert geom.size == expected_geom.size
        assert flat(geom.terminals_in) == pytest.approx(flat(expected_geom.terminals_in))
        assert flat(geom.terminals_out) == pytest.approx(
            flat(expected_geom.terminals_out)
        )


def test_map_layout_requires_layout() -> None:
    with pytest.raises(TypeError):
        map_layout(lambda geom: geom, add())
    with pytest.raises(TypeError):
        get_layout(add())


def test_gather_wires() -> None:
    laid_out = layout(geometry, seq(compare_swap(2, 0, 1), compare_swap(2, 0, 1)))
    wires = gather_wires(lambda u, v, i, p, q: (i, p, q), laid_out)
    assert len(wires) == 2
    for i, (idx, p, q) in enumerate(wires):
        assert idx == i
        assert p[0] == pytest.approx(0.45)
        assert q[0] == pytest.approx(0.6)
        assert p[1] == pytest.approx(q[1])


def test_gather_wires_order() -> None:
    c = seq(seq(identity(1), identity(1)).amend("inner"), identity(1)).amend("outer")
    laid_out = layout(lambda label, geom: NodeData(label, layout=geom), c)
    labels = gather_wires(lambda u, v, i, p, q: u.data.label, laid_out)
    assert labels == ["", "inner"]
    assert gather_wires(lambda *args: args, layout(geometry, add())) == []


def test_layout_options() -> None:
    assert width(layout(geometry, add(), gate_width={"Add": 1.0})) == 1.0
    assert width(layout(geometry, add(), default_gate_width=2.0)) == 2.0
    assert width(layout(geometry, add(), gate_width=lambda gate: 0.5)) == 0.5
    laid_out = layout(geometry, par(add(), add()), par_pad=0.0)
    assert width(laid_out) == pytest.approx(1.6)
    assert width(layout(geometry, identity(1))) == pytest.approx(0.2)


def test_layouter_defaults() -> None:
    layouter = layout.with_defaults(seq_pad=0.0, gate_width={"Identity": 1.0})
    assert layouter.defaults["seq_pad"] == 0.0
    assert layouter.defaults["gate_width"]["CompareSwap"] == 0.3
    assert layout.defaults["seq_pad"] == 0.15
    assert layout.defaults["gate_width"]["Identity"] == 0.2
    assert width(layouter(geometry, seq(identity(1), identity(1)))) == 2.0
