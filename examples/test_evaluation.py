from sortnets.circuits import *


def test_run_primitives() -> None:
    assert run(add(), [1, 2]) == (3.0,)
    assert run(const(7), []) == (7.0,)
    assert run(compare_swap(3, 0, 2), [1, 5, 2]) == (2.0, 5.0, 1.0)


def test_run_pads_and_truncates() -> None:
    assert run(add(), [1]) == (None,)
    assert run(compare_swap(2, 0, 1), [1, 2, 3]) == (2.0, 1.0)
    assert run(identity(3), []) == (None, None, None)


def test_run_par_slices_inputs() -> None:
    c = par(add(), identity(1))
    assert run(c, [1, 2, 3]) == (3.0, 3.0)
    assert run(par(const(4), add()), [1, 2]) == (4.0, 3.0)


def test_run_seq_chains_outputs() -> None:
    c = seq(par(add(), add()), add())
    assert run(c, [1, 2, 3, 4]) == (10.0,)
    assert run(c, [1, 2, None, 4]) == (None,)


def test_run_annotate_records_values() -> None:
    c = seq(par(add().amend("a"), identity(1).amend("i")), compare_swap(2, 0, 1))
    annotated = run_annotate(lambda label, r: r, c, [1, 2, 5])
    assert annotated.data == RunData([1, 2, 5], [5, 3])
    assert isinstance(annotated, Seq)
    par_node = annotated.left
    assert par_node.data == RunData([1, 2, 5], [3, 5])
    assert isinstance(par_node, Par)
    assert par_node.left.data == RunData([1, 2], [3])
    assert par_node.right.data == RunData([5], [5])
    assert annotated.right.data == RunData([3, 5], [5, 3])


def test_run_annotate_agrees_with_run() -> None:
    c = seq(par(add(), const(2)), compare_swap(2, 0, 1))
    for inputs in ([1, 2], [None, 1], [-3, 0.5]):
        annotated = run_annotate(lambda label, r: r, c, inputs)
        assert annotated.data.outputs == run(c, inputs)


def test_run_annotate_preserves_shape() -> None:
    c = seq(par(add(), add()), add())
    annotated = run_annotate(lambda label, r: (label, r), c, [1, 1, 1, 1])
    assert [type(node) for node in annotated.nodes()] == [
        type(node) for node in c.nodes()
    ]
    assert all(node.data[0] == "" for node in annotated.nodes())


def test_get_run_data() -> None:
    r = RunData([1], [1])
    assert get_run_data(identity(1).amend(r)) is r
    assert get_run_data(identity(1)) is None


def test_output_value() -> None:
    annotated = run_annotate(lambda label, r: r, add(), [2, 3])
    assert output_value(annotated, 0) == 5.0
    assert output_value(annotated, 1) is None
    assert output_value(annotated, -1) is None
    assert output_value(add(), 0) is None
