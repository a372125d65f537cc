import pytest

from valuegrad import Value, backward, zero_grad, topological_order


def test_chain_rule_on_small_expression(expr):
    L = expr["L"]
    assert L.data == -8.0
    L.backward()
    assert L.grad == 1.0
    assert expr["d"].grad == -2.0
    assert expr["f"].grad == 4.0
    assert expr["e"].grad == -2.0
    assert expr["c"].grad == -2.0
    assert expr["a"].grad == 6.0
    assert expr["b"].grad == -4.0


def test_reconvergence_accumulates():
    a = Value(-2.0)
    b = Value(3.0)
    c = (a + b) * a
    assert c.data == -2.0
    c.backward()
    # dc/da = 2a + b, dc/db = a
    assert a.grad == -1.0
    assert b.grad == -2.0


def test_diamond_dependency():
    x = Value(1.5)
    u = x * 2.0
    v = x + 1.0
    y = u * v
    y.backward()
    # y = 2x(x+1) -> dy/dx = 4x + 2
    assert x.grad == pytest.approx(8.0)


@pytest.mark.parametrize("build, data, grad", [
    (lambda a: a + a, 6.0, 2.0),
    (lambda a: a - a, 0.0, 0.0),
    (lambda a: a * a, 9.0, 6.0),
    (lambda a: a / a, 1.0, 0.0),
])
def test_self_use_aliasing(build, data, grad):
    a = Value(3.0)
    c = build(a)
    assert c.data == pytest.approx(data)
    c.backward()
    assert c.grad == 1.0
    assert a.grad == pytest.approx(grad)


def test_aliased_operand_is_stored_once():
    a = Value(3.0)
    c = a * a
    assert c.operands == (a,)
    assert c._self_op
    d = a * Value(3.0)
    assert len(d.operands) == 2
    assert not d._self_op


def test_tanh_at_zero():
    x = Value(0.0)
    t = x.tanh()
    assert t.data == 0.0
    t.backward()
    assert x.grad == 1.0


def test_root_gradient_is_one():
    leaf = Value(5.0)
    leaf.backward()
    assert leaf.grad == 1.0

    r = (Value(2.0) * 3.0).tanh()
    r.backward()
    assert r.grad == 1.0


def test_repeated_backward_accumulates():
    a, b = Value(2.0), Value(3.0)
    c = a * b
    c.backward()
    assert (a.grad, b.grad) == (3.0, 2.0)
    c.backward()
    assert c.data == 6.0
    assert a.data == 2.0 and b.data == 3.0
    assert (a.grad, b.grad) == (6.0, 4.0)
    # root is seeded, not accumulated
    assert c.grad == 1.0


def test_repeated_backward_on_deep_expression_adds_one_pass(expr):
    L = expr["L"]
    L.backward()
    first = {k: expr[k].grad for k in "abcdef"}
    assert (first["a"], first["e"]) == (6.0, -2.0)
    L.backward()
    for k in "abcdef":
        assert expr[k].grad == 2 * first[k], k
    assert (expr["a"].grad, expr["e"].grad) == (12.0, -4.0)
    assert L.grad == 1.0


def test_repeated_backward_with_reconvergence():
    a = Value(-2.0, label="a")
    b = Value(3.0, label="b")
    c = (a + b) * a
    c.backward()
    assert (a.grad, b.grad) == (-1.0, -2.0)
    c.backward()
    assert (a.grad, b.grad) == (-2.0, -4.0)
    assert c.grad == 1.0


def test_zero_grad_resets_whole_graph(expr):
    L = expr["L"]
    L.backward()
    zero_grad(L)
    assert all(v.grad == 0.0 for v in topological_order(L))
    L.backward()
    assert expr["a"].grad == 6.0


def test_zero_grad_single_node():
    a = Value(1.0)
    (a * 4.0).backward()
    assert a.grad == 4.0
    a.zero_grad()
    assert a.grad == 0.0


def test_backward_function_matches_method():
    a = Value(0.7)
    y = (a * a).tanh()
    backward(y)
    g = a.grad
    zero_grad(y)
    y.backward()
    assert a.grad == g


def test_topological_order_properties(expr):
    L = expr["L"]
    order = topological_order(L)
    ids = [v.id for v in order]
    assert len(ids) == len(set(ids)) == 7
    assert order[-1] is L
    pos = {v.id: i for i, v in enumerate(order)}
    for v in order:
        for p in v.operands:
            assert pos[p.id] < pos[v.id]


def test_topological_order_visits_shared_node_once():
    a = Value(1.0)
    b = a + a
    c = b * a
    d = c + b
    assert [v.id for v in topological_order(d)].count(a.id) == 1
    assert len(topological_order(d)) == 4


def test_deep_graph_does_not_recurse():
    x = Value(1.0)
    y = x
    for _ in range(3000):
        y = y + x
    y.backward()
    assert x.grad == 3001.0
