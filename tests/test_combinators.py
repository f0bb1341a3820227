"""Tests for union, intersect, diff and merge."""

from idmap import IdMap, union, intersect, diff, merge


def _pair():
    a = IdMap.from_list([(0, "a0"), (1, "a1"), (3, "a3")])
    b = IdMap.from_list([(1, "b1"), (2, "b2"), (6, "b6")])
    return a, b


class TestUnion:
    def test_left_wins(self):
        a, b = _pair()
        out = union(a, b)
        assert out.to_list() == [(0, "a0"), (1, "a1"), (2, "b2"), (3, "a3"), (6, "b6")]

    def test_cursor_is_max(self):
        a, b = _pair()
        assert union(a, b).cursor == 7
        assert union(b, a).cursor == 7

    def test_with_empty(self):
        a, _ = _pair()
        assert union(a, IdMap.empty()) == a
        assert union(IdMap.empty(), a) == a

    def test_method_form(self):
        a, b = _pair()
        assert a.union(b) == union(a, b)


class TestIntersect:
    def test_values_from_left(self):
        a, b = _pair()
        out = intersect(a, b)
        assert out.to_list() == [(1, "a1")]
        assert out.cursor == 7
        assert a.intersect(b) == out

    def test_disjoint(self):
        a = IdMap.from_list([(0, "x")])
        b = IdMap.from_list([(5, "y")])
        out = intersect(a, b)
        assert out.is_empty()
        assert out.cursor == 6


class TestDiff:
    def test_removes_shared_keys(self):
        a, b = _pair()
        out = diff(a, b)
        assert out.to_list() == [(0, "a0"), (3, "a3")]
        assert out.cursor == 7
        assert a.diff(b) == out

    def test_ignores_right_values(self):
        a = IdMap.from_list([(0, "x"), (1, "y")])
        b = IdMap.from_list([(1, 12345)])
        assert diff(a, b).to_list() == [(0, "x")]

    def test_insert_after_diff_does_not_collide(self):
        a, b = _pair()
        key, out = diff(a, b).insert("new")
        assert key == 7
        assert key not in a.keys() + b.keys()


class TestMerge:
    def test_visits_keys_in_order(self):
        _, a = IdMap.singleton("a")
        a = a.update(2, lambda _: "c", strict=True)
        b = IdMap.from_list([(1, "b"), (2, "d")])
        out = merge(
            lambda k, v, acc: acc + "A " + v,
            lambda k, x, y, acc: acc + "B " + x + " " + y,
            lambda k, v, acc: acc + "C " + v,
            a, b, "",
        )
        assert out == "A a" + "C b" + "B c d"

    def test_each_key_visited_once(self):
        a, b = _pair()
        visits = merge(
            lambda k, v, acc: acc + [("a", k)],
            lambda k, x, y, acc: acc + [("both", k)],
            lambda k, v, acc: acc + [("b", k)],
            a, b, [],
        )
        assert visits == [("a", 0), ("both", 1), ("b", 2), ("a", 3), ("b", 6)]

    def test_empty_inputs(self):
        out = merge(
            lambda k, v, acc: acc + 1,
            lambda k, x, y, acc: acc + 1,
            lambda k, v, acc: acc + 1,
            IdMap.empty(), IdMap.empty(), 0,
        )
        assert out == 0

    def test_rebuilds_union(self):
        a, b = _pair()
        pairs = merge(
            lambda k, v, acc: acc + [(k, v)],
            lambda k, x, y, acc: acc + [(k, x)],
            lambda k, v, acc: acc + [(k, v)],
            a, b, [],
        )
        assert pairs == union(a, b).to_list()
