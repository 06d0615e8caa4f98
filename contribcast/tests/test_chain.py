import logging

from contribcast.models.chain import summarize_chain
from contribcast.models.contribution import Contribution
from contribcast.runtime.chain import build_index, descend, find_root, reconstruct_chain


def _ids_with_depth(chain):
    return [(e.contribution_id, e.depth) for e in chain]


def test_chain_from_leaf_starts_at_root(store, make_contribution):
    store.add(make_contribution("A"))
    store.add(make_contribution("B", parent="A"))
    store.add(make_contribution("C", parent="B"))

    assert _ids_with_depth(store.get_chain("C")) == [("A", 0), ("B", 1), ("C", 2)]
    assert _ids_with_depth(store.get_chain("A")) == [("A", 0), ("B", 1), ("C", 2)]


def test_children_follow_stored_order_in_preorder(store, make_contribution):
    # stored order is newest first: B2 ahead of B1
    store.add(make_contribution("A"))
    store.add(make_contribution("B1", parent="A"))
    store.add(make_contribution("C1", parent="B1"))
    store.add(make_contribution("B2", parent="A"))

    assert _ids_with_depth(store.get_chain("C1")) == [("A", 0), ("B2", 1), ("B1", 1), ("C1", 2)]


def test_chain_excludes_other_trees(store, make_contribution):
    store.add(make_contribution("A"))
    store.add(make_contribution("X"))
    store.add(make_contribution("B", parent="A"))
    store.add(make_contribution("Y", parent="X"))

    assert [e.contribution_id for e in store.get_chain("B")] == ["A", "B"]


def test_dangling_parent_acts_as_root(store, make_contribution):
    store.add(make_contribution("orphan", parent="ghost"))
    store.add(make_contribution("kid", parent="orphan"))

    report = store.trace_chain("kid")
    assert report.root_id == "orphan"
    assert _ids_with_depth(report.entries) == [("orphan", 0), ("kid", 1)]
    assert _ids_with_depth(store.get_chain("orphan")) == [("orphan", 0), ("kid", 1)]


def test_unknown_id_gives_empty_chain(store, make_contribution):
    store.add(make_contribution("A"))

    assert store.get_chain("nonexistent") == ()
    report = store.trace_chain("nonexistent")
    assert not report.found
    assert report.entries == ()


def test_chain_is_read_only(storage, store, make_contribution):
    store.add(make_contribution("A"))
    store.add(make_contribution("B", parent="A"))
    before = storage.read("contribcast_contributions")

    store.get_chain("B")
    assert storage.read("contribcast_contributions") == before


def test_self_parent_terminates_with_single_entry(make_contribution):
    loop = make_contribution("L", parent="L")

    report = reconstruct_chain([loop], "L")
    assert _ids_with_depth(report.entries) == [("L", 0)]
    assert report.ascent_stopped_on_cycle is True
    assert report.skipped_ids == ("L",)


def test_three_node_cycle_terminates_and_reports(make_contribution, caplog):
    # A's parent is C, B's parent is A, C's parent is B
    contributions = [
        make_contribution("A", parent="C"),
        make_contribution("B", parent="A"),
        make_contribution("C", parent="B"),
    ]

    with caplog.at_level(logging.WARNING):
        report = reconstruct_chain(contributions, "C")

    # ascent C -> B -> A, next parent (C) already visited: A is used as root
    assert report.root_id == "A"
    assert _ids_with_depth(report.entries) == [("A", 0), ("B", 1), ("C", 2)]
    assert report.skipped_ids == ("A",)
    assert report.has_cycle
    assert "cycle" in caplog.text


def test_acyclic_chain_reports_no_cycle(make_contribution):
    contributions = [
        make_contribution("R"),
        make_contribution("X", parent="R"),
        make_contribution("Y", parent="X"),
    ]
    report = reconstruct_chain(contributions, "Y")
    assert report.root_id == "R"
    assert not report.has_cycle


def test_find_root_and_descend_directly(make_contribution):
    a = make_contribution("A")
    b = make_contribution("B", parent="A")
    index = build_index([b, a])

    root, stopped = find_root(index, b)
    assert root.contribution_id == "A"
    assert stopped is False

    entries, skipped = descend(index, root)
    assert _ids_with_depth(entries) == [("A", 0), ("B", 1)]
    assert skipped == ()


def test_deep_chain_does_not_hit_recursion_limit():
    contributions = [Contribution(contribution_id="n0")]
    for i in range(1, 3000):
        contributions.append(Contribution(contribution_id=f"n{i}", parent_contribution_id=f"n{i - 1}"))

    report = reconstruct_chain(contributions, "n2999")
    assert report.root_id == "n0"
    assert len(report.entries) == 3000
    assert report.entries[-1].depth == 2999


def test_chain_summary(store, make_contribution):
    store.add(make_contribution("A", contributor="alice"))
    store.add(make_contribution("B", parent="A", contributor="bob"))
    store.add(make_contribution("C", parent="B", contributor="alice"))

    summary = store.get_chain_summary("C")
    assert summary.total == 3
    assert summary.max_depth == 2
    assert summary.contributors == ("alice", "bob")
    assert summary.contributor_count == 2

    empty = summarize_chain(())
    assert (empty.total, empty.max_depth, empty.contributor_count) == (0, 0, 0)


def test_get_depth_counts_resolvable_hops(store, make_contribution):
    store.add(make_contribution("A"))
    store.add(make_contribution("B", parent="A"))
    store.add(make_contribution("C", parent="B"))
    store.add(make_contribution("D", parent="ghost"))

    assert store.get_depth("A") == 0
    assert store.get_depth("C") == 2
    assert store.get_depth("D") == 0
    assert store.get_depth("nonexistent") is None


def test_get_depth_is_cycle_safe(make_contribution, storage, store):
    store.save_all([make_contribution("A", parent="B"), make_contribution("B", parent="A")])
    assert store.get_depth("A") == 1
