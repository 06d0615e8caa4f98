from contribcast.invariants.validate import validate_collection


def test_clean_collection_is_ok(store, make_contribution):
    store.add(make_contribution("A"))
    store.add(make_contribution("B", parent="A"))

    report = store.validate_collection()
    assert report.ok
    assert report.warnings == ()


def test_duplicate_ids_reported_once(make_contribution):
    report = validate_collection(
        [make_contribution("A"), make_contribution("A"), make_contribution("A")]
    )
    assert not report.ok
    assert [v.rule for v in report.violations] == ["duplicate_id"]
    assert report.violations[0].contribution_id == "A"


def test_dangling_parent_is_a_warning_not_a_failure(make_contribution):
    report = validate_collection([make_contribution("A", parent="ghost")])
    assert report.ok
    assert [w.rule for w in report.warnings] == ["dangling_parent"]


def test_parent_cycle_reported_once_per_cycle(make_contribution):
    report = validate_collection(
        [
            make_contribution("B", parent="A"),
            make_contribution("A", parent="C"),
            make_contribution("C", parent="B"),
            make_contribution("D", parent="A"),
            make_contribution("S", parent="S"),
        ]
    )
    cycles = [v for v in report.violations if v.rule == "parent_cycle"]
    assert sorted(v.contribution_id for v in cycles) == ["A", "S"]
