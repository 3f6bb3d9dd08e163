from xdb.sessions import SessionRegistry
from xdb.streaming.results import ResultCode
from xdb.streaming.session import SessionPhase

SQL = "SELECT g, cnt, n, sum, rel_ci FROM online_agg"
ROWS = [("a", 1, 10, 100, "0.2"), ("b", 2, 20, 200, "0.1")]


def test_polls_for_one_id_share_a_session(make_factory, group_columns):
    # Arrange
    factory = make_factory(group_columns, ROWS)
    registry = SessionRegistry(factory)

    # Act
    first = registry.poll("p1", SQL)
    second = registry.poll("p1", SQL)

    # Assert
    assert first.code is ResultCode.INTERMEDIATE
    assert second.text.count("\n") == 3
    assert len(factory.cursors) == 1
    assert "p1" in registry


def test_finished_session_is_dropped_and_rerun_starts_fresh(make_factory, group_columns):
    # Arrange
    factory = make_factory(group_columns, ROWS)
    registry = SessionRegistry(factory)
    for _ in range(3):
        last = registry.poll("p1", SQL)

    # Act
    rerun = registry.poll("p1", SQL)

    # Assert
    assert last.code is ResultCode.FINAL
    assert rerun.code is ResultCode.INTERMEDIATE
    assert rerun.text.count("\n") == 2
    assert len(factory.cursors) == 2


def test_new_statement_closes_previous_execution(make_factory, group_columns):
    # Arrange
    factory = make_factory(group_columns, ROWS)
    registry = SessionRegistry(factory)
    registry.poll("p1", SQL)

    # Act
    result = registry.poll("p1", SQL + " WHERE g = 'a'")

    # Assert
    assert result.code is ResultCode.INTERMEDIATE
    assert factory.cursors[0].close_count == 1
    assert factory.cursors[1].close_count == 0
    assert registry.get("p1").statement.endswith("WHERE g = 'a'")


def test_sessions_are_isolated_by_id(make_factory, group_columns):
    factory = make_factory(group_columns, ROWS)
    registry = SessionRegistry(factory)
    registry.poll("p1", SQL)
    registry.poll("p2", SQL)

    registry.cancel("p1")
    p1_final = registry.poll("p1", SQL)
    p2_next = registry.poll("p2", SQL)

    assert p1_final.code is ResultCode.FINAL
    assert p2_next.code is ResultCode.INTERMEDIATE
    assert "p1" not in registry
    assert registry.get("p2").phase is SessionPhase.STREAMING


def test_cancel_unknown_session_is_ignored(make_factory, group_columns):
    registry = SessionRegistry(make_factory(group_columns, ROWS))

    assert registry.cancel("missing") is False


def test_close_all_releases_every_cursor(make_factory, group_columns):
    # Arrange
    factory = make_factory(group_columns, ROWS)
    registry = SessionRegistry(factory)
    registry.poll("p1", SQL)
    registry.poll("p2", SQL)

    # Act
    registry.close_all()

    # Assert
    assert len(registry) == 0
    assert [c.close_count for c in factory.cursors] == [1, 1]


def test_close_single_session(make_factory, group_columns):
    factory = make_factory(group_columns, ROWS)
    registry = SessionRegistry(factory)
    registry.poll("p1", SQL)

    assert registry.close("p1") is True
    assert registry.close("p1") is False
    assert factory.cursors[0].commit_count == 1


def test_fetch_size_is_forwarded(make_factory, group_columns):
    factory = make_factory(group_columns, ROWS)
    registry = SessionRegistry(factory, fetch_size=5)

    registry.poll("p1", SQL)

    assert factory.fetch_sizes == [5]
