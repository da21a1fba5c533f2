"""Connectivity diagnostic — probe value, failure classification, exit status."""

import logging

from lahlah_server.config import PoolConfig
from lahlah_server.infrastructure.database import ConnectionPoolManager
from lahlah_server.infrastructure.diagnostic import (
    DiagnosticFailure,
    DiagnosticSuccess,
    check_connection,
    exit_status,
)


async def test_reachable_database_reports_two(sqlite_engine):
    pool = ConnectionPoolManager(PoolConfig(), engine=sqlite_engine)
    result = await check_connection(pool)
    assert result == DiagnosticSuccess(2)
    assert exit_status(result) == 0


async def test_refused_connection_maps_to_refused_hint(
    make_failing_engine, refused_error, caplog,
):
    pool = ConnectionPoolManager(PoolConfig(), engine=make_failing_engine(refused_error))
    with caplog.at_level(logging.ERROR):
        result = await check_connection(pool)

    assert isinstance(result, DiagnosticFailure)
    assert result.code == "ECONNREFUSED"
    assert "offline" in result.hint
    assert exit_status(result) == 1
    assert "Code: ECONNREFUSED" in caplog.text


async def test_access_denied_maps_to_credentials_hint(make_failing_engine, access_denied_error):
    pool = ConnectionPoolManager(PoolConfig(), engine=make_failing_engine(access_denied_error))
    result = await check_connection(pool)
    assert result.code == "ER_ACCESS_DENIED_ERROR"
    assert "DB_PASSWORD" in result.hint
    assert result.driver_code == 1045


async def test_unknown_database_maps_to_schema_hint(make_failing_engine, bad_database_error):
    pool = ConnectionPoolManager(PoolConfig(), engine=make_failing_engine(bad_database_error))
    result = await check_connection(pool)
    assert result.code == "ER_BAD_DB_ERROR"
    assert exit_status(result) == 1


async def test_probe_runs_once(make_failing_engine, refused_error):
    engine = make_failing_engine(refused_error)
    calls = []
    original_connect = engine.connect

    def counting_connect():
        calls.append(1)
        return original_connect()

    engine.connect = counting_connect
    await check_connection(ConnectionPoolManager(PoolConfig(), engine=engine))
    assert len(calls) == 1


async def test_unreachable_host_with_real_driver():
    pool = ConnectionPoolManager(PoolConfig(host="127.0.0.1", port=1, connection_limit=1))
    try:
        result = await check_connection(pool)
    finally:
        await pool.dispose()
    assert isinstance(result, DiagnosticFailure)
    assert result.code == "ECONNREFUSED"
