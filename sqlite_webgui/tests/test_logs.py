import json
import logging

from sqlite_webgui.logs import OPLOG_LOGGER, LogContext


def test_log_context_writes_json_record(caplog):
    log = LogContext("INSERT_ROW")
    log.set_entity("table", "users")
    log.set_payload({"name": "Carol"})
    with caplog.at_level(logging.INFO, logger=OPLOG_LOGGER):
        rec = log.write("OK")
    assert rec["action"] == "INSERT_ROW"
    assert rec["entity_id"] == "users"
    assert rec["result"] == "OK" and rec["err_msg"] is None
    assert rec["latency_ms"] >= 0
    logged = json.loads(caplog.records[-1].getMessage())
    assert logged["request_id"] == log.request_id
    assert logged["payload"] == {"name": "Carol"}


def test_log_context_error_is_warning(caplog):
    with caplog.at_level(logging.INFO, logger=OPLOG_LOGGER):
        LogContext("EXECUTE_QUERY").write("ERROR", "no such table: ghosts")
    assert caplog.records[-1].levelno == logging.WARNING
    assert "no such table" in caplog.records[-1].getMessage()


def test_write_route_logs_operation(rw_client, caplog):
    with caplog.at_level(logging.INFO, logger=OPLOG_LOGGER):
        rw_client.delete("/api/tables/users/rows?pk=id&pk_value=1")
    actions = [json.loads(r.getMessage())["action"] for r in caplog.records if r.name == OPLOG_LOGGER]
    assert "DELETE_ROW" in actions
