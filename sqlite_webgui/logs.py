import json, logging, time, uuid, datetime as dt
from typing import Optional

OPLOG_LOGGER = "sqlite_webgui.oplog"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

oplog = logging.getLogger(OPLOG_LOGGER)


def configure_logging(level: str = "INFO"):
    logging.basicConfig(level=getattr(logging, str(level).upper(), logging.INFO), format=LOG_FORMAT)


class LogContext:
    """
    Operation log entry for one API action.

    The browsed database is never written to, so entries go to the
    ``sqlite_webgui.oplog`` logger as one JSON line each.
    """

    def __init__(self, action: str, user: str = "local"):
        self.action = action
        self.user = user
        self.request_id = str(uuid.uuid4())
        self.start = time.perf_counter()
        self.payload = None
        self.after = None
        self.entity_type = None
        self.entity_id = None

    def set_entity(self, etype: str, eid: str):
        self.entity_type = etype
        self.entity_id = eid

    def set_payload(self, obj): self.payload = obj
    def set_after(self, obj): self.after = obj

    def record(self, result: str = "OK", err: Optional[str] = None) -> dict:
        elapsed_ms = int((time.perf_counter() - self.start) * 1000)
        return {
            "ts": dt.datetime.now(dt.timezone.utc).isoformat(),
            "user": self.user,
            "action": self.action,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "request_id": self.request_id,
            "payload": self.payload,
            "after": self.after,
            "result": result,
            "err_msg": err,
            "latency_ms": elapsed_ms,
        }

    def write(self, result: str = "OK", err: Optional[str] = None) -> dict:
        rec = self.record(result, err)
        level = logging.INFO if result == "OK" else logging.WARNING
        oplog.log(level, json.dumps(rec, ensure_ascii=False, default=str))
        return rec
