import json
import logging
import time
import uuid
from fastapi import Request

logger = logging.getLogger("api")
logger.setLevel(logging.INFO)
handler = logging.StreamHandler()
handler.setFormatter(logging.Formatter("%(message)s"))
logger.addHandler(handler)

async def request_id_middleware(request: Request, call_next):
	request.state.request_id = request.headers.get("X-Request-Id") or str(uuid.uuid4())
	started = time.perf_counter()
	response = await call_next(request)
	response.headers["X-Request-Id"] = request.state.request_id
	log_event(
		"request_completed",
		method=request.method,
		path=request.url.path,
		status=response.status_code,
		duration_ms=round((time.perf_counter() - started) * 1000, 1),
		request_id=request.state.request_id,
	)
	return response

def log_event(event: str, **kwargs):
	payload = {"event": event, **kwargs}
	logger.info(json.dumps(payload, ensure_ascii=False, default=str))
