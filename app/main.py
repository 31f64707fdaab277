import logging

from fastapi import FastAPI

from app.api.security import AuthError, auth_error_handler
from app.api.v1.appointments import router as appointments_router
from app.api.v1.queue import router as queue_router
from app.core.config import settings

class ContextFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        extras = []
        for key in ("entry_id", "appointment_id", "service_type", "status", "position", "client", "reason"):
            value = getattr(record, key, None)
            if value not in (None, ""):
                extras.append(f"{key}={value}")
        base = super().format(record)
        if extras:
            return f"{base} | " + " ".join(extras)
        return base


handler = logging.StreamHandler()
handler.setFormatter(ContextFormatter("%(levelname)s:%(name)s:%(message)s"))

root = logging.getLogger()
root.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
root.handlers.clear()
root.addHandler(handler)

app = FastAPI(title="Campus Service Desk Queue", version="1.0.0")
app.add_exception_handler(AuthError, auth_error_handler)

app.include_router(queue_router, prefix=settings.API_PREFIX, tags=["queue"])
app.include_router(appointments_router, prefix=settings.API_PREFIX, tags=["appointments"])


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
