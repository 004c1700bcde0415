import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import Depends, FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse, Response
from sqlalchemy.engine import Engine

import config
from database import borrow, create_pool
from errors import IngestError, PayloadTooLarge
from models import init_schema, record_log, record_reading
from schemas import LogEntry, Reading, decode

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# LOGGING
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

logging.basicConfig(
    level=config.LOG_LEVEL,
    format=config.LOG_FORMAT
)
logger = logging.getLogger(__name__)

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# PIPELINE: corpo → payload → conexão → linha
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


async def read_body(request: Request, limit: int):
    """Lê o corpo sem passar do limite. Retorna bytes ou PayloadTooLarge."""
    declared = request.headers.get("content-length")
    if declared is not None and declared.isdigit() and int(declared) > limit:
        return PayloadTooLarge(f"Payload too large: {declared} bytes (limit {limit})")

    body = b""
    async for chunk in request.stream():
        body += chunk
        if len(body) > limit:
            return PayloadTooLarge(f"Payload too large: more than {limit} bytes (limit {limit})")
    return body


def persist(pool: Engine, payload, record):
    """Roda numa thread do servidor: pega conexão, grava, devolve a conexão."""
    with borrow(pool) as conn:
        if isinstance(conn, IngestError):
            return conn
        return record(conn, payload)


def error_reply(path: str, error: IngestError) -> JSONResponse:
    if error.status_code < 500:
        logger.warning(f"✗ {path} rejeitado ({error.status_code}): {error.message}")
    else:
        logger.error(f"✗ {path} falhou ({error.status_code}): {error.message}")
    return JSONResponse(error.to_dict(), status_code=error.status_code)


async def dispatch(request: Request, pool: Engine, shape: type, record) -> Response:
    path = request.url.path
    limit = request.app.state.max_body_bytes

    body = await read_body(request, limit)
    if isinstance(body, IngestError):
        return error_reply(path, body)

    payload = decode(body, shape, limit)
    if isinstance(payload, IngestError):
        return error_reply(path, payload)

    result = await run_in_threadpool(persist, pool, payload, record)
    if isinstance(result, IngestError):
        return error_reply(path, result)

    logger.info(f"inserted row: {payload}")
    return Response(status_code=200)


def get_pool(request: Request) -> Engine:
    return request.app.state.pool

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# FASTAPI
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


def create_app(pool: Engine = None, max_body_bytes: int = config.MAX_BODY_BYTES) -> FastAPI:
    """
    Monta a aplicação. O pool fica em `app.state.pool` e chega às rotas
    via dependência; as tabelas são criadas antes de aceitar requisições.
    """
    if pool is None:
        pool = create_pool()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("🚀 Iniciando servidor...")
        init_schema(app.state.pool)
        yield
        logger.info("🛑 Desligando servidor...")
        app.state.pool.dispose()

    app = FastAPI(title="Sensor Ingest", version="1.0", lifespan=lifespan)
    app.state.pool = pool
    app.state.max_body_bytes = max_body_bytes

    @app.post("/temperature")
    async def post_temperature(request: Request, pool: Engine = Depends(get_pool)):
        """Grava uma leitura de temperatura/umidade"""
        return await dispatch(request, pool, Reading, record_reading)

    @app.post("/log")
    async def post_log(request: Request, pool: Engine = Depends(get_pool)):
        """Grava uma mensagem de log de um sensor"""
        return await dispatch(request, pool, LogEntry, record_log)

    return app


def main():
    app = create_app()
    uvicorn.run(app, host=config.HOST, port=config.PORT)


if __name__ == "__main__":
    main()
