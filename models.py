# models.py
import logging

from sqlalchemy import REAL, Column, Table, Text, func, insert
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.schema import CreateTable

from database import borrow, metadata
from errors import IngestError, StorageError
from schemas import LogEntry, Reading

logger = logging.getLogger(__name__)

# Tabelas sem chave primária: só acumulam linhas, nunca são alteradas
temperature = Table(
    "temperature",
    metadata,
    Column("sensor", Text),
    Column("temperature", REAL),
    Column("humidity", REAL),
    Column("time", Text),
)

logs = Table(
    "logs",
    metadata,
    Column("sensor", Text),
    Column("message", Text),
    Column("time", Text),
)


def init_schema(pool: Engine):
    """Cria as tabelas se não existirem, numa única transação. Falha aqui é fatal."""
    with borrow(pool) as conn:
        if isinstance(conn, IngestError):
            raise conn
        try:
            with conn.begin():
                for table in (temperature, logs):
                    conn.execute(CreateTable(table, if_not_exists=True))
        except SQLAlchemyError as e:
            raise StorageError(str(getattr(e, "orig", None) or e)) from e
    logger.info("✓ Tabelas prontas")


def _execute(conn: Connection, stmt):
    try:
        result = conn.execute(stmt)
        conn.commit()
    except SQLAlchemyError as e:
        return StorageError(str(getattr(e, "orig", None) or e))
    return result.rowcount


def record_reading(conn: Connection, reading: Reading):
    """Insere uma leitura; o horário vem do relógio do banco."""
    stmt = insert(temperature).values(
        sensor=reading.sensor,
        temperature=reading.temp,
        humidity=reading.humidity,
        time=func.datetime("now"),
    )
    return _execute(conn, stmt)


def record_log(conn: Connection, log: LogEntry):
    stmt = insert(logs).values(
        sensor=log.sensor,
        message=log.message,
        time=func.datetime("now"),
    )
    return _execute(conn, stmt)
