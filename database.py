# database.py
import logging
from contextlib import contextmanager

from sqlalchemy import MetaData, create_engine, event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import ArgumentError, DBAPIError, TimeoutError
from sqlalchemy.pool import QueuePool

import config
from errors import PoolError

logger = logging.getLogger(__name__)

metadata = MetaData()


def create_pool(url: str = config.DATABASE_URL,
                size: int = config.POOL_SIZE,
                timeout: float = config.POOL_TIMEOUT) -> Engine:
    """
    Cria o engine com um pool limitado a `size` conexões (sem overflow).
    Quem pede conexão com o pool cheio espera até `timeout` segundos.
    """
    try:
        connect_args = {}
        is_sqlite = make_url(url).get_backend_name() == "sqlite"
        if is_sqlite:
            connect_args["check_same_thread"] = False  # conexões circulam entre threads do servidor
        engine = create_engine(
            url,
            poolclass=QueuePool,
            pool_size=size,
            max_overflow=0,
            pool_timeout=timeout,
            connect_args=connect_args,
        )
    except ArgumentError as e:
        raise PoolError(PoolError.INIT, str(e)) from e

    if is_sqlite:
        _sqlite_transactions(engine)

    logger.info(f"Pool criado para {engine.url!r} (tamanho={size}, timeout={timeout}s)")
    return engine


def _sqlite_transactions(engine: Engine):
    """
    O pysqlite não emite BEGIN antes de DDL; assim o BEGIN fica a cargo do
    SQLAlchemy e `conn.begin()` cobre todos os comandos da transação.
    """

    @event.listens_for(engine, "connect")
    def _disable_driver_transactions(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _emit_begin(conn):
        conn.exec_driver_sql("BEGIN")


@contextmanager
def borrow(pool: Engine):
    """
    Empresta uma conexão do pool pelo escopo do `with`.

    Produz a conexão, ou um PoolError quando não foi possível obtê-la.
    A conexão volta ao pool em qualquer saída do bloco.
    """
    try:
        conn = pool.connect()
    except TimeoutError as e:
        yield PoolError(PoolError.EXHAUSTED, str(e))
        return
    except DBAPIError as e:
        yield PoolError(PoolError.INIT, str(e.orig))
        return

    try:
        yield conn
    finally:
        conn.close()
