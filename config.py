# config.py
import os

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# BANCO DE DADOS
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

DATABASE_URL = os.getenv("INGEST_DATABASE_URL", "sqlite:///./temperature.db")
POOL_SIZE = int(os.getenv("INGEST_POOL_SIZE", "10"))
POOL_TIMEOUT = float(os.getenv("INGEST_POOL_TIMEOUT", "5"))  # segundos

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# HTTP
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

MAX_BODY_BYTES = int(os.getenv("INGEST_MAX_BODY_BYTES", str(1024 * 16)))
HOST = os.getenv("INGEST_HOST", "127.0.0.1")
PORT = int(os.getenv("INGEST_PORT", "3030"))

LOG_LEVEL = os.getenv("INGEST_LOG_LEVEL", "INFO")
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
