# errors.py


class IngestError(Exception):
    """Falha de uma etapa do pipeline (decodificação, pool ou gravação)."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self):
        return {"message": self.message}


class PayloadTooLarge(IngestError):
    status_code = 413


class MalformedBody(IngestError):
    status_code = 400


class PoolError(IngestError):
    """`kind` é "exhausted" (sem conexão livre) ou "init" (pool não abre)."""

    status_code = 503

    EXHAUSTED = "exhausted"
    INIT = "init"

    def __init__(self, kind: str, message: str):
        super().__init__(message)
        self.kind = kind


class StorageError(IngestError):
    status_code = 500
