# schemas.py
from pydantic import BaseModel, ConfigDict, ValidationError

import config
from errors import MalformedBody, PayloadTooLarge


class Payload(BaseModel):
    # sem coerção: "21.5" não vira float, 12 não vira str
    model_config = ConfigDict(strict=True, allow_inf_nan=False, frozen=True)


class Reading(Payload):
    temp: float
    humidity: float
    sensor: str

    def __str__(self):
        return f"sensor: {self.sensor} humidity: {self.humidity} temperature: {self.temp}"


class LogEntry(Payload):
    message: str
    sensor: str

    def __str__(self):
        return f"sensor: {self.sensor} message: {self.message}"


def _describe(error: ValidationError) -> str:
    parts = []
    for err in error.errors():
        loc = ".".join(str(p) for p in err["loc"])
        parts.append(f"{loc}: {err['msg']}" if loc else err["msg"])
    return "; ".join(parts)


def decode(body: bytes, shape: type, limit: int = config.MAX_BODY_BYTES):
    """
    Valida o corpo da requisição contra `shape` (Reading ou LogEntry).

    Retorna o payload tipado, ou PayloadTooLarge / MalformedBody.
    """
    if len(body) > limit:
        return PayloadTooLarge(f"Payload too large: {len(body)} bytes (limit {limit})")

    try:
        return shape.model_validate_json(body)
    except ValidationError as e:
        return MalformedBody(f"Request body deserialize error: {_describe(e)}")
