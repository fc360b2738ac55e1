"""
Simulador de latencia de red.

Cada operación del backend simulado espera un retardo artificial antes
de ejecutar su cuerpo síncrono. El retardo es el único punto de
suspensión: la mutación en memoria y la persistencia ocurren después,
sin ceder el control al event loop.
"""

import asyncio
import logging
from functools import wraps
from typing import Any, Awaitable, Callable, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class LatencySimulator:
    """Retardo artificial configurable (en milisegundos)."""

    def __init__(self, delay_ms: int = 100):
        if delay_ms < 0:
            raise ValueError("delay_ms must be >= 0")
        self.delay_ms = delay_ms

    async def wait(self) -> None:
        """Espera el retardo configurado (no suspende si es 0)."""
        if self.delay_ms > 0:
            await asyncio.sleep(self.delay_ms / 1000)


def simulated_latency(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
    """
    Decorador para métodos de servicio.

    Requiere que la instancia tenga un atributo `_latency`
    (LatencySimulator). El método decorado no debe contener
    otros `await` que suspendan.
    """

    @wraps(func)
    async def wrapper(self: Any, *args, **kwargs) -> T:
        await self._latency.wait()
        return await func(self, *args, **kwargs)

    return wrapper
