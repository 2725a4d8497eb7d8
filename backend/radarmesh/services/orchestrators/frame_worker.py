"""
Worker en segundo plano: coordina descompresión, decodificación, resolución
de producto, generación de malla y empaquetado, y publica los mensajes en un
canal propio de cada frame.
"""
from __future__ import annotations

import logging
import queue
import threading
from collections import deque
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Deque, Iterator, List, Optional, Tuple, Union

from ...core.config import settings
from ...core.errors import CorruptFrame, DecodeError
from ...models import FailureMessage, ProgressMessage, ResultMessage, WorkerResult
from ..decompressor import decompress_frame
from ..frame_codec import decode_frame
from ..mesh_generator import generate_mesh
from ..product_resolver import ProductResolver
from ..result_packager import package_result

logger = logging.getLogger(__name__)

WorkerMessage = Union[ProgressMessage, ResultMessage, FailureMessage]


class FrameChannel:
    """
    Canal productor → consumidor de un frame.

    El progreso es fire-and-forget: si hay `max_progress` mensajes sin
    consumir, se descarta el más viejo para que el último porcentaje (100)
    siempre llegue. El mensaje terminal (resultado o fallo) se entrega
    siempre y cierra el canal.
    """

    def __init__(self, max_progress: Optional[int] = None):
        self.max_progress = max_progress or settings.PROGRESS_QUEUE_SIZE
        self._messages: Deque[WorkerMessage] = deque()
        self._cond = threading.Condition()
        self._closed = False
        self.dropped = 0

    @property
    def closed(self) -> bool:
        return self._closed

    def post_progress(self, percentage: int) -> None:
        with self._cond:
            if self._closed:
                return
            # antes del terminal, todo lo encolado es progreso
            if len(self._messages) >= self.max_progress:
                self._messages.popleft()
                self.dropped += 1
            self._messages.append(ProgressMessage(percentage_complete=percentage))
            self._cond.notify_all()

    def _post_terminal(self, message: WorkerMessage) -> None:
        with self._cond:
            if self._closed:
                raise RuntimeError("El canal ya recibió su mensaje terminal")
            self._closed = True
            self._messages.append(message)
            self._cond.notify_all()

    def post_result(self, message: ResultMessage) -> None:
        self._post_terminal(message)

    def post_failure(self, error: BaseException) -> None:
        self._post_terminal(FailureMessage(kind=type(error).__name__, detail=str(error)))

    def iter_messages(self, timeout: Optional[float] = None) -> Iterator[WorkerMessage]:
        """
        Itera los mensajes en orden hasta el terminal (inclusive).

        Raises:
            queue.Empty: si pasa `timeout` segundos sin mensajes.
        """
        while True:
            with self._cond:
                if not self._cond.wait_for(lambda: self._messages, timeout=timeout):
                    raise queue.Empty
                message = self._messages.popleft()
            yield message
            if not isinstance(message, ProgressMessage):
                return

    def drain(self) -> List[WorkerMessage]:
        """Mensajes disponibles ahora mismo, sin bloquear."""
        with self._cond:
            messages = list(self._messages)
            self._messages.clear()
        return messages


class FrameWorker:
    """
    Procesa frames en un thread dedicado, uno por vez.

    Args:
        resolver: ProductResolver con las tablas a usar (default: tablas globales).
        parallel: Genera radiales en paralelo (default: settings.PARALLEL_SWEEP).
        mode: Modo de mezcla de color (default: settings.COLOR_MIXING_MODE).
    """

    def __init__(
        self,
        resolver: Optional[ProductResolver] = None,
        parallel: Optional[bool] = None,
        mode: Optional[str] = None,
    ):
        self.resolver = resolver or ProductResolver()
        self.parallel = settings.PARALLEL_SWEEP if parallel is None else parallel
        self.mode = mode
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="radarmesh")

    def process_frame(self, buffer: bytes, channel: FrameChannel) -> WorkerResult:
        """
        Ejecuta el pipeline completo de forma síncrona.

        Raises:
            CorruptFrame, DecodeError: el frame se aborta sin progreso ni resultado.
        """
        try:
            raw = decompress_frame(buffer)
            frame = decode_frame(raw)
        except (CorruptFrame, DecodeError) as e:
            logger.error("Frame descartado (%s): %s", type(e).__name__, e, exc_info=True)
            channel.post_failure(e)
            raise

        try:
            product = self.resolver.resolve(frame)
            mesh = generate_mesh(
                frame.start_azimuth_angle,
                frame.gates,
                product,
                on_progress=channel.post_progress,
                parallel=self.parallel,
                mode=self.mode,
            )
            message = package_result(frame, mesh)
        except Exception as e:
            logger.error("Error generando la malla: %s", e, exc_info=True)
            channel.post_failure(e)
            raise

        channel.post_result(message)
        logger.info(
            "Frame procesado: producto=%r vértices=%d",
            product.product, mesh.vertex_count,
        )
        return message.result

    def submit(self, buffer: bytes) -> Tuple["Future[WorkerResult]", FrameChannel]:
        """Encola un frame; devuelve el future del resultado y su canal de mensajes."""
        channel = FrameChannel()
        future = self._executor.submit(self.process_frame, buffer, channel)
        return future, channel

    def close(self) -> None:
        self._executor.shutdown(wait=True)

    def __enter__(self) -> "FrameWorker":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
