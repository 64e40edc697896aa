import logging
import queue
import threading
from concurrent.futures import Executor, Future
from typing import Any, Callable, Iterable, List, Optional

logger = logging.getLogger(__name__)


class DaemonThreadPoolExecutor(Executor):
    """
    A ThreadPoolExecutor-like class whose worker threads are daemons.

    Fan-out requests (attribute catalogs, user lookups) can be slow when the
    rate limiter is queueing; daemon workers never keep the interpreter alive
    waiting for them. Threads are started lazily up to `max_workers`.
    """

    def __init__(self, max_workers: Optional[int] = None, thread_name_prefix: str = 'AssetBankWorker'):
        self._max_workers = max_workers or 4
        self._thread_name_prefix = thread_name_prefix
        self._work_queue: "queue.Queue" = queue.Queue()
        self._threads: List[threading.Thread] = []
        self._idle_semaphore = threading.Semaphore(0)
        self._shutdown = False
        self._lock = threading.Lock()

    def submit(self, fn, *args, **kwargs) -> Future:
        with self._lock:
            if self._shutdown:
                raise RuntimeError('cannot schedule new futures after shutdown')

            future: Future = Future()
            self._work_queue.put((fn, args, kwargs, future))

            if self._idle_semaphore.acquire(timeout=0):
                return future

            if len(self._threads) < self._max_workers:
                t = threading.Thread(
                    target=self._worker_loop,
                    daemon=True,
                    name=f"{self._thread_name_prefix}-{len(self._threads)}"
                )
                t.start()
                self._threads.append(t)
            return future

    def _worker_loop(self):
        while True:
            item = self._work_queue.get()

            if item is None:
                break

            fn, args, kwargs, future = item
            if not future.set_running_or_notify_cancel():
                continue

            try:
                future.set_result(fn(*args, **kwargs))
            except BaseException as e:
                future.set_exception(e)
            finally:
                self._idle_semaphore.release()

    def shutdown(self, wait=True, *, cancel_futures=False):
        with self._lock:
            self._shutdown = True
            threads = list(self._threads)

        if cancel_futures:
            while True:
                try:
                    item = self._work_queue.get_nowait()
                except queue.Empty:
                    break
                if item is not None:
                    item[3].cancel()

        for _ in threads:
            self._work_queue.put(None)

        if wait:
            for t in threads:
                t.join()


def gather(fn: Callable[[Any], Any], items: Iterable[Any], max_workers: Optional[int] = None) -> List[Any]:
    """
    Run `fn` over `items` concurrently and return results in input order.

    The first exception raised by any call propagates once every call has
    finished.
    """
    items = list(items)
    if not items:
        return []

    with DaemonThreadPoolExecutor(max_workers=min(max_workers or len(items), len(items))) as executor:
        futures = [executor.submit(fn, item) for item in items]
        return [f.result() for f in futures]
