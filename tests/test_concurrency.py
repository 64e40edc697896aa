import unittest
import threading
import time
import sys
import os

# Ensure the package is in path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from assetbank.utils.concurrency import DaemonThreadPoolExecutor, gather

class TestDaemonThreadPoolExecutor(unittest.TestCase):
    def test_daemon_submit(self):
        """Verify that submitted tasks run in daemon threads."""
        def check_daemon():
            return threading.current_thread().daemon

        with DaemonThreadPoolExecutor(max_workers=1) as executor:
            future = executor.submit(check_daemon)
            is_daemon = future.result()
            self.assertTrue(is_daemon, "Worker thread should be a daemon thread")

    def test_daemon_map(self):
        """Verify that mapped tasks run in daemon threads."""
        def check_daemon_arg(x):
            return threading.current_thread().daemon

        with DaemonThreadPoolExecutor(max_workers=2) as executor:
            results = list(executor.map(check_daemon_arg, [1, 2, 3]))
            for is_daemon in results:
                self.assertTrue(is_daemon, "Mapped worker thread should be a daemon thread")

    def test_submit_after_shutdown(self):
        executor = DaemonThreadPoolExecutor(max_workers=1)
        executor.shutdown()
        with self.assertRaises(RuntimeError):
            executor.submit(lambda: None)

    def test_thread_names(self):
        with DaemonThreadPoolExecutor(max_workers=1, thread_name_prefix='Probe') as executor:
            name = executor.submit(lambda: threading.current_thread().name).result()
        self.assertTrue(name.startswith('Probe-'))


class TestGather(unittest.TestCase):
    def test_results_keep_input_order(self):
        def slow_square(x):
            time.sleep(0.01 * (5 - x))
            return x * x

        self.assertEqual(gather(slow_square, range(5)), [0, 1, 4, 9, 16])

    def test_empty_input(self):
        self.assertEqual(gather(lambda x: x, []), [])

    def test_exception_propagates(self):
        def fail_on_two(x):
            if x == 2:
                raise ValueError("boom")
            return x

        with self.assertRaises(ValueError):
            gather(fail_on_two, [1, 2, 3])

    def test_runs_concurrently(self):
        barrier = threading.Barrier(3, timeout=2)

        # deadlocks (and raises BrokenBarrierError) unless all three run at once
        self.assertEqual(gather(lambda x: barrier.wait() >= 0, [1, 2, 3]), [True, True, True])

if __name__ == '__main__':
    unittest.main()
