"""
Unit Tests - ReadWriteLock

Module: tests.test_rwlock
Date: 2026-10-12
Version: 0.1.0
"""

import threading
import time
import unittest

from chirpy.persistence.rwlock import ReadWriteLock


class TestReadWriteLock(unittest.TestCase):
    """Test suite for ReadWriteLock"""

    def setUp(self):
        """Setup before each test"""
        self.lock = ReadWriteLock()

    def _start(self, target) -> threading.Thread:
        thread = threading.Thread(target=target, daemon=True)
        thread.start()
        return thread

    def test_readers_share_the_lock(self):
        """Test a second reader enters while the first holds the lock"""
        entered = threading.Event()

        def reader():
            with self.lock.read_locked():
                entered.set()

        with self.lock.read_locked():
            thread = self._start(reader)
            self.assertTrue(entered.wait(timeout=2))
        thread.join(timeout=2)

    def test_writer_waits_for_reader(self):
        """Test a writer blocks until the reader releases"""
        acquired = threading.Event()

        def writer():
            with self.lock.write_locked():
                acquired.set()

        self.lock.acquire_read()
        thread = self._start(writer)
        time.sleep(0.1)
        self.assertFalse(acquired.is_set())

        self.lock.release_read()
        self.assertTrue(acquired.wait(timeout=2))
        thread.join(timeout=2)

    def test_reader_waits_for_writer(self):
        """Test a reader blocks while a writer holds the lock"""
        acquired = threading.Event()

        def reader():
            with self.lock.read_locked():
                acquired.set()

        self.lock.acquire_write()
        thread = self._start(reader)
        time.sleep(0.1)
        self.assertFalse(acquired.is_set())

        self.lock.release_write()
        self.assertTrue(acquired.wait(timeout=2))
        thread.join(timeout=2)

    def test_writers_are_exclusive(self):
        """Test two writers never hold the lock together"""
        active = []
        overlaps = []
        guard = threading.Lock()

        def writer():
            for _ in range(50):
                with self.lock.write_locked():
                    with guard:
                        active.append(1)
                        if len(active) > 1:
                            overlaps.append(1)
                    time.sleep(0.0005)
                    with guard:
                        active.pop()

        threads = [self._start(writer) for _ in range(4)]
        for thread in threads:
            thread.join(timeout=10)

        self.assertEqual(overlaps, [])

    def test_waiting_writer_blocks_new_readers(self):
        """Test new readers queue behind a waiting writer"""
        order = []

        def writer():
            with self.lock.write_locked():
                order.append("writer")

        def reader():
            with self.lock.read_locked():
                order.append("reader")

        self.lock.acquire_read()
        writer_thread = self._start(writer)
        time.sleep(0.1)
        reader_thread = self._start(reader)
        time.sleep(0.1)
        self.assertEqual(order, [])

        self.lock.release_read()
        writer_thread.join(timeout=2)
        reader_thread.join(timeout=2)
        self.assertEqual(order, ["writer", "reader"])


if __name__ == "__main__":
    unittest.main()
