import unittest
from datetime import datetime, timedelta

from virtual_drive.errors import EmptyError
from virtual_drive.recycle_bin import RecycleBin


class FakeClock:
    def __init__(self, start: datetime):
        self.time = start

    def __call__(self) -> datetime:
        return self.time

    def advance(self, **kwargs) -> None:
        self.time += timedelta(**kwargs)


class RecycleBinTest(unittest.TestCase):

    def setUp(self):
        self.clock = FakeClock(datetime(2026, 1, 1, 12, 0, 0))
        self.bin = RecycleBin(ttl_sec=7 * 24 * 60 * 60, clock=self.clock)

    def test_lifo(self):
        self.bin.push("a.txt", "a")
        self.bin.push("b.txt", "b")
        self.assertEqual(self.bin.peek_top()["name"], "b.txt")
        self.assertEqual(self.bin.pop()["content"], "b")
        self.assertEqual(self.bin.pop()["content"], "a")
        self.assertTrue(self.bin.is_empty())

    def test_empty(self):
        with self.assertRaises(EmptyError):
            self.bin.peek_top()
        with self.assertRaises(EmptyError):
            self.bin.pop()

    def test_push_sweeps_expired_from_anywhere(self):
        """
        Description
        The oldest entry sits at the bottom of the stack and has expired when a new file is pushed.

        Expected
        The expired entry is removed even though it is not on top; the others keep their order.
        :return:
        """
        self.bin.push("old.txt", "old")
        self.clock.advance(days=6)
        self.bin.push("mid.txt", "mid")
        self.bin.push("new.txt", "new")
        self.clock.advance(days=1, seconds=1)

        self.bin.push("latest.txt", "latest")

        self.assertEqual([entry["name"] for entry in self.bin.entries()],
                         ["latest.txt", "new.txt", "mid.txt"])

    def test_sweep_with_explicit_now_and_ttl(self):
        self.bin.push("a.txt", "a")
        self.clock.advance(hours=2)
        self.bin.push("b.txt", "b")

        expired = self.bin.sweep_expired(now=self.clock(), ttl_sec=60 * 60)

        self.assertEqual([entry["name"] for entry in expired], ["a.txt"])
        self.assertEqual(len(self.bin), 1)
        self.assertEqual(self.bin.peek_top()["name"], "b.txt")

    def test_entry_at_exactly_ttl_is_kept(self):
        """
        Description
        An entry whose age is exactly the TTL, then the same entry one second later.

        Expected
        Only entries older than the TTL expire, so it survives the first sweep and goes in the second.
        :return:
        """
        self.bin.push("a.txt", "a")
        self.clock.advance(days=7)
        self.assertEqual(self.bin.sweep_expired(), [])
        self.assertEqual(len(self.bin), 1)

        self.clock.advance(seconds=1)
        self.assertEqual([entry["name"] for entry in self.bin.sweep_expired()], ["a.txt"])
        self.assertTrue(self.bin.is_empty())

    def test_push_records_details(self):
        entry = self.bin.push("a.txt", "a", type="txt", owner="alice", priority=3, path="/root/docs")
        self.assertEqual(entry["deleted_at"], "2026-01-01T12:00:00")
        self.assertEqual((entry["type"], entry["owner"], entry["priority"], entry["path"]),
                         ("txt", "alice", 3, "/root/docs"))


if __name__ == '__main__':
    unittest.main()
