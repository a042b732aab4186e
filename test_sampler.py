import random
import tempfile
import unittest
from pathlib import Path
from unittest import mock

import sampler
from errors import SamplingExhausted
from sampler import PLACEHOLDER, PracticeText, RetryPolicy, discover, is_candidate, sample, sample_initial


class TestDiscover(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.root = Path(self.tmp.name)

    def tearDown(self):
        self.tmp.cleanup()

    def touch(self, relative, text="x = 1\n"):
        path = self.root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text)
        return path

    def test_is_candidate(self):
        self.assertTrue(is_candidate("main.rs", ".rs"))
        self.assertFalse(is_candidate(".main.rs", ".rs"))
        self.assertFalse(is_candidate("main.py", ".rs"))

    def test_keeps_visible_files_with_extension(self):
        keep = self.touch("a.py")
        nested = self.touch("pkg/b.py")
        self.touch(".hidden.py")
        self.touch("notes.txt")
        self.assertEqual(set(discover(self.root, ".py")), {keep, nested})

    def test_walk_stops_after_eight_levels(self):
        deepest = self.touch("/".join("d%d" % i for i in range(7)) + "/deep.py")
        self.touch("/".join("d%d" % i for i in range(8)) + "/too_deep.py")
        self.assertEqual(discover(self.root, ".py"), (deepest,))

    def test_missing_root_gives_empty_set(self):
        self.assertEqual(discover(self.root / "nope", ".py"), ())

    def test_result_is_immutable(self):
        self.touch("a.py")
        self.assertIsInstance(discover(self.root, ".py"), tuple)


class TestSample(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.root = Path(self.tmp.name)

    def tearDown(self):
        self.tmp.cleanup()

    def test_reads_a_candidate(self):
        path = self.root / "a.py"
        path.write_text("print('hi')\n")
        self.assertEqual(sample((path,), random.Random(1)), PracticeText("print('hi')\n", path))

    def test_retries_past_unreadable_candidates(self):
        good = self.root / "good.py"
        good.write_text("ok")
        bad = self.root / "bad.py"
        rng = mock.Mock()
        rng.choice.side_effect = [bad, bad, good]
        self.assertEqual(sample((bad, good), rng).path, good)
        self.assertEqual(rng.choice.call_count, 3)

    def test_empty_and_undecodable_files_are_retried(self):
        empty = self.root / "empty.py"
        empty.write_text("")
        binary = self.root / "binary.py"
        binary.write_bytes(b"\xff\xfe\x00")
        with self.assertRaises(SamplingExhausted):
            sample((empty, binary), random.Random(0), RetryPolicy(10))

    def test_gives_up_after_exactly_one_hundred_attempts(self):
        candidates = (self.root / "a.py", self.root / "b.py")
        with mock.patch.object(sampler, "read_candidate", side_effect=OSError("denied")) as read:
            with self.assertRaises(SamplingExhausted) as ctx:
                sample(candidates, random.Random(0))
        self.assertEqual(read.call_count, 100)
        self.assertEqual(ctx.exception.attempts, 100)

    def test_empty_candidate_set_fails_without_attempts(self):
        with self.assertRaises(SamplingExhausted) as ctx:
            sample(())
        self.assertEqual(ctx.exception.attempts, 0)
        self.assertIn("No candidate files found", str(ctx.exception))

    def test_exhaustion_reports_the_root(self):
        with self.assertRaises(SamplingExhausted) as ctx:
            sample((self.root / "gone.py",), random.Random(0), RetryPolicy(2), root=self.root)
        self.assertEqual(ctx.exception.root, str(self.root))
        self.assertEqual(str(ctx.exception), f"No readable candidate found under {self.root} after 2 attempts")

    def test_initial_sample_falls_back_to_placeholder(self):
        with self.assertLogs("sampler", level="WARNING"):
            practice = sample_initial((self.root / "missing.py",), random.Random(0), RetryPolicy(3))
        self.assertIs(practice, PLACEHOLDER)
        self.assertEqual(practice.text, "Please press TAB!")
        self.assertIsNone(practice.path)


if __name__ == "__main__":
    unittest.main()
