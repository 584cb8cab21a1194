import threading
import unittest

from grayscale_pipeline.errors import StageError
from grayscale_pipeline.pipeline.stage import Stage
from grayscale_pipeline.pipeline.staged_pipeline import StagedPipeline


class TestStagedPipeline(unittest.TestCase):
    def test_runs_stages_in_sequence(self):
        pipeline = StagedPipeline([
            Stage("add", lambda x: x + 1),
            Stage("square", lambda x: x * x),
            Stage("label", lambda x: f"v{x}"),
        ])
        self.assertEqual(["v1", "v4", "v9"], list(pipeline.run([0, 1, 2])))
        self.assertFalse(pipeline.cancelled)
        self.assertTrue(all(not s.is_alive() for s in pipeline.stages))

    def test_empty_input_terminates(self):
        pipeline = StagedPipeline([Stage("a", lambda x: x), Stage("b", lambda x: x)])
        self.assertEqual([], list(pipeline.run([])))

    def test_stage_lookup(self):
        a = Stage("a", lambda x: x)
        pipeline = StagedPipeline([a])
        self.assertIs(a, pipeline.stage("a"))
        with self.assertRaises(KeyError):
            pipeline.stage("missing")

    def test_validation(self):
        with self.assertRaises(ValueError):
            StagedPipeline([])
        with self.assertRaises(ValueError):
            StagedPipeline([Stage("a", lambda x: x), Stage("a", lambda x: x)])

    def test_fatal_stage_error_is_raised(self):
        def explode(x):
            if x == 3:
                raise ZeroDivisionError("bad math")
            return x

        pipeline = StagedPipeline([
            Stage("load", lambda x: x),
            Stage("explode", explode),
            Stage("save", lambda x: x),
        ])
        with self.assertRaises(StageError) as ctx:
            list(pipeline.run(range(10)))
        self.assertEqual("explode", ctx.exception.stage_name)
        self.assertIsInstance(ctx.exception.__cause__, ZeroDivisionError)
        self.assertTrue(all(not s.is_alive() for s in pipeline.stages))

    def test_consumer_stopping_early_shuts_down_stages(self):
        pipeline = StagedPipeline([Stage("a", lambda x: x), Stage("b", lambda x: x)])
        results = pipeline.run(range(1000))
        self.assertEqual(0, next(results))
        results.close()
        self.assertTrue(pipeline.cancel_event.is_set())
        self.assertTrue(all(not s.is_alive() for s in pipeline.stages))

    def test_external_cancellation(self):
        cancel = threading.Event()
        cancel.set()
        pipeline = StagedPipeline([Stage("a", lambda x: x)], cancel_event=cancel)
        self.assertEqual([], list(pipeline.run(range(10))))
        self.assertTrue(pipeline.cancelled)

    def test_stages_overlap_in_time(self):
        # item 1 can only leave the first stage once the second stage is
        # already working on item 0
        second_busy = threading.Event()
        overlapped = []

        def first(x):
            if x == 1:
                overlapped.append(second_busy.wait(5))
            return x

        def second(x):
            if x == 0:
                second_busy.set()
            return x

        pipeline = StagedPipeline([Stage("first", first), Stage("second", second)])
        self.assertEqual([0, 1, 2], list(pipeline.run([0, 1, 2])))
        self.assertEqual([True], overlapped)


if __name__ == "__main__":
    unittest.main()
