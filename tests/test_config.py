import os
import unittest
from unittest.mock import patch

from grayscale_pipeline.config import PipelineConfig

CONFIG_KEYS = [
    "INPUT_PATHS", "INPUT_DIR", "INPUT_DIR_SEGMENT", "OUTPUT_DIR_SEGMENT",
    "MAX_DIMENSION", "PIPELINE_MODE", "QUEUE_CAPACITY", "JPEG_QUALITY",
    "CREATE_OUTPUT_DIRS", "VALID_IMAGE_EXTENSIONS", "LOG_LEVEL",
]


def clean_env(**values):
    env = {k: v for k, v in os.environ.items() if k not in CONFIG_KEYS}
    env.update(values)
    return patch.dict(os.environ, env, clear=True)


class TestPipelineConfig(unittest.TestCase):
    def test_defaults(self):
        with clean_env():
            config = PipelineConfig.from_env()
        self.assertEqual([], config.input_paths)
        self.assertIsNone(config.input_dir)
        self.assertEqual("images", config.input_segment)
        self.assertEqual("images/output", config.output_segment)
        self.assertEqual(500, config.max_dimension)
        self.assertEqual("concurrent", config.mode)
        self.assertEqual(1, config.queue_capacity)
        self.assertTrue(config.create_output_dirs)
        self.assertEqual([".jpg", ".jpeg", ".png"], config.valid_extensions)

    def test_values_from_environment(self):
        with clean_env(
            INPUT_PATHS="images/a.jpeg, images/b.jpeg,,",
            MAX_DIMENSION="256",
            PIPELINE_MODE="sequential",
            QUEUE_CAPACITY="4",
            CREATE_OUTPUT_DIRS="no",
            VALID_IMAGE_EXTENSIONS=".JPEG,.Png",
            LOG_LEVEL="debug",
        ):
            config = PipelineConfig.from_env()
        self.assertEqual(["images/a.jpeg", "images/b.jpeg"], config.input_paths)
        self.assertEqual(256, config.max_dimension)
        self.assertEqual("sequential", config.mode)
        self.assertEqual(4, config.queue_capacity)
        self.assertFalse(config.create_output_dirs)
        self.assertEqual([".jpeg", ".png"], config.valid_extensions)
        self.assertEqual("DEBUG", config.log_level)

    def test_invalid_integer(self):
        with clean_env(MAX_DIMENSION="big"):
            with self.assertRaises(ValueError):
                PipelineConfig.from_env()

    def test_unbounded_queue_rejected(self):
        with clean_env(QUEUE_CAPACITY="0"):
            with self.assertRaises(ValueError):
                PipelineConfig.from_env()

    def test_unknown_log_level_rejected(self):
        for level in ("BASICCONFIG", "LOUD"):
            with clean_env(LOG_LEVEL=level):
                with self.assertRaises(ValueError):
                    PipelineConfig.from_env()

    def test_known_log_levels_accepted(self):
        for level in ("debug", "WARNING", "error"):
            with clean_env(LOG_LEVEL=level):
                self.assertEqual(level.upper(), PipelineConfig.from_env().log_level)

    def test_jpeg_quality_range(self):
        with self.assertRaises(ValueError):
            PipelineConfig(jpeg_quality=101)


if __name__ == "__main__":
    unittest.main()
