import logging
import sys
import unittest
from pathlib import Path
from unittest import mock

_REPO_ROOT = Path(__file__).resolve().parents[2]
_PYTHON_DIR = _REPO_ROOT / "python"
for _path in (_REPO_ROOT, _PYTHON_DIR):
    path_str = str(_path)
    if path_str not in sys.path:
        sys.path.insert(0, path_str)

import cmatrix
from cmatrix import InvalidArgumentError, Matrix
from cmatrix._internal.runtime import Runtime, default_runtime


class TestRuntimeSeed(unittest.TestCase):
    def test_override_wins(self):
        rt = Runtime(env_var="CMATRIX_TEST_SEED", clock=lambda: 5.0)
        rt.set_default_seed(11)
        with mock.patch.dict("os.environ", {"CMATRIX_TEST_SEED": "22"}):
            self.assertEqual(rt.default_seed(), 11)

    def test_environment_then_clock(self):
        rt = Runtime(env_var="CMATRIX_TEST_SEED", clock=lambda: 1234.9)
        with mock.patch.dict("os.environ", {"CMATRIX_TEST_SEED": "22"}):
            self.assertEqual(rt.default_seed(), 22)
        with mock.patch.dict("os.environ", {}, clear=True):
            self.assertEqual(rt.default_seed(), 1234)

    def test_clearing_override(self):
        rt = Runtime(env_var="CMATRIX_TEST_SEED", clock=lambda: 8.0)
        rt.set_default_seed(3)
        rt.set_default_seed(None)
        with mock.patch.dict("os.environ", {}, clear=True):
            self.assertEqual(rt.default_seed(), 8)

    def test_bad_environment_value(self):
        rt = Runtime(env_var="CMATRIX_TEST_SEED")
        with mock.patch.dict("os.environ", {"CMATRIX_TEST_SEED": "abc"}):
            with self.assertRaises(InvalidArgumentError):
                rt.default_seed()

    def test_env_var_name(self):
        self.assertEqual(default_runtime().env_var, "CMATRIX_SEED")

    def test_facade_updates_process_runtime(self):
        try:
            cmatrix.set_default_seed(77)
            self.assertEqual(default_runtime().default_seed(), 77)
        finally:
            cmatrix.set_default_seed(None)


class TestLogging(unittest.TestCase):
    def test_randint_logs_seed_at_debug(self):
        with self.assertLogs("cmatrix.factories", level=logging.DEBUG) as logs:
            cmatrix.randint(1, 1, 0, 1, seed=5)
        self.assertTrue(any("seed=5" in line for line in logs.output))

    def test_power_logs_at_debug(self):
        with self.assertLogs("cmatrix.ops", level=logging.DEBUG) as logs:
            Matrix([[1, 1], [0, 1]]) ** 3
        self.assertTrue(any("power" in line for line in logs.output))


class TestVersion(unittest.TestCase):
    def test_version_is_a_string(self):
        self.assertIsInstance(cmatrix.__version__, str)


if __name__ == "__main__":
    unittest.main()
