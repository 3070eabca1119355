from __future__ import annotations

import contextlib
import io
import json
import os
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

import cli


_RUNNER = "version_checker.shell.run_command_and_get_output"


def _fake_runner(cmd) -> str:
    return {
        "docker": "Docker version 24.0.7, build afdd53b",
        "terraform": "Terraform v1.0",
        "packer": "Packer v1.9.4",
    }[cmd.command]


class CliTests(unittest.TestCase):
    def setUp(self) -> None:
        self._patches = [
            patch("cli.load_dotenv"),
            patch("cli.setup_logging"),
            patch(_RUNNER, side_effect=_fake_runner),
            patch.dict(os.environ, {"MIN_BINARY_VERSIONS": "", "VERSION_CHECK_WORKDIR": "."}),
        ]
        for p in self._patches:
            p.start()

    def tearDown(self) -> None:
        for p in reversed(self._patches):
            p.stop()

    def _run(self, *argv: str) -> tuple[int, str, str]:
        out, err = io.StringIO(), io.StringIO()
        with contextlib.redirect_stdout(out), contextlib.redirect_stderr(err):
            code = cli.main(list(argv))
        return code, out.getvalue(), err.getvalue()

    def test_check_passes(self) -> None:
        code, out, _ = self._run("check", "docker", "20.10")
        self.assertEqual(code, 0)
        report = json.loads(out)
        self.assertEqual(report["status"], "passed")
        self.assertEqual(report["actual_version"], "24.0.7")
        self.assertIsNone(report["error"])

    def test_check_fails_for_old_binary(self) -> None:
        code, out, _ = self._run("check", "terraform", "1.0.10", "--workdir", "/tmp")
        self.assertEqual(code, 1)
        report = json.loads(out)
        self.assertEqual(report["status"], "failed")
        self.assertEqual(report["working_dir"], "/tmp")
        self.assertEqual(report["error"]["code"], "version_too_low")

    def test_check_rejects_invalid_minimum_version(self) -> None:
        code, out, err = self._run("check", "docker", "abc")
        self.assertEqual(code, 2)
        self.assertEqual(out, "")
        self.assertIn("invalid version format found {abc}", err)

    def test_batch_from_manifest(self) -> None:
        manifest = {
            "checks": [
                {"binary": "docker", "minimum_version": "20.10"},
                {"binary": "packer", "minimum_version": "1.10", "working_dir": "."},
            ]
        }
        with tempfile.TemporaryDirectory() as td:
            path = Path(td) / "versions.json"
            path.write_text(json.dumps(manifest), encoding="utf-8")
            code, out, _ = self._run("batch", str(path))
        self.assertEqual(code, 1)
        reports = json.loads(out)
        self.assertEqual([r["status"] for r in reports], ["passed", "failed"])

    def test_batch_from_env(self) -> None:
        with patch.dict(os.environ, {"MIN_BINARY_VERSIONS": "docker=24,packer=1.9.4"}):
            code, out, _ = self._run("batch")
        self.assertEqual(code, 0)
        reports = json.loads(out)
        self.assertEqual([r["binary"] for r in reports], ["docker", "packer"])

    def test_batch_rejects_unknown_binary_in_manifest(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            path = Path(td) / "versions.json"
            path.write_text(json.dumps({"checks": [{"binary": "kubectl", "minimum_version": "1.0"}]}), encoding="utf-8")
            code, _, err = self._run("batch", str(path))
        self.assertEqual(code, 2)
        self.assertIn("invalid manifest", err)

    def test_batch_rejects_manifest_that_is_not_utf8(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            path = Path(td) / "versions.json"
            path.write_bytes(b'{"checks": [\xff]}')
            code, out, err = self._run("batch", str(path))
        self.assertEqual(code, 2)
        self.assertEqual(out, "")
        self.assertIn("ERROR: invalid manifest", err)

    def test_batch_from_env_accepts_any_binary_case(self) -> None:
        with patch.dict(os.environ, {"MIN_BINARY_VERSIONS": "Docker=20,PACKER=1.9"}):
            code, out, _ = self._run("batch")
        self.assertEqual(code, 0)
        reports = json.loads(out)
        self.assertEqual([r["binary"] for r in reports], ["docker", "packer"])

    def test_batch_without_checks(self) -> None:
        code, _, err = self._run("batch")
        self.assertEqual(code, 2)
        self.assertIn("no checks given", err)


if __name__ == "__main__":
    unittest.main()
