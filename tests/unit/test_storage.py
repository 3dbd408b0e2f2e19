# tests/unit/test_storage.py
"""Tests for redis-server boot with the process mocked."""

import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from faktory_cli import storage
from faktory_cli.errors import ConstructionError


def _proc(returncode=None) -> MagicMock:
    proc = MagicMock(spec=subprocess.Popen)
    proc.pid = 4242
    proc.returncode = returncode
    proc.poll.return_value = returncode
    return proc


class TestBootRedis:
    def test_missing_binary(self, tmp_path: Path):
        with patch("faktory_cli.storage.shutil.which", return_value=None):
            with pytest.raises(ConstructionError) as exc_info:
                storage.boot_redis(str(tmp_path), str(tmp_path / "redis.sock"))
        assert exc_info.value.stopper is None

    def test_spawn_failure_raises_construction_error(self, tmp_path: Path):
        with patch("faktory_cli.storage.shutil.which", return_value="/usr/bin/redis-server"), \
                patch("faktory_cli.storage.subprocess.Popen", side_effect=PermissionError("EACCES")):
            with pytest.raises(ConstructionError, match="EACCES") as exc_info:
                storage.boot_redis(str(tmp_path), str(tmp_path / "redis.sock"))
        assert exc_info.value.stopper is None

    def test_stale_socket_removal_failure(self, tmp_path: Path):
        sock = tmp_path / "redis.sock"
        sock.touch()

        with patch("faktory_cli.storage.shutil.which", return_value="/usr/bin/redis-server"), \
                patch("faktory_cli.storage.os.remove", side_effect=PermissionError("EPERM")), \
                patch("faktory_cli.storage.subprocess.Popen") as popen:
            with pytest.raises(ConstructionError, match="stale socket"):
                storage.boot_redis(str(tmp_path), str(sock))
        popen.assert_not_called()

    def test_boot_waits_for_socket(self, tmp_path: Path):
        db = tmp_path / "db"
        sock = db / "redis.sock"
        proc = _proc()

        def fake_popen(args, **kwargs):
            sock.touch()
            return proc

        with patch("faktory_cli.storage.shutil.which", return_value="/usr/bin/redis-server"), \
                patch("faktory_cli.storage.subprocess.Popen", side_effect=fake_popen) as popen:
            stopper = storage.boot_redis(str(db), str(sock))

        assert db.is_dir()
        args = popen.call_args.args[0]
        assert args[0] == "/usr/bin/redis-server"
        assert str(sock) in args

        stopper()
        proc.terminate.assert_called_once()

    def test_process_exit_carries_stopper(self, tmp_path: Path):
        proc = _proc(returncode=1)

        with patch("faktory_cli.storage.shutil.which", return_value="/usr/bin/redis-server"), \
                patch("faktory_cli.storage.subprocess.Popen", return_value=proc):
            with pytest.raises(ConstructionError) as exc_info:
                storage.boot_redis(str(tmp_path), str(tmp_path / "redis.sock"))

        assert exc_info.value.stopper is not None
        # already exited, nothing to terminate
        exc_info.value.stopper()
        proc.terminate.assert_not_called()

    def test_stopper_kills_after_timeout(self):
        proc = _proc()
        proc.wait.side_effect = [subprocess.TimeoutExpired("redis-server", 5), 0]

        storage._make_stopper(proc)()

        proc.terminate.assert_called_once()
        proc.kill.assert_called_once()
