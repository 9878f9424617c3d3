import os
import subprocess
import sys
import typing
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from unittest import mock

import pytest
from pytest_cases import parametrize_with_cases


@dataclass
class CliPathCase:
    _temp: Path
    files: list[str]
    args: list[str]
    expected_hammer: list[str]
    expected_skipped: list[str]

    @contextmanager
    def setup(self) -> typing.Any:
        for f in self.files:
            (self._temp / f).parent.mkdir(parents=True, exist_ok=True)
            (self._temp / f).touch()

        with (
            mock.patch.dict(
                "os.environ",
                {"SWIMAN__IMPORT__DIRECTORY": self._temp.as_posix()},
                clear=True,
            ),
            mock.patch("spacewalk_import_manager._cli_log.initialize"),
            mock.patch("subprocess.run") as subprocess_mock,
        ):
            subprocess_mock.return_value.returncode = 0
            yield subprocess_mock


class CliPathCases:
    def case_missing_repositories(self, tmp_path: Path) -> CliPathCase:
        return CliPathCase(
            tmp_path,
            ["organization.csv", "users.csv"],
            ["--entities", "organization,repository"],
            ["organization"],
            ["repository"],
        )

    def case_all_present(self, tmp_path: Path) -> CliPathCase:
        return CliPathCase(
            tmp_path,
            ["users.csv", "repositories.csv", "CHANNELS/export.csv"],
            ["--entities", "content-view"],
            ["organization", "repository", "content-view"],
            [],
        )

    def case_dry_run(self, tmp_path: Path) -> CliPathCase:
        return CliPathCase(
            tmp_path,
            ["users.csv", "repositories.csv"],
            ["--dry-run"],
            [],
            [
                "host-collection",
                "repository-enable",
                "content-view",
                "activation-key",
                "template-snippet",
            ],
        )


@parametrize_with_cases("tc", cases=CliPathCases)
def test_cli_paths(tc: CliPathCase, capsys: pytest.CaptureFixture[str]) -> None:
    import spacewalk_import_manager.cli as uut

    with tc.setup() as subprocess_mock:
        res = uut.main(tc.args)

    assert res == 0
    assert [c.args[0][2] for c in subprocess_mock.call_args_list] == tc.expected_hammer

    out = capsys.readouterr().out
    for e in tc.expected_skipped:
        assert f"Import {e:<20} using" in out
    assert out.count("...SKIPPING, no file") == len(tc.expected_skipped)


def test_cli_importer_failure_stops(
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    import spacewalk_import_manager.cli as uut

    (tmp_path / "users.csv").touch()
    with (
        mock.patch.dict("os.environ", {}, clear=True),
        mock.patch("spacewalk_import_manager._cli_log.initialize"),
        mock.patch("subprocess.run") as subprocess_mock,
    ):
        subprocess_mock.return_value.returncode = 70
        res = uut.main(["--directory", tmp_path.as_posix(), "--entities", "user"])

    assert res == 1
    subprocess_mock.assert_called_once()
    assert subprocess_mock.call_args.args[0][:3] == ["hammer", "import", "organization"]

    out = capsys.readouterr().out
    assert "Import organization" in out
    assert "Import user" not in out


@pytest.mark.skipif(sys.platform == "win32", reason="needs a posix shell")
def test_cli_output_interleaves_with_hammer(tmp_path: Path) -> None:
    hammer = tmp_path / "hammer"
    hammer.write_text('#!/bin/sh\necho "HAMMER $2"\n')
    hammer.chmod(0o755)
    exports = tmp_path / "exports"
    exports.mkdir()
    (exports / "users.csv").touch()

    env = {k: v for (k, v) in os.environ.items() if not k.startswith("SWIMAN__")}
    env.pop("PYTHONUNBUFFERED", None)
    src = Path(__file__).parents[2] / "src"
    env["PYTHONPATH"] = os.pathsep.join([str(src), env.get("PYTHONPATH", "")])

    res = subprocess.run(  # noqa: S603
        [
            sys.executable,
            "-m",
            "spacewalk_import_manager.cli",
            "--log-directory",
            str(tmp_path / "logs"),
            "--directory",
            str(exports),
            "--entities",
            "user",
            "--hammer-command",
            str(hammer),
        ],
        stdout=subprocess.PIPE,
        text=True,
        env=env,
        check=True,
    )

    lines = [s.split()[0:2] for s in res.stdout.splitlines()]
    assert lines == [
        ["Import", "organization"],
        ["HAMMER", "organization"],
        ["Import", "user"],
        ["HAMMER", "user"],
    ]
