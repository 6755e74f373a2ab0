"""
Test the Typer application: root callback and the snapshot delete command.
"""

import pytest
from typer.testing import CliRunner

from snapctl.cli import snapshot_delete_handler
from snapctl.cli.common.context import LogLevel, get_cli_context
from snapctl.cli.typer_app import app, main_callback
from snapctl.shared.errors import ConvergenceError, ErrorCode

runner = CliRunner()


@pytest.fixture
def use_api(mocker):
    """Make the command use the given fake instead of a real CloudAPI client."""

    def _use(api):
        mocker.patch.object(
            snapshot_delete_handler.CloudApiClient,
            "from_settings",
            return_value=api,
        )
        return api

    return _use


class TestMainCallback:
    def test_verbose_overrides_log_level(self) -> None:
        main_callback(verbose=1, log_level=LogLevel.ERROR, config=None)

        context = get_cli_context()
        assert context.is_verbose()
        assert context.get_effective_log_level() == "DEBUG"

    def test_log_level_defaults_to_settings(self, monkeypatch) -> None:
        monkeypatch.setenv("SNAPCTL_LOGGING__LEVEL", "info")

        main_callback(verbose=0, log_level=None, config=None)

        assert get_cli_context().log_level == LogLevel.INFO

    def test_config_file_is_loaded(self, tmp_path) -> None:
        config = tmp_path / "custom.toml"
        config.write_text('[logging]\nlevel = "ERROR"\n', encoding="utf-8")

        main_callback(verbose=0, log_level=None, config=config)

        context = get_cli_context()
        assert context.config_path == config
        assert context.log_level == LogLevel.ERROR


class TestRootOptions:
    def test_version(self) -> None:
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert "snapctl v0.1.0" in result.output

    def test_short_help(self) -> None:
        result = runner.invoke(app, ["snapshot", "delete", "-h"])

        assert result.exit_code == 0
        assert "--force" in result.output
        assert "--wait" in result.output

    def test_missing_config_file_fails(self, tmp_path) -> None:
        result = runner.invoke(
            app,
            ["--config", str(tmp_path / "missing.toml"), "snapshot", "delete", "-f", "web01", "a"],
        )

        assert result.exit_code == 1
        assert "Configuration file not found" in result.output


class TestSnapshotDeleteCommand:
    @pytest.mark.parametrize("args", [[], ["web01"]])
    def test_missing_arguments_is_usage_error(self, args) -> None:
        result = runner.invoke(app, ["snapshot", "delete", *args])

        assert result.exit_code == 2
        assert "missing <inst> and <snapname> argument(s)" in result.output

    def test_blank_name_is_usage_error(self, fake_api, use_api) -> None:
        use_api(fake_api)

        result = runner.invoke(app, ["snapshot", "delete", "-f", "web01", " "])

        assert result.exit_code == 2
        assert fake_api.calls == []

    def test_forced_delete(self, fake_api, use_api) -> None:
        use_api(fake_api)

        result = runner.invoke(app, ["snapshot", "delete", "-f", "web01", "a", "b"])

        assert result.exit_code == 0, result.output
        assert sorted(fake_api.names("delete")) == ["a", "b"]
        assert f'Deleting snapshot "a" of instance "{fake_api.instance_id}"' in result.output

    def test_rm_alias(self, fake_api, use_api) -> None:
        use_api(fake_api)

        result = runner.invoke(app, ["snapshot", "rm", "--force", "web01", "a"])

        assert result.exit_code == 0, result.output
        assert fake_api.names("delete") == ["a"]

    def test_declined_exits_zero(self, fake_api, use_api) -> None:
        use_api(fake_api)

        result = runner.invoke(app, ["snapshot", "delete", "web01", "a"], input="n\n")

        assert result.exit_code == 0
        assert 'Delete snapshot "a"? [y/n]' in result.output
        assert "Aborting" in result.output
        assert fake_api.calls == []

    def test_confirmed_wait(self, fake_api, use_api) -> None:
        use_api(fake_api)

        result = runner.invoke(app, ["snapshot", "delete", "-w", "web01", "a", "b"], input="y\n")

        assert result.exit_code == 0, result.output
        assert "Delete 2 snapshots (a, b)? [y/n]" in result.output
        assert 'Deleted snapshot "a" in 0s' in result.output
        assert 'Deleted snapshot "b" in 0s' in result.output

    def test_failure_exits_non_zero(self, fake_api_factory, use_api) -> None:
        # Given
        api = use_api(
            fake_api_factory(
                wait_errors={"b": ConvergenceError(ErrorCode.SNAPSHOT_WAIT_FAILED, "query failed")}
            )
        )

        # When
        result = runner.invoke(app, ["snapshot", "delete", "-f", "-w", "web01", "a", "b"])

        # Then
        assert result.exit_code == 1
        assert 'Deleted snapshot "a"' in result.output
        assert "Error: query failed" in result.output
        assert sorted(api.names("wait")) == ["a", "b"]

    def test_wait_count_reaches_handler(self, mocker) -> None:
        handler = mocker.patch.object(
            snapshot_delete_handler,
            "handle_snapshot_delete_command",
            return_value=0,
        )

        result = runner.invoke(app, ["snapshot", "delete", "-ww", "-f", "web01", "a"])

        assert result.exit_code == 0, result.output
        options = handler.call_args.args[0]
        assert options.wait == 2
        assert options.force is True
        assert options.names == ["a"]


class TestNoticeLines:
    """알림과 프롬프트는 터미널 폭과 관계없이 한 줄로 출력된다."""

    NAMES = [f"nightly-backup-2024-10-{day:02d}" for day in range(1, 7)]

    @pytest.fixture(autouse=True)
    def _narrow_terminal(self, monkeypatch) -> None:
        monkeypatch.setenv("COLUMNS", "60")

    def test_prompt_is_one_line(self, fake_api, use_api) -> None:
        use_api(fake_api)

        result = runner.invoke(app, ["snapshot", "delete", "web01", *self.NAMES], input="n\n")

        assert result.exit_code == 0
        prompt = f"Delete 6 snapshots ({', '.join(self.NAMES)})? [y/n] "
        assert any(line.startswith(prompt) for line in result.output.splitlines())

    def test_notices_are_one_line_each(self, fake_api_factory, use_api) -> None:
        # Given: 마지막 스냅샷은 대기 시간 초과
        last = self.NAMES[-1]
        timeout = ConvergenceError(
            ErrorCode.OPERATION_TIMEOUT,
            "timed out after 60s waiting for state deleted (last state: queued)",
        )
        api = use_api(fake_api_factory(wait_errors={last: timeout}))

        # When
        result = runner.invoke(app, ["snapshot", "delete", "-f", "-w", "web01", *self.NAMES])

        # Then
        assert result.exit_code == 1
        lines = result.output.splitlines()
        for name in self.NAMES:
            assert f'Deleting snapshot "{name}" of instance "{api.instance_id}"' in lines
        for name in self.NAMES[:-1]:
            assert f'Deleted snapshot "{name}" in 0s' in lines
        assert (
            f'Failed to delete snapshot "{last}": '
            "timed out after 60s waiting for state deleted (last state: queued)"
        ) in lines
