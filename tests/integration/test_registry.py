"""Integration tests for the action registry and command line runner."""

import pytest

from shellactions.actions import ActionContext, ActionRegistry, ActionStatus, ShellTextAction
from shellactions.config import ActionConfig, EngineSettings
from shellactions.editor import BufferEditor, RangeSpec, TextDocument
from shellactions.main import main


@pytest.fixture
def registry(engine_settings):
    return ActionRegistry(engine_settings)


def _text_context(context_paths, text, selections):
    return ActionContext(
        paths=context_paths,
        bridge=BufferEditor(text),
        document=TextDocument(text=text, selections=tuple(selections)),
    )


class TestActionRegistry:
    """Test ActionRegistry."""

    @pytest.mark.asyncio
    async def test_register_and_list(self, registry, engine_settings):
        action = ShellTextAction("upper", ActionConfig(script="upper.sh"), settings=engine_settings)

        await registry.register(action)

        assert await registry.get("upper") is action
        assert await registry.list_actions() == [
            {"name": "upper", "script": "upper.sh", "description": "Runs upper.sh"}
        ]
        assert registry.get_stats() == {"registered_actions": 1, "action_names": ["upper"]}

    @pytest.mark.asyncio
    async def test_unknown_action(self, registry, context_paths):
        result = await registry.execute_action("missing", _text_context(context_paths, "", []))

        assert result.status is ActionStatus.FAILED
        assert result.details["available_actions"] == []

    @pytest.mark.asyncio
    async def test_success_is_timed(self, registry, engine_settings, context_paths, make_script):
        make_script("upper.sh", 'tr "[:lower:]" "[:upper:]"')
        await registry.register(ShellTextAction("upper", ActionConfig(script="upper.sh"), settings=engine_settings))
        context = _text_context(context_paths, "abc", [RangeSpec(0, 3)])

        result = await registry.execute_action("upper", context)

        assert result.status is ActionStatus.SUCCESS
        assert result.execution_time_seconds > 0
        assert context.bridge.text == "ABC"

    @pytest.mark.asyncio
    async def test_errors_reported_as_failed(self, registry, engine_settings, context_paths):
        await registry.register(ShellTextAction("gone", ActionConfig(script="gone.sh"), settings=engine_settings))

        result = await registry.execute_action("gone", _text_context(context_paths, "abc", [RangeSpec(0, 1)]))

        assert result.status is ActionStatus.FAILED
        assert result.details["error_type"] == "ScriptNotFound"
        assert result.details["script"] == "gone.sh"

    @pytest.mark.asyncio
    async def test_timeout(self, registry, engine_settings, context_paths, make_script):
        make_script("slow.sh", "sleep 5")
        await registry.register(ShellTextAction("slow", ActionConfig(script="slow.sh"), settings=engine_settings))

        result = await registry.execute_action(
            "slow", _text_context(context_paths, "abc", [RangeSpec(0, 1)]), timeout_seconds=0.5
        )

        assert result.status is ActionStatus.TIMEOUT

    @pytest.mark.asyncio
    async def test_timeout_from_settings(self, context_paths, make_script):
        settings = EngineSettings(action_timeout=0.5)
        registry = ActionRegistry(settings)
        make_script("slow.sh", "sleep 5")
        await registry.register(ShellTextAction("slow", ActionConfig(script="slow.sh"), settings=settings))

        result = await registry.execute_action("slow", _text_context(context_paths, "abc", [RangeSpec(0, 1)]))

        assert result.status is ActionStatus.TIMEOUT


class TestCommandLine:
    """Test the shellactions command."""

    def test_text_action(self, sugar_path, make_script, tmp_path, capsys):
        make_script("upper.sh", 'tr "[:lower:]" "[:upper:]"')
        definition = tmp_path / "upper.yaml"
        definition.write_text("script: upper.sh\n")
        document = tmp_path / "doc.txt"
        document.write_text("hello world")

        with pytest.raises(SystemExit) as exc_info:
            main([str(definition), "--sugar", str(sugar_path), "--file", str(document), "--select", "6,5"])

        assert exc_info.value.code == 0
        assert capsys.readouterr().out == "hello WORLD"

    def test_failure_exit_code(self, sugar_path, tmp_path, capsys):
        definition = tmp_path / "missing.yaml"
        definition.write_text("script: missing.sh\noutput: console\n")

        with pytest.raises(SystemExit) as exc_info:
            main([str(definition), "--sugar", str(sugar_path), "--files", str(tmp_path / "x")])

        assert exc_info.value.code == 1
        assert "missing.sh" in capsys.readouterr().err

    def test_invalid_selection(self, sugar_path, tmp_path):
        definition = tmp_path / "upper.yaml"
        definition.write_text("script: upper.sh\n")
        document = tmp_path / "doc.txt"
        document.write_text("hello")

        with pytest.raises(SystemExit) as exc_info:
            main([str(definition), "--sugar", str(sugar_path), "--file", str(document), "--select", "x"])

        assert exc_info.value.code == 2
