"""
Dispatcher tests.
"""

import pytest

from ionode.commands import CommandDispatcher


def join_action(command, args):
    return "|".join(args)


class TestRun:
    def test_run_by_trigger(self, registry, dispatcher):
        registry.register("join", join_action)

        assert dispatcher.run_by_trigger("join", ["a", "b"]) == "a|b"

    def test_unknown_trigger_returns_none(self, dispatcher):
        assert dispatcher.run("nonexistent", []) is None
        assert dispatcher.run_by_trigger("nonexistent") is None

    def test_run_by_trigger_is_case_sensitive(self, registry, dispatcher):
        registry.register("Join", join_action)

        assert dispatcher.run("join", ["a"]) is None

    def test_run_resolved_command(self, registry, dispatcher):
        cmd = registry.register("Join", join_action)
        resolved = registry.lookup("join", case_sensitive=False)

        assert resolved is cmd
        assert dispatcher.run(resolved, ["a", "b"]) == "a|b"

    def test_non_command_returns_none(self, dispatcher):
        assert dispatcher.run_command(object(), ["a"]) is None
        assert dispatcher.run(42, []) is None

    def test_default_args_empty(self, registry, dispatcher):
        registry.register("count", lambda c, a: len(a))

        assert dispatcher.run("count") == 0

    def test_action_receives_command(self, registry, dispatcher):
        cmd = registry.register("me", lambda c, a: c)

        assert dispatcher.run("me") is cmd

    def test_action_errors_propagate(self, registry, dispatcher):
        def broken(command, args):
            raise RuntimeError("boom")

        registry.register("broken", broken)

        with pytest.raises(RuntimeError):
            dispatcher.run("broken")


class TestDispatch:
    def test_dispatch_line(self, registry, dispatcher):
        registry.register("join", join_action)

        result = dispatcher.dispatch('join "a b" c')

        assert result.found
        assert result.value == "a b|c"
        assert result.parsed.parameters == ["a b", "c"]

    def test_dispatch_with_dash_args(self, registry, dispatcher):
        registry.register("grep", lambda c, a, d: (a, d))

        result = dispatcher.dispatch("grep -i -n pattern file.txt", with_dash_args=True)

        assert result.value == (["pattern", "file.txt"], ["-i", "-n"])

    def test_dispatch_unknown(self, dispatcher):
        result = dispatcher.dispatch("nope arg")

        assert not result.found
        assert result.value is None
        assert result.parsed.command == "nope"

    def test_dispatch_empty_command(self, registry, dispatcher):
        registry.register("join", join_action)

        assert not dispatcher.dispatch("").found

    def test_dispatch_case_insensitive(self, registry, dispatcher):
        registry.register("Join", join_action)

        assert not dispatcher.dispatch("JOIN a").found
        assert dispatcher.dispatch("JOIN a", case_sensitive=False).value == "a"

    def test_separate_registries_are_isolated(self, registry):
        other = type(registry)()
        registry.register("only-here", join_action)

        assert CommandDispatcher(other).run("only-here") is None
