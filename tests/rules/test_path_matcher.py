#!/usr/bin/env python3
"""Tests for PathMatcher."""

import threading

import pytest

from pathmatch.core.constants import MatchResult, Scope
from pathmatch.core.exceptions import MatcherConfigError, PatternError
from pathmatch.rules.matcher import PathMatcher
from pathmatch.rules.patterns import PathPattern
from pathmatch.rules.probe import StaticFilesystemProbe


@pytest.fixture
def string_matcher() -> PathMatcher:
    return PathMatcher().disable_filesystem_check()


class TestStringMatching:
    """Matching with filesystem checks disabled."""

    def test_empty(self, string_matcher):
        assert string_matcher.match("")
        assert string_matcher.match("hello.png")

    def test_only(self, string_matcher):
        matcher = string_matcher.only("*.jpg", "*.png")
        assert matcher.match("hello.png")
        assert not matcher.match("hello.gif")

    def test_empty_only_list_passes_everything(self, string_matcher):
        assert string_matcher.only().match("hello.gif")

    def test_except(self, string_matcher):
        matcher = string_matcher.except_("*.jpg", "*.png")
        assert matcher.match("hello.gif")
        assert not matcher.match("hello.png")

    def test_callback(self, string_matcher):
        matcher = string_matcher.callback(lambda path: False)
        assert not matcher.match("hello.png")

    def test_callbacks_run_in_order_and_stop_at_first_rejection(self, string_matcher):
        calls = []

        def first(path):
            calls.append("first")
            return False

        def second(path):
            calls.append("second")
            return True

        assert not string_matcher.callback(first, second).match("a.txt")
        assert calls == ["first"]

    def test_callbacks_receive_path(self, string_matcher):
        seen = []
        matcher = string_matcher.callback(lambda path: seen.append(path) or True)
        assert matcher.match("dir/a.txt")
        assert seen == ["dir/a.txt"]

    def test_callbacks_skipped_when_only_fails(self, string_matcher):
        calls = []
        matcher = string_matcher.only("*.py").callback(lambda path: calls.append(path) or True)
        assert not matcher.match("a.txt")
        assert calls == []

    def test_case_insensitive_by_default(self, string_matcher):
        assert string_matcher.only("*.JPG").match("photo.jpg")

    def test_case_sensitive(self, string_matcher):
        matcher = string_matcher.case_sensitive().only("*.jpg")
        assert matcher.match("hello.jpg")
        assert not matcher.match("hello.JPG")

    def test_case_sensitive_applies_regardless_of_order(self, string_matcher):
        matcher = string_matcher.only("*.JPG")
        assert matcher.match("photo.jpg")
        assert not matcher.case_sensitive().match("photo.jpg")

    def test_full_path(self, string_matcher):
        matcher = string_matcher.with_full_path().only("dir/*.jpg")
        assert matcher.match("dir/42.jpg")
        assert not matcher.match("var/dir/42.jpg")

    def test_exact_slashes_by_default(self, string_matcher):
        matcher = string_matcher.only("dir/*.jpg")
        assert matcher.match("dir/photo.jpg")
        assert not matcher.match("dir/nested/photo.jpg")

    def test_not_exact_slashes(self, string_matcher):
        matcher = string_matcher.with_not_exact_slashes().only("dir/*.jpg")
        assert matcher.match("dir/photo.jpg")
        assert matcher.match("dir/nested/photo.jpg")

    def test_literal_pattern_is_not_substring(self, string_matcher):
        matcher = string_matcher.only("theme.css")
        assert matcher.match("assets/theme.css")
        assert not matcher.match("assets/mytheme.css")
        assert not matcher.match("assets/theme.css.map")

    def test_trailing_slash_is_literal_without_filesystem_check(self, string_matcher):
        matcher = string_matcher.only("notes/")
        assert matcher.match("dir/notes/")
        assert not matcher.match("dir/notes")
        assert all(p.scope is Scope.ANY for p in matcher.only_matchers)

    def test_path_pattern_objects(self, string_matcher):
        matcher = string_matcher.only(PathPattern("*.png").with_full_path(), "*.jpg")
        assert matcher.match("dir/42.jpg")
        assert matcher.match("42.png")
        assert not matcher.match("dir/42.png")

    def test_nested_path_matcher(self, string_matcher):
        inner = string_matcher.only("*.txt")
        matcher = string_matcher.only(inner)
        assert matcher.match("a.txt")
        assert not matcher.match("a.md")

    def test_callback_returning_match_result(self, string_matcher):
        assert string_matcher.callback(lambda p: MatchResult.MATCH).match("a")
        assert not string_matcher.callback(lambda p: MatchResult.INDETERMINATE).match("a")

    def test_end_to_end(self, string_matcher):
        matcher = string_matcher.only("*.css", "*.js").except_("theme.css")
        assert matcher.match("main.css")
        assert not matcher.match("main.css.map")
        assert not matcher.match("theme.css")
        assert matcher.match("app.js")
        assert matcher.match("/var/www/example.com/assets/css/main.css")
        assert not matcher.match("/var/www/example.com/assets/css/theme.css")

    def test_filter(self, string_matcher):
        matcher = string_matcher.only("*.css")
        assert list(matcher.filter(["a.css", "b.js", "c/d.css"])) == ["a.css", "c/d.css"]

    def test_callable(self, string_matcher):
        assert string_matcher.only("*.css")("a.css")

    def test_every_only_entry_is_evaluated(
        self, string_matcher, match_matcher, no_match_matcher, indeterminate_matcher
    ):
        matcher = string_matcher.only(match_matcher, no_match_matcher, indeterminate_matcher)
        assert matcher.match("x")
        assert match_matcher.calls == ["x"]
        assert no_match_matcher.calls == ["x"]
        assert indeterminate_matcher.calls == ["x"]

    def test_package_example(self):
        matcher = (
            PathMatcher()
            .disable_filesystem_check()
            .only("*.py", "docs/")
            .except_("conftest.py")
        )
        assert matcher.match("src/app.py")
        assert matcher.match("project/docs/")
        assert not matcher.match("tests/conftest.py")


class TestFilesystemMatching:
    """Matching with file/directory scoping."""

    @pytest.fixture
    def probe(self) -> StaticFilesystemProbe:
        return StaticFilesystemProbe(
            files=["logs/app.log", "other/readme.md", "src/app.py"],
            directories=["logs", "other", "src"],
        )

    def test_string_patterns_are_scoped(self, probe):
        matcher = PathMatcher(probe=probe).only("logs/", "*.py")
        scopes = [p.scope for p in matcher.only_matchers]
        assert scopes == [Scope.DIRECTORIES, Scope.FILES]
        assert matcher.only_matchers[0].pattern == "logs"

    def test_directory_pass_through(self, probe):
        matcher = PathMatcher(probe=probe).only("logs/")
        assert matcher.match("logs")
        assert matcher.match("logs/app.log")
        assert not matcher.match("other/app.log")

    def test_directory_kept_traversable_for_file_patterns(self, probe):
        matcher = PathMatcher(probe=probe).only("*.py")
        assert matcher.match("src")
        assert matcher.match("src/app.py")
        assert not matcher.match("other/readme.md")

    def test_directory_without_file_scoped_patterns(self, probe):
        matcher = PathMatcher(probe=probe).only("logs/")
        assert not matcher.match("other")

    def test_file_fails_on_definite_no_match(self, probe):
        matcher = PathMatcher(probe=probe).only("logs/", "*.txt")
        assert not matcher.match("other/readme.md")

    def test_unknown_path_fails_without_match(self, probe):
        matcher = PathMatcher(probe=probe).only("*.py")
        assert not matcher.match("missing/file.md")
        assert matcher.match("missing/file.py")

    def test_except_wins_over_directory_pass_through(self, probe):
        matcher = PathMatcher(probe=probe).only("*.py").except_("src/")
        assert not matcher.match("src")
        assert matcher.match("src/app.py")

    def test_probe_errors_degrade(self):
        class FailingProbe:
            def is_file(self, path):
                raise OSError("gone")

            def is_dir(self, path):
                raise OSError("gone")

        matcher = PathMatcher(probe=FailingProbe()).only("*.py")
        assert matcher.match("a.py")
        assert not matcher.match("a.md")

    def test_unexpected_probe_errors_degrade(self):
        class BrokenProbe:
            def is_file(self, path):
                raise RuntimeError("backend down")

            def is_dir(self, path):
                raise RuntimeError("backend down")

        matcher = PathMatcher(probe=BrokenProbe()).only("logs/", "*.py")
        assert matcher.match("a.py")
        assert matcher.match("logs")
        assert not matcher.match("a.md")

    def test_early_match_does_not_skip_later_entries(
        self, probe, match_matcher, no_match_matcher, indeterminate_matcher
    ):
        matcher = PathMatcher(probe=probe).only(
            match_matcher, "*.md", no_match_matcher, indeterminate_matcher
        )
        assert matcher.match("src/app.py")
        assert match_matcher.calls == ["src/app.py"]
        assert no_match_matcher.calls == ["src/app.py"]
        assert indeterminate_matcher.calls == ["src/app.py"]

    def test_disabled_check_leaves_path_patterns_scoped(self, probe):
        calls = []

        class CountingProbe:
            def is_file(self, path):
                calls.append(path)
                return probe.is_file(path)

            def is_dir(self, path):
                calls.append(path)
                return probe.is_dir(path)

        scoped = PathPattern("*.py").only_files().with_probe(CountingProbe())
        matcher = PathMatcher().disable_filesystem_check().only(scoped, "logs/")

        assert matcher.only_matchers[0].scope is Scope.FILES
        assert matcher.only_matchers[1].scope is Scope.ANY
        assert not matcher.match("src")
        assert calls
        assert matcher.match("src/app.py")

    def test_real_filesystem(self, source_tree):
        base = str(source_tree)

        matcher = PathMatcher().only("part2/")
        assert not matcher.match(base + "/part1")
        assert matcher.match(base + "/part2")
        assert matcher.match(base + "/part1/intro.txt")

        matcher = PathMatcher().disable_filesystem_check().only("dir/")
        assert not matcher.match(base + "/how-to.txt")

    def test_real_filesystem_directory_pass_through(self, source_tree):
        base = str(source_tree)
        matcher = PathMatcher().only("logs/")
        assert matcher.match(base + "/logs")
        assert matcher.match(base + "/logs/app.log")
        assert not matcher.match(base + "/other/app.log")

    def test_real_filesystem_copy_filter(self, source_tree):
        base = str(source_tree)
        matcher = PathMatcher().only("*.css", "*.js").except_("theme.css")
        assert matcher.match(base + "/assets")
        assert matcher.match(base + "/assets/css")
        assert matcher.match(base + "/assets/css/main.css")
        assert not matcher.match(base + "/assets/css/theme.css")
        assert matcher.match(base + "/assets/js/app.js")
        assert not matcher.match(base + "/how-to.txt")


class TestConfigurationErrors:
    """Bad arguments fail when the matcher is built."""

    @pytest.mark.parametrize("value", [42, None, b"*.txt", object()])
    def test_only_rejects_non_patterns(self, value):
        with pytest.raises(MatcherConfigError):
            PathMatcher().only(value)

    def test_except_rejects_non_patterns(self):
        with pytest.raises(MatcherConfigError):
            PathMatcher().except_("*.txt", 3.14)

    def test_callback_must_be_callable(self):
        with pytest.raises(MatcherConfigError):
            PathMatcher().callback("not callable")

    def test_malformed_glob(self):
        with pytest.raises(PatternError):
            PathMatcher().only("[abc")

    def test_null_byte_pattern(self):
        with pytest.raises(MatcherConfigError):
            PathMatcher().only("a\0b")


class TestImmutability:
    def test_builders_return_new_instances(self):
        original = PathMatcher()
        assert original.case_sensitive() is not original
        assert original.with_full_path() is not original
        assert original.with_not_exact_slashes() is not original
        assert original.disable_filesystem_check() is not original
        assert original.only("42.txt") is not original
        assert original.except_("42.txt") is not original
        assert original.callback(lambda path: False) is not original

    def test_specialising_leaves_base_unchanged(self, string_matcher):
        base = string_matcher.only("*.md")
        narrowed = base.only("*.txt")
        restricted = base.except_("README.md")

        assert base.match("README.md")
        assert not base.match("notes.txt")
        assert narrowed.match("notes.txt")
        assert not restricted.match("README.md")
        assert base.match("README.md")

    def test_options_are_preserved(self, string_matcher):
        matcher = string_matcher.case_sensitive().only("*.txt")
        assert matcher.is_case_sensitive
        assert not matcher.checks_filesystem

    def test_concurrent_matching(self, string_matcher):
        matcher = string_matcher.only("*.css", "*.js").except_("theme.css")
        paths = ["main.css", "theme.css", "app.js", "main.css.map"] * 250
        expected = [matcher.match(p) for p in paths]
        errors = []

        def worker():
            if [matcher.match(p) for p in paths] != expected:
                errors.append("mismatch")

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert errors == []
