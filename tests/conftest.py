"""Shared pytest fixtures for PathMatch tests."""
import tempfile
from pathlib import Path
from typing import Any, Dict, Generator

import pytest
import yaml

from pathmatch.core.constants import MatchResult
from pathmatch.infrastructure import config_manager, logger


class FixedMatcher:
    """Matcher that always answers the same result."""

    def __init__(self, result):
        self.result = result
        self.calls = []

    def match(self, path: str):
        self.calls.append(path)
        return self.result

    def __repr__(self) -> str:
        return f"FixedMatcher({self.result!r})"


@pytest.fixture
def match_matcher() -> FixedMatcher:
    return FixedMatcher(MatchResult.MATCH)


@pytest.fixture
def no_match_matcher() -> FixedMatcher:
    return FixedMatcher(MatchResult.NO_MATCH)


@pytest.fixture
def indeterminate_matcher() -> FixedMatcher:
    return FixedMatcher(MatchResult.INDETERMINATE)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def source_tree(temp_dir: Path) -> Path:
    """Create a small project tree.

    source/
        how-to.txt
        logs/app.log
        part1/intro.txt
        part2/intro.txt
        assets/css/main.css
        assets/css/theme.css
        assets/js/app.js
    """
    source = temp_dir / "source"
    source.mkdir()

    (source / "how-to.txt").write_text("content")

    (source / "logs").mkdir()
    (source / "logs" / "app.log").write_text("log line")

    for part in ("part1", "part2"):
        (source / part).mkdir()
        (source / part / "intro.txt").write_text("content")

    (source / "assets" / "css").mkdir(parents=True)
    (source / "assets" / "css" / "main.css").write_text("body {}")
    (source / "assets" / "css" / "theme.css").write_text("body {}")
    (source / "assets" / "js").mkdir()
    (source / "assets" / "js" / "app.js").write_text("run()")

    return source


@pytest.fixture
def sample_config() -> Dict[str, Any]:
    """Provide a sample PathMatch configuration."""
    return {
        "pathmatch": {
            "case_sensitive": False,
            "full_path": False,
            "exact_slashes": True,
            "check_filesystem": False,
            "only": ["*.css", "*.js"],
            "except": ["theme.css"],
            "logging": {
                "level": "DEBUG",
                "file": None,
            },
        }
    }


@pytest.fixture
def config_file(temp_dir: Path, sample_config: Dict[str, Any]) -> Path:
    """Create a configuration file."""
    config_path = temp_dir / "pathmatch.yaml"
    with open(config_path, "w") as f:
        yaml.dump(sample_config, f)
    return config_path


@pytest.fixture(autouse=True)
def reset_singletons(monkeypatch):
    """Reset global config and environment overrides between tests."""
    for name in (
        "PATHMATCH_CASE_SENSITIVE",
        "PATHMATCH_FULL_PATH",
        "PATHMATCH_EXACT_SLASHES",
        "PATHMATCH_CHECK_FILESYSTEM",
        "PATHMATCH_ONLY",
        "PATHMATCH_EXCEPT",
        "PATHMATCH_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)

    config_manager.set_global_config(None)
    level = logger.get_logger().get_level()
    yield
    config_manager.set_global_config(None)
    logger.get_logger().set_level(level)
