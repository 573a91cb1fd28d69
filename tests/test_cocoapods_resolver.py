"""Tests for the CocoaPods version resolver."""

import pytest
from semantic_version import Version

from registry.cocoapods.models import GitRef, GitRefKind, GitSource
from versioning.cache import VersionCache
from versioning.resolvers.cocoapods import CocoaPodsResolver

TRUNK = ("pod", "trunk", "info", "Alamofire")
TRUNK_INFO = "Alamofire\n  - Versions:\n    - 5.4.0 (2020)\n    - 5.10.2 (2024)\n    - 6.0.0-beta.1 (2025)\n"


@pytest.fixture(autouse=True)
def _no_git_token(monkeypatch):
    monkeypatch.delenv("GIT_HTTP_TOKEN", raising=False)


class TestTrunkVersions:
    """Test CocoaPodsResolver.trunk_versions."""

    def test_parses_and_caches(self, make_runner, ok):
        runner = make_runner({TRUNK: ok(TRUNK_INFO)})
        cache = VersionCache()
        resolver = CocoaPodsResolver(cache=cache, runner=runner)

        assert resolver.trunk_versions("Alamofire") == [Version("5.4.0"), Version("5.10.2")]
        assert resolver.trunk_versions("Alamofire") == [Version("5.4.0"), Version("5.10.2")]
        assert runner.calls == [TRUNK]
        assert "Alamofire" in cache

    def test_prerelease_allowed(self, make_runner, ok):
        runner = make_runner({TRUNK: ok(TRUNK_INFO)})
        resolver = CocoaPodsResolver(runner=runner, allow_prerelease=True)
        assert Version("6.0.0-beta.1") in resolver.trunk_versions("Alamofire")

    def test_cache_hit_skips_command(self, make_runner):
        runner = make_runner(default=None)
        cache = VersionCache()
        cache.put("Alamofire", [Version("1.0.0")])
        resolver = CocoaPodsResolver(cache=cache, runner=runner)
        assert resolver.trunk_versions("Alamofire") == [Version("1.0.0")]
        assert runner.calls == []

    def test_empty_listing_is_not_cached(self, make_runner, ok):
        runner = make_runner({TRUNK: ok("nothing here\n")})
        cache = VersionCache()
        resolver = CocoaPodsResolver(cache=cache, runner=runner)
        assert resolver.trunk_versions("Alamofire") is None
        assert resolver.trunk_versions("Alamofire") is None
        assert len(runner.calls) == 2
        assert len(cache) == 0

    def test_launch_failure(self, make_runner):
        resolver = CocoaPodsResolver(runner=make_runner(default=None))
        assert resolver.trunk_versions("Alamofire") is None


class TestGitHead:
    """Test CocoaPodsResolver.git_head."""

    URL = "https://github.com/me/mylib.git"

    def test_commit_is_returned_without_lookup(self, make_runner):
        runner = make_runner(default=None)
        resolver = CocoaPodsResolver(runner=runner)
        source = GitSource(self.URL, GitRef(GitRefKind.COMMIT, "abcdef1234"))
        assert resolver.git_head(source) == "abcdef1234"
        assert runner.calls == []

    def test_branch_head(self, make_runner, ok):
        argv = ("git", "ls-remote", self.URL, "refs/heads/develop")
        runner = make_runner({argv: ok("abc1234\trefs/heads/develop\n")})
        resolver = CocoaPodsResolver(runner=runner)
        assert resolver.git_head(GitSource(self.URL, GitRef(GitRefKind.BRANCH, "develop"))) == "abc1234"

    def test_tag_head(self, make_runner, ok):
        argv = ("git", "ls-remote", self.URL, "refs/tags/1.2.0")
        runner = make_runner({argv: ok("0a0b0c\trefs/tags/1.2.0\n")})
        resolver = CocoaPodsResolver(runner=runner)
        assert resolver.git_head(GitSource(self.URL, GitRef(GitRefKind.TAG, "1.2.0"))) == "0a0b0c"

    def test_failure(self, make_runner):
        resolver = CocoaPodsResolver(runner=make_runner(default=None))
        assert resolver.git_head(GitSource(self.URL, GitRef(GitRefKind.BRANCH, "main"))) is None
