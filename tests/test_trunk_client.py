"""Tests for the CocoaPods trunk client."""

from semantic_version import Version

from common.shell import CommandResult
from registry.cocoapods.client import fetch_trunk_info, parse_trunk_info, trunk_info_command

TRUNK_INFO = """\
Alamofire
    - Versions:
      - 5.4.0 (2020-12-20 20:00:00 UTC)
      - 5.10.2 (2024-11-01 10:00:00 UTC)
      - 6.0.0-beta.1 (2025-01-01 10:00:00 UTC)
    - Owners:
      - Someone <someone@example.com>
"""


class TestParseTrunkInfo:
    """Test parse_trunk_info."""

    def test_bullet_versions(self):
        assert parse_trunk_info(TRUNK_INFO) == [Version("5.4.0"), Version("5.10.2")]

    def test_bullet_versions_with_prerelease(self):
        versions = parse_trunk_info(TRUNK_INFO, allow_prerelease=True)
        assert Version("6.0.0-beta.1") in versions
        assert len(versions) == 3

    def test_inline_versions_fallback(self):
        text = "Foo\n  Versions: 1.0.0, 1.1.0, 2.0.0-rc.1\n"
        assert parse_trunk_info(text) == [Version("1.0.0"), Version("1.1.0")]

    def test_nothing_to_parse(self):
        assert parse_trunk_info("[!] Unable to find a pod with name, author, summary, or description matching `Nope`") == []


class TestFetchTrunkInfo:
    """Test fetch_trunk_info."""

    def test_command(self):
        assert trunk_info_command("Alamofire") == ["pod", "trunk", "info", "Alamofire"]

    def test_output_kept_on_nonzero_exit(self, make_runner):
        runner = make_runner(default=CommandResult(stdout=TRUNK_INFO, returncode=1))
        assert fetch_trunk_info("Alamofire", runner=runner) == TRUNK_INFO
        assert runner.calls == [("pod", "trunk", "info", "Alamofire")]

    def test_launch_failure(self, make_runner):
        assert fetch_trunk_info("Alamofire", runner=make_runner(default=None)) is None
