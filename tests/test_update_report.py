"""Tests for the pod update analysis."""

from semantic_version import Version

from analysis.update_report import (
    NOTE_GIT_FAILED,
    NOTE_TRUNK_FAILED,
    Report,
    ReportRow,
    Status,
    build_report,
    evaluate_pod,
    filter_outdated,
    sorted_names,
)
from registry.cocoapods.lockfile_parser import parse_podfile_lock
from registry.cocoapods.models import LockInfo
from registry.cocoapods.podfile_parser import parse_podfile

GIT_URL = "https://github.com/me/mylib.git"


class StubResolver:
    """Resolver double answering from dictionaries."""

    def __init__(self, trunk=None, heads=None):
        self.trunk = trunk or {}
        self.heads = heads or {}

    def trunk_versions(self, name):
        versions = self.trunk.get(name)
        return [Version(v) for v in versions] if versions is not None else None

    def git_head(self, source):
        return self.heads.get(source.url)


def _row(podfile, lockfile, resolver, name, allow_prerelease=False):
    specs = parse_podfile(podfile)
    lock = parse_podfile_lock(lockfile)
    return evaluate_pod(name, specs.get(name), lock, resolver, allow_prerelease)


class TestTrunkPods:
    """Registry-hosted pods."""

    def test_status_and_update_flag_are_independent(self):
        """Newer compatible release: update flag follows the constraint, status follows the latest."""
        row = _row(
            "pod 'Alamofire', '~> 5.4.0'\n",
            "PODS:\n  - Alamofire (5.4.0)\n",
            StubResolver(trunk={"Alamofire": ["5.4.0", "5.10.2"]}),
            "Alamofire",
        )
        assert row.latest_satisfying == "5.10.2"
        assert row.latest == "5.10.2"
        assert row.would_update is True
        assert row.status == Status.OUTDATED
        assert row.constraint == "~> 5.4.0"
        assert row.source == "trunk"

    def test_outdated_without_update_when_pinned(self):
        """An exact pin never updates even though a newer release exists."""
        row = _row(
            "pod 'Alamofire', '5.4.0'\n",
            "PODS:\n  - Alamofire (5.4.0)\n",
            StubResolver(trunk={"Alamofire": ["5.4.0", "5.10.2"]}),
            "Alamofire",
        )
        assert row.latest_satisfying == "5.4.0"
        assert row.would_update is False
        assert row.status == Status.OUTDATED

    def test_up_to_date(self):
        row = _row(
            "pod 'SnapKit'\n",
            "PODS:\n  - SnapKit (5.7.1)\n",
            StubResolver(trunk={"SnapKit": ["5.0.0", "5.7.1"]}),
            "SnapKit",
        )
        assert row.status == Status.UP_TO_DATE
        assert row.would_update is False
        assert row.note is None

    def test_not_installed(self):
        row = _row("pod 'SnapKit'\n", "", StubResolver(trunk={"SnapKit": ["5.7.1"]}), "SnapKit")
        assert row.status == Status.NOT_INSTALLED
        assert row.locked is None
        assert row.would_update is False

    def test_no_matching_version(self):
        row = _row(
            "pod 'SnapKit', '~> 9.0'\n",
            "PODS:\n  - SnapKit (5.7.1)\n",
            StubResolver(trunk={"SnapKit": ["5.7.1"]}),
            "SnapKit",
        )
        assert row.latest_satisfying is None
        assert row.would_update is False

    def test_unparseable_locked_version(self):
        row = _row("pod 'Odd'\n", "PODS:\n  - Odd (weird)\n", StubResolver(trunk={"Odd": ["1.0.0"]}), "Odd")
        assert row.status == Status.UNKNOWN

    def test_lock_only_pod_uses_defaults(self):
        row = _row("", "PODS:\n  - Orphan (1.0.0)\n", StubResolver(trunk={"Orphan": ["1.0.0"]}), "Orphan")
        assert row.constraint is None
        assert row.source == "trunk"
        assert row.status == Status.UP_TO_DATE

    def test_registry_failure_without_lock(self):
        row = _row("pod 'Gone'\n", "", StubResolver(), "Gone")
        assert row.status == Status.NOT_INSTALLED
        assert row.note == NOTE_TRUNK_FAILED

    def test_registry_failure_with_lock(self):
        row = _row("pod 'Gone'\n", "PODS:\n  - Gone (1.0.0)\n", StubResolver(), "Gone")
        assert row.status == Status.UNKNOWN
        assert row.note
        assert row.latest is None

    def test_raw_constraint_is_noted(self):
        row = _row(
            "pod 'Weird', 'latest-please'\n",
            "PODS:\n  - Weird (1.0.0)\n",
            StubResolver(trunk={"Weird": ["1.0.0", "2.0.0"]}),
            "Weird",
        )
        assert row.latest_satisfying == "2.0.0"
        assert row.note == "constraint not evaluated: latest-please"

    def test_prerelease_respected(self):
        resolver = StubResolver(trunk={"Beta": ["1.0.0", "1.1.0-beta.1"]})
        podfile = "pod 'Beta', '>= 1.0'\n"
        lock = "PODS:\n  - Beta (1.0.0)\n"
        assert _row(podfile, lock, resolver, "Beta").latest_satisfying == "1.0.0"
        assert _row(podfile, lock, resolver, "Beta", allow_prerelease=True).latest_satisfying == "1.1.0-beta.1"


class TestGitPods:
    """Git-hosted pods."""

    PODFILE = f"pod 'MyLib', :git => '{GIT_URL}', :branch => 'develop'\n"
    LOCK = "PODS:\n  - MyLib (1.0.0)\n\nCHECKOUT OPTIONS:\n  MyLib:\n    :commit: abc1234\n"

    def test_head_matches_lock(self):
        row = _row(self.PODFILE, self.LOCK, StubResolver(heads={GIT_URL: "abc1234"}), "MyLib")
        assert row.status == Status.UP_TO_DATE
        assert row.would_update is False
        assert row.source == "git:branch=develop"
        assert row.locked_sha == "abc1234"

    def test_head_moved(self):
        row = _row(self.PODFILE, self.LOCK, StubResolver(heads={GIT_URL: "def5678"}), "MyLib")
        assert row.status == Status.OUTDATED
        assert row.would_update is True
        assert row.latest == row.latest_satisfying == "def5678"

    def test_no_locked_sha(self):
        row = _row(self.PODFILE, "", StubResolver(heads={GIT_URL: "def5678"}), "MyLib")
        assert row.status == Status.UNKNOWN
        assert row.would_update is False

    def test_head_lookup_failure(self):
        row = _row(self.PODFILE, self.LOCK, StubResolver(), "MyLib")
        assert row.status == Status.UNKNOWN
        assert row.note == NOTE_GIT_FAILED
        assert _row(self.PODFILE, "", StubResolver(), "MyLib").status == Status.NOT_INSTALLED


def _fixture_row(name, status, would_update):
    return ReportRow(
        name=name, locked="1.0.0", locked_sha=None, constraint=None, source="trunk",
        latest_satisfying=None, latest=None, would_update=would_update, status=status,
    )


class TestFilterOutdated:
    """Test the only-outdated filter."""

    def test_keeps_outdated_or_updatable(self):
        rows = [
            _fixture_row("a", Status.UP_TO_DATE, False),
            _fixture_row("b", Status.OUTDATED, False),
            _fixture_row("c", Status.OUTDATED, True),
            _fixture_row("d", Status.UNKNOWN, True),
            _fixture_row("e", Status.NOT_INSTALLED, False),
            _fixture_row("f", Status.UNKNOWN, False),
            _fixture_row("g", Status.UP_TO_DATE, True),
        ]
        assert [r.name for r in filter_outdated(rows)] == ["b", "c", "d", "g"]


class TestBuildReport:
    """Test build_report end to end with a stub resolver."""

    PODFILE = (
        "pod 'alpha', '~> 1.0'\n"
        "pod 'Beta'\n"
        f"pod 'MyLib', :git => '{GIT_URL}'\n"
    )
    LOCK = "PODS:\n  - alpha (1.0.0)\n  - Beta (2.0.0)\n  - Zed (0.1.0)\n"

    def _resolver(self):
        return StubResolver(
            trunk={"alpha": ["1.0.0", "1.4.0"], "Beta": ["2.0.0"], "Zed": ["0.1.0"]},
            heads={GIT_URL: "cafe123"},
        )

    def test_rows_sorted_case_insensitively(self):
        report = build_report(parse_podfile(self.PODFILE), parse_podfile_lock(self.LOCK), self._resolver(), max_workers=3)
        assert [r.name for r in report.rows] == ["alpha", "Beta", "MyLib", "Zed"]

    def test_only_outdated(self):
        report = build_report(
            parse_podfile(self.PODFILE), parse_podfile_lock(self.LOCK), self._resolver(), only_outdated=True
        )
        assert [r.name for r in report.rows] == ["alpha"]

    def test_empty_inputs(self):
        report = build_report({}, LockInfo(), StubResolver())
        assert report.rows == []

    def test_sorted_names(self):
        specs = parse_podfile("pod 'b'\npod 'A'\n")
        lock = parse_podfile_lock("PODS:\n  - C (1.0)\n  - A (1.0)\n")
        assert sorted_names(specs, lock) == ["A", "b", "C"]

    def test_report_dict(self):
        report = Report(rows=[], generated_at="2024-01-01T00:00:00Z")
        assert report.to_dict() == {"generatedAt": "2024-01-01T00:00:00Z", "rows": []}

    def test_row_dict_keys(self):
        row = _fixture_row("a", Status.NOT_INSTALLED, False)
        assert row.to_dict() == {
            "name": "a",
            "locked": "1.0.0",
            "lockedSHA": None,
            "constraint": None,
            "source": "trunk",
            "latestSatisfying": None,
            "latest": None,
            "wouldUpdateIfDeleteLock": False,
            "status": "notInstalled",
            "note": None,
        }


class TestSubspecs:
    """Subspec declarations share a row with their locked top-level pod."""

    def test_single_row_for_subspec(self):
        specs = parse_podfile("pod 'Firebase/Analytics', '~> 8.0'\n")
        lock = parse_podfile_lock("PODS:\n  - Firebase/Analytics (8.0.0)\n  - Firebase/Core (8.0.0)\n")
        report = build_report(specs, lock, StubResolver(trunk={"Firebase": ["8.0.0", "8.15.0", "10.0.0"]}))
        assert [r.name for r in report.rows] == ["Firebase"]
        row = report.rows[0]
        assert row.constraint == "~> 8.0.0"
        assert row.latest_satisfying == "8.15.0"
        assert row.would_update is True
