"""Tests for git ls-remote lookups."""

from common.shell import CommandResult
from repository.git_remote import GitRemoteClient, parse_ls_remote

URL = "https://github.com/me/private.git"
REF = "refs/heads/develop"
PLAIN = ("git", "ls-remote", URL, REF)
WITH_TOKEN = ("git", "-c", "http.extraHeader=Authorization: Bearer s3cret", "ls-remote", URL, REF)


class TestParseLsRemote:
    """Test parse_ls_remote."""

    def test_first_hash(self):
        text = "abc123\trefs/heads/develop\ndef456\trefs/heads/other\n"
        assert parse_ls_remote(text) == "abc123"

    def test_empty(self):
        assert parse_ls_remote("") is None
        assert parse_ls_remote(None) is None
        assert parse_ls_remote("\n") is None


class TestGitRemoteClient:
    """Test GitRemoteClient.ls_remote."""

    def test_plain_lookup(self, make_runner, ok, monkeypatch):
        monkeypatch.delenv("DEVKIT_TEST_TOKEN", raising=False)
        runner = make_runner({PLAIN: ok("abc123\trefs/heads/develop\n")})
        client = GitRemoteClient(runner=runner, token_env="DEVKIT_TEST_TOKEN")
        assert client.ls_remote(URL, REF) == "abc123"
        assert runner.calls == [PLAIN]

    def test_retries_with_token(self, make_runner, ok, monkeypatch):
        monkeypatch.setenv("DEVKIT_TEST_TOKEN", "s3cret")
        runner = make_runner({
            PLAIN: CommandResult(stdout="", returncode=128),
            WITH_TOKEN: ok("fff999\trefs/heads/develop\n"),
        })
        client = GitRemoteClient(runner=runner, token_env="DEVKIT_TEST_TOKEN")
        assert client.ls_remote(URL, REF) == "fff999"
        assert runner.calls == [PLAIN, WITH_TOKEN]

    def test_empty_output_triggers_retry(self, make_runner, ok, monkeypatch):
        monkeypatch.setenv("DEVKIT_TEST_TOKEN", "s3cret")
        runner = make_runner({PLAIN: ok(""), WITH_TOKEN: ok("fff999\trefs/heads/develop\n")})
        client = GitRemoteClient(runner=runner, token_env="DEVKIT_TEST_TOKEN")
        assert client.ls_remote(URL, REF) == "fff999"

    def test_no_token_no_retry(self, make_runner, monkeypatch):
        monkeypatch.delenv("DEVKIT_TEST_TOKEN", raising=False)
        runner = make_runner(default=None)
        client = GitRemoteClient(runner=runner, token_env="DEVKIT_TEST_TOKEN")
        assert client.ls_remote(URL, REF) is None
        assert runner.calls == [PLAIN]

    def test_ssh_urls_never_use_token(self, make_runner, monkeypatch):
        monkeypatch.setenv("DEVKIT_TEST_TOKEN", "s3cret")
        runner = make_runner(default=None)
        client = GitRemoteClient(runner=runner, token_env="DEVKIT_TEST_TOKEN")
        assert client.ls_remote("git@github.com:me/private.git", REF) is None
        assert len(runner.calls) == 1

    def test_blank_token_is_ignored(self, make_runner, monkeypatch):
        monkeypatch.setenv("DEVKIT_TEST_TOKEN", "   ")
        runner = make_runner(default=None)
        client = GitRemoteClient(runner=runner, token_env="DEVKIT_TEST_TOKEN")
        assert client.ls_remote(URL, REF) is None
        assert len(runner.calls) == 1
