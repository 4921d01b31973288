"""Tests for git remote URL normalization."""

import pytest

from repository.url_normalize import needs_auth, normalize_remote, raw_file_url


class TestNeedsAuth:
    """SSH shorthand detection."""

    @pytest.mark.parametrize("url", [
        "git@github.com:myorg/thing.git",
        "git@example.com:org/repo",
        "ssh:git@host:org/repo.git",
        "deploy-user@git.internal:team/mod",
    ])
    def test_ssh_shorthand_needs_auth(self, url):
        assert needs_auth(url)

    @pytest.mark.parametrize("url", [
        "https://github.com/myorg/thing",
        "https://github.com/myorg/thing.git",
        "http://git.example.com/org/repo",
        "",
    ])
    def test_http_urls_do_not(self, url):
        assert not needs_auth(url)


class TestNormalizeRemote:
    """Rewriting to an https raw-content base."""

    def test_ssh_url_rewritten_to_https(self):
        assert normalize_remote("git@example.com:org/repo.git", True) == "https://example.com/org/repo"

    def test_github_ssh(self):
        assert normalize_remote("git@github.com:myorg/thing.git", True) == "https://github.com/myorg/thing"

    def test_scheme_prefixed_shorthand(self):
        assert normalize_remote("ssh:git@host:org/repo", True) == "https://host/org/repo"

    def test_https_without_suffix_unchanged(self):
        url = "https://github.com/myorg/thing"
        assert normalize_remote(url, False) == url

    def test_git_suffix_always_stripped(self):
        assert normalize_remote("https://github.com/myorg/thing.git", False) == "https://github.com/myorg/thing"

    def test_only_trailing_git_stripped(self):
        assert normalize_remote("https://git.example.com/a.github/b", False) == "https://git.example.com/a.github/b"


class TestRawFileUrl:
    """Raw file locations under a remote."""

    def test_builds_raw_path(self):
        assert raw_file_url("https://github.com/o/r", "v1.0.0", "metadata.json") == \
            "https://github.com/o/r/raw/v1.0.0/metadata.json"

    def test_trailing_slash_on_remote(self):
        assert raw_file_url("https://github.com/o/r/", "master", ".fixtures.yml") == \
            "https://github.com/o/r/raw/master/.fixtures.yml"
