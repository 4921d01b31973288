"""Tests for the git module source."""

from unittest.mock import patch

import pytest

from common.credentials import Credentials, Secret
from puppetfile.errors import InvalidTitleError, UnhandledOptionsError
from puppetfile.models import GitModule, NoDependencies
from puppetfile.source import ResolutionContext
from repository.git import GitSource, parse_options

CREDS = Credentials(Secret("alice"), Secret("hunter2"))


class TestParseOptions:
    """Ref selection and option validation."""

    def test_ref_defaults_to_master(self):
        assert parse_options({"git": "https://example.com/o/r"}, "r") == "master"

    @pytest.mark.parametrize("key", ["branch", "tag", "commit", "ref"])
    def test_each_ref_selector(self, key):
        assert parse_options({"git": "x", key: "v1"}, "r") == "v1"

    def test_branch_checked_before_tag(self):
        assert parse_options({"git": "x", "tag": "v1", "branch": "main"}, "r") == "main"

    def test_default_branch_accepted_but_ignored(self):
        assert parse_options({"git": "x", "default_branch": "main"}, "r") == "master"

    def test_unknown_keys_rejected(self):
        with pytest.raises(UnhandledOptionsError) as exc:
            parse_options({"git": "x", "install_path": "dist", "foo": 1}, "thing")
        assert exc.value.keys == ["foo", "install_path"]
        assert "for thing" in str(exc.value)


class TestGitBuild:
    """Pure record construction."""

    def setup_method(self):
        self.source = GitSource()

    def test_ssh_remote_is_rewritten(self):
        record = self.source.build("myorg-thing", {"git": "git@github.com:myorg/thing.git"})
        assert record == GitModule(
            title="myorg-thing",
            owner="myorg",
            name="thing",
            remote_url="https://github.com/myorg/thing",
            ref="master",
            uses_auth=True,
        )

    def test_https_remote_kept(self):
        record = self.source.build("myorg-thing", {"git": "https://github.com/myorg/thing", "tag": "v1.0.0"})
        assert record.remote_url == "https://github.com/myorg/thing"
        assert record.ref == "v1.0.0"
        assert not record.uses_auth

    def test_bare_title_rejected(self):
        with pytest.raises(InvalidTitleError):
            self.source.build("thing", {"git": "https://github.com/myorg/thing"})

    def test_declaration_options_not_mutated(self):
        options = {"git": "git@github.com:myorg/thing.git"}
        self.source.build("myorg-thing", options)
        assert options == {"git": "git@github.com:myorg/thing.git"}


class TestGitResolve:
    """Resolution hands off to the metadata fetcher."""

    def setup_method(self):
        self.source = GitSource()

    @patch("repository.metadata.fetch_dependencies")
    def test_credentials_sent_for_ssh_remotes(self, mock_fetch):
        mock_fetch.return_value = NoDependencies("none")
        record = self.source.build("myorg-thing", {"git": "git@github.com:myorg/thing.git"})

        resolved = self.source.resolve(record, ResolutionContext(credentials=CREDS))

        mock_fetch.assert_called_once_with("myorg-thing", "https://github.com/myorg/thing", "master", CREDS)
        assert resolved.dependencies == NoDependencies("none")
        assert record.dependencies is None

    @patch("repository.metadata.fetch_dependencies")
    def test_no_credentials_for_https_remotes(self, mock_fetch):
        mock_fetch.return_value = NoDependencies("none")
        record = self.source.build("myorg-thing", {"git": "https://github.com/myorg/thing.git", "ref": "abc123"})

        self.source.resolve(record, ResolutionContext(credentials=CREDS))

        mock_fetch.assert_called_once_with("myorg-thing", "https://github.com/myorg/thing", "abc123", None)
