"""Tests for module source selection."""

from unittest.mock import patch

import pytest

from constants import ModuleSources
from puppetfile.classifier import ModuleClassifier, default_sources
from puppetfile.errors import NoMatchingImplementationError
from puppetfile.models import ForgeModule, GitModule
from registry.forge import ForgeSource
from repository.git import GitSource


class TestDefaultSources:
    """Built-in source order."""

    def test_forge_then_git(self):
        kinds = [s.kind for s in default_sources()]
        assert kinds == [ModuleSources.FORGE, ModuleSources.GIT]

    def test_each_call_builds_fresh_list(self):
        assert default_sources() is not default_sources()


class TestSelect:
    """First-match selection."""

    def setup_method(self):
        self.classifier = ModuleClassifier()

    def test_versioned_title_goes_to_forge(self):
        assert self.classifier.select("puppetlabs-stdlib", "6.0.0").kind == ModuleSources.FORGE

    def test_git_options_go_to_git(self):
        source = self.classifier.select("myorg-thing", {"git": "git@github.com:myorg/thing.git"})
        assert source.kind == ModuleSources.GIT

    def test_no_match_names_title_and_options(self):
        with pytest.raises(NoMatchingImplementationError) as exc:
            self.classifier.select("stdlib", None)
        assert str(exc.value) == "No implementation for Module stdlib with args None"

    def test_hash_without_git_key_has_no_match(self):
        options = {"branch": "main"}
        with pytest.raises(NoMatchingImplementationError) as exc:
            self.classifier.select("myorg-thing", options)
        assert "{'branch': 'main'}" in str(exc.value)

    def test_git_matcher_false_branch_short_circuits(self):
        """Git listed first must not swallow forge declarations."""
        classifier = ModuleClassifier([GitSource(), ForgeSource()])
        assert classifier.select("puppetlabs-stdlib", "6.0.0").kind == ModuleSources.FORGE

        git_only = ModuleClassifier([GitSource()])
        with pytest.raises(NoMatchingImplementationError):
            git_only.select("puppetlabs-stdlib", "6.0.0")

    def test_selection_is_deterministic(self):
        declarations = [
            ("puppetlabs-stdlib", "6.0.0"),
            ("puppetlabs/apache", "latest"),
            ("myorg-thing", {"git": "https://github.com/myorg/thing", "tag": "v1"}),
        ]
        first = [self.classifier.select(t, o).kind for t, o in declarations]
        for _ in range(5):
            assert [self.classifier.select(t, o).kind for t, o in declarations] == first

    def test_empty_source_list(self):
        with pytest.raises(NoMatchingImplementationError):
            ModuleClassifier([]).select("puppetlabs-stdlib", "6.0.0")


class TestClassify:
    """classify builds records without touching the network."""

    @patch("repository.metadata.fetch_text")
    @patch("registry.forge.safe_get")
    def test_no_network_access(self, mock_get, mock_fetch):
        classifier = ModuleClassifier()

        forge = classifier.classify("puppetlabs-stdlib", "6.0.0")
        git = classifier.classify("myorg-thing", {"git": "git@github.com:myorg/thing.git"})

        assert isinstance(forge, ForgeModule)
        assert isinstance(git, GitModule)
        assert forge.dependencies is None and git.dependencies is None
        mock_get.assert_not_called()
        mock_fetch.assert_not_called()
