"""Tests for remote parsing and watched source eligibility."""

from dataclasses import dataclass, field

import pytest
from structlog.testing import capture_logs

from helpers import make_event
from pushgate.services.consumers import SourceKind, WatchedSource
from pushgate.services.errors import UnmatchableSourceUriError
from pushgate.services.matcher import RemoteUri, eligible_sources, source_matches


@dataclass
class _Owner:
    name: str = "multibranch"
    sources: list[WatchedSource] = field(default_factory=list)


class TestRemoteUri:
    """Remotes reduce to scheme, host, port and path."""

    @pytest.mark.parametrize(
        ("left", "right"),
        [
            ("https://gitlab.example.com/group/repo.git", "https://GitLab.example.com/group/repo"),
            ("https://gitlab.example.com:443/group/repo.git", "https://gitlab.example.com/group/repo/"),
            ("git@gitlab.example.com:group/repo.git", "ssh://git@gitlab.example.com/group/repo.git"),
            ("https://user@gitlab.example.com/group/repo.git", "https://gitlab.example.com/group/repo"),
        ],
    )
    def test_equivalent_remotes(self, left: str, right: str) -> None:
        assert RemoteUri.parse(left) == RemoteUri.parse(right)

    @pytest.mark.parametrize(
        ("left", "right"),
        [
            ("https://gitlab.example.com/group/repo.git", "https://gitlab.example.com/group/other.git"),
            ("https://gitlab.example.com/group/repo.git", "git@gitlab.example.com:group/repo.git"),
            ("https://gitlab.example.com:8443/group/repo.git", "https://gitlab.example.com/group/repo.git"),
        ],
    )
    def test_different_remotes(self, left: str, right: str) -> None:
        assert RemoteUri.parse(left) != RemoteUri.parse(right)

    def test_scp_like_remote(self) -> None:
        uri = RemoteUri.parse("git@gitlab.example.com:group/repo.git")
        assert (uri.scheme, uri.host, uri.path, uri.user) == (
            "ssh",
            "gitlab.example.com",
            "group/repo",
            "git",
        )

    def test_local_path(self) -> None:
        assert RemoteUri.parse("/srv/git/repo.git").scheme == "file"

    @pytest.mark.parametrize(
        "remote",
        [None, "", "   ", "has space/repo.git", "https://", "http://[::1/repo.git", "repo"],
    )
    def test_unparseable_remote(self, remote: str | None) -> None:
        with pytest.raises(UnmatchableSourceUriError):
            RemoteUri.parse(remote)


class TestSourceMatches:
    """Eligibility defaults to the self-comparison; event matching is opt-in."""

    def test_any_parseable_remote_matches_by_default(self) -> None:
        source = WatchedSource(remote="https://elsewhere.example.com/other/thing.git")
        assert source_matches(source, make_event()) is True

    def test_event_matching_accepts_same_repository(self) -> None:
        source = WatchedSource(remote="https://gitlab.example.com/group/repo.git")
        assert source_matches(source, make_event(), match_event_repository=True) is True

    def test_event_matching_accepts_ssh_url(self) -> None:
        source = WatchedSource(remote="ssh://git@gitlab.example.com/group/repo.git")
        assert source_matches(source, make_event(), match_event_repository=True) is True

    def test_event_matching_rejects_other_repository(self) -> None:
        source = WatchedSource(remote="https://gitlab.example.com/group/other.git")
        assert source_matches(source, make_event(), match_event_repository=True) is False

    def test_unparseable_remote_raises(self) -> None:
        with pytest.raises(UnmatchableSourceUriError):
            source_matches(WatchedSource(remote=""), make_event())


class TestEligibleSources:
    """Only git sources with parseable remotes are yielded, in order."""

    def test_keeps_configured_order(self) -> None:
        owner = _Owner(
            sources=[
                WatchedSource(remote="https://gitlab.example.com/a/one.git"),
                WatchedSource(remote="https://gitlab.example.com/a/two.git"),
            ]
        )
        remotes = [s.remote for s in eligible_sources(owner, make_event())]
        assert remotes == [
            "https://gitlab.example.com/a/one.git",
            "https://gitlab.example.com/a/two.git",
        ]

    def test_skips_non_git_sources(self) -> None:
        owner = _Owner(
            sources=[
                WatchedSource(remote="https://svn.example.com/repo", kind=SourceKind.OTHER),
                WatchedSource(remote="https://gitlab.example.com/group/repo.git"),
            ]
        )
        assert [s.kind for s in eligible_sources(owner, make_event())] == [SourceKind.GIT]

    def test_skips_unparseable_remote_silently(self) -> None:
        owner = _Owner(
            sources=[
                WatchedSource(remote="not a remote"),
                WatchedSource(remote="https://gitlab.example.com/group/repo.git"),
            ]
        )
        with capture_logs() as logs:
            sources = list(eligible_sources(owner, make_event()))

        assert [s.remote for s in sources] == ["https://gitlab.example.com/group/repo.git"]
        assert logs[0]["event"] == "unmatchable_source_remote"
        assert logs[0]["log_level"] == "debug"

    def test_event_matching_filters_other_repositories(self) -> None:
        owner = _Owner(
            sources=[
                WatchedSource(remote="https://gitlab.example.com/group/other.git"),
                WatchedSource(remote="git@gitlab.example.com:group/repo.git"),
            ]
        )
        sources = list(eligible_sources(owner, make_event(), match_event_repository=True))
        assert [s.remote for s in sources] == ["git@gitlab.example.com:group/repo.git"]
