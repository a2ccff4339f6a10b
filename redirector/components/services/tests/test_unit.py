"""
Services component unit tests.

Tests for hostname classification and registry construction.
"""

from __future__ import annotations

import pytest

from redirector.components.services import (
    DEFAULT_REGISTRY,
    MatchServiceInput,
    ServiceDescriptor,
    ServiceRegistry,
    run,
    run_match,
    suffix_matcher,
)

# --- Suffix Matcher Tests ---


class TestSuffixMatcher:
    """Test dot-boundary suffix matching."""

    def test_exact_domain_matches(self) -> None:
        assert suffix_matcher("youtube.com")("youtube.com") is True

    def test_subdomain_matches(self) -> None:
        assert suffix_matcher("youtube.com")("m.youtube.com") is True
        assert suffix_matcher("youtube.com")("www.youtube.com") is True

    def test_lookalike_domain_does_not_match(self) -> None:
        assert suffix_matcher("youtube.com")("notyoutube.com") is False
        assert suffix_matcher("x.com")("dropbox.com") is False

    def test_any_of_several_domains(self) -> None:
        matches = suffix_matcher("reddit.com", "redd.it")
        assert matches("old.reddit.com") is True
        assert matches("i.redd.it") is True
        assert matches("example.com") is False

    def test_case_and_trailing_dot_ignored(self) -> None:
        assert suffix_matcher("github.com")("GitHub.COM.") is True

    def test_empty_hostname_never_matches(self) -> None:
        assert suffix_matcher("github.com")("") is False

    def test_requires_a_domain(self) -> None:
        with pytest.raises(ValueError):
            suffix_matcher()


# --- Registry Tests ---


class TestServiceRegistry:
    """Test registry ordering and lookup."""

    def test_default_priority_order(self) -> None:
        assert DEFAULT_REGISTRY.identifiers == (
            "GitHub",
            "ChatGPT",
            "X (Twitter)",
            "Reddit",
            "Twitch",
            "YouTube",
            "Medium",
            "Bluesky",
            "Pixiv",
            "Soundcloud",
            "Genius",
        )

    @pytest.mark.parametrize(
        ("hostname", "expected"),
        [
            ("github.com", "GitHub"),
            ("chat.openai.com", "ChatGPT"),
            ("x.com", "X (Twitter)"),
            ("mobile.twitter.com", "X (Twitter)"),
            ("redd.it", "Reddit"),
            ("www.twitch.tv", "Twitch"),
            ("youtu.be", "YouTube"),
            ("blog.medium.com", "Medium"),
            ("bsky.app", "Bluesky"),
            ("www.pixiv.net", "Pixiv"),
            ("soundcloud.com", "Soundcloud"),
            ("genius.com", "Genius"),
        ],
    )
    def test_known_hosts(self, hostname: str, expected: str) -> None:
        assert DEFAULT_REGISTRY.match(hostname) == expected

    def test_unknown_host(self) -> None:
        assert DEFAULT_REGISTRY.match("example.org") is None

    def test_first_match_wins(self) -> None:
        registry = ServiceRegistry(
            [
                ServiceDescriptor.for_domains("Primary", "shared.example"),
                ServiceDescriptor.for_domains("Secondary", "shared.example"),
            ]
        )
        assert registry.match("www.shared.example") == "Primary"

    def test_get_is_case_sensitive(self) -> None:
        assert DEFAULT_REGISTRY.get("YouTube") is not None
        assert DEFAULT_REGISTRY.get("youtube") is None

    def test_config_key_is_lowercased_identifier(self) -> None:
        descriptor = DEFAULT_REGISTRY.get("X (Twitter)")
        assert descriptor is not None
        assert descriptor.config_key == "x (twitter)"

    def test_duplicate_identifier_rejected(self) -> None:
        with pytest.raises(ValueError, match="Duplicate"):
            ServiceRegistry(
                [
                    ServiceDescriptor.for_domains("YouTube", "youtube.com"),
                    ServiceDescriptor.for_domains("youtube", "invidious.example"),
                ]
            )

    def test_blank_identifier_rejected(self) -> None:
        with pytest.raises(ValueError):
            ServiceRegistry([ServiceDescriptor.for_domains(" ", "example.com")])

    def test_with_services_appends_without_mutating(self) -> None:
        extra = ServiceDescriptor.for_domains("Stack Overflow", "stackoverflow.com")
        extended = DEFAULT_REGISTRY.with_services(extra)

        assert extended.identifiers[-1] == "Stack Overflow"
        assert len(extended) == len(DEFAULT_REGISTRY) + 1
        assert DEFAULT_REGISTRY.get("Stack Overflow") is None

    def test_custom_predicate(self) -> None:
        descriptor = ServiceDescriptor(
            identifier="Localhost",
            host_matches=lambda host: host == "localhost",
        )
        registry = ServiceRegistry([descriptor])
        assert registry.match("localhost") == "Localhost"
        assert registry.match("example.com") is None


# --- Component Entry Point Tests ---


class TestRunMatch:
    """Test component entry points."""

    def test_run_match_default_registry(self) -> None:
        result = run_match(MatchServiceInput(hostname="www.youtube.com"))
        assert result.matched is True
        assert result.service_id == "YouTube"

    def test_run_match_no_match(self) -> None:
        result = run_match(MatchServiceInput(hostname="example.org"))
        assert result.matched is False

    def test_run_with_custom_registry(self) -> None:
        registry = ServiceRegistry([ServiceDescriptor.for_domains("Docs", "docs.example")])
        result = run(MatchServiceInput(hostname="docs.example"), registry=registry)
        assert result.service_id == "Docs"

    def test_run_rejects_unknown_input(self) -> None:
        with pytest.raises(ValueError):
            run("youtube.com", registry=DEFAULT_REGISTRY)  # type: ignore[arg-type]
