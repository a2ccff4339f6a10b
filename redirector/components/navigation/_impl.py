"""
Redirect decision pipeline - pure evaluation of one navigation event.

Key behaviors:
- Only top-level http(s) navigations are considered
- Nothing fires until a redirect configuration exists and onboarding is complete
- Services are evaluated in registry order; the first enabled match wins
- Path, query and fragment of the original URL are carried onto the instance
- A target on the original host (or equal to the original URL) aborts the pass
"""

from __future__ import annotations

import logging
from urllib.parse import SplitResult, urlsplit, urlunsplit

from redirector.components.services import (
    DEFAULT_REGISTRY,
    ServiceRegistry,
    canonical_host,
)

from .models import (
    ConfigSnapshot,
    DecisionReason,
    NavigationEvent,
    RedirectDecision,
)

logger = logging.getLogger(__name__)

WEB_SCHEMES = ("http", "https")
DEFAULT_PORTS = {"http": 80, "https": 443}
INSTANCE_SCHEME_PREFIXES = ("http://", "https://")

# Characters a URL host can never contain
_FORBIDDEN_HOST_CHARS = frozenset(" \t\r\n<>\"{}|\\^`")


# --- URL Helpers ---


def url_scheme(url: str) -> str:
    """Lower-cased scheme of a URL, or "" when it has none."""
    scheme, sep, _ = url.partition(":")
    if not sep:
        return ""
    return scheme.strip().lower()


def is_eligible(event: NavigationEvent) -> bool:
    """Only main-frame navigations to web URLs are redirect candidates."""
    if not event.is_top_level or not event.url:
        return False
    return url_scheme(event.url) in WEB_SCHEMES


def extract_hostname(url: str) -> str:
    """
    Hostname of a URL.

    Raises ValueError if the URL cannot be parsed or has no host.
    """
    hostname = urlsplit(url).hostname
    if not hostname:
        raise ValueError(f"URL has no hostname: {url!r}")
    return hostname


def normalize_instance(instance: str) -> str:
    """Prepend https:// to an instance given as a bare host."""
    instance = instance.strip()
    if instance.lower().startswith(INSTANCE_SCHEME_PREFIXES):
        return instance
    return "https://" + instance


def _instance_netloc(instance: SplitResult) -> str:
    host = instance.hostname
    if not host or any(c in _FORBIDDEN_HOST_CHARS for c in host):
        raise ValueError(f"Invalid instance host in {instance.geturl()!r}")

    # Raises ValueError on a non-numeric or out of range port
    port = instance.port

    netloc = f"[{host}]" if ":" in host else host
    if port is not None and port != DEFAULT_PORTS.get(instance.scheme):
        netloc = f"{netloc}:{port}"
    if instance.username is not None:
        userinfo = instance.username
        if instance.password is not None:
            userinfo = f"{userinfo}:{instance.password}"
        netloc = f"{userinfo}@{netloc}"
    return netloc


def synthesize_url(instance_url: str, original_url: str) -> str:
    """
    Build the redirect target.

    Scheme, host and port come from the instance; path, query and fragment
    are copied verbatim from the original URL. An instance path is dropped.

    Raises ValueError if the instance is not a usable http(s) URL.
    """
    instance = urlsplit(instance_url)
    if instance.scheme not in WEB_SCHEMES:
        raise ValueError(f"Unsupported instance scheme in {instance_url!r}")

    netloc = _instance_netloc(instance)
    original = urlsplit(original_url)

    return urlunsplit(
        (
            instance.scheme,
            netloc,
            original.path or "/",
            original.query,
            original.fragment,
        )
    )


def is_loop(candidate_url: str, original_url: str, original_host: str) -> bool:
    """
    A target on the original host, or equal to the original URL, would loop.

    Hosts are compared the way service predicates see them, so
    "youtube.com." and "YouTube.com" are the same host.
    """
    if candidate_url == original_url:
        return True
    try:
        candidate_host = extract_hostname(candidate_url)
    except ValueError:
        return True
    return canonical_host(candidate_host) == canonical_host(original_host)


# --- Decision Pipeline ---


def _check_config(snapshot: ConfigSnapshot | None) -> DecisionReason | None:
    if snapshot is None or snapshot.redirect_rules is None:
        logger.info("No redirect settings configured; navigation left unchanged")
        return DecisionReason.CONFIG_MISSING
    if not snapshot.onboarding_complete:
        logger.info("Onboarding incomplete; navigation left unchanged")
        return DecisionReason.ONBOARDING_INCOMPLETE
    return None


def decide(
    event: NavigationEvent,
    snapshot: ConfigSnapshot | None,
    registry: ServiceRegistry | None = None,
) -> RedirectDecision:
    """
    Evaluate a navigation event against a configuration snapshot.

    Returns a REDIRECT decision for the first enabled, correctly configured
    service whose hostname predicate matches, or a NONE decision with the
    reason evaluation stopped.
    """
    if not is_eligible(event):
        logger.debug("Ignoring navigation %s (frame %s)", event.url, event.frame_id)
        return RedirectDecision.none(DecisionReason.INELIGIBLE)

    reason = _check_config(snapshot)
    if reason is not None:
        return RedirectDecision.none(reason)
    assert snapshot is not None

    try:
        original_host = extract_hostname(event.url)
    except ValueError as e:
        logger.error("Cannot parse navigation URL %s: %s", event.url, e)
        return RedirectDecision.none(DecisionReason.INVALID_URL)

    active = registry if registry is not None else DEFAULT_REGISTRY
    logger.debug("Checking host %s against %d services", original_host, len(active))

    for service in active:
        rule = snapshot.rule_for(service.identifier)
        if rule is None or not rule.is_enabled:
            continue
        if not service.host_matches(original_host):
            continue

        if not rule.chosen_instance or not rule.chosen_instance.strip():
            logger.warning(
                "Service %r is enabled but has no chosen instance", service.identifier
            )
            continue

        instance_url = normalize_instance(rule.chosen_instance)
        if instance_url != rule.chosen_instance.strip():
            logger.debug(
                "Instance %r for %r has no scheme, using %s",
                rule.chosen_instance,
                service.identifier,
                instance_url,
            )

        try:
            target_url = synthesize_url(instance_url, event.url)
        except ValueError as e:
            logger.error(
                "Cannot build redirect URL from instance %r for %r: %s",
                instance_url,
                service.identifier,
                e,
            )
            continue

        if is_loop(target_url, event.url, original_host):
            logger.warning(
                "Loop detected for %r: %s -> %s; redirect aborted",
                service.identifier,
                event.url,
                target_url,
            )
            return RedirectDecision.none(
                DecisionReason.LOOP_DETECTED, service_id=service.identifier
            )

        logger.info("Match for %r: %s -> %s", service.identifier, event.url, target_url)
        return RedirectDecision.redirect(target_url, service.identifier)

    logger.debug("No enabled rule matches %s", event.url)
    return RedirectDecision.none(DecisionReason.NO_MATCH)
