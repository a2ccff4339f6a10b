import argparse
import logging
import os
import sys
from pathlib import Path

from redirector.components.navigation import (
    DecideInput,
    NavigationEvent,
    RedirectDecision,
    run_decide,
)
from redirector.components.services import ServiceRegistry
from redirector.rules.loader import load_user_configuration
from redirector.rules.models import UserConfiguration

logging.basicConfig(
    level=logging.WARNING,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger("cli")

CONFIG_PATH = os.environ.get("REDIRECTOR_CONFIG_PATH", "redirects.yaml")


def get_configuration(path: Path) -> UserConfiguration:
    try:
        return load_user_configuration(path)
    except FileNotFoundError:
        logger.error("Configuration file %s not found.", path)
        sys.exit(1)
    except ValueError as e:
        logger.error("Configuration file %s is invalid: %s", path, e)
        sys.exit(1)


def get_registry(config: UserConfiguration, path: Path) -> ServiceRegistry:
    try:
        return config.build_registry()
    except ValueError as e:
        logger.error("Extra services in %s are invalid: %s", path, e)
        sys.exit(1)


def format_decision(decision: RedirectDecision) -> str:
    if decision.is_redirect:
        return f"REDIRECT {decision.target_url} ({decision.service_id})"
    if decision.service_id:
        return f"NONE ({decision.reason.value}, {decision.service_id})"
    return f"NONE ({decision.reason.value})"


def handle_check(args: argparse.Namespace) -> None:
    path = Path(args.config)
    config = get_configuration(path)
    registry = get_registry(config, path)
    event = NavigationEvent(url=args.url, frame_id=args.frame_id, tab_id=args.tab_id)
    decision = run_decide(
        DecideInput(
            event=event,
            snapshot=config.to_snapshot(),
            registry=registry,
        )
    )
    print(format_decision(decision))


def handle_services(args: argparse.Namespace) -> None:
    path = Path(args.config)
    config = get_configuration(path)
    settings = config.redirect_settings or {}
    for descriptor in get_registry(config, path):
        setting = settings.get(descriptor.config_key)
        if setting is None:
            state = "unconfigured"
        elif setting.is_enabled:
            state = f"enabled -> {setting.chosen_instance or '<no instance>'}"
        else:
            state = "disabled"
        print(f"{descriptor.identifier}: {', '.join(descriptor.domains)} [{state}]")


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Instance Redirector CLI")
    parser.add_argument("--config", default=CONFIG_PATH, help="Path to redirects.yaml")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log decision details")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # check
    check_parser = subparsers.add_parser("check", help="Show the redirect decision for a URL")
    check_parser.add_argument("url", help="URL being navigated to")
    check_parser.add_argument("--frame-id", type=int, default=0, help="Frame id (0 = top level)")
    check_parser.add_argument("--tab-id", type=int, default=1, help="Tab id")

    # services
    subparsers.add_parser("services", help="List known services in priority order")

    args = parser.parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    if args.command == "check":
        handle_check(args)
    elif args.command == "services":
        handle_services(args)


if __name__ == "__main__":
    main()
