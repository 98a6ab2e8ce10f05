# reel_engine/main.py
import os
import sys
import json
import logging
import argparse
import time
import uuid

from reel_engine.infrastructure.config.loaders.yaml_loader import YamlConfigLoader, ConfigError
from reel_engine.infrastructure.config.validators.schema_validator import SchemaValidator
from reel_engine.infrastructure.logging.log_manager import initialize_logging
from reel_engine.infrastructure.output.profile_store import ProfileStore
from reel_engine.infrastructure.rng.rng_provider import RNGProvider

from reel_engine.domain.animation.entities.spin_animation import SpinAnimation
from reel_engine.domain.animation.services.reel_aligner import ReelAligner
from reel_engine.domain.errors import ConfigurationError
from reel_engine.domain.events.event_dispatcher import EventDispatcher
from reel_engine.domain.events.session_events import SessionEventType
from reel_engine.domain.machine.factories.machine_factory import MachineFactory
from reel_engine.domain.session.entities.game_session import GameSession, SpinMode

from reel_engine.application.simulation.game_runner import GameRunner


CONFIG_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "application", "config")
DEFAULT_CONFIG_PATH = os.path.join(CONFIG_DIR, "default_game.yaml")
SCHEMA_PATH = os.path.join(CONFIG_DIR, "schemas", "game_schema.json")


def parse_arguments(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Reel-based slot game engine")

    parser.add_argument(
        "-c", "--config",
        default=DEFAULT_CONFIG_PATH,
        help="Path to game configuration file"
    )

    parser.add_argument(
        "-n", "--spins",
        type=int,
        default=100,
        help="Number of spins to play"
    )

    parser.add_argument(
        "--mode",
        choices=[m.value for m in SpinMode],
        default=None,
        help="Drawing mode (overrides machine.mode in the configuration)"
    )

    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for the random number generator"
    )

    parser.add_argument(
        "--rng",
        choices=list(RNGProvider.get_available_strategies().keys()),
        default=None,
        help="RNG strategy (overrides rng.strategy in the configuration)"
    )

    parser.add_argument(
        "--no-profile",
        action="store_true",
        help="Do not read or update the player profile"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output"
    )

    parser.add_argument(
        "--log-mode",
        choices=["all", "domain", "none"],
        default=None,
        help="Select logging mode: 'all'=verbose, 'domain'=domain only, 'none'=minimal"
    )

    return parser.parse_args(argv)


def _apply_log_mode(config, args):
    log_config = config.setdefault("logging", {}) or {}
    log_config.setdefault("loggers", {})

    if args.log_mode == "all":
        log_config["level"] = "DEBUG"
        log_config["console_level"] = "DEBUG"
    elif args.log_mode == "domain":
        log_config["level"] = "WARNING"
        log_config["console_level"] = "DEBUG"
        log_config["loggers"]["domain"] = {"level": "DEBUG"}
        log_config["loggers"]["application"] = {"level": "WARNING"}
        log_config["loggers"]["infrastructure"] = {"level": "WARNING"}
    elif args.log_mode == "none":
        log_config["level"] = "WARNING"
        log_config["console_level"] = "WARNING"

    if args.verbose:
        log_config["level"] = "DEBUG"
        log_config["console_level"] = "DEBUG"
        for logger_config in log_config["loggers"].values():
            logger_config["level"] = "DEBUG"

    config["logging"] = log_config


def main(argv=None):
    """Main entry point: play a number of spins and report the outcome."""
    args = parse_arguments(argv)
    start_time = time.time()

    config_loader = YamlConfigLoader(SchemaValidator())
    try:
        config = config_loader.load_file(args.config, SCHEMA_PATH)
    except ConfigError as e:
        print(f"Error loading configuration: {str(e)}", file=sys.stderr)
        return 1

    _apply_log_mode(config, args)
    initialize_logging(config.get("logging", {}))
    logger = logging.getLogger("application.main")
    logger.info(f"Loaded configuration from {args.config}")

    rng_config = config.setdefault("rng", {}) or {}
    if args.seed is not None:
        rng_config["seed"] = args.seed
    if args.rng:
        rng_config["strategy"] = args.rng
    config["rng"] = rng_config

    mode = SpinMode(args.mode or config.get("machine", {}).get("mode", SpinMode.SIMPLE.value))

    try:
        factory = MachineFactory(RNGProvider())
        machine = factory.create_machine(config.get("machine_id", "machine"), config)

        animation = None
        if mode == SpinMode.ANIMATED:
            animation = SpinAnimation(
                machine.catalog.symbols,
                len(machine.reels),
                config.get("animation", {}),
                ReelAligner(machine.rng),
            )

        event_dispatcher = EventDispatcher()
        event_dispatcher.register(
            SessionEventType.BIG_WIN,
            lambda event: logger.info(f"BIG WIN: {event.data['payout']:.2f} on a {event.data['bet']:.2f} bet")
        )
        event_dispatcher.register(
            SessionEventType.BALANCE_DEPLETED,
            lambda event: logger.info(f"Balance depleted at {event.data['pool']:.2f}")
        )

        session = GameSession(
            f"session_{uuid.uuid4().hex[:8]}",
            machine,
            config.get("session", {}),
            mode=mode,
            animation=animation,
            event_dispatcher=event_dispatcher,
        )
    except ConfigurationError as e:
        logger.error(f"Invalid game configuration: {str(e)}")
        return 1

    runner = GameRunner(session, {"frame_time": config.get("animation", {}).get("frame_time", 0.016)})
    summary = runner.run(args.spins)

    profile_config = config.get("profile", {}) or {}
    if profile_config.get("enabled", True) and not args.no_profile:
        store = ProfileStore(profile_config.get("path", "player.json"))
        profile = store.load()
        store.update_exp(profile.exp + summary["spins"])
        if summary["peak_pool"] > profile.highscore:
            store.update_highscore(int(summary["peak_pool"]))
            logger.info(f"New highscore: {int(summary['peak_pool'])}")

    print(json.dumps(summary, indent=2, ensure_ascii=False))
    logger.info(f"Finished in {time.time() - start_time:.2f}s")
    return 0


if __name__ == "__main__":
    sys.exit(main())
