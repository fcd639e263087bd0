#!/usr/bin/env python3
"""
Demo runner for the heading pipeline.

Feeds a mock sensor source (synthetic device or JSONL replay) through
CompassObserver and prints every bearing change, as a text display would.

Usage:
    python -m compass.main synthetic --duration 10 --mode quadrant
    python -m compass.main replay logs/session_x/samples.jsonl --fast
    python -m compass.main synthetic --record logs
"""

import argparse
import logging
import sys
import time
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

from compass.core.heading.heading_estimator import HeadingEstimator
from compass.core.mock_sensor_source import MockSensorSource
from compass.core.observer import CompassObserver
from compass.core.telemetry.loggers.heading_logger import get_heading_logger
from compass.core.telemetry.loggers.sample_recorder import SampleRecorder
from compass.utils.config import Config
from compass.utils.config_sections import (
    load_formatter_config,
    load_mock_source_config,
    load_smoothing_config,
    load_throttle_config,
)
from compass.utils.ctrl_handler import CtrlCHandler

log = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Compass heading pipeline demo")
    parser.add_argument("source", nargs="?", default=Config.MOCK_SOURCE_MODE,
                        choices=["synthetic", "replay"], help="Sensor source")
    parser.add_argument("replay_path", nargs="?", default=None,
                        help="JSONL recording (replay source only)")
    parser.add_argument("--mode", default=Config.BEARING_MODE,
                        choices=["sixteen_point", "quadrant"], help="Bearing notation")
    parser.add_argument("--alpha", type=float, default=Config.SMOOTHING_ALPHA,
                        help="Low-pass coefficient in (0, 1], 1 = unfiltered")
    parser.add_argument("--linear", action="store_true",
                        help="Blend linearly across 0°/360° instead of along the shortest arc")
    parser.add_argument("--interval-ms", type=float, default=Config.THROTTLE_INTERVAL_S * 1000,
                        help="Minimum time between processed sensor events, 0 = every event")
    parser.add_argument("--duration", type=float, default=10.0,
                        help="Seconds of sensor data to run")
    parser.add_argument("--rate", type=float, default=Config.MOCK_SAMPLE_RATE_HZ,
                        help="Synthetic samples per second per sensor")
    parser.add_argument("--turn-rate", type=float, default=Config.MOCK_TURN_RATE_DPS,
                        help="Synthetic device rotation speed (deg/s)")
    parser.add_argument("--seed", type=int, default=Config.MOCK_SEED,
                        help="Synthetic noise seed")
    parser.add_argument("--fast", action="store_true",
                        help="Push events as fast as possible instead of in real time")
    parser.add_argument("--record", type=Path, default=None, metavar="DIR",
                        help="Record samples and headings into a session under DIR")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser


def build_observer(args: argparse.Namespace, session_dir: Optional[Path] = None) -> CompassObserver:
    """Assemble estimator and observer from Config defaults plus CLI overrides."""
    estimator = HeadingEstimator(
        smoothing_config=replace(load_smoothing_config(), alpha=args.alpha, circular=not args.linear),
        throttle_config=replace(load_throttle_config(), interval=args.interval_ms / 1000.0),
        formatter_config=replace(load_formatter_config(), mode=args.mode),
    )

    solver_logger = output_logger = None
    if session_dir is not None:
        heading_logger = get_heading_logger(session_dir=session_dir)
        solver_logger, output_logger = heading_logger.solver, heading_logger.output

    return CompassObserver(estimator, solver_logger=solver_logger, output_logger=output_logger)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Entry point: source -> observer -> printed bearing changes.
    """
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
    )

    try:
        source = MockSensorSource(
            mode=args.source,
            sample_rate_hz=args.rate,
            replay_path=args.replay_path,
            config=replace(load_mock_source_config(), turn_rate_dps=args.turn_rate, seed=args.seed),
        )
    except ValueError as e:
        log.error("Cannot start sensor source: %s", e)
        return 2

    recorder = SampleRecorder(output_dir=args.record) if args.record is not None else None
    observer = build_observer(args, recorder.get_session_dir() if recorder else None)
    observer.add_text_listener(lambda text: print(f"\r🧭 {text:<24}", end="", flush=True))

    sink = observer.on_sensor_changed
    if recorder is not None:
        observer.add_update_listener(recorder.log_heading)
        sink = recorder.wrap(sink)

    try:
        if args.fast:
            for event in source.events(args.duration):
                sink(event)
        else:
            ctrl_handler = CtrlCHandler()
            source.start(sink, duration=args.duration)
            while source.running and not ctrl_handler.should_stop:
                time.sleep(0.05)
            source.stop()
    finally:
        print()
        observer.print_stats()
        if recorder is not None:
            recorder.finalize_session()

    return 0


if __name__ == "__main__":
    sys.exit(main())
