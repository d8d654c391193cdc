"""Command-line front end for logging digiVIT position data.

Run as::

    digivit-reader 192.168.0.145 192.168.0.10 0.5 100
    python -m digivit --config session.yaml --output-dir data

The four positional arguments mirror the original acquisition script
(sensor IP, host IP, interval in seconds, number of samples). Any of them
may instead come from a YAML file given with ``--config``.

An existing log can be summarised again without a sensor::

    digivit-reader --review logged_digiVIT_data_9-Oct-2023_14_05_09.csv
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Any, Dict, Sequence

from .analysis.stats import summarize
from .config import DEFAULT_SENSOR_ADDRESS, ConfigError, SessionConfig, load_defaults
from .core.models import RunResult, RunStats, Sample
from .core.sampler import run
from .dataio.log_loader import LogFormatError, load_samples

_WRITE_MODES = {True: "Incremental", False: "One-time"}


# --------------------------------------------------------------------------- # reporting
def print_start_summary(config: SessionConfig, incremental: bool, output_path: Path) -> None:
    print()
    print(f"digiVIT sensor IP address: {config.sensor_address}")
    print(f"Host IP address: {config.host_address}")
    print(f"Position read interval (seconds): {config.sample_interval_s:3.2f}")
    print(f"No. of position samples to take: {config.sample_count}")
    print(f"Logfile write mode: {_WRITE_MODES[incremental]}")
    print(f"Logfile: {output_path}")


def print_progress(sample: Sample, total: int) -> None:
    print(
        f"Sample {sample.index} of {total}: t={sample.elapsed_s:.2f} s, "
        f"counts={sample.raw_counts:.0f}, position={sample.position_mm:.5f} mm",
        flush=True,
    )


def _print_stats(stats: RunStats) -> None:
    print(f" * No. of samples recorded: {stats.sample_count}")
    print(
        " * Mean (average) of position data: "
        f"{stats.mean_counts:3.0f} counts ({stats.mean_mm:3.5f} mm)"
    )
    print(
        " * Standard deviation of position data: "
        f"{stats.std_counts:3.0f} counts ({stats.std_mm:3.5f} mm)"
    )


def print_end_summary(result: RunResult, config: SessionConfig) -> None:
    print("\n\n Summary\n -------")
    print(f" * Sampling interval: {config.sample_interval_s:3.2f} second(s)")
    _print_stats(result.stats)
    if result.had_error:
        print(
            " * Warning: Logged data suffered one or more acquisition errors, "
            "and will contain NaN entries!"
        )
    else:
        print(" * All samples were read successfully.")
    print(f" * Logged data written to: {result.output_path}")
    print()


def print_review(path: Path, samples: Sequence[Sample]) -> None:
    print(f"\n Review of {path}\n -------")
    _print_stats(summarize(samples))
    missing = sum(1 for s in samples if s.is_missing)
    if missing:
        print(f" * Warning: {missing} sample(s) are NaN (failed reads).")
    else:
        print(" * All samples hold valid readings.")
    print()


# --------------------------------------------------------------------------- # CLI
def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="digivit-reader",
        description="Poll a Kaman digiVIT position sensor over UDP and log to CSV.",
    )
    parser.add_argument(
        "sensor_address",
        nargs="?",
        help=f"IP address of the digiVIT sensor (default: {DEFAULT_SENSOR_ADDRESS})",
    )
    parser.add_argument(
        "host_address",
        nargs="?",
        help="IP address of this machine, on the same subnet as the sensor",
    )
    parser.add_argument(
        "sample_interval_s",
        nargs="?",
        help="Interval between samples in seconds",
    )
    parser.add_argument(
        "sample_count",
        nargs="?",
        help="Total number of samples to take",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=str,
        default=None,
        help="YAML file with session defaults (positional arguments override it)",
    )
    parser.add_argument(
        "-o",
        "--output-dir",
        type=str,
        default=None,
        help="Directory for the log file (default: $DIGIVIT_DATA_DIR or the current directory)",
    )
    parser.add_argument(
        "--review",
        type=str,
        default=None,
        metavar="LOG",
        help="Summarise an existing log file instead of acquiring new data",
    )
    parser.add_argument(
        "--log-level",
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        default="WARNING",
        help="Diagnostic logging level (default: WARNING)",
    )
    return parser


def _merge_settings(args: argparse.Namespace) -> Dict[str, Any]:
    settings = load_defaults(args.config)
    for key in ("sensor_address", "host_address", "sample_interval_s", "sample_count"):
        value = getattr(args, key)
        if value is not None:
            settings[key] = value
    settings.setdefault("sensor_address", DEFAULT_SENSOR_ADDRESS)
    return settings


def _review(path: Path) -> int:
    try:
        samples = load_samples(path)
    except (OSError, LogFormatError) as exc:
        print(f"[ERROR] {exc}")
        return 1
    print_review(path, samples)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_arg_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.review:
        return _review(Path(args.review).expanduser())

    try:
        settings = _merge_settings(args)
        config = SessionConfig.from_mapping(settings)
    except ConfigError as exc:
        parser.error(str(exc))

    output_dir_arg = args.output_dir or settings.get("output_dir")
    output_dir = Path(output_dir_arg).expanduser() if output_dir_arg else None

    try:
        result = run(
            config,
            output_dir=output_dir,
            on_start=print_start_summary,
            on_sample=print_progress,
        )
    except KeyboardInterrupt:
        print("\nAcquisition interrupted by user.")
        return 130
    except OSError as exc:
        print(f"[ERROR] {exc}")
        return 1

    print_end_summary(result, config)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
