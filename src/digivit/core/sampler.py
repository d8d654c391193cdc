"""Sequential poll/parse/log loop for one digiVIT acquisition run."""

from __future__ import annotations

import logging
import math
import time
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Callable, List, Optional

from ..analysis.stats import summarize
from ..config.app_config import AppPaths
from ..config.session import SessionConfig
from ..dataio import csv_writer, file_paths
from ..protocol.codec import ParseError, counts_to_mm, decode_reply, encode_command
from ..protocol.transport import ReplyTimeout, Transport, UdpTransport
from .models import RunResult, Sample

logger = logging.getLogger(__name__)

# Intervals at or above this many seconds persist each sample as it arrives.
INCREMENTAL_THRESHOLD_S = 5.0

StartCallback = Callable[[SessionConfig, bool, Path], None]
SampleCallback = Callable[[Sample, int], None]


def select_incremental(sample_interval_s: float) -> bool:
    """Return True when samples should be written one at a time."""
    return sample_interval_s >= INCREMENTAL_THRESHOLD_S


@dataclass
class RunContext:
    """State owned by a single run and threaded through the loop."""

    config: SessionConfig
    transport: Transport
    output_path: Path
    incremental: bool
    samples: List[Sample] = field(default_factory=list)
    had_error: bool = False

    def elapsed_for(self, index: int) -> float:
        return (index - 1) * self.config.sample_interval_s


def poll(ctx: RunContext) -> int:
    """Send the read command and decode the reply into counts.

    Raises :class:`ReplyTimeout` (or another ``OSError``) or :class:`ParseError` on failure.
    """
    ctx.transport.send(encode_command(), ctx.config.sensor_endpoint)
    reply = ctx.transport.receive(ctx.config.reply_timeout_s)
    return decode_reply(reply)


def take_sample(ctx: RunContext, index: int) -> Sample:
    """Poll once and build the sample; failed reads become NaN and set the error flag.

    Any socket error during the poll (a :class:`ReplyTimeout`, or e.g. a
    connection reset after an ICMP port-unreachable) counts as a failed read.
    """
    try:
        counts: float = poll(ctx)
    except ReplyTimeout as exc:
        logger.warning("Sample %d: %s", index, exc)
        ctx.had_error = True
        counts = math.nan
    except OSError as exc:
        logger.warning("Sample %d: read failed: %s", index, exc)
        ctx.had_error = True
        counts = math.nan
    except ParseError as exc:
        logger.warning("Sample %d: %s", index, exc)
        ctx.had_error = True
        counts = math.nan
    return Sample(
        index=index,
        elapsed_s=ctx.elapsed_for(index),
        raw_counts=counts,
        position_mm=counts_to_mm(counts),
    )


def _loop(
    ctx: RunContext,
    sleep: Callable[[float], None],
    on_sample: Optional[SampleCallback],
) -> None:
    total = ctx.config.sample_count
    for index in range(1, total + 1):
        sample = take_sample(ctx, index)
        ctx.samples.append(sample)
        if on_sample is not None:
            on_sample(sample, total)
        if ctx.incremental:
            csv_writer.append_row(ctx.output_path, sample)
        if index < total:
            sleep(ctx.config.sample_interval_s)


def run(
    config: SessionConfig,
    transport: Optional[Transport] = None,
    *,
    output_dir: Optional[Path] = None,
    sleep: Callable[[float], None] = time.sleep,
    now: Optional[datetime] = None,
    on_start: Optional[StartCallback] = None,
    on_sample: Optional[SampleCallback] = None,
) -> RunResult:
    """
    Acquire ``config.sample_count`` samples and write them to a CSV log.

    Parameters
    ----------
    config:
        Validated session settings.
    transport:
        Optional pre-opened transport. When omitted a :class:`UdpTransport`
        is bound to ``config.host_address`` for the duration of the run and
        closed afterwards, even if the loop raises.
    output_dir:
        Directory for the log file; defaults to :class:`AppPaths`.
    sleep, now:
        Injection points for the inter-sample delay and the run-start time.
    on_start, on_sample:
        Reporting hooks, called once before the first poll and after every
        sample respectively.

    File write errors propagate; failed polls do not.
    """
    if output_dir is None:
        paths = AppPaths()
        paths.ensure()
        output_dir = paths.output_dir
    else:
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)

    output_path = file_paths.log_path(output_dir, now or datetime.now())
    incremental = select_incremental(config.sample_interval_s)
    logger.info(
        "Starting run: %d samples every %.2f s -> %s (%s)",
        config.sample_count,
        config.sample_interval_s,
        output_path,
        "incremental" if incremental else "one-time",
    )
    if on_start is not None:
        on_start(config, incremental, output_path)

    if transport is None:
        with UdpTransport(config.host_address, config.local_port) as udp:
            ctx = RunContext(config, udp, output_path, incremental)
            _loop(ctx, sleep, on_sample)
    else:
        ctx = RunContext(config, transport, output_path, incremental)
        _loop(ctx, sleep, on_sample)

    if not incremental:
        csv_writer.write_rows(output_path, ctx.samples)

    return RunResult(
        samples=ctx.samples,
        had_error=ctx.had_error,
        output_path=output_path,
        incremental=incremental,
        stats=summarize(ctx.samples),
    )
