"""Demo entry point: generates sample events and ships them to a collector."""

import argparse
import asyncio
import dataclasses
import logging
import random
import signal

from logbatch import LoggingAgent, load_config

SAMPLE_EVENTS = [
    ("debug", "cache_miss"),
    ("info", "user_logged_in"),
    ("info", "request_processed"),
    ("info", "query_completed"),
    ("warn", "slow_response"),
    ("warn", "disk_usage_high"),
    ("error", "upstream_timeout"),
    ("error", "authentication_failed"),
]


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="logbatch demo client")
    parser.add_argument("--endpoint", type=str, default=None)
    parser.add_argument("--line-buffer", type=int, default=None)
    parser.add_argument("--interval", type=int, default=None, help="flush interval in ms")
    parser.add_argument("--level", type=str, default=None)
    parser.add_argument("--logs-per-second", type=int, default=5)
    parser.add_argument("--run-time", type=int, default=30)
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace):
    """Environment values first, CLI flags override them."""
    config = load_config()
    overrides = {
        "endpoint": args.endpoint,
        "line_buffer": args.line_buffer,
        "interval": args.interval,
        "level": args.level,
    }
    return dataclasses.replace(
        config,
        request_fields={"application": "logbatch-demo"},
        **{k: v for k, v in overrides.items() if v is not None},
    )


async def generate(agent: LoggingAgent, logs_per_second: int, run_time: int,
                   stop: asyncio.Event):
    """Emit random sample events at *logs_per_second* for *run_time* seconds."""
    log = agent.create_logger("demo", {"component": "generator"})
    loop = asyncio.get_running_loop()
    for second in range(run_time):
        if stop.is_set():
            break
        started = loop.time()
        request_log = log.bind(second=second)
        for _ in range(logs_per_second):
            level, event = random.choice(SAMPLE_EVENTS)
            getattr(request_log, level)(event, latency_ms=random.randint(1, 500))
        remaining = 1.0 - (loop.time() - started)
        if remaining > 0:
            try:
                await asyncio.wait_for(stop.wait(), timeout=remaining)
            except asyncio.TimeoutError:
                pass


async def run(args: argparse.Namespace):
    logger = logging.getLogger(__name__)
    config = build_config(args)
    agent = LoggingAgent()
    agent.configure(config)

    stop = asyncio.Event()
    loop = asyncio.get_running_loop()
    for signum in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(signum, stop.set)

    logger.info(
        "Starting demo: endpoint=%s, line_buffer=%d, interval=%dms",
        config.endpoint,
        agent.capacity,
        config.interval,
    )
    try:
        await generate(agent, args.logs_per_second, args.run_time, stop)
    finally:
        await agent.shutdown()
        logger.info("Agent stats: %s", agent.stats())


def main(argv=None):
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    asyncio.run(run(parse_args(argv)))


if __name__ == "__main__":
    main()
