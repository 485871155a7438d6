"""Tests for the demo entry point."""

import asyncio

import pytest

from helpers import CapturingSender
from logbatch.agent import LoggingAgent
from main import build_config, generate, parse_args


def test_cli_flags_override_env(monkeypatch):
    monkeypatch.setenv("LOGBATCH_ENDPOINT", "http://env.local/logs")
    monkeypatch.setenv("LOGBATCH_LINE_BUFFER", "5")
    args = parse_args(["--endpoint", "http://cli.local/logs", "--level", "warn"])

    config = build_config(args)

    assert config.endpoint == "http://cli.local/logs"
    assert config.line_buffer == 5
    assert config.level == "warn"
    assert config.request_fields == {"application": "logbatch-demo"}


def test_default_args():
    args = parse_args([])
    assert args.logs_per_second == 5
    assert args.run_time == 30
    assert args.endpoint is None


@pytest.mark.asyncio
async def test_generate_emits_bound_events():
    sender = CapturingSender()
    agent = LoggingAgent()
    agent.configure(send_logs=sender, line_buffer=100, interval=1_000_000, level="debug")

    await generate(agent, logs_per_second=4, run_time=1, stop=asyncio.Event())
    await agent.shutdown()

    lines = sender.payloads[0]["lines"]
    assert len(lines) == 4
    for line in lines:
        assert line["logger"] == "demo"
        assert line["context"]["component"] == "generator"
        assert line["context"]["second"] == 0
        assert "latency_ms" in line["context"]


@pytest.mark.asyncio
async def test_generate_stops_early():
    agent = LoggingAgent()
    stop = asyncio.Event()
    stop.set()
    await generate(agent, logs_per_second=4, run_time=10, stop=stop)
    assert agent.pending_count == 0
