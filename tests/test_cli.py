"""Tests for the command line entrypoint."""

from __future__ import annotations

from typing import Any, List

import pytest

import main as cli
from models import CollectedData, TitleRecord
from utils.exceptions import ConfigurationError, GenerationError


class FakeOrchestrator:
    def __init__(self, *, error: Exception = None) -> None:
        self.error = error
        self.calls: List[str] = []
        self.requests: List[Any] = []

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        return None

    async def collect(self, request):
        self.calls.append("collect")
        self.requests.append(request)
        return CollectedData(top_titles=[TitleRecord(title="Sleep tips")])

    async def build_prompt(self, request):
        self.calls.append("build_prompt")
        self.requests.append(request)
        return "ASSEMBLED PROMPT"

    async def run(self, request):
        self.calls.append("run")
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return '{"strategyCalendar": []}'


def _patch(monkeypatch, orchestrator: Any = None, error: Exception = None) -> None:
    def _build(settings):
        if error is not None:
            raise error
        return orchestrator

    monkeypatch.setattr(cli, "build_orchestrator", _build)


BASE_ARGS = ["--audience", "new parents", "--goal", "grow subscribers"]


def test_strategy_prints_raw_output(monkeypatch, capsys):
    orchestrator = FakeOrchestrator()
    _patch(monkeypatch, orchestrator)

    code = cli.main(["strategy", *BASE_ARGS, "--channel", "ChannelA", "--channel", "ChannelB", "--subreddit", "parenting"])

    assert code == 0
    assert capsys.readouterr().out == '{"strategyCalendar": []}\n'
    request = orchestrator.requests[0]
    assert request.competitor_channels == ["ChannelA", "ChannelB"]
    assert request.communities == ["parenting"]


def test_prompt_only_does_not_generate(monkeypatch, capsys):
    orchestrator = FakeOrchestrator()
    _patch(monkeypatch, orchestrator)

    code = cli.main(["strategy", *BASE_ARGS, "--prompt-only"])

    assert code == 0
    assert orchestrator.calls == ["build_prompt"]
    assert "ASSEMBLED PROMPT" in capsys.readouterr().out


def test_collect_only_runs_collection(monkeypatch):
    orchestrator = FakeOrchestrator()
    _patch(monkeypatch, orchestrator)
    summaries: List[CollectedData] = []
    monkeypatch.setattr(cli, "print_summary", summaries.append)

    assert cli.main(["collect", *BASE_ARGS]) == 0
    assert orchestrator.calls == ["collect"]
    assert summaries[0].top_titles[0].title == "Sleep tips"


def test_configuration_error_exit_code(monkeypatch):
    _patch(monkeypatch, error=ConfigurationError("Server configuration error.", missing=["GEMINI_API_KEY"]))

    assert cli.main(["strategy", *BASE_ARGS]) == 2


def test_generation_error_exit_code(monkeypatch):
    _patch(monkeypatch, FakeOrchestrator(error=GenerationError("Failed", provider="gemini")))

    assert cli.main(["strategy", *BASE_ARGS]) == 1


def test_subcommand_is_required():
    with pytest.raises(SystemExit):
        cli.main([])
