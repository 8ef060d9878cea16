"""Pytest configuration and shared fixtures."""
from __future__ import annotations

import subprocess

import pytest

from resource_monitor.config import default_config

LIST_OUTPUT = (
    "GPU 0: NVIDIA GeForce RTX 3080 (UUID: GPU-2f1c7a0e-1111-2222-3333-444455556666)\n"
    "GPU 1: NVIDIA GeForce GTX 1080 Ti (UUID: GPU-9a8b7c6d-1111-2222-3333-444455556666)\n"
)

QUERY_OUTPUT = (
    "NVIDIA GeForce RTX 3080, 37, 61, 1024\n"
    "NVIDIA GeForce GTX 1080 Ti, 5, 40, 512\n"
)


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "windows: mark test as exercising Windows-only code paths"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as end-to-end CLI test"
    )


def completed(stdout: str = "", returncode: int = 0, stderr: str = "") -> subprocess.CompletedProcess:
    return subprocess.CompletedProcess(
        args=[], returncode=returncode, stdout=stdout, stderr=stderr
    )


@pytest.fixture
def app_config():
    return default_config()


@pytest.fixture
def nvidia_smi(monkeypatch):
    """Route nvidia-smi invocations to canned list/query output."""

    def fake_run(command, **kwargs):
        if "-L" in command:
            return completed(LIST_OUTPUT)
        return completed(QUERY_OUTPUT)

    monkeypatch.setattr(subprocess, "run", fake_run)
    return fake_run
