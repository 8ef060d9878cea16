"""Tests for the nvidia-smi probe and its output parsers."""
from __future__ import annotations

import subprocess
from unittest.mock import patch

from conftest import LIST_OUTPUT, QUERY_OUTPUT, completed
from resource_monitor.gpu import (
    MIB,
    NvidiaSmiProbe,
    parse_list_output,
    parse_query_output,
)
from resource_monitor.process import run_command


class TestParseListOutput:
    def test_extracts_models(self):
        assert parse_list_output(LIST_OUTPUT) == [
            "NVIDIA GeForce RTX 3080",
            "NVIDIA GeForce GTX 1080 Ti",
        ]

    def test_skips_unmatched_lines(self):
        output = (
            "No devices were found\n"
            "GPU 0: Tesla T4\n"
            "\n"
            "GPU 2: (UUID: GPU-abc)\n"
            "Tesla T4 (UUID: GPU-def): unexpected\n"
            "GPU 1: NVIDIA A100-SXM4-40GB (UUID: GPU-abc)\n"
        )
        assert parse_list_output(output) == ["NVIDIA A100-SXM4-40GB"]

    def test_empty_output(self):
        assert parse_list_output("") == []


class TestParseQueryOutput:
    def test_parses_rows(self):
        readings = parse_query_output(QUERY_OUTPUT)
        assert len(readings) == 2
        assert readings[0].model == "NVIDIA GeForce RTX 3080"
        assert readings[0].utilization_percent == 37.0
        assert readings[0].temperature_celsius == 61.0
        assert readings[1].memory_used_bytes == 512 * MIB

    def test_mib_to_bytes(self):
        readings = parse_query_output("GPU0, 10, 50, 1024")
        assert readings[0].memory_used_bytes == 1073741824

    def test_bad_field_defaults_to_zero(self):
        readings = parse_query_output("GPU0,N/A,45,2048")
        assert len(readings) == 1
        assert readings[0].utilization_percent == 0.0
        assert readings[0].temperature_celsius == 45.0
        assert readings[0].memory_used_bytes == 2048 * MIB

    def test_bad_line_does_not_affect_others(self):
        readings = parse_query_output("broken line\nGPU1, [N/A], [N/A], [N/A]\nGPU2, 1, 2, 3")
        assert [r.model for r in readings] == ["GPU1", "GPU2"]
        assert readings[0].memory_used_bytes == 0
        assert readings[1].memory_used_bytes == 3 * MIB

    def test_extra_fields_ignored(self):
        readings = parse_query_output("GPU0, 1, 2, 3, 250.5, extra")
        assert readings[0].memory_used_bytes == 3 * MIB

    def test_non_finite_and_fractional_values(self):
        readings = parse_query_output("GPU0, nan, inf, 12.5")
        assert readings[0].utilization_percent == 0.0
        assert readings[0].temperature_celsius == 0.0
        assert readings[0].memory_used_bytes == 0


class TestRunCommand:
    def test_returns_stdout(self):
        with patch("subprocess.run", return_value=completed("hello\n")):
            outcome = run_command(["tool"])
        assert outcome.is_ok
        assert outcome.unwrap_or("") == "hello\n"

    def test_missing_tool(self):
        with patch("subprocess.run", side_effect=FileNotFoundError()):
            outcome = run_command(["nvidia-smi", "-L"])
        assert not outcome.is_ok
        assert outcome.error.source == "nvidia-smi"

    def test_non_zero_exit(self):
        with patch("subprocess.run", return_value=completed("partial", returncode=9)):
            outcome = run_command(["nvidia-smi", "-L"])
        assert not outcome.is_ok
        assert "9" in outcome.error.reason

    def test_spawn_error(self):
        with patch("subprocess.run", side_effect=PermissionError("denied")):
            outcome = run_command(["nvidia-smi"])
        assert not outcome.is_ok

    def test_timeout(self):
        with patch(
            "subprocess.run",
            side_effect=subprocess.TimeoutExpired(cmd="nvidia-smi", timeout=1.0),
        ):
            outcome = run_command(["nvidia-smi"], timeout=1.0)
        assert not outcome.is_ok
        assert "timed out" in outcome.error.reason

    def test_timeout_passed_through(self):
        with patch("subprocess.run", return_value=completed("")) as mock_run:
            run_command(["nvidia-smi"], timeout=2.5)
        assert mock_run.call_args.kwargs["timeout"] == 2.5


class TestNvidiaSmiProbe:
    def test_list_models(self, nvidia_smi):
        outcome = NvidiaSmiProbe().list_models()
        assert outcome.unwrap_or([]) == [
            "NVIDIA GeForce RTX 3080",
            "NVIDIA GeForce GTX 1080 Ti",
        ]

    def test_query_readings(self, nvidia_smi):
        readings = NvidiaSmiProbe().query_readings().unwrap_or([])
        assert [r.model for r in readings] == [
            "NVIDIA GeForce RTX 3080",
            "NVIDIA GeForce GTX 1080 Ti",
        ]

    def test_query_command_contract(self):
        with patch("subprocess.run", return_value=completed("")) as mock_run:
            NvidiaSmiProbe("/opt/nvidia-smi").query_readings()
        command = mock_run.call_args.args[0]
        assert command == [
            "/opt/nvidia-smi",
            "--query-gpu=name,utilization.gpu,temperature.gpu,memory.used",
            "--format=csv,noheader,nounits",
        ]

    def test_tool_absent(self):
        with patch("subprocess.run", side_effect=FileNotFoundError()):
            probe = NvidiaSmiProbe()
            assert probe.list_models().unwrap_or([]) == []
            assert probe.query_readings().unwrap_or([]) == []
