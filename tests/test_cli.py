#!/usr/bin/env python3
"""
Test the command line front-end.
"""

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..', 'src'))

import subprocess

from bftape.cli import main

SRC_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), '..', 'src')


def run_cli(args, input_data=b""):
    env = dict(os.environ)
    env["PYTHONPATH"] = SRC_DIR + os.pathsep + env.get("PYTHONPATH", "")
    return subprocess.run(
        [sys.executable, '-m', 'bftape', *args],
        input=input_data,
        capture_output=True,
        env=env,
    )


def test_usage_without_path(capsys):
    assert main([]) == 1
    assert "Usage" in capsys.readouterr().err


def test_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "missing.bf")]) == 1
    assert "Invalid input file." in capsys.readouterr().err


def test_runs_program(tmp_path):
    path = tmp_path / "mul.bf"
    path.write_text("++++++++[>++++++++<-]>+.")
    result = run_cli([str(path)])
    assert result.returncode == 0
    assert result.stdout == b"A"


def test_echo_input_jump_table(tmp_path):
    path = tmp_path / "cat.bf"
    path.write_text(",[.,]")
    result = run_cli(["--jump-table", "--eof", "zero", str(path)], input_data=b"hi")
    assert result.returncode == 0
    assert result.stdout == b"hi"


def test_unbalanced_exit_code(tmp_path):
    path = tmp_path / "bad.bf"
    path.write_text("[")
    result = run_cli([str(path)])
    assert result.returncode == 2
    assert b"UnmatchedBracket" in result.stderr


def test_stats(tmp_path):
    path = tmp_path / "one.bf"
    path.write_text("+.")
    result = run_cli(["--stats", str(path)])
    assert result.returncode == 0
    assert result.stdout == bytes([1])
    assert b"Execution took" in result.stderr
    assert b"(2 instructions)" in result.stderr
