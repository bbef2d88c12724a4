#!/usr/bin/env python3
"""
Decoder and program store tests.
"""

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..', 'src'))

from bftape import InstructionKind, Program, SourceUnavailableError, build, decode

K = InstructionKind


def test_decode_instruction_bytes():
    expected = {
        '>': K.MOVE_RIGHT,
        '<': K.MOVE_LEFT,
        '+': K.INCR_CELL,
        '-': K.DECR_CELL,
        '.': K.OUTPUT,
        ',': K.INPUT,
        '[': K.LOOP_BEGIN,
        ']': K.LOOP_END,
    }
    for ch, kind in expected.items():
        assert decode(ch) == kind
        assert decode(ord(ch)) == kind
        assert decode(ch.encode()) == kind


def test_decode_everything_else_is_noop():
    instruction_bytes = set(b'><+-.,[]')
    for b in range(256):
        if b not in instruction_bytes:
            assert decode(b) == K.NO_OP
    assert decode('a') == K.NO_OP
    assert decode('\n') == K.NO_OP
    assert decode('é') == K.NO_OP


def test_program_length_and_alignment():
    source = b"a+[b]."
    program = Program.from_bytes(source)

    assert len(program) == len(source) + 1
    assert program[len(source)] == K.END_OF_PROGRAM
    assert list(program) == [
        K.NO_OP, K.INCR_CELL, K.LOOP_BEGIN, K.NO_OP, K.LOOP_END, K.OUTPUT, K.END_OF_PROGRAM,
    ]
    assert program.instruction_count == 4


def test_empty_program_is_only_end_marker():
    program = Program.from_bytes(b"")
    assert list(program) == [K.END_OF_PROGRAM]
    assert program.end == 0


def test_build_reads_file(tmp_path):
    path = tmp_path / "hello.bf"
    path.write_bytes(b"comment ++\n.")
    program = build(path)

    assert len(program) == 13
    assert program.source == b"comment ++\n."
    assert program[8] == K.INCR_CELL
    assert program[11] == K.OUTPUT
    assert program.locate(11) == (2, 1)


def test_build_missing_file(tmp_path):
    missing = tmp_path / "nope.bf"
    try:
        build(missing)
    except SourceUnavailableError as e:
        assert e.path == str(missing)
        assert "Invalid input file." in str(e)
    else:
        raise AssertionError("expected SourceUnavailableError")


if __name__ == "__main__":
    test_decode_instruction_bytes()
    test_decode_everything_else_is_noop()
    test_program_length_and_alignment()
    test_empty_program_is_only_end_marker()
    print("✓ decoder tests passed")
