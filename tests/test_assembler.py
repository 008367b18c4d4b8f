"""Tests for command and output filename assembly."""

import os

import pytest

from ccgen.assembler import Assembler, Invocation
from ccgen.combinations import iter_combinations
from ccgen.config import Limits, RunConfiguration
from ccgen.errors import BufferOverflowError
from ccgen.spec_parser import parse_option_specs


def _assemble_all(specs: list[str], cfg: RunConfiguration) -> list[Invocation]:
    assembler = Assembler(cfg)
    return [assembler.assemble(c) for c in iter_combinations(parse_option_specs(specs))]


# ---------------------------------------------------------------------------
# Command line layout
# ---------------------------------------------------------------------------


class TestCommand:
    def test_debug_release(self) -> None:
        cfg = RunConfiguration(output_base="out", arguments=("file.c",))
        invs = _assemble_all(["-c", "-g,debug,,release"], cfg)
        assert [i.command for i in invs] == [
            "cc -c -g -o out_debug file.c",
            "cc -c -o out_release file.c",
        ]

    def test_empty_informal_gets_no_suffix(self) -> None:
        cfg = RunConfiguration(output_base="out", arguments=("file.c",))
        invs = _assemble_all(["-c", "-g,debug,-O2"], cfg)
        assert invs[1].command == "cc -c -O2 -o out file.c"
        assert invs[1].output_file == "out"

    def test_no_options(self) -> None:
        cfg = RunConfiguration(arguments=("a.c", "b.c"))
        assert [i.command for i in _assemble_all([], cfg)] == ["cc a.c b.c"]

    def test_no_options_with_base_and_extension(self) -> None:
        cfg = RunConfiguration(output_base="prog", extension="exe", arguments=("main.c",))
        invs = _assemble_all([], cfg)
        assert invs == [Invocation("cc -o prog.exe main.c", "prog.exe")]

    def test_no_base_means_no_output_flag(self) -> None:
        cfg = RunConfiguration(extension="o", arguments=("x.c",))
        invs = _assemble_all(["-O1,o1,-O2,o2"], cfg)
        assert [i.command for i in invs] == ["cc -O1 x.c", "cc -O2 x.c"]
        assert all(i.output_file is None for i in invs)

    def test_custom_backend_and_verbatim_values(self) -> None:
        cfg = RunConfiguration(backend="gcc -pipe", arguments=("-Wall", "'a b.c'"))
        invs = _assemble_all(["-DX=1 -DY=2"], cfg)
        assert invs[0].command == "gcc -pipe -DX=1 -DY=2 -Wall 'a b.c'"

    def test_worked_example(self) -> None:
        cfg = RunConfiguration(output_base="source", extension="o", arguments=("source.c",))
        invs = _assemble_all(["-c", "-g,debug,,nodebug", "-m32,32,-m64,64"], cfg)
        assert [i.output_file for i in invs] == [
            "source_debug_32.o",
            "source_debug_64.o",
            "source_nodebug_32.o",
            "source_nodebug_64.o",
        ]
        assert invs[0].command == "cc -c -g -m32 -o source_debug_32.o source.c"
        assert invs[3].command == "cc -c -m64 -o source_nodebug_64.o source.c"

    def test_undecodable_argument_passed_through(self) -> None:
        name = os.fsdecode(b"caf\xe9.c")
        cfg = RunConfiguration(output_base="cafe", arguments=(name,))
        invs = _assemble_all(["-O1,o1"], cfg)
        assert invs[0].command == f"cc -O1 -o cafe_o1 {name}"

    def test_to_dict(self) -> None:
        assert Invocation("cc a.c").to_dict() == {"command": "cc a.c", "output": None}


# ---------------------------------------------------------------------------
# Determinism / buffer reuse
# ---------------------------------------------------------------------------


class TestPurity:
    def test_same_input_same_output(self) -> None:
        cfg = RunConfiguration(output_base="o", arguments=("f.c",))
        option_set = parse_option_specs(["-a,A,-b,B", "-x,X,,"])
        assembler = Assembler(cfg)
        combos = list(iter_combinations(option_set))
        first = [assembler.assemble(c) for c in combos]
        second = [assembler.assemble(c) for c in reversed(combos)]
        assert first == list(reversed(second))

    def test_buffers_reset_between_calls(self) -> None:
        cfg = RunConfiguration(output_base="o")
        assembler = Assembler(cfg)
        combos = list(iter_combinations(parse_option_specs(["-a,A,-b,B"])))
        assembler.assemble(combos[0])
        inv = assembler.assemble(combos[1])
        assert inv.command == "cc -b -o o_B"
        assert assembler.cmd_buf.length == len(inv.command)


# ---------------------------------------------------------------------------
# Overflow
# ---------------------------------------------------------------------------


class TestOverflow:
    def test_command_overflow(self) -> None:
        cfg = RunConfiguration(arguments=("x" * 20,), limits=Limits(max_command_len=16))
        with pytest.raises(BufferOverflowError):
            _assemble_all([], cfg)

    def test_command_exactly_at_capacity(self) -> None:
        cfg = RunConfiguration(arguments=("abc",), limits=Limits(max_command_len=7))
        assert _assemble_all([], cfg)[0].command == "cc abc"

    def test_filename_overflow(self) -> None:
        cfg = RunConfiguration(output_base="base", limits=Limits(max_filename_len=10))
        with pytest.raises(BufferOverflowError):
            _assemble_all(["-g,averylongtag"], cfg)

    def test_overflow_only_on_offending_combination(self) -> None:
        cfg = RunConfiguration(limits=Limits(max_command_len=8))
        option_set = parse_option_specs(["-a,,-muchlonger"])
        assembler = Assembler(cfg)
        combos = list(iter_combinations(option_set))
        assert assembler.assemble(combos[0]).command == "cc -a"
        with pytest.raises(BufferOverflowError):
            assembler.assemble(combos[1])
