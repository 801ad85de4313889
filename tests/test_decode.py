"""Tests for opcode decoding."""

import pytest

from chip8vm import InvalidRegisterError, Opcode, Operation, UnknownOpcodeError, decode, disassemble
from chip8vm.decode import Instruction


class TestOpcode:
    """Test nibble accessors."""

    def test_trivial_split(self):
        opcode = Opcode(value=0)
        assert (opcode.n1, opcode.n2, opcode.n3, opcode.n4) == (0, 0, 0, 0)

    def test_split_opcode(self):
        opcode = Opcode(value=0x1234)
        assert (opcode.n1, opcode.n2, opcode.n3, opcode.n4) == (1, 2, 3, 4)
        assert opcode.constant == 0x34
        assert opcode.address == 0x234

    def test_from_bytes_is_big_endian(self):
        assert Opcode.from_bytes(0xAB, 0xCD).value == 0xABCD

    @pytest.mark.parametrize("value", [-1, 0x10000])
    def test_out_of_range(self, value):
        with pytest.raises(ValueError):
            Opcode(value=value)


@pytest.mark.parametrize("raw,operation", [
    (0x00E0, Operation.CLEAR_SCREEN),
    (0x00EE, Operation.RETURN),
    (0x1234, Operation.JUMP),
    (0x2234, Operation.CALL),
    (0x3A12, Operation.SKIP_EQ_CONST),
    (0x4A12, Operation.SKIP_NE_CONST),
    (0x5AB0, Operation.SKIP_EQ_REG),
    (0x6A12, Operation.LOAD_CONST),
    (0x7A12, Operation.ADD_CONST),
    (0x8AB0, Operation.SET),
    (0x8AB1, Operation.OR),
    (0x8AB2, Operation.AND),
    (0x8AB3, Operation.XOR),
    (0x8AB4, Operation.ADD),
    (0x8AB5, Operation.SUB),
    (0x8AB6, Operation.SHR),
    (0x8AB7, Operation.SUBN),
    (0x8ABE, Operation.SHL),
    (0x9AB0, Operation.SKIP_NE_REG),
    (0xA123, Operation.SET_INDEX),
    (0xB123, Operation.JUMP_OFFSET),
    (0xCA12, Operation.RANDOM),
    (0xDAB5, Operation.DRAW),
    (0xEA9E, Operation.SKIP_KEY_PRESSED),
    (0xEAA1, Operation.SKIP_KEY_NOT_PRESSED),
    (0xFA07, Operation.GET_DELAY),
    (0xFA0A, Operation.WAIT_KEY),
    (0xFA15, Operation.SET_DELAY),
    (0xFA18, Operation.SET_SOUND),
    (0xFA1E, Operation.ADD_INDEX),
    (0xFA29, Operation.FONT),
    (0xFA33, Operation.BCD),
    (0xFA55, Operation.STORE),
    (0xFA65, Operation.LOAD),
])
def test_decode_table(raw, operation):
    instruction = decode(raw)
    assert instruction.operation is operation
    assert instruction.raw == raw


def test_decode_operands():
    instruction = decode(Opcode(value=0xD7A5))
    assert (instruction.x, instruction.y, instruction.n) == (7, 0xA, 5)
    assert instruction.nn == 0xA5
    assert instruction.nnn == 0x7A5


def test_unknown_opcode_carries_value():
    with pytest.raises(UnknownOpcodeError) as excinfo:
        decode(0xFFFF)
    assert excinfo.value.opcode == 0xFFFF
    assert "0xFFFF" in str(excinfo.value)


def test_instruction_rejects_register_16():
    with pytest.raises(InvalidRegisterError):
        Instruction(operation=Operation.LOAD_CONST, x=16, nn=1)


@pytest.mark.parametrize("raw,text", [
    (0x00E0, "CLS"),
    (0x6A2B, "LD VA, 0x2B"),
    (0x8124, "ADD V1, V2"),
    (0xA2F0, "LD I, 0x2F0"),
    (0xD125, "DRW V1, V2, 5"),
    (0xF355, "LD [I], V3"),
])
def test_mnemonics(raw, text):
    assert str(decode(raw)) == text


def test_disassemble():
    memory = [0] * 0x210
    memory[0x200:0x206] = [0x60, 0x05, 0xFF, 0xFF, 0x12, 0x00]
    listing = disassemble(memory, 0x200, 3)
    assert listing == [
        (0x200, 0x6005, "LD V0, 0x05"),
        (0x202, 0xFFFF, "DW 0xFFFF"),
        (0x204, 0x1200, "JP 0x200"),
    ]
