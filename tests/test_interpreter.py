import io
import logging

import pytest

import ante
from ante import (
    Interpreter, LabelKey, MachineState, StepLimitError, Suit,
    UnresolvedLabelError, parse
)


def test_addition(interpreter: Interpreter) -> None:
    state = interpreter.run("5♦5♦")
    assert state.get_register(Suit.DIAMONDS) == 10


JUMP_SCRIPT = """\
K♦K♦
3♠
Q♦Q♦
7♥
"""


def test_jump_taken(interpreter: Interpreter) -> None:
    state = MachineState()
    state.set_register(Suit.DIAMONDS, 1)

    interpreter.run(JUMP_SCRIPT, state)

    assert state.get_register(Suit.SPADES) == 0
    assert state.get_register(Suit.HEARTS) == 7


def test_jump_not_taken(interpreter: Interpreter) -> None:
    state = interpreter.run(JUMP_SCRIPT)

    assert state.get_register(Suit.SPADES) == 3
    assert state.get_register(Suit.HEARTS) == 7


def test_jump_lands_after_queen_run() -> None:
    program = parse(JUMP_SCRIPT)
    state = MachineState()
    state.set_register(Suit.DIAMONDS, 1)

    # Step past the first line marker, then the King run.
    interpreter = Interpreter(output=io.StringIO())
    interpreter.step(program, state)
    interpreter.step(program, state)

    assert state.pc == program.labels[LabelKey(Suit.DIAMONDS, 2)]
    assert program.cards[state.pc - 1].rank == ante.QUEEN


def test_multibyte_character(interpreter: Interpreter, out: io.StringIO) -> None:
    # 195 = 9 * 9 * 2 + 33, 169 = 9 * 9 * 2 + 7 -> "é"
    state = interpreter.run(
        "9♦9♥2♥9♦9♦9♦6♦ J♦\n"
        "9♦9♥2♥7♦ J♦\n"
    )

    assert out.getvalue() == "é"
    assert state.pending == bytearray()


def test_character_out_of_range(interpreter: Interpreter, out: io.StringIO) -> None:
    with pytest.raises(ante.CharacterRangeError) as exc_info:
        interpreter.run("9♦9♥3♥9♦4♦\nJ♦")

    assert exc_info.value.value == 256
    assert exc_info.value.line == 2
    assert out.getvalue() == ""


def test_unresolved_label(interpreter: Interpreter) -> None:
    with pytest.raises(UnresolvedLabelError) as exc_info:
        interpreter.run("5♥\nK♥K♥K♥\nQ♥Q♥")

    assert exc_info.value.label == LabelKey(Suit.HEARTS, 3)
    assert "Q♥Q♥Q♥" in str(exc_info.value)
    assert str(exc_info.value).endswith("on line 2 (pc:6)")


def test_unresolved_label_is_ignored_when_register_is_zero(interpreter: Interpreter) -> None:
    state = interpreter.run("K♣K♣\n4♣")
    assert state.get_register(Suit.CLUBS) == 4


def test_ten_at_dispatch_head_prints(interpreter: Interpreter, out: io.StringIO) -> None:
    state = interpreter.run("10♦\n5♦ 10♦\n10♦")

    assert out.getvalue() == "015"
    assert state.get_register(Suit.DIAMONDS) == 15


def test_countdown_loop(interpreter: Interpreter, out: io.StringIO) -> None:
    interpreter.run(
        "5♦\n"
        "Q♦\n"
        "10♦         # print\n"
        "A♦ 3♠ 2♦    # decrement\n"
        "K♦\n"
    )

    assert out.getvalue() == "54321"


def test_hello(interpreter: Interpreter, out: io.StringIO) -> None:
    interpreter.run(
        "9♥8♥ J♥        # 72\n"
        "A♥ 9♦9♦9♦6♦ J♥ # 105\n"
    )

    assert out.getvalue() == "Hi"


def test_queens_are_not_executed(interpreter: Interpreter) -> None:
    state = interpreter.run("Q♠ 4♠ Q♥Q♥ A♠ 2♥")
    assert state.get_register(Suit.SPADES) == 8


def test_counter_only_increases_without_jumps() -> None:
    program = parse("5♦ 6♥\nJ♣ 10♠\n\nA♣ 2♦ 3♦")
    interpreter = Interpreter(output=io.StringIO())
    state = MachineState()
    visited = []

    while state.pc < len(program):
        visited.append(state.pc)
        interpreter.step(program, state)

    assert visited == sorted(set(visited))
    # Every non-marker card is either dispatched or part of a statement.
    covered = set(visited)
    for start in visited:
        covered.update(range(start, program.spans.get(start, start + 1)))
    assert covered == set(range(len(program)))


def test_line_counter_follows_markers(interpreter: Interpreter) -> None:
    state = interpreter.run("\n\n5♦\n")
    assert state.line == 4


def test_step_limit() -> None:
    interpreter = Interpreter(output=io.StringIO(), step_limit=50)

    with pytest.raises(StepLimitError) as exc_info:
        interpreter.run("5♦\nQ♦\nK♦")

    assert exc_info.value.limit == 50


def test_default_output_is_stdout(capsys: pytest.CaptureFixture[str]) -> None:
    Interpreter().run("7♦ 10♦\n10♦")
    assert capsys.readouterr().out == "17"


def test_run_file(tmp_path, interpreter: Interpreter, out: io.StringIO) -> None:
    source = tmp_path / "hello.ante"
    source.write_text("9♥8♥ J♥", encoding="utf-8")

    interpreter.run_file(source)

    assert out.getvalue() == "H"


def test_missing_file(tmp_path, interpreter: Interpreter) -> None:
    with pytest.raises(ante.SourceUnreadableError):
        interpreter.run_file(tmp_path / "missing.ante")


def test_jumps_are_logged(interpreter: Interpreter, caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.DEBUG, logger="ante.interpreter"):
        interpreter.run("2♠\nQ♠\nA♠ 3♠ 2♦\nK♠")

    assert "jump: Q♠ -> 4" in caplog.text


MIXED_KINGS_SCRIPT = """\
K♦K♥
3♠
Q♦
7♥
Q♥
2♣
"""


def test_king_run_stops_at_other_suit(interpreter: Interpreter) -> None:
    state = MachineState()
    state.set_register(Suit.DIAMONDS, 1)
    state.set_register(Suit.HEARTS, 1)

    interpreter.run(MIXED_KINGS_SCRIPT, state)

    # K♦ alone jumps to Q♦, skipping both K♥ and 3♠.
    assert state.get_register(Suit.SPADES) == 0
    assert state.get_register(Suit.HEARTS) == 7
    assert state.get_register(Suit.CLUBS) == 2


def test_next_suit_king_is_its_own_jump(interpreter: Interpreter) -> None:
    state = MachineState()
    state.set_register(Suit.HEARTS, 1)

    interpreter.run(MIXED_KINGS_SCRIPT, state)

    # K♦ falls through, K♥ jumps to Q♥ with arity 1.
    assert state.get_register(Suit.SPADES) == 0
    assert state.get_register(Suit.HEARTS) == 1
    assert state.get_register(Suit.CLUBS) == 2
