import logging
import os
import sys
import typing as t

from . import errors, evaluator, output
from .cards import JACK, KING, QUEEN, TEN, Card
from .machine import MachineState
from .program import LabelKey, Program, parse

__all__ = (
    "Interpreter",
    "load_source"
)

logger = logging.getLogger(__name__)

PathT = t.Union[str, "os.PathLike[str]"]


def load_source(path: PathT) -> str:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()
    except OSError as e:
        raise errors.SourceUnreadableError(str(path), e.strerror or str(e)) from e
    except UnicodeDecodeError as e:
        raise errors.SourceUnreadableError(str(path), str(e)) from e


class Interpreter:
    """
    The interpreter implementation for Ante.

    Program output goes to `output`, or to `sys.stdout` at the time of
    writing when no stream is given. A nonzero `step_limit` caps the
    number of cards dispatched by a single run.
    """
    def __init__(
        self,
        output: t.Optional[t.TextIO] = None,
        step_limit: int = 0
    ):
        self.output = output
        self.step_limit = step_limit

    @property
    def stream(self) -> t.TextIO:
        if self.output is None:
            return sys.stdout

        return self.output

    def over_step_limit(self, state: MachineState) -> bool:
        if self.step_limit == 0:
            return False
        else:
            return state.steps > self.step_limit

    def run(
        self,
        script: str,
        state: t.Optional[MachineState] = None
    ) -> MachineState:
        return self.execute(parse(script), state)

    def run_file(
        self,
        path: PathT,
        state: t.Optional[MachineState] = None
    ) -> MachineState:
        return self.run(load_source(path), state)

    @staticmethod
    def test_parse(script: str) -> str:
        return parse(script).prettify()

    def execute(
        self,
        program: Program,
        state: t.Optional[MachineState] = None
    ) -> MachineState:
        if state is None:
            state = MachineState()

        logger.debug(f"execute: {len(program)} cards, {len(program.labels)} labels")

        while state.pc < len(program):
            self.step(program, state)

        logger.debug("execute: reached end of program")
        state.dump_registers()

        return state

    def step(self, program: Program, state: MachineState) -> None:
        """Fetch the card under the program counter and dispatch it."""
        index = state.pc
        card = program.cards[index]
        state.pc += 1

        if card.is_marker():
            state.line = card.line
        elif card.rank == KING:
            self.jump(program, state, card)
        elif card.rank == QUEEN:
            pass
        elif card.rank == JACK:
            output.dump_char(state, card.register, self.stream)
        elif card.rank == TEN:
            output.dump_decimal(state, card.register, self.stream)
        else:
            end = program.spans[index]
            state.pc = end
            evaluator.assign(state, program.cards[index:end])

        state.steps += 1
        if self.over_step_limit(state):
            raise errors.StepLimitError(state.line, state.pc, self.step_limit)

    @staticmethod
    def jump(program: Program, state: MachineState, card: Card) -> None:
        suit = card.register
        arity = 1

        while (
            state.pc < len(program) and
            program.cards[state.pc].rank == KING and
            program.cards[state.pc].suit == suit
        ):
            arity += 1
            state.pc += 1

        if state.get_register(suit) == 0:
            logger.debug(f"jump: {suit} is zero, no jump")
            return

        label = LabelKey(suit, arity)
        try:
            target = program.labels[label]
        except KeyError:
            raise errors.UnresolvedLabelError(state.line, state.pc, label)

        logger.debug(f"jump: {label.describe()} -> {target}")
        state.pc = target
