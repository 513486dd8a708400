"""
Ante, an esoteric programming language where all you've got is a deck
of cards.

Source text is a sequence of cards such as `5♦` or `K♣`. Four registers,
one per suit, hold arbitrary-precision integers. Runs of operand cards
assign to a register, Kings jump to labels made of Queens, Jacks print
characters and tens print numbers.
"""

from .cards import *
from .errors import *
from .evaluator import *
from .interpreter import *
from .machine import *
from .output import *
from .program import *
