'''
RPN calculator brain.

Operands and operators are pushed one at a time onto a stack, and the stack
is evaluated after every push: an operator applies to the operands stacked
most recently before it, the last one pushed being its right-hand side. A
stack that doesn't reduce (say, 4 +) simply has no result, and is kept as is
for whatever gets pushed next.

Built-in operators are × ÷ + − and √; more can be registered before use.
'''

from .brain import Brain, Operand, UnaryOperation, BinaryOperation, reduce
from .cli import CLI
from .lexer import Lexer
from .util import CalcError


__all__ = ('Brain', 'Operand', 'UnaryOperation', 'BinaryOperation',
           'reduce', 'Lexer', 'CLI', 'CalcError')
